"""
Command-line interface for trussdraw.

Provides commands for vectorizing a strokes file and writing a default
configuration.
"""

import argparse
import sys

from trussdraw.config import load_config, save_default_config
from trussdraw.tracer import configure_tracer, get_tracer


def build_parser():
    """Argument parser with the run and init-config subcommands."""
    parser = argparse.ArgumentParser(
        prog="trussdraw",
        description="trussdraw: Convert freehand strokes into a clean truss of joints and members",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    run_parser = subparsers.add_parser("run", help="Vectorize a strokes file")
    run_parser.add_argument(
        "--strokes", "-s",
        required=True,
        help="JSON file with the strokes",
    )
    run_parser.add_argument(
        "--out", "-o",
        required=True,
        help="Output directory",
    )
    run_parser.add_argument(
        "--config", "-c",
        default=None,
        help="Path to YAML configuration file",
    )
    run_parser.add_argument(
        "--snap-radius",
        type=float,
        default=None,
        help="Endpoint merge distance in pixels (overrides config)",
    )
    run_parser.add_argument(
        "--epsilon",
        type=float,
        default=None,
        help="Simplification tolerance in pixels (overrides config)",
    )
    run_parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug artifact generation",
    )
    run_parser.add_argument(
        "--trace",
        action="store_true",
        help="Enable runtime tracing",
    )
    run_parser.add_argument(
        "--trace-level",
        default=None,
        choices=["ERROR", "WARN", "INFO", "DEBUG"],
        help="Trace log level (overrides config)",
    )
    run_parser.add_argument(
        "--trace-file",
        default=None,
        help="Path to write trace logs",
    )
    run_parser.add_argument(
        "--trace-json",
        action="store_true",
        help="Enable JSON trace output",
    )

    init_parser = subparsers.add_parser("init-config", help="Create default config file")
    init_parser.add_argument(
        "--out", "-o",
        default="trussdraw_config.yaml",
        help="Output path for config file",
    )

    return parser


def main(argv=None):
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    if args.command == "run":
        return handle_run(args)
    elif args.command == "init-config":
        return handle_init_config(args)

    return 0


def handle_run(args):
    """Handle the run command."""
    tracer = get_tracer()

    try:
        from trussdraw.pipeline import run_pipeline

        config = load_config(args.config)

        # command-line flags win over the tracing section of the config
        tracing = config.tracing
        configure_tracer(
            enabled=args.trace or tracing.enabled,
            level=args.trace_level or tracing.level,
            file_path=args.trace_file or tracing.file_path,
            json_output=args.trace_json or tracing.json_output,
        )

        if args.snap_radius is not None:
            config.vectorize.snap_radius = args.snap_radius
        if args.epsilon is not None:
            config.vectorize.simplify_epsilon = args.epsilon

        with tracer.span("cli_run", module="cli"):
            result = run_pipeline(
                strokes_path=args.strokes,
                out_dir=args.out,
                config=config,
                debug=args.debug,
            )

        report = result.validation
        print("\nVectorization completed successfully.")
        print(f"  Joints: {len(result.graph.nodes)}")
        print(f"  Members: {len(result.graph.edges)}")
        print(f"  Validation errors: {report.error_count}")
        print(f"  Validation warnings: {report.warning_count}")
        print(f"\nOutputs saved to: {args.out}/")
        print("  - truss.svg")
        print("  - truss.json")
        print("  - graph.json")
        print("  - validation_report.json")

        if report.has_errors:
            print("\n[!] Validation errors detected. Review validation_report.json")
            return 1

        return 0

    except Exception as e:
        tracer.event(f"Pipeline failed: {str(e)}", level="ERROR")
        print(f"\nError: {str(e)}", file=sys.stderr)
        return 1

    finally:
        tracer.config.close()


def handle_init_config(args):
    """Handle the init-config command."""
    save_default_config(args.out)
    print(f"Default configuration saved to: {args.out}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
