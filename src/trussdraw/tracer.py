"""
Hierarchical runtime tracing for the trussdraw pipeline.

Nested spans with timing make it possible to follow a vectorization pass
(simplify, split, cluster, build) without stepping through code.
"""

import functools
import hashlib
import json
import sys
import time
from contextlib import contextmanager
from datetime import datetime


class TracerConfig:
    """Configuration for the tracer."""

    def __init__(self):
        self.enabled = False
        self.level = "INFO"
        self.file_path = None
        self.json_output = False
        self._file_handle = None

    def configure(self, enabled=False, level="INFO", file_path=None, json_output=False):
        """Configure tracer settings."""
        self.enabled = enabled
        self.level = level.upper()
        self.file_path = file_path
        self.json_output = json_output

        self.close()

        if file_path and enabled:
            self._file_handle = open(file_path, "w", encoding="utf-8")

    def close(self):
        """Close file handle if open."""
        if self._file_handle:
            self._file_handle.close()
            self._file_handle = None


class Tracer:
    """
    Hierarchical tracer for structured pipeline logging.

    Spans nest and report their wall time; events attach to the innermost
    open span. Output goes to stderr and, optionally, a file and JSON lines.
    """

    LEVELS = {"ERROR": 0, "WARN": 1, "INFO": 2, "DEBUG": 3}

    def __init__(self):
        self.config = TracerConfig()
        self._span_stack = []

    @property
    def depth(self):
        """Number of currently open spans."""
        return len(self._span_stack)

    def _should_log(self, level):
        if not self.config.enabled:
            return False
        return self.LEVELS.get(level, 2) <= self.LEVELS.get(self.config.level, 2)

    def _emit(self, line):
        print(line, file=sys.stderr)
        handle = self.config._file_handle
        if handle:
            handle.write(line + "\n")
            handle.flush()

    def _write(self, level, module, func, message, meta=None):
        if not self._should_log(level):
            return

        now = datetime.now()
        stamp = f"{now:%H:%M:%S}.{now.microsecond // 1000:03d}"
        where = f"{module}:{func}" if func else module
        self._emit(f"{stamp} {level:<5} {'  ' * self.depth}{where}  {message}")

        if self.config.json_output:
            self._emit(json.dumps({
                "timestamp": stamp,
                "level": level,
                "depth": self.depth,
                "module": module,
                "function": func,
                "message": message,
                "meta": {k: summarize(v) for k, v in (meta or {}).items()},
            }))

    @staticmethod
    def _with_meta(text, meta):
        extra = " ".join(f"{k}={summarize(v)}" for k, v in meta.items())
        return f"{text} {extra}".strip()

    @contextmanager
    def span(self, name, module="", **meta):
        """
        Context manager for a traced span.

        Logs start and end with elapsed time; a failing body is logged at
        ERROR level and re-raised.
        """
        if not self.config.enabled:
            yield
            return

        self._write("INFO", module, name, self._with_meta("start", meta), meta)
        self._span_stack.append((name, module))
        started = time.perf_counter()
        error = None

        try:
            yield
        except Exception as e:
            error = e
            raise
        finally:
            self._span_stack.pop()
            dt = (time.perf_counter() - started) * 1000
            if error is None:
                self._write("INFO", module, name, f"end ok dt={dt:.0f}ms")
            else:
                reason = f"{type(error).__name__}: {str(error)[:100]}"
                self._write("ERROR", module, name, f"failed dt={dt:.0f}ms error={reason}")

    def event(self, message, level="INFO", **meta):
        """Log a one-off event within the current span."""
        if not self._should_log(level):
            return

        func, module = self._span_stack[-1] if self._span_stack else ("", "")
        self._write(level, module, func, self._with_meta(message, meta), meta)


def summarize(obj, max_len=200):
    """
    Summarize an object for logging.

    Returns a compact string that never exceeds max_len characters.
    """
    try:
        result = _summarize_impl(obj)
    except Exception:
        return f"<{type(obj).__name__}>"
    if len(result) > max_len:
        return result[:max_len - 3] + "..."
    return result


def _summarize_impl(obj):
    if obj is None:
        return "None"

    type_name = type(obj).__name__

    # imported lazily so the tracer stays importable on its own
    import networkx as nx
    import numpy as np
    from pydantic import BaseModel

    from trussdraw.models import TrussGraph

    if isinstance(obj, TrussGraph):
        return f"TrussGraph(nodes={len(obj.nodes)},edges={len(obj.edges)})"

    if isinstance(obj, np.ndarray):
        shape_str = "x".join(str(s) for s in obj.shape)
        if 0 < obj.size < 1000:
            h = hashlib.md5(obj.tobytes()).hexdigest()[:8]
        else:
            h = hashlib.md5(str(obj.shape).encode()).hexdigest()[:8]
        return f"ndarray({obj.dtype},{shape_str},h={h})"

    if isinstance(obj, nx.Graph):
        return f"{type_name}(nodes={obj.number_of_nodes()},edges={obj.number_of_edges()})"

    if isinstance(obj, BaseModel):
        names = list(type(obj).model_fields.keys())[:3]
        return f"{type_name}(fields={names}...)"

    if isinstance(obj, str):
        if len(obj) > 50:
            h = hashlib.md5(obj.encode()).hexdigest()[:8]
            return f"str(len={len(obj)},h={h})"
        return repr(obj)

    if isinstance(obj, (list, tuple)):
        if not obj:
            return f"{type_name}(len=0)"
        # a single point prints as its coordinates
        if len(obj) == 2 and all(isinstance(v, (int, float)) for v in obj):
            return f"({obj[0]:.1f},{obj[1]:.1f})"
        return f"{type_name}(len={len(obj)},first={type(obj[0]).__name__})"

    if isinstance(obj, dict):
        keys_str = ",".join(str(k) for k in list(obj.keys())[:5])
        return f"dict(len={len(obj)},keys=[{keys_str}])"

    if isinstance(obj, (bool, int, float)):
        return str(obj)

    return f"<{type_name}>"


def trace(label=None, arg_names=None):
    """
    Decorator to trace function execution.

    Wraps a function in a span named after it (or `label`). Keyword
    arguments listed in `arg_names` are summarized on the start line.
    """
    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            if not _tracer.config.enabled:
                return func(*args, **kwargs)

            func_module = func.__module__.split(".")[-1] if func.__module__ else ""
            meta = {name: kwargs[name] for name in (arg_names or ()) if name in kwargs}

            with _tracer.span(label or func.__name__, module=func_module, **meta):
                return func(*args, **kwargs)

        return wrapper
    return decorator


# Global tracer instance
_tracer = Tracer()


def get_tracer():
    """Get the global tracer instance."""
    return _tracer


def configure_tracer(enabled=False, level="INFO", file_path=None, json_output=False):
    """Configure the global tracer."""
    _tracer.config.configure(
        enabled=enabled,
        level=level,
        file_path=file_path,
        json_output=json_output,
    )
