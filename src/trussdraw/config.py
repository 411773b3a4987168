"""
Configuration management for trussdraw.

Loads YAML configuration with sensible defaults for every pipeline stage.
"""

import math
import os
from dataclasses import dataclass, field, fields

import yaml


@dataclass
class VectorizeConfig:
    """Configuration for the stroke-to-graph conversion."""
    snap_radius: float = 30.0
    simplify_epsilon: float = None  # defaults to snap_radius * 0.5
    crossing_margin: float = 0.02  # fraction of segment length excluded at each end
    parallel_epsilon: float = 1e-10
    node_precision: int = 2  # decimal digits used to key nodes

    def effective_epsilon(self):
        """RDP tolerance actually used for simplification."""
        if self.simplify_epsilon is None:
            return self.snap_radius * 0.5
        return self.simplify_epsilon

    def validate(self):
        """Raise ValueError for parameters the algorithms cannot work with."""
        if self.snap_radius is None or not (math.isfinite(self.snap_radius) and self.snap_radius > 0):
            raise ValueError(f"snap_radius must be a finite positive number, got {self.snap_radius}")
        if self.simplify_epsilon is not None and not (math.isfinite(self.simplify_epsilon) and self.simplify_epsilon >= 0):
            raise ValueError(f"simplify_epsilon must be a finite non-negative number, got {self.simplify_epsilon}")
        if not 0 <= self.crossing_margin < 0.5:
            raise ValueError(f"crossing_margin must be in [0, 0.5), got {self.crossing_margin}")
        if self.node_precision < 0:
            raise ValueError(f"node_precision must be non-negative, got {self.node_precision}")


@dataclass
class SvgConfig:
    """Configuration for SVG export."""
    background: str = "#1a1a2e"
    edge_color: str = "#e94560"
    edge_width: float = 3.0
    node_color: str = "#00d2ff"
    node_radius: float = 8.0
    node_dot_radius: float = 3.0
    node_ring_width: float = 2.0
    label_font_size: float = 11.0
    label_offset: float = 14.0
    label_font_family: str = "system-ui, sans-serif"
    padding: float = 20.0


@dataclass
class JsonExportConfig:
    """Configuration for JSON export."""
    precision: int = 1
    indent: int = 2


@dataclass
class ValidationConfig:
    """Configuration for graph validation checks."""
    check_planarity: bool = True
    warn_disconnected: bool = True


@dataclass
class TracingConfig:
    """Configuration for runtime tracing."""
    enabled: bool = False
    level: str = "INFO"
    file_path: str = None
    json_output: bool = False


@dataclass
class DebugConfig:
    """Configuration for debug artifact generation."""
    enabled: bool = False


@dataclass
class PipelineConfig:
    """Complete pipeline configuration."""
    vectorize: VectorizeConfig = field(default_factory=VectorizeConfig)
    svg: SvgConfig = field(default_factory=SvgConfig)
    json_export: JsonExportConfig = field(default_factory=JsonExportConfig)
    validation: ValidationConfig = field(default_factory=ValidationConfig)
    tracing: TracingConfig = field(default_factory=TracingConfig)
    debug: DebugConfig = field(default_factory=DebugConfig)


SECTIONS = ("vectorize", "svg", "json_export", "validation", "tracing", "debug")


def load_config(config_path=None):
    """
    Load configuration from YAML file.

    Falls back to defaults for any missing values.
    """
    config = PipelineConfig()

    if config_path and os.path.exists(config_path):
        with open(config_path, "r", encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f) or {}

        config = _merge_config(config, yaml_data)

    return config


def _merge_config(config, yaml_data):
    """Merge YAML data into config dataclass, ignoring unknown keys."""
    for section in SECTIONS:
        values = yaml_data.get(section)
        if not isinstance(values, dict):
            continue
        target = getattr(config, section)
        for key, value in values.items():
            if hasattr(target, key):
                setattr(target, key, value)

    return config


def config_to_dict(config):
    """Plain nested dict of every section, in declaration order."""
    data = {}
    for section in SECTIONS:
        target = getattr(config, section)
        data[section] = {f.name: getattr(target, f.name) for f in fields(target)}
    return data


def save_default_config(path):
    """Save default configuration to YAML file for reference."""
    yaml_data = config_to_dict(PipelineConfig())

    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(yaml_data, f, default_flow_style=False, sort_keys=False)
