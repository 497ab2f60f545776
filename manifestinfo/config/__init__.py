"""Configuration schema and loading for manifestinfo."""

from .loader import load_manifest_config
from .schema import GraphLoadConfig, ManifestConfig, OutputConfig

__all__ = [
    "GraphLoadConfig",
    "ManifestConfig",
    "OutputConfig",
    "load_manifest_config",
]
