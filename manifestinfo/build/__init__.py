"""Build configurations and build-system naming."""

from .configuration import BuildConfiguration, all_configurations
from .naming import LLBuildNaming, ProductNaming, TargetNaming

__all__ = [
    "BuildConfiguration",
    "LLBuildNaming",
    "ProductNaming",
    "TargetNaming",
    "all_configurations",
]
