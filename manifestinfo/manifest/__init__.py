"""Manifest summary models and the graph projection producing them."""

from .models import ManifestInfo, PackageRef, ProductSummary, TargetSummary
from .projection import (
    build_manifest_info,
    compact_map,
    is_excluded_product_type,
    project_products,
    project_targets,
    target_names_by_config,
)

__all__ = [
    "ManifestInfo",
    "PackageRef",
    "ProductSummary",
    "TargetSummary",
    "build_manifest_info",
    "compact_map",
    "is_excluded_product_type",
    "project_products",
    "project_targets",
    "target_names_by_config",
]
