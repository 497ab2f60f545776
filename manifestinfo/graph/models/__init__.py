"""Data models and identifiers used by the graph package."""

from .identifiers import make_package_id, make_product_id, make_target_id
from .resolved import ResolvedGraph, ResolvedPackage, ResolvedProduct, ResolvedTarget
from .schema import (
    EdgeKind,
    EdgeSpec,
    LibraryType,
    NodeSpec,
    NodeType,
    ProductKind,
    ProductType,
    TargetType,
    validate_edge,
)

__all__ = [
    "EdgeKind",
    "EdgeSpec",
    "LibraryType",
    "NodeSpec",
    "NodeType",
    "ProductKind",
    "ProductType",
    "ResolvedGraph",
    "ResolvedPackage",
    "ResolvedProduct",
    "ResolvedTarget",
    "TargetType",
    "make_package_id",
    "make_product_id",
    "make_target_id",
    "validate_edge",
]
