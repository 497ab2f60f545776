"""Public package graph API surface."""

from manifestinfo.graph.core import GraphBackend, NetworkXBackend
from manifestinfo.graph.loader import (
    PackageGraphDocument,
    build_package_graph,
    load_package_graph,
    parse_package_graph,
)
from manifestinfo.graph.models import (
    EdgeKind,
    EdgeSpec,
    LibraryType,
    NodeSpec,
    NodeType,
    ProductKind,
    ProductType,
    ResolvedGraph,
    ResolvedPackage,
    ResolvedProduct,
    ResolvedTarget,
    TargetType,
    make_package_id,
    make_product_id,
    make_target_id,
)
from manifestinfo.graph.package_graph import PackageGraph

__all__ = [
    "EdgeKind",
    "EdgeSpec",
    "GraphBackend",
    "LibraryType",
    "NetworkXBackend",
    "NodeSpec",
    "NodeType",
    "PackageGraph",
    "PackageGraphDocument",
    "ProductKind",
    "ProductType",
    "ResolvedGraph",
    "ResolvedPackage",
    "ResolvedProduct",
    "ResolvedTarget",
    "TargetType",
    "build_package_graph",
    "load_package_graph",
    "make_package_id",
    "make_product_id",
    "make_target_id",
    "parse_package_graph",
]
