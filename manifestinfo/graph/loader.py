"""Load a resolved package graph from disk.

Two on-disk shapes are accepted:

* a package description document::

    {
      "graph_id": "optional",
      "packages": [
        {
          "identity": "swift-foo",
          "name": "SwiftFoo",
          "dependencies": ["swift-bar"],
          "targets": [{"name": "Foo", "type": "library"}],
          "products": [
            {"name": "Foo", "type": {"library": "static"}, "targets": ["Foo"]}
          ]
        }
      ]
    }

  Product target references are either a bare target name of the same
  package or ``<identity>/<name>`` for a target of another package.

* a node-link graph previously written by :meth:`PackageGraph.save`.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from manifestinfo.config.schema import GraphLoadConfig
from manifestinfo.errors import GraphLoadError

from .models.identifiers import make_target_id
from .models.schema import ProductType, TargetType
from .package_graph import PackageGraph

logger = logging.getLogger("manifestinfo.graph.loader")


class TargetDocument(BaseModel):
    """A target as declared by a package."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1)
    type: TargetType = TargetType.LIBRARY


class ProductDocument(BaseModel):
    """A product as declared by a package."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1)
    type: ProductType
    targets: List[str] = Field(default_factory=list)


class PackageDocument(BaseModel):
    """A package entry of the graph document."""

    model_config = ConfigDict(extra="forbid")

    identity: str = Field(min_length=1)
    name: Optional[str] = None
    dependencies: List[str] = Field(default_factory=list)
    targets: List[TargetDocument] = Field(default_factory=list)
    products: List[ProductDocument] = Field(default_factory=list)


class PackageGraphDocument(BaseModel):
    """Top-level package graph document."""

    model_config = ConfigDict(extra="forbid")

    graph_id: Optional[str] = None
    packages: List[PackageDocument] = Field(default_factory=list)


def _split_target_ref(ref: str, default_identity: str) -> Tuple[str, str]:
    """Split a product target reference into ``(package identity, name)``."""
    if "/" in ref:
        identity, _, name = ref.partition("/")
        if identity and name:
            return identity, name
    return default_identity, ref


def build_package_graph(
    document: PackageGraphDocument, config: Optional[GraphLoadConfig] = None
) -> PackageGraph:
    """Materialize a validated document into a :class:`PackageGraph`.

    Packages and targets are added first so that products and dependencies
    may refer to declarations appearing later in the document.

    Raises:
        GraphLoadError: On duplicate declarations, unknown dependencies, or
            (in strict mode) unresolved product target references.
    """
    cfg = config or GraphLoadConfig()
    graph = PackageGraph(graph_id=document.graph_id)

    try:
        for package in document.packages:
            graph.add_package(package.identity, package.name)
            for target in package.targets:
                graph.add_target(target.name, package.identity, target.type)

        for package in document.packages:
            for dependency in package.dependencies:
                graph.add_dependency(package.identity, dependency)
            for product in package.products:
                target_ids = [
                    _resolve_target_ref(graph, ref, package.identity, product.name, cfg)
                    for ref in product.targets
                ]
                graph.add_product(product.name, package.identity, product.type, target_ids)
    except GraphLoadError:
        raise
    except ValueError as err:
        raise GraphLoadError(str(err)) from err

    logger.debug(
        "Built package graph %s: %d nodes, %d edges",
        graph.graph_id,
        graph.node_count(),
        graph.edge_count(),
    )
    return graph


def _resolve_target_ref(
    graph: PackageGraph,
    ref: str,
    package_identity: str,
    product_name: str,
    config: GraphLoadConfig,
) -> str:
    identity, name = _split_target_ref(ref, package_identity)
    target_id = make_target_id(name, identity)
    if graph.get_target(target_id) is not None:
        return target_id

    if config.strict:
        raise GraphLoadError(
            f"Product {package_identity}/{product_name} references unknown target {ref!r}"
        )

    placeholder_id = make_target_id(ref)
    if graph.get_target(placeholder_id) is None:
        logger.warning(
            "Product %s/%s references unknown target %r; keeping it without an owner",
            package_identity,
            product_name,
            ref,
        )
        graph.add_target(ref)
    return placeholder_id


def parse_package_graph(
    data: Dict[str, Any], config: Optional[GraphLoadConfig] = None
) -> PackageGraph:
    """Build a graph from already-parsed JSON data of either accepted shape."""
    if not isinstance(data, dict):
        raise GraphLoadError("Package graph must be a JSON object")

    if "nodes" in data:
        return PackageGraph.from_node_link(data)

    try:
        document = PackageGraphDocument.model_validate(data)
    except ValidationError as err:
        raise GraphLoadError(f"Invalid package graph document: {err}") from err
    return build_package_graph(document, config)


def load_package_graph(
    path: Union[str, Path], config: Optional[GraphLoadConfig] = None
) -> PackageGraph:
    """Load a package graph file.

    Args:
        path: Path to a package description document or node-link graph.
        config: Loading options; defaults to :class:`GraphLoadConfig`.

    Returns:
        PackageGraph: The resolved graph.

    Raises:
        GraphLoadError: If the file is not a valid package graph.
        OSError: If the file cannot be read.
    """
    path = Path(path)
    text = path.read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as err:
        raise GraphLoadError(f"{path}: invalid JSON: {err}") from err

    graph = parse_package_graph(data, config)
    if graph.graph_id == "default":
        graph.graph_id = path.stem
    logger.info(
        "Loaded package graph %s from %s (%d packages)",
        graph.graph_id,
        path,
        len(graph.packages()),
    )
    return graph


__all__ = [
    "PackageDocument",
    "PackageGraphDocument",
    "ProductDocument",
    "TargetDocument",
    "build_package_graph",
    "load_package_graph",
    "parse_package_graph",
]
