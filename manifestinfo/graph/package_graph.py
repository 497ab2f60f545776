"""Resolved package graph.

PackageGraph is the in-memory store for one resolved package graph: its
packages, the targets and products they declare, and the edges linking
them. It exposes read-only value views (see :mod:`.models.resolved`) so that
consumers never hold on to backend state.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

import networkx as nx
from pydantic import ValidationError

from manifestinfo.errors import GraphLoadError

from .core.backend import GraphBackend, NetworkXBackend
from .models.identifiers import make_package_id, make_product_id, make_target_id
from .models.resolved import ResolvedPackage, ResolvedProduct, ResolvedTarget
from .models.schema import (
    EdgeKind,
    EdgeSpec,
    NodeSpec,
    NodeType,
    ProductType,
    TargetType,
    validate_edge,
)

logger = logging.getLogger("manifestinfo.graph.package_graph")

TargetRef = Union[ResolvedTarget, str]


class PackageGraph:
    """Resolved package graph backed by a :class:`GraphBackend`.

    Packages own targets and products through ``contains`` edges. Products
    reference the targets they are built from through ``includes`` edges
    carrying an ``index`` so the declared order survives storage. Targets
    without an owning package are kept as provisional nodes.
    """

    def __init__(
        self,
        graph_id: Optional[str] = None,
        backend: Optional[GraphBackend] = None,
    ) -> None:
        """Initialize package graph.

        Args:
            graph_id: Optional graph identifier.
            backend: Optional graph backend. Defaults to NetworkXBackend.
        """
        self.graph_id = graph_id or "default"
        self._backend: GraphBackend = backend or NetworkXBackend()
        logger.debug("PackageGraph initialized with ID: %s", self.graph_id)

    @property
    def backend(self) -> GraphBackend:
        """Return the underlying graph backend."""
        return self._backend

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    def add_package(self, identity: str, name: Optional[str] = None) -> ResolvedPackage:
        """Add a package node.

        Adding the same identity twice is a no-op as long as the name agrees.

        Args:
            identity: Graph-unique package identity.
            name: Display name; defaults to the identity.

        Returns:
            ResolvedPackage: View of the stored package.

        Raises:
            ValueError: If the identity is already bound to another name.
        """
        node_id = make_package_id(identity)
        display_name = name or identity
        existing = self._backend.get_node_data(node_id)
        if existing is not None:
            if existing.get("name") != display_name:
                raise ValueError(
                    f"Package identity {identity!r} already registered as "
                    f"{existing.get('name')!r}"
                )
            return self._package_from_attrs(existing)

        spec = NodeSpec(
            id=node_id, type=NodeType.PACKAGE, name=display_name, identity=identity
        )
        self._backend.add_node(spec.id, **spec.to_backend_attrs())
        return ResolvedPackage(identity=identity, name=display_name)

    def add_target(
        self,
        name: str,
        package_identity: Optional[str] = None,
        target_type: Union[TargetType, str] = TargetType.LIBRARY,
    ) -> ResolvedTarget:
        """Add a target node, owned by ``package_identity`` when given.

        Args:
            name: Target name, unique within its package.
            package_identity: Owning package; None creates a provisional target.
            target_type: Kind of compilation unit.

        Returns:
            ResolvedTarget: View of the stored target.

        Raises:
            ValueError: On unknown owning package or duplicate target.
        """
        ttype = TargetType(target_type)
        node_id = make_target_id(name, package_identity)
        if self._backend.has_node(node_id):
            raise ValueError(f"Duplicate target: {node_id}")

        package_node = None
        if package_identity is not None:
            package_node = make_package_id(package_identity)
            if not self._backend.has_node(package_node):
                raise ValueError(f"Unknown package for target {name!r}: {package_identity}")

        spec = NodeSpec(
            id=node_id,
            type=NodeType.TARGET,
            name=name,
            kind=ttype.value,
            provisional=package_node is None,
        )
        self._backend.add_node(spec.id, **spec.to_backend_attrs())
        if package_node is not None:
            self._add_edge(EdgeSpec(source=package_node, target=node_id, kind=EdgeKind.CONTAINS))
        else:
            logger.debug("Added provisional target without owner: %s", node_id)
        return ResolvedTarget(id=node_id, name=name, type=ttype)

    def add_product(
        self,
        name: str,
        package_identity: str,
        product_type: Union[ProductType, str, Dict[str, str]],
        targets: Sequence[TargetRef] = (),
    ) -> ResolvedProduct:
        """Add a product node composed from existing targets.

        Args:
            name: Product name, unique within its package.
            package_identity: Package declaring the product.
            product_type: ProductType or its wire form.
            targets: Targets (views or node ids) in declaration order.

        Returns:
            ResolvedProduct: View of the stored product.

        Raises:
            ValueError: On unknown package or target, or duplicate product.
        """
        ptype = (
            product_type
            if isinstance(product_type, ProductType)
            else ProductType.model_validate(product_type)
        )
        package_node = make_package_id(package_identity)
        if not self._backend.has_node(package_node):
            raise ValueError(f"Unknown package for product {name!r}: {package_identity}")
        node_id = make_product_id(name, package_identity)
        if self._backend.has_node(node_id):
            raise ValueError(f"Duplicate product: {node_id}")

        target_ids = [ref.id if isinstance(ref, ResolvedTarget) else ref for ref in targets]
        for target_id in target_ids:
            data = self._backend.get_node_data(target_id)
            if data is None or data.get("type") != NodeType.TARGET.value:
                raise ValueError(f"Unknown target for product {name!r}: {target_id}")

        spec = NodeSpec(
            id=node_id, type=NodeType.PRODUCT, name=name, kind=ptype.model_dump()
        )
        self._backend.add_node(spec.id, **spec.to_backend_attrs())
        self._add_edge(EdgeSpec(source=package_node, target=node_id, kind=EdgeKind.CONTAINS))
        for index, target_id in enumerate(target_ids):
            self._add_edge(
                EdgeSpec(source=node_id, target=target_id, kind=EdgeKind.INCLUDES, index=index)
            )
        return self._product_from_node(node_id)

    def add_dependency(self, package_identity: str, dependency_identity: str) -> None:
        """Record that one package depends on another."""
        source = make_package_id(package_identity)
        target = make_package_id(dependency_identity)
        for node_id, identity in ((source, package_identity), (target, dependency_identity)):
            if not self._backend.has_node(node_id):
                raise ValueError(f"Unknown package: {identity}")
        self._add_edge(EdgeSpec(source=source, target=target, kind=EdgeKind.DEPENDS_ON))

    def _add_edge(self, spec: EdgeSpec) -> None:
        validate_edge(spec)
        self._backend.add_edge(spec.source, spec.target, **spec.to_backend_attrs())

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def packages(self) -> List[ResolvedPackage]:
        """Return all packages in insertion order."""
        return [
            self._package_from_attrs(attrs)
            for _, attrs in self._backend.nodes(data=True)
            if attrs.get("type") == NodeType.PACKAGE.value
        ]

    def dependencies_of(self, package_identity: str) -> List[ResolvedPackage]:
        """Return the direct dependencies of a package."""
        node_id = make_package_id(package_identity)
        if not self._backend.has_node(node_id):
            return []
        return [
            self._package_from_attrs(self._backend.get_node_data(target) or {})
            for _, target, attrs in self._backend.out_edges(node_id)
            if attrs.get("kind") == EdgeKind.DEPENDS_ON.value
        ]

    def all_targets(self) -> List[ResolvedTarget]:
        """Return every target, owned or provisional, in insertion order."""
        return [
            self._target_from_attrs(node_id, attrs)
            for node_id, attrs in self._backend.nodes(data=True)
            if attrs.get("type") == NodeType.TARGET.value
        ]

    def all_products(self) -> List[ResolvedProduct]:
        """Return every product in insertion order."""
        return [
            self._product_from_node(node_id)
            for node_id, attrs in self._backend.nodes(data=True)
            if attrs.get("type") == NodeType.PRODUCT.value
        ]

    def get_target(self, node_id: str) -> Optional[ResolvedTarget]:
        """Return the target stored under ``node_id`` if there is one."""
        attrs = self._backend.get_node_data(node_id)
        if attrs is None or attrs.get("type") != NodeType.TARGET.value:
            return None
        return self._target_from_attrs(node_id, attrs)

    def package_for(self, target: ResolvedTarget) -> Optional[ResolvedPackage]:
        """Return the package owning ``target``.

        Returns None when the target is not part of this graph or has no
        owning package.
        """
        if not self._backend.has_node(target.id):
            return None
        for source, _, attrs in self._backend.in_edges(target.id):
            if attrs.get("kind") != EdgeKind.CONTAINS.value:
                continue
            source_attrs = self._backend.get_node_data(source) or {}
            if source_attrs.get("type") == NodeType.PACKAGE.value:
                return self._package_from_attrs(source_attrs)
        return None

    def node_count(self) -> int:
        return self._backend.node_count()

    def edge_count(self) -> int:
        return self._backend.edge_count()

    # ------------------------------------------------------------------
    # View construction
    # ------------------------------------------------------------------

    @staticmethod
    def _package_from_attrs(attrs: Dict[str, Any]) -> ResolvedPackage:
        identity = attrs["identity"]
        return ResolvedPackage(identity=identity, name=attrs.get("name") or identity)

    @staticmethod
    def _target_from_attrs(node_id: str, attrs: Dict[str, Any]) -> ResolvedTarget:
        return ResolvedTarget(
            id=node_id,
            name=attrs["name"],
            type=TargetType(attrs.get("kind") or TargetType.LIBRARY.value),
        )

    def _product_from_node(self, node_id: str) -> ResolvedProduct:
        attrs = self._backend.get_node_data(node_id) or {}
        included = sorted(
            (
                (edge_attrs.get("index", 0), target_id)
                for _, target_id, edge_attrs in self._backend.out_edges(node_id)
                if edge_attrs.get("kind") == EdgeKind.INCLUDES.value
            ),
            key=lambda item: item[0],
        )
        targets = tuple(
            self._target_from_attrs(target_id, self._backend.get_node_data(target_id) or {})
            for _, target_id in included
        )
        return ResolvedProduct(
            id=node_id,
            name=attrs["name"],
            type=ProductType.model_validate(attrs["kind"]),
            targets=targets,
        )

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def save(self, file_path: Path) -> None:
        """Save graph to a node-link JSON file.

        Args:
            file_path: Output file path.
        """
        file_path = Path(file_path)
        file_path.parent.mkdir(parents=True, exist_ok=True)

        graph = self._backend.native_graph
        graph.graph["graph_id"] = self.graph_id
        data = nx.readwrite.json_graph.node_link_data(graph, edges="edges")
        with open(file_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
        logger.info("Graph saved to: %s", file_path)

    @classmethod
    def from_node_link(cls, data: Dict[str, Any]) -> "PackageGraph":
        """Rebuild a graph from node-link data produced by :meth:`save`.

        Raises:
            GraphLoadError: If the data is not a valid package graph.
        """
        edge_key = "edges" if "edges" in data else "links"
        try:
            native = nx.readwrite.json_graph.node_link_graph(
                data, directed=True, multigraph=True, edges=edge_key
            )
        except (KeyError, TypeError, nx.NetworkXError) as err:
            raise GraphLoadError(f"Invalid node-link graph: {err}") from err

        for node_id, attrs in native.nodes(data=True):
            cls._check_node_attrs(node_id, attrs)

        manager = cls(graph_id=native.graph.get("graph_id"), backend=NetworkXBackend())
        manager._backend.set_native_graph(native)
        return manager

    @staticmethod
    def _check_node_attrs(node_id: Any, attrs: Dict[str, Any]) -> None:
        """Reject nodes whose attributes the view constructors cannot read."""
        valid_types = [t.value for t in NodeType]
        node_type = attrs.get("type")
        if node_type not in valid_types or not attrs.get("name"):
            raise GraphLoadError(f"Node {node_id!r} is not a package graph node")

        if node_type == NodeType.PACKAGE.value:
            identity = attrs.get("identity")
            if not isinstance(identity, str) or not identity:
                raise GraphLoadError(f"Package node {node_id!r} has no identity")
        elif node_type == NodeType.TARGET.value:
            kind = attrs.get("kind")
            if kind is not None and kind not in [t.value for t in TargetType]:
                raise GraphLoadError(f"Target node {node_id!r} has invalid kind {kind!r}")
        elif node_type == NodeType.PRODUCT.value:
            if "kind" not in attrs:
                raise GraphLoadError(f"Product node {node_id!r} has no kind")
            try:
                ProductType.model_validate(attrs["kind"])
            except ValidationError as err:
                raise GraphLoadError(
                    f"Product node {node_id!r} has invalid kind: {err}"
                ) from err

    @classmethod
    def load(cls, file_path: Path) -> "PackageGraph":
        """Load graph from a node-link JSON file.

        Args:
            file_path: Input file path.

        Returns:
            PackageGraph: Loaded graph.
        """
        with open(file_path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise GraphLoadError(f"{file_path}: expected a JSON object")
        graph = cls.from_node_link(data)
        logger.info("Graph loaded from: %s", file_path)
        return graph


__all__ = ["PackageGraph"]
