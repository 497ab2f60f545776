"""Graph backend abstraction layer.

Wraps NetworkX for easy backend replacement in the future.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, Optional, Tuple

import networkx as nx

logger = logging.getLogger("manifestinfo.graph.core.backend")


class GraphBackend(ABC):
    """Abstract graph backend protocol.

    This defines the interface that all package graph storage backends must
    implement. Edges are directed and a pair of nodes may carry several
    edges of different kinds.
    """

    @property
    @abstractmethod
    def native_graph(self) -> Any:
        """Get native graph object for advanced operations."""
        pass

    @abstractmethod
    def set_native_graph(self, graph: Any) -> None:
        """Replace the underlying graph instance."""
        pass

    @abstractmethod
    def add_node(self, node_id: str, **attributes: Any) -> None:
        """Add node to graph."""
        pass

    @abstractmethod
    def add_edge(self, source: str, target: str, **attributes: Any) -> Any:
        """Add edge to graph."""
        pass

    @abstractmethod
    def has_node(self, node_id: str) -> bool:
        """Check if node exists."""
        pass

    @abstractmethod
    def get_node_data(self, node_id: str) -> Optional[Dict[str, Any]]:
        """Get node attributes."""
        pass

    @abstractmethod
    def nodes(self, data: bool = False) -> Iterable:
        """Iterate over nodes in insertion order."""
        pass

    @abstractmethod
    def in_edges(self, node_id: str) -> Iterable[Tuple[str, str, Dict[str, Any]]]:
        """Iterate ``(source, node_id, attrs)`` for edges entering a node."""
        pass

    @abstractmethod
    def out_edges(self, node_id: str) -> Iterable[Tuple[str, str, Dict[str, Any]]]:
        """Iterate ``(node_id, target, attrs)`` for edges leaving a node."""
        pass

    @abstractmethod
    def node_count(self) -> int:
        """Get number of nodes."""
        pass

    @abstractmethod
    def edge_count(self) -> int:
        """Get number of edges."""
        pass


class NetworkXBackend(GraphBackend):
    """NetworkX-based in-memory graph backend.

    This is the default implementation; iteration follows insertion order.
    """

    def __init__(self) -> None:
        """Initialize backend with NetworkX MultiDiGraph."""
        self._graph = nx.MultiDiGraph()
        logger.debug("NetworkXBackend initialized")

    @property
    def native_graph(self) -> nx.MultiDiGraph:
        return self._graph

    def set_native_graph(self, graph: nx.MultiDiGraph) -> None:
        if not graph.is_directed() or not graph.is_multigraph():
            graph = nx.MultiDiGraph(graph)
        self._graph = graph
        logger.debug("Graph backend replaced with provided graph")

    def add_node(self, node_id: str, **attributes: Any) -> None:
        self._graph.add_node(node_id, **attributes)

    def add_edge(self, source: str, target: str, **attributes: Any) -> Any:
        return self._graph.add_edge(source, target, **attributes)

    def has_node(self, node_id: str) -> bool:
        return self._graph.has_node(node_id)

    def get_node_data(self, node_id: str) -> Optional[Dict[str, Any]]:
        return self._graph.nodes.get(node_id)

    def nodes(self, data: bool = False) -> Iterable:
        return self._graph.nodes(data=data)

    def in_edges(self, node_id: str) -> Iterable[Tuple[str, str, Dict[str, Any]]]:
        return self._graph.in_edges(node_id, data=True)

    def out_edges(self, node_id: str) -> Iterable[Tuple[str, str, Dict[str, Any]]]:
        return self._graph.out_edges(node_id, data=True)

    def node_count(self) -> int:
        return self._graph.number_of_nodes()

    def edge_count(self) -> int:
        return self._graph.number_of_edges()
