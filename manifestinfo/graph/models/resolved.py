"""Read-only views over a resolved package graph.

These small frozen values are what downstream consumers (the manifest
projection, the CLI) see of the graph. They are copied out of the backend on
access and hold no reference back to it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional, Protocol, Tuple, runtime_checkable

from .schema import ProductType, TargetType


@dataclass(frozen=True)
class ResolvedPackage:
    """A package of the resolved graph.

    Args:
        identity: Opaque, graph-unique package identity.
        name: Display name as declared by the package.
    """

    identity: str
    name: str


@dataclass(frozen=True)
class ResolvedTarget:
    """A compilation unit of the resolved graph.

    Args:
        id: Node id of the target in the backing graph.
        name: Display name of the target.
        type: Kind of compilation unit.
    """

    id: str
    name: str
    type: TargetType = TargetType.LIBRARY


@dataclass(frozen=True)
class ResolvedProduct:
    """An externally consumable product of the resolved graph.

    Args:
        id: Node id of the product in the backing graph.
        name: Display name of the product.
        type: Tagged product kind.
        targets: Targets the product is composed from, in declaration order.
    """

    id: str
    name: str
    type: ProductType
    targets: Tuple[ResolvedTarget, ...] = field(default_factory=tuple)


@runtime_checkable
class ResolvedGraph(Protocol):
    """Minimal read surface required to summarize a package graph."""

    def all_products(self) -> Iterable[ResolvedProduct]:
        """Iterate every product known to the graph."""

    def all_targets(self) -> Iterable[ResolvedTarget]:
        """Iterate every target known to the graph."""

    def package_for(self, target: ResolvedTarget) -> Optional[ResolvedPackage]:
        """Return the package owning ``target``, or None when it has no owner."""


__all__ = ["ResolvedGraph", "ResolvedPackage", "ResolvedProduct", "ResolvedTarget"]
