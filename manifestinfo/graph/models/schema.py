"""Canonical package graph schema models and validation.

This module defines a single source of truth for node/edge types of the
resolved package graph and for the closed set of product and target kinds.
All graph construction code should prefer the NodeSpec/EdgeSpec helpers
(with Pydantic validation) instead of assembling ad-hoc dictionaries.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Annotated, Any, Dict, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_serializer,
    model_validator,
)

logger = logging.getLogger("manifestinfo.graph.models.schema")


# =============================================================================
# Graph structure
# =============================================================================


class NodeType(str, Enum):
    """Node type constants for the package graph."""

    PACKAGE = "package"
    TARGET = "target"
    PRODUCT = "product"


class EdgeKind(str, Enum):
    """Edge kind constants for the package graph.

    - CONTAINS: package -> target / package -> product ownership
    - INCLUDES: product -> target, ordered by the ``index`` attribute
    - DEPENDS_ON: package -> package dependency
    """

    CONTAINS = "contains"
    INCLUDES = "includes"
    DEPENDS_ON = "depends_on"


# =============================================================================
# Product and target kinds
# =============================================================================


class LibraryType(str, Enum):
    """Linkage of a library product."""

    STATIC = "static"
    DYNAMIC = "dynamic"
    AUTOMATIC = "automatic"


class ProductKind(str, Enum):
    """Top-level product kinds. ``LIBRARY`` carries a :class:`LibraryType`."""

    LIBRARY = "library"
    EXECUTABLE = "executable"
    SNIPPET = "snippet"
    PLUGIN = "plugin"
    TEST = "test"
    MACRO = "macro"


class TargetType(str, Enum):
    """Kinds of compilation units a package can declare."""

    EXECUTABLE = "executable"
    LIBRARY = "library"
    TEST = "test"
    SNIPPET = "snippet"
    MACRO = "macro"
    PLUGIN = "plugin"
    SYSTEM_LIBRARY = "system_library"
    BINARY = "binary"


class ProductType(BaseModel):
    """Tagged product kind with a nested library sub-kind.

    The wire form is the bare kind string (``"executable"``) for every kind
    except libraries, which serialize as ``{"library": "<library type>"}``.
    Both forms, as well as ``{"kind": ..., "library_type": ...}``, are
    accepted on input.
    """

    model_config = ConfigDict(frozen=True)

    kind: ProductKind
    library_type: Optional[LibraryType] = None

    @classmethod
    def library(cls, library_type: LibraryType | str) -> "ProductType":
        return cls(kind=ProductKind.LIBRARY, library_type=LibraryType(library_type))

    @classmethod
    def of(cls, kind: ProductKind | str) -> "ProductType":
        return cls(kind=ProductKind(kind))

    @model_validator(mode="before")
    @classmethod
    def _coerce_wire_form(cls, value: Any) -> Any:
        if isinstance(value, str):
            return {"kind": value}
        if isinstance(value, dict) and "kind" not in value and len(value) == 1:
            ((key, sub_kind),) = value.items()
            if key != ProductKind.LIBRARY.value:
                raise ValueError(f"Only library products carry a sub-kind, got {key!r}")
            return {"kind": key, "library_type": sub_kind}
        return value

    @model_validator(mode="after")
    def _check_library_type(self) -> "ProductType":
        if self.kind is ProductKind.LIBRARY and self.library_type is None:
            raise ValueError("library products require a library_type")
        if self.kind is not ProductKind.LIBRARY and self.library_type is not None:
            raise ValueError(
                f"{self.kind.value} products cannot carry a library_type"
            )
        return self

    @model_serializer
    def _serialize(self) -> Any:
        if self.kind is ProductKind.LIBRARY:
            return {ProductKind.LIBRARY.value: self.library_type.value}
        return self.kind.value

    def __str__(self) -> str:
        if self.kind is ProductKind.LIBRARY:
            return f"library({self.library_type.value})"
        return self.kind.value


# =============================================================================
# Node / edge specs
# =============================================================================


class NodeSpec(BaseModel):
    """Structured representation of a graph node.

    This adds a thin validation layer on top of the low-level GraphBackend API
    while keeping enough flexibility to carry arbitrary attributes.
    """

    model_config = ConfigDict(extra="forbid", arbitrary_types_allowed=True)

    id: Annotated[str, Field(..., description="Canonical node identifier")]
    type: Annotated[NodeType, Field(..., description="Node type enum")]
    name: Annotated[
        str,
        Field(..., description="Display name (package, target or product name)"),
    ]
    identity: Annotated[
        Optional[str],
        Field(default=None, description="Package identity; packages only"),
    ]
    kind: Annotated[
        Optional[Any],
        Field(
            default=None,
            description="TargetType for targets, ProductType wire form for products",
        ),
    ]
    # Provisional nodes are created implicitly (e.g. as unresolved product
    # target references) and have no owning package.
    provisional: Annotated[
        bool,
        Field(
            default=False,
            description="Whether this node is a provisional placeholder",
        ),
    ]

    attrs: Annotated[Dict[str, Any], Field(default_factory=dict)]

    @field_validator("id", "name")
    @classmethod
    def _check_non_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("Node id and name must be non-empty strings")
        return value

    def to_backend_attrs(self) -> Dict[str, Any]:
        """Convert this spec into a backend attribute mapping."""
        payload: Dict[str, Any] = {
            "type": self.type.value,
            "name": self.name,
        }
        if self.identity is not None:
            payload["identity"] = self.identity
        if self.kind is not None:
            payload["kind"] = self.kind
        if self.provisional:
            payload["provisional"] = True
        payload.update(self.attrs)
        return payload


class EdgeSpec(BaseModel):
    """Structured representation of a graph edge."""

    model_config = ConfigDict(extra="forbid", arbitrary_types_allowed=True)

    source: Annotated[str, Field(..., description="Source node id")]
    target: Annotated[str, Field(..., description="Target node id")]
    kind: Annotated[EdgeKind, Field(..., description="Semantic edge kind")]
    index: Annotated[
        Optional[int],
        Field(
            default=None,
            ge=0,
            description="Position of the target in a product's target list",
        ),
    ]

    attrs: Annotated[Dict[str, Any], Field(default_factory=dict)]

    @field_validator("source", "target")
    @classmethod
    def _check_endpoint_non_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("Edge endpoints must be non-empty strings")
        return value

    def to_backend_attrs(self) -> Dict[str, Any]:
        """Convert this spec into a backend attribute mapping."""
        payload: Dict[str, Any] = {"kind": self.kind.value}
        if self.index is not None:
            payload["index"] = self.index
        payload.update(self.attrs)
        return payload


def validate_edge(spec: EdgeSpec) -> None:
    """Apply light-weight semantic validation to an edge spec."""
    if spec.kind is EdgeKind.INCLUDES and spec.index is None:
        raise ValueError(
            f"Edge {spec.source} -> {spec.target} ({spec.kind.value}) requires an index"
        )
    if spec.source == spec.target:
        logger.debug("Self-referencing %s edge on %s", spec.kind.value, spec.source)


__all__ = [
    "EdgeKind",
    "EdgeSpec",
    "LibraryType",
    "NodeSpec",
    "NodeType",
    "ProductKind",
    "ProductType",
    "TargetType",
    "validate_edge",
]
