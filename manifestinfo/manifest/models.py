"""Serializable manifest summary of a resolved package graph.

The models here are immutable snapshots: they are created once from a graph
and keep no reference to it. The JSON form uses the field names expected by
IDE integrations and build inspectors::

    {
      "products": [
        {
          "package": {"identity": "swift-foo"},
          "name": "foo",
          "type": "executable",
          "LLBuildTargetNameByConfig": {"debug": "foo-debug.exe", ...}
        }
      ],
      "targets": [
        {
          "package": {"identity": "swift-foo"},
          "name": "Foo",
          "LLBuildTargetNameByConfig": {"debug": "Foo-debug.module", ...}
        }
      ]
    }

``type`` is the bare kind string, or ``{"library": "<library type>"}`` for
libraries. This is not the enum encoding the SwiftPM consumers read, which is
``{"executable": {}}`` and ``{"library": {"_0": "static"}}``.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, Dict, Iterable, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from manifestinfo.graph.models.resolved import ResolvedPackage
from manifestinfo.graph.models.schema import ProductType

if TYPE_CHECKING:
    from manifestinfo.build.configuration import BuildConfiguration
    from manifestinfo.build.naming import ProductNaming, TargetNaming
    from manifestinfo.graph.models.resolved import ResolvedGraph

NAME_BY_CONFIG_FIELD = "LLBuildTargetNameByConfig"


class PackageRef(BaseModel):
    """Identity of the package owning a product or target."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    identity: str

    @classmethod
    def from_package(cls, package: ResolvedPackage) -> "PackageRef":
        return cls(identity=package.identity)


class TargetSummary(BaseModel):
    """A target together with its per-configuration build-system names."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    package: PackageRef
    name: str
    llbuild_target_name_by_config: Dict[str, str] = Field(alias=NAME_BY_CONFIG_FIELD)


class ProductSummary(BaseModel):
    """A product together with its kind and per-configuration build-system names."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    package: PackageRef
    name: str
    type: ProductType
    llbuild_target_name_by_config: Dict[str, str] = Field(alias=NAME_BY_CONFIG_FIELD)


def _entry_key(entry: TargetSummary | ProductSummary) -> Tuple[str, str]:
    return entry.package.identity, entry.name


class ManifestInfo(BaseModel):
    """Products and targets of a package graph, keyed by build configuration."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    products: Tuple[ProductSummary, ...] = ()
    targets: Tuple[TargetSummary, ...] = ()

    @classmethod
    def from_graph(
        cls,
        graph: "ResolvedGraph",
        naming: Optional["ProductNaming | TargetNaming"] = None,
        configurations: Optional[Iterable["BuildConfiguration"]] = None,
    ) -> "ManifestInfo":
        """Summarize ``graph``; see :func:`manifestinfo.manifest.projection.build_manifest_info`."""
        from manifestinfo.manifest.projection import build_manifest_info

        return build_manifest_info(graph, naming=naming, configurations=configurations)

    def sorted(self) -> "ManifestInfo":
        """Return a copy ordered by package identity, then name."""
        return ManifestInfo(
            products=tuple(sorted(self.products, key=_entry_key)),
            targets=tuple(sorted(self.targets, key=_entry_key)),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Return the JSON-compatible wire form."""
        return self.model_dump(mode="json", by_alias=True)

    def to_json(self, indent: Optional[int] = 2, sort_keys: bool = False) -> str:
        """Serialize to JSON text."""
        return json.dumps(self.to_dict(), indent=indent, sort_keys=sort_keys, ensure_ascii=False)

    @classmethod
    def from_json(cls, text: str | bytes) -> "ManifestInfo":
        """Parse JSON text produced by :meth:`to_json`."""
        return cls.model_validate_json(text)


__all__ = [
    "ManifestInfo",
    "NAME_BY_CONFIG_FIELD",
    "PackageRef",
    "ProductSummary",
    "TargetSummary",
]
