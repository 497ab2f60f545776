"""Build-system target names for products and targets.

The low-level build executor addresses every compiled artifact by a name
that depends on the build configuration. Products and targets are named
through two separate contracts:

* :class:`ProductNaming` may refuse to name a product by raising
  :class:`~manifestinfo.errors.TargetNameUnavailable`.
* :class:`TargetNaming` always produces a name. Any exception escaping it is
  a bug in the naming scheme.

:class:`LLBuildNaming` implements both for the default executor.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from manifestinfo.build.configuration import BuildConfiguration
from manifestinfo.errors import InternalError, TargetNameUnavailable
from manifestinfo.graph.models.resolved import ResolvedProduct, ResolvedTarget
from manifestinfo.graph.models.schema import LibraryType, ProductKind


@runtime_checkable
class ProductNaming(Protocol):
    """Fallible naming of products."""

    def product_target_name(
        self, product: ResolvedProduct, configuration: BuildConfiguration
    ) -> str:
        """Return the build-system target name of ``product``.

        Only :class:`TargetNameUnavailable` makes the projection drop the
        product. Any other exception is fatal and aborts the projection.

        Raises:
            TargetNameUnavailable: If the product has no such name.
        """


@runtime_checkable
class TargetNaming(Protocol):
    """Infallible naming of targets."""

    def target_target_name(
        self, target: ResolvedTarget, configuration: BuildConfiguration
    ) -> str:
        """Return the build-system target name of ``target``."""


class LLBuildNaming:
    """Default naming scheme of the low-level build executor.

    Targets compile to ``<name>-<config>.module``. Products are suffixed by
    what they link into; automatic libraries and plugins have no name.
    """

    def target_target_name(
        self, target: ResolvedTarget, configuration: BuildConfiguration
    ) -> str:
        return f"{target.name}-{BuildConfiguration(configuration).value}.module"

    def product_target_name(
        self, product: ResolvedProduct, configuration: BuildConfiguration
    ) -> str:
        config = BuildConfiguration(configuration).value
        kind = product.type.kind

        if kind is ProductKind.LIBRARY:
            library_type = product.type.library_type
            if library_type is LibraryType.DYNAMIC:
                return f"{product.name}-{config}.dylib"
            if library_type is LibraryType.STATIC:
                return f"{product.name}-{config}.a"
            if library_type is LibraryType.AUTOMATIC:
                raise TargetNameUnavailable(
                    product.name, config, "automatic library not supported"
                )
            raise InternalError(f"Unhandled library type {library_type!r}")
        if kind is ProductKind.TEST:
            return f"{product.name}-{config}.test"
        if kind in (ProductKind.EXECUTABLE, ProductKind.SNIPPET, ProductKind.MACRO):
            return f"{product.name}-{config}.exe"
        if kind is ProductKind.PLUGIN:
            raise TargetNameUnavailable(
                product.name, config, "plugin products are not built by the executor"
            )
        raise InternalError(f"Unhandled product kind {kind!r}")


__all__ = ["LLBuildNaming", "ProductNaming", "TargetNaming"]
