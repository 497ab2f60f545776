"""Projection of a resolved package graph onto :class:`ManifestInfo`.

The projection is a pure, read-only pass over the graph:

1. every product and every target is considered once, in graph order;
2. items that cannot be attributed to a package are dropped;
3. products of kinds without a build-system name (plugins, automatic
   libraries) are dropped, as are products the naming scheme refuses;
4. every surviving item gets one name per build configuration.

Dropping is expressed as data flow: each ``_*_summary`` helper returns
``None`` for a dropped item and :func:`compact_map` keeps the rest. The only
failure that escapes is a target naming error, which is an
:class:`~manifestinfo.errors.InternalError`.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Iterable, List, Optional, Tuple, TypeVar

from manifestinfo.build.configuration import BuildConfiguration, all_configurations
from manifestinfo.build.naming import LLBuildNaming, ProductNaming, TargetNaming
from manifestinfo.errors import InternalError, TargetNameUnavailable
from manifestinfo.graph.models.resolved import (
    ResolvedGraph,
    ResolvedProduct,
    ResolvedTarget,
)
from manifestinfo.graph.models.schema import LibraryType, ProductKind, ProductType
from manifestinfo.manifest.models import (
    ManifestInfo,
    PackageRef,
    ProductSummary,
    TargetSummary,
)

logger = logging.getLogger("manifestinfo.manifest.projection")

T = TypeVar("T")
R = TypeVar("R")


def compact_map(transform: Callable[[T], Optional[R]], items: Iterable[T]) -> List[R]:
    """Apply ``transform`` to each item, keeping non-None results in order."""
    results: List[R] = []
    for item in items:
        result = transform(item)
        if result is not None:
            results.append(result)
    return results


def is_excluded_product_type(product_type: ProductType) -> bool:
    """Return True for product kinds that have no build-system target name."""
    kind = product_type.kind
    if kind is ProductKind.PLUGIN:
        return True
    if kind is ProductKind.LIBRARY:
        library_type = product_type.library_type
        if library_type is LibraryType.AUTOMATIC:
            return True
        if library_type in (LibraryType.STATIC, LibraryType.DYNAMIC):
            return False
        raise InternalError(f"Unhandled library type {library_type!r}")
    if kind in (
        ProductKind.EXECUTABLE,
        ProductKind.SNIPPET,
        ProductKind.TEST,
        ProductKind.MACRO,
    ):
        return False
    raise InternalError(f"Unhandled product kind {kind!r}")


def target_names_by_config(
    resolve: Callable[[BuildConfiguration], str],
    configurations: Iterable[BuildConfiguration],
) -> Dict[str, str]:
    """Map each configuration identifier to the name ``resolve`` returns for it.

    Exceptions raised by ``resolve`` propagate unchanged; no placeholder name
    is ever substituted.
    """
    return {config.value: resolve(config) for config in configurations}


def _product_summary(
    graph: ResolvedGraph,
    naming: ProductNaming,
    configurations: Tuple[BuildConfiguration, ...],
    product: ResolvedProduct,
) -> Optional[ProductSummary]:
    if is_excluded_product_type(product.type):
        logger.debug(
            "Skipping product %s: %s has no build-system name", product.name, product.type
        )
        return None

    package = graph.package_for(product.targets[0]) if product.targets else None
    if package is None:
        logger.debug("Skipping product %s: no owning package for its first target", product.name)
        return None

    try:
        names = target_names_by_config(
            lambda config: naming.product_target_name(product, config), configurations
        )
    except TargetNameUnavailable as exc:
        logger.debug("Skipping product %s: %s", product.name, exc)
        return None

    return ProductSummary(
        package=PackageRef.from_package(package),
        name=product.name,
        type=product.type,
        llbuild_target_name_by_config=names,
    )


def _target_summary(
    graph: ResolvedGraph,
    naming: TargetNaming,
    configurations: Tuple[BuildConfiguration, ...],
    target: ResolvedTarget,
) -> Optional[TargetSummary]:
    package = graph.package_for(target)
    if package is None:
        logger.debug("Skipping target %s: no owning package", target.name)
        return None

    try:
        names = target_names_by_config(
            lambda config: naming.target_target_name(target, config), configurations
        )
    except TargetNameUnavailable as exc:
        raise InternalError(
            f"Target naming must not fail, but did for {target.name!r}: {exc}"
        ) from exc

    return TargetSummary(
        package=PackageRef.from_package(package),
        name=target.name,
        llbuild_target_name_by_config=names,
    )


def project_products(
    graph: ResolvedGraph,
    naming: ProductNaming,
    configurations: Iterable[BuildConfiguration],
) -> List[ProductSummary]:
    """Summarize every product of ``graph`` that has a build-system name."""
    configs = tuple(configurations)
    return compact_map(
        lambda product: _product_summary(graph, naming, configs, product),
        graph.all_products(),
    )


def project_targets(
    graph: ResolvedGraph,
    naming: TargetNaming,
    configurations: Iterable[BuildConfiguration],
) -> List[TargetSummary]:
    """Summarize every target of ``graph`` that belongs to a package.

    Raises:
        InternalError: If the naming scheme fails for a target.
    """
    configs = tuple(configurations)
    return compact_map(
        lambda target: _target_summary(graph, naming, configs, target),
        graph.all_targets(),
    )


def build_manifest_info(
    graph: ResolvedGraph,
    naming: Optional[ProductNaming | TargetNaming] = None,
    configurations: Optional[Iterable[BuildConfiguration]] = None,
) -> ManifestInfo:
    """Project ``graph`` onto a :class:`ManifestInfo`.

    Args:
        graph: Resolved package graph; it is only read.
        naming: Object implementing both naming contracts. Defaults to
            :class:`LLBuildNaming`.
        configurations: Build configurations to name items for. Defaults to
            every known configuration.

    Returns:
        ManifestInfo: Products and targets that survived projection.

    Raises:
        InternalError: If the naming scheme fails for a target.
    """
    scheme = naming or LLBuildNaming()
    configs = tuple(configurations) if configurations is not None else all_configurations()

    products = project_products(graph, scheme, configs)
    targets = project_targets(graph, scheme, configs)
    logger.info(
        "Projected %d product(s) and %d target(s) over %d configuration(s)",
        len(products),
        len(targets),
        len(configs),
    )
    return ManifestInfo(products=tuple(products), targets=tuple(targets))


__all__ = [
    "build_manifest_info",
    "compact_map",
    "is_excluded_product_type",
    "project_products",
    "project_targets",
    "target_names_by_config",
]
