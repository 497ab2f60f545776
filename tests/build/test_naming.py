"""Tests for build-system target naming."""

from __future__ import annotations

import pytest

from manifestinfo.build import (
    BuildConfiguration,
    LLBuildNaming,
    ProductNaming,
    TargetNaming,
    all_configurations,
)
from manifestinfo.errors import RecoverableError, TargetNameUnavailable
from manifestinfo.graph import (
    LibraryType,
    ProductKind,
    ProductType,
    ResolvedProduct,
    ResolvedTarget,
)


def _product(product_type: ProductType, name: str = "Thing") -> ResolvedProduct:
    return ResolvedProduct(id=f"product:pkg/{name}", name=name, type=product_type)


def test_default_naming_implements_both_contracts() -> None:
    """LLBuildNaming can name both products and targets."""
    naming = LLBuildNaming()

    assert isinstance(naming, ProductNaming)
    assert isinstance(naming, TargetNaming)


def test_all_configurations_is_closed_set() -> None:
    """Debug and release are the known configurations, in that order."""
    assert all_configurations() == (BuildConfiguration.DEBUG, BuildConfiguration.RELEASE)


@pytest.mark.parametrize("configuration", list(BuildConfiguration))
def test_target_names_use_module_suffix(configuration: BuildConfiguration) -> None:
    """Targets compile to modules."""
    target = ResolvedTarget(id="target:pkg/Core", name="Core")

    name = LLBuildNaming().target_target_name(target, configuration)

    assert name == f"Core-{configuration.value}.module"


@pytest.mark.parametrize(
    ("product_type", "expected"),
    [
        (ProductType.library(LibraryType.DYNAMIC), "Thing-release.dylib"),
        (ProductType.library(LibraryType.STATIC), "Thing-release.a"),
        (ProductType.of(ProductKind.TEST), "Thing-release.test"),
        (ProductType.of(ProductKind.EXECUTABLE), "Thing-release.exe"),
        (ProductType.of(ProductKind.SNIPPET), "Thing-release.exe"),
        (ProductType.of(ProductKind.MACRO), "Thing-release.exe"),
    ],
)
def test_product_names_by_kind(product_type: ProductType, expected: str) -> None:
    """Product names are suffixed by the kind of artifact produced."""
    name = LLBuildNaming().product_target_name(
        _product(product_type), BuildConfiguration.RELEASE
    )

    assert name == expected


@pytest.mark.parametrize(
    "product_type",
    [ProductType.library(LibraryType.AUTOMATIC), ProductType.of(ProductKind.PLUGIN)],
)
def test_unnamed_product_kinds_raise(product_type: ProductType) -> None:
    """Automatic libraries and plugins have no build-system name."""
    with pytest.raises(TargetNameUnavailable) as excinfo:
        LLBuildNaming().product_target_name(
            _product(product_type), BuildConfiguration.DEBUG
        )

    assert isinstance(excinfo.value, RecoverableError)
    assert excinfo.value.item_name == "Thing"
    assert excinfo.value.configuration == "debug"
