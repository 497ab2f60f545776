"""Tests for projecting a package graph onto manifest info."""

from __future__ import annotations

from typing import List, Optional

import pytest

from manifestinfo.build import BuildConfiguration, LLBuildNaming, all_configurations
from manifestinfo.errors import InternalError, TargetNameUnavailable
from manifestinfo.graph import (
    LibraryType,
    PackageGraph,
    ProductKind,
    ProductType,
    ResolvedPackage,
    ResolvedProduct,
    ResolvedTarget,
    TargetType,
)
from manifestinfo.manifest import (
    ManifestInfo,
    build_manifest_info,
    compact_map,
    is_excluded_product_type,
    target_names_by_config,
)


class UnderscoreNaming:
    """Naming stub producing ``<package>_<item>_<config>`` names."""

    def __init__(self, package: str = "P") -> None:
        self.package = package

    def product_target_name(self, product, configuration) -> str:
        return f"{self.package}_{product.name}_{configuration.value}"

    def target_target_name(self, target, configuration) -> str:
        return f"{self.package}_{target.name}_{configuration.value}"


class RefusingNaming(LLBuildNaming):
    """Default naming that refuses a chosen product in one configuration."""

    def __init__(self, refused: str, configuration: BuildConfiguration) -> None:
        self.refused = refused
        self.configuration = configuration

    def product_target_name(self, product, configuration) -> str:
        if product.name == self.refused and configuration is self.configuration:
            raise TargetNameUnavailable(product.name, configuration.value)
        return super().product_target_name(product, configuration)


class BrokenTargetNaming(LLBuildNaming):
    """Naming whose target contract is violated."""

    def target_target_name(self, target, configuration) -> str:
        raise TargetNameUnavailable(target.name, configuration.value)


class CrashingProductNaming(LLBuildNaming):
    """Product naming failing with an error outside the naming contract."""

    def product_target_name(self, product, configuration) -> str:
        raise RuntimeError(f"cannot name {product.name}")


class StubGraph:
    """Hand-built graph exposing only the projection read surface."""

    def __init__(
        self,
        products: List[ResolvedProduct],
        targets: List[ResolvedTarget],
        owners: dict,
    ) -> None:
        self.products = products
        self.targets = targets
        self.owners = owners

    def all_products(self) -> List[ResolvedProduct]:
        return list(self.products)

    def all_targets(self) -> List[ResolvedTarget]:
        return list(self.targets)

    def package_for(self, target: ResolvedTarget) -> Optional[ResolvedPackage]:
        return self.owners.get(target.id)


def _scenario_graph() -> PackageGraph:
    """Package P with an executable product and an automatic library."""
    graph = PackageGraph(graph_id="scenario")
    graph.add_package("P")
    t1 = graph.add_target("T1", "P", TargetType.EXECUTABLE)
    t2 = graph.add_target("T2", "P")
    graph.add_product("exe", "P", ProductType.of(ProductKind.EXECUTABLE), [t1])
    graph.add_product("autolib", "P", ProductType.library(LibraryType.AUTOMATIC), [t2])
    return graph


def _mixed_graph() -> PackageGraph:
    """Two packages covering every product kind plus an ownerless target."""
    graph = PackageGraph(graph_id="mixed")
    graph.add_package("app")
    graph.add_package("lib")
    graph.add_dependency("app", "lib")
    core = graph.add_target("Core", "lib")
    cli = graph.add_target("CLI", "app", TargetType.EXECUTABLE)
    tests = graph.add_target("CoreTests", "lib", TargetType.TEST)
    plugin = graph.add_target("Gen", "lib", TargetType.PLUGIN)
    macro = graph.add_target("Macros", "lib", TargetType.MACRO)
    orphan = graph.add_target("Orphan")

    graph.add_product("Core", "lib", ProductType.library(LibraryType.STATIC), [core])
    graph.add_product("CoreDyn", "lib", ProductType.library(LibraryType.DYNAMIC), [core])
    graph.add_product("CoreAuto", "lib", ProductType.library(LibraryType.AUTOMATIC), [core])
    graph.add_product("cli", "app", ProductType.of(ProductKind.EXECUTABLE), [cli, core])
    graph.add_product("CoreTests", "lib", ProductType.of(ProductKind.TEST), [tests])
    graph.add_product("Gen", "lib", ProductType.of(ProductKind.PLUGIN), [plugin])
    graph.add_product("Macros", "lib", ProductType.of(ProductKind.MACRO), [macro])
    graph.add_product("Snip", "app", ProductType.of(ProductKind.SNIPPET), [cli])
    graph.add_product("Stray", "app", ProductType.of(ProductKind.EXECUTABLE), [orphan, cli])
    graph.add_product("Empty", "app", ProductType.of(ProductKind.EXECUTABLE), [])
    return graph


def test_executable_scenario_keeps_exe_and_drops_automatic_library() -> None:
    """Only the executable survives, with one name per configuration."""
    info = build_manifest_info(_scenario_graph(), naming=UnderscoreNaming())

    assert len(info.products) == 1
    product = info.products[0]
    assert product.name == "exe"
    assert product.package.identity == "P"
    assert product.type == ProductType.of(ProductKind.EXECUTABLE)
    assert product.llbuild_target_name_by_config == {
        "debug": "P_exe_debug",
        "release": "P_exe_release",
    }
    assert [t.name for t in info.targets] == ["T1", "T2"]


def test_excluded_kinds_never_appear() -> None:
    """Plugins and automatic libraries are dropped unconditionally."""
    info = build_manifest_info(_mixed_graph())

    for product in info.products:
        assert not is_excluded_product_type(product.type)
    names = {p.name for p in info.products}
    assert "Gen" not in names
    assert "CoreAuto" not in names
    assert names == {"Core", "CoreDyn", "cli", "CoreTests", "Macros", "Snip"}


def test_product_package_comes_from_first_target() -> None:
    """A product is attributed to the package owning its first target."""
    graph = PackageGraph()
    graph.add_package("a")
    graph.add_package("b")
    foreign = graph.add_target("Shared", "b")
    local = graph.add_target("Local", "a")
    graph.add_product("tool", "a", ProductType.of(ProductKind.EXECUTABLE), [foreign, local])

    info = build_manifest_info(graph)

    assert info.products[0].package.identity == "b"


def test_product_with_ownerless_first_target_is_dropped() -> None:
    """A missing package for the first target drops the product silently."""
    info = build_manifest_info(_mixed_graph())

    names = {p.name for p in info.products}
    assert "Stray" not in names
    assert "Empty" not in names


def test_product_lookup_miss_drops_non_excluded_product() -> None:
    """The package lookup failing excludes a product of an allowed kind."""
    target = ResolvedTarget(id="target:ghost/T", name="T")
    product = ResolvedProduct(
        id="product:ghost/exe",
        name="exe",
        type=ProductType.of(ProductKind.EXECUTABLE),
        targets=(target,),
    )
    graph = StubGraph([product], [target], owners={})

    info = build_manifest_info(graph)

    assert info.products == ()
    assert info.targets == ()


def test_ownerless_target_is_absent_from_targets() -> None:
    """Targets without an owning package are dropped."""
    graph = _mixed_graph()
    assert "Orphan" in {t.name for t in graph.all_targets()}

    info = build_manifest_info(graph)

    assert "Orphan" not in {t.name for t in info.targets}
    assert len(info.targets) == 5


def test_every_entry_has_exactly_the_known_configurations() -> None:
    """Configuration maps contain one key per configuration, no more."""
    info = build_manifest_info(_mixed_graph())
    expected = {c.value for c in all_configurations()}

    for entry in (*info.products, *info.targets):
        assert set(entry.llbuild_target_name_by_config) == expected


def test_identities_match_owning_packages() -> None:
    """Every surviving entry carries the identity of its real owner."""
    graph = _mixed_graph()
    targets_by_name = {t.name: t for t in graph.all_targets()}
    products_by_name = {p.name: p for p in graph.all_products()}

    info = build_manifest_info(graph)

    for summary in info.targets:
        owner = graph.package_for(targets_by_name[summary.name])
        assert owner is not None
        assert summary.package.identity == owner.identity
    for summary in info.products:
        first = products_by_name[summary.name].targets[0]
        assert summary.package.identity == graph.package_for(first).identity


def test_default_naming_scheme_names() -> None:
    """The default scheme suffixes names by artifact kind."""
    info = build_manifest_info(_mixed_graph())
    products = {p.name: p.llbuild_target_name_by_config for p in info.products}
    targets = {t.name: t.llbuild_target_name_by_config for t in info.targets}

    assert products["Core"]["debug"] == "Core-debug.a"
    assert products["CoreDyn"]["release"] == "CoreDyn-release.dylib"
    assert products["cli"]["debug"] == "cli-debug.exe"
    assert products["Snip"]["debug"] == "Snip-debug.exe"
    assert products["Macros"]["release"] == "Macros-release.exe"
    assert products["CoreTests"]["debug"] == "CoreTests-debug.test"
    assert targets["Core"] == {"debug": "Core-debug.module", "release": "Core-release.module"}


def test_product_naming_failure_drops_whole_product() -> None:
    """Failing in a single configuration removes the product entirely."""
    naming = RefusingNaming("cli", BuildConfiguration.RELEASE)

    info = build_manifest_info(_mixed_graph(), naming=naming)

    assert "cli" not in {p.name for p in info.products}
    assert "Snip" in {p.name for p in info.products}


def test_unexpected_product_naming_error_propagates() -> None:
    """Only TargetNameUnavailable drops a product; other errors abort."""
    with pytest.raises(RuntimeError, match="cannot name exe"):
        build_manifest_info(_scenario_graph(), naming=CrashingProductNaming())


def test_target_naming_failure_is_fatal() -> None:
    """Target naming errors surface as InternalError instead of drops."""
    with pytest.raises(InternalError) as excinfo:
        build_manifest_info(_scenario_graph(), naming=BrokenTargetNaming())

    assert isinstance(excinfo.value.__cause__, TargetNameUnavailable)


def test_projection_is_idempotent_and_leaves_graph_untouched() -> None:
    """Projecting the same graph twice yields equal values."""
    graph = _mixed_graph()
    nodes_before = graph.node_count()
    edges_before = graph.edge_count()

    first = build_manifest_info(graph)
    second = ManifestInfo.from_graph(graph)

    assert first == second
    assert graph.node_count() == nodes_before
    assert graph.edge_count() == edges_before


def test_order_follows_graph_iteration() -> None:
    """Entries keep the graph's insertion order."""
    info = build_manifest_info(_mixed_graph())

    assert [p.name for p in info.products] == [
        "Core",
        "CoreDyn",
        "cli",
        "CoreTests",
        "Macros",
        "Snip",
    ]


def test_restricting_configurations() -> None:
    """Callers may request names for a subset of configurations."""
    info = build_manifest_info(
        _scenario_graph(), configurations=[BuildConfiguration.DEBUG]
    )

    assert info.products[0].llbuild_target_name_by_config == {"debug": "exe-debug.exe"}


def test_compact_map_discards_none_and_keeps_order() -> None:
    """compact_map is a filter-map over the input order."""
    result = compact_map(lambda n: n * 2 if n % 2 else None, [1, 2, 3, 4, 5])

    assert result == [2, 6, 10]


def test_target_names_by_config_propagates_failures() -> None:
    """No placeholder name is substituted when resolution fails."""

    def resolve(config: BuildConfiguration) -> str:
        if config is BuildConfiguration.RELEASE:
            raise TargetNameUnavailable("x", config.value)
        return "x-debug"

    with pytest.raises(TargetNameUnavailable):
        target_names_by_config(resolve, all_configurations())


@pytest.mark.parametrize(
    ("product_type", "excluded"),
    [
        (ProductType.of(ProductKind.PLUGIN), True),
        (ProductType.library(LibraryType.AUTOMATIC), True),
        (ProductType.library(LibraryType.STATIC), False),
        (ProductType.library(LibraryType.DYNAMIC), False),
        (ProductType.of(ProductKind.EXECUTABLE), False),
        (ProductType.of(ProductKind.SNIPPET), False),
        (ProductType.of(ProductKind.TEST), False),
        (ProductType.of(ProductKind.MACRO), False),
    ],
)
def test_is_excluded_product_type(product_type: ProductType, excluded: bool) -> None:
    """Exclusion covers exactly plugins and automatic libraries."""
    assert is_excluded_product_type(product_type) is excluded
