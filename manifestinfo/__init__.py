"""manifestinfo - build manifest summaries of resolved package graphs."""

from manifestinfo.build import BuildConfiguration, LLBuildNaming
from manifestinfo.graph import PackageGraph, load_package_graph
from manifestinfo.manifest import ManifestInfo, build_manifest_info

__version__ = "0.1.0"

__all__ = [
    "BuildConfiguration",
    "LLBuildNaming",
    "ManifestInfo",
    "PackageGraph",
    "build_manifest_info",
    "load_package_graph",
]
