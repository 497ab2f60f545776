"""Helpers shared by CLI commands."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Tuple

from manifestinfo.config import ManifestConfig, load_manifest_config
from manifestinfo.graph import PackageGraph, load_package_graph

logger = logging.getLogger("manifestinfo.cli.common")


def load_inputs(args) -> Tuple[ManifestConfig, PackageGraph]:
    """Load the configuration and package graph named by parsed arguments.

    Args:
        args: Parsed arguments with ``graph`` and optional ``config``.

    Returns:
        Tuple of (configuration, package graph).
    """
    config = load_manifest_config(getattr(args, "config", None))
    graph_path = Path(args.graph).expanduser()
    logger.info("Reading package graph: %s", graph_path)
    graph = load_package_graph(graph_path, config.graph)
    return config, graph
