"""CLI command to display the manifest summary of a package graph.

Products and targets are rendered as Rich tables with one column per build
configuration.
"""

from __future__ import annotations

import json
import logging
from typing import Optional, Sequence

from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from manifestinfo.build import BuildConfiguration, all_configurations
from manifestinfo.errors import GraphLoadError, InternalError
from manifestinfo.manifest import ManifestInfo, build_manifest_info

from .common import load_inputs

logger = logging.getLogger("manifestinfo.cli.show")


def render_manifest(
    info: ManifestInfo,
    configurations: Sequence[BuildConfiguration],
    console: Optional[Console] = None,
) -> None:
    """Print products and targets of ``info`` as tables."""
    console = console or Console()

    products = Table(title=f"Products ({len(info.products)})")
    products.add_column("Package", style="cyan")
    products.add_column("Product", style="bold")
    products.add_column("Type")
    for config in configurations:
        products.add_column(config.value, style="green")
    for product in info.products:
        products.add_row(
            product.package.identity,
            product.name,
            str(product.type),
            *(product.llbuild_target_name_by_config.get(c.value, "") for c in configurations),
        )

    targets = Table(title=f"Targets ({len(info.targets)})")
    targets.add_column("Package", style="cyan")
    targets.add_column("Target", style="bold")
    for config in configurations:
        targets.add_column(config.value, style="green")
    for target in info.targets:
        targets.add_row(
            target.package.identity,
            target.name,
            *(target.llbuild_target_name_by_config.get(c.value, "") for c in configurations),
        )

    console.print(products)
    console.print(targets)


def show_command(args, console: Optional[Console] = None) -> int:
    """Execute show command.

    Args:
        args: Parsed command-line arguments.
        console: Console to render to; defaults to stdout.

    Returns:
        int: Exit code (0 for success, non-zero for failure).
    """
    try:
        config, graph = load_inputs(args)
        configurations = all_configurations()
        info = build_manifest_info(graph, configurations=configurations)
        if config.output.sort_entries:
            info = info.sorted()
        render_manifest(info, configurations, console)
        return 0

    except InternalError as err:
        logger.error("Show aborted, internal inconsistency: %s", err, exc_info=True)
        return 2
    except (
        GraphLoadError,
        ValidationError,
        json.JSONDecodeError,
        OSError,
        TypeError,
        ValueError,
    ) as err:
        logger.error("Show failed: %s", err, exc_info=True)
        return 1
