"""Export command implementation."""

import json
import logging

from pydantic import ValidationError

from manifestinfo.errors import GraphLoadError, InternalError
from manifestinfo.export import export_manifest_json
from manifestinfo.manifest import build_manifest_info

from .common import load_inputs

logger = logging.getLogger("manifestinfo.cli.export")


def export_command(args) -> int:
    """Execute export command.

    Args:
        args: Parsed command-line arguments containing:
            - graph: Package graph file
            - output: Output file path (``-`` for stdout)
            - config: Optional configuration file or inline string
            - sort: Order entries by package identity and name

    Returns:
        int: Exit code (0 for success, non-zero for failure).
    """
    logger.info("=== Manifestinfo Export ===")

    try:
        config, graph = load_inputs(args)
        output_config = config.output
        if getattr(args, "sort", False):
            output_config = output_config.model_copy(update={"sort_entries": True})

        info = build_manifest_info(graph)
        export_manifest_json(info, args.output, output_config)
        logger.info("Export successful: %s", args.output)
        return 0

    except InternalError as err:
        logger.error("Export aborted, internal inconsistency: %s", err, exc_info=True)
        return 2
    except (
        GraphLoadError,
        ValidationError,
        json.JSONDecodeError,
        OSError,
        TypeError,
        ValueError,
    ) as err:
        logger.error("Export failed: %s", err, exc_info=True)
        return 1
