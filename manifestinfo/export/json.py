"""JSON export for manifest info."""

import logging
import sys
from pathlib import Path
from typing import Optional, Union

from manifestinfo.config.schema import OutputConfig
from manifestinfo.manifest.models import ManifestInfo

logger = logging.getLogger("manifestinfo.export.json")

STDOUT_PATH = "-"


def export_manifest_json(
    info: ManifestInfo,
    output_path: Union[str, Path],
    output_config: Optional[OutputConfig] = None,
) -> None:
    """Export manifest info to JSON.

    Args:
        info: Manifest info to export.
        output_path: Output file path, or ``-`` for standard output.
        output_config: Serialization options.
    """
    cfg = output_config or OutputConfig()
    if cfg.sort_entries:
        info = info.sorted()
    text = info.to_json(indent=cfg.indent, sort_keys=cfg.sort_keys)

    if str(output_path) == STDOUT_PATH:
        sys.stdout.write(text + "\n")
        return

    output_path = Path(output_path)
    logger.info("Exporting manifest info to JSON: %s", output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        f.write(text)
        f.write("\n")

    logger.info(
        "JSON export completed: %d products, %d targets",
        len(info.products),
        len(info.targets),
    )
