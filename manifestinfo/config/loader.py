"""Helpers for loading manifestinfo configuration from TOML/JSON sources.

This module provides a single entry point `load_manifest_config`
that accepts various configuration sources:

* None -> default ManifestConfig
* dict -> ManifestConfig.from_dict
* Path / path-like string -> load .toml/.json from filesystem
* Inline JSON/TOML strings
"""

from __future__ import annotations

import json
import logging
import tomllib
from pathlib import Path
from typing import Any, Dict, Optional, Union

from manifestinfo.config.schema import ManifestConfig

logger = logging.getLogger("manifestinfo.config.loader")

ConfigSource = Union[str, Path, Dict[str, Any], None]


def _is_existing_file(path: Path) -> bool:
    try:
        return path.is_file()
    except OSError:
        # Inline sources longer than the platform path limit.
        return False


def _detect_format(text: str) -> str:
    stripped = text.lstrip()
    return "json" if stripped.startswith(("{", "[")) else "toml"


def load_manifest_config(source: ConfigSource) -> ManifestConfig:
    """Load ManifestConfig from various configuration sources.

    Args:
        source: One of:
            * None: returns ManifestConfig.default()
            * dict: treated as already-parsed configuration mapping
            * str/Path: either a filesystem path to a .toml/.json file,
              or an inline TOML/JSON string (auto-detected)

    Returns:
        ManifestConfig instance.

    Raises:
        ValueError: If the top level is not a mapping or cannot be parsed.
        TypeError: If the source type is not supported.
    """
    if source is None:
        logger.debug("No config source provided; using default ManifestConfig")
        return ManifestConfig.default()

    if isinstance(source, dict):
        logger.debug("Loading ManifestConfig from provided dict")
        return ManifestConfig.from_dict(source)

    if isinstance(source, (str, Path)):
        path = Path(source)
        text: Optional[str] = None
        fmt: Optional[str] = None

        if _is_existing_file(path):
            text = path.read_text(encoding="utf-8")
            suffix = path.suffix.lower()
            if suffix in {".toml", ".tml"}:
                fmt = "toml"
            elif suffix == ".json":
                fmt = "json"
            else:
                fmt = _detect_format(text)
            logger.info("Loading configuration from file: %s (fmt=%s)", path, fmt)
        else:
            text = str(source)
            fmt = _detect_format(text)
            logger.info("Loading configuration from inline %s string", fmt)

        try:
            data = json.loads(text) if fmt == "json" else tomllib.loads(text)
        except (json.JSONDecodeError, tomllib.TOMLDecodeError) as err:
            raise ValueError(f"Cannot parse {fmt.upper()} configuration: {err}") from err

        if not isinstance(data, dict):
            raise ValueError("Top-level configuration must be a mapping/dict")

        return ManifestConfig.from_dict(data)

    raise TypeError(f"Unsupported config source type: {type(source)!r}")


__all__ = ["ConfigSource", "load_manifest_config"]
