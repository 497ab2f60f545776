"""Build configurations known to the low-level build executor."""

from __future__ import annotations

from enum import Enum
from typing import Tuple


class BuildConfiguration(str, Enum):
    """Named build mode under which distinct target names are generated."""

    DEBUG = "debug"
    RELEASE = "release"


def all_configurations() -> Tuple[BuildConfiguration, ...]:
    """Return every known build configuration in declaration order."""
    return tuple(BuildConfiguration)


__all__ = ["BuildConfiguration", "all_configurations"]
