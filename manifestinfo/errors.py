"""Exception hierarchy for manifestinfo.

Errors are split by who is expected to handle them:

* :class:`RecoverableError` subclasses signal expected conditions that the
  projection absorbs locally by dropping the affected item.
* :class:`InternalError` signals a broken contract between collaborators.
  It is never caught by the core and should abort the current command.
"""

from __future__ import annotations

from typing import Optional


# =============================================================================
# Custom Exception Hierarchy
# =============================================================================


class RecoverableError(Exception):
    """Base class for recoverable projection errors.

    These errors indicate expected failure conditions that can be handled
    gracefully by skipping the current item and continuing processing.
    """


class TargetNameUnavailable(RecoverableError):
    """A product has no build-system target name for a configuration.

    Raised by product naming schemes for product kinds that the low-level
    build executor does not address directly (plugins, automatic libraries).
    """

    def __init__(
        self, item_name: str, configuration: Optional[str] = None, reason: str = ""
    ) -> None:
        self.item_name = item_name
        self.configuration = configuration
        self.reason = reason
        message = f"no build-system target name for {item_name!r}"
        if configuration:
            message += f" in configuration {configuration!r}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class GraphLoadError(ValueError):
    """Package graph document is malformed or inconsistent."""


class InternalError(RuntimeError):
    """An invariant between collaborators was violated.

    Raised for conditions that can only occur through a programming error,
    e.g. a target naming scheme failing or an unhandled product kind.
    """


__all__ = [
    "GraphLoadError",
    "InternalError",
    "RecoverableError",
    "TargetNameUnavailable",
]
