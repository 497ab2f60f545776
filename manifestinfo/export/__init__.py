"""Serialization of manifest info."""

from .json import export_manifest_json

__all__ = ["export_manifest_json"]
