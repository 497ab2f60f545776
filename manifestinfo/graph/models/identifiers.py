"""Helpers for stable package graph node identifiers.

Identifiers are namespaced by node type so that a package, a target and a
product sharing the same name never collide::

    package:<identity>
    target:<identity>/<name>      (owned target)
    target:unresolved:<name>      (provisional, ownerless target)
    product:<identity>/<name>
"""

from __future__ import annotations

from typing import Optional


def _sanitize_fragment(raw: str) -> str:
    """Normalize a fragment so it can safely appear inside node IDs."""
    text = str(raw).strip().replace("\\", "/")
    if not text:
        raise ValueError("Identifier fragments must be non-empty")
    return text


def make_package_id(identity: str) -> str:
    """Build the node id for a package."""
    return f"package:{_sanitize_fragment(identity).lower()}"


def make_target_id(name: str, package_identity: Optional[str] = None) -> str:
    """Build the node id for a target, optionally scoped by its package."""
    if package_identity is None:
        return f"target:unresolved:{_sanitize_fragment(name)}"
    scope = _sanitize_fragment(package_identity).lower()
    return f"target:{scope}/{_sanitize_fragment(name)}"


def make_product_id(name: str, package_identity: str) -> str:
    """Build the node id for a product scoped by its package."""
    scope = _sanitize_fragment(package_identity).lower()
    return f"product:{scope}/{_sanitize_fragment(name)}"


__all__ = ["make_package_id", "make_product_id", "make_target_id"]
