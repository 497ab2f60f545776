"""Core graph storage APIs."""

from .backend import GraphBackend, NetworkXBackend

__all__ = [
    "GraphBackend",
    "NetworkXBackend",
]
