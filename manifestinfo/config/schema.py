"""Configuration schema definitions using Pydantic for validation.

This module provides strongly-typed configuration classes for graph loading
and manifest output. Using Pydantic ensures configuration errors are caught
early with clear error messages.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class GraphLoadConfig(BaseModel):
    """Configuration for reading package graph documents.

    Attributes:
        strict: Fail when a product references a target that no package
            declares, instead of keeping it as an ownerless placeholder.
    """

    strict: bool = False

    model_config = {"extra": "forbid"}


class OutputConfig(BaseModel):
    """Configuration for serializing manifest info.

    Attributes:
        indent: JSON indentation; None writes a single line.
        sort_keys: Sort object keys in the JSON output.
        sort_entries: Order products and targets by package identity and
            name instead of graph iteration order.
    """

    indent: Optional[int] = Field(default=2, ge=0, le=8)
    sort_keys: bool = False
    sort_entries: bool = False

    model_config = {"extra": "forbid"}


class ManifestConfig(BaseModel):
    """Top-level configuration for manifestinfo commands.

    Attributes:
        graph: Package graph loading configuration.
        output: Manifest serialization configuration.
    """

    graph: GraphLoadConfig = Field(default_factory=GraphLoadConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    model_config = {"extra": "forbid"}

    @classmethod
    def default(cls) -> "ManifestConfig":
        """Return configuration with built-in defaults."""
        return cls()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ManifestConfig":
        """Create configuration from dictionary.

        Args:
            data: Configuration dictionary.

        Returns:
            ManifestConfig instance.

        Raises:
            ValidationError: If configuration is invalid.
        """
        return cls.model_validate(data)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return self.model_dump()
