"""Base classes for typed field and adapter configurations.

This module provides base classes that field types inherit from to get:
- Strict validation (reject unknown fields)
- Factory methods with clear error messages naming the field
- Common settings shared by every field type

Example usage:
    class OptionsFieldConfig(FieldConfig):
        options: list[str]

    cfg = OptionsFieldConfig.from_dict(config, list_key="User", path="flags")
"""

from typing import Any, Self

from pydantic import BaseModel, ValidationError

from optionfields.contracts import ConfigurationError


class PluginConfig(BaseModel):
    """Base class for typed plugin configurations.

    Provides common validation patterns and helpful error messages.
    All field and adapter configs should inherit from this class.
    """

    model_config = {"extra": "forbid", "frozen": True}  # Reject unknown fields

    @classmethod
    def from_dict(
        cls,
        config: dict[str, Any],
        *,
        list_key: str | None = None,
        path: str | None = None,
    ) -> Self:
        """Create config from dict with clear error on validation failure.

        Args:
            config: Dictionary of configuration values.
            list_key: Owning list, reported in the error.
            path: Field path, reported in the error.

        Returns:
            Validated configuration instance.

        Raises:
            ConfigurationError: If configuration is invalid.
        """
        try:
            return cls(**config)
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid configuration for {cls.__name__}: {e}",
                list_key=list_key,
                path=path,
            ) from e


class FieldConfig(PluginConfig):
    """Settings every field type accepts.

    Type-specific configs subclass this and add their own keys.
    """

    is_required: bool = False
    is_unique: bool = False
    is_indexed: bool = False
    label: str | None = None
    admin_doc: str | None = None
