"""
Schema definition settings and loading.

Uses Pydantic for validation and Dynaconf for multi-source loading.
Settings are frozen (immutable) after construction.
"""

import re
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

from optionfields.contracts import BackendKind

# Compiled regex for validating list keys and field paths
_IDENTIFIER_PATTERN = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")


class FieldSettings(BaseModel):
    """One field of a list.

    Only `type` is interpreted here. Every other key is handed to the
    field type, which validates it with its own config model.

    Example YAML:
        colors:
          type: Options
          options: [red, green, blue]
    """

    model_config = {"frozen": True, "extra": "allow"}

    type: str = Field(description="Registered field type name")

    def field_config(self) -> dict[str, Any]:
        """Type-specific configuration (everything except `type`)."""
        return dict(self.model_extra or {})


class ListSettings(BaseModel):
    """One list (entity type) and its fields."""

    model_config = {"frozen": True, "extra": "forbid"}

    item_type_name: str | None = Field(
        default=None,
        description="Schema item type name; derived from the list key if omitted",
    )
    table_name: str | None = Field(
        default=None,
        description="Table or collection name; the list key if omitted",
    )
    fields: dict[str, FieldSettings] = Field(
        default_factory=dict,
        description="Field path -> field settings",
    )

    @field_validator("fields")
    @classmethod
    def validate_field_paths(
        cls, v: dict[str, FieldSettings]
    ) -> dict[str, FieldSettings]:
        """Field paths must be identifiers; "id" is reserved."""
        for path in v:
            if not _IDENTIFIER_PATTERN.match(path):
                raise ValueError(f"Field path '{path}' is not a valid identifier")
            if path == "id":
                raise ValueError("Field path 'id' is reserved")
        return v


class DatabaseSettings(BaseModel):
    """Relational database connection used by `optionfields ddl`."""

    model_config = {"frozen": True}

    url: str = Field(
        default="sqlite:///:memory:",
        description="SQLAlchemy connection URL",
    )


class SchemaSettings(BaseModel):
    """Top-level schema definition.

    All settings are validated and frozen after construction.
    """

    model_config = {"frozen": True}

    backend: BackendKind = Field(
        default=BackendKind.RELATIONAL,
        description="Storage backend every list is bound to",
    )
    database: DatabaseSettings = Field(
        default_factory=DatabaseSettings,
        description="Database connection for the relational backend",
    )
    lists: dict[str, ListSettings] = Field(
        description="List key -> list definition (one or more required)",
    )

    @field_validator("lists")
    @classmethod
    def validate_lists(cls, v: dict[str, ListSettings]) -> dict[str, ListSettings]:
        """At least one list is required and keys must be identifiers."""
        if not v:
            raise ValueError("At least one list is required")
        for key in v:
            if not _IDENTIFIER_PATTERN.match(key):
                raise ValueError(f"List key '{key}' is not a valid identifier")
        return v


def load_settings(config_path: Path) -> SchemaSettings:
    """Load a schema definition from YAML with environment variable overrides.

    Uses Dynaconf for multi-source loading with precedence:
    1. Environment variables (OPTIONFIELDS_*) - highest priority
    2. Config file
    3. Defaults from Pydantic schema - lowest priority

    Environment variable format: OPTIONFIELDS_DATABASE__URL for nested keys.

    Args:
        config_path: Path to YAML schema definition

    Returns:
        Validated SchemaSettings instance

    Raises:
        FileNotFoundError: If the file does not exist
        ValidationError: If the definition is invalid
    """
    from dynaconf import Dynaconf

    # Explicit check for file existence (Dynaconf silently accepts missing files)
    if not config_path.exists():
        raise FileNotFoundError(f"Schema file not found: {config_path}")

    dynaconf_settings = Dynaconf(
        envvar_prefix="OPTIONFIELDS",
        settings_files=[str(config_path)],
        environments=False,  # No [default]/[production] sections
        load_dotenv=False,  # Don't auto-load .env
        merge_enabled=True,  # Deep merge nested dicts
    )

    # Dynaconf returns uppercase keys; convert to lowercase for Pydantic
    # Also filter out internal Dynaconf settings
    internal_keys = {"LOAD_DOTENV", "ENVIRONMENTS", "SETTINGS_FILES"}
    raw_config = {
        k.lower(): v
        for k, v in dynaconf_settings.as_dict().items()
        if k not in internal_keys
    }
    return SchemaSettings(**raw_config)
