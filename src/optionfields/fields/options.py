"""Options field type.

A fixed, ordered set of named boolean flags stored per item. Each flag is
tri-state: True, False, or not recorded. Only recorded flags are stored;
reads always enumerate every declared option.

Example definition:
    colors:
      type: Options
      options: [red, green, blue]
      default_value: {red: true}
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import Field, field_validator, model_validator

from optionfields.contracts import (
    ABSENT,
    ConfigurationError,
    FieldInput,
    FlagSet,
    WriteContext,
)
from optionfields.core import codec
from optionfields.core.canonical import stable_hash
from optionfields.fields.base import (
    IDENTIFIER_PATTERN,
    ITEM_TYPE_NAME_PATTERN,
    base_admin_meta,
    equality_input_fields,
    humanize,
    in_input_fields,
)
from optionfields.plugins.config_base import FieldConfig


class OptionsFieldConfig(FieldConfig):
    """Configuration for an Options field.

    Storage-level settings (is_not_nullable, default_to) only apply to
    the relational backend.
    """

    options: list[str]
    default_value: dict[str, bool | None] | Callable[..., Any] | None = None
    is_not_nullable: bool | None = None
    default_to: dict[str, bool] | None = None

    @field_validator("options")
    @classmethod
    def validate_options(cls, v: list[str]) -> list[str]:
        """Options must be a non-empty, duplicate-free list of identifiers."""
        if not v:
            raise ValueError("options cannot be empty")
        seen: set[str] = set()
        for name in v:
            if not IDENTIFIER_PATTERN.match(name):
                raise ValueError(f"option {name!r} is not a valid identifier")
            if name in seen:
                raise ValueError(f"duplicate option {name!r}")
            seen.add(name)
        return v

    @model_validator(mode="after")
    def validate_default_keys(self) -> "OptionsFieldConfig":
        """Static defaults may only name declared options."""
        declared = set(self.options)
        for setting in ("default_value", "default_to"):
            value = getattr(self, setting)
            if isinstance(value, Mapping):
                unknown = sorted(set(value) - declared)
                if unknown:
                    raise ValueError(f"{setting} names undeclared options: {unknown}")
        return self


@dataclass(frozen=True)
class OptionsField:
    """Descriptor for one Options field on one list.

    Immutable once built. Schema type names are derived from the item type
    name and the path, so two fields can only share a type name if they
    share both.
    """

    path: str
    list_key: str
    item_type_name: str
    options: tuple[str, ...]
    config: OptionsFieldConfig

    type_name = "Options"

    @classmethod
    def build(
        cls,
        path: str,
        config: dict[str, Any],
        *,
        list_key: str,
        item_type_name_for: Callable[[str], str],
    ) -> "OptionsField":
        """Validate configuration and create the descriptor.

        Args:
            path: Field path within the list
            config: Raw field configuration
            list_key: Key of the owning list
            item_type_name_for: Name provider returning the list's item type name

        Returns:
            OptionsField

        Raises:
            ConfigurationError: If options are not a list of unique
                identifiers, or the path/item type name cannot form type names
        """
        options = config.get("options")
        if not isinstance(options, (list, tuple)):
            raise ConfigurationError(
                "The Options field is not configured with valid options "
                f"(expected a list of names, got {type(options).__name__})",
                list_key=list_key,
                path=path,
            )
        if not IDENTIFIER_PATTERN.match(path):
            raise ConfigurationError(
                f"Field path {path!r} is not a valid identifier",
                list_key=list_key,
                path=path,
            )

        cfg = OptionsFieldConfig.from_dict(
            {**config, "options": list(options)},
            list_key=list_key,
            path=path,
        )

        item_type_name = item_type_name_for(list_key)
        if not ITEM_TYPE_NAME_PATTERN.match(item_type_name):
            raise ConfigurationError(
                f"Item type name {item_type_name!r} must be alphanumeric "
                "and start with a letter",
                list_key=list_key,
                path=path,
            )

        return cls(
            path=path,
            list_key=list_key,
            item_type_name=item_type_name,
            options=tuple(cfg.options),
            config=cfg,
        )

    # === Type names ===

    @property
    def output_type_name(self) -> str:
        return f"Options{self.item_type_name}_{self.path}"

    @property
    def input_type_name(self) -> str:
        return f"Options{self.item_type_name}Input_{self.path}"

    # === Schema contribution ===

    def schema_type_declarations(self) -> list[str]:
        """Output object type and input object type, one Boolean per option."""
        body = "".join(f"  {name}: Boolean\n" for name in self.options)
        return [
            f"type {self.output_type_name} {{\n{body}}}",
            f"input {self.input_type_name} {{\n{body}}}",
        ]

    def output_field(self) -> str:
        return f"{self.path}: {self.output_type_name}"

    def output_field_resolver(self, item: Mapping[str, Any]) -> FlagSet:
        """Every declared option with True, False or None."""
        return codec.project_for_read(self.options, item.get(self.path))

    def query_filter_fields(self) -> list[str]:
        """Equality and membership filters over the whole flag set.

        Filters on individual options are not offered.
        """
        return [
            *equality_input_fields(self.path, self.input_type_name),
            *in_input_fields(self.path, self.input_type_name),
        ]

    def update_input_field(self) -> str:
        return f"{self.path}: {self.input_type_name}"

    def create_input_field(self) -> str:
        return f"{self.path}: {self.input_type_name}"

    # === Presentation ===

    def extend_admin_meta(self, meta: Mapping[str, Any]) -> dict[str, Any]:
        """New meta built from the base meta plus the option names.

        Built from the base meta alone: additions other field kinds make
        for presentation (multiline text, sorting) never apply here.
        """
        return {**meta, "options": list(self.options)}

    def admin_meta(self) -> dict[str, Any]:
        base = base_admin_meta(
            path=self.path,
            type_name=self.type_name,
            label=self.config.label or humanize(self.path),
            is_required=self.config.is_required,
            default_value=self.config.default_value,
            admin_doc=self.config.admin_doc,
        )
        return self.extend_admin_meta(base)

    # === Write path ===

    def get_default_value(self, ctx: WriteContext) -> FlagSet:
        return codec.resolve_default(self.options, self.config.default_value, ctx)

    async def get_default_value_async(self, ctx: WriteContext) -> FlagSet:
        return await codec.resolve_default_async(
            self.options, self.config.default_value, ctx
        )

    def resolve_input(
        self,
        *,
        incoming: FieldInput,
        previous_entity: Mapping[str, Any] | None,
    ) -> FieldInput:
        """Value to persist, None to clear, or ABSENT to leave untouched.

        Args:
            incoming: Value supplied by the write for this field
            previous_entity: Stored item being updated, None on create
        """
        previous = ABSENT
        if previous_entity is not None:
            previous = previous_entity.get(self.path, ABSENT)
        return codec.merge_for_write(self.options, previous, incoming)

    def fingerprint(self) -> str:
        """Stable hash of what determines this field's schema and storage."""
        return stable_hash(
            {
                "type": self.type_name,
                "list": self.list_key,
                "path": self.path,
                "options": list(self.options),
            }
        )
