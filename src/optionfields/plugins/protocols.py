"""Protocols defining the contracts for field types and their adapters.

These protocols define what a field type plugin must implement.
They're used for type checking, not runtime enforcement (that's pluggy's job).

Plugin parts:
- Implementation: Schema contribution and write path for one field instance
- DocumentAdapter: Binds a field to a document collection schema
- RelationalAdapter: Binds a field to a SQLAlchemy table
"""

from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from optionfields.contracts import ConditionBuilder, FieldInput, WriteContext

if TYPE_CHECKING:
    from sqlalchemy import Table

    from optionfields.core.documents import DocumentSchema


@runtime_checkable
class FieldImplementationProtocol(Protocol):
    """Protocol for field implementations.

    One instance exists per declared field. Instances are built once
    while the schema is assembled and are immutable afterwards.

    Lifecycle:
    1. build(path, config, list_key=..., item_type_name_for=...) - may raise
       ConfigurationError
    2. Schema contribution methods - called once by the assembler
    3. get_default_value / resolve_input - called per write
    """

    path: str
    list_key: str

    @classmethod
    def build(
        cls,
        path: str,
        config: dict[str, Any],
        *,
        list_key: str,
        item_type_name_for: Callable[[str], str],
    ) -> "FieldImplementationProtocol":
        """Validate config and create the field."""
        ...

    # === Schema contribution ===

    def schema_type_declarations(self) -> list[str]:
        """Auxiliary type bodies this field needs in the schema."""
        ...

    def output_field(self) -> str:
        """Field declaration on the item output type."""
        ...

    def output_field_resolver(self, item: Mapping[str, Any]) -> Any:
        """Project a stored item into this field's output value."""
        ...

    def query_filter_fields(self) -> list[str]:
        """Field declarations on the list's where-input type."""
        ...

    def update_input_field(self) -> str:
        """Field declaration on the update input type."""
        ...

    def create_input_field(self) -> str:
        """Field declaration on the create input type."""
        ...

    def admin_meta(self) -> dict[str, Any]:
        """Metadata for presentation layers."""
        ...

    # === Write path ===

    def get_default_value(self, ctx: WriteContext) -> Any:
        """Value used when a create does not supply this field."""
        ...

    def resolve_input(
        self,
        *,
        incoming: FieldInput,
        previous_entity: Mapping[str, Any] | None,
    ) -> FieldInput:
        """Value to persist for this field, or ABSENT to leave it untouched."""
        ...


@runtime_checkable
class DocumentAdapterProtocol(Protocol):
    """Protocol for document-store adapters."""

    path: str

    def bind_to_document_schema(self, schema: "DocumentSchema") -> None:
        """Declare the field on a collection schema."""
        ...

    def get_query_conditions(self, db_path: str) -> dict[str, ConditionBuilder]:
        """Filter name -> builder producing a Mongo-style condition."""
        ...


@runtime_checkable
class RelationalAdapterProtocol(Protocol):
    """Protocol for relational-table adapters."""

    path: str

    def bind_to_table_schema(self, table: "Table") -> None:
        """Declare the field's column(s) on a table."""
        ...

    def get_query_conditions(self, db_path: str) -> dict[str, ConditionBuilder]:
        """Filter name -> builder producing a SQLAlchemy expression."""
        ...
