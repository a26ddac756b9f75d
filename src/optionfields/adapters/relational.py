"""Relational-table adapter for Options fields.

The flag set is stored in a single encoded column: canonical JSON text,
or JSONB on PostgreSQL. Encoded values cannot be indexed meaningfully by
this adapter, so unique/indexed configurations are rejected when the
adapter is built, before any table is emitted.
"""

import json
from typing import Any

from sqlalchemy import ColumnElement, Table, Text, and_, column, or_, true
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.engine import Dialect
from sqlalchemy.schema import Column
from sqlalchemy.types import TypeDecorator, TypeEngine

from optionfields.adapters.conditions import get_query_conditions
from optionfields.contracts import (
    Condition,
    ConditionBuilder,
    ConditionOp,
    ConfigurationError,
)
from optionfields.core import codec
from optionfields.core.canonical import canonical_json, normalize_for_canonical
from optionfields.fields.options import OptionsField


class FlagSetType(TypeDecorator[dict[str, Any]]):
    """Flag set stored as canonical JSON.

    Canonical encoding makes equal flag sets byte-equal, so equality and
    membership filters work on plain text columns.
    """

    impl = Text
    cache_ok = True

    def load_dialect_impl(self, dialect: Dialect) -> TypeEngine[Any]:
        if dialect.name == "postgresql":
            return dialect.type_descriptor(JSONB())
        return dialect.type_descriptor(Text())

    def process_bind_param(self, value: Any, dialect: Dialect) -> Any:
        if value is None:
            return None
        if dialect.name == "postgresql":
            return normalize_for_canonical(value)
        return canonical_json(value)

    def process_result_value(self, value: Any, dialect: Dialect) -> Any:
        if value is None or dialect.name == "postgresql":
            return value
        return json.loads(value)


class OptionsRelationalAdapter:
    """Bind an Options field to a SQLAlchemy table.

    Conditions compile to SQLAlchemy expressions with document-store
    semantics for NULL: "_not" and "_not_in" match rows storing NULL
    unless None is among the compared values.
    """

    def __init__(self, field: OptionsField, db_path: str | None = None) -> None:
        cfg = field.config

        # Error rather than ignoring invalid config
        if cfg.is_unique or cfg.is_indexed:
            raise ConfigurationError(
                "The Options field type doesn't support unique or indexed "
                "columns on relational tables. "
                f"Check the config for {field.path} on the {field.list_key} list",
                list_key=field.list_key,
                path=field.path,
            )

        self.field = field
        self.path = field.path
        self.db_path = db_path or field.path
        self.is_not_nullable = (
            cfg.is_not_nullable if cfg.is_not_nullable is not None else cfg.is_required
        )
        # An empty default has no stored form
        self.default_to = codec.compact(cfg.default_to)

    def bind_to_table_schema(self, table: Table) -> None:
        """Append the encoded column to the table."""
        server_default = None
        if self.default_to is not None:
            server_default = canonical_json(self.default_to)
        table.append_column(
            Column(
                self.db_path,
                FlagSetType(),
                nullable=not self.is_not_nullable,
                server_default=server_default,
            )
        )

    def get_query_conditions(self, db_path: str | None = None) -> dict[str, ConditionBuilder]:
        return get_query_conditions(
            self.path, db_path or self.db_path, self.compile_condition
        )

    def compile_condition(self, condition: Condition) -> ColumnElement[bool]:
        """SQLAlchemy expression; values are compared in stored form.

        A null membership list places no constraint on the rows.
        """
        col = column(condition.db_path, FlagSetType())

        if condition.op in (ConditionOp.IN, ConditionOp.NOT_IN):
            if condition.value is None:
                return true()
            values = [codec.compact(v) for v in condition.value]
            present = [v for v in values if v is not None]
            has_null = len(present) != len(values)
            if condition.op is ConditionOp.IN:
                if has_null:
                    return or_(col.in_(present), col.is_(None))
                return col.in_(present)
            if has_null:
                return and_(col.not_in(present), col.is_not(None))
            return or_(col.not_in(present), col.is_(None))

        value = codec.compact(condition.value)
        if condition.op is ConditionOp.EQ:
            if value is None:
                return col.is_(None)
            return col == value
        if value is None:
            return col.is_not(None)
        return or_(col != value, col.is_(None))
