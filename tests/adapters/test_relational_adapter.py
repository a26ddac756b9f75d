# tests/adapters/test_relational_adapter.py
"""Tests for the relational Options adapter against SQLite."""

from collections.abc import Callable, Iterator
from typing import Any

import pytest
from sqlalchemy import Column, Integer, MetaData, Table, insert, select, text
from sqlalchemy.dialects import postgresql, sqlite

from optionfields.contracts import ConfigurationError


def _table(adapter: Any) -> Table:
    table = Table("sample", MetaData(), Column("id", Integer, primary_key=True))
    adapter.bind_to_table_schema(table)
    return table


class TestAdapterConstraints:
    """Configurations the relational adapter refuses."""

    @pytest.mark.parametrize("setting", ["is_unique", "is_indexed"])
    def test_unique_or_indexed_rejected(
        self, make_options_field: Callable[..., Any], setting: str
    ) -> None:
        from optionfields.adapters.relational import OptionsRelationalAdapter

        field = make_options_field(**{setting: True})
        with pytest.raises(ConfigurationError) as exc_info:
            OptionsRelationalAdapter(field)

        message = str(exc_info.value)
        assert "doesn't support unique or indexed" in message
        assert "colors on the Sample list" in message
        assert exc_info.value.list_key == "Sample"
        assert exc_info.value.path == "colors"

    def test_not_nullable_follows_required(
        self, make_options_field: Callable[..., Any]
    ) -> None:
        from optionfields.adapters.relational import OptionsRelationalAdapter

        assert OptionsRelationalAdapter(make_options_field()).is_not_nullable is False
        assert (
            OptionsRelationalAdapter(make_options_field(is_required=True)).is_not_nullable
            is True
        )

    def test_explicit_not_nullable_wins(self, make_options_field: Callable[..., Any]) -> None:
        from optionfields.adapters.relational import OptionsRelationalAdapter

        field = make_options_field(is_required=True, is_not_nullable=False)
        assert OptionsRelationalAdapter(field).is_not_nullable is False


class TestBindToTableSchema:
    """Column declaration."""

    def test_appends_single_column(self, colors_field: Any) -> None:
        from optionfields.adapters.relational import FlagSetType, OptionsRelationalAdapter

        table = _table(OptionsRelationalAdapter(colors_field))

        assert [c.name for c in table.columns] == ["id", "colors"]
        assert isinstance(table.c.colors.type, FlagSetType)
        assert table.c.colors.nullable is True
        assert table.c.colors.server_default is None

    def test_not_nullable_column(self, make_options_field: Callable[..., Any]) -> None:
        from optionfields.adapters.relational import OptionsRelationalAdapter

        table = _table(OptionsRelationalAdapter(make_options_field(is_not_nullable=True)))
        assert table.c.colors.nullable is False

    def test_server_default_is_canonical_json(
        self, make_options_field: Callable[..., Any]
    ) -> None:
        from optionfields.adapters.relational import OptionsRelationalAdapter

        field = make_options_field(default_to={"red": True, "blue": False})
        table = _table(OptionsRelationalAdapter(field))

        assert table.c.colors.server_default.arg == '{"blue":false,"red":true}'

    def test_custom_db_path(self, colors_field: Any) -> None:
        from optionfields.adapters.relational import OptionsRelationalAdapter

        table = _table(OptionsRelationalAdapter(colors_field, db_path="colors_json"))
        assert "colors_json" in table.c

    def test_column_type_per_dialect(self) -> None:
        from optionfields.adapters.relational import FlagSetType

        flag_type = FlagSetType()
        pg = flag_type.load_dialect_impl(postgresql.dialect())
        lite = flag_type.load_dialect_impl(sqlite.dialect())

        assert isinstance(pg, postgresql.JSONB)
        assert not isinstance(lite, postgresql.JSONB)


@pytest.fixture
def stored_rows(colors_field: Any) -> Iterator[tuple[Any, Table, Any]]:
    """SQLite table holding one row per interesting stored value."""
    from optionfields.adapters.relational import OptionsRelationalAdapter
    from optionfields.core.database import SchemaDB

    adapter = OptionsRelationalAdapter(colors_field)
    table = _table(adapter)
    db = SchemaDB.in_memory(table.metadata)
    with db.connection() as conn:
        conn.execute(
            insert(table),
            [
                {"id": 1, "colors": {"red": True}},
                {"id": 2, "colors": {"green": False, "red": True}},
                {"id": 3, "colors": None},
                {"id": 4, "colors": {"blue": True}},
            ],
        )
    yield adapter, table, db
    db.close()


def _ids(db: Any, table: Table, condition: Any) -> list[int]:
    with db.connection() as conn:
        rows = conn.execute(select(table.c.id).where(condition).order_by(table.c.id))
        return [row.id for row in rows]


class TestStorage:
    """Values written through the column type."""

    def test_round_trip(self, stored_rows: tuple[Any, Table, Any]) -> None:
        _, table, db = stored_rows
        with db.connection() as conn:
            rows = conn.execute(select(table).order_by(table.c.id)).all()

        assert [row.colors for row in rows] == [
            {"red": True},
            {"green": False, "red": True},
            None,
            {"blue": True},
        ]

    def test_stored_text_is_canonical(self, stored_rows: tuple[Any, Table, Any]) -> None:
        _, _, db = stored_rows
        with db.connection() as conn:
            raw = conn.execute(text("SELECT colors FROM sample WHERE id = 2")).scalar_one()

        assert raw == '{"green":false,"red":true}'

    def test_dataframe_missing_flag_not_stored(self, colors_field: Any) -> None:
        import pandas as pd

        from optionfields.adapters.relational import OptionsRelationalAdapter
        from optionfields.core.database import SchemaDB

        table = _table(OptionsRelationalAdapter(colors_field))
        value = colors_field.resolve_input(
            incoming={"red": True, "green": pd.NA}, previous_entity=None
        )
        db = SchemaDB.in_memory(table.metadata)
        with db.connection() as conn:
            conn.execute(insert(table).values(id=1, colors=value))
            raw = conn.execute(text("SELECT colors FROM sample")).scalar_one()
        db.close()

        assert value == {"red": True}
        assert raw == '{"red":true}'

    def test_empty_default_to_stores_null(self, make_options_field: Callable[..., Any]) -> None:
        from optionfields.adapters.relational import OptionsRelationalAdapter
        from optionfields.core.database import SchemaDB

        table = _table(OptionsRelationalAdapter(make_options_field(default_to={})))
        assert table.c.colors.server_default is None

        db = SchemaDB.in_memory(table.metadata)
        with db.connection() as conn:
            conn.execute(insert(table).values(id=1))
            value = conn.execute(select(table.c.colors)).scalar_one()
        db.close()

        assert value is None

    def test_server_default_applied(self, make_options_field: Callable[..., Any]) -> None:
        from optionfields.adapters.relational import OptionsRelationalAdapter
        from optionfields.core.database import SchemaDB

        field = make_options_field(default_to={"red": False})
        table = _table(OptionsRelationalAdapter(field))
        db = SchemaDB.in_memory(table.metadata)
        with db.connection() as conn:
            conn.execute(insert(table).values(id=1))
            value = conn.execute(select(table.c.colors)).scalar_one()
        db.close()

        assert value == {"red": False}


class TestRelationalConditions:
    """Filters executed against stored rows."""

    def test_equals(self, stored_rows: tuple[Any, Table, Any]) -> None:
        adapter, table, db = stored_rows
        conditions = adapter.get_query_conditions()

        assert _ids(db, table, conditions["colors"]({"red": True})) == [1]

    def test_equals_ignores_key_order(self, stored_rows: tuple[Any, Table, Any]) -> None:
        adapter, table, db = stored_rows
        conditions = adapter.get_query_conditions()

        condition = conditions["colors"]({"red": True, "green": False})
        assert _ids(db, table, condition) == [2]

    def test_equals_compacts_value(self, stored_rows: tuple[Any, Table, Any]) -> None:
        adapter, table, db = stored_rows
        conditions = adapter.get_query_conditions()

        condition = conditions["colors"]({"red": True, "green": None, "blue": None})
        assert _ids(db, table, condition) == [1]

    def test_equals_null(self, stored_rows: tuple[Any, Table, Any]) -> None:
        adapter, table, db = stored_rows
        conditions = adapter.get_query_conditions()

        assert _ids(db, table, conditions["colors"](None)) == [3]
        assert _ids(db, table, conditions["colors"]({"red": None})) == [3]

    def test_not_equals_matches_null_rows(self, stored_rows: tuple[Any, Table, Any]) -> None:
        adapter, table, db = stored_rows
        conditions = adapter.get_query_conditions()

        assert _ids(db, table, conditions["colors_not"]({"red": True})) == [2, 3, 4]

    def test_not_null(self, stored_rows: tuple[Any, Table, Any]) -> None:
        adapter, table, db = stored_rows
        conditions = adapter.get_query_conditions()

        assert _ids(db, table, conditions["colors_not"](None)) == [1, 2, 4]

    def test_in(self, stored_rows: tuple[Any, Table, Any]) -> None:
        adapter, table, db = stored_rows
        conditions = adapter.get_query_conditions()

        condition = conditions["colors_in"]([{"red": True}, {"blue": True}])
        assert _ids(db, table, condition) == [1, 4]

    def test_in_with_null(self, stored_rows: tuple[Any, Table, Any]) -> None:
        adapter, table, db = stored_rows
        conditions = adapter.get_query_conditions()

        assert _ids(db, table, conditions["colors_in"]([{"blue": True}, None])) == [3, 4]

    def test_not_in(self, stored_rows: tuple[Any, Table, Any]) -> None:
        adapter, table, db = stored_rows
        conditions = adapter.get_query_conditions()

        assert _ids(db, table, conditions["colors_not_in"]([{"red": True}])) == [2, 3, 4]

    def test_null_membership_list_matches_every_row(
        self, stored_rows: tuple[Any, Table, Any]
    ) -> None:
        adapter, table, db = stored_rows
        conditions = adapter.get_query_conditions()

        assert _ids(db, table, conditions["colors_in"](None)) == [1, 2, 3, 4]
        assert _ids(db, table, conditions["colors_not_in"](None)) == [1, 2, 3, 4]

    def test_not_in_with_null(self, stored_rows: tuple[Any, Table, Any]) -> None:
        adapter, table, db = stored_rows
        conditions = adapter.get_query_conditions()

        condition = conditions["colors_not_in"]([{"red": True}, None])
        assert _ids(db, table, condition) == [2, 4]
