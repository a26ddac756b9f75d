"""Engine and transactions for the tables of an assembled relational schema."""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Self

from sqlalchemy import Connection, MetaData, create_engine
from sqlalchemy.engine import Engine


class SchemaDB:
    """Owns one engine and the metadata of the tables bound to it.

    Usage:
        with SchemaDB("sqlite:///./items.db", schema.metadata) as db:
            db.create_tables()
            with db.connection() as conn:
                conn.execute(insert(table).values(**values))
    """

    def __init__(self, url: str, metadata: MetaData) -> None:
        self.url = url
        self.metadata = metadata
        self._engine: Engine | None = create_engine(url)

    @classmethod
    def in_memory(cls, metadata: MetaData) -> Self:
        """In-memory SQLite database with the tables already created."""
        db = cls("sqlite:///:memory:", metadata)
        db.create_tables()
        return db

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            raise RuntimeError("Database not initialized (closed)")
        return self._engine

    def create_tables(self) -> None:
        """CREATE every table in the metadata that does not exist yet."""
        self.metadata.create_all(self.engine)

    @contextmanager
    def connection(self) -> Iterator[Connection]:
        """Connection inside a transaction; commits on exit, rolls back on error."""
        with self.engine.begin() as conn:
            yield conn

    def close(self) -> None:
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
