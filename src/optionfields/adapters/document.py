"""Document-store adapter for Options fields.

The flag set is stored as an open object at the field path. Its inner
keys are not validated, which requires the owning collection to be
non-strict; other fields of the collection stay validated.
"""

from typing import Any

from optionfields.adapters.conditions import get_query_conditions
from optionfields.contracts import Condition, ConditionBuilder, ConditionOp
from optionfields.core import codec
from optionfields.core.documents import DocumentFieldSpec, DocumentSchema
from optionfields.fields.options import OptionsField


class OptionsDocumentAdapter:
    """Bind an Options field to a document collection.

    Conditions compile to Mongo-style query dicts:
        {"flags": {"$eq": {"red": True}}}
    """

    def __init__(self, field: OptionsField, db_path: str | None = None) -> None:
        self.field = field
        self.path = field.path
        self.db_path = db_path or field.path

    def bind_to_document_schema(self, schema: DocumentSchema) -> None:
        """Declare an open object at the path and relax the collection."""
        cfg = self.field.config
        schema.add(
            self.path,
            DocumentFieldSpec(
                kind="object",
                required=cfg.is_required,
                unique=cfg.is_unique,
                index=cfg.is_indexed,
            ),
        )
        schema.set("strict", False)

    def get_query_conditions(self, db_path: str | None = None) -> dict[str, ConditionBuilder]:
        return get_query_conditions(
            self.path, db_path or self.db_path, self.compile_condition
        )

    def compile_condition(self, condition: Condition) -> dict[str, Any]:
        """Mongo-style condition; values are compared in stored form.

        A null membership list compiles to the empty (match-all) condition.
        """
        if condition.op in (ConditionOp.IN, ConditionOp.NOT_IN):
            if condition.value is None:
                return {}
            values = [codec.compact(v) for v in condition.value]
            if condition.op is ConditionOp.IN:
                return {condition.db_path: {"$in": values}}
            return {condition.db_path: {"$not": {"$in": values}}}

        value = codec.compact(condition.value)
        if condition.op is ConditionOp.EQ:
            return {condition.db_path: {"$eq": value}}
        return {condition.db_path: {"$ne": value}}
