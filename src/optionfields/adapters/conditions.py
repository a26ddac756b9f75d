"""Filter-condition builders shared by every backend adapter.

Adapters compose this capability by calling get_query_conditions() with
their own compiler; they don't share a base class. Each builder takes
the filter value from a query and returns the compiled native condition.

    conditions = get_query_conditions("flags", "flags", adapter.compile_condition)
    conditions["flags_in"]([{"red": True}, None])

Only whole-value conditions are produced. There are no per-option
conditions (e.g. "flags_red: true").
"""

from optionfields.contracts import (
    Condition,
    ConditionBuilder,
    ConditionCompiler,
    ConditionOp,
)


def _builder(op: ConditionOp, db_path: str, compile: ConditionCompiler) -> ConditionBuilder:
    def build(value: object) -> object:
        return compile(Condition(op=op, db_path=db_path, value=value))

    return build


def equality_conditions(
    path: str, db_path: str, compile: ConditionCompiler
) -> dict[str, ConditionBuilder]:
    """Builders for "<path>" and "<path>_not"."""
    return {
        path: _builder(ConditionOp.EQ, db_path, compile),
        f"{path}_not": _builder(ConditionOp.NE, db_path, compile),
    }


def in_conditions(
    path: str, db_path: str, compile: ConditionCompiler
) -> dict[str, ConditionBuilder]:
    """Builders for "<path>_in" and "<path>_not_in"."""
    return {
        f"{path}_in": _builder(ConditionOp.IN, db_path, compile),
        f"{path}_not_in": _builder(ConditionOp.NOT_IN, db_path, compile),
    }


def get_query_conditions(
    path: str, db_path: str, compile: ConditionCompiler
) -> dict[str, ConditionBuilder]:
    """Equality and membership builders for one field."""
    return {
        **equality_conditions(path, db_path, compile),
        **in_conditions(path, db_path, compile),
    }
