"""Backend-neutral filter conditions.

Condition builders produce these; each backend adapter compiles them into
its native query form (a Mongo-style dict, a SQLAlchemy expression).
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeAlias

from optionfields.contracts.enums import ConditionOp


@dataclass(frozen=True)
class Condition:
    """One filter condition against a stored field.

    Attributes:
        op: Comparison operator
        db_path: Storage path (document key or column name)
        value: Filter value as received from the query
    """

    op: ConditionOp
    db_path: str
    value: Any


ConditionCompiler: TypeAlias = Callable[[Condition], Any]
ConditionBuilder: TypeAlias = Callable[[Any], Any]
