"""Flag set value types and the ABSENT sentinel.

A flag set maps option names to True, False or None. Three states of a
whole field value cross every boundary and must never be collapsed:

- ABSENT: the write did not mention the field at all (leave it alone)
- None:   the write explicitly cleared the field
- dict:   the write supplied flags to merge
"""

from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, Final, TypeAlias


class _Absent:
    """Type of the ABSENT singleton."""

    _instance: "_Absent | None" = None

    def __new__(cls) -> "_Absent":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> str:
        return "ABSENT"


ABSENT: Final = _Absent()

FlagValue: TypeAlias = bool | None
FlagSet: TypeAlias = dict[str, FlagValue]
Flags: TypeAlias = Mapping[str, FlagValue]

# What a write may carry for one field
FieldInput: TypeAlias = Flags | None | _Absent


@dataclass(frozen=True)
class WriteContext:
    """Arguments handed to a default-value callable when an item is created.

    Attributes:
        context: Opaque request context owned by the caller
        original_input: Raw create input as received
        actions: Pending actions of the mutation pipeline
    """

    context: Any = None
    original_input: Mapping[str, Any] = field(default_factory=dict)
    actions: Mapping[str, Any] = field(default_factory=dict)


DefaultFactory: TypeAlias = Callable[[WriteContext], Flags | Awaitable[Flags]]
DefaultSpec: TypeAlias = Flags | DefaultFactory | None
