"""Shared contracts for cross-boundary data types.

All dataclasses, enums and sentinels that cross subsystem boundaries
(codec, field types, adapters, assembler) are defined here.

Import pattern:
    from optionfields.contracts import ABSENT, BackendKind, ConfigurationError
"""

from optionfields.contracts.conditions import (
    Condition,
    ConditionBuilder,
    ConditionCompiler,
)
from optionfields.contracts.enums import BackendKind, ConditionOp
from optionfields.contracts.errors import ConfigurationError
from optionfields.contracts.field_type import FieldType
from optionfields.contracts.flags import (
    ABSENT,
    DefaultFactory,
    DefaultSpec,
    FieldInput,
    Flags,
    FlagSet,
    FlagValue,
    WriteContext,
)

__all__ = [  # Grouped by category for readability
    # Flags
    "ABSENT",
    "DefaultFactory",
    "DefaultSpec",
    "FieldInput",
    "FlagSet",
    "FlagValue",
    "Flags",
    "WriteContext",
    # Conditions
    "Condition",
    "ConditionBuilder",
    "ConditionCompiler",
    # Enums
    "BackendKind",
    "ConditionOp",
    # Errors
    "ConfigurationError",
    # Plugins
    "FieldType",
]
