"""Backend tags and condition operators used across subsystem boundaries.

Every adapter is selected by a BackendKind at schema-assembly time.
There is no "auto" backend - an unknown backend crashes assembly.
"""

from enum import Enum


class BackendKind(str, Enum):
    """Storage backend a list is bound to.

    Uses (str, Enum) because this IS read from the schema definition file.
    """

    DOCUMENT = "document"
    RELATIONAL = "relational"


class ConditionOp(str, Enum):
    """Filter-condition operator produced by the shared condition builders.

    EQ/NE: Compare the whole stored value
    IN/NOT_IN: Membership of the stored value in a list of values

    Per-option conditions do not exist; filters compare the whole flag set.
    """

    EQ = "eq"
    NE = "ne"
    IN = "in"
    NOT_IN = "not_in"
