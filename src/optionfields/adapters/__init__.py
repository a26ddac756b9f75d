"""Storage adapters binding field types to backends.

- conditions: Filter-condition builders shared by every adapter
- document: Document-store collections
- relational: SQLAlchemy tables
"""

from optionfields.adapters.conditions import (
    equality_conditions,
    get_query_conditions,
    in_conditions,
)
from optionfields.adapters.document import OptionsDocumentAdapter
from optionfields.adapters.relational import FlagSetType, OptionsRelationalAdapter

__all__ = [
    "FlagSetType",
    "OptionsDocumentAdapter",
    "OptionsRelationalAdapter",
    "equality_conditions",
    "get_query_conditions",
    "in_conditions",
]
