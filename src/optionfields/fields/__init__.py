"""Built-in field types.

- Options: Named tri-state boolean flags
"""

from optionfields.fields.options import OptionsField, OptionsFieldConfig

__all__ = [
    "OptionsField",
    "OptionsFieldConfig",
]
