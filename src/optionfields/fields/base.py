"""Schema helpers shared by field implementations.

Field types call these directly; there is no field base class to inherit.
"""

import re
from typing import Any

# Names valid as schema field/type identifiers
IDENTIFIER_PATTERN = re.compile(r"^[_A-Za-z][_0-9A-Za-z]*$")

# Item type names are joined to paths with "_", so they may not contain one
ITEM_TYPE_NAME_PATTERN = re.compile(r"^[A-Za-z][0-9A-Za-z]*$")


def humanize(path: str) -> str:
    """Default label for a field path: "favourite_colors" -> "Favourite colors"."""
    words = re.sub(r"([a-z0-9])([A-Z])", r"\1 \2", path).replace("_", " ").split()
    if not words:
        return path
    text = " ".join(words).lower()
    return text[0].upper() + text[1:]


def equality_input_fields(path: str, type_name: str) -> list[str]:
    """Where-input declarations for whole-value equality."""
    return [f"{path}: {type_name}", f"{path}_not: {type_name}"]


def in_input_fields(path: str, type_name: str) -> list[str]:
    """Where-input declarations for membership in a list of values."""
    return [f"{path}_in: [{type_name}]", f"{path}_not_in: [{type_name}]"]


def base_admin_meta(
    *,
    path: str,
    type_name: str,
    label: str,
    is_required: bool,
    default_value: Any,
    admin_doc: str | None,
) -> dict[str, Any]:
    """Presentation metadata every field type starts from.

    Callable defaults are not serializable and are reported as None.
    """
    return {
        "path": path,
        "type": type_name,
        "label": label,
        "is_required": is_required,
        "default_value": None if callable(default_value) else default_value,
        "admin_doc": admin_doc,
    }
