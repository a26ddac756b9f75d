"""Core infrastructure: Codec, Canonical, Configuration, Documents, Logging."""

from optionfields.core.canonical import (
    CANONICAL_VERSION,
    canonical_json,
    normalize_for_canonical,
    stable_hash,
)
from optionfields.core.codec import (
    compact,
    merge_for_write,
    normalize,
    overlay,
    project_for_read,
    resolve_default,
    resolve_default_async,
)
from optionfields.core.config import (
    DatabaseSettings,
    FieldSettings,
    ListSettings,
    SchemaSettings,
    load_settings,
)
from optionfields.core.documents import DocumentFieldSpec, DocumentSchema
from optionfields.core.logging import (
    configure_logging,
    get_logger,
)

__all__ = [
    "CANONICAL_VERSION",
    "DatabaseSettings",
    "DocumentFieldSpec",
    "DocumentSchema",
    "FieldSettings",
    "ListSettings",
    "SchemaSettings",
    "canonical_json",
    "compact",
    "configure_logging",
    "get_logger",
    "load_settings",
    "merge_for_write",
    "normalize",
    "normalize_for_canonical",
    "overlay",
    "project_for_read",
    "resolve_default",
    "resolve_default_async",
    "stable_hash",
]
