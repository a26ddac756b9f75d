"""Registration record for a field type plugin."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from optionfields.contracts.enums import BackendKind


@dataclass(frozen=True)
class FieldType:
    """A field type as registered through the plugin hooks.

    Bundles the implementation (schema contribution and write path) with
    one adapter class per supported storage backend. Frozen - field types
    don't change after registration.

    Example:
        Options = FieldType(
            name="Options",
            implementation=OptionsField,
            adapters={
                BackendKind.DOCUMENT: OptionsDocumentAdapter,
                BackendKind.RELATIONAL: OptionsRelationalAdapter,
            },
        )
    """

    name: str
    implementation: type[Any]
    adapters: Mapping[BackendKind, type[Any]] = field(default_factory=dict)
    description: str = ""

    def supports(self, backend: BackendKind) -> bool:
        """Whether an adapter is registered for the backend."""
        return backend in self.adapters
