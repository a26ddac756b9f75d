"""Collection schemas for the document-store backend.

A DocumentSchema is the handle document adapters bind fields to. It
records each field's storage declaration and compiles to a Pydantic
model that validates documents before they are written.

Strict collections reject keys that no field declared. A field stored
as an open object relaxes its collection: the object's inner keys are
never validated, while the other fields keep their declared shapes.
"""

from dataclasses import dataclass
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, create_model

from optionfields.contracts import ConfigurationError

DocumentKind = Literal["id", "string", "boolean", "object"]

_KIND_TYPES: dict[str, Any] = {
    "id": str,
    "string": str,
    "boolean": bool,
    "object": dict[str, Any],
}


@dataclass(frozen=True)
class DocumentFieldSpec:
    """Storage declaration of one document field.

    Attributes:
        kind: Value kind stored at the path
        required: Value must be present and non-null
        unique: Collection-level unique index requested
        index: Collection-level index requested
    """

    kind: DocumentKind
    required: bool = False
    unique: bool = False
    index: bool = False


class DocumentSchema:
    """Schema of one document collection.

    Usage:
        schema = DocumentSchema("Sample")
        adapter.bind_to_document_schema(schema)
        Model = schema.model()
        Model.model_validate(document)
    """

    def __init__(self, name: str, *, strict: bool = True) -> None:
        self.name = name
        self.strict = strict
        self.fields: dict[str, DocumentFieldSpec] = {}

    def add(self, path: str, spec: DocumentFieldSpec) -> None:
        """Declare a field.

        Raises:
            ConfigurationError: If the path is already declared
        """
        if path in self.fields:
            raise ConfigurationError(
                f"Field already declared on collection {self.name!r}",
                list_key=self.name,
                path=path,
            )
        self.fields[path] = spec

    def set(self, option: str, value: Any) -> None:
        """Set a collection option. Only "strict" is supported."""
        if option != "strict":
            raise ConfigurationError(
                f"Unknown collection option {option!r}", list_key=self.name
            )
        self.strict = bool(value)

    def indexes(self) -> list[tuple[str, bool]]:
        """(path, unique) for every field requesting an index."""
        return [
            (path, spec.unique)
            for path, spec in self.fields.items()
            if spec.index or spec.unique
        ]

    def model(self) -> type[BaseModel]:
        """Compile to a Pydantic model validating documents of this collection."""
        definitions: dict[str, Any] = {}
        for path, spec in self.fields.items():
            python_type = _KIND_TYPES[spec.kind]
            if spec.required:
                definitions[path] = (python_type, ...)
            else:
                definitions[path] = (python_type | None, None)

        return create_model(  # type: ignore[call-overload,no-any-return]
            f"{self.name}Document",
            __config__=ConfigDict(extra="forbid" if self.strict else "allow"),
            **definitions,
        )

    def validate(self, document: dict[str, Any]) -> dict[str, Any]:
        """Validate a document, returning it as the model dumps it.

        Raises:
            pydantic.ValidationError: If the document does not fit the schema
        """
        return self.model().model_validate(document).model_dump(exclude_unset=True)
