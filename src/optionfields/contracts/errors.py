"""Structured configuration errors.

ConfigurationError is the only error kind raised by field types and
adapters. It is raised while the schema is being assembled, never at
request time, and carries the offending list and field as data.
"""


class ConfigurationError(Exception):
    """Raised when a field, adapter or schema definition is structurally invalid.

    Attributes:
        list_key: Key of the owning list, if known
        path: Field path within the list, if known
    """

    def __init__(
        self,
        message: str,
        *,
        list_key: str | None = None,
        path: str | None = None,
    ) -> None:
        self.message = message
        self.list_key = list_key
        self.path = path
        super().__init__(self._format())

    @property
    def field_ref(self) -> str | None:
        """Dotted "List.path" reference, or None when no field is involved."""
        if self.list_key is None and self.path is None:
            return None
        return f"{self.list_key or '?'}.{self.path or '?'}"

    def _format(self) -> str:
        ref = self.field_ref
        if ref is None:
            return self.message
        return f"{ref}: {self.message}"
