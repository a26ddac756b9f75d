"""Plugin manager for field type discovery, registration, and lookup.

Uses pluggy for hook-based plugin registration.
"""

import logging
from typing import Any

import pluggy

from optionfields.contracts import BackendKind, ConfigurationError, FieldType
from optionfields.plugins.hookspecs import PROJECT_NAME, OptionFieldsFieldTypeSpec

logger = logging.getLogger(__name__)


class PluginManager:
    """Manages field type discovery, registration, and lookup.

    Usage:
        manager = PluginManager()
        manager.register_builtin_plugins()

        options = manager.get_field_type("Options")
        adapter = manager.build_adapter("Options", BackendKind.RELATIONAL, field)
    """

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)

        # Register hookspecs
        self._pm.add_hookspecs(OptionFieldsFieldTypeSpec)

        # Cache - map name to field type for duplicate detection
        self._field_types: dict[str, FieldType] = {}

    def register_builtin_plugins(self) -> None:
        """Register all built-in plugin hook implementers.

        Call this once at startup to make built-in field types discoverable.
        """
        from optionfields.fields.hookimpl import builtin_field_types

        self.register(builtin_field_types)

    def register(self, plugin: Any) -> None:
        """Register a plugin.

        Args:
            plugin: Plugin instance implementing hook methods
        """
        self._pm.register(plugin)
        self._refresh_caches()

    def load_entrypoints(self, group: str = PROJECT_NAME) -> int:
        """Register plugins advertised by installed distributions.

        Returns:
            Number of plugins loaded
        """
        count = self._pm.load_setuptools_entrypoints(group)
        self._refresh_caches()
        if count:
            logger.info("Loaded %d field type plugin(s) from entry points", count)
        return count

    def _refresh_caches(self) -> None:
        """Refresh field type cache from hooks.

        Raises:
            ValueError: If a field type with the same name is already registered
        """
        new_field_types: dict[str, FieldType] = {}

        for field_types in self._pm.hook.optionfields_get_field_types():
            for field_type in field_types:
                name = field_type.name
                if name in new_field_types:
                    raise ValueError(
                        f"Duplicate field type name: '{name}'. "
                        f"Already registered by "
                        f"{new_field_types[name].implementation.__name__}"
                    )
                new_field_types[name] = field_type

        # All validated, update cache
        self._field_types = new_field_types
        logger.debug("Field types registered: %s", sorted(new_field_types))

    # === Getters ===

    def get_field_types(self) -> list[FieldType]:
        """Get all registered field types."""
        return list(self._field_types.values())

    def get_field_type(self, name: str) -> FieldType | None:
        """Get field type by name."""
        return self._field_types.get(name)

    # === Adapter selection ===

    def build_adapter(
        self, type_name: str, backend: BackendKind, field: Any
    ) -> Any:
        """Instantiate the adapter a field type registered for a backend.

        Args:
            type_name: Registered field type name
            backend: Storage backend of the owning list
            field: Field implementation instance

        Returns:
            Adapter instance bound to the field

        Raises:
            ConfigurationError: If the type is unknown, has no adapter for the
                backend, or the adapter rejects the field's configuration
        """
        field_type = self._field_types.get(type_name)
        if field_type is None:
            raise ConfigurationError(
                f"Unknown field type {type_name!r}",
                list_key=getattr(field, "list_key", None),
                path=getattr(field, "path", None),
            )
        adapter_cls = field_type.adapters.get(backend)
        if adapter_cls is None:
            raise ConfigurationError(
                f"Field type {type_name!r} has no {backend.value} adapter",
                list_key=getattr(field, "list_key", None),
                path=getattr(field, "path", None),
            )
        return adapter_cls(field)
