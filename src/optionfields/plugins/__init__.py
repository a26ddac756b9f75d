"""Plugin system: field types and their storage adapters via pluggy.

This module provides the plugin infrastructure for optionfields:

- Protocols: Type contracts for field implementations and adapters
- Config base classes: Strict Pydantic configs with structured errors
- Manager: Field type registration, lookup and adapter selection
- Hookspecs: pluggy hook definitions
"""

from optionfields.plugins.config_base import FieldConfig, PluginConfig
from optionfields.plugins.hookspecs import hookimpl, hookspec
from optionfields.plugins.manager import PluginManager
from optionfields.plugins.protocols import (
    DocumentAdapterProtocol,
    FieldImplementationProtocol,
    RelationalAdapterProtocol,
)

__all__ = [  # Grouped by category for readability
    # Config base classes
    "FieldConfig",
    "PluginConfig",
    # Manager
    "PluginManager",
    # Hookspecs
    "hookimpl",
    "hookspec",
    # Protocols
    "DocumentAdapterProtocol",
    "FieldImplementationProtocol",
    "RelationalAdapterProtocol",
]
