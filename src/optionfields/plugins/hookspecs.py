"""pluggy hook specifications for optionfields plugins.

Plugins implement these hooks to register field types with the framework.
The plugin manager calls these hooks during discovery.

Usage (implementing a plugin):
    from optionfields.plugins.hookspecs import hookimpl

    class MyPlugin:
        @hookimpl  # NOT @hookspec - that's for defining specs
        def optionfields_get_field_types(self):
            return [MY_FIELD_TYPE]

Note: @hookspec defines the hook interface (done here).
      @hookimpl marks plugin implementations of those hooks.
"""

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from optionfields.contracts import FieldType

# Project name for pluggy
PROJECT_NAME = "optionfields"

# Hook specification marker
hookspec = pluggy.HookspecMarker(PROJECT_NAME)

# Hook implementation marker (for plugins to use)
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class OptionFieldsFieldTypeSpec:
    """Hook specifications for field type plugins."""

    @hookspec
    def optionfields_get_field_types(self) -> list["FieldType"]:  # type: ignore[empty-body]
        """Return field type registrations.

        Returns:
            List of FieldType records (implementation + adapters)
        """
