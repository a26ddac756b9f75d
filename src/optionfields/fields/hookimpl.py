"""Hook implementation for built-in field types."""

from optionfields.contracts import FieldType
from optionfields.plugins.hookspecs import hookimpl


class OptionFieldsBuiltinFieldTypes:
    """Hook implementer for built-in field types."""

    @hookimpl
    def optionfields_get_field_types(self) -> list[FieldType]:
        """Return built-in field types."""
        from optionfields.adapters.document import OptionsDocumentAdapter
        from optionfields.adapters.relational import OptionsRelationalAdapter
        from optionfields.contracts import BackendKind
        from optionfields.fields.options import OptionsField

        return [
            FieldType(
                name=OptionsField.type_name,
                implementation=OptionsField,
                adapters={
                    BackendKind.DOCUMENT: OptionsDocumentAdapter,
                    BackendKind.RELATIONAL: OptionsRelationalAdapter,
                },
                description="Named tri-state boolean flags",
            )
        ]


# Singleton instance for registration
builtin_field_types = OptionFieldsBuiltinFieldTypes()
