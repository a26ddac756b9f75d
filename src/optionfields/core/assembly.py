"""Reference schema assembler.

Plays the outer compiler's role for a schema definition: builds one field
implementation per declared field through the plugin manager, binds each
to the configured backend, collects schema text, and runs the create and
update write paths. Any ConfigurationError stops assembly.

Usage:
    settings = load_settings(Path("schema.yaml"))
    schema = SchemaAssembler(settings).assemble()
    print(schema.sdl())
    values = schema.resolve_create("Sample", {"colors": {"red": True}})
"""

import re
from collections import Counter
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy import Column, Integer, MetaData, Table

from optionfields.contracts import ABSENT, BackendKind, ConfigurationError, WriteContext
from optionfields.core.canonical import stable_hash
from optionfields.core.config import SchemaSettings
from optionfields.core.documents import DocumentFieldSpec, DocumentSchema
from optionfields.core.logging import get_logger
from optionfields.plugins.manager import PluginManager

logger = get_logger("assembly")


def default_item_type_name(list_key: str) -> str:
    """Item type name derived from a list key: "blog_post" -> "Blogpost"."""
    name = re.sub(r"[^0-9A-Za-z]", "", list_key)
    return name[:1].upper() + name[1:]


def _declared_name(declaration: str) -> str:
    """Type name of a "type X {" / "input X {" declaration."""
    return declaration.split()[1]


@dataclass
class AssembledList:
    """One list after assembly: fields, adapters and storage handle."""

    key: str
    item_type_name: str
    storage_name: str
    fields: dict[str, Any] = field(default_factory=dict)
    adapters: dict[str, Any] = field(default_factory=dict)

    def type_declarations(self) -> list[str]:
        """Item output type plus where/update/create input types."""
        output = ["  id: ID!"] + [f"  {f.output_field()}" for f in self.fields.values()]
        where = [
            f"  {decl}" for f in self.fields.values() for decl in f.query_filter_fields()
        ]
        update = [f"  {f.update_input_field()}" for f in self.fields.values()]
        create = [f"  {f.create_input_field()}" for f in self.fields.values()]

        def block(keyword: str, name: str, lines: list[str]) -> str:
            return f"{keyword} {name} {{\n" + "".join(line + "\n" for line in lines) + "}"

        name = self.item_type_name
        declarations = [block("type", name, output)]
        # An input object type needs at least one field
        if self.fields:
            declarations.append(block("input", f"{name}WhereInput", where))
            declarations.append(block("input", f"{name}UpdateInput", update))
            declarations.append(block("input", f"{name}CreateInput", create))
        return declarations

    def aux_declarations(self) -> list[str]:
        return [decl for f in self.fields.values() for decl in f.schema_type_declarations()]


@dataclass
class AssembledSchema:
    """Result of assembling a schema definition."""

    backend: BackendKind
    lists: dict[str, AssembledList]
    metadata: MetaData | None = None
    documents: dict[str, DocumentSchema] = field(default_factory=dict)

    def _list(self, list_key: str) -> AssembledList:
        try:
            return self.lists[list_key]
        except KeyError:
            raise KeyError(f"Unknown list: {list_key!r}") from None

    # === Schema text ===

    def type_declarations(self) -> list[str]:
        declarations: list[str] = []
        for assembled in self.lists.values():
            declarations.extend(assembled.aux_declarations())
            declarations.extend(assembled.type_declarations())
        return declarations

    def sdl(self) -> str:
        return "\n\n".join(self.type_declarations()) + "\n"

    def admin_meta(self, list_key: str) -> list[dict[str, Any]]:
        return [f.admin_meta() for f in self._list(list_key).fields.values()]

    def fingerprint(self) -> str:
        """Stable hash over the backend and every field's fingerprint."""
        return stable_hash(
            {
                "backend": self.backend.value,
                "fields": {
                    key: {path: f.fingerprint() for path, f in assembled.fields.items()}
                    for key, assembled in self.lists.items()
                },
            }
        )

    # === Write path ===

    def _check_input(self, assembled: AssembledList, data: Mapping[str, Any]) -> None:
        unknown = sorted(set(data) - set(assembled.fields))
        if unknown:
            raise ValueError(f"Unknown fields for {assembled.key}: {unknown}")

    def resolve_create(
        self,
        list_key: str,
        data: Mapping[str, Any],
        ctx: WriteContext | None = None,
    ) -> dict[str, Any]:
        """Values to insert for a new item.

        Fields missing from data take their default value first, then go
        through the same input resolution as updates.
        """
        assembled = self._list(list_key)
        self._check_input(assembled, data)
        ctx = ctx or WriteContext(original_input=data)

        resolved: dict[str, Any] = {}
        for path, impl in assembled.fields.items():
            incoming = data.get(path, ABSENT)
            if incoming is ABSENT:
                incoming = impl.get_default_value(ctx)
            value = impl.resolve_input(incoming=incoming, previous_entity=None)
            if value is not ABSENT:
                resolved[path] = value
        return resolved

    async def resolve_create_async(
        self,
        list_key: str,
        data: Mapping[str, Any],
        ctx: WriteContext | None = None,
    ) -> dict[str, Any]:
        """resolve_create for fields whose defaults may be asynchronous."""
        assembled = self._list(list_key)
        self._check_input(assembled, data)
        ctx = ctx or WriteContext(original_input=data)

        resolved: dict[str, Any] = {}
        for path, impl in assembled.fields.items():
            incoming = data.get(path, ABSENT)
            if incoming is ABSENT:
                get_async = getattr(impl, "get_default_value_async", None)
                if get_async is not None:
                    incoming = await get_async(ctx)
                else:
                    incoming = impl.get_default_value(ctx)
            value = impl.resolve_input(incoming=incoming, previous_entity=None)
            if value is not ABSENT:
                resolved[path] = value
        return resolved

    def resolve_update(
        self,
        list_key: str,
        data: Mapping[str, Any],
        existing: Mapping[str, Any],
    ) -> dict[str, Any]:
        """Values to write for an update; untouched fields are left out."""
        assembled = self._list(list_key)
        self._check_input(assembled, data)

        resolved: dict[str, Any] = {}
        for path, impl in assembled.fields.items():
            value = impl.resolve_input(
                incoming=data.get(path, ABSENT), previous_entity=existing
            )
            if value is not ABSENT:
                resolved[path] = value
        return resolved

    # === Read path ===

    def resolve_output(self, list_key: str, item: Mapping[str, Any]) -> dict[str, Any]:
        """Project a stored item into its output shape."""
        assembled = self._list(list_key)
        output: dict[str, Any] = {"id": item.get("id")}
        for path, impl in assembled.fields.items():
            output[path] = impl.output_field_resolver(item)
        return output

    def filter_conditions(self, list_key: str, where: Mapping[str, Any]) -> list[Any]:
        """Compile a where-input into native conditions (ANDed by the caller)."""
        assembled = self._list(list_key)
        builders: dict[str, Any] = {}
        for adapter in assembled.adapters.values():
            builders.update(adapter.get_query_conditions(adapter.db_path))

        compiled = []
        for name, value in where.items():
            if name not in builders:
                raise ValueError(f"Unknown filter for {list_key}: {name!r}")
            compiled.append(builders[name](value))
        return compiled


class SchemaAssembler:
    """Build an AssembledSchema from validated settings."""

    def __init__(
        self,
        settings: SchemaSettings,
        manager: PluginManager | None = None,
    ) -> None:
        self.settings = settings
        if manager is None:
            manager = PluginManager()
            manager.register_builtin_plugins()
        self.manager = manager

    def item_type_name_for(self, list_key: str) -> str:
        """Name provider handed to field implementations."""
        configured = self.settings.lists[list_key].item_type_name
        return configured or default_item_type_name(list_key)

    def assemble(self) -> AssembledSchema:
        """Build fields, bind adapters, and check schema-wide type names.

        Raises:
            ConfigurationError: On any invalid field, adapter or name collision
        """
        backend = self.settings.backend
        metadata = MetaData() if backend is BackendKind.RELATIONAL else None
        schema = AssembledSchema(backend=backend, lists={}, metadata=metadata)

        for list_key, list_settings in self.settings.lists.items():
            assembled = AssembledList(
                key=list_key,
                item_type_name=self.item_type_name_for(list_key),
                storage_name=list_settings.table_name or list_key,
            )
            handle = self._storage_handle(schema, assembled)

            for path, field_settings in list_settings.fields.items():
                field_type = self.manager.get_field_type(field_settings.type)
                if field_type is None:
                    raise ConfigurationError(
                        f"Unknown field type {field_settings.type!r}",
                        list_key=list_key,
                        path=path,
                    )
                impl = field_type.implementation.build(
                    path,
                    field_settings.field_config(),
                    list_key=list_key,
                    item_type_name_for=self.item_type_name_for,
                )
                adapter = self.manager.build_adapter(field_settings.type, backend, impl)
                if backend is BackendKind.RELATIONAL:
                    adapter.bind_to_table_schema(handle)
                else:
                    adapter.bind_to_document_schema(handle)

                assembled.fields[path] = impl
                assembled.adapters[path] = adapter
                logger.debug(
                    "Bound field",
                    list=list_key,
                    path=path,
                    field_type=field_settings.type,
                    backend=backend.value,
                )

            schema.lists[list_key] = assembled

        self._check_type_names(schema)
        logger.info(
            "Schema assembled",
            backend=backend.value,
            lists=len(schema.lists),
            fields=sum(len(a.fields) for a in schema.lists.values()),
        )
        return schema

    @staticmethod
    def _storage_handle(schema: AssembledSchema, assembled: AssembledList) -> Any:
        if schema.metadata is not None:
            return Table(
                assembled.storage_name,
                schema.metadata,
                Column("id", Integer, primary_key=True, autoincrement=True),
            )
        collection = DocumentSchema(assembled.storage_name)
        collection.add("id", DocumentFieldSpec(kind="id"))
        schema.documents[assembled.key] = collection
        return collection

    @staticmethod
    def _check_type_names(schema: AssembledSchema) -> None:
        counts = Counter(_declared_name(d) for d in schema.type_declarations())
        duplicates = sorted(name for name, n in counts.items() if n > 1)
        if duplicates:
            raise ConfigurationError(
                f"Schema type names declared more than once: {duplicates}"
            )
