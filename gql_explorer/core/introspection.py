"""Lazy, memoizing view of the endpoint schema.

The schema is introspected one type at a time, only along the paths the
user actually explores. Entries are written once and never invalidated:
the schema is assumed static for the lifetime of a process.
"""

import logging
from typing import Any, Protocol

from .errors import SchemaResolutionError
from .models import ExecutionResult, FieldPath, MutationDescriptor, SchemaCacheEntry, path_key

logger = logging.getLogger(__name__)

ROOT_TYPE = "Query"
MUTATION_TYPE = "Mutation"

# Four levels of ofType cover wrappers such as [Type!]!
_TYPE_REF = "type { name ofType { name ofType { name ofType { name ofType { name }}}}}"


def fields_introspection_query(type_name: str) -> str:
    """Introspection query listing the fields of ``type_name``."""
    return f'query {{ __type(name: "{type_name}") {{ name fields {{ name {_TYPE_REF} }} }} }}'


def mutations_introspection_query() -> str:
    """Introspection query listing mutations with their argument names."""
    return (
        f'query {{ __type(name: "{MUTATION_TYPE}") '
        "{ name fields { name type { name ofType { name } } args { name } } } }"
    )


def leaf_type_name(type_ref: dict[str, Any]) -> str:
    """Unwrap NonNull/List layers of an introspected type reference.

    Raises:
        SchemaResolutionError: If no named type is found
    """
    if type_ref.get("name"):
        return type_ref["name"]
    if not type_ref.get("ofType"):
        raise SchemaResolutionError(f"Cannot get type for {type_ref}")
    return leaf_type_name(type_ref["ofType"])


class Executor(Protocol):
    async def execute(self, query: str, variables: dict[str, Any] | None = None) -> ExecutionResult:
        ...


class SchemaCache:
    """Memoizes selectable fields per field path and the mutation list.

    Args:
        executor: Anything with an async ``execute(query)``, normally the
            GraphQL transport
    """

    def __init__(self, executor: Executor):
        self._executor = executor
        self._entries: dict[str, SchemaCacheEntry] = {}
        self._mutations: list[MutationDescriptor] | None = None

    def entry(self, path: FieldPath) -> SchemaCacheEntry | None:
        """Return the cached entry for ``path`` without resolving anything."""
        return self._entries.get(path_key(path))

    async def resolve_fields(self, path: FieldPath) -> list[str]:
        """Return the names of the fields selectable below ``path``.

        Ancestors are resolved first so the type at ``path`` is known. A
        scalar path resolves to an empty list.

        Raises:
            SchemaResolutionError: If ``path`` is not reachable from the root
        """
        path = tuple(path)
        cached = self.entry(path)
        if cached is not None and cached.fields is not None:
            logger.debug("Schema cache hit for %s", path_key(path) or "<root>")
            return list(cached.fields)

        type_name = ROOT_TYPE
        if path:
            await self.resolve_fields(path[:-1])
            cached = self.entry(path)
            if cached is None:
                raise SchemaResolutionError(f"Failed to inspect {path_key(path)}")
            type_name = cached.type_name

        logger.debug("Introspecting type %s for %s", type_name, path_key(path) or "<root>")
        result = await self._executor.execute(fields_introspection_query(type_name))

        fields = []
        for field in (result.data.get("__type") or {}).get("fields") or []:
            self._entries[path_key(path + (field["name"],))] = SchemaCacheEntry(
                type_name=leaf_type_name(field["type"])
            )
            fields.append(field["name"])

        self._entries[path_key(path)] = SchemaCacheEntry(type_name=type_name, fields=fields)
        return list(fields)

    async def resolve_mutations(self) -> list[MutationDescriptor]:
        """Return every top-level mutation, introspecting only once."""
        if self._mutations is not None:
            return self._mutations

        result = await self._executor.execute(mutations_introspection_query())
        self._mutations = [
            MutationDescriptor(
                name=field["name"],
                args=tuple(arg["name"] for arg in field.get("args") or []),
            )
            for field in (result.data.get("__type") or {}).get("fields") or []
        ]
        logger.debug("Resolved %d mutations", len(self._mutations))
        return self._mutations
