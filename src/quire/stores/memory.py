"""In-memory stores over a snapshot of records."""

from __future__ import annotations

from typing import Any, Iterable

from ..content import Connection, Content
from ..native import native_schemas
from ..schema import Schema


class MemorySchemaStore:
    """Schema records by id. Native schemas shadow stored ones with the same id."""

    def __init__(self, schemas: Iterable[Schema | dict[str, Any]] = (), include_native: bool = True):
        self._schemas: dict[str, Schema] = {}
        for schema in schemas:
            if not isinstance(schema, Schema):
                schema = Schema.model_validate(schema)
            self._schemas[schema.id] = schema

        if include_native:
            self._schemas.update(native_schemas())

    def get(self, schema_id: str) -> Schema | None:
        return self._schemas.get(schema_id)

    def all(self) -> list[Schema]:
        return list(self._schemas.values())


class MemoryContentStore:
    def __init__(self, contents: Iterable[Content | dict[str, Any]] = ()):
        self._contents: dict[str, Content] = {}
        for content in contents:
            self.save(content if isinstance(content, Content) else Content.model_validate(content))

    def get(self, content_id: str) -> Content | None:
        content = self._contents.get(content_id)
        return content.model_copy(deep=True) if content else None

    def all(self) -> list[Content]:
        return sorted(
            (c.model_copy(deep=True) for c in self._contents.values()),
            key=lambda c: c.sort,
        )

    def save(self, content: Content) -> Content:
        self._contents[content.id] = content.model_copy(deep=True)
        return content


class MemoryConnectionStore:
    def __init__(self, connections: Iterable[Connection | dict[str, Any]] = ()):
        self._connections = {}
        for connection in connections:
            if not isinstance(connection, Connection):
                connection = Connection.model_validate(connection)
            self._connections[connection.id] = connection

    def get(self, connection_id: str) -> Connection | None:
        return self._connections.get(connection_id)

    def all(self) -> list[Connection]:
        return list(self._connections.values())
