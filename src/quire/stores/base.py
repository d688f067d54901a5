from typing import Protocol

from ..content import Connection, Content
from ..schema import Schema


class SchemaStore(Protocol):
    def get(self, schema_id: str) -> Schema | None: ...

    def all(self) -> list[Schema]: ...


class ContentStore(Protocol):
    def get(self, content_id: str) -> Content | None: ...

    def all(self) -> list[Content]: ...

    def save(self, content: Content) -> Content: ...


class ConnectionStore(Protocol):
    def get(self, connection_id: str) -> Connection | None: ...

    def all(self) -> list[Connection]: ...
