from .base import ConnectionStore, ContentStore, SchemaStore
from .db import DBConnectionStore, DBContentStore, DBSchemaStore
from .memory import MemoryConnectionStore, MemoryContentStore, MemorySchemaStore

__all__ = [
    "ConnectionStore",
    "ContentStore",
    "DBConnectionStore",
    "DBContentStore",
    "DBSchemaStore",
    "MemoryConnectionStore",
    "MemoryContentStore",
    "MemorySchemaStore",
    "SchemaStore",
]
