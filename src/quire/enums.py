"""Enumeration type definitions"""

from enum import Enum


class SchemaType(str, Enum):
    """Kinds of schema records"""

    CONTENT = "content"
    FIELD = "field"


class SaveAction(str, Enum):
    """Save intents a user can pick from the editor footer.

    ``SAVE`` is the plain save, which is also what "(No action)" maps to.
    It parses from both ``""`` and ``"save"``.
    """

    SAVE = ""
    PUBLISH = "publish"
    UNPUBLISH = "unpublish"
    PREVIEW = "preview"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str) and value.lower() == "save":
            return cls.SAVE
        return None


class EditorState(str, Enum):
    LOADING = "loading"
    SCHEMA_RESOLVING = "schema_resolving"
    RENDERING = "rendering"
    IDLE = "idle"
    SAVING = "saving"
    ERROR = "error"


class Scope(str, Enum):
    CONTENT = "content"
    SCHEMAS = "schemas"
    CONNECTIONS = "connections"
    USERS = "users"


class Resource(str, Enum):
    """Resource collections that can be cached and reloaded"""

    CONTENT = "content"
    SCHEMAS = "schemas"
    CONNECTIONS = "connections"
