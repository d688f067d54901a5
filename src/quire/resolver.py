"""Schema inheritance resolution."""

from __future__ import annotations

import logging

from .consts import PROPERTIES_KEY
from .content import Content
from .errors import CyclicSchemaError, NotFoundError
from .schema import MergedSchema, Schema
from .stores.base import ContentStore, SchemaStore
from .utils import merge_dicts

logger = logging.getLogger(__name__)

# Attributes a child inherits from its parent unless it sets them itself
INHERITED_ATTRIBUTES = (
    "name",
    "icon",
    "default_tab_id",
    "locked",
    "type",
    "allowed_child_schemas",
    "editor_id",
)


def merge_fields(child: dict, parent: dict) -> dict:
    """Merge two field maps. Child definitions replace parent definitions
    with the same key, both at the top level and inside ``properties``.
    """
    merged = dict(parent)
    for key, definition in child.items():
        if key == PROPERTIES_KEY and isinstance(definition, dict):
            merged[key] = {**(parent.get(PROPERTIES_KEY) or {}), **definition}
        else:
            merged[key] = definition
    return merged


def merge_schemas(child: Schema, parent: Schema) -> MergedSchema:
    """Fold ``child`` onto an already merged ``parent``."""
    data = {
        "id": child.id,
        "parent_schema_id": child.parent_schema_id,
        "tabs": {**parent.tabs, **child.tabs},
        "fields": merge_fields(child.fields, parent.fields),
        "config": merge_dicts(parent.config, child.config) if (parent.config or child.config) else None,
        "chain": [*getattr(parent, "chain", [parent.id]), child.id],
    }
    for attribute in INHERITED_ATTRIBUTES:
        value = getattr(child, attribute)
        data[attribute] = value if value is not None else getattr(parent, attribute)

    extra = {**(parent.model_extra or {}), **(child.model_extra or {})}
    extra.pop("chain", None)

    return MergedSchema.model_validate({**extra, **data})


class SchemaResolver:
    """Resolves schemas against a store snapshot.

    Resolution is pure: merged schemas are computed on every call and never
    cached.
    """

    def __init__(self, store: SchemaStore, content_store: ContentStore | None = None):
        self.store = store
        self.content_store = content_store

    def get(self, schema_id: str) -> Schema:
        schema = self.store.get(schema_id)
        if schema is None:
            raise NotFoundError(f"Schema by id \"{schema_id}\" not found")
        return schema

    def chain(self, schema_id: str) -> list[Schema]:
        """Return the schema followed by its ancestors, nearest first.

        Raises:
            NotFoundError: If the schema or any ancestor does not exist
            CyclicSchemaError: If an id repeats along the parent chain
        """
        chain: list[Schema] = []
        visited: list[str] = []
        current: str | None = schema_id

        while current:
            if current in visited:
                raise CyclicSchemaError([*visited, current])
            visited.append(current)

            try:
                schema = self.get(current)
            except NotFoundError:
                if chain:
                    logger.warning(f"Parent schema \"{current}\" of \"{chain[-1].id}\" not found")
                raise

            chain.append(schema)
            current = schema.parent_schema_id

        return chain

    def resolve(self, schema_id: str) -> MergedSchema:
        """Resolve a schema with all fields, tabs and attributes of its parents."""
        chain = self.chain(schema_id)

        root = chain[-1]
        merged = MergedSchema.model_validate(
            {**root.model_dump(exclude_none=False), "chain": [root.id]}
        )
        for schema in reversed(chain[:-1]):
            merged = merge_schemas(schema, merged)

        logger.debug(f"Resolved schema {schema_id}: {' -> '.join(merged.chain)}")
        return merged

    def resolve_field_schema(self, schema_id: str) -> MergedSchema:
        """Resolve a field-kind schema, merging configs down the chain.

        The editor id is inherited from the nearest ancestor declaring one.
        """
        merged = self.resolve(schema_id)
        if not merged.is_field_schema:
            logger.warning(f"Schema \"{schema_id}\" is used as a field but has type \"{merged.type}\"")
        return merged

    def resolve_parent_schema(self, content: Content) -> Schema | None:
        """Get the schema of a content document's parent.

        Returns None when the content has no parent.

        Raises:
            NotFoundError: If the parent content or its schema does not exist
        """
        if not content.parent_id or self.content_store is None:
            return None

        parent = self.content_store.get(content.parent_id)
        if parent is None:
            raise NotFoundError(f"Content by id \"{content.parent_id}\" not found")

        return self.get(parent.schema_id)
