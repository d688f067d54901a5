"""Editors referencing other content documents and content schemas."""

from __future__ import annotations

import logging
from typing import Any

from ..consts import FROM_PARENT, NATIVE_CONTENT_SCHEMAS
from ..enums import SchemaType
from ..errors import NotFoundError
from ..schema import Schema
from .base import FieldEditor

logger = logging.getLogger(__name__)


def allowed_ids(config: dict[str, Any], keep_empty: bool = False) -> list[str] | None:
    """Return the allowed schema ids, or None when anything is allowed.

    An empty list allows anything unless ``keep_empty`` is set, in which case
    it allows nothing.
    """
    allowed = config.get("allowedSchemas")
    if isinstance(allowed, list) and (allowed or keep_empty):
        return allowed
    return None


class ContentReferenceEditor(FieldEditor):
    """Picks another content document, optionally limited to some schemas."""

    template_name = "editors/reference.html.j2"

    @classmethod
    def config_fields(cls) -> dict[str, dict[str, Any]]:
        return {
            "allowedSchemas": {"label": "Allowed Schemas", "schemaId": "contentSchemaReference"},
        }

    def options(self) -> list[dict[str, Any]]:
        allowed = allowed_ids(self.config)
        current = self.context.content.id if self.context.content else None
        options = []
        for content in self.context.contents:
            if content.id == current:
                continue
            if allowed is not None and content.schema_id not in allowed:
                continue
            title = content.get_property("title", self.context.language)
            options.append({"value": content.id, "label": title or content.id})
        return options

    def template_context(self) -> dict[str, Any]:
        return {"options": self.options()}


class ContentSchemaReferenceEditor(FieldEditor):
    """Picks a content schema.

    Example definition::

        "childSchema": {
            "label": "Child schema",
            "schemaId": "contentSchemaReference",
            "config": {"allowedSchemas": "fromParent"}
        }

    With ``"fromParent"`` the allowed schemas are the ``allowedChildSchemas``
    of the schema of the edited content's parent.
    """

    template_name = "editors/reference.html.j2"

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)

        # A found parent that lists no children allows none
        self.from_parent = False
        if self.config.get("allowedSchemas") == FROM_PARENT:
            parent_schema = self.get_parent_schema()
            if parent_schema is not None and parent_schema.allowed_child_schemas is not None:
                self.config["allowedSchemas"] = list(parent_schema.allowed_child_schemas)
                self.from_parent = True
            else:
                self.config["allowedSchemas"] = None

    @classmethod
    def config_fields(cls) -> dict[str, dict[str, Any]]:
        return {
            "allowedSchemas": {"label": "Allowed Schemas", "schemaId": "contentSchemaReference"},
        }

    def get_parent_schema(self) -> Schema | None:
        """Get the parent schema from config, or from the edited content's parent."""
        parent_schema = self.config.get("parentSchema")
        if parent_schema:
            return parent_schema if isinstance(parent_schema, Schema) else Schema.model_validate(parent_schema)

        content = self.context.content
        resolver = self.context.resolver
        if content is None or resolver is None or not content.parent_id:
            return None

        try:
            return resolver.resolve_parent_schema(content)
        except NotFoundError as e:
            self.report_error(str(e))
            return None

    def options(self) -> list[dict[str, Any]]:
        allowed = allowed_ids(self.config, keep_empty=self.from_parent)
        options = []
        for schema in self.context.schemas:
            if schema.type != SchemaType.CONTENT or schema.id in NATIVE_CONTENT_SCHEMAS:
                continue
            if allowed is not None and schema.id not in allowed:
                continue
            options.append({"value": schema.id, "label": schema.name or schema.id})
        return options

    def template_context(self) -> dict[str, Any]:
        return {"options": self.options()}
