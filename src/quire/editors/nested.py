"""Editors holding other fields: structs and arrays."""

from __future__ import annotations

import logging
from typing import Any

from markupsafe import Markup

from ..errors import ValidationError
from ..i18n import gettext as _
from .base import ChangeEvent, FieldEditor

logger = logging.getLogger(__name__)


class StructEditor(FieldEditor):
    """A fixed set of named sub-fields, defined by ``config["struct"]``."""

    template_name = "editors/struct.html.j2"
    empty_value: dict[str, Any] = {}

    @classmethod
    def config_fields(cls) -> dict[str, dict[str, Any]]:
        return {"struct": {"label": "Fields", "schemaId": "struct"}}

    def sanitize(self, value: Any) -> dict[str, Any]:
        if value is None:
            return {}
        if not isinstance(value, dict):
            raise ValidationError(f"Expected a struct, got {type(value).__name__}")
        return value

    def _on_child_change(self, event: ChangeEvent) -> None:
        self.emit_change(self.value, dirty=event.dirty)

    def template_context(self) -> dict[str, Any]:
        dispatcher = self.context.dispatcher
        if dispatcher is None:
            return {"children": []}

        if not isinstance(self.value, dict):
            self.value = {}

        children = dispatcher.render_fields(
            self.config.get("struct") or {},
            self.value,
            notify=self._on_child_change,
            disabled=self.disabled,
        )
        self.children = children
        return {"children": [Markup(child.html) for child in children]}


class ArrayEditor(FieldEditor):
    """An ordered list of items, each ``{"schemaId": ..., "value": ...}``.

    ``config["allowedSchemas"]`` lists the field schemas items may use; the
    first one is used for legacy items stored as bare values.
    """

    template_name = "editors/array.html.j2"
    empty_value: list[Any] = []

    @classmethod
    def config_fields(cls) -> dict[str, dict[str, Any]]:
        return {
            "allowedSchemas": {"label": "Allowed Schemas", "schemaId": "tags"},
            "maxItems": {"label": "Max items", "schemaId": "number"},
        }

    def allowed_schemas(self) -> list[str]:
        allowed = self.config.get("allowedSchemas")
        if isinstance(allowed, list) and allowed:
            return allowed
        return ["string"]

    def sanitize(self, value: Any) -> list[dict[str, Any]]:
        if value is None:
            return []
        if not isinstance(value, list):
            raise ValidationError(f"Expected a list, got {type(value).__name__}")

        items = []
        for item in value:
            if isinstance(item, dict) and "value" in item and item.get("schemaId"):
                items.append(item)
            else:
                items.append({"schemaId": self.allowed_schemas()[0], "value": item})
        return items

    def add_item(self, schema_id: str | None = None) -> None:
        schema_id = schema_id or self.allowed_schemas()[0]
        if schema_id not in self.allowed_schemas():
            raise ValidationError(f"Schema \"{schema_id}\" is not allowed in this array")

        max_items = self.config.get("maxItems")
        if max_items and len(self.value or []) >= max_items:
            raise ValidationError(f"Array is limited to {max_items} items")

        self.emit_change([*(self.value or []), {"schemaId": schema_id, "value": None}])

    def remove_item(self, index: int) -> None:
        items = list(self.value or [])
        del items[index]
        self.emit_change(items)

    def move_item(self, index: int, new_index: int) -> None:
        items = list(self.value or [])
        items.insert(new_index, items.pop(index))
        self.emit_change(items)

    def key_actions(self) -> list[dict[str, str]]:
        actions = super().key_actions()
        if not self.disabled:
            actions.append({"action": "add", "label": _("Add item")})
        return actions

    def template_context(self) -> dict[str, Any]:
        dispatcher = self.context.dispatcher
        if dispatcher is None:
            return {"children": []}

        items = self.value if isinstance(self.value, list) else []
        definitions = {
            str(i): {"label": f"#{i + 1}", "schemaId": item["schemaId"]}
            for i, item in enumerate(items)
        }
        values = {str(i): item["value"] for i, item in enumerate(items)}

        def on_item_change(event: ChangeEvent) -> None:
            for i, item in enumerate(items):
                item["value"] = values[str(i)]
            self.emit_change(items, dirty=event.dirty)

        children = dispatcher.render_fields(
            definitions,
            values,
            notify=on_item_change,
            disabled=self.disabled,
        )
        self.children = children
        return {"children": [Markup(child.html) for child in children]}
