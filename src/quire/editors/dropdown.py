from typing import Any

from ..errors import ValidationError
from .base import FieldEditor


def normalize_options(options: Any) -> list[dict[str, Any]]:
    """Accept ``["a", "b"]`` or ``[{"label": ..., "value": ...}]`` option lists."""
    normalized = []
    for option in options or []:
        if isinstance(option, dict):
            value = option.get("value", option.get("id"))
            normalized.append({"value": value, "label": option.get("label") or option.get("name") or value})
        else:
            normalized.append({"value": option, "label": option})
    return normalized


class DropdownEditor(FieldEditor):
    template_name = "editors/dropdown.html.j2"

    @classmethod
    def config_fields(cls) -> dict[str, dict[str, Any]]:
        return {"options": {"label": "Options", "schemaId": "tags"}}

    def options(self) -> list[dict[str, Any]]:
        return normalize_options(self.config.get("options"))

    def template_context(self) -> dict[str, Any]:
        return {"options": self.options()}


class LanguageEditor(DropdownEditor):
    def options(self) -> list[dict[str, Any]]:
        return normalize_options(self.context.languages)


class TagsEditor(FieldEditor):
    """A list of strings, edited as a comma separated line."""

    template_name = "editors/tags.html.j2"
    empty_value: list[str] = []

    def sanitize(self, value: Any) -> list[str]:
        if value is None:
            return []
        if isinstance(value, str):
            return [tag.strip() for tag in value.split(",") if tag.strip()]
        if isinstance(value, list) and all(isinstance(tag, str) for tag in value):
            return value
        raise ValidationError(f"Expected a list of tags, got {value!r}")
