from typing import Any

from ..errors import ValidationError
from .base import FieldEditor


class StringEditor(FieldEditor):
    template_name = "editors/string.html.j2"
    empty_value = ""
    input_type = "text"

    def sanitize(self, value: Any) -> str:
        if value is None:
            return ""
        if isinstance(value, (dict, list)):
            raise ValidationError(f"Expected a string, got {type(value).__name__}")
        return str(value)

    def template_context(self) -> dict[str, Any]:
        return {"input_type": self.input_type}


class UrlEditor(StringEditor):
    """Relative content URL. Stored with leading and trailing slashes."""

    def sanitize(self, value: Any) -> str:
        value = super().sanitize(value).strip()
        if not value:
            return ""
        if "://" in value:
            return value
        return "/" + value.strip("/") + "/" if value.strip("/") else "/"
