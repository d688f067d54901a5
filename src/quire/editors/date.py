from datetime import date, datetime
from typing import Any

from ..errors import ValidationError
from .base import FieldEditor


class DateEditor(FieldEditor):
    """Dates are stored as ISO 8601 strings."""

    template_name = "editors/date.html.j2"
    empty_value = None

    def sanitize(self, value: Any) -> str | None:
        if value in (None, ""):
            return None
        if isinstance(value, (datetime, date)):
            return value.isoformat()
        if isinstance(value, str):
            try:
                return datetime.fromisoformat(value.replace("Z", "+00:00")).isoformat()
            except ValueError as e:
                raise ValidationError(f"Invalid date: \"{value}\"") from e
        raise ValidationError(f"Expected a date, got {type(value).__name__}")

    def template_context(self) -> dict[str, Any]:
        # datetime-local inputs take minutes precision without an offset
        return {"input_value": self.value[:16] if self.value else ""}
