from typing import Any

from ..errors import ValidationError
from .base import FieldEditor


class NumberEditor(FieldEditor):
    template_name = "editors/number.html.j2"
    empty_value = 0

    @classmethod
    def config_fields(cls) -> dict[str, dict[str, Any]]:
        return {
            "min": {"label": "Minimum", "schemaId": "number"},
            "max": {"label": "Maximum", "schemaId": "number"},
            "step": {"label": "Step", "schemaId": "number"},
        }

    def sanitize(self, value: Any) -> int | float:
        if value is None or value == "":
            return self.empty_value
        if isinstance(value, bool):
            raise ValidationError("Expected a number, got a boolean")
        if isinstance(value, (int, float)):
            return value
        if isinstance(value, str):
            try:
                number = float(value)
            except ValueError as e:
                raise ValidationError(f"Expected a number, got \"{value}\"") from e
            return int(number) if number.is_integer() else number
        raise ValidationError(f"Expected a number, got {type(value).__name__}")
