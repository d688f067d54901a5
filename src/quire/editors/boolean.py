from typing import Any

from ..errors import ValidationError
from .base import FieldEditor

TRUTHY = {"true", "1", "yes", "on"}
FALSY = {"false", "0", "no", "off", ""}


class BooleanEditor(FieldEditor):
    template_name = "editors/boolean.html.j2"
    empty_value = False

    def sanitize(self, value: Any) -> bool:
        if value is None:
            return False
        if isinstance(value, bool):
            return value
        if isinstance(value, int):
            return value != 0
        if isinstance(value, str):
            lowered = value.strip().lower()
            if lowered in TRUTHY:
                return True
            if lowered in FALSY:
                return False
        raise ValidationError(f"Expected a boolean, got {value!r}")
