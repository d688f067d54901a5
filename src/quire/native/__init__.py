"""Schemas shipped with the application.

Native schemas are always resolvable and cannot be overwritten through the
API. They are loaded once from the JSON files in this package.
"""

import copy
import json
import logging
from functools import lru_cache
from pathlib import Path

from ..consts import NATIVE_CONTENT_SCHEMAS
from ..enums import SchemaType
from ..schema import Schema

logger = logging.getLogger(__name__)

NATIVE_DIR = Path(__file__).parent


@lru_cache(maxsize=1)
def _load_raw() -> dict[str, dict]:
    raw = {}
    for path in sorted(NATIVE_DIR.glob("*.json")):
        data = json.loads(path.read_text(encoding="utf-8"))
        data["id"] = path.stem

        if path.stem in NATIVE_CONTENT_SCHEMAS or data.get("type") == SchemaType.CONTENT.value:
            data["type"] = SchemaType.CONTENT.value
        else:
            data["type"] = SchemaType.FIELD.value

        if data.get("locked") is not False:
            data["locked"] = True

        raw[path.stem] = data

    logger.debug(f"Loaded {len(raw)} native schemas")
    return raw


def native_schemas() -> dict[str, Schema]:
    """Return fresh copies of all native schemas keyed by id."""
    return {schema_id: Schema.model_validate(copy.deepcopy(data)) for schema_id, data in _load_raw().items()}


def is_native(schema_id: str) -> bool:
    return schema_id in _load_raw()
