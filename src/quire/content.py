"""Content documents, publishing connections and field value sanity checks."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Iterable, Optional

from pydantic import Field

from .consts import MULTILINGUAL_FLAG
from .schema import Document, FieldDefinition

logger = logging.getLogger(__name__)


class PublishingSettings(Document):
    connection_id: Optional[str] = None


class ContentSettings(Document):
    publishing: PublishingSettings = Field(default_factory=PublishingSettings)


class Content(Document):
    id: str
    schema_id: str
    parent_id: Optional[str] = None
    properties: dict[str, Any] = Field(default_factory=dict)
    settings: ContentSettings = Field(default_factory=ContentSettings)
    is_published: bool = False
    is_locked: bool = False
    sort: int = 10000
    created_by: Optional[str] = None
    updated_by: Optional[str] = None
    create_date: Optional[datetime] = None
    update_date: Optional[datetime] = None

    @property
    def connection_id(self) -> str | None:
        return self.settings.publishing.connection_id or None

    def get_property(self, key: str, language: str) -> Any:
        """Get a property value, picking the language slot of multilingual values."""
        value = self.properties.get(key)
        if is_multilingual_value(value):
            return value.get(language)
        return value


class Connection(Document):
    """A publishing target content can be deployed or previewed to."""

    id: str
    title: str = ""
    url: str = ""
    locked: bool = False

    def remote_url(self, path: str | None) -> str | None:
        if not self.url or not path:
            return None
        return self.url + path


def is_multilingual_value(value: Any) -> bool:
    return isinstance(value, dict) and bool(value.get(MULTILINGUAL_FLAG))


def field_sanity_check(
    value: Any,
    definition: FieldDefinition,
    language: str,
    languages: Iterable[str] = (),
) -> Any:
    """Coerce a stored value into the shape a field definition expects.

    Multilingual fields hold ``{"_multilingual": True, <language>: value}``.
    A bare value is moved into the ``language`` slot; a mapping keyed only by
    known language codes just gets the flag. A multilingual mapping stored for
    a field that is no longer multilingual collapses to its ``language`` slot.

    Args:
        value: The stored value
        definition: Field definition the value belongs to
        language: Current editing language
        languages: All configured languages

    Returns:
        The conforming value. Existing language entries are never dropped.
    """
    known = set(languages) | {language}

    if definition.multilingual:
        if is_multilingual_value(value):
            return value

        if isinstance(value, dict) and value and set(value) - {MULTILINGUAL_FLAG} <= known:
            return {**value, MULTILINGUAL_FLAG: True}

        coerced: dict[str, Any] = {MULTILINGUAL_FLAG: True}
        if value is not None:
            logger.debug(f"Moving non-multilingual value into '{language}' slot")
            coerced[language] = value
        return coerced

    if is_multilingual_value(value):
        logger.debug(f"Collapsing multilingual value to '{language}' slot")
        return value.get(language)

    return value
