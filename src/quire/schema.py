"""Schema and field definition models."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .consts import PROPERTIES_KEY
from .enums import SchemaType


class Document(BaseModel):
    """Base for records stored and exchanged with camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class FieldDefinition(Document):
    """One editable property of a schema.

    ``schema_id`` references a field-kind schema that decides which editor
    renders the value.
    """

    label: Optional[str] = None
    tab_id: Optional[str] = None
    schema_id: Optional[str] = None
    config: Optional[dict[str, Any]] = None
    multilingual: bool = False
    disabled: bool = False


class Schema(Document):
    id: str
    name: Optional[str] = None
    parent_schema_id: Optional[str] = None
    default_tab_id: Optional[str] = None
    tabs: dict[str, str] = Field(default_factory=dict)
    fields: dict[str, Any] = Field(default_factory=dict)
    allowed_child_schemas: Optional[list[str]] = None
    type: Optional[SchemaType] = None
    locked: Optional[bool] = None
    icon: Optional[str] = None
    editor_id: Optional[str] = None
    config: Optional[dict[str, Any]] = None

    def meta_fields(self) -> dict[str, Any]:
        """Top-level field definitions, including the ``properties`` map."""
        return self.fields

    def property_fields(self) -> dict[str, Any]:
        return self.fields.get(PROPERTIES_KEY) or {}

    @property
    def is_field_schema(self) -> bool:
        return self.type == SchemaType.FIELD


class MergedSchema(Schema):
    """A schema folded with all of its ancestors.

    ``chain`` lists the schema ids from the root ancestor down to the
    resolved schema.
    """

    chain: list[str] = Field(default_factory=list)
