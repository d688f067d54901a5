"""Schema resolution tests"""

import pytest

from quire.content import Content
from quire.enums import SchemaType
from quire.errors import CyclicSchemaError, NotFoundError
from quire.resolver import SchemaResolver, merge_fields
from quire.stores import MemoryContentStore, MemorySchemaStore


def make_resolver(*schemas, contents=()):
    return SchemaResolver(MemorySchemaStore(schemas), MemoryContentStore(contents))


def test_merge_fields_child_replaces_parent_keys():
    parent = {"a": {"label": "A"}, "properties": {"x": {"label": "X"}, "y": {"label": "Y"}}}
    child = {"a": {"label": "A2"}, "properties": {"y": {"label": "Y2"}}}

    merged = merge_fields(child, parent)

    assert merged["a"] == {"label": "A2"}
    assert merged["properties"] == {"x": {"label": "X"}, "y": {"label": "Y2"}}
    assert parent["properties"]["y"] == {"label": "Y"}


def test_resolve_includes_every_field_in_chain():
    resolver = make_resolver(
        {"id": "a", "type": "content", "fields": {"properties": {"one": {"schemaId": "string"}}}},
        {"id": "b", "parentSchemaId": "a", "fields": {"properties": {"two": {"schemaId": "string"}}}},
        {
            "id": "c",
            "parentSchemaId": "b",
            "fields": {"extra": {"schemaId": "number"}, "properties": {"one": {"schemaId": "number"}}},
        },
    )

    merged = resolver.resolve("c")

    assert merged.chain == ["a", "b", "c"]
    assert set(merged.property_fields()) == {"one", "two"}
    assert merged.property_fields()["one"] == {"schemaId": "number"}
    assert "extra" in merged.fields
    assert merged.type == SchemaType.CONTENT


def test_resolve_inherits_attributes_unless_child_sets_them():
    resolver = make_resolver(
        {
            "id": "base",
            "type": "content",
            "icon": "file",
            "defaultTabId": "content",
            "tabs": {"content": "Content"},
            "allowedChildSchemas": ["base"],
        },
        {"id": "child", "parentSchemaId": "base", "icon": "star", "tabs": {"seo": "SEO"}},
    )

    merged = resolver.resolve("child")

    assert merged.icon == "star"
    assert merged.default_tab_id == "content"
    assert merged.tabs == {"content": "Content", "seo": "SEO"}
    assert merged.allowed_child_schemas == ["base"]
    assert merged.parent_schema_id == "base"


def test_resolve_native_page_extends_content_base():
    merged = make_resolver().resolve("page")

    assert merged.chain == ["contentBase", "page"]
    assert {"title", "description", "url"} <= set(merged.property_fields())
    assert merged.default_tab_id == "content"


def test_resolve_field_schema_merges_config_and_editor():
    resolver = make_resolver(
        {
            "id": "shortText",
            "parentSchemaId": "string",
            "type": "field",
            "config": {"maxLength": 20},
        },
    )

    merged = resolver.resolve_field_schema("shortText")

    assert merged.editor_id == "StringEditor"
    assert merged.config == {"maxLength": 20}
    assert merged.is_field_schema


def test_resolve_missing_schema_raises():
    with pytest.raises(NotFoundError):
        make_resolver().resolve("nope")


def test_resolve_missing_parent_raises():
    resolver = make_resolver({"id": "orphan", "parentSchemaId": "gone"})

    with pytest.raises(NotFoundError, match="gone"):
        resolver.resolve("orphan")


def test_resolve_cycle_raises_deterministically():
    resolver = make_resolver(
        {"id": "a", "parentSchemaId": "b"},
        {"id": "b", "parentSchemaId": "a"},
    )

    for _ in range(2):
        with pytest.raises(CyclicSchemaError) as exc_info:
            resolver.resolve("a")
        assert exc_info.value.chain == ["a", "b", "a"]


def test_resolve_self_parent_is_a_cycle():
    resolver = make_resolver({"id": "loop", "parentSchemaId": "loop"})

    with pytest.raises(CyclicSchemaError, match="loop -> loop"):
        resolver.resolve("loop")


def test_native_schemas_shadow_stored_ones():
    resolver = make_resolver({"id": "string", "editorId": "NumberEditor"})

    assert resolver.resolve("string").editor_id == "StringEditor"


def test_resolve_parent_schema():
    resolver = make_resolver(
        {"id": "section", "type": "content", "allowedChildSchemas": ["page"]},
        contents=[
            {"id": "parent", "schemaId": "section"},
            {"id": "child", "schemaId": "page", "parentId": "parent"},
        ],
    )

    parent_schema = resolver.resolve_parent_schema(Content(id="child", schema_id="page", parent_id="parent"))

    assert parent_schema.id == "section"
    assert resolver.resolve_parent_schema(Content(id="root", schema_id="page")) is None


def test_resolve_parent_schema_missing_parent_raises():
    resolver = make_resolver()

    with pytest.raises(NotFoundError):
        resolver.resolve_parent_schema(Content(id="child", schema_id="page", parent_id="gone"))
