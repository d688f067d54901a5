"""Content editor controller tests"""

from unittest.mock import Mock

import pytest

from quire.client import LocalContentApi
from quire.controller import ContentEditorController
from quire.enums import EditorState, SaveAction
from quire.errors import EditorBusyError, QuireException
from quire.stores import MemoryConnectionStore, MemoryContentStore, MemorySchemaStore

SCHEMAS = [
    {
        "id": "article",
        "name": "Article",
        "parentSchemaId": "page",
        "tabs": {"body": "Body"},
        "fields": {"properties": {"text": {"label": "Text", "tabId": "body", "schemaId": "markdown"}}},
    },
    {"id": "broken", "parentSchemaId": "gone"},
    {"id": "loopA", "parentSchemaId": "loopB"},
    {"id": "loopB", "parentSchemaId": "loopA"},
]

CONTENTS = [
    {"id": "home", "schemaId": "page", "properties": {"title": "Home", "url": "/home/"}},
    {
        "id": "post",
        "schemaId": "article",
        "isPublished": True,
        "settings": {"publishing": {"connectionId": "web"}},
        "properties": {"title": "Post", "url": "/post/", "text": "*hi*"},
    },
    {
        "id": "frozen",
        "schemaId": "page",
        "isLocked": True,
        "settings": {"publishing": {"connectionId": "web"}},
        "properties": {"title": "Frozen"},
    },
    {"id": "lost", "schemaId": "broken"},
    {"id": "looping", "schemaId": "loopA"},
]


@pytest.fixture
def contents():
    return MemoryContentStore(CONTENTS)


@pytest.fixture
def api(contents):
    local = LocalContentApi(
        "demo",
        "live",
        content_store=contents,
        schema_store=MemorySchemaStore(SCHEMAS),
        connection_store=MemoryConnectionStore([{"id": "web", "title": "Web", "url": "https://example.com"}]),
    )
    return Mock(wraps=local)


def make_controller(api, **kwargs):
    return ContentEditorController(api, languages=["en", "nl"], **kwargs)


def field(view, key):
    return next(f for f in view.fields if f.key == key)


def test_load_renders_default_tab(api):
    view = make_controller(api).load("home")

    assert view.state == EditorState.IDLE
    assert view.active_tab == "content"
    assert [f.key for f in view.fields] == ["title", "url"]
    assert [t["id"] for t in view.tabs] == ["content", "meta"]
    assert view.tabs[0]["active"]
    assert view.tabs[1]["url"] == "/content/home/meta"


def test_load_requested_tab(api):
    view = make_controller(api).load("post", "body")

    assert [f.key for f in view.fields] == ["text"]
    assert field(view, "text").editor_id == "MarkdownEditor"


def test_switch_tab_to_meta_renders_document_fields(api):
    controller = make_controller(api)
    controller.load("home")

    view = controller.switch_tab("meta")

    assert [f.key for f in view.fields] == ["id", "schemaId", "createDate", "updateDate", "description"]
    assert field(view, "id").editor.disabled
    assert api.get_content.call_count == 1


def test_unknown_tab_renders_no_fields(api):
    view = make_controller(api).load("home", "nope")

    assert view.state == EditorState.IDLE
    assert view.fields == []


def test_missing_content_fails_without_fallback(api):
    view = make_controller(api).load("nothing")

    assert view.state == EditorState.ERROR
    assert "nothing" in view.error
    assert view.fallback_url is None


def test_missing_schema_falls_back_to_json_editor(api):
    view = make_controller(api).load("lost")

    assert view.state == EditorState.ERROR
    assert view.fallback_url == "/content/json/lost"
    assert view.to_dict()["fallbackUrl"] == "/content/json/lost"


def test_cyclic_schema_falls_back_to_json_editor(api):
    view = make_controller(api).load("looping")

    assert view.state == EditorState.ERROR
    assert "Cyclic" in view.error
    assert view.fallback_url == "/content/json/looping"


def test_edit_marks_dirty_and_save_persists(api, contents):
    controller = make_controller(api)
    view = controller.load("home")

    field(view, "title").editor.emit_change("Welcome")
    assert controller.dirty

    result = controller.save()

    assert result.action == SaveAction.SAVE
    assert result.url == "/api/demo/live/content/home"
    assert contents.get("home").properties["title"] == "Welcome"
    assert not controller.dirty
    assert controller.state == EditorState.IDLE


def test_save_actions_without_connection(api):
    view = make_controller(api).load("home")

    assert view.save_actions == [{"value": "", "label": "Save"}]
    assert view.default_save_action == ""
    assert view.remote_url is None


def test_save_actions_with_connection(api):
    view = make_controller(api).load("post")

    assert [a["value"] for a in view.save_actions] == ["publish", "preview", "unpublish", ""]
    assert view.default_save_action == "publish"
    assert view.remote_url == "https://example.com/post/"


def test_unpublish_without_connection_falls_back_to_save(api):
    controller = make_controller(api)
    controller.load("home")

    result = controller.save(SaveAction.UNPUBLISH)

    api.unpublish_content.assert_not_called()
    api.save_content.assert_called_once()
    assert result.url == "/api/demo/live/content/home"


def test_publish_with_connection(api, contents):
    controller = make_controller(api)
    controller.load("post")

    result = controller.save("publish")

    api.publish_content.assert_called_once()
    assert result.url == "https://example.com/post/"
    assert contents.get("post").is_published


def test_unpublish_with_connection(api, contents):
    controller = make_controller(api)
    controller.load("post")

    controller.save(SaveAction.UNPUBLISH)

    api.unpublish_content.assert_called_once()
    assert not contents.get("post").is_published


def test_preview_returns_preview_url(api):
    controller = make_controller(api)
    controller.load("post")

    result = controller.save(SaveAction.PREVIEW)

    assert result.preview_url == "https://example.com/preview/post"


def test_unknown_save_action_raises(api):
    controller = make_controller(api)
    controller.load("home")

    with pytest.raises(QuireException, match="Unknown save action"):
        controller.save("archive")
    assert controller.state == EditorState.IDLE


def test_save_accepts_save_as_plain_save(api, contents):
    controller = make_controller(api)
    view = controller.load("home")
    field(view, "title").editor.emit_change("Welcome")

    result = controller.save("save")

    assert result.action == SaveAction.SAVE
    api.save_content.assert_called_once()
    assert contents.get("home").properties["title"] == "Welcome"


def test_save_while_saving_raises(api):
    controller = make_controller(api)
    controller.load("home")
    controller.state = EditorState.SAVING

    with pytest.raises(EditorBusyError):
        controller.save()


def test_failed_save_keeps_edits(api):
    controller = make_controller(api)
    view = controller.load("home")
    field(view, "title").editor.emit_change("Unsaved")
    api.save_content.side_effect = QuireException("disk full")

    with pytest.raises(QuireException, match="disk full"):
        controller.save()

    assert controller.state == EditorState.IDLE
    assert controller.dirty
    assert controller.error == "disk full"
    assert controller.document["properties"]["title"] == "Unsaved"


def test_locked_content_is_read_only(api):
    controller = make_controller(api)
    view = controller.load("frozen")

    field(view, "title").editor.emit_change("Thawed")

    assert view.locked
    assert view.save_actions == []
    assert not controller.dirty
    assert controller.document["properties"]["title"] == "Frozen"


def test_view_to_dict(api):
    data = make_controller(api).load("home").to_dict()

    assert data["contentId"] == "home"
    assert data["state"] == "idle"
    assert data["fields"][0]["key"] == "title"
    assert 'data-editor="StringEditor"' in data["fields"][0]["html"]


@pytest.mark.parametrize("action", ["save", "publish", "unpublish", "preview"])
def test_locked_content_rejects_saves(api, contents, action):
    controller = make_controller(api)
    controller.load("frozen")

    with pytest.raises(QuireException, match="locked"):
        controller.save(action)

    assert controller.state == EditorState.IDLE
    api.save_content.assert_not_called()
    api.publish_content.assert_not_called()
    assert not contents.get("frozen").is_published
    assert "url" not in contents.get("frozen").properties
