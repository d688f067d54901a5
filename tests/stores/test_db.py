import pytest

from quire.content import Connection, Content
from quire.errors import AuthorizationError
from quire.schema import Schema
from quire.stores import DBConnectionStore, DBContentStore, DBSchemaStore


def test_schema_store_round_trip(db):
    store = DBSchemaStore("demo", "live")
    store.save(Schema(id="article", parent_schema_id="page", tabs={"body": "Body"}))

    schema = store.get("article")

    assert schema.parent_schema_id == "page"
    assert schema.tabs == {"body": "Body"}
    assert "article" in [s.id for s in store.all()]


def test_schema_store_includes_natives(db):
    store = DBSchemaStore("demo", "live")

    assert store.get("contentBase").locked
    assert {"contentBase", "page", "string"} <= {s.id for s in store.all()}


def test_schema_store_refuses_native_ids(db):
    with pytest.raises(AuthorizationError):
        DBSchemaStore("demo", "live").save(Schema(id="page"))


def test_schema_store_is_scoped_to_environment(db):
    DBSchemaStore("demo", "live").save(Schema(id="article"))

    assert DBSchemaStore("demo", "staging").get("article") is None
    assert DBSchemaStore("blog", "live").get("article") is None


def test_schema_store_save_updates_existing(db):
    store = DBSchemaStore("demo", "live")
    store.save(Schema(id="article", name="Article"))
    store.save(Schema(id="article", name="Post"))

    assert store.get("article").name == "Post"
    assert [s.id for s in store.all()].count("article") == 1


def test_content_store_sets_dates_and_users(db):
    store = DBContentStore("demo", "live")

    store.save(Content(id="home", schema_id="page"), user="alice")
    first = store.get("home")
    store.save(first, user="bob")
    second = store.get("home")

    assert first.created_by == "alice"
    assert second.created_by == "alice"
    assert second.updated_by == "bob"
    assert second.create_date == first.create_date
    assert second.update_date >= first.update_date


def test_content_store_orders_by_sort(db):
    store = DBContentStore("demo", "live")
    store.save(Content(id="b", schema_id="page", sort=2))
    store.save(Content(id="a", schema_id="page", sort=1))

    assert [c.id for c in store.all()] == ["a", "b"]
    assert store.get("missing") is None


def test_connection_store(db):
    store = DBConnectionStore("demo", "live")
    store.save(Connection(id="web", title="Web", url="https://example.com"))

    assert store.get("web").url == "https://example.com"
    assert [c.id for c in store.all()] == ["web"]
