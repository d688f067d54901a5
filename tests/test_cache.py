from unittest.mock import Mock

from quire.cache import ResourceCache
from quire.content import Content
from quire.enums import Resource


def test_get_loads_lazily_and_caches():
    api = Mock()
    api.list_content.return_value = [Content(id="home", schema_id="page")]
    cache = ResourceCache(api)

    assert cache.get("content")[0].id == "home"
    assert cache.get(Resource.CONTENT)[0].id == "home"
    api.list_content.assert_called_once()


def test_reload_refetches():
    api = Mock()
    api.list_connections.side_effect = [[], ["web"]]
    cache = ResourceCache(api)

    assert cache.get(Resource.CONNECTIONS) == []
    assert cache.reload(Resource.CONNECTIONS) == ["web"]
    assert cache.get(Resource.CONNECTIONS) == ["web"]


def test_reload_all():
    api = Mock()
    api.list_content.return_value = []
    api.list_schemas.return_value = []
    api.list_connections.return_value = []

    ResourceCache(api).reload_all()

    api.list_content.assert_called_once()
    api.list_schemas.assert_called_once()
    api.list_connections.assert_called_once()


def test_schema_store_includes_natives():
    api = Mock()
    api.list_schemas.return_value = []

    assert ResourceCache(api).schema_store().get("page") is not None
