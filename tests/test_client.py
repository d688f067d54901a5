"""Content API client tests"""

from unittest.mock import Mock

import pytest
import requests
from requests.cookies import RequestsCookieJar

from quire.client import HttpContentApi, LocalContentApi
from quire.content import Content
from quire.errors import AuthorizationError, ContextError, NotFoundError, QuireException
from quire.stores import MemoryConnectionStore, MemoryContentStore, MemorySchemaStore


def make_response(status_code=200, json_data=None):
    response = Mock()
    response.status_code = status_code
    response.content = b"{}" if json_data is not None else b""
    response.json.return_value = json_data
    response.text = ""
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(response=response)
    else:
        response.raise_for_status.return_value = None
    return response


@pytest.fixture
def session():
    session = Mock(spec=requests.Session)
    session.cookies = RequestsCookieJar()
    return session


@pytest.fixture
def client(session):
    return HttpContentApi("http://cms.local/", "demo", "live", token="secret-token", session=session)


def test_token_is_sent_as_cookie(client, session):
    assert session.cookies.get("token") == "secret-token"


def test_environment_url(client):
    assert client.environment_url("/content/x") == "http://cms.local/api/demo/live/content/x"


def test_get_content(client, session):
    session.request.return_value = make_response(json_data={"id": "home", "schemaId": "page"})

    content = client.get_content("home")

    assert content.id == "home"
    assert content.schema_id == "page"
    session.request.assert_called_once_with(
        "get", "http://cms.local/api/demo/live/content/home", json=None, timeout=30
    )


def test_save_content_posts_document(client, session):
    session.request.return_value = make_response(json_data={"url": "/api/demo/live/content/home"})

    url = client.save_content(Content(id="home", schema_id="page", properties={"title": "Home"}))

    assert url == "/api/demo/live/content/home"
    args, kwargs = session.request.call_args
    assert args == ("post", "http://cms.local/api/demo/live/content/home")
    assert kwargs["json"]["schemaId"] == "page"


def test_list_schemas(client, session):
    session.request.return_value = make_response(json_data=[{"id": "page", "type": "content"}])

    assert [s.id for s in client.list_schemas()] == ["page"]


def test_get_connection_not_found(client, session):
    session.request.return_value = make_response(json_data=[{"id": "web", "url": "https://x"}])

    assert client.get_connection("web").url == "https://x"
    with pytest.raises(NotFoundError):
        client.get_connection("ftp")


@pytest.mark.parametrize(
    "status_code,exception",
    [
        (403, AuthorizationError),
        (400, ContextError),
        (404, NotFoundError),
        (500, QuireException),
    ],
)
def test_error_status_mapping(client, session, status_code, exception):
    session.request.return_value = make_response(status_code, json_data={"detail": "nope"})

    with pytest.raises(exception, match="nope"):
        client.get_content("home")


def test_connection_error_raises_quire_exception(client, session):
    session.request.side_effect = requests.ConnectionError("refused")

    with pytest.raises(QuireException, match="N/A"):
        client.list_content()


@pytest.fixture
def local_api():
    return LocalContentApi(
        "demo",
        "live",
        content_store=MemoryContentStore([{"id": "home", "schemaId": "page"}]),
        schema_store=MemorySchemaStore(),
        connection_store=MemoryConnectionStore(),
    )


def test_local_api_missing_records(local_api):
    with pytest.raises(NotFoundError):
        local_api.get_content("nope")
    with pytest.raises(NotFoundError):
        local_api.get_schema("nope")
    with pytest.raises(NotFoundError):
        local_api.get_connection("nope")


def test_local_api_publish_requires_connection(local_api):
    with pytest.raises(NotFoundError, match="no publishing connection"):
        local_api.publish_content(local_api.get_content("home"))


def test_local_api_lists_native_schemas(local_api):
    assert "contentBase" in [s.id for s in local_api.list_schemas()]
