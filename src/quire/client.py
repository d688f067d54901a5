"""Content API collaborators used by the content editor.

``LocalContentApi`` works directly on the stores of one project environment
and backs the HTTP API; ``HttpContentApi`` talks to that HTTP API.
"""

from __future__ import annotations

import logging
from typing import Any, NoReturn, Protocol

import requests

from .consts import API_PREFIX, TIMEOUT_HTTP_REQUEST, TOKEN_COOKIE
from .content import Connection, Content
from .errors import AuthorizationError, ContextError, NotFoundError, QuireException
from .schema import Schema
from .stores.db import DBConnectionStore, DBContentStore, DBSchemaStore
from .utils import sanitize

logger = logging.getLogger(__name__)


class ContentApi(Protocol):
    def get_content(self, content_id: str) -> Content: ...

    def list_content(self) -> list[Content]: ...

    def save_content(self, content: Content) -> str: ...

    def publish_content(self, content: Content) -> str: ...

    def unpublish_content(self, content: Content) -> str: ...

    def preview_content(self, content: Content) -> str: ...

    def get_schema(self, schema_id: str) -> Schema: ...

    def list_schemas(self) -> list[Schema]: ...

    def get_connection(self, connection_id: str) -> Connection: ...

    def list_connections(self) -> list[Connection]: ...


class LocalContentApi:
    """Content API over the database stores of one project environment."""

    def __init__(
        self,
        project: str,
        environment: str,
        language: str = "en",
        username: str | None = None,
        content_store=None,
        schema_store=None,
        connection_store=None,
    ):
        self.project = project
        self.environment = environment
        self.language = language
        self.username = username
        self.contents = content_store or DBContentStore(project, environment)
        self.schemas = schema_store or DBSchemaStore(project, environment)
        self.connections = connection_store or DBConnectionStore(project, environment)

    def _location(self, content: Content) -> str:
        return f"{API_PREFIX}/{self.project}/{self.environment}/content/{content.id}"

    def _save(self, content: Content) -> Content:
        if isinstance(self.contents, DBContentStore):
            return self.contents.save(content, user=self.username)
        return self.contents.save(content)

    def _connection_for(self, content: Content) -> Connection:
        if not content.connection_id:
            raise NotFoundError(f"Content \"{content.id}\" has no publishing connection")
        return self.get_connection(content.connection_id)

    def get_content(self, content_id: str) -> Content:
        content = self.contents.get(content_id)
        if content is None:
            raise NotFoundError(f"Content by id \"{content_id}\" not found")
        return content

    def list_content(self) -> list[Content]:
        return self.contents.all()

    def save_content(self, content: Content) -> str:
        self._save(content)
        return self._location(content)

    def publish_content(self, content: Content) -> str:
        connection = self._connection_for(content)
        content.is_published = True
        self._save(content)
        logger.info(f"Published content {content.id} to connection {connection.id}")
        return connection.remote_url(content.get_property("url", self.language)) or self._location(content)

    def unpublish_content(self, content: Content) -> str:
        connection = self._connection_for(content)
        content.is_published = False
        self._save(content)
        logger.info(f"Unpublished content {content.id} from connection {connection.id}")
        return self._location(content)

    def preview_content(self, content: Content) -> str:
        connection = self._connection_for(content)
        self._save(content)
        return f"{connection.url.rstrip('/')}/preview/{content.id}"

    def get_schema(self, schema_id: str) -> Schema:
        schema = self.schemas.get(schema_id)
        if schema is None:
            raise NotFoundError(f"Schema by id \"{schema_id}\" not found")
        return schema

    def list_schemas(self) -> list[Schema]:
        return self.schemas.all()

    def get_connection(self, connection_id: str) -> Connection:
        connection = self.connections.get(connection_id)
        if connection is None:
            raise NotFoundError(f"Connection by id \"{connection_id}\" not found")
        return connection

    def list_connections(self) -> list[Connection]:
        return self.connections.all()


def _handle_request_exception(exception: requests.RequestException, operation: str) -> NoReturn:
    status_code = getattr(exception.response, "status_code", None)
    detail = ""
    if exception.response is not None:
        try:
            detail = exception.response.json().get("detail", "")
        except ValueError:
            detail = exception.response.text

    logger.error(f"Failed to {operation}: status_code={status_code or 'N/A'}")

    message = f"Failed to {operation}" + (f": {detail}" if detail else "")
    if status_code == 403:
        raise AuthorizationError(message) from exception
    if status_code == 400:
        raise ContextError(message) from exception
    if status_code == 404:
        raise NotFoundError(message) from exception
    raise QuireException(f"{message} (status: {status_code or 'N/A'})") from exception


class HttpContentApi:
    """Client for the Quire HTTP API. The token is sent as a cookie."""

    def __init__(
        self,
        base_url: str,
        project: str,
        environment: str,
        token: str,
        timeout: int = TIMEOUT_HTTP_REQUEST,
        session: requests.Session | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.project = project
        self.environment = environment
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.cookies.set(TOKEN_COOKIE, token)

        logger.debug(
            f"HttpContentApi initialized: base_url={self.base_url}, "
            f"project={project}, environment={environment}, token={sanitize(token)}"
        )

    def environment_url(self, path: str) -> str:
        return f"{self.base_url}{API_PREFIX}/{self.project}/{self.environment}/{path.lstrip('/')}"

    def request(self, method: str, path: str, data: Any = None) -> Any:
        url = self.environment_url(path)
        try:
            response = self.session.request(method, url, json=data, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            _handle_request_exception(e, f"{method.upper()} {path}")

        if not response.content:
            return None
        return response.json()

    def get_content(self, content_id: str) -> Content:
        return Content.model_validate(self.request("get", f"content/{content_id}"))

    def list_content(self) -> list[Content]:
        return [Content.model_validate(item) for item in self.request("get", "content")]

    def save_content(self, content: Content) -> str:
        return self.request("post", f"content/{content.id}", content.to_dict())["url"]

    def publish_content(self, content: Content) -> str:
        return self.request("post", "content/publish", content.to_dict())["url"]

    def unpublish_content(self, content: Content) -> str:
        return self.request("post", "content/unpublish", content.to_dict())["url"]

    def preview_content(self, content: Content) -> str:
        return self.request("post", "content/preview", content.to_dict())["url"]

    def get_schema(self, schema_id: str) -> Schema:
        return Schema.model_validate(self.request("get", f"schemas/{schema_id}"))

    def list_schemas(self) -> list[Schema]:
        return [Schema.model_validate(item) for item in self.request("get", "schemas")]

    def get_connection(self, connection_id: str) -> Connection:
        for connection in self.list_connections():
            if connection.id == connection_id:
                return connection
        raise NotFoundError(f"Connection by id \"{connection_id}\" not found")

    def list_connections(self) -> list[Connection]:
        return [Connection.model_validate(item) for item in self.request("get", "connections")]
