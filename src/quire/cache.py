"""Cached resource lists fetched through a content API."""

from __future__ import annotations

import logging
from typing import Any

from .client import ContentApi
from .enums import Resource
from .stores.memory import MemoryContentStore, MemorySchemaStore

logger = logging.getLogger(__name__)


class ResourceCache:
    """Lists of content, schemas and connections, reloaded on demand.

    Editors read these synchronously, e.g. to offer reference options.
    """

    def __init__(self, api: ContentApi):
        self.api = api
        self._resources: dict[Resource, list[Any]] = {}

    def reload(self, name: Resource | str) -> list[Any]:
        resource = Resource(name)
        match resource:
            case Resource.CONTENT:
                items = self.api.list_content()
            case Resource.SCHEMAS:
                items = self.api.list_schemas()
            case Resource.CONNECTIONS:
                items = self.api.list_connections()

        self._resources[resource] = items
        logger.debug(f"Reloaded {len(items)} {resource.value}")
        return items

    def reload_all(self) -> None:
        for resource in Resource:
            self.reload(resource)

    def get(self, name: Resource | str) -> list[Any]:
        resource = Resource(name)
        if resource not in self._resources:
            return self.reload(resource)
        return self._resources[resource]

    def schema_store(self) -> MemorySchemaStore:
        return MemorySchemaStore(self.get(Resource.SCHEMAS))

    def content_store(self) -> MemoryContentStore:
        return MemoryContentStore(self.get(Resource.CONTENT))
