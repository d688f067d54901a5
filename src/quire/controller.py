"""Content editor orchestration.

One controller owns one edit session: it fetches a content document,
resolves its schema, renders the fields of the active tab, collects edits
from the field editors and submits them with the chosen save action.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from pydantic import ValidationError as PydanticValidationError

from .cache import ResourceCache
from .client import ContentApi
from .consts import CONTENT_EDITOR_ROUTE, JSON_EDITOR_ROUTE, META_TAB, PROPERTIES_KEY
from .content import Connection, Content
from .dispatcher import EditSession, FieldDispatcher, RenderedField
from .editors.base import EditorContext
from .editors.registry import FieldEditorRegistry, default_registry
from .enums import EditorState, Resource, SaveAction
from .errors import EditorBusyError, QuireException
from .i18n import gettext as _
from .resolver import SchemaResolver
from .schema import MergedSchema

logger = logging.getLogger(__name__)


@dataclass
class SaveResult:
    action: SaveAction
    url: Optional[str] = None

    @property
    def preview_url(self) -> str | None:
        return self.url if self.action == SaveAction.PREVIEW else None


@dataclass
class EditorView:
    content_id: str
    state: EditorState
    active_tab: Optional[str] = None
    tabs: list[dict[str, Any]] = field(default_factory=list)
    fields: list[RenderedField] = field(default_factory=list)
    save_actions: list[dict[str, str]] = field(default_factory=list)
    default_save_action: Optional[str] = None
    remote_url: Optional[str] = None
    locked: bool = False
    dirty: bool = False
    error: Optional[str] = None
    fallback_url: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "contentId": self.content_id,
            "state": self.state.value,
            "activeTab": self.active_tab,
            "tabs": self.tabs,
            "fields": [f.to_dict() for f in self.fields],
            "saveActions": self.save_actions,
            "defaultSaveAction": self.default_save_action,
            "remoteUrl": self.remote_url,
            "locked": self.locked,
            "dirty": self.dirty,
            "error": self.error,
            "fallbackUrl": self.fallback_url,
        }


class ContentEditorController:
    """Editor state machine.

    ``LOADING -> SCHEMA_RESOLVING -> RENDERING -> IDLE <-> SAVING``, with
    ``ERROR`` as the terminal state when the document or its schema cannot
    be loaded.
    """

    def __init__(
        self,
        api: ContentApi,
        registry: FieldEditorRegistry | None = None,
        cache: ResourceCache | None = None,
        language: str = "en",
        languages: list[str] | None = None,
    ):
        self.api = api
        self.registry = registry or default_registry()
        self.cache = cache or ResourceCache(api)
        self.language = language
        self.languages = languages or [language]

        self.state = EditorState.LOADING
        self.content: Content | None = None
        self.document: dict[str, Any] = {}
        self.schema: MergedSchema | None = None
        self.resolver: SchemaResolver | None = None
        self.session = EditSession()
        self.active_tab: str | None = None
        self.fields: list[RenderedField] = []
        self.error: str | None = None
        self.fallback_url: str | None = None
        self._content_id: str | None = None

    @property
    def dirty(self) -> bool:
        return self.session.dirty

    def load(self, content_id: str, tab_id: str | None = None) -> EditorView:
        """Fetch a document and render its active tab."""
        self.state = EditorState.LOADING
        self._content_id = content_id
        self.error = None
        self.fallback_url = None

        try:
            self.content = self.api.get_content(content_id)
        except QuireException as e:
            return self._fail(e)

        self.document = self.content.model_dump(by_alias=True, mode="json")
        self.session = EditSession(is_locked=self.content.is_locked)

        self.state = EditorState.SCHEMA_RESOLVING
        try:
            self.cache.reload(Resource.SCHEMAS)
            self.resolver = SchemaResolver(self.cache.schema_store(), self.cache.content_store())
            self.schema = self.resolver.resolve(self.content.schema_id)
        except QuireException as e:
            return self._fail(e, fallback_url=JSON_EDITOR_ROUTE.format(content_id=content_id))

        self.active_tab = tab_id or self.schema.default_tab_id or META_TAB
        return self.render()

    def switch_tab(self, tab_id: str) -> EditorView:
        """Show another tab of the loaded document without refetching it."""
        if self.schema is None or self.state not in (EditorState.IDLE, EditorState.RENDERING):
            raise QuireException("No document is loaded")

        self.active_tab = tab_id
        return self.render()

    def render(self) -> EditorView:
        self.state = EditorState.RENDERING

        dispatcher = FieldDispatcher(
            self.resolver,
            self.registry,
            session=self.session,
            context=EditorContext(
                language=self.language,
                languages=self.languages,
                content=self.content,
                schemas=self.cache.get(Resource.SCHEMAS),
                contents=self.cache.get(Resource.CONTENT),
            ),
        )

        properties = self.document.get(PROPERTIES_KEY)
        if not isinstance(properties, dict):
            properties = {}
            self.document[PROPERTIES_KEY] = properties

        if self.active_tab == META_TAB:
            self.fields = [
                *dispatcher.render_fields_for_tab(META_TAB, self.schema.meta_fields(), self.document),
                *dispatcher.render_fields_for_tab(META_TAB, self.schema.property_fields(), properties),
            ]
        elif self.active_tab in self.schema.tabs:
            self.fields = dispatcher.render_fields_for_tab(
                self.active_tab, self.schema.property_fields(), properties
            )
        else:
            logger.warning(f"Schema \"{self.schema.id}\" has no tab \"{self.active_tab}\"")
            self.fields = []

        self.state = EditorState.IDLE
        return self.view()

    def save(self, action: SaveAction | str = SaveAction.SAVE) -> SaveResult:
        """Submit the edited document.

        Publishing actions are only honoured when the document has a
        publishing connection; otherwise the document is saved normally.

        Raises:
            EditorBusyError: If a save is already in progress
            QuireException: If the document is locked, or if the API call
                fails. The editor returns to ``IDLE`` with its edits and
                dirty flag kept.
        """
        if self.state == EditorState.SAVING:
            raise EditorBusyError("A save is already in progress")
        if self.state != EditorState.IDLE or self.content is None:
            raise QuireException("No document is loaded")
        if self.content.is_locked:
            raise QuireException(f"Content {self.content.id} is locked")

        try:
            action = SaveAction(action)
        except ValueError as e:
            raise QuireException(f"Unknown save action: \"{action}\"") from e

        try:
            content = Content.model_validate(self.document)
        except PydanticValidationError as e:
            raise QuireException(f"Edited document is invalid: {e}") from e

        self.state = EditorState.SAVING
        try:
            url = self._submit(content, action)
            self.cache.reload(Resource.CONTENT)
        except QuireException as e:
            logger.error(f"Failed to save content {self.content.id}: {e}")
            self.error = str(e)
            self.state = EditorState.IDLE
            raise

        self.load(content.id, self.active_tab)
        self.session.dirty = False

        logger.info(f"Content {content.id} saved ({action.value or 'save'})")
        return SaveResult(action=action, url=url)

    def _submit(self, content: Content, action: SaveAction) -> str:
        if content.connection_id:
            match action:
                case SaveAction.UNPUBLISH:
                    return self.api.unpublish_content(content)
                case SaveAction.PUBLISH:
                    return self.api.publish_content(content)
                case SaveAction.PREVIEW:
                    return self.api.preview_content(content)
        elif action != SaveAction.SAVE:
            logger.info(
                f"Content {content.id} has no publishing connection, "
                f"saving without \"{action.value}\""
            )

        return self.api.save_content(content)

    def connection(self) -> Connection | None:
        if self.content is None or not self.content.connection_id:
            return None
        for connection in self.cache.get(Resource.CONNECTIONS):
            if connection.id == self.content.connection_id:
                return connection
        logger.warning(f"Connection \"{self.content.connection_id}\" not found")
        return None

    def save_actions(self) -> list[dict[str, str]]:
        if self.content is None or self.content.is_locked:
            return []
        if self.connection() is None:
            return [{"value": SaveAction.SAVE.value, "label": _("Save")}]

        actions = [
            {"value": SaveAction.PUBLISH.value, "label": _("Publish")},
            {"value": SaveAction.PREVIEW.value, "label": _("Preview")},
        ]
        if self.content.is_published:
            actions.append({"value": SaveAction.UNPUBLISH.value, "label": _("Unpublish")})
        actions.append({"value": SaveAction.SAVE.value, "label": _("(No action)")})
        return actions

    def remote_url(self) -> str | None:
        connection = self.connection()
        if connection is None or not self.content.is_published:
            return None
        return connection.remote_url(self.content.get_property("url", self.language))

    def tabs(self) -> list[dict[str, Any]]:
        tabs = [
            {
                "id": tab_id,
                "label": label,
                "active": tab_id == self.active_tab,
                "url": CONTENT_EDITOR_ROUTE.format(content_id=self.content.id, tab_id=tab_id),
            }
            for tab_id, label in self.schema.tabs.items()
        ]
        tabs.append(
            {
                "id": META_TAB,
                "label": _("Meta"),
                "active": self.active_tab == META_TAB,
                "url": CONTENT_EDITOR_ROUTE.format(content_id=self.content.id, tab_id=META_TAB),
            }
        )
        return tabs

    def view(self) -> EditorView:
        if self.state == EditorState.ERROR:
            return EditorView(
                content_id=self._content_id,
                state=self.state,
                error=self.error,
                fallback_url=self.fallback_url,
            )

        actions = self.save_actions()
        return EditorView(
            content_id=self.content.id,
            state=self.state,
            active_tab=self.active_tab,
            tabs=self.tabs(),
            fields=self.fields,
            save_actions=actions,
            default_save_action=actions[0]["value"] if actions else None,
            remote_url=self.remote_url(),
            locked=self.content.is_locked,
            dirty=self.dirty,
            error=self.error,
        )

    def _fail(self, error: Exception, fallback_url: str | None = None) -> EditorView:
        logger.error(f"Failed to load content editor for {self._content_id}: {error}")
        self.state = EditorState.ERROR
        self.error = str(error)
        self.fallback_url = fallback_url
        self.fields = []
        return self.view()
