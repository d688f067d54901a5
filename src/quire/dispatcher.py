"""Field dispatch: picks the fields of a tab and renders each with its editor."""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional

from markupsafe import Markup
from pydantic import ValidationError as PydanticValidationError

from .consts import META_TAB, MULTILINGUAL_FLAG, PROPERTIES_KEY, TEMPLATE_FIELD
from .content import field_sanity_check
from .editors.base import ChangeEvent, EditorContext, FieldEditor, get_environment
from .editors.registry import FieldEditorRegistry
from .errors import CyclicSchemaError, NotFoundError, ValidationError
from .resolver import SchemaResolver
from .schema import FieldDefinition

logger = logging.getLogger(__name__)


@dataclass
class EditSession:
    """Edit state of one open document."""

    is_locked: bool = False
    dirty: bool = False


@dataclass
class RenderedField:
    key: str
    label: str
    editor_id: str
    html: str
    editor: FieldEditor = field(repr=False)

    @property
    def errors(self) -> list[str]:
        return self.editor.errors

    def to_dict(self) -> dict[str, Any]:
        return {
            "key": self.key,
            "label": self.label,
            "editorId": self.editor_id,
            "html": str(self.html),
            "errors": list(self.errors),
        }


def select_fields_for_tab(tab_id: str, field_definitions: Mapping[str, Any]) -> dict[str, Any]:
    """Pick the field definitions shown on a tab.

    A definition belongs to a tab when its ``tabId`` matches, or when it has
    no ``tabId`` and the tab is the meta tab. The ``properties`` map is never
    a field of the meta tab.
    """
    is_meta_tab = tab_id == META_TAB
    selected = {}

    for key, definition in field_definitions.items():
        if is_meta_tab and key == PROPERTIES_KEY:
            continue

        definition_tab = definition.get("tabId") if isinstance(definition, dict) else None
        if (not definition_tab and is_meta_tab) or definition_tab == tab_id:
            selected[key] = definition

    return selected


class FieldDispatcher:
    """Renders field definitions with the editors their field schemas name.

    Failures are contained to the field they occur in: a field whose schema
    or editor cannot be found is logged and skipped.
    """

    def __init__(
        self,
        resolver: SchemaResolver,
        registry: FieldEditorRegistry,
        session: EditSession | None = None,
        context: EditorContext | None = None,
    ):
        self.resolver = resolver
        self.registry = registry
        self.session = session or EditSession()
        self.context = context or EditorContext()
        self.context.dispatcher = self
        if self.context.resolver is None:
            self.context.resolver = resolver

    @property
    def language(self) -> str:
        return self.context.language

    def render_fields_for_tab(
        self,
        tab_id: str,
        field_definitions: Mapping[str, Any],
        field_values: dict[str, Any],
    ) -> list[RenderedField]:
        return self.render_fields(select_fields_for_tab(tab_id, field_definitions), field_values)

    def render_fields(
        self,
        field_definitions: Mapping[str, Any],
        field_values: dict[str, Any],
        notify: Optional[Callable[[ChangeEvent], None]] = None,
        disabled: bool = False,
    ) -> list[RenderedField]:
        rendered = []
        for key, definition in field_definitions.items():
            result = self.render_field(key, definition, field_values, notify=notify, disabled=disabled)
            if result is not None:
                rendered.append(result)
        return rendered

    def render_field(
        self,
        key: str,
        raw_definition: Any,
        field_values: dict[str, Any],
        notify: Optional[Callable[[ChangeEvent], None]] = None,
        disabled: bool = False,
    ) -> RenderedField | None:
        try:
            definition = FieldDefinition.model_validate(raw_definition)
        except PydanticValidationError as e:
            logger.warning(f"Invalid field definition for key \"{key}\": {e}")
            return None

        if not definition.schema_id:
            logger.warning(f"Field \"{key}\" has no field schema")
            return None

        try:
            field_schema = self.resolver.resolve_field_schema(definition.schema_id)
        except (NotFoundError, CyclicSchemaError) as e:
            logger.warning(f"FieldSchema \"{definition.schema_id}\" for key \"{key}\" not found: {e}")
            return None

        editor_factory = self.registry.lookup(field_schema.editor_id)
        if editor_factory is None:
            logger.warning(f"No editor by id \"{field_schema.editor_id}\" found for key \"{key}\"")
            return None

        stored = field_sanity_check(
            field_values.get(key),
            definition,
            self.language,
            self.context.languages,
        )
        # Absent values stay absent, and locked documents are never touched
        if not self.session.is_locked and (key in field_values or stored is not None):
            field_values[key] = stored
        value = stored.get(self.language) if definition.multilingual else stored

        # The field definition config wins over the field schema config
        config = copy.deepcopy(definition.config or field_schema.config or {})

        editor = editor_factory(
            value=value,
            disabled=definition.disabled or disabled,
            config=config,
            schema=field_schema,
            multilingual=definition.multilingual,
            context=self.context,
        )

        try:
            editor.value = editor.sanitize(value)
        except ValidationError as e:
            logger.debug(f"Resetting value of \"{key}\": {e}")
            editor.value = copy.copy(editor.empty_value)

        editor.on_change(
            lambda event: self._apply_change(field_values, key, definition, event, notify)
        )

        label = definition.label or key
        html = get_environment().get_template(TEMPLATE_FIELD).render(
            key=key,
            label=label,
            editor_id=editor.editor_id(),
            disabled=editor.disabled,
            body=editor.render(),
            key_actions=editor.render_key_actions(),
            errors=editor.errors,
        )

        return RenderedField(
            key=key,
            label=label,
            editor_id=editor.editor_id(),
            html=Markup(html),
            editor=editor,
        )

    def _apply_change(
        self,
        field_values: dict[str, Any],
        key: str,
        definition: FieldDefinition,
        event: ChangeEvent,
        notify: Optional[Callable[[ChangeEvent], None]],
    ) -> None:
        if self.session.is_locked:
            logger.debug(f"Ignoring change of \"{key}\" on a locked document")
            return

        if definition.multilingual:
            current = field_values.get(key)
            if not isinstance(current, dict):
                current = {}
                field_values[key] = current
            current[MULTILINGUAL_FLAG] = True
            current[self.language] = event.value
        else:
            field_values[key] = event.value

        if event.dirty:
            self.session.dirty = True

        if notify is not None:
            notify(event)
