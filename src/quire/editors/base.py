"""Field editor base class and shared rendering environment."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup

from ..consts import TEMPLATE_KEY_ACTIONS
from ..content import Content
from ..i18n import gettext as _
from ..schema import Schema

if TYPE_CHECKING:
    from ..dispatcher import FieldDispatcher
    from ..resolver import SchemaResolver

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"


@lru_cache(maxsize=1)
def get_environment() -> Environment:
    return Environment(
        loader=FileSystemLoader(TEMPLATE_DIR),
        autoescape=select_autoescape(["html", "j2"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )


@dataclass
class ChangeEvent:
    """A value change reported by a field editor.

    ``dirty`` is False for changes that must not mark the document as
    having unsaved edits, such as editor UI state kept in the value.
    """

    value: Any
    dirty: bool = True


ChangeHandler = Callable[[ChangeEvent], None]


@dataclass
class EditorContext:
    """What an editor may look at beyond its own value."""

    language: str = "en"
    languages: list[str] = field(default_factory=lambda: ["en"])
    content: Optional[Content] = None
    schemas: list[Schema] = field(default_factory=list)
    contents: list[Content] = field(default_factory=list)
    resolver: Optional["SchemaResolver"] = None
    dispatcher: Optional["FieldDispatcher"] = None


class FieldEditor:
    """Renders and edits one field value.

    Subclasses set ``template_name`` and may override ``sanitize`` to coerce
    stored values, raising ``ValidationError`` for values they cannot use.
    """

    template_name: str = ""
    empty_value: Any = None

    def __init__(
        self,
        value: Any = None,
        disabled: bool = False,
        config: dict[str, Any] | None = None,
        schema: Schema | None = None,
        multilingual: bool = False,
        context: EditorContext | None = None,
    ):
        self.value = value
        self.disabled = disabled
        self.config = config if config is not None else {}
        self.schema = schema
        self.multilingual = multilingual
        self.context = context or EditorContext()
        self.errors: list[str] = []
        self._handlers: list[ChangeHandler] = []
        self.children: list = []

    @classmethod
    def editor_id(cls) -> str:
        return cls.__name__

    @classmethod
    def config_fields(cls) -> dict[str, dict[str, Any]]:
        """Field definitions describing this editor's config, for schema authoring."""
        return {}

    def sanitize(self, value: Any) -> Any:
        return value

    def on_change(self, handler: ChangeHandler) -> None:
        self._handlers.append(handler)

    def emit_change(self, value: Any, dirty: bool = True) -> None:
        self.value = value
        event = ChangeEvent(value=value, dirty=dirty)
        for handler in self._handlers:
            handler(event)

    def report_error(self, message: str) -> None:
        logger.error(message)
        self.errors.append(message)

    def key_actions(self) -> list[dict[str, str]]:
        actions = []
        if self.multilingual:
            actions.append({"action": "language", "label": self.context.language.upper()})
        return actions

    def template_context(self) -> dict[str, Any]:
        return {}

    def render(self) -> Markup:
        template = get_environment().get_template(self.template_name)
        return Markup(
            template.render(
                editor=self,
                value=self.value,
                config=self.config,
                disabled=self.disabled,
                _=_,
                **self.template_context(),
            )
        )

    def render_key_actions(self) -> Markup:
        template = get_environment().get_template(TEMPLATE_KEY_ACTIONS)
        return Markup(template.render(actions=self.key_actions(), disabled=self.disabled, _=_))
