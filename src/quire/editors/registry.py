"""Registry mapping editor ids to field editor factories."""

from __future__ import annotations

import logging
from typing import Callable

from ..consts import EDITOR_SUFFIX
from ..utils import normalize_editor_id
from .base import FieldEditor

logger = logging.getLogger(__name__)

EditorFactory = Callable[..., FieldEditor]


class FieldEditorRegistry:
    """Editor factories keyed by normalized editor id.

    Ids are normalized on both registration and lookup, so ``"string"``,
    ``"String"`` and ``"StringEditor"`` all refer to the same editor.
    """

    def __init__(self):
        self._editors: dict[str, EditorFactory] = {}

    def register(self, editor_id: str, factory: EditorFactory) -> None:
        key = normalize_editor_id(editor_id, EDITOR_SUFFIX)
        if not key:
            raise ValueError("Editor id cannot be empty")
        if key in self._editors:
            logger.warning(f"Replacing registered editor \"{key}\"")
        self._editors[key] = factory

    def lookup(self, editor_id: str | None) -> EditorFactory | None:
        key = normalize_editor_id(editor_id, EDITOR_SUFFIX)
        if not key:
            return None
        return self._editors.get(key)

    def ids(self) -> list[str]:
        return sorted(self._editors)

    def __contains__(self, editor_id: str) -> bool:
        return self.lookup(editor_id) is not None


def default_registry() -> FieldEditorRegistry:
    """Create a registry holding all built-in editors."""
    from . import BUILTIN_EDITORS

    registry = FieldEditorRegistry()
    for editor_cls in BUILTIN_EDITORS:
        registry.register(editor_cls.editor_id(), editor_cls)

    logger.debug(f"Registered {len(BUILTIN_EDITORS)} built-in field editors")
    return registry
