from __future__ import annotations

from .base import ChangeEvent, EditorContext, FieldEditor
from .boolean import BooleanEditor
from .date import DateEditor
from .dropdown import DropdownEditor, LanguageEditor, TagsEditor
from .nested import ArrayEditor, StructEditor
from .number import NumberEditor
from .reference import ContentReferenceEditor, ContentSchemaReferenceEditor
from .registry import FieldEditorRegistry, default_registry
from .rich_text import MarkdownEditor, RichTextEditor
from .string import StringEditor, UrlEditor

BUILTIN_EDITORS: list[type[FieldEditor]] = [
    ArrayEditor,
    BooleanEditor,
    ContentReferenceEditor,
    ContentSchemaReferenceEditor,
    DateEditor,
    DropdownEditor,
    LanguageEditor,
    MarkdownEditor,
    NumberEditor,
    RichTextEditor,
    StringEditor,
    StructEditor,
    TagsEditor,
    UrlEditor,
]

__all__ = [
    "BUILTIN_EDITORS",
    "ArrayEditor",
    "BooleanEditor",
    "ChangeEvent",
    "ContentReferenceEditor",
    "ContentSchemaReferenceEditor",
    "DateEditor",
    "DropdownEditor",
    "EditorContext",
    "FieldEditor",
    "FieldEditorRegistry",
    "LanguageEditor",
    "MarkdownEditor",
    "NumberEditor",
    "RichTextEditor",
    "StringEditor",
    "StructEditor",
    "TagsEditor",
    "UrlEditor",
    "default_registry",
]
