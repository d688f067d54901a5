from typing import Any

from markdown_it import MarkdownIt
from markupsafe import Markup

from .string import StringEditor

mdit = MarkdownIt("commonmark", {"breaks": True, "html": False})


class RichTextEditor(StringEditor):
    """HTML body text."""

    template_name = "editors/rich_text.html.j2"


class MarkdownEditor(StringEditor):
    template_name = "editors/markdown.html.j2"

    def template_context(self) -> dict[str, Any]:
        return {"preview": Markup(mdit.render(self.value or ""))}
