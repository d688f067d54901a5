"""Utility functions for Quire application"""

import logging
import uuid
from datetime import datetime
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo

logger = logging.getLogger(__name__)

UTC = ZoneInfo("UTC")


def canonicalify(p: Path | str) -> Path:
    return Path(p).expanduser().resolve()


def ensure_path(p: Path | str) -> Path:
    path = canonicalify(p)
    path.mkdir(parents=True, exist_ok=True)
    return path


def sanitize(sensitive: str | None, keep_chars: int = 2) -> str:
    """Mask sensitive information for logging.

    Args:
        sensitive: The sensitive string to mask (e.g., token, password)
        keep_chars: Number of leading and trailing characters to keep

    Returns:
        Masked string with middle characters replaced by asterisks.

    Examples:
        >>> sanitize("9f8e7d6c5b4a")
        '9f***4a'
        >>> sanitize(None)
        '***'
    """
    if not sensitive:
        return "***"

    if len(sensitive) <= keep_chars * 2:
        return "***"

    return f"{sensitive[:keep_chars]}***{sensitive[-keep_chars:]}"


def get_now(timezone: ZoneInfo = UTC) -> datetime:
    """Get current time in specified timezone

    Args:
        timezone: Timezone object

    Returns:
        Current time with timezone info
    """
    return datetime.now(timezone)


def new_id() -> str:
    """Generate a 40 character hex id, the format used for content and schemas."""
    return (uuid.uuid4().hex + uuid.uuid4().hex)[:40]


def merge_dicts(base: dict[str, Any] | None, override: dict[str, Any] | None) -> dict[str, Any]:
    """Shallow merge two mappings, values from ``override`` win.

    Keys whose override value is ``None`` keep the base value.
    """
    merged = dict(base or {})
    for key, value in (override or {}).items():
        if value is None and key in merged:
            continue
        merged[key] = value
    return merged


def normalize_editor_id(editor_id: str | None, suffix: str = "Editor") -> str | None:
    """Normalize a stored editor id to its registered form.

    Older records store editor ids such as ``"string"``; the registry is keyed
    by ``"StringEditor"``.

    Examples:
        >>> normalize_editor_id("string")
        'StringEditor'
        >>> normalize_editor_id("RichTextEditor")
        'RichTextEditor'
    """
    if not editor_id:
        return None

    editor_id = editor_id[0].upper() + editor_id[1:]
    if suffix not in editor_id:
        editor_id += suffix
    return editor_id
