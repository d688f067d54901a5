"""Internationalization (i18n) support for editor labels using gettext."""

import gettext as gettext_module
import logging
import threading
from pathlib import Path

logger = logging.getLogger(__name__)

DOMAIN = "quire"
LOCALE_DIR = Path(__file__).parent / "locales"

# Thread-local storage for translations
_thread_local = threading.local()

_ui_language = "en"


def initialize(ui_language: str = "en") -> None:
    """Initialize translation system with the interface language.

    Args:
        ui_language: Language code for editor labels and messages
    """
    global _ui_language

    _ui_language = ui_language
    if hasattr(_thread_local, "translation"):
        del _thread_local.translation

    logger.info(f"Translation initialized: UI={ui_language}")


def _get_translation() -> gettext_module.NullTranslations:
    if not hasattr(_thread_local, "translation"):
        _thread_local.translation = _load_translation(_ui_language)
    return _thread_local.translation


def gettext(message: str) -> str:
    """Translate an interface message.

    Args:
        message: Message to translate

    Returns:
        Translated message
    """
    return _get_translation().gettext(message)


def _load_translation(language: str | None = None) -> gettext_module.NullTranslations:
    """Load gettext translation object, falling back to the msgid."""
    if not language:
        return gettext_module.NullTranslations()

    try:
        return gettext_module.translation(
            domain=DOMAIN,
            localedir=str(LOCALE_DIR),
            languages=[language],
            fallback=True,
        )
    except Exception as e:
        logger.warning(f"Failed to load translation for {language}: {e}, using fallback")
        return gettext_module.NullTranslations()
