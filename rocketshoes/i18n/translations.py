"""Internationalization System"""

import json
from pathlib import Path
from typing import Any

# Supported languages with their names
SUPPORTED_LANGUAGES = {
    "pt": "Português",
    "en": "English",
}

# Default language
DEFAULT_LANGUAGE = "en"

# Cache for loaded translations
_translations: dict[str, dict[str, Any]] = {}


def _get_locales_path() -> Path:
    """Get path to locales directory"""
    return Path(__file__).parent / "locales"


def _load_translations(lang: str) -> dict[str, Any]:
    """Load translations for a language"""
    if lang in _translations:
        return _translations[lang]

    file_path = _get_locales_path() / f"{lang}.json"

    if not file_path.exists():
        # Fallback to English
        if lang != DEFAULT_LANGUAGE:
            return _load_translations(DEFAULT_LANGUAGE)
        return {}

    with open(file_path, encoding="utf-8") as f:
        data = json.load(f)
    _translations[lang] = data if isinstance(data, dict) else {}
    return _translations[lang]


def _lookup(translations: dict[str, Any], key: str) -> Any:
    """Resolve dot-notation keys (e.g. "cart.add_failed")."""
    current_val: Any = translations
    try:
        for k in key.split("."):
            current_val = current_val[k]
    except (KeyError, TypeError):
        return None
    return current_val


def detect_language(language_code: str | None) -> str:
    """
    Normalize a language code to a supported language.

    "pt-BR" -> "pt", "en_US" -> "en", unknown -> DEFAULT_LANGUAGE.
    """
    if not language_code:
        return DEFAULT_LANGUAGE
    lang = language_code.replace("_", "-").split("-")[0].lower()
    return lang if lang in SUPPORTED_LANGUAGES else DEFAULT_LANGUAGE


def get_text(key: str, lang: str = DEFAULT_LANGUAGE, default: str | None = None) -> str:
    """
    Get translated text by key.

    Args:
        key: Translation key (e.g., "cart.out_of_stock")
        lang: Language code (e.g., "pt", "en")
        default: Default value if key not found (instead of returning key)

    Returns:
        Translated string or key/default if not found
    """
    lang = detect_language(lang)

    text = _lookup(_load_translations(lang), key)

    # Fallback to English if key not found
    if text is None and lang != DEFAULT_LANGUAGE:
        text = _lookup(_load_translations(DEFAULT_LANGUAGE), key)

    if text is None:
        return default if default is not None else key

    return str(text)
