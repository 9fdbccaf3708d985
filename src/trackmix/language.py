"""Language code display names and per-kind defaults.

Analyzer backends report a mix of ISO 639-1 ("ja"), ISO 639-2 ("jpn",
"chi", "ger") and IETF BCP 47 ("zh-Hans") codes. This module maps the
common ones to a human-readable name and supplies the language written
into remuxed tracks when the caller gives no override.
"""

from __future__ import annotations

SIMPLIFIED_CHINESE = "Simplified Chinese"
TRADITIONAL_CHINESE = "Traditional Chinese"

# Prefixes checked before the exact-match table (script/region variants)
_CHINESE_PREFIXES: tuple[tuple[str, str], ...] = (
    ("zh-hans", SIMPLIFIED_CHINESE),
    ("zh-hant", TRADITIONAL_CHINESE),
    ("zh-hk", TRADITIONAL_CHINESE),
    ("zh-mo", TRADITIONAL_CHINESE),
)

_DISPLAY_NAMES: dict[str, str] = {
    "ja": "Japanese",
    "jpn": "Japanese",
    "en": "English",
    "eng": "English",
    "zh": "Chinese",
    "chi": "Chinese",
    "zho": "Chinese",
    "zh-cn": SIMPLIFIED_CHINESE,
    "chs": SIMPLIFIED_CHINESE,
    "cmn": SIMPLIFIED_CHINESE,
    "zh-tw": TRADITIONAL_CHINESE,
    "cht": TRADITIONAL_CHINESE,
    "ko": "Korean",
    "kor": "Korean",
    "fr": "French",
    "fra": "French",
    "de": "German",
    "deu": "German",
    "ger": "German",
    "es": "Spanish",
    "spa": "Spanish",
}

# Language written into remuxed tracks when no override is given
_KIND_DEFAULT_LANGUAGES: dict[str, str] = {
    "video": "ja",
    "audio": "ja",
    "subtitle": "zh-Hans",
}

UNDETERMINED = "und"


def normalize_code(code: str) -> str:
    """Trim and lowercase a language code."""
    return code.strip().lower()


def language_display_name(code: str | None) -> str | None:
    """Map a language code to a human-readable name.

    Args:
        code: Language code as reported by the analyzer, or None.

    Returns:
        Display name, or None for missing or unmapped codes.

    Examples:
        >>> language_display_name("jpn")
        'Japanese'
        >>> language_display_name(" zh-Hant-TW ")
        'Traditional Chinese'
        >>> language_display_name("tlh") is None
        True
    """
    if code is None:
        return None

    normalized = normalize_code(code)
    for prefix, name in _CHINESE_PREFIXES:
        if normalized.startswith(prefix):
            return name
    return _DISPLAY_NAMES.get(normalized)


def default_language_for_kind(kind: str) -> str:
    """Return the language assigned to remuxed tracks of a kind.

    Unknown kinds get the undetermined code "und".
    """
    return _KIND_DEFAULT_LANGUAGES.get(kind, UNDETERMINED)
