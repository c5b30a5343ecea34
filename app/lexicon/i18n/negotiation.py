"""Language negotiation from client-supplied signals.

Provides Accept-Language parsing and matching, cookie header parsing and
the precedence rule used to pick the initial language of a request:

1. Persisted preference (cookie)
2. Accept-Language header match
3. Default language
"""

from typing import Dict, List, Optional, Sequence
from urllib.parse import unquote

from lexicon.i18n.models import LanguagePreference
from lexicon.logging import get_module_logger

logger = get_module_logger()

WILDCARD = "*"


def _parse_quality(params: Sequence[str]) -> Optional[float]:
    """Get the q value from header parameters.

    Returns:
        Quality in [0, 1], 1.0 when absent, or None when malformed.
    """
    for param in params:
        name, sep, value = param.partition("=")
        if name.strip().lower() != "q":
            continue
        if not sep:
            return None
        try:
            quality = float(value.strip())
        except ValueError:
            return None
        if not 0.0 <= quality <= 1.0:
            return None
        return quality
    return 1.0


def parse_accept_language(accept_language: Optional[str]) -> List[LanguagePreference]:
    """Parse an Accept-Language header into ranked preferences.

    Parses "ko-KR,ko;q=0.9,en-US;q=0.8" into
    [(ko-kr, 1.0), (ko, 0.9), (en-us, 0.8)]. Entries with an empty tag or
    a malformed quality are skipped; the rest of the header is kept. The
    sort is stable, so entries of equal quality keep their header order.

    Args:
        accept_language: Raw header value.

    Returns:
        Preferences sorted by quality, highest first.
    """
    if not accept_language:
        return []

    preferences: List[LanguagePreference] = []
    for entry in accept_language.split(","):
        parts = [part.strip() for part in entry.split(";")]
        code = parts[0].lower()
        if not code:
            continue

        quality = _parse_quality(parts[1:])
        if quality is None:
            logger.debug("skipped_malformed_language_entry", entry=entry.strip())
            continue

        preferences.append(LanguagePreference(code=code, quality=quality))

    return sorted(preferences, key=lambda preference: preference.quality, reverse=True)


def match_language(
    preference: LanguagePreference, available_languages: Sequence[str]
) -> Optional[str]:
    """Match a single preference against the available languages.

    Tries, in order: the full tag, the primary subtag, then the first
    available language starting with the primary subtag. Comparison is
    case-insensitive; the available spelling is returned.
    """
    if preference.code == WILDCARD:
        return None

    lowered = [language.lower() for language in available_languages]

    if preference.code in lowered:
        return available_languages[lowered.index(preference.code)]

    primary = preference.primary_subtag
    if not primary:
        return None
    if primary in lowered:
        return available_languages[lowered.index(primary)]

    for language, lowered_language in zip(available_languages, lowered):
        if lowered_language.startswith(primary):
            return language

    return None


def match_accept_language(
    accept_language: Optional[str], available_languages: Sequence[str]
) -> Optional[str]:
    """Return the best available language for an Accept-Language header.

    Args:
        accept_language: Raw header value.
        available_languages: Language codes the application serves.

    Returns:
        Best matching language code, or None if nothing matches.

    Example:
        >>> match_accept_language("ko-KR,ko;q=0.9,en-US;q=0.8,en;q=0.7", ["en", "ko"])
        'ko'
    """
    if not accept_language or not available_languages:
        return None

    for preference in parse_accept_language(accept_language):
        match = match_language(preference, available_languages)
        if match is not None:
            return match

    return None


def parse_cookies(cookie_header: Optional[str]) -> Dict[str, str]:
    """Parse a Cookie header into a name -> value mapping.

    Names and values are percent-decoded. Pairs without a name or value
    are skipped.

    Example:
        >>> parse_cookies("i18n-language=ko; theme=dark")
        {'i18n-language': 'ko', 'theme': 'dark'}
    """
    if not cookie_header:
        return {}

    cookies: Dict[str, str] = {}
    for cookie in cookie_header.split(";"):
        name, _, value = cookie.strip().partition("=")
        if name and value:
            cookies[unquote(name)] = unquote(value)
    return cookies


def select_language(
    cookie_language: Optional[str],
    accept_language: Optional[str],
    available_languages: Sequence[str],
    default_language: str,
) -> str:
    """Choose the initial language of a request.

    A stored preference always wins, then the header match, then the
    default language.

    Args:
        cookie_language: Persisted preference, already decoded.
        accept_language: Raw Accept-Language header.
        available_languages: Language codes the application serves.
        default_language: Final fallback.

    Returns:
        The selected language code.
    """
    if cookie_language:
        logger.debug("language_selected", source="cookie", language=cookie_language)
        return cookie_language

    detected = match_accept_language(accept_language, available_languages)
    if detected:
        logger.debug("language_selected", source="header", language=detected)
        return detected

    logger.debug("language_selected", source="default", language=default_language)
    return default_language


def detect_language(
    cookie_header: Optional[str],
    accept_language: Optional[str],
    available_languages: Sequence[str],
    default_language: str = "en",
    cookie_name: str = "i18n-language",
) -> str:
    """Choose the initial language from raw Cookie and Accept-Language headers.

    Example:
        >>> detect_language("i18n-language=ja", "ko", ["en", "ko", "ja"])
        'ja'
        >>> detect_language(None, "ko-KR", ["en", "ko"])
        'ko'
    """
    cookie_language = parse_cookies(cookie_header).get(cookie_name)
    return select_language(
        cookie_language, accept_language, available_languages, default_language
    )
