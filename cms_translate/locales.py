"""Supported locales and their priority tiers."""

from dataclasses import dataclass
from typing import Dict, Iterable, List

from .exceptions import UnknownLocaleError


@dataclass(frozen=True)
class Locale:
    """A supported locale."""

    code: str
    name: str
    tier: int


TIER_NAMES: Dict[int, str] = {
    1: "Core",
    2: "High ROI",
    3: "Regional",
    4: "Optional",
}

SUPPORTED_LOCALES: List[Locale] = [
    # Tier 1 - Core markets
    Locale("en", "English", 1),
    Locale("ar", "Arabic", 1),
    Locale("hi", "Hindi", 1),
    # Tier 2 - High ROI markets
    Locale("zh", "Chinese", 2),
    Locale("ru", "Russian", 2),
    Locale("ur", "Urdu", 2),
    Locale("fr", "French", 2),
    # Tier 3 - Growing markets
    Locale("de", "German", 3),
    Locale("fa", "Persian", 3),
    Locale("bn", "Bengali", 3),
    Locale("fil", "Filipino", 3),
    # Tier 4 - Niche markets
    Locale("es", "Spanish", 4),
    Locale("tr", "Turkish", 4),
    Locale("it", "Italian", 4),
    Locale("ja", "Japanese", 4),
    Locale("ko", "Korean", 4),
    Locale("he", "Hebrew", 4),
]

_BY_CODE = {locale.code: locale for locale in SUPPORTED_LOCALES}


def get_locale(code: str) -> Locale:
    """Look up a supported locale by code."""
    try:
        return _BY_CODE[code]
    except KeyError:
        raise UnknownLocaleError(code) from None


def is_supported(code: str) -> bool:
    return code in _BY_CODE


def locales_for_tiers(tiers: Iterable[int]) -> List[Locale]:
    """
    Get the locales belonging to any of the given tiers.

    The result keeps the supported-locale order, so tier 1 locales always
    come first regardless of the order the tiers were given in.
    """
    wanted = set(tiers)
    return [locale for locale in SUPPORTED_LOCALES if locale.tier in wanted]


def target_locales(source_locale: str = "en") -> List[Locale]:
    """All supported locales except the source locale."""
    return [locale for locale in SUPPORTED_LOCALES if locale.code != source_locale]
