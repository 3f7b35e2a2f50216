"""Target language selection and language display names."""

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import List, Optional, Sequence

from .errors import ConfigError
from .models.string_entry import XCStringsFile

logger = logging.getLogger(__name__)

# Common languages worth translating into, most widely used first.
# English is the usual source language and is left out.
MAJOR_LANGUAGE_CODES = (
    "fr",  # French
    "es",  # Spanish
    "de",  # German
    "it",  # Italian
    "pt_PT",  # Portuguese (Portugal)
    "es_419",  # Spanish (Latin America)
    "pt_BR",  # Portuguese (Brazil)
    "zh_CN",  # Chinese (Mainland)
    "ja",  # Japanese
    "ko",  # Korean
    "zh_TW",  # Chinese (Taiwan)
    "th",  # Thai
    "vi",  # Vietnamese
    "uk",  # Ukrainian
    "el",  # Greek
    "tr",  # Turkish
    "ru",  # Russian
    "ar",  # Arabic
    "hi",  # Hindi
    "id",  # Indonesian
    "fa",  # Persian
    "he",  # Hebrew
    "pl",  # Polish
    "hu",  # Hungarian
    "da",  # Danish
    "fi",  # Finnish
    "sv",  # Swedish
    "nb",  # Norwegian Bokmål
    "nl",  # Dutch
    "sk",  # Slovak
    "sl",  # Slovenian
    "sr",  # Serbian
    "cs",  # Czech
    "et",  # Estonian
    "fil",  # Filipino
    "sw",  # Swahili
    "af",  # Afrikaans
    "am",  # Amharic
    "bg",  # Bulgarian
    "sq",  # Albanian
    "az",  # Azerbaijani
    "ka",  # Georgian
    "kk",  # Kazakh
    "uz",  # Uzbek
    "bs",  # Bosnian
    "mk",  # Macedonian
    "bn",  # Bengali
    "ca",  # Catalan
    "gu",  # Gujarati
    "hr",  # Croatian
    "lt",  # Lithuanian
    "lv",  # Latvian
    "ml",  # Malayalam
    "mr",  # Marathi
    "ms",  # Malay
    "ro",  # Romanian
    "ta",  # Tamil
    "te",  # Telugu
    "ur",  # Urdu
    "kn",  # Kannada
)

# English display names used in prompts and as reply keys
LANGUAGE_NAMES = MappingProxyType({
    "en": "English",
    "en_GB": "English (United Kingdom)",
    "en_AU": "English (Australia)",
    "fr": "French",
    "fr_CA": "French (Canada)",
    "es": "Spanish",
    "es_419": "Spanish (Latin America)",
    "es_MX": "Spanish (Mexico)",
    "de": "German",
    "it": "Italian",
    "pt": "Portuguese",
    "pt_PT": "Portuguese (Portugal)",
    "pt_BR": "Portuguese (Brazil)",
    "zh_CN": "Chinese (China mainland)",
    "zh_TW": "Chinese (Taiwan)",
    "zh_HK": "Chinese (Hong Kong)",
    "zh-Hans": "Chinese, Simplified",
    "zh-Hant": "Chinese, Traditional",
    "ja": "Japanese",
    "ko": "Korean",
    "th": "Thai",
    "vi": "Vietnamese",
    "uk": "Ukrainian",
    "el": "Greek",
    "tr": "Turkish",
    "ru": "Russian",
    "ar": "Arabic",
    "hi": "Hindi",
    "id": "Indonesian",
    "fa": "Persian",
    "he": "Hebrew",
    "pl": "Polish",
    "hu": "Hungarian",
    "da": "Danish",
    "fi": "Finnish",
    "sv": "Swedish",
    "nb": "Norwegian Bokmål",
    "nl": "Dutch",
    "sk": "Slovak",
    "sl": "Slovenian",
    "sr": "Serbian",
    "cs": "Czech",
    "et": "Estonian",
    "fil": "Filipino",
    "sw": "Swahili",
    "af": "Afrikaans",
    "am": "Amharic",
    "bg": "Bulgarian",
    "sq": "Albanian",
    "az": "Azerbaijani",
    "ka": "Georgian",
    "kk": "Kazakh",
    "uz": "Uzbek",
    "bs": "Bosnian",
    "mk": "Macedonian",
    "bn": "Bangla",
    "ca": "Catalan",
    "gu": "Gujarati",
    "hr": "Croatian",
    "lt": "Lithuanian",
    "lv": "Latvian",
    "ml": "Malayalam",
    "mr": "Marathi",
    "ms": "Malay",
    "ro": "Romanian",
    "ta": "Tamil",
    "te": "Telugu",
    "ur": "Urdu",
    "kn": "Kannada",
})


def language_name(code: str) -> str:
    """English name for a language code; unknown codes are returned unchanged."""
    name = LANGUAGE_NAMES.get(code)
    if name is None:
        name = LANGUAGE_NAMES.get(code.replace("-", "_"), code)
    return name


@dataclass
class TargetPolicy:
    """
    How to choose the languages of a run.

    Exactly one mode applies, checked in this order: ``all_major``, an explicit
    ``languages`` list, ``top`` N major languages, then the languages the
    catalog already contains.
    """

    all_major: bool = False
    languages: List[str] = field(default_factory=list)
    top: Optional[int] = None


def resolve_target_languages(policy: TargetPolicy, catalog: XCStringsFile) -> List[str]:
    """
    Compute the ordered language codes to process for a catalog.

    Args:
        policy: The selection policy for this run
        catalog: The catalog being synchronized

    Returns:
        Language codes in processing order

    Raises:
        ConfigError: If ``top`` is negative or larger than the major language list
    """
    if policy.all_major:
        return _without(MAJOR_LANGUAGE_CODES, catalog.source_language)

    if policy.languages:
        return list(policy.languages)

    if policy.top is not None:
        if policy.top < 0 or policy.top > len(MAJOR_LANGUAGE_CODES):
            raise ConfigError(
                f"--top must be between 0 and {len(MAJOR_LANGUAGE_CODES)}, got {policy.top}"
            )
        return list(MAJOR_LANGUAGE_CODES[:policy.top])

    return catalog.localized_languages()


def _without(codes: Sequence[str], source_language: str) -> List[str]:
    return [code for code in codes if code != source_language]
