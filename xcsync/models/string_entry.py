"""Data models for XCStrings file structure."""

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..errors import TermNotFoundError

# Workflow states written by Xcode; any other string is accepted as well
STATE_NEW = "new"
STATE_STALE = "stale"
STATE_NEEDS_REVIEW = "needs_review"
STATE_TRANSLATED = "translated"


@dataclass
class StringUnit:
    """Represents a single string translation unit."""

    value: str
    state: str = STATE_NEW
    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass
class Localization:
    """Represents a localization entry for a specific language."""

    string_unit: Optional[StringUnit] = None
    variations: Optional[Dict[str, Any]] = None  # For plurals/device variants
    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass
class StringEntry:
    """Represents a single localizable string entry."""

    key: str
    comment: Optional[str] = None
    localizations: Dict[str, Localization] = field(default_factory=dict)
    extraction_state: Optional[str] = None  # manual, extracted_with_value, migrated
    extra: Dict[str, Any] = field(default_factory=dict)
    # Written as an empty object even when no language is present
    keep_empty_localizations: bool = False

    def get_source_value(self, source_language: str = "en") -> str:
        """Get the source language value for this string."""
        loc = self.localizations.get(source_language)
        if loc and loc.string_unit:
            return loc.string_unit.value
        # If no explicit localization, the key itself is the source value
        return self.key

    def get_unit(self, language: str) -> Optional[StringUnit]:
        """Return the string unit for a language, if there is one."""
        loc = self.localizations.get(language)
        return loc.string_unit if loc else None

    def has_translation(self, language: str) -> bool:
        """Check if this string has a translation for the given language."""
        unit = self.get_unit(language)
        return unit is not None and unit.value != ""


@dataclass
class XCStringsFile:
    """Represents a complete .xcstrings file."""

    source_language: str
    strings: Dict[str, StringEntry]
    version: str = "1.0"
    extra: Dict[str, Any] = field(default_factory=dict)

    def get_term(self, key: str) -> StringEntry:
        """
        Look up an entry by its key.

        Raises:
            TermNotFoundError: If the catalog has no such key
        """
        try:
            return self.strings[key]
        except KeyError:
            raise TermNotFoundError(key) from None

    def set_localization(self, key: str, language: str, unit: StringUnit) -> "XCStringsFile":
        """
        Store a translation unit for one language of an entry.

        The unit is copied so later changes by the caller do not leak into the
        catalog. Plural variations already present for the language are kept.

        Args:
            key: Term key of an existing entry
            language: Language code to write
            unit: The new translation unit

        Returns:
            The catalog itself, updated in place
        """
        entry = self.get_term(key)
        new_unit = copy.deepcopy(unit)
        existing = entry.localizations.get(language)
        if existing is None:
            entry.localizations[language] = Localization(string_unit=new_unit)
        else:
            existing.string_unit = new_unit
        return self

    def localized_languages(self) -> List[str]:
        """Sorted language codes used by any entry, excluding the source language."""
        languages = set()
        for entry in self.strings.values():
            languages.update(entry.localizations.keys())
        languages.discard(self.source_language)
        return sorted(languages)

    def get_untranslated_keys(self, target_language: str) -> List[str]:
        """Get list of keys that don't have translations for the target language."""
        return [
            key
            for key in sorted(self.strings)
            if not self.strings[key].has_translation(target_language)
        ]
