"""Parser for Apple's .xcstrings JSON format (Xcode 15+)."""

import json
from pathlib import Path
from typing import Any, Dict, Union

from ..errors import FormatError
from ..models.string_entry import StringUnit, Localization, StringEntry, XCStringsFile

_CATALOG_FIELDS = ("sourceLanguage", "strings", "version")
_ENTRY_FIELDS = ("comment", "extractionState", "localizations")
_LOCALIZATION_FIELDS = ("stringUnit", "variations")
_UNIT_FIELDS = ("state", "value")


class XCStringsParser:
    """Parser for .xcstrings files."""

    def parse(self, file_path: Union[str, Path]) -> XCStringsFile:
        """
        Parse an .xcstrings file and return a structured representation.

        Args:
            file_path: Path to the .xcstrings file

        Returns:
            XCStringsFile object containing all parsed data

        Raises:
            FileNotFoundError: If the file does not exist
            FormatError: If the content is not a valid catalog
        """
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        return self.load(path.read_bytes())

    def load(self, content: Union[bytes, str]) -> XCStringsFile:
        """
        Parse .xcstrings content.

        Args:
            content: Raw UTF-8 bytes or an already decoded JSON string

        Returns:
            XCStringsFile object
        """
        if isinstance(content, bytes):
            try:
                content = content.decode("utf-8")
            except UnicodeDecodeError as e:
                raise FormatError(f"Catalog is not valid UTF-8: {e}") from e

        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise FormatError(f"Catalog is not valid JSON: {e}") from e

        return self._parse_data(data)

    def _parse_data(self, data: Any) -> XCStringsFile:
        """Parse the JSON data structure into our model."""
        data = _require_object(data, "catalog")
        source_language = _require_string(data, "sourceLanguage", "catalog")
        version = _require_string(data, "version", "catalog")
        strings_data = _require_object(data.get("strings"), "catalog 'strings'")

        strings = {}
        for key, entry_data in strings_data.items():
            if not key:
                raise FormatError("Catalog contains an empty term key")
            strings[key] = self._parse_string_entry(key, entry_data)

        return XCStringsFile(
            source_language=source_language,
            strings=strings,
            version=version,
            extra=_extra(data, _CATALOG_FIELDS),
        )

    def _parse_string_entry(self, key: str, entry_data: Any) -> StringEntry:
        """Parse a single string entry."""
        where = f"term {key!r}"
        entry_data = _require_object(entry_data, where)
        comment = _optional_string(entry_data, "comment", where)
        extraction_state = _optional_string(entry_data, "extractionState", where)

        localizations = {}
        if "localizations" in entry_data:
            loc_items = _require_object(entry_data["localizations"], f"{where} localizations")
            for lang, loc_data in loc_items.items():
                localizations[lang] = self._parse_localization(loc_data, f"{where} [{lang}]")

        return StringEntry(
            key=key,
            comment=comment,
            localizations=localizations,
            extraction_state=extraction_state,
            keep_empty_localizations="localizations" in entry_data,
            extra=_extra(entry_data, _ENTRY_FIELDS),
        )

    def _parse_localization(self, loc_data: Any, where: str) -> Localization:
        """Parse a localization entry."""
        loc_data = _require_object(loc_data, where)
        string_unit = None
        variations = None

        if "stringUnit" in loc_data:
            string_unit = _parse_unit(loc_data["stringUnit"], where)

        if "variations" in loc_data:
            variations = _require_object(loc_data["variations"], f"{where} variations")
            if "plural" in variations:
                plural = _require_object(variations["plural"], f"{where} plural variations")
                if "other" not in plural:
                    raise FormatError(f"{where}: plural variations must define 'other'")

        return Localization(
            string_unit=string_unit,
            variations=variations,
            extra=_extra(loc_data, _LOCALIZATION_FIELDS),
        )


def _parse_unit(unit_data: Any, where: str) -> StringUnit:
    unit_data = _require_object(unit_data, f"{where} stringUnit")
    return StringUnit(
        value=_require_string(unit_data, "value", f"{where} stringUnit"),
        state=_require_string(unit_data, "state", f"{where} stringUnit"),
        extra=_extra(unit_data, _UNIT_FIELDS),
    )


def _require_object(value: Any, where: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise FormatError(f"Expected a JSON object for {where}")
    return value


def _require_string(data: Dict[str, Any], name: str, where: str) -> str:
    if name not in data:
        raise FormatError(f"Missing required field '{name}' in {where}")
    value = data[name]
    if not isinstance(value, str):
        raise FormatError(f"Field '{name}' in {where} must be a string")
    return value


def _optional_string(data: Dict[str, Any], name: str, where: str):
    if data.get(name) is None:
        return None
    return _require_string(data, name, where)


def _extra(data: Dict[str, Any], known: tuple) -> Dict[str, Any]:
    return {k: v for k, v in data.items() if k not in known}
