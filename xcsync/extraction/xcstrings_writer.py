"""Writer for Apple's .xcstrings JSON format (Xcode 15+)."""

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Union

from ..errors import FormatError
from ..models.string_entry import XCStringsFile, StringEntry, Localization

# Xcode writes `"key" : value` with two-space indentation
_INDENT = "  "
_SEPARATOR = " : "


class XCStringsWriter:
    """Writer for .xcstrings files."""

    def write(self, xcstrings: XCStringsFile, output_path: Union[str, Path]) -> None:
        """
        Write an XCStringsFile to disk.

        The document is written to a temporary file next to the target and
        then moved over it, so readers never see a half-written catalog.

        Args:
            xcstrings: The XCStringsFile to write
            output_path: Path to write the file to
        """
        content = self.to_bytes(xcstrings)

        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(
            dir=str(path.parent), prefix=f".{path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(content)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

    def to_string(self, xcstrings: XCStringsFile) -> str:
        """
        Convert an XCStringsFile to a JSON string.

        Keys are sorted, slashes are left unescaped and non-ASCII text is
        written as-is, matching the files Xcode produces.

        Args:
            xcstrings: The XCStringsFile to convert

        Returns:
            JSON string representation
        """
        data = self._to_dict(xcstrings)
        try:
            return _encode(data, 0)
        except (TypeError, ValueError) as e:
            raise FormatError(f"Catalog cannot be encoded as JSON: {e}") from e

    def to_bytes(self, xcstrings: XCStringsFile) -> bytes:
        """Encode an XCStringsFile as UTF-8 JSON bytes."""
        try:
            return self.to_string(xcstrings).encode("utf-8")
        except UnicodeEncodeError as e:
            raise FormatError(f"Catalog contains text that is not valid UTF-8: {e}") from e

    def _to_dict(self, xcstrings: XCStringsFile) -> Dict[str, Any]:
        """Convert XCStringsFile to dictionary for JSON serialization."""
        strings_dict = {
            key: self._entry_to_dict(entry) for key, entry in xcstrings.strings.items()
        }

        return {
            **xcstrings.extra,
            "sourceLanguage": xcstrings.source_language,
            "strings": strings_dict,
            "version": xcstrings.version,
        }

    def _entry_to_dict(self, entry: StringEntry) -> Dict[str, Any]:
        """Convert a StringEntry to dictionary."""
        entry_dict: Dict[str, Any] = dict(entry.extra)

        if entry.comment is not None:
            entry_dict["comment"] = entry.comment

        if entry.extraction_state is not None:
            entry_dict["extractionState"] = entry.extraction_state

        if entry.localizations or entry.keep_empty_localizations:
            entry_dict["localizations"] = {
                lang: self._localization_to_dict(loc)
                for lang, loc in entry.localizations.items()
            }

        return entry_dict

    def _localization_to_dict(self, loc: Localization) -> Dict[str, Any]:
        """Convert a Localization to dictionary."""
        loc_dict: Dict[str, Any] = dict(loc.extra)

        if loc.string_unit:
            loc_dict["stringUnit"] = {
                **loc.string_unit.extra,
                "state": loc.string_unit.state,
                "value": loc.string_unit.value,
            }

        if loc.variations is not None:
            loc_dict["variations"] = loc.variations

        return loc_dict


def _encode(value: Any, level: int) -> str:
    """Encode a JSON value the way Xcode lays it out.

    Empty objects and arrays keep a blank line between their brackets.
    """
    outer = _INDENT * level
    inner = _INDENT * (level + 1)

    if isinstance(value, dict):
        if not value:
            return "{\n\n" + outer + "}"
        items = []
        for key in sorted(value):
            if not isinstance(key, str):
                raise TypeError(f"keys must be str, not {type(key).__name__}")
            items.append(inner + _scalar(key) + _SEPARATOR + _encode(value[key], level + 1))
        return "{\n" + ",\n".join(items) + "\n" + outer + "}"

    if isinstance(value, (list, tuple)):
        if not value:
            return "[\n\n" + outer + "]"
        items = [inner + _encode(item, level + 1) for item in value]
        return "[\n" + ",\n".join(items) + "\n" + outer + "]"

    return _scalar(value)


def _scalar(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, allow_nan=False)
