"""Validator for format specifier placeholders."""

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence


@dataclass
class PlaceholderIssue:
    """A placeholder whose occurrence count differs between source and translation."""

    token: str
    source_count: int
    translation_count: int

    @property
    def message(self) -> str:
        return (
            f"Placeholder {self.token} appears {self.source_count} time(s) in the source "
            f"but {self.translation_count} time(s) in the translation"
        )


class PlaceholderValidator:
    """
    Checks that format specifiers survive translation.

    Tokens are counted as raw substrings, so reordering placeholders inside
    the translated sentence is allowed as long as every token keeps its count.
    """

    TOKENS = ("%@", "%d", "%lld", "%lf")

    def __init__(self, tokens: Sequence[str] = TOKENS):
        self.tokens = tuple(tokens)

    def count_tokens(self, text: str) -> Dict[str, int]:
        """Count occurrences of each tracked token in ``text``."""
        return {token: text.count(token) for token in self.tokens}

    def find_issues(self, source: str, translation: str) -> List[PlaceholderIssue]:
        """Return one issue per token whose count differs, in token order."""
        source_counts = self.count_tokens(source)
        translation_counts = self.count_tokens(translation)
        return [
            PlaceholderIssue(token, source_counts[token], translation_counts[token])
            for token in self.tokens
            if source_counts[token] != translation_counts[token]
        ]

    def first_mismatch(self, source: str, translation: str) -> Optional[PlaceholderIssue]:
        issues = self.find_issues(source, translation)
        return issues[0] if issues else None
