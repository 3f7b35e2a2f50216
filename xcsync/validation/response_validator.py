"""Acceptance checks for model replies."""

import json
from typing import Any, Dict, Optional

from ..errors import ValidationError
from ..models.translation_result import Translation
from .placeholder_validator import PlaceholderValidator

EXPLANATION_KEY = "explanation"

NOT_AN_OBJECT = "not an object"
MISSING_SOURCE_KEY = "missing source key"
SOURCE_ECHO_MISMATCH = "source echo mismatch"
MISSING_TARGET_KEY = "missing target key"
EMPTY_TRANSLATION = "empty translation"
MISSING_EXPLANATION = "missing explanation"
PLACEHOLDER_COUNT_MISMATCH = "placeholder count mismatch"


class ResponseValidator:
    """
    Validates a model reply for a single-term translation request.

    The reply is expected to be a JSON object keyed by language names, e.g.
    ``{"English": "Save", "French": "Enregistrer"}``. Checks run in a fixed
    order and the first failing one is reported.
    """

    def __init__(self, placeholder_validator: Optional[PlaceholderValidator] = None):
        self.placeholder_validator = placeholder_validator or PlaceholderValidator()

    def validate(
        self,
        raw_reply: str,
        source_term: str,
        source_language: str,
        target_language: str,
        explain_required: bool = False,
    ) -> Translation:
        """
        Parse and check a raw reply.

        Args:
            raw_reply: The model's text, expected to be JSON
            source_term: The exact term that was sent for translation
            source_language: Display name used as the source key
            target_language: Display name used as the target key
            explain_required: Whether an "explanation" key is mandatory

        Returns:
            The accepted Translation

        Raises:
            ValidationError: On the first failed check
        """
        result = self._parse(raw_reply)

        if source_language not in result:
            raise ValidationError(MISSING_SOURCE_KEY, detail=source_language)

        source = result[source_language]
        if source != source_term:
            raise ValidationError(
                SOURCE_ECHO_MISMATCH, detail=f"expected {source_term!r}, got {source!r}"
            )

        if target_language not in result:
            raise ValidationError(MISSING_TARGET_KEY, detail=target_language)

        translation = result[target_language]
        if not translation.strip():
            raise ValidationError(EMPTY_TRANSLATION, detail=target_language)

        explanation = result.get(EXPLANATION_KEY)
        if explain_required and explanation is None:
            raise ValidationError(MISSING_EXPLANATION)

        issue = self.placeholder_validator.first_mismatch(source, translation)
        if issue is not None:
            raise ValidationError(PLACEHOLDER_COUNT_MISMATCH, token=issue.token, detail=issue.message)

        return Translation(source=source, translation=translation, explanation=explanation)

    def _parse(self, raw_reply: str) -> Dict[str, str]:
        try:
            data: Any = json.loads(raw_reply.strip())
        except (json.JSONDecodeError, TypeError, AttributeError):
            raise ValidationError(NOT_AN_OBJECT, detail=_preview(raw_reply)) from None

        if not isinstance(data, dict) or not all(isinstance(v, str) for v in data.values()):
            raise ValidationError(NOT_AN_OBJECT, detail=_preview(raw_reply))

        return data


def _preview(raw_reply: Any, limit: int = 200) -> str:
    text = str(raw_reply)
    return text if len(text) <= limit else text[:limit] + "..."
