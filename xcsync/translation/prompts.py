"""Prompt construction for single-term translation requests."""

from typing import Optional

_PRESERVATION_RULES = """
Important instructions:

- Maintain all placeholders prefixed with "%" (e.g., %@, %d, %lld, %lf) exactly as they appear, the same number of times
- Maintain any URLs or email addresses exactly as they appear
- Preserve any markdown tags and their contents, including the exact contents of links
- Do not output any HTML tags or other non-markdown styling
- Keep the same line breaks and formatting
- For buttons and short UI elements, prioritize concise translations
- Maintain the same tone and formality level as the source text
- There is no limit to the length of the response, so do not truncate any part of the response
"""

_EXPLAIN_RULES = """- Flag any culturally specific elements that might need adaptation
- Include any relevant notes about context or ambiguity in the "explanation" field
"""


def build_translation_prompt(
    term: str,
    source_language: str,
    target_language: str,
    context: Optional[str] = None,
    explain: bool = False,
) -> str:
    """
    Build the instruction text sent to the model.

    Args:
        term: The literal source text to translate
        source_language: Display name of the source language (e.g. "English")
        target_language: Display name of the target language (e.g. "French")
        context: Optional entry comment describing where the string is used
        explain: Ask for an "explanation" field with a short rationale

    Returns:
        The prompt text
    """
    prompt = (
        "You are a professional translator with expertise in mobile app localization. "
        "Please translate the following user interface string "
        f'from {source_language} to {target_language}: "{term}"\n'
    )

    if explain:
        prompt += (
            "The response JSON should be an object that contains only the keys "
            f'"{source_language}", "{target_language}", "explanation" and nothing else. '
            'The "explanation" value should be a very brief English description '
            "of why the translation was chosen.\n"
        )
    else:
        prompt += (
            "The response JSON should be an object that contains ONLY the keys "
            f'"{source_language}" and "{target_language}" and nothing else.\n'
        )

    if context:
        prompt += f"\nPlease take into account the following translation context: {context}\n"

    prompt += _PRESERVATION_RULES

    if explain:
        prompt += _EXPLAIN_RULES

    return prompt
