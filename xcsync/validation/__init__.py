"""Validation of model replies."""

from .placeholder_validator import PlaceholderValidator
from .response_validator import ResponseValidator

__all__ = ["PlaceholderValidator", "ResponseValidator"]
