"""Translation request building and catalog synchronization."""

from .decision import Decision, decide
from .prompts import build_translation_prompt
from .translator import CatalogSynchronizer

__all__ = ["CatalogSynchronizer", "Decision", "build_translation_prompt", "decide"]
