"""Text generation API clients."""

from .ollama_client import GenerateReply, OllamaClient

__all__ = ["GenerateReply", "OllamaClient"]
