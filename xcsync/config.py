"""Configuration management for catalog synchronization."""

import os
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv

from .errors import ConfigError
from .languages import TargetPolicy
from .models.string_entry import STATE_NEEDS_REVIEW

load_dotenv()


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from None


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from None


@dataclass
class Config:
    """Application configuration."""

    # Provider settings
    endpoint: str = field(
        default_factory=lambda: os.getenv("OLLAMA_ENDPOINT", "http://localhost:11434/api/generate")
    )
    model: str = field(default_factory=lambda: os.getenv("OLLAMA_MODEL", ""))

    # Seconds to wait for a single generate call; local models can be slow
    timeout: float = field(default_factory=lambda: _env_float("XCSYNC_TIMEOUT", 2400.0))

    # Attempts per (term, language) pair before giving up
    retries: int = field(default_factory=lambda: _env_int("XCSYNC_RETRIES", 8))

    # State written on accepted translations
    state: str = field(default_factory=lambda: os.getenv("XCSYNC_STATE", STATE_NEEDS_REVIEW))


@dataclass
class SyncOptions:
    """Options for a single synchronization run."""

    model: str
    endpoint: str = "http://localhost:11434/api/generate"
    verbose: bool = False
    force: bool = False
    all_languages: bool = False
    top: Optional[int] = None
    languages: List[str] = field(default_factory=list)
    explain: bool = False
    retranslate: List[str] = field(default_factory=list)
    state: str = STATE_NEEDS_REVIEW
    retries: int = 8
    timeout: float = 2400.0

    @classmethod
    def from_config(cls, config: "Config", **overrides) -> "SyncOptions":
        """Build options from the environment config, letting explicit values win."""
        values = {
            "model": config.model,
            "endpoint": config.endpoint,
            "state": config.state,
            "retries": config.retries,
            "timeout": config.timeout,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    @property
    def target_policy(self) -> TargetPolicy:
        return TargetPolicy(
            all_major=self.all_languages,
            languages=list(self.languages),
            top=self.top,
        )

    def validate(self) -> List[str]:
        """Validate options and return list of errors."""
        errors = []
        if not self.model:
            errors.append("A model is required (--model or OLLAMA_MODEL)")
        if not self.endpoint:
            errors.append("An endpoint URL is required (--endpoint or OLLAMA_ENDPOINT)")
        if self.retries < 1:
            errors.append(f"retries must be at least 1, got {self.retries}")
        if self.timeout <= 0:
            errors.append(f"timeout must be positive, got {self.timeout}")
        if self.top is not None and self.top < 0:
            errors.append(f"top must not be negative, got {self.top}")
        if not self.state:
            errors.append("state must not be empty")
        return errors

    def check(self) -> None:
        """Raise ConfigError listing every validation error, if any."""
        errors = self.validate()
        if errors:
            raise ConfigError("; ".join(errors))


# Global config instance, created on first use
_config: Optional[Config] = None


def get_config() -> Config:
    """Return the process-wide configuration, reading the environment once."""
    global _config
    if _config is None:
        _config = Config()
    return _config
