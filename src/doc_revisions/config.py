"""Environment-driven settings for revision identifier generation."""

from __future__ import annotations

import hashlib
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from ``DOC_REVISIONS_*`` environment variables.

    Every replica in a deployment must agree on ``digest_algorithm``; mixing
    algorithms makes identical revisions produce different identifiers.
    """

    digest_algorithm: str = "md5"
    log_rejections: bool = True

    model_config = SettingsConfigDict(
        env_prefix="DOC_REVISIONS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


def check_digest_algorithm(name: str) -> str:
    """Return the normalized ``hashlib`` name or raise ``ValueError``."""
    normalized = name.strip().lower()
    if not normalized:
        raise ValueError("Invalid configuration: digest algorithm must not be empty")
    try:
        probe = hashlib.new(normalized)
    except ValueError as exc:
        raise ValueError(f"Invalid configuration: unsupported digest algorithm '{name}'") from exc
    if probe.digest_size == 0:
        raise ValueError(f"Invalid configuration: digest algorithm '{name}' has no fixed size")
    return normalized


def validate_settings(settings: Settings) -> None:
    check_digest_algorithm(settings.digest_algorithm)


@lru_cache
def get_settings() -> Settings:
    """Return cached settings."""
    return Settings()
