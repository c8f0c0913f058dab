"""Application configuration loaded from config.yaml."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

import yaml

API_KEY_ENV = "ANTHROPIC_API_KEY"


def _check_range(name: str, value: int, low: int, high: int) -> None:
    if not low <= value <= high:
        raise ValueError(f"{name} must be between {low} and {high}, got {value}")


@dataclass(frozen=True)
class LLMConfig:
    model: str = "claude-opus-4-5-20251101"
    max_tokens: int = 16000
    max_retries: int = 3
    timeout: int = 60

    def __post_init__(self):
        _check_range("max_tokens", self.max_tokens, 1, 64000)
        _check_range("max_retries", self.max_retries, 0, 10)
        _check_range("timeout", self.timeout, 1, 600)


@dataclass(frozen=True)
class RateLimitConfig:
    max_requests: int = 10
    window_seconds: int = 15 * 60

    def __post_init__(self):
        _check_range("max_requests", self.max_requests, 1, 100_000)
        _check_range("window_seconds", self.window_seconds, 1, 86_400)


@dataclass(frozen=True)
class ServerConfig:
    host: str = "127.0.0.1"
    port: int = 8000
    max_body_bytes: int = 100 * 1024

    def __post_init__(self):
        _check_range("port", self.port, 1, 65535)
        _check_range("max_body_bytes", self.max_body_bytes, 1024, 10 * 1024 * 1024)


@dataclass(frozen=True)
class LoggingConfig:
    level: str = "INFO"
    json: bool = False

    def __post_init__(self):
        if not isinstance(logging.getLevelName(self.level.upper()), int):
            raise ValueError(f"level must be a standard logging level name, got {self.level!r}")


@dataclass(frozen=True)
class AppConfig:
    llm: LLMConfig = field(default_factory=LLMConfig)
    rate_limit: RateLimitConfig = field(default_factory=RateLimitConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load config from YAML file, falling back to defaults."""
    if path is None:
        # Look for config.yaml relative to the project root
        candidates = [
            Path.cwd() / "config.yaml",
            Path(__file__).resolve().parent.parent.parent / "config.yaml",
        ]
        for c in candidates:
            if c.exists():
                path = c
                break

    raw: dict = {}
    if path is not None:
        p = Path(path)
        if p.exists():
            raw = yaml.safe_load(p.read_text()) or {}

    return AppConfig(
        llm=LLMConfig(**raw.get("llm", {})),
        rate_limit=RateLimitConfig(**raw.get("rate_limit", {})),
        server=ServerConfig(**raw.get("server", {})),
        logging=LoggingConfig(**raw.get("logging", {})),
    )


def resolve_api_key(environ: Mapping[str, str] | None = None) -> str | None:
    """Read the Anthropic credential at call time; empty counts as absent."""
    env = os.environ if environ is None else environ
    return env.get(API_KEY_ENV) or None
