"""Configuration for the Little Search Engine backend."""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from errors import ConfigError

load_dotenv()

DEFAULT_CORPUS_DIR = "."
DEFAULT_DOCS_FILE = "docs.txt"
DEFAULT_NOISE_WORDS_FILE = "noisewords.txt"
DEFAULT_RESULT_LIMIT = 5


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_positive_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a whole number, got {raw!r}") from None
    if value < 1:
        raise ConfigError(f"{name} must be at least 1, got {value}")
    return value


@dataclass
class Settings:
    corpus_dir: str = DEFAULT_CORPUS_DIR
    docs_file: str = DEFAULT_DOCS_FILE
    noise_words_file: str = DEFAULT_NOISE_WORDS_FILE
    result_limit: int = DEFAULT_RESULT_LIMIT
    log_level: str = "INFO"
    build_on_startup: bool = False


def get_settings() -> Settings:
    """Reads the LSE_* environment variables (a .env file is picked up too)."""
    return Settings(
        corpus_dir=os.getenv("LSE_CORPUS_DIR", DEFAULT_CORPUS_DIR),
        docs_file=os.getenv("LSE_DOCS_FILE", DEFAULT_DOCS_FILE),
        noise_words_file=os.getenv("LSE_NOISE_WORDS_FILE", DEFAULT_NOISE_WORDS_FILE),
        result_limit=_env_positive_int("LSE_RESULT_LIMIT", DEFAULT_RESULT_LIMIT),
        log_level=os.getenv("LSE_LOG_LEVEL", "INFO").upper(),
        build_on_startup=_env_flag("LSE_BUILD_ON_STARTUP"),
    )
