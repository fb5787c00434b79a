"""
Module for managing project configuration.
"""

import os
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
from .constants import DEFAULT_DOMAIN, DEFAULT_REQUEST_TIMEOUT_SECONDS, MAX_PAGE_SIZE
from .exceptions import ConfigurationError

# --- Configuration ---
DOMAIN = os.getenv("MEMEX_DOMAIN", DEFAULT_DOMAIN)
STATE_FILE = os.getenv("MEMEX_STATE_FILE", "state.json")
JSON_OUTPUT_DIR = os.getenv("MEMEX_JSON_OUTPUT_DIR", "json-output")
MARKDOWN_OUTPUT_DIR = os.getenv("MEMEX_MARKDOWN_OUTPUT_DIR", "markdown-output")
CACHE_DIR = os.getenv("MEMEX_CACHE_DIR", "cache")
USE_CACHE = os.getenv("MEMEX_USE_CACHE", "true").lower() in ("true", "1", "yes")


def now_ms() -> int:
    """Current time in milliseconds since the epoch."""
    return int(time.time() * 1000)


@dataclass
class ExportConfig:
    """All settings of an export run."""

    key_id: str
    key_secret: str
    domain: str = DEFAULT_DOMAIN
    start_timestamp: int = field(default_factory=now_ms)
    state_file: Path = Path("state.json")
    json_output_dir: Path = Path("json-output")
    markdown_output_dir: Path = Path("markdown-output")
    cache_dir: Path = Path("cache")
    use_cache: bool = True
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT_SECONDS
    page_size: int = MAX_PAGE_SIZE

    def __post_init__(self):
        self.state_file = Path(self.state_file)
        self.json_output_dir = Path(self.json_output_dir)
        self.markdown_output_dir = Path(self.markdown_output_dir)
        self.cache_dir = Path(self.cache_dir)
        if not 0 < self.page_size <= MAX_PAGE_SIZE:
            raise ConfigurationError(
                f"Page size must be between 1 and {MAX_PAGE_SIZE}, got {self.page_size}."
            )

    @property
    def base_url(self) -> str:
        return f"https://{self.domain}"


def _number_from_env(name: str, cast=int):
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return None
    try:
        return cast(value)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got '{value}'.")


def load_config(**overrides) -> ExportConfig:
    """
    Load configuration from environment variables.

    Args:
        **overrides: Settings that take precedence over the environment
            (None values are ignored)

    Returns:
        ExportConfig: The configuration of the run

    Raises:
        ConfigurationError: If configuration is invalid or missing
    """
    key_id = os.getenv("MEMEX_KEY_ID")
    key_secret = os.getenv("MEMEX_KEY_SECRET")

    if not key_id or not key_secret:
        raise ConfigurationError(
            "Environment variables MEMEX_KEY_ID/MEMEX_KEY_SECRET not set."
        )

    settings = {
        "key_id": key_id,
        "key_secret": key_secret,
        "domain": DOMAIN,
        "state_file": STATE_FILE,
        "json_output_dir": JSON_OUTPUT_DIR,
        "markdown_output_dir": MARKDOWN_OUTPUT_DIR,
        "cache_dir": CACHE_DIR,
        "use_cache": USE_CACHE,
    }

    start_timestamp = _number_from_env("START_TIMESTAMP")
    settings["start_timestamp"] = start_timestamp if start_timestamp is not None else now_ms()

    timeout = _number_from_env("MEMEX_REQUEST_TIMEOUT", float)
    if timeout is not None:
        settings["request_timeout"] = timeout

    settings.update({key: value for key, value in overrides.items() if value is not None})
    return ExportConfig(**settings)


def ensure_directories(config: ExportConfig) -> None:
    """Create necessary directories if they don't exist."""
    directories = [config.json_output_dir, config.markdown_output_dir]
    if config.use_cache:
        directories.append(config.cache_dir)
    try:
        for directory in directories:
            directory.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ConfigurationError(f"Unable to create directories: {e}")
