"""
Lookup configuration.

Settings come from (lowest to highest precedence) the dataclass defaults, an
optional YAML file, and WIKTGLOT_* environment variables.
"""

import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Optional

import yaml

from wiktglot.errors import ConfigurationError

DEFAULT_API_URL = "https://en.wiktionary.org/w/api.php"
DEFAULT_TIMEOUT = 10.0
DEFAULT_SEARCH_LIMIT = 10
DEFAULT_USER_AGENT = "wiktglot/0.3 (https://github.com/wiktglot/wiktglot)"


def _is_int(value) -> bool:
    # bool is an int subclass
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value) -> bool:
    return _is_int(value) or isinstance(value, float)


@dataclass(frozen=True)
class LookupConfig:
    """Settings consumed by the resolver and its transport."""
    api_url: str = DEFAULT_API_URL
    timeout: float = DEFAULT_TIMEOUT
    user_agent: str = DEFAULT_USER_AGENT
    # Pacing is enabled only when both are set
    rate_limit_requests: Optional[int] = None
    rate_limit_window: Optional[float] = None
    search_limit: int = DEFAULT_SEARCH_LIMIT

    def __post_init__(self):
        for name in ("api_url", "user_agent"):
            if not isinstance(getattr(self, name), str):
                raise ConfigurationError(f"{name} must be a string, got {getattr(self, name)!r}")
        if not _is_number(self.timeout):
            raise ConfigurationError(f"timeout must be a number, got {self.timeout!r}")
        if not _is_int(self.search_limit):
            raise ConfigurationError(f"search_limit must be an integer, got {self.search_limit!r}")
        if self.rate_limit_requests is not None and not _is_int(self.rate_limit_requests):
            raise ConfigurationError(
                f"rate_limit_requests must be an integer, got {self.rate_limit_requests!r}")
        if self.rate_limit_window is not None and not _is_number(self.rate_limit_window):
            raise ConfigurationError(
                f"rate_limit_window must be a number, got {self.rate_limit_window!r}")

        if self.timeout <= 0:
            raise ConfigurationError(f"timeout must be positive, got {self.timeout}")
        if self.rate_limit_requests is not None and self.rate_limit_requests < 1:
            raise ConfigurationError("rate_limit_requests must be at least 1")
        if self.rate_limit_window is not None and self.rate_limit_window <= 0:
            raise ConfigurationError("rate_limit_window must be positive")

    @property
    def pacing_enabled(self) -> bool:
        return self.rate_limit_requests is not None and self.rate_limit_window is not None

    @classmethod
    def from_env(cls, base: Optional["LookupConfig"] = None) -> "LookupConfig":
        """Apply WIKTGLOT_* environment variables on top of ``base``."""
        config = base or cls()
        overrides = {}

        if os.getenv("WIKTGLOT_API_URL"):
            overrides["api_url"] = os.environ["WIKTGLOT_API_URL"]
        if os.getenv("WIKTGLOT_TIMEOUT"):
            overrides["timeout"] = _env_number("WIKTGLOT_TIMEOUT", float)
        if os.getenv("WIKTGLOT_USER_AGENT"):
            overrides["user_agent"] = os.environ["WIKTGLOT_USER_AGENT"]
        if os.getenv("WIKTGLOT_SEARCH_LIMIT"):
            overrides["search_limit"] = _env_number("WIKTGLOT_SEARCH_LIMIT", int)
        if os.getenv("WIKTGLOT_RATE_LIMIT"):
            requests, window = parse_rate(os.environ["WIKTGLOT_RATE_LIMIT"])
            overrides["rate_limit_requests"] = requests
            overrides["rate_limit_window"] = window

        return replace(config, **overrides) if overrides else config

    @classmethod
    def from_yaml(cls, path: Path) -> "LookupConfig":
        """Load a YAML mapping of field names, then apply the environment."""
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except FileNotFoundError:
            raise ConfigurationError(f"Config file not found: {path}")
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {path}: {e}")

        if not isinstance(data, dict):
            raise ConfigurationError(f"{path} must contain a mapping")

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(f"Unknown config keys in {path}: {', '.join(unknown)}")

        try:
            base = cls(**data)
        except TypeError as e:
            raise ConfigurationError(f"Invalid config in {path}: {e}")
        return cls.from_env(base)


def parse_rate(text: str) -> tuple:
    """
    Parse a pacing limit of the form "N/SECONDS".

    Examples:
        "5/1" → (5, 1.0)
        "1/0.5" → (1, 0.5)
    """
    try:
        requests, window = text.split("/", 1)
        return int(requests), float(window)
    except ValueError:
        raise ConfigurationError(f"Invalid rate limit '{text}', expected N/SECONDS")


def _env_number(name: str, convert):
    value = os.environ[name]
    try:
        return convert(value)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got '{value}'")
