"""Configuration management for Paperdesk."""

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

PAPERDESK_HOME = Path(os.environ.get("PAPERDESK_HOME", Path.home() / "paperdesk"))
CONFIG_FILE = PAPERDESK_HOME / "config" / "paperdesk.conf"
TOKEN_FILE = PAPERDESK_HOME / "config" / ".tokens.json"

_SORT_KEYS = ("date", "priority", "title", "status")
_DIRECTIONS = ("asc", "desc")


@dataclass
class Config:
    """Paperdesk configuration."""

    api_base_url: str = "http://localhost:3000"
    username: str = ""
    request_timeout: float = 10.0
    search_debounce_ms: int = 300
    max_visible_per_day: int = 3
    default_sort: str = "date"
    default_direction: str = "asc"


@dataclass
class Tokens:
    """Session token issued by the paperwork API login endpoint."""

    auth_token: str = ""

    def save(self, path: Path | None = None) -> None:
        """Save tokens to file."""
        path = path or TOKEN_FILE
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps({"auth_token": self.auth_token}))
        path.chmod(0o600)

    def clear(self, path: Path | None = None) -> None:
        """Forget the token and remove the token file."""
        path = path or TOKEN_FILE
        self.auth_token = ""
        if path.exists():
            path.unlink()

    @classmethod
    def load(cls, path: Path | None = None) -> "Tokens":
        """Load tokens from file."""
        path = path or TOKEN_FILE
        if not path.exists():
            return cls()
        try:
            data = json.loads(path.read_text())
            return cls(auth_token=data.get("auth_token", ""))
        except (json.JSONDecodeError, AttributeError):
            return cls()


def _unquote(value: str) -> str:
    """Strip quotes, or an inline comment from an unquoted value."""
    if value.startswith('"') or value.startswith("'"):
        quote = value[0]
        end_quote = value.find(quote, 1)
        return value[1:end_quote] if end_quote != -1 else value[1:]
    if "#" in value:
        value = value.split("#")[0].strip()
    return value


def _non_negative_int(key: str, value: str, default: int) -> int:
    try:
        number = int(value)
    except ValueError:
        logger.warning(f"Invalid {key.upper()} value {value!r}, using {default}")
        return default
    if number < 0:
        logger.warning(f"Negative {key.upper()} value {value!r}, using {default}")
        return default
    return number


def load_config(path: Path | None = None) -> Config:
    """Load configuration from paperdesk.conf file."""
    path = path or CONFIG_FILE
    config = Config()

    if not path.exists():
        return config

    for line in path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _unquote(value.strip())

        match key:
            case "api_base_url":
                config.api_base_url = value.rstrip("/")
            case "username":
                config.username = value
            case "request_timeout":
                try:
                    config.request_timeout = float(value)
                except ValueError:
                    logger.warning(f"Invalid REQUEST_TIMEOUT value {value!r}, using {config.request_timeout}")
            case "search_debounce_ms":
                config.search_debounce_ms = _non_negative_int(key, value, config.search_debounce_ms)
            case "max_visible_per_day":
                config.max_visible_per_day = _non_negative_int(key, value, config.max_visible_per_day)
            case "default_sort":
                if value.lower() in _SORT_KEYS:
                    config.default_sort = value.lower()
                else:
                    logger.warning(f"Invalid DEFAULT_SORT value {value!r}, using {config.default_sort}")
            case "default_direction":
                if value.lower() in _DIRECTIONS:
                    config.default_direction = value.lower()
                else:
                    logger.warning(f"Invalid DEFAULT_DIRECTION value {value!r}, using {config.default_direction}")

    return config
