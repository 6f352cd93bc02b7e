"""
Configuration manager - builds the console configuration once at startup.

Values are looked up in the process environment first, then in Streamlit
secrets (.streamlit/secrets.toml). The resulting NorthConfig is passed
explicitly to the API client and the action layer.
"""

from __future__ import annotations
import logging
import os
import re
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional


_UUID_RE = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$",
    re.IGNORECASE,
)

_KEYS = (
    "NORTH_API_URL",
    "AUTHOR_ID",
    "AUTHOR_NAME",
    "AUTHOR_EMAIL",
    "DEFAULT_LOCALE",
    "NORTH_API_TIMEOUT",
    "LOG_LEVEL",
)


class ConfigError(Exception):
    """Raised when required configuration is missing or malformed."""
    pass


@dataclass(frozen=True)
class NorthConfig:
    """Settings shared by the API client, actions and pages."""

    base_url: str
    author: Optional[Dict[str, str]] = None
    default_locale: str = "en"
    timeout: Optional[float] = None
    log_level: str = "INFO"


# ============================================================================
# Secret lookup
# ============================================================================

def _get_secret(name: str) -> Optional[str]:
    """Get secret from environment or Streamlit secrets."""
    value = os.environ.get(name)
    if value:
        return value
    try:
        import streamlit as st
        return st.secrets.get(name)
    except Exception:
        return None


def _clean(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def is_valid_uuid(value: str) -> bool:
    """Return True when value looks like a canonical UUID string."""
    return bool(_UUID_RE.match(value or ""))


def parse_author(
    author_id: Optional[str],
    name: Optional[str] = None,
    email: Optional[str] = None,
) -> Optional[Dict[str, str]]:
    """
    Build the default author from configuration values.

    Returns:
        Author dict with 'id' and optional 'name'/'email', or None when no
        author id is configured.

    Raises:
        ConfigError: If author_id is set but is not a valid UUID.
    """
    author_id = _clean(author_id)
    if author_id is None:
        return None
    if not is_valid_uuid(author_id):
        raise ConfigError(f"AUTHOR_ID must be a valid UUID format. Current value: {author_id}")

    author = {"id": author_id}
    if _clean(name):
        author["name"] = _clean(name)
    if _clean(email):
        author["email"] = _clean(email)
    return author


# ============================================================================
# Public API
# ============================================================================

def load_config(source: Optional[Mapping[str, Any]] = None) -> NorthConfig:
    """
    Build the console configuration.

    Args:
        source: Optional mapping of configuration keys. When None, keys are
            read from the environment / Streamlit secrets.

    Returns:
        NorthConfig

    Raises:
        ConfigError: If NORTH_API_URL is missing or a value is malformed.
    """
    if source is None:
        values = {key: _get_secret(key) for key in _KEYS}
    else:
        values = {key: source.get(key) for key in _KEYS}

    base_url = _clean(values["NORTH_API_URL"])
    if not base_url:
        raise ConfigError(
            "NORTH_API_URL is not defined. Set it in the environment "
            "or in .streamlit/secrets.toml."
        )

    timeout_raw = _clean(values["NORTH_API_TIMEOUT"])
    timeout: Optional[float] = None
    if timeout_raw is not None:
        try:
            timeout = float(timeout_raw)
        except ValueError:
            raise ConfigError(f"NORTH_API_TIMEOUT must be a number. Current value: {timeout_raw}")
        if timeout <= 0:
            raise ConfigError(f"NORTH_API_TIMEOUT must be positive. Current value: {timeout_raw}")

    return NorthConfig(
        base_url=base_url.rstrip("/"),
        author=parse_author(values["AUTHOR_ID"], values["AUTHOR_NAME"], values["AUTHOR_EMAIL"]),
        default_locale=_clean(values["DEFAULT_LOCALE"]) or "en",
        timeout=timeout,
        log_level=(_clean(values["LOG_LEVEL"]) or "INFO").upper(),
    )


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging for the console process."""
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
