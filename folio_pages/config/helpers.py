"""Utility helpers shared by the configuration and content loaders."""

from __future__ import annotations

import datetime as dt
import re
from urllib.parse import urlsplit

from .models import ConfigError

BCP47_PATTERN = re.compile(
    r"^[A-Za-z]{2,3}(-[A-Za-z]{4})?(-(?:[A-Za-z]{2}|\d{3}))?(-[A-Za-z0-9]{5,8})*$"
)
_WEB_SCHEMES = frozenset({"http", "https"})


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _require_str(value: object, field: str) -> str:
    """Return ``value`` as a non-empty string or raise ConfigError."""
    match value:
        case str() as text if text.strip():
            return text.strip()
        case None:
            msg = f"Site configuration requires '{field}'."
        case _:
            msg = f"'{field}' must be a non-empty string, got {value!r}."
    raise ConfigError(msg)


def _require_bool(value: object, field: str) -> bool:
    """Return ``value`` when it is a boolean; YAML strings are not coerced."""
    if isinstance(value, bool):
        return value
    msg = f"'{field}' must be true or false, got {value!r}."
    raise ConfigError(msg)


def _require_int(value: object, field: str, *, minimum: int) -> int:
    """Return ``value`` when it is an integer of at least ``minimum``."""
    if isinstance(value, bool) or not isinstance(value, int):
        msg = f"'{field}' must be an integer, got {value!r}."
        raise ConfigError(msg)
    if value < minimum:
        msg = f"'{field}' must be at least {minimum}, got {value}."
        raise ConfigError(msg)
    return value


def _is_valid_url(value: str) -> bool:
    """Return True for absolute http(s) URLs with a host or mailto addresses."""
    try:
        parts = urlsplit(value)
    except ValueError:
        return False
    if any(char.isspace() for char in value):
        return False
    scheme = parts.scheme.lower()
    if scheme in _WEB_SCHEMES:
        return bool(parts.hostname)
    if scheme == "mailto":
        local, _, domain = parts.path.partition("@")
        return bool(local and domain)
    return False


def _is_language_tag(value: str) -> bool:
    """Return True when ``value`` is shaped like a BCP-47 language tag."""
    return bool(BCP47_PATTERN.match(value))


def _parse_timestamp(value: dt.datetime | dt.date | str | None) -> dt.datetime | None:
    """Return a timezone-aware UTC datetime parsed from ``value``, or None."""
    match value:
        case dt.datetime():
            parsed = value
        case dt.date():
            parsed = dt.datetime(value.year, value.month, value.day)
        case str() as text:
            sanitized = text.strip()
            if not sanitized:
                return None
            if sanitized.endswith("Z"):
                sanitized = sanitized[:-1] + "+00:00"
            try:
                parsed = dt.datetime.fromisoformat(sanitized)
            except ValueError:
                return None
        case _:
            return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=dt.UTC)
    return parsed.astimezone(dt.UTC)


__all__ = [
    "BCP47_PATTERN",
    "_is_language_tag",
    "_is_valid_url",
    "_optional_str",
    "_parse_timestamp",
    "_require_bool",
    "_require_int",
    "_require_str",
]
