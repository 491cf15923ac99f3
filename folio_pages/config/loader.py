"""Load site configuration YAML into typed dataclasses."""

from __future__ import annotations

import collections.abc as cabc
import logging
import typing as typ
from pathlib import Path

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .helpers import (
    _is_language_tag,
    _is_valid_url,
    _optional_str,
    _require_bool,
    _require_int,
    _require_str,
)
from .models import ConfigError, EditPostConfig, LocaleConfig, LogoConfig, SiteConfig
from .socials import validate_social_links

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = Path("config/site.yaml")

_SITE_KEYS = frozenset(
    {
        "website",
        "author",
        "profile",
        "desc",
        "title",
        "ogImage",
        "lightAndDarkMode",
        "postPerIndex",
        "postPerPage",
        "scheduledPostMargin",
        "showArchives",
        "editPost",
    }
)


def get_config(path: Path = DEFAULT_CONFIG) -> SiteConfig:
    """Resolve the site configuration used for the rest of the run.

    Call this once at start-up and pass the returned value to whatever needs
    it; every failure is fatal because every page depends on the result.

    Parameters
    ----------
    path : Path, optional
        Configuration file; defaults to ``config/site.yaml`` relative to the
        working directory.

    Returns
    -------
    SiteConfig
        Immutable, validated configuration.

    Raises
    ------
    FileNotFoundError
        If ``path`` does not exist.
    ConfigError
        If required fields are missing or any value has the wrong shape.
    """
    return load_site_config(path)


def load_site_config(path: Path) -> SiteConfig:
    """Load and validate the YAML configuration stored at ``path``.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    ConfigError
        If the file is not valid UTF-8 YAML, the top level is not a mapping,
        or any block fails validation.
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    try:
        with path.open("r", encoding="utf-8") as handle:
            loaded = loader.load(handle) or {}
    except YAMLError as exc:
        msg = f"{path}: invalid YAML: {exc}"
        raise ConfigError(msg) from exc
    except UnicodeDecodeError as exc:
        msg = f"{path}: not valid UTF-8: {exc}"
        raise ConfigError(msg) from exc
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise ConfigError(msg)
    logger.debug("loaded site configuration from %s", path)
    return build_site_config(loaded)


def build_site_config(payload: cabc.Mapping[str, typ.Any]) -> SiteConfig:
    """Build a :class:`SiteConfig` from an already parsed mapping.

    The mapping holds a required ``site`` block plus optional ``locale``,
    ``logo`` and ``socials`` blocks.
    """
    match payload:
        case {"site": cabc.Mapping() as site_raw}:
            pass
        case {"site": _}:
            msg = "The 'site' block must be a mapping."
            raise ConfigError(msg)
        case _:
            msg = "Site configuration requires a 'site' block."
            raise ConfigError(msg)

    unknown = sorted(str(key) for key in site_raw if key not in _SITE_KEYS)
    if unknown:
        msg = f"Unknown site option(s): {', '.join(unknown)}."
        raise ConfigError(msg)

    website = _require_url(site_raw.get("website"), "website")
    profile_raw = site_raw.get("profile")
    profile = website if profile_raw is None else _require_url(profile_raw, "profile")
    title = _require_str(site_raw.get("title"), "title")

    socials = validate_social_links(
        payload.get("socials"), site={**site_raw, "title": title}
    )

    return SiteConfig(
        website=website,
        author=_require_str(site_raw.get("author"), "author"),
        profile=profile,
        desc=_require_str(site_raw.get("desc"), "desc"),
        title=title,
        og_image=_optional_str(site_raw.get("ogImage")) or "",
        light_and_dark_mode=_require_bool(
            site_raw.get("lightAndDarkMode", True), "lightAndDarkMode"
        ),
        post_per_index=_require_int(
            site_raw.get("postPerIndex", 4), "postPerIndex", minimum=1
        ),
        post_per_page=_require_int(
            site_raw.get("postPerPage", 3), "postPerPage", minimum=1
        ),
        scheduled_post_margin=_require_int(
            site_raw.get("scheduledPostMargin", 15 * 60 * 1000),
            "scheduledPostMargin",
            minimum=0,
        ),
        show_archives=_require_bool(site_raw.get("showArchives", True), "showArchives"),
        edit_post=_build_edit_post(site_raw.get("editPost")),
        locale=_build_locale(payload.get("locale")),
        logo=_build_logo(payload.get("logo")),
        socials=socials,
    )


def _require_url(value: object, field: str) -> str:
    text = _require_str(value, field)
    if not _is_valid_url(text):
        msg = f"'{field}' must be an absolute URL, got {text!r}."
        raise ConfigError(msg)
    return text


def _build_edit_post(payload: object | None) -> EditPostConfig | None:
    """Build the optional edit-link template."""
    match payload:
        case None:
            return None
        case {"url": url, **rest}:
            pass
        case cabc.Mapping():
            msg = "'editPost' requires a 'url'."
            raise ConfigError(msg)
        case _:
            msg = "'editPost' must be a mapping."
            raise ConfigError(msg)
    return EditPostConfig(
        url=_require_url(url, "editPost.url").rstrip("/"),
        text=_optional_str(rest.get("text")) or "Suggest Changes",
        append_file_path=_require_bool(
            rest.get("appendFilePath", False), "editPost.appendFilePath"
        ),
    )


def _build_locale(payload: object | None) -> LocaleConfig:
    """Build locale settings; an absent block yields the defaults."""
    match payload:
        case None:
            return LocaleConfig()
        case cabc.Mapping():
            pass
        case _:
            msg = "'locale' must be a mapping."
            raise ConfigError(msg)

    lang = _optional_str(payload.get("lang")) or "en"
    raw_tags = payload.get("langTag") or []
    if isinstance(raw_tags, str):
        raw_tags = [raw_tags]
    if not isinstance(raw_tags, list):
        msg = "'locale.langTag' must be a list of language tags."
        raise ConfigError(msg)
    tags: list[str] = []
    for tag in raw_tags:
        text = str(tag).strip()
        if not _is_language_tag(text):
            msg = f"'locale.langTag' entry {tag!r} is not a BCP-47 language tag."
            raise ConfigError(msg)
        tags.append(text)
    if not _is_language_tag(lang):
        msg = f"'locale.lang' {lang!r} is not a language code."
        raise ConfigError(msg)
    return LocaleConfig(lang=lang, lang_tag=tuple(tags))


def _build_logo(payload: object | None) -> LogoConfig:
    """Build header logo settings; an absent block yields the defaults."""
    match payload:
        case None:
            return LogoConfig()
        case cabc.Mapping():
            pass
        case _:
            msg = "'logo' must be a mapping."
            raise ConfigError(msg)
    base = LogoConfig()
    return LogoConfig(
        enable=_require_bool(payload.get("enable", base.enable), "logo.enable"),
        svg=_require_bool(payload.get("svg", base.svg), "logo.svg"),
        width=_require_int(payload.get("width", base.width), "logo.width", minimum=1),
        height=_require_int(
            payload.get("height", base.height), "logo.height", minimum=1
        ),
    )


__all__ = ["DEFAULT_CONFIG", "build_site_config", "get_config", "load_site_config"]
