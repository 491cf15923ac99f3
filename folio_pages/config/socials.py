"""Validate social profile links against the recognised platform set.

Each platform name doubles as the icon key used by the site's templates, so
an unknown name can never render and is rejected while the configuration is
loaded. Link titles are short Jinja2 templates such as
``"{{ site.title }} on LinkedIn"``; they are rendered once here in a sandbox
so consumers only ever see plain strings.

Examples
--------
>>> from folio_pages.config.socials import validate_social_links
>>> links = validate_social_links(
...     [{"name": "Github", "href": "https://github.com/octocat"}],
...     site={"title": "Ansh"},
... )
>>> links[0].link_title
'Ansh on Github'
"""

from __future__ import annotations

import collections.abc as cabc
import logging
import typing as typ

from jinja2 import StrictUndefined, TemplateError
from jinja2.sandbox import SandboxedEnvironment

from .helpers import _is_valid_url, _optional_str, _require_bool
from .models import ConfigError, SocialLink

if typ.TYPE_CHECKING:
    from .models import SiteConfig

logger = logging.getLogger(__name__)

KNOWN_PLATFORMS: frozenset[str] = frozenset(
    {
        "Github",
        "Facebook",
        "Instagram",
        "LinkedIn",
        "Mail",
        "X",
        "Twitter",
        "Twitch",
        "YouTube",
        "WhatsApp",
        "Snapchat",
        "Pinterest",
        "TikTok",
        "CodePen",
        "Discord",
        "GitLab",
        "Reddit",
        "Skype",
        "Steam",
        "Telegram",
        "Mastodon",
    }
)
DEFAULT_LINK_TITLE = "{{ site.title }} on {{ name }}"

_TEMPLATE_ENV = SandboxedEnvironment(autoescape=False, undefined=StrictUndefined)


def validate_social_links(
    entries: cabc.Sequence[cabc.Mapping[str, typ.Any] | SocialLink] | None,
    *,
    site: cabc.Mapping[str, typ.Any],
) -> tuple[SocialLink, ...]:
    """Validate raw social entries and return them as ``SocialLink`` values.

    Parameters
    ----------
    entries : sequence of mappings or SocialLink, optional
        Entries in display order. Mappings carry ``name``, ``href`` and the
        optional ``linkTitle`` template and ``active`` flag; existing
        ``SocialLink`` values are re-checked and passed through unchanged.
    site : Mapping
        Site block exposed to title templates as ``site``.

    Returns
    -------
    tuple[SocialLink, ...]
        Validated links in their original order.

    Raises
    ------
    ConfigError
        If an entry is not a mapping, names an unknown platform, carries an
        invalid URL, or has a title template that cannot be rendered.
    """
    if entries is None:
        return ()
    if isinstance(entries, (str, bytes)) or not isinstance(entries, cabc.Sequence):
        msg = "'socials' must be a list of link entries."
        raise ConfigError(msg)

    links: list[SocialLink] = []
    for position, entry in enumerate(entries):
        match entry:
            case SocialLink():
                _check_link(position, entry.name, entry.href)
                links.append(entry)
            case cabc.Mapping():
                links.append(_build_social_link(position, entry, site))
            case _:
                msg = f"Social link #{position} must be a mapping, got {entry!r}."
                raise ConfigError(msg)
    logger.debug("validated %d social links", len(links))
    return tuple(links)


def active_socials(site: SiteConfig) -> list[SocialLink]:
    """Return the links flagged active, in display order."""
    return [link for link in site.socials if link.active]


def _build_social_link(
    position: int,
    entry: cabc.Mapping[str, typ.Any],
    site: cabc.Mapping[str, typ.Any],
) -> SocialLink:
    """Validate a single mapping entry and render its title."""
    name = _optional_str(entry.get("name"))
    href = _optional_str(entry.get("href"))
    _check_link(position, name, href)
    active = _require_bool(entry.get("active", True), f"socials[{position}].active")
    template = entry.get("linkTitle")
    if template is None:
        template = DEFAULT_LINK_TITLE
    link_title = _render_title(position, str(template), name=str(name), site=site)
    return SocialLink(
        name=str(name),
        href=str(href),
        link_title=link_title,
        active=active,
    )


def _check_link(position: int, name: str | None, href: str | None) -> None:
    if name not in KNOWN_PLATFORMS:
        known = ", ".join(sorted(KNOWN_PLATFORMS))
        msg = f"Social link #{position} has unknown platform {name!r}. Known: {known}"
        raise ConfigError(msg)
    if not href or not _is_valid_url(href):
        msg = f"Social link #{position} ({name}) has an invalid href {href!r}."
        raise ConfigError(msg)


def _render_title(
    position: int, template: str, *, name: str, site: cabc.Mapping[str, typ.Any]
) -> str:
    try:
        rendered = _TEMPLATE_ENV.from_string(template).render(site=site, name=name)
    except TemplateError as exc:
        msg = f"Social link #{position} ({name}) has an invalid linkTitle: {exc}"
        raise ConfigError(msg) from exc
    return rendered.strip()


__all__ = [
    "DEFAULT_LINK_TITLE",
    "KNOWN_PLATFORMS",
    "active_socials",
    "validate_social_links",
]
