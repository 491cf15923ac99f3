"""Typed dataclasses describing the portfolio site configuration."""

from __future__ import annotations

import dataclasses as dc
import datetime as dt


class ConfigError(ValueError):
    """Raised when the site configuration is invalid or incomplete."""


@dc.dataclass(frozen=True, slots=True)
class EditPostConfig:
    """Template for the "edit this post" link shown under each post."""

    url: str
    text: str = "Suggest Changes"
    append_file_path: bool = False


@dc.dataclass(frozen=True, slots=True)
class LocaleConfig:
    """Document language and the BCP-47 tags used for date formatting.

    An empty ``lang_tag`` tuple means the rendering environment's default
    locale applies.
    """

    lang: str = "en"
    lang_tag: tuple[str, ...] = ()


@dc.dataclass(frozen=True, slots=True)
class LogoConfig:
    """Header logo settings."""

    enable: bool = False
    svg: bool = True
    width: int = 216
    height: int = 46


@dc.dataclass(frozen=True, slots=True)
class SocialLink:
    """A social profile link rendered in the header and footer.

    Attributes
    ----------
    name : str
        Platform name; selects the icon, so it must be a recognised platform.
    href : str
        Absolute URL (or ``mailto:`` address) of the profile.
    link_title : str
        Tooltip text, already rendered against the site title.
    active : bool
        Whether the link is displayed.
    """

    name: str
    href: str
    link_title: str
    active: bool = True


@dc.dataclass(frozen=True, slots=True)
class SiteConfig:
    """Validated site metadata shared by every page of the site.

    Built once at start-up by :func:`folio_pages.config.get_config` and
    handed to consumers explicitly; instances are never mutated.
    """

    website: str
    author: str
    profile: str
    desc: str
    title: str
    og_image: str = ""
    light_and_dark_mode: bool = True
    post_per_index: int = 4
    post_per_page: int = 3
    scheduled_post_margin: int = 15 * 60 * 1000
    show_archives: bool = True
    edit_post: EditPostConfig | None = None
    locale: LocaleConfig = dc.field(default_factory=LocaleConfig)
    logo: LogoConfig = dc.field(default_factory=LogoConfig)
    socials: tuple[SocialLink, ...] = ()

    def __post_init__(self) -> None:
        """Reject pagination sizes and margins no listing can use."""
        for field_name in ("post_per_index", "post_per_page"):
            value = getattr(self, field_name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                msg = f"'{field_name}' must be a positive integer, got {value!r}."
                raise ConfigError(msg)
        margin = self.scheduled_post_margin
        if isinstance(margin, bool) or not isinstance(margin, int) or margin < 0:
            msg = f"'scheduled_post_margin' must be a non-negative integer, got {margin!r}."
            raise ConfigError(msg)

    @property
    def scheduled_margin(self) -> dt.timedelta:
        """Return the scheduled-post margin as a timedelta."""
        return dt.timedelta(milliseconds=self.scheduled_post_margin)


__all__ = [
    "ConfigError",
    "EditPostConfig",
    "LocaleConfig",
    "LogoConfig",
    "SiteConfig",
    "SocialLink",
]
