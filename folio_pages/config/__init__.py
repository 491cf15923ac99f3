"""Load and validate the portfolio site configuration.

This subpackage parses ``config/site.yaml``, applies defaults, validates the
social links, and produces frozen dataclasses (:class:`SiteConfig`,
:class:`LocaleConfig`, :class:`LogoConfig`, etc.) that the listing helpers and
CLI consume. The primary entry point is :func:`get_config`, which is called
once at start-up; its result is passed to consumers explicitly.

Examples
--------
>>> from folio_pages.config import get_config
>>> site = get_config()  # doctest: +SKIP
>>> site.post_per_page  # doctest: +SKIP
3
"""

from .loader import DEFAULT_CONFIG, build_site_config, get_config, load_site_config
from .models import (
    ConfigError,
    EditPostConfig,
    LocaleConfig,
    LogoConfig,
    SiteConfig,
    SocialLink,
)
from .socials import KNOWN_PLATFORMS, active_socials, validate_social_links

__all__ = [
    "DEFAULT_CONFIG",
    "KNOWN_PLATFORMS",
    "ConfigError",
    "EditPostConfig",
    "LocaleConfig",
    "LogoConfig",
    "SiteConfig",
    "SocialLink",
    "active_socials",
    "build_site_config",
    "get_config",
    "load_site_config",
    "validate_social_links",
]
