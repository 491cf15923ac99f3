"""Cyclopts CLI entrypoint for checking and inspecting the portfolio site.

The ``folio`` console script defined here validates ``config/site.yaml`` and
the markdown content under ``content/``, then prints the listings the site
would render right now: the paginated post list, tags, and archives. It is
meant to run locally or in CI before a deploy so broken configuration or
front matter fails the build instead of the page.

Examples
--------
Validate the configuration and content from the repository root:

>>> from folio_pages.cli import main
>>> main()  # doctest: +SKIP

Show the second page of the post listing:

>>> from folio_pages.cli import app
>>> app(["posts", "--page", "2"])  # doctest: +SKIP
"""

from __future__ import annotations

import datetime as dt
import logging
import os
import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .config import ConfigError, active_socials, get_config
from .config.loader import DEFAULT_CONFIG
from .posts import (
    PostFormatError,
    archive_groups,
    load_page,
    load_posts,
    page_slice,
    total_pages,
    unique_tags,
    visible_posts_for,
)

if typ.TYPE_CHECKING:
    from .config import SiteConfig
    from .posts import BlogPost

DEFAULT_CONTENT = Path("content/blog")
DEFAULT_ABOUT = Path("content/about.md")

app = App(name="folio", config=cyclopts.config.Env("FOLIO_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _load(
    config: Path, content: Path
) -> tuple[SiteConfig, list[BlogPost], list[BlogPost]]:
    """Load the site, every post, and the posts visible right now."""
    site = get_config(config)
    posts = load_posts(content)
    return site, posts, visible_posts_for(site, posts)


def _post_line(post: BlogPost) -> str:
    return f"{post.pub_datetime:%Y-%m-%d}  {post.slug}  {post.title}"


@app.command(help="Validate the site configuration and content.")
def check(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to site config", env_var="FOLIO_CONFIG")
    ] = DEFAULT_CONFIG,
    content: typ.Annotated[
        Path, Parameter(help="Blog content directory", env_var="FOLIO_CONTENT")
    ] = DEFAULT_CONTENT,
    about: typ.Annotated[
        Path, Parameter(help="About page markdown file", env_var="FOLIO_ABOUT")
    ] = DEFAULT_ABOUT,
) -> None:
    """Load everything the site needs and print a short summary.

    Parameters
    ----------
    config : Path, optional
        Path to ``site.yaml`` (overridable via ``FOLIO_CONFIG``).
    content : Path, optional
        Directory holding the blog posts.
    about : Path, optional
        About page; skipped when the file does not exist.

    Raises
    ------
    ConfigError
        If the configuration is invalid.
    PostFormatError
        If any post has malformed front matter.
    """
    site, posts, shown = _load(config, content)
    socials = active_socials(site)
    print(f"config ok: {site.title} ({site.website})")
    print(f"socials: {len(socials)} active of {len(site.socials)}")
    print(
        f"posts: {len(shown)} visible, {len(posts) - len(shown)} hidden "
        f"in {_format_path(content)}"
    )
    pages = total_pages(len(shown), site.post_per_page)
    print(f"pages: {pages} ({site.post_per_page} per page)")
    if about.exists():
        print(f"about: {load_page(about).title}")


@app.command(help="Print one page of the post listing.")
def posts(
    *,
    page: typ.Annotated[int, Parameter(help="Page number, starting at 1")] = 1,
    config: typ.Annotated[
        Path, Parameter(help="Path to site config", env_var="FOLIO_CONFIG")
    ] = DEFAULT_CONFIG,
    content: typ.Annotated[
        Path, Parameter(help="Blog content directory", env_var="FOLIO_CONTENT")
    ] = DEFAULT_CONTENT,
) -> None:
    """Print the posts on listing page ``page`` (1-based)."""
    site, _, shown = _load(config, content)
    pages = total_pages(len(shown), site.post_per_page)
    if not 1 <= page <= pages:
        msg = f"page {page} out of range; the listing has {pages} page(s)."
        raise IndexError(msg)
    items = page_slice(shown, page - 1, site.post_per_page)
    print(f"page {page} of {pages}")
    for post in items:
        print(_post_line(post))


@app.command(help="Print every tag with its post count.")
def tags(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to site config", env_var="FOLIO_CONFIG")
    ] = DEFAULT_CONFIG,
    content: typ.Annotated[
        Path, Parameter(help="Blog content directory", env_var="FOLIO_CONTENT")
    ] = DEFAULT_CONTENT,
) -> None:
    """Print tag slugs, display names, and counts for visible posts."""
    _, _, shown = _load(config, content)
    for summary in unique_tags(shown):
        print(f"{summary.slug}: {summary.name} ({summary.count})")


@app.command(help="Print visible posts grouped by year and month.")
def archives(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to site config", env_var="FOLIO_CONFIG")
    ] = DEFAULT_CONFIG,
    content: typ.Annotated[
        Path, Parameter(help="Blog content directory", env_var="FOLIO_CONTENT")
    ] = DEFAULT_CONTENT,
) -> None:
    """Print the archive grouping, or a notice when archives are disabled."""
    site, _, shown = _load(config, content)
    if not site.show_archives:
        print("archives are disabled (showArchives: false)")
        return
    for year in archive_groups(shown):
        print(str(year.year))
        for month in year.months:
            print(f"  {dt.date(year.year, month.month, 1):%B}")
            for post in month.posts:
                print(f"    {_post_line(post)}")


def main() -> None:
    """Invoke the Cyclopts application that powers the ``folio`` console command.

    Logging goes to stderr at WARNING, or DEBUG when ``FOLIO_VERBOSE`` is set.
    Configuration, content, and page-range errors are reported as
    ``error: ...`` with exit status 1.
    """
    level = logging.DEBUG if os.getenv("FOLIO_VERBOSE") else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
    try:
        app()
    except (ConfigError, PostFormatError, FileNotFoundError, IndexError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
