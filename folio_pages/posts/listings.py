"""Derive the landing page, tag, and archive listings from visible posts.

Every helper expects posts that already went through
:func:`folio_pages.posts.visibility.visible_posts` and keeps their order.
"""

from __future__ import annotations

import collections.abc as cabc
import itertools
import typing as typ

from .loader import _slugify
from .models import ArchiveMonth, ArchiveYear, IndexListing, TagSummary

if typ.TYPE_CHECKING:
    from ..config import SiteConfig
    from .models import BlogPost


def index_listing(posts: cabc.Sequence[BlogPost], site: SiteConfig) -> IndexListing:
    """Pick featured posts and up to ``post_per_index`` recent ones."""
    featured = tuple(post for post in posts if post.featured)
    recent = tuple(post for post in posts if not post.featured)
    return IndexListing(featured=featured, recent=recent[: site.post_per_index])


def unique_tags(posts: cabc.Iterable[BlogPost]) -> list[TagSummary]:
    """Return one summary per tag slug, sorted by slug."""
    names: dict[str, str] = {}
    counts: dict[str, int] = {}
    for post in posts:
        for slug in dict.fromkeys(_slugify(tag) for tag in post.tags):
            counts[slug] = counts.get(slug, 0) + 1
        for tag in post.tags:
            names.setdefault(_slugify(tag), tag)
    return [
        TagSummary(slug=slug, name=names[slug], count=counts[slug])
        for slug in sorted(counts)
    ]


def posts_for_tag(posts: cabc.Iterable[BlogPost], tag: str) -> list[BlogPost]:
    """Return posts carrying ``tag``; names and slugs both match."""
    wanted = _slugify(tag)
    return [post for post in posts if wanted in {_slugify(t) for t in post.tags}]


def archive_groups(posts: cabc.Iterable[BlogPost]) -> list[ArchiveYear]:
    """Group posts by publish year and month, newest first."""
    ordered = sorted(
        posts, key=lambda post: post.pub_datetime, reverse=True
    )
    years: list[ArchiveYear] = []
    for year, in_year in itertools.groupby(ordered, key=lambda p: p.pub_datetime.year):
        months = tuple(
            ArchiveMonth(month=month, posts=tuple(in_month))
            for month, in_month in itertools.groupby(
                in_year, key=lambda p: p.pub_datetime.month
            )
        )
        years.append(ArchiveYear(year=year, months=months))
    return years


def edit_post_url(site: SiteConfig, post: BlogPost) -> str | None:
    """Return the "edit this post" URL, or None when editing is not configured."""
    edit = site.edit_post
    if edit is None:
        return None
    if edit.append_file_path and post.source_path:
        return f"{edit.url}/{post.source_path.lstrip('/')}"
    return edit.url


__all__ = [
    "archive_groups",
    "edit_post_url",
    "index_listing",
    "posts_for_tag",
    "unique_tags",
]
