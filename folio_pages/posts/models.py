"""Dataclasses describing blog content and the listings built from it."""

from __future__ import annotations

import dataclasses as dc
import datetime as dt
import typing as typ

T = typ.TypeVar("T")


class PostFormatError(ValueError):
    """Raised when a content file's front matter is missing or malformed."""


@dc.dataclass(frozen=True, slots=True)
class BlogPost:
    """A single blog post parsed from a markdown content file.

    Attributes
    ----------
    title : str
        Post title from front matter.
    description : str
        Summary used in listings and meta tags.
    pub_datetime : datetime.datetime
        Timezone-aware (UTC) publish timestamp.
    mod_datetime : datetime.datetime | None
        Timezone-aware (UTC) modification timestamp, when the post was edited.
    featured : bool
        Whether the post is promoted on the landing page.
    draft : bool
        Drafts are never listed.
    tags : tuple[str, ...]
        Tag display names in front-matter order.
    body : str
        Markdown body without the front matter.
    slug : str
        URL-safe identifier.
    source_path : str
        Content file path relative to the content root, POSIX separators.
    """

    title: str
    description: str
    pub_datetime: dt.datetime
    body: str = ""
    mod_datetime: dt.datetime | None = None
    featured: bool = False
    draft: bool = False
    tags: tuple[str, ...] = ("others",)
    slug: str = ""
    source_path: str = ""

    def __post_init__(self) -> None:
        """Normalise timestamps to UTC, reading naive values as UTC."""
        object.__setattr__(self, "pub_datetime", _as_utc(self.pub_datetime))
        if self.mod_datetime is not None:
            object.__setattr__(self, "mod_datetime", _as_utc(self.mod_datetime))


def _as_utc(moment: dt.datetime) -> dt.datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=dt.UTC)
    return moment.astimezone(dt.UTC)


@dc.dataclass(frozen=True, slots=True)
class StaticPage:
    """A standalone markdown page such as "About Me"."""

    title: str
    body: str
    slug: str
    source_path: str = ""


@dc.dataclass(frozen=True, slots=True)
class Page(typ.Generic[T]):
    """One page of a paginated listing.

    ``index`` is zero-based; ``number`` is the one-based value shown in URLs.
    """

    index: int
    total: int
    items: tuple[T, ...]

    @property
    def number(self) -> int:
        return self.index + 1

    @property
    def has_previous(self) -> bool:
        return self.index > 0

    @property
    def has_next(self) -> bool:
        return self.index < self.total - 1


@dc.dataclass(frozen=True, slots=True)
class IndexListing:
    """Posts shown on the landing page."""

    featured: tuple[BlogPost, ...]
    recent: tuple[BlogPost, ...]


@dc.dataclass(frozen=True, slots=True)
class TagSummary:
    """A tag with its slug, first-seen display name, and post count."""

    slug: str
    name: str
    count: int


@dc.dataclass(frozen=True, slots=True)
class ArchiveMonth:
    """Posts published in one calendar month."""

    month: int
    posts: tuple[BlogPost, ...]


@dc.dataclass(frozen=True, slots=True)
class ArchiveYear:
    """Posts published in one year, grouped by month (newest first)."""

    year: int
    months: tuple[ArchiveMonth, ...]


__all__ = [
    "ArchiveMonth",
    "ArchiveYear",
    "BlogPost",
    "IndexListing",
    "Page",
    "PostFormatError",
    "StaticPage",
    "TagSummary",
]
