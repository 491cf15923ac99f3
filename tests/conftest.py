"""Shared fixtures for folio_pages tests."""

from __future__ import annotations

import datetime as dt
import typing as typ
from textwrap import dedent

import pytest

from folio_pages.config import SiteConfig, build_site_config
from folio_pages.posts import BlogPost

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

NOW = dt.datetime(2024, 6, 1, 12, 0, tzinfo=dt.UTC)

SITE_YAML = dedent(
    """
    site:
      website: https://example.dev/
      author: Test Author
      desc: A test site
      title: Tester
      postPerIndex: 2
      postPerPage: 3
      scheduledPostMargin: 900000
      editPost:
        url: https://github.com/owner/site/edit/main/content/blog/
        appendFilePath: true
    locale:
      lang: en
      langTag: [en-EN]
    socials:
      - name: Github
        href: https://github.com/owner
      - name: LinkedIn
        href: https://www.linkedin.com/in/owner/
        linkTitle: "{{ site.title }} on LinkedIn"
        active: false
    """
).strip()


def make_post(
    slug: str,
    published: dt.datetime,
    *,
    draft: bool = False,
    featured: bool = False,
    tags: tuple[str, ...] = ("others",),
) -> BlogPost:
    """Build a minimal post; the title mirrors the slug."""
    return BlogPost(
        title=slug.replace("-", " ").title(),
        description=f"About {slug}",
        pub_datetime=published,
        draft=draft,
        featured=featured,
        tags=tags,
        slug=slug,
        source_path=f"{slug}.md",
    )


def write_post(root: Path, name: str, front_matter: str, body: str = "Body.\n") -> Path:
    """Write a markdown file with the given front matter under ``root``."""
    path = root / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(f"---\n{dedent(front_matter).strip()}\n---\n{body}", encoding="utf-8")
    return path


@pytest.fixture
def site_payload() -> dict[str, typ.Any]:
    """Return a fresh raw configuration mapping tests can mutate."""
    return {
        "site": {
            "website": "https://example.dev/",
            "author": "Test Author",
            "desc": "A test site",
            "title": "Tester",
        },
        "socials": [{"name": "Github", "href": "https://github.com/owner"}],
    }


@pytest.fixture
def site(site_payload: dict[str, typ.Any]) -> SiteConfig:
    """Return a validated configuration built from ``site_payload``."""
    return build_site_config(site_payload)


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """Write ``SITE_YAML`` to a temporary ``site.yaml``."""
    path = tmp_path / "config" / "site.yaml"
    path.parent.mkdir(parents=True)
    path.write_text(SITE_YAML + "\n", encoding="utf-8")
    return path


@pytest.fixture
def content_dir(tmp_path: Path) -> Path:
    """Write three visible posts, one draft, and one scheduled post."""
    root = tmp_path / "content" / "blog"
    write_post(
        root,
        "bitmask-dp.md",
        """
        title: Bitmask DP
        description: Subsets as integers
        pubDatetime: 2024-02-10T09:30:00Z
        featured: true
        tags: [algorithms, Dynamic Programming]
        """,
    )
    write_post(
        root,
        "digit-dp.md",
        """
        title: Digit DP
        description: Counting digits
        pubDatetime: 2024-03-02T18:00:00Z
        tags: [algorithms, counting]
        """,
    )
    write_post(
        root,
        "notes/segment-trees.md",
        """
        title: Segment Trees
        description: Range queries
        pubDatetime: 2023-11-20
        """,
    )
    write_post(
        root,
        "draft.md",
        """
        title: Draft
        description: Not yet
        pubDatetime: 2024-01-01T00:00:00Z
        draft: true
        """,
    )
    write_post(
        root,
        "future.md",
        """
        title: Future
        description: Scheduled
        pubDatetime: 2999-01-01T00:00:00Z
        """,
    )
    return root


def slugs(posts: cabc.Iterable[BlogPost]) -> list[str]:
    """Return the slugs of ``posts`` in order."""
    return [post.slug for post in posts]
