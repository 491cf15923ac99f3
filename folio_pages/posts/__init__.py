"""Blog post loading, visibility filtering, pagination, and listings."""

from .listings import (
    archive_groups,
    edit_post_url,
    index_listing,
    posts_for_tag,
    unique_tags,
)
from .loader import discover_content, load_page, load_posts, parse_post
from .models import (
    ArchiveMonth,
    ArchiveYear,
    BlogPost,
    IndexListing,
    Page,
    PostFormatError,
    StaticPage,
    TagSummary,
)
from .pagination import page_slice, paginate, total_pages
from .visibility import is_visible, visible_posts, visible_posts_for

__all__ = [
    "ArchiveMonth",
    "ArchiveYear",
    "BlogPost",
    "IndexListing",
    "Page",
    "PostFormatError",
    "StaticPage",
    "TagSummary",
    "archive_groups",
    "discover_content",
    "edit_post_url",
    "index_listing",
    "is_visible",
    "load_page",
    "load_posts",
    "page_slice",
    "paginate",
    "parse_post",
    "posts_for_tag",
    "total_pages",
    "unique_tags",
    "visible_posts",
    "visible_posts_for",
]
