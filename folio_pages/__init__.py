"""Configuration and content tooling for a personal portfolio and blog site.

This package validates the site configuration, loads markdown posts, and
derives the listings (visible posts, pages, tags, archives) that the site
renders. Rendering itself belongs to the site's web framework.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from folio_pages import main
>>> main()  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
