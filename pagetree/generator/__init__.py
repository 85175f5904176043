"""Utilities for converting, post-processing, and writing pagetree pages."""

from .anchors import assign_anchors, slugify
from .headings import first_heading
from .link_rewriter import rewrite_links
from .models import BuildReport, DirectoryIndex, Page, PageMeta
from .renderer import HtmlContentRenderer
from .site_builder import SiteBuilder

__all__ = [
    "BuildReport",
    "DirectoryIndex",
    "HtmlContentRenderer",
    "Page",
    "PageMeta",
    "SiteBuilder",
    "assign_anchors",
    "first_heading",
    "rewrite_links",
    "slugify",
]
