"""Common literal values used across pagetree.

These constants keep suffixes and reserved file names centralized so the
builder, the post-processing transforms, and tests import the same values
without drifting. They are fixed for every build and are not configurable.

Examples
--------
>>> from pagetree import _constants
>>> "guide.md".endswith(_constants.MD_SUFFIX)
True
>>> _constants.INDEX_NAME
'index.html'
"""

MD_SUFFIX = ".md"
HTML_SUFFIX = ".html"
INDEX_NAME = "index.html"
README_NAME = "README.md"
TEMPLATE_GLOB = "*.html"
HIDDEN_PREFIX = "."
