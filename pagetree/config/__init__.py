"""Load and validate build configuration for pagetree.

This subpackage reads an optional ``pagetree.yaml`` file, merges command-line
overrides on top of it, and produces a :class:`BuildConfig` dataclass that the
site builder consumes. :meth:`BuildConfig.validate` resolves the source,
output and templates roots and rejects configurations where they coincide.

Examples
--------
>>> from pathlib import Path
>>> from pagetree.config import load_build_config
>>> config = load_build_config(Path("pagetree.yaml"))  # doctest: +SKIP
>>> config.validate().output_dir  # doctest: +SKIP
PosixPath('/srv/site/output')
"""

from .loader import load_build_config
from .models import BuildConfig, BuildConfigError

__all__ = ["BuildConfig", "BuildConfigError", "load_build_config"]
