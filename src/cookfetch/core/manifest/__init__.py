"""
Checkout manifest models and parser.

Example:
    >>> from cookfetch.core.manifest import ManifestParser
    >>> manifest = ManifestParser().parse("git,https://x/repo,teamA/cookA,main,\\n")
    >>> manifest.by_directory["teamA/cookA"].branch
    'main'
"""

from cookfetch.core.manifest.models import CheckoutEntry, CheckoutManifest, VcsKind
from cookfetch.core.manifest.parser import ManifestParser, parse_line

__all__ = [
    "CheckoutEntry",
    "CheckoutManifest",
    "ManifestParser",
    "VcsKind",
    "parse_line",
]
