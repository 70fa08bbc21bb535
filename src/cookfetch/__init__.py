"""
Cookfetch - cookbook checkout fetcher

Syncs the cookbook repositories listed in a remote checkout manifest and
assembles a combined roles/nodes/handlers/data_bags tree for chef-solo.
"""

__version__ = "0.3.0"

# Re-export core models for convenience
from cookfetch.core.config.models import FetcherConfig
from cookfetch.core.manifest.models import CheckoutEntry, CheckoutManifest, VcsKind

__all__ = ["FetcherConfig", "CheckoutEntry", "CheckoutManifest", "VcsKind", "__version__"]
