"""Chef-solo settings and the patch step that points them at the combined tree."""

from cookfetch.core.provisioner.models import (
    DEFAULT_COOKBOOKS_PATH,
    ChefSoloConfig,
    ChefSoloConfigFile,
    ProvisionerConfig,
)
from cookfetch.core.provisioner.patch import PatchResult, configure_provisioner

__all__ = [
    "DEFAULT_COOKBOOKS_PATH",
    "ChefSoloConfig",
    "ChefSoloConfigFile",
    "PatchResult",
    "ProvisionerConfig",
    "configure_provisioner",
]
