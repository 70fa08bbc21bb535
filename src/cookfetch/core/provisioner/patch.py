"""
Point chef-solo at the combined tree.

Runs whether or not fetching is enabled. Only settings the operator has
left unset are filled in; customised settings are kept with a warning.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from cookfetch.core.messages import Messages
from cookfetch.core.order.store import OrderStore
from cookfetch.core.provisioner.models import ProvisionerConfig

logger = logging.getLogger(__name__)


@dataclass
class PatchResult:
    """What the patch step changed.

    Attributes:
        roles_set: The roles path was filled in
        data_bags_set: The data bags path was filled in
        cookbooks_set: The cookbooks path was replaced by the recorded order
        missing_order_file: The cookbooks path was default but no order file existed
    """
    roles_set: bool = False
    data_bags_set: bool = False
    cookbooks_set: bool = False
    missing_order_file: bool = False


def configure_provisioner(
    provisioner: ProvisionerConfig,
    order_store: OrderStore,
    messages: Messages,
    combined_dir: str = "combined",
) -> PatchResult:
    """
    Fill unset chef-solo paths from the combined tree and the order file.

    Args:
        provisioner: Chef-solo settings to patch
        order_store: Where the cookbook order was recorded
        messages: Sink for warnings and errors
        combined_dir: Combined tree root, relative to the project

    Returns:
        PatchResult describing the changes
    """
    result = PatchResult()

    if provisioner.roles_path is None:
        provisioner.set_roles_path(f"{combined_dir}/roles")
        result.roles_set = True
    else:
        messages.warn("Keeping your custom chef-solo roles path")

    if provisioner.data_bags_path is None:
        provisioner.set_data_bags_path(f"{combined_dir}/data_bags")
        result.data_bags_set = True
    else:
        messages.warn("Keeping your custom chef-solo data_bags path")

    if provisioner.cookbooks_path_is_default():
        cookbooks = order_store.read()
        if cookbooks is None:
            messages.error(
                f"Could not find a {order_store.path.name} file. Run provision with "
                "cookbook fetching enabled at least once (or else specify your own "
                "cookbook path)"
            )
            result.missing_order_file = True
        else:
            provisioner.set_cookbooks_path(cookbooks)
            result.cookbooks_set = True
            logger.debug("Cookbook path set from %s: %s", order_store.path, cookbooks)
    else:
        messages.warn("Keeping your custom chef-solo cookbook path")

    return result
