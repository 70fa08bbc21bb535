"""
Downstream provisioner configuration.

Cookfetch only needs three chef-solo settings: the roles path, the data
bags path and the cookbooks path list. ``ProvisionerConfig`` is the
narrow interface the patch step works against; adapters wrap whatever
the host actually uses to hold those settings.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Protocol

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

DEFAULT_COOKBOOKS_PATH = ["cookbooks"]


class ProvisionerConfig(Protocol):
    """Chef-solo path settings the patch step reads and fills in."""

    @property
    def roles_path(self) -> str | None: ...

    @property
    def data_bags_path(self) -> str | None: ...

    def cookbooks_path_is_default(self) -> bool: ...

    def set_roles_path(self, path: str) -> None: ...

    def set_data_bags_path(self, path: str) -> None: ...

    def set_cookbooks_path(self, paths: list[str]) -> None: ...


class ChefSoloConfig(BaseModel):
    """
    In-memory chef-solo path settings.

    Unset roles and data bags paths are None. The cookbooks path starts
    at chef-solo's own default and counts as customised once it differs.
    """

    roles_path: str | None = Field(default=None, description="chef-solo roles_path")
    data_bags_path: str | None = Field(default=None, description="chef-solo data_bags_path")
    cookbooks_path: list[str] = Field(
        default_factory=lambda: list(DEFAULT_COOKBOOKS_PATH),
        description="chef-solo cookbook_path, in precedence order",
    )

    model_config = ConfigDict(extra="allow", validate_assignment=True)

    def cookbooks_path_is_default(self) -> bool:
        return self.cookbooks_path == DEFAULT_COOKBOOKS_PATH

    def set_roles_path(self, path: str) -> None:
        self.roles_path = path

    def set_data_bags_path(self, path: str) -> None:
        self.data_bags_path = path

    def set_cookbooks_path(self, paths: list[str]) -> None:
        self.cookbooks_path = list(paths)


class ChefSoloConfigFile:
    """
    ProvisionerConfig adapter over a JSON file.

    A missing file reads as an all-default configuration. Setters update
    the in-memory copy; call ``save()`` to write it back.

    Example:
        >>> solo = ChefSoloConfigFile(Path(".chef-solo.json"))
        >>> solo.set_roles_path("combined/roles")
        >>> solo.save()
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        self.config = self._load()

    def _load(self) -> ChefSoloConfig:
        if not self.path.exists():
            return ChefSoloConfig()
        return ChefSoloConfig.model_validate_json(self.path.read_text())

    @property
    def roles_path(self) -> str | None:
        return self.config.roles_path

    @property
    def data_bags_path(self) -> str | None:
        return self.config.data_bags_path

    @property
    def cookbooks_path(self) -> list[str]:
        return self.config.cookbooks_path

    def cookbooks_path_is_default(self) -> bool:
        return self.config.cookbooks_path_is_default()

    def set_roles_path(self, path: str) -> None:
        self.config.set_roles_path(path)

    def set_data_bags_path(self, path: str) -> None:
        self.config.set_data_bags_path(path)

    def set_cookbooks_path(self, paths: list[str]) -> None:
        self.config.set_cookbooks_path(paths)

    def save(self) -> None:
        """Write the settings back to disk."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(self.config.model_dump(), indent=2) + "\n")
        logger.debug("Saved chef-solo settings to %s", self.path)
