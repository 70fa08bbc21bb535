"""
Configuration data models for cookfetch.

These models define the structure of .cookfetch.json and
~/.config/cookfetch/config.json files, with validation and type safety
via Pydantic.
"""

from pathlib import PurePosixPath
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class FetcherConfig(BaseModel):
    """
    Top-level cookfetch configuration.

    Loaded from defaults, user config, project config, and env vars.
    All directory settings are relative to the project directory.

    Example:
        >>> config = FetcherConfig(url="https://example.com/checkouts.csv")
        >>> config.sync_enabled
        True
        >>> config.order_file
        '.cookbook-order'
    """
    # Manifest source
    url: Optional[str] = Field(
        default=None,
        description="URL of the checkout manifest"
    )
    disable: bool = Field(
        default=False,
        description="Skip fetching, syncing and linking checkouts"
    )
    verify_tls: bool = Field(
        default=False,
        description=(
            "Verify the TLS certificate of the manifest host. Off by default: "
            "manifests are commonly served from hosts with self-signed certificates"
        )
    )
    timeout: Optional[float] = Field(
        default=None,
        gt=0,
        description="Manifest fetch timeout in seconds (None blocks until done)"
    )

    # Layout
    checkouts_dir: str = Field(
        default="checkouts",
        min_length=1,
        description="Directory holding one working copy per manifest entry"
    )
    combined_dir: str = Field(
        default="combined",
        min_length=1,
        description="Directory holding the combined overlay of links"
    )
    order_file: str = Field(
        default=".cookbook-order",
        min_length=1,
        description="File recording the resolved cookbook path order"
    )
    link_root: Optional[str] = Field(
        default=None,
        description=(
            "Prefix for link targets, e.g. '/vagrant' for the guest view of the "
            "project. Defaults to the absolute project directory"
        )
    )

    # Downstream provisioner
    provisioner_file: str = Field(
        default=".chef-solo.json",
        min_length=1,
        description="JSON file holding chef-solo roles/data_bags/cookbooks paths"
    )

    model_config = ConfigDict(
        extra="allow",  # Allow extra fields for forward compatibility
        validate_assignment=True,  # Validate on field assignment
    )

    @field_validator("url", mode="before")
    @classmethod
    def blank_url_is_unset(cls, v: Optional[str]) -> Optional[str]:
        """Treat an empty or whitespace-only URL as unset."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("checkouts_dir", "combined_dir")
    @classmethod
    def layout_dir_is_relative(cls, v: str) -> str:
        """Layout directories live inside the project so link_root can remap them."""
        if PurePosixPath(v).is_absolute():
            raise ValueError(f"must be relative to the project directory, got '{v}'")
        return v

    @property
    def sync_enabled(self) -> bool:
        """Whether fetch/sync/link should run at all."""
        return not self.disable
