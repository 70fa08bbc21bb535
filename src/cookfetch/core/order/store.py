"""
Persisted cookbook order.

Records the cookbook path list resolved from the last manifest parse so
that later runs with fetching disabled can still point chef-solo at the
same cookbooks, in the same precedence order.
"""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class OrderStore:
    """
    Reads and writes the ``.cookbook-order`` file.

    The file holds one cookbook path per line with no header. Every write
    replaces the whole file.

    Example:
        >>> store = OrderStore(Path(".cookbook-order"))
        >>> store.write(["checkouts/teamA/cookbooks", "checkouts/teamB/cookbooks"])
        >>> store.read()
        ['checkouts/teamA/cookbooks', 'checkouts/teamB/cookbooks']
    """

    DEFAULT_FILENAME = ".cookbook-order"

    def __init__(self, path: Path) -> None:
        self.path = path

    def exists(self) -> bool:
        """Check whether an order file has been written."""
        return self.path.is_file()

    def write(self, cookbook_list: list[str]) -> None:
        """Replace the order file with the given cookbook paths."""
        self.path.parent.mkdir(parents=True, exist_ok=True)

        temp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            temp_path.write_text("\n".join(cookbook_list))
            temp_path.replace(self.path)
        except OSError:
            if temp_path.exists():
                temp_path.unlink()
            raise

        logger.debug("Wrote %d cookbook paths to %s", len(cookbook_list), self.path)

    def read(self) -> list[str] | None:
        """
        Read the recorded cookbook paths.

        Returns:
            Cookbook paths in precedence order, or None if no order file exists
        """
        if not self.exists():
            return None
        return self.path.read_text().splitlines()
