"""
Checkout manifest fetching and parsing.

The manifest format is plain comma-separated text, five fields per line:

    vcs,repository,directory,branch,credentials

There is no quoting or escaping, so a field cannot contain a comma.
Blank lines are skipped. The credentials field may be empty.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import PurePosixPath

import httpx

from cookfetch.core.errors import (
    InvalidCheckoutDirectoryError,
    MalformedManifestLineError,
    TransportError,
)
from cookfetch.core.manifest.models import CheckoutEntry, CheckoutManifest
from cookfetch.core.order.store import OrderStore

logger = logging.getLogger(__name__)

FIELD_COUNT = 5


def check_directory(directory: str, line_number: int | None = None) -> None:
    """Reject directories that would resolve outside their own checkout."""
    path = PurePosixPath(directory)
    if not directory.strip() or not path.parts:
        raise InvalidCheckoutDirectoryError(line_number, directory, "is empty")
    if path.is_absolute():
        raise InvalidCheckoutDirectoryError(line_number, directory, "must be relative")
    if ".." in path.parts:
        raise InvalidCheckoutDirectoryError(line_number, directory, "must not contain '..'")
    if directory.split("/")[0] == ".":
        raise InvalidCheckoutDirectoryError(line_number, directory, "must not start with './'")


def parse_line(line: str, line_number: int = 1) -> CheckoutEntry:
    """
    Parse a single non-blank manifest line.

    Args:
        line: Manifest line with its line ending already removed
        line_number: 1-based line number, used in error messages

    Returns:
        The parsed CheckoutEntry

    Raises:
        MalformedManifestLineError: If the line does not have exactly five fields
        InvalidCheckoutDirectoryError: If the directory is empty, absolute or
            climbs out of the checkouts root
    """
    pieces = line.split(",")
    if len(pieces) != FIELD_COUNT:
        raise MalformedManifestLineError(line_number, line, len(pieces))

    vcs, repository, directory, branch, credentials = pieces
    check_directory(directory, line_number)
    return CheckoutEntry(
        vcs=vcs,
        repository=repository,
        directory=directory,
        branch=branch,
        credentials=credentials,
    )


class ManifestParser:
    """
    Turns manifest text into a CheckoutManifest.

    The resolved cookbook order is written to the order store after every
    parsed line, so an interrupted parse still leaves the order of the
    lines read so far on disk.

    Example:
        >>> parser = ManifestParser(OrderStore(Path(".cookbook-order")))
        >>> manifest = parser.parse("git,https://x/repo,teamA/cookA,main,\\n")
        >>> manifest.cookbook_list
        ['checkouts/teamA/cookbooks']
    """

    def __init__(
        self,
        order_store: OrderStore | None = None,
        checkouts_dir: str = "checkouts",
    ) -> None:
        self.order_store = order_store
        self.checkouts_dir = checkouts_dir

    def parse_lines(self, lines: Iterable[str]) -> CheckoutManifest:
        """Parse manifest lines in file order."""
        manifest = CheckoutManifest()

        for line_number, raw in enumerate(lines, start=1):
            line = raw.rstrip("\r\n")
            if not line.strip():
                continue

            entry = parse_line(line, line_number)
            manifest.add(entry, self.checkouts_dir)
            logger.debug("Manifest line %d: %s -> %s", line_number, entry.directory, entry.branch)

            if self.order_store is not None:
                self.order_store.write(manifest.cookbook_list)

        if self.order_store is not None and not manifest.cookbook_list:
            self.order_store.write([])

        return manifest

    def parse(self, text: str) -> CheckoutManifest:
        """Parse a whole manifest document."""
        return self.parse_lines(text.split("\n"))

    def fetch(
        self,
        url: str,
        *,
        verify_tls: bool = False,
        timeout: float | None = None,
    ) -> CheckoutManifest:
        """
        Fetch a manifest over HTTP(S) and parse it.

        Args:
            url: Manifest URL
            verify_tls: Whether to verify the server certificate
            timeout: Request timeout in seconds, None to wait indefinitely

        Returns:
            The parsed CheckoutManifest

        Raises:
            TransportError: If the request fails or returns a non-2xx status
            MalformedManifestLineError: If a line is malformed
        """
        if not verify_tls:
            logger.debug("TLS certificate verification disabled for %s", url)

        try:
            response = httpx.get(
                url,
                verify=verify_tls,
                timeout=timeout,
                follow_redirects=True,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise TransportError(
                f"Fetching checkout list from {url} failed: HTTP {e.response.status_code}",
                url=url,
            ) from e
        except httpx.HTTPError as e:
            raise TransportError(
                f"Fetching checkout list from {url} failed: {e}",
                url=url,
            ) from e

        return self.parse(response.text)
