"""
Exception hierarchy for cookfetch.

Everything raised during fetch, sync and link is fatal: the run aborts at
the first failure and nothing already written to disk is rolled back.
Provisioner patching never raises these; it reports through the message
sink instead.
"""

from __future__ import annotations


class CookfetchError(Exception):
    """Base exception for cookfetch operations."""

    pass


class ConfigurationError(CookfetchError):
    """Raised when the checkout manifest or settings cannot be used as given."""

    pass


class MalformedManifestLineError(ConfigurationError):
    """Raised when a manifest line does not split into exactly five fields."""

    def __init__(self, line_number: int, line: str, field_count: int):
        super().__init__(
            f"Malformed manifest line {line_number}: expected 5 comma-separated fields "
            f"(vcs,repository,directory,branch,credentials), got {field_count}: {line!r}"
        )
        self.line_number = line_number
        self.line = line
        self.field_count = field_count


class InvalidCheckoutDirectoryError(ConfigurationError):
    """Raised when a manifest directory is not a relative path below the checkouts root."""

    def __init__(self, line_number: int | None, directory: str, reason: str):
        where = f" on manifest line {line_number}" if line_number is not None else ""
        super().__init__(f"Invalid checkout directory{where}: {directory!r} {reason}")
        self.line_number = line_number
        self.directory = directory
        self.reason = reason


class UnsupportedVcsError(ConfigurationError):
    """Raised when a checkout entry names a VCS other than git."""

    def __init__(self, vcs: str, directory: str):
        super().__init__(f"Unsupported VCS '{vcs}' in checkout list for entry '{directory}'")
        self.vcs = vcs
        self.directory = directory


class TransportError(CookfetchError):
    """Raised when the checkout manifest cannot be fetched."""

    def __init__(self, message: str, url: str):
        super().__init__(message)
        self.url = url


class VcsCommandError(CookfetchError):
    """Raised when a clone, checkout or pull exits non-zero."""

    def __init__(
        self,
        command: list[str],
        *,
        cwd: str | None = None,
        returncode: int | None = None,
        stderr: str = "",
    ):
        super().__init__(f"Could not '{' '.join(command)}'")
        self.command = command
        self.cwd = cwd
        self.returncode = returncode
        self.stderr = stderr


class LinkError(CookfetchError):
    """Raised when a link in the combined tree cannot be created."""

    def __init__(self, message: str, source: str, target: str):
        super().__init__(message)
        self.source = source
        self.target = target
