"""
Tests for checkout manifest parsing and fetching.

Tests cover:
- Single-line parsing and field assignment
- Duplicate directory handling (map collapses, list keeps)
- Blank lines and line endings
- Malformed lines
- Order file writes during parsing
- HTTP fetch and transport errors
"""

from pathlib import Path
from unittest.mock import patch

import httpx
import pytest

from cookfetch.core.errors import (
    ConfigurationError,
    InvalidCheckoutDirectoryError,
    MalformedManifestLineError,
    TransportError,
)
from cookfetch.core.manifest import CheckoutEntry, ManifestParser, VcsKind, parse_line
from cookfetch.core.order import OrderStore


class TestParseLine:
    """Tests for parse_line."""

    def test_fields_in_order(self) -> None:
        """Fields map to vcs, repository, directory, branch, credentials."""
        entry = parse_line("git,https://x/repo,teamA/cookA,main,secret")

        assert entry.vcs == "git"
        assert entry.repository == "https://x/repo"
        assert entry.directory == "teamA/cookA"
        assert entry.branch == "main"
        assert entry.credentials == "secret"

    def test_empty_credentials(self) -> None:
        """A trailing comma yields empty credentials."""
        entry = parse_line("git,https://x/repo,cookA,main,")
        assert entry.credentials == ""

    def test_too_few_fields(self) -> None:
        """Fewer than five fields is a malformed line."""
        with pytest.raises(MalformedManifestLineError) as exc_info:
            parse_line("git,https://x/repo,cookA,main", line_number=7)

        assert exc_info.value.line_number == 7
        assert exc_info.value.field_count == 4
        assert "line 7" in str(exc_info.value)

    def test_too_many_fields(self) -> None:
        """Commas inside a field are not supported."""
        with pytest.raises(MalformedManifestLineError):
            parse_line("git,https://x/repo,cookA,main,user,pass")

    def test_malformed_is_configuration_error(self) -> None:
        with pytest.raises(ConfigurationError):
            parse_line("nonsense")

    @pytest.mark.parametrize(
        "directory,reason",
        [
            ("", "is empty"),
            ("   ", "is empty"),
            (".", "is empty"),
            ("/srv/cookbooks", "must be relative"),
            ("../outside", "must not contain '..'"),
            ("team/../../outside", "must not contain '..'"),
            ("./team", "must not start with './'"),
        ],
    )
    def test_directory_outside_checkout_rejected(self, directory: str, reason: str) -> None:
        """Directories that do not name their own working copy are rejected."""
        with pytest.raises(InvalidCheckoutDirectoryError) as exc_info:
            parse_line(f"git,https://x/repo,{directory},main,", line_number=3)

        assert exc_info.value.line_number == 3
        assert exc_info.value.reason == reason
        assert isinstance(exc_info.value, ConfigurationError)

    def test_hidden_directory_allowed(self) -> None:
        assert parse_line("git,https://x/repo,.team/cookA,main,").cookbook_root == ".team"


class TestCheckoutEntry:
    """Tests for CheckoutEntry derived values."""

    def test_cookbook_root_nested(self) -> None:
        entry = CheckoutEntry(vcs="git", repository="r", directory="team/project", branch="b")
        assert entry.cookbook_root == "team"
        assert entry.cookbook_path() == "checkouts/team/cookbooks"

    def test_cookbook_root_flat(self) -> None:
        entry = CheckoutEntry(vcs="git", repository="r", directory="project", branch="b")
        assert entry.cookbook_path("vendor") == "vendor/project/cookbooks"

    def test_vcs_kind(self) -> None:
        git_entry = CheckoutEntry(vcs="git", repository="r", directory="d", branch="b")
        svn_entry = CheckoutEntry(vcs="svn", repository="r", directory="d", branch="b")

        assert git_entry.vcs_kind is VcsKind.GIT
        assert svn_entry.vcs_kind is None


class TestManifestParser:
    """Tests for ManifestParser.parse."""

    def test_single_line(self) -> None:
        """The canonical one-line manifest."""
        manifest = ManifestParser().parse("git,https://x/repo,teamA/cookA,main,\n")

        assert manifest.cookbook_list == ["checkouts/teamA/cookbooks"]
        assert manifest.by_directory["teamA/cookA"].branch == "main"

    def test_blank_lines_skipped(self) -> None:
        text = "\ngit,r1,a,main,\n\n   \ngit,r2,b,main,\n"
        manifest = ManifestParser().parse(text)

        assert manifest.cookbook_list == ["checkouts/a/cookbooks", "checkouts/b/cookbooks"]

    def test_crlf_line_endings(self) -> None:
        manifest = ManifestParser().parse("git,r1,a,main,\r\ngit,r2,b,dev,\r\n")

        assert manifest.by_directory["b"].branch == "dev"
        assert manifest.by_directory["b"].credentials == ""

    def test_only_newline_separates_lines(self) -> None:
        """Form feeds and other Unicode line breaks stay inside their field."""
        manifest = ManifestParser().parse("git,r1,a,main,tok\x0cen\u2028x\ngit,r2,b,main,\n")

        assert manifest.cookbook_list == ["checkouts/a/cookbooks", "checkouts/b/cookbooks"]
        assert manifest.by_directory["a"].credentials == "tok\x0cen\u2028x"

    def test_invalid_directory_stops_parse(self, tmp_path: Path) -> None:
        """Lines before a bad directory are already recorded in the order file."""
        store = OrderStore(tmp_path / ".cookbook-order")

        with pytest.raises(InvalidCheckoutDirectoryError):
            ManifestParser(store).parse("git,r1,a,main,\ngit,r2,,main,\n")

        assert store.read() == ["checkouts/a/cookbooks"]

    def test_duplicate_directories(self) -> None:
        """Duplicates collapse in the map but stay in the cookbook list."""
        text = "git,r1,shared,main,\ngit,r2,other,main,\ngit,r3,shared,dev,\n"
        manifest = ManifestParser().parse(text)

        assert len(manifest.cookbook_list) == 3
        assert manifest.cookbook_list == [
            "checkouts/shared/cookbooks",
            "checkouts/other/cookbooks",
            "checkouts/shared/cookbooks",
        ]
        assert len(manifest.by_directory) == 2
        assert manifest.by_directory["shared"].repository == "r3"
        assert manifest.by_directory["shared"].branch == "dev"

    def test_same_root_different_directories(self) -> None:
        """Directories sharing a first segment share a cookbook path."""
        text = "git,r1,team/one,main,\ngit,r2,team/two,main,\n"
        manifest = ManifestParser().parse(text)

        assert manifest.cookbook_list == ["checkouts/team/cookbooks"] * 2
        assert set(manifest.by_directory) == {"team/one", "team/two"}

    def test_malformed_line_reports_line_number(self) -> None:
        text = "git,r1,a,main,\n\ngit,r2,b\n"
        with pytest.raises(MalformedManifestLineError) as exc_info:
            ManifestParser().parse(text)

        assert exc_info.value.line_number == 3

    def test_unsupported_vcs_parses(self) -> None:
        """Unsupported VCS kinds are rejected at sync time, not parse time."""
        manifest = ManifestParser().parse("hg,r1,a,default,\n")
        assert manifest.by_directory["a"].vcs == "hg"

    def test_custom_checkouts_dir(self) -> None:
        manifest = ManifestParser(checkouts_dir="vendor").parse("git,r1,a/b,main,\n")
        assert manifest.cookbook_list == ["vendor/a/cookbooks"]


class TestOrderFileWrites:
    """Tests for the order file side effect of parsing."""

    def test_order_written(self, tmp_path: Path) -> None:
        store = OrderStore(tmp_path / ".cookbook-order")
        ManifestParser(store).parse("git,r1,a,main,\ngit,r2,b/c,main,\n")

        assert (tmp_path / ".cookbook-order").read_text() == (
            "checkouts/a/cookbooks\ncheckouts/b/cookbooks"
        )

    def test_order_replaced_not_appended(self, tmp_path: Path) -> None:
        store = OrderStore(tmp_path / ".cookbook-order")
        ManifestParser(store).parse("git,r1,a,main,\ngit,r2,b,main,\n")
        ManifestParser(store).parse("git,r3,z,main,\n")

        assert store.read() == ["checkouts/z/cookbooks"]

    def test_partial_order_kept_on_malformed_line(self, tmp_path: Path) -> None:
        """Lines parsed before a failure are already recorded."""
        store = OrderStore(tmp_path / ".cookbook-order")
        with pytest.raises(MalformedManifestLineError):
            ManifestParser(store).parse("git,r1,a,main,\ngit,r2,b,main,\nbroken\n")

        assert store.read() == ["checkouts/a/cookbooks", "checkouts/b/cookbooks"]

    def test_empty_manifest_writes_empty_order(self, tmp_path: Path) -> None:
        store = OrderStore(tmp_path / ".cookbook-order")
        manifest = ManifestParser(store).parse("\n\n")

        assert manifest.cookbook_list == []
        assert store.read() == []


class TestFetch:
    """Tests for ManifestParser.fetch over HTTP."""

    def _response(self, text: str, status_code: int = 200) -> httpx.Response:
        request = httpx.Request("GET", "https://config.example.com/checkouts.csv")
        return httpx.Response(status_code, text=text, request=request)

    def test_fetch_parses_body(self) -> None:
        with patch("cookfetch.core.manifest.parser.httpx.get") as mock_get:
            mock_get.return_value = self._response("git,r1,a,main,\n")
            manifest = ManifestParser().fetch("https://config.example.com/checkouts.csv")

        assert manifest.cookbook_list == ["checkouts/a/cookbooks"]

    def test_fetch_tls_verification_off_by_default(self) -> None:
        with patch("cookfetch.core.manifest.parser.httpx.get") as mock_get:
            mock_get.return_value = self._response("")
            ManifestParser().fetch("https://config.example.com/checkouts.csv")

        _, kwargs = mock_get.call_args
        assert kwargs["verify"] is False
        assert kwargs["timeout"] is None

    def test_fetch_tls_verification_opt_in(self) -> None:
        with patch("cookfetch.core.manifest.parser.httpx.get") as mock_get:
            mock_get.return_value = self._response("")
            ManifestParser().fetch(
                "https://config.example.com/checkouts.csv", verify_tls=True, timeout=5.0
            )

        _, kwargs = mock_get.call_args
        assert kwargs["verify"] is True
        assert kwargs["timeout"] == 5.0

    def test_fetch_http_error_status(self) -> None:
        with patch("cookfetch.core.manifest.parser.httpx.get") as mock_get:
            mock_get.return_value = self._response("not found", status_code=404)
            with pytest.raises(TransportError) as exc_info:
                ManifestParser().fetch("https://config.example.com/checkouts.csv")

        assert "404" in str(exc_info.value)
        assert exc_info.value.url == "https://config.example.com/checkouts.csv"

    def test_fetch_connection_error(self) -> None:
        with patch(
            "cookfetch.core.manifest.parser.httpx.get",
            side_effect=httpx.ConnectError("connection refused"),
        ):
            with pytest.raises(TransportError) as exc_info:
                ManifestParser().fetch("https://config.example.com/checkouts.csv")

        assert "connection refused" in str(exc_info.value)

    def test_fetch_failure_leaves_order_untouched(self, tmp_path: Path) -> None:
        store = OrderStore(tmp_path / ".cookbook-order")
        store.write(["checkouts/old/cookbooks"])

        with patch(
            "cookfetch.core.manifest.parser.httpx.get",
            side_effect=httpx.ConnectError("down"),
        ):
            with pytest.raises(TransportError):
                ManifestParser(store).fetch("https://config.example.com/checkouts.csv")

        assert store.read() == ["checkouts/old/cookbooks"]
