"""Unit tests for orchestration/lister.py — DirectoryLister behaviour."""

from unittest.mock import MagicMock, patch

import pytest

from share_lister.config import AppConfig
from share_lister.files.client import HttpResponse
from share_lister.files.models import EntryMode
from share_lister.orchestration.lister import (
    DirectoryLister,
    as_directory_path,
    directory_lister_from_config,
)

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


_PROPS = (
    "<Properties><Last-Modified>Mon, 25 Sep 2023 12:43:08 GMT</Last-Modified>"
    "<Etag>e</Etag></Properties>"
)


def _page(
    files: tuple[str, ...] = (), dirs: tuple[str, ...] = (), marker: str = ""
) -> HttpResponse:
    entries = "".join(f"<File><Name>{n}</Name><FileId>1</FileId>{_PROPS}</File>" for n in files)
    entries += "".join(
        f"<Directory><Name>{n}</Name><FileId>2</FileId>{_PROPS}</Directory>" for n in dirs
    )
    body = (
        f"<EnumerationResults><Entries>{entries}</Entries>"
        f"<NextMarker>{marker}</NextMarker></EnumerationResults>"
    )
    return HttpResponse(status=200, body=body.encode())


def _tree_issuer(tree: dict[str, list[HttpResponse]]) -> MagicMock:
    """Return an issuer that serves pages per directory path in call order."""
    queues = {path: list(pages) for path, pages in tree.items()}

    def list_directory(path: str, limit: int | None = None, marker: str = "") -> HttpResponse:
        pages = queues.get(path)
        if not pages:
            return HttpResponse(status=404, reason="Not Found")
        return pages.pop(0)

    issuer = MagicMock()
    issuer.list_directory.side_effect = list_directory
    return issuer


# ---------------------------------------------------------------------------
# as_directory_path tests
# ---------------------------------------------------------------------------


class TestAsDirectoryPath:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("", ""),
            ("/", ""),
            ("docs", "docs/"),
            ("/docs", "docs/"),
            ("docs/", "docs/"),
            ("docs/reports//", "docs/reports/"),
        ],
    )
    def test_normalises(self, raw: str, expected: str) -> None:
        assert as_directory_path(raw) == expected


# ---------------------------------------------------------------------------
# list_directory tests
# ---------------------------------------------------------------------------


class TestListDirectory:
    def test_drains_all_pages(self) -> None:
        issuer = _tree_issuer(
            {"docs/": [_page(files=("a.txt",), marker="m1"), _page(dirs=("sub",))]}
        )
        lister = DirectoryLister(issuer, page_size=1)

        entries = lister.list_directory("docs")

        assert [e.path for e in entries] == ["docs/a.txt", "docs/sub/"]
        assert [c.args for c in issuer.list_directory.call_args_list] == [
            ("docs/", 1, ""),
            ("docs/", 1, "m1"),
        ]

    def test_missing_directory_is_empty(self) -> None:
        lister = DirectoryLister(_tree_issuer({}))
        assert lister.list_directory("nope") == []

    def test_root_listing_has_no_prefix(self) -> None:
        issuer = _tree_issuer({"": [_page(files=("top.txt",))]})
        entries = DirectoryLister(issuer).list_directory("/")
        assert [e.path for e in entries] == ["top.txt"]

    def test_cursor_uses_page_size(self) -> None:
        cursor = DirectoryLister(MagicMock(), page_size=25).cursor("docs")
        assert cursor.path == "docs/"
        assert cursor.limit == 25


# ---------------------------------------------------------------------------
# walk tests
# ---------------------------------------------------------------------------


class TestWalk:
    def test_walks_subtree_depth_first(self) -> None:
        issuer = _tree_issuer(
            {
                "": [_page(files=("root.txt",), dirs=("a", "b"))],
                "a/": [_page(files=("a1.txt",), dirs=("deep",))],
                "a/deep/": [_page(files=("d.txt",))],
                "b/": [_page(files=("b1.txt",), marker="m1"), _page(files=("b2.txt",))],
            }
        )
        lister = DirectoryLister(issuer)

        paths = [e.path for e in lister.walk("")]

        assert paths == [
            "root.txt",
            "a/",
            "a/a1.txt",
            "a/deep/",
            "a/deep/d.txt",
            "b/",
            "b/b1.txt",
            "b/b2.txt",
        ]

    def test_walk_is_lazy(self) -> None:
        issuer = _tree_issuer({"": [_page(dirs=("a",))], "a/": [_page(files=("x",))]})
        walker = DirectoryLister(issuer).walk("")

        first = next(walker)

        assert first.path == "a/"
        assert first.mode is EntryMode.DIR
        assert issuer.list_directory.call_count == 1

    def test_directory_removed_during_walk_is_skipped(self) -> None:
        issuer = _tree_issuer({"": [_page(files=("f",), dirs=("vanished",))]})
        paths = [e.path for e in DirectoryLister(issuer).walk("")]
        assert paths == ["f", "vanished/"]


# ---------------------------------------------------------------------------
# directory_lister_from_config tests
# ---------------------------------------------------------------------------


class TestDirectoryListerFromConfig:
    def test_wires_client_and_page_size(self) -> None:
        config = AppConfig(
            client_id="cid",
            client_secret="cs",
            tenant_id="tid",
            account_name="acct",
            share_name="share",
            page_size=100,
        )
        with patch(
            "share_lister.orchestration.lister.file_share_client_from_config"
        ) as mock_factory:
            lister = directory_lister_from_config(config)

        mock_factory.assert_called_once_with(config)
        cursor = lister.cursor("docs")
        assert cursor.limit == 100
