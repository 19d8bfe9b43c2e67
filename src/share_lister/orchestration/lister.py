"""Directory lister — drains listing cursors and walks directory trees."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import TYPE_CHECKING

from share_lister.files.client import file_share_client_from_config
from share_lister.files.models import PATH_SEPARATOR, Entry
from share_lister.files.pager import ListingCursor, ListingRequestIssuer

if TYPE_CHECKING:
    from share_lister.config import AppConfig

logger = logging.getLogger(__name__)


def as_directory_path(path: str) -> str:
    """Normalise a user-supplied path to the form a cursor expects.

    The share root becomes "" and any other directory gets exactly one
    trailing separator, e.g. "/docs" -> "docs/".
    """
    stripped = path.strip(PATH_SEPARATOR)
    return f"{stripped}{PATH_SEPARATOR}" if stripped else ""


class DirectoryLister:
    """Lists directories of a file share through ListingCursor instances."""

    def __init__(self, issuer: ListingRequestIssuer, page_size: int | None = None) -> None:
        """Initialise the lister.

        Args:
            issuer: Transport used by every cursor this lister creates.
            page_size: Optional maxresults hint for each page request.
        """
        self._issuer = issuer
        self._page_size = page_size

    def cursor(self, path: str) -> ListingCursor:
        """Create a fresh cursor for one directory."""
        return ListingCursor(self._issuer, as_directory_path(path), self._page_size)

    def list_directory(self, path: str) -> list[Entry]:
        """Return every direct child of a directory.

        A directory that does not exist yields an empty list.

        Args:
            path: Share-relative directory path.

        Returns:
            All entries across all pages, in page order.
        """
        entries: list[Entry] = []
        pages = 0
        for page in self.cursor(path):
            entries.extend(page)
            pages += 1
        logger.info(
            "[list_directory] listing complete; path:%s;page_count:%d;entry_count:%d",
            path,
            pages,
            len(entries),
        )
        return entries

    def walk(self, path: str) -> Iterator[Entry]:
        """Yield every entry below a directory, depth first.

        Each directory is listed with its own cursor and its children are
        visited right after the directory entry itself, so output order is
        a pre-order traversal with page order preserved inside a directory.

        Args:
            path: Share-relative directory to start from.

        Yields:
            Entry objects for all files and directories in the subtree.
        """
        stack: list[Iterator[Entry]] = [self._entries(path)]
        while stack:
            entry = next(stack[-1], None)
            if entry is None:
                stack.pop()
                continue
            yield entry
            if entry.is_dir:
                stack.append(self._entries(entry.path))

    def _entries(self, path: str) -> Iterator[Entry]:
        for page in self.cursor(path):
            yield from page


def directory_lister_from_config(config: AppConfig) -> DirectoryLister:
    """Construct a DirectoryLister from application configuration.

    Args:
        config: Application configuration instance.

    Returns:
        Configured DirectoryLister instance.
    """
    client = file_share_client_from_config(config)
    return DirectoryLister(issuer=client, page_size=config.page_size)
