"""Cursor that pages through one directory listing of a file share."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from http import HTTPStatus
from typing import Protocol

from share_lister.files.client import HttpResponse, parse_error
from share_lister.files.decoder import decode_enumeration
from share_lister.files.models import (
    DONE,
    PATH_SEPARATOR,
    Active,
    CursorState,
    Done,
    Entry,
    EntryMode,
    EnumerationResult,
)
from share_lister.files.timestamps import parse_http_date

logger = logging.getLogger(__name__)


class ListingRequestIssuer(Protocol):
    """Transport that issues a single List Directories and Files request."""

    def list_directory(
        self, path: str, limit: int | None = None, marker: str = ""
    ) -> HttpResponse: ...


def advance(state: CursorState, next_marker: str) -> CursorState:
    """Return the cursor state that follows a successfully decoded page.

    Args:
        state: State the page was fetched in.
        next_marker: NextMarker of that page; empty on the final page.

    Returns:
        Done when the state is already Done or the marker is empty,
        otherwise Active resuming from the marker.
    """
    if isinstance(state, Done) or not next_marker:
        return DONE
    return Active(next_marker)


class ListingCursor:
    """Pages through the children of one directory.

    The cursor is either Active(token) or Done. Each call to
    fetch_next_page issues at most one request; once Done no further
    requests are made. A cursor is not safe to drive from several threads
    at once.
    """

    def __init__(
        self,
        issuer: ListingRequestIssuer,
        path: str,
        limit: int | None = None,
    ) -> None:
        """Initialise a cursor at the start of the listing.

        Args:
            issuer: Transport used to fetch each page.
            path: Directory to list, normally ending with "/".
            limit: Optional page size hint passed to the service.

        Raises:
            ValueError: If limit is not a positive integer.
        """
        if limit is not None and limit <= 0:
            raise ValueError(f"limit must be a positive integer, got {limit}")
        self._issuer = issuer
        self._path = path
        self._limit = limit
        self._state: CursorState = Active()

    @property
    def path(self) -> str:
        return self._path

    @property
    def limit(self) -> int | None:
        return self._limit

    @property
    def state(self) -> CursorState:
        return self._state

    @property
    def done(self) -> bool:
        return isinstance(self._state, Done)

    @property
    def continuation_token(self) -> str:
        """Marker the next request will resume from; empty at start or when done."""
        if isinstance(self._state, Active):
            return self._state.token
        return ""

    def fetch_next_page(self) -> list[Entry] | None:
        """Fetch, decode and normalise the next page of entries.

        A 404 ends the listing without an error. An empty page also returns
        None; if the service still supplied a NextMarker the cursor stays
        Active, so calling again resumes from that marker instead of ending.
        Callers that stop at the first None treat both cases alike.

        Returns:
            Entries of the page (files first, then directories), or None
            when there is nothing more to return.

        Raises:
            FileApiError: If the service answers with a non-2xx, non-404 status.
            ListingDecodeError: If the body is not a valid listing document.
            TimestampParseError: If an entry has an unparseable Last-Modified.
        """
        if isinstance(self._state, Done):
            return None

        response = self._issuer.list_directory(self._path, self._limit, self._state.token)

        if response.status == HTTPStatus.NOT_FOUND:
            logger.info(
                "[fetch_next_page] directory not found, ending listing; path:%s", self._path
            )
            self._state = DONE
            return None
        if response.status != HTTPStatus.OK:
            raise parse_error(response)

        result = decode_enumeration(response.body)
        entries = self._to_entries(result)
        self._state = advance(self._state, result.next_marker)

        logger.info(
            "[fetch_next_page] fetched page; path:%s;entry_count:%d;done:%s",
            self._path,
            len(entries),
            self.done,
        )
        if not entries:
            if not self.done:
                logger.warning(
                    "[fetch_next_page] empty page with continuation marker; path:%s;marker:%s",
                    self._path,
                    self.continuation_token,
                )
            return None
        return entries

    def __iter__(self) -> Iterator[list[Entry]]:
        """Yield pages until fetch_next_page returns None."""
        page = self.fetch_next_page()
        while page is not None:
            yield page
            page = self.fetch_next_page()

    def _to_entries(self, result: EnumerationResult) -> list[Entry]:
        """Map a decoded page to entries; any bad timestamp fails the whole page."""
        base = self._path.lstrip(PATH_SEPARATOR)
        entries: list[Entry] = []
        for file in result.files:
            props = file.properties
            entries.append(
                Entry(
                    path=base + file.name,
                    mode=EntryMode.FILE,
                    etag=props.etag,
                    last_modified=parse_http_date(props.last_modified),
                    content_length=props.content_length or 0,
                )
            )
        for directory in result.directories:
            props = directory.properties
            entries.append(
                Entry(
                    path=base + directory.name + PATH_SEPARATOR,
                    mode=EntryMode.DIR,
                    etag=props.etag,
                    last_modified=parse_http_date(props.last_modified),
                )
            )
        return entries
