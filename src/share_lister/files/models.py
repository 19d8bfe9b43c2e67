"""Data models for Azure Files directory listings."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

# EnumerationResults XML element names (case-sensitive)
TAG_ROOT = "EnumerationResults"
TAG_MARKER = "Marker"
TAG_PREFIX = "Prefix"
TAG_MAX_RESULTS = "MaxResults"
TAG_DIRECTORY_ID = "DirectoryId"
TAG_ENTRIES = "Entries"
TAG_FILE = "File"
TAG_DIRECTORY = "Directory"
TAG_FILE_ID = "FileId"
TAG_NAME = "Name"
TAG_PROPERTIES = "Properties"
TAG_CONTENT_LENGTH = "Content-Length"
TAG_CREATION_TIME = "CreationTime"
TAG_LAST_ACCESS_TIME = "LastAccessTime"
TAG_LAST_WRITE_TIME = "LastWriteTime"
TAG_CHANGE_TIME = "ChangeTime"
TAG_LAST_MODIFIED = "Last-Modified"
TAG_ETAG = "Etag"
TAG_NEXT_MARKER = "NextMarker"

PATH_SEPARATOR = "/"


class EntryMode(str, Enum):
    """Kind of a listed entry."""

    FILE = "file"
    DIR = "dir"


@dataclass(frozen=True)
class Properties:
    """Per-item metadata block as returned by the service."""

    etag: str
    last_modified: str
    content_length: int | None = None
    creation_time: str | None = None
    last_access_time: str | None = None
    last_write_time: str | None = None
    change_time: str | None = None


@dataclass(frozen=True)
class FileRecord:
    """A raw ``File`` node; ``name`` is relative to the listed directory."""

    file_id: str
    name: str
    properties: Properties


@dataclass(frozen=True)
class DirectoryRecord:
    """A raw ``Directory`` node; ``name`` is relative to the listed directory."""

    file_id: str
    name: str
    properties: Properties


@dataclass(frozen=True)
class EnumerationResult:
    """One decoded page of a directory listing.

    Attributes:
        files: File records in document order.
        directories: Directory records in document order.
        next_marker: Continuation marker for the next page; empty on the last page.
        marker: Marker echoed back by the service (unused).
        prefix: Prefix filter echoed back by the service (unused).
        max_results: Page size echoed back by the service (unused).
        directory_id: Service identifier of the listed directory (unused).
    """

    files: list[FileRecord] = field(default_factory=list)
    directories: list[DirectoryRecord] = field(default_factory=list)
    next_marker: str = ""
    marker: str | None = None
    prefix: str | None = None
    max_results: int | None = None
    directory_id: str | None = None


@dataclass
class Entry:
    """A normalized listing entry.

    Attributes:
        path: Share-relative path. Directories end with ``/``, files do not.
        mode: Whether the entry is a file or a directory.
        etag: Entity tag reported by the service.
        last_modified: Last modification time (timezone-aware UTC).
        content_length: Size in bytes for files; None for directories.
    """

    path: str
    mode: EntryMode
    etag: str
    last_modified: datetime
    content_length: int | None = None

    @property
    def is_dir(self) -> bool:
        return self.mode is EntryMode.DIR


@dataclass(frozen=True)
class Active:
    """Cursor state: more pages may exist, resume from ``token``."""

    token: str = ""


@dataclass(frozen=True)
class Done:
    """Cursor state: the listing is exhausted. Absorbing."""


CursorState = Active | Done

DONE = Done()
