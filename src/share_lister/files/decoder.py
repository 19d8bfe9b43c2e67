"""Decoder for the List Directories and Files ``EnumerationResults`` payload."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from urllib.parse import unquote

from share_lister.files.models import (
    TAG_CHANGE_TIME,
    TAG_CONTENT_LENGTH,
    TAG_CREATION_TIME,
    TAG_DIRECTORY,
    TAG_DIRECTORY_ID,
    TAG_ENTRIES,
    TAG_ETAG,
    TAG_FILE,
    TAG_FILE_ID,
    TAG_LAST_ACCESS_TIME,
    TAG_LAST_MODIFIED,
    TAG_LAST_WRITE_TIME,
    TAG_MARKER,
    TAG_MAX_RESULTS,
    TAG_NAME,
    TAG_NEXT_MARKER,
    TAG_PREFIX,
    TAG_PROPERTIES,
    TAG_ROOT,
    DirectoryRecord,
    EnumerationResult,
    FileRecord,
    Properties,
)

UTF8_BOM = "\ufeff"


class ListingDecodeError(Exception):
    """Raised when a listing response body cannot be decoded."""


def decode_enumeration(body: bytes | str) -> EnumerationResult:
    """Decode one page of an ``EnumerationResults`` document.

    Args:
        body: Raw response body (UTF-8 bytes) or already decoded text.

    Returns:
        EnumerationResult with file and directory records in document order.

    Raises:
        ListingDecodeError: If the body is not UTF-8, not well-formed XML,
            or is missing a required element.
    """
    if isinstance(body, bytes):
        try:
            text = body.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ListingDecodeError("Listing response is not valid UTF-8") from exc
    else:
        text = body

    try:
        root = ET.fromstring(text.lstrip(UTF8_BOM).strip())
    except ET.ParseError as exc:
        raise ListingDecodeError("Failed to deserialize listing XML") from exc

    if root.tag != TAG_ROOT:
        raise ListingDecodeError(f"Unexpected root element: {root.tag}")

    entries = _required(root, TAG_ENTRIES)
    max_results = _optional_text(root, TAG_MAX_RESULTS)

    return EnumerationResult(
        files=[FileRecord(*_item_fields(node)) for node in entries.findall(TAG_FILE)],
        directories=[
            DirectoryRecord(*_item_fields(node)) for node in entries.findall(TAG_DIRECTORY)
        ],
        next_marker=_optional_text(root, TAG_NEXT_MARKER) or "",
        marker=_optional_text(root, TAG_MARKER),
        prefix=_optional_text(root, TAG_PREFIX),
        max_results=_to_int(max_results, TAG_MAX_RESULTS) if max_results else None,
        directory_id=_optional_text(root, TAG_DIRECTORY_ID),
    )


# ------------------------------------------------------------------
# Private helpers
# ------------------------------------------------------------------


def _item_fields(node: ET.Element) -> tuple[str, str, Properties]:
    """Extract ``(file_id, name, properties)`` shared by ``File`` and ``Directory`` nodes."""
    name_node = _required(node, TAG_NAME)
    # Leaf text is trimmed elsewhere; names are kept verbatim.
    name = name_node.text or ""
    # Names with characters that are invalid in XML come back percent-encoded.
    if name_node.get("Encoded", "").lower() == "true":
        name = unquote(name)
    return (
        _required_text(node, TAG_FILE_ID),
        name,
        _properties(_required(node, TAG_PROPERTIES)),
    )


def _properties(node: ET.Element) -> Properties:
    content_length = _optional_text(node, TAG_CONTENT_LENGTH)
    return Properties(
        etag=_required_text(node, TAG_ETAG),
        last_modified=_required_text(node, TAG_LAST_MODIFIED),
        content_length=_to_int(content_length, TAG_CONTENT_LENGTH) if content_length else None,
        creation_time=_optional_text(node, TAG_CREATION_TIME),
        last_access_time=_optional_text(node, TAG_LAST_ACCESS_TIME),
        last_write_time=_optional_text(node, TAG_LAST_WRITE_TIME),
        change_time=_optional_text(node, TAG_CHANGE_TIME),
    )


def _required(node: ET.Element, tag: str) -> ET.Element:
    child = node.find(tag)
    if child is None:
        raise ListingDecodeError(f"Missing required element <{tag}> in <{node.tag}>")
    return child


def _required_text(node: ET.Element, tag: str) -> str:
    return (_required(node, tag).text or "").strip()


def _optional_text(node: ET.Element, tag: str) -> str | None:
    child = node.find(tag)
    if child is None:
        return None
    return (child.text or "").strip()


def _to_int(value: str, tag: str) -> int:
    try:
        return int(value.strip())
    except ValueError as exc:
        raise ListingDecodeError(f"Invalid integer in <{tag}>: {value!r}") from exc
