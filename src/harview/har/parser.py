"""HAR file parser.

Parses HAR (HTTP Archive) content into the immutable models of
:mod:`harview.har.models`.

Parsing is all-or-nothing: either a complete :class:`HARDocument` is
returned or :class:`MalformedDocumentError` is raised. Unknown fields are
ignored and missing or null fields fall back to empty values, so captures
from any browser or proxy load as long as the fields that are present carry
the expected JSON types.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from harview.exceptions import MalformedDocumentError
from harview.har.models import (
    HARCreator,
    HARDocument,
    HAREntry,
    HARHeader,
    HARPage,
    HARRequest,
    HARResponse,
)
from harview.logging import get_logger

LOG = get_logger(__name__)


def _type_error(where: str, expected: str, value: Any) -> MalformedDocumentError:
    return MalformedDocumentError(f"'{where}' must be {expected}, got {type(value).__name__}")


def _reject_constant(name: str) -> Any:
    # NaN and Infinity are not JSON
    raise MalformedDocumentError(f"Invalid JSON in HAR content: unexpected constant {name}")


def _as_object(value: Any, where: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise _type_error(where, "an object", value)
    return value


def _as_array(value: Any, where: str) -> list[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise _type_error(where, "an array", value)
    return value


def _as_str(value: Any, where: str) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise _type_error(where, "a string", value)
    return value


def _as_int(value: Any, where: str) -> int:
    if value is None:
        return 0
    # bool is an int subclass but never a valid JSON number here
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise _type_error(where, "an integer", value)
    if isinstance(value, float):
        if not value.is_integer():
            raise MalformedDocumentError(f"'{where}' must be an integer, got {value}")
        return int(value)
    return value


def _as_float(value: Any, where: str) -> float:
    if value is None:
        return 0.0
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise _type_error(where, "a number", value)
    return float(value)


def _parse_headers(headers_list: Any, where: str) -> tuple[HARHeader, ...]:
    """Convert a HAR headers array to header pairs.

    Order and duplicates are preserved and names are not case-normalized.
    """
    headers: list[HARHeader] = []
    for idx, item in enumerate(_as_array(headers_list, where)):
        header = _as_object(item, f"{where}[{idx}]")
        headers.append(
            HARHeader(
                name=_as_str(header.get("name"), f"{where}[{idx}].name"),
                value=_as_str(header.get("value"), f"{where}[{idx}].value"),
            )
        )
    return tuple(headers)


def _parse_request(request_data: Any, where: str) -> HARRequest:
    """Parse request section of a HAR entry."""
    request = _as_object(request_data, where)
    return HARRequest(
        method=_as_str(request.get("method"), f"{where}.method"),
        url=_as_str(request.get("url"), f"{where}.url"),
        headers=_parse_headers(request.get("headers"), f"{where}.headers"),
    )


def _parse_response(response_data: Any, where: str) -> HARResponse:
    """Parse response section of a HAR entry."""
    response = _as_object(response_data, where)
    return HARResponse(
        status=_as_int(response.get("status"), f"{where}.status"),
        status_text=_as_str(response.get("statusText"), f"{where}.statusText"),
        headers=_parse_headers(response.get("headers"), f"{where}.headers"),
    )


def _parse_entry(entry_data: Any, idx: int) -> HAREntry:
    where = f"entries[{idx}]"
    entry = _as_object(entry_data, where)
    return HAREntry(
        request=_parse_request(entry.get("request"), f"{where}.request"),
        response=_parse_response(entry.get("response"), f"{where}.response"),
        time_ms=_as_float(entry.get("time"), f"{where}.time"),
        started_date_time=_as_str(entry.get("startedDateTime"), f"{where}.startedDateTime"),
    )


def _parse_pages(pages_data: Any) -> tuple[HARPage, ...]:
    pages: list[HARPage] = []
    for idx, item in enumerate(_as_array(pages_data, "pages")):
        page = _as_object(item, f"pages[{idx}]")
        pages.append(
            HARPage(
                id=_as_str(page.get("id"), f"pages[{idx}].id"),
                title=_as_str(page.get("title"), f"pages[{idx}].title"),
                started_date_time=_as_str(
                    page.get("startedDateTime"), f"pages[{idx}].startedDateTime"
                ),
            )
        )
    return tuple(pages)


def validate_har_schema(data: Any) -> dict[str, Any]:
    """Validate HAR data has the required root structure.

    Args:
        data: Parsed JSON data from HAR content.

    Returns:
        The ``log`` object.

    Raises:
        MalformedDocumentError: If the root is not an object or has no
            ``log`` object.
    """
    if not isinstance(data, dict):
        raise MalformedDocumentError("HAR content must contain a JSON object")

    if "log" not in data:
        raise MalformedDocumentError("HAR content must contain 'log' object")

    log = data["log"]
    if not isinstance(log, dict):
        raise MalformedDocumentError("'log' must be an object")

    return log


def build_document(data: Any) -> HARDocument:
    """Build a HARDocument from already-decoded JSON data.

    Args:
        data: Decoded JSON value.

    Returns:
        Fully populated HARDocument.

    Raises:
        MalformedDocumentError: If the root shape or any field type is wrong.
    """
    log = validate_har_schema(data)
    creator = _as_object(log.get("creator"), "creator")

    return HARDocument(
        version=_as_str(log.get("version"), "version"),
        creator=HARCreator(
            name=_as_str(creator.get("name"), "creator.name"),
            version=_as_str(creator.get("version"), "creator.version"),
        ),
        pages=_parse_pages(log.get("pages")),
        entries=tuple(
            _parse_entry(entry_data, idx)
            for idx, entry_data in enumerate(_as_array(log.get("entries"), "entries"))
        ),
    )


def parse_har_bytes(content: bytes) -> HARDocument:
    """Parse raw HAR bytes into a document.

    Args:
        content: UTF-8 encoded HAR content, e.g. an uploaded file.

    Returns:
        Fully populated HARDocument.

    Raises:
        MalformedDocumentError: If the bytes are not UTF-8, not valid JSON,
            or not shaped like a HAR document.
    """
    try:
        text = content.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise MalformedDocumentError(f"HAR content is not valid UTF-8: {exc}") from exc

    try:
        data = json.loads(text, parse_constant=_reject_constant)
    except RecursionError as exc:
        raise MalformedDocumentError("Invalid JSON in HAR content: nested too deeply") from exc
    except ValueError as exc:
        # JSONDecodeError, or an integer literal over the int digit limit
        raise MalformedDocumentError(f"Invalid JSON in HAR content: {exc}") from exc

    document = build_document(data)
    LOG.debug("har_parsed", size=len(content), entries=len(document.entries))
    return document


def parse_har_file(filepath: Path | str) -> HARDocument:
    """Parse a HAR file from disk.

    Args:
        filepath: Path to HAR file.

    Returns:
        Fully populated HARDocument.

    Raises:
        MalformedDocumentError: If the file content is not a HAR document.
        FileNotFoundError: If file does not exist.
    """
    filepath = Path(filepath)

    if not filepath.exists():
        raise FileNotFoundError(f"HAR file not found: {filepath}")

    document = parse_har_bytes(filepath.read_bytes())
    LOG.info("har_file_parsed", filepath=str(filepath), entries=len(document.entries))
    return document
