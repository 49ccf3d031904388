"""Typed representation of a HAR document.

Only the parts of the HAR 1.2 format the viewer displays are modelled.
Everything else in the source JSON is dropped during parsing.

HAR format specification: http://www.softwareishard.com/blog/har-12-spec/
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class HARHeader:
    """Single name/value header pair, kept exactly as captured."""

    name: str
    value: str


@dataclass(frozen=True)
class HARRequest:
    """Request half of a captured exchange."""

    method: str
    url: str
    headers: tuple[HARHeader, ...] = ()


@dataclass(frozen=True)
class HARResponse:
    """Response half of a captured exchange."""

    status: int
    status_text: str = ""
    headers: tuple[HARHeader, ...] = ()


@dataclass(frozen=True)
class HAREntry:
    """Single request/response pair from a HAR file."""

    request: HARRequest
    response: HARResponse
    time_ms: float = 0.0  # Total elapsed time in milliseconds
    started_date_time: str = ""


@dataclass(frozen=True)
class HARCreator:
    """Application that produced the capture. Informational only."""

    name: str = ""
    version: str = ""


@dataclass(frozen=True)
class HARPage:
    """Page grouping exported by browsers. Informational only."""

    id: str = ""
    title: str = ""
    started_date_time: str = ""


@dataclass(frozen=True)
class HARDocument:
    """Root of a parsed HAR file.

    Attributes:
        version: HAR format version string, e.g. "1.2".
        creator: Tool that wrote the file.
        pages: Page records, empty when the capture has none.
        entries: Captured exchanges in capture order.
    """

    version: str = ""
    creator: HARCreator = field(default_factory=HARCreator)
    pages: tuple[HARPage, ...] = ()
    entries: tuple[HAREntry, ...] = ()


@dataclass(frozen=True)
class MethodCounts:
    """Number of entries per request-method bucket.

    OTHER holds every method that is not exactly "GET" or "POST".
    """

    get: int = 0
    post: int = 0
    other: int = 0

    @property
    def total(self) -> int:
        """Sum of all buckets, equal to the number of entries counted."""
        return self.get + self.post + self.other
