"""Single-slot store for the currently loaded HAR capture.

The viewer shows one capture at a time. A :class:`SessionStore` holds it as
an immutable :class:`LoadedCapture` snapshot behind a lock, so a reader
always sees either the previous capture or the new one, never a mix.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field

from harview.har.analyzer import count_by_method
from harview.har.models import HARDocument, MethodCounts
from harview.logging import get_logger

LOG = get_logger(__name__)


@dataclass(frozen=True)
class LoadedCapture:
    """A parsed HAR document together with what the page shows about it.

    Attributes:
        document: The parsed document.
        file_name: Name of the uploaded file as sent by the client.
        file_size: Size of the uploaded file in bytes.
        counts: Per-method entry counts of ``document``.
    """

    document: HARDocument
    file_name: str = ""
    file_size: int = 0
    counts: MethodCounts = field(default_factory=MethodCounts)

    @classmethod
    def from_document(
        cls, document: HARDocument, file_name: str = "", file_size: int = 0
    ) -> LoadedCapture:
        """Build a capture, computing method counts from the document."""
        return cls(
            document=document,
            file_name=file_name,
            file_size=file_size,
            counts=count_by_method(document),
        )


class SessionStore:
    """Holds at most one loaded capture for the lifetime of the process.

    Only fully parsed documents are ever stored; a failed parse never
    reaches :meth:`set`.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._capture: LoadedCapture | None = None

    def set(self, capture: LoadedCapture) -> None:
        """Replace whatever is loaded with ``capture``."""
        with self._lock:
            replaced = self._capture is not None
            self._capture = capture
        LOG.info(
            "session_set",
            file_name=capture.file_name,
            entries=len(capture.document.entries),
            replaced=replaced,
        )

    def clear(self) -> None:
        """Drop the loaded capture. Clearing an empty store is a no-op."""
        with self._lock:
            self._capture = None
        LOG.info("session_cleared")

    def current(self) -> LoadedCapture | None:
        """Return the loaded capture, or None."""
        with self._lock:
            return self._capture

    def get(self) -> HARDocument | None:
        """Return the loaded document, or None."""
        capture = self.current()
        return capture.document if capture is not None else None

    @property
    def is_empty(self) -> bool:
        """True when no capture is loaded."""
        return self.current() is None
