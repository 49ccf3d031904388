"""harview - inspect HAR captures in the browser.

Upload a HAR (HTTP Archive) file to a local web page, browse and sort its
requests, and export the unique domains it references as CSV.

This package provides:
- HAR parsing into immutable models
- Request statistics (per-method counts, unique domains, size formatting)
- Domain CSV export in GBK or another configured encoding
- A FastAPI web UI with a single-slot session store
- A typer CLI to run the UI and inspect files from the terminal

Example:
    >>> from harview import parse_har_file, count_by_method, extract_domains
    >>> document = parse_har_file("capture.har")
    >>> count_by_method(document)
    MethodCounts(get=2, post=1, other=0)
    >>> extract_domains(document)
    ['x.test', 'y.test']
"""

__version__ = "0.1.0"

from harview.config import HarViewSettings, get_settings  # noqa: E402
from harview.exceptions import (  # noqa: E402
    EmptySessionError,
    HarViewError,
    MalformedDocumentError,
    MissingUploadError,
    UploadTooLargeError,
)
from harview.export import export_domains_csv, write_domains_csv  # noqa: E402
from harview.har import (  # noqa: E402
    HARDocument,
    HAREntry,
    HARHeader,
    HARRequest,
    HARResponse,
    MethodCounts,
    count_by_method,
    extract_domains,
    format_size,
    parse_har_bytes,
    parse_har_file,
)
from harview.session import LoadedCapture, SessionStore  # noqa: E402

__all__ = [
    # Version
    "__version__",
    # Models
    "HARDocument",
    "HAREntry",
    "HARHeader",
    "HARRequest",
    "HARResponse",
    "MethodCounts",
    # Parsing and analysis
    "parse_har_bytes",
    "parse_har_file",
    "count_by_method",
    "extract_domains",
    "format_size",
    # Export
    "export_domains_csv",
    "write_domains_csv",
    # Session
    "LoadedCapture",
    "SessionStore",
    # Configuration
    "HarViewSettings",
    "get_settings",
    # Exceptions
    "HarViewError",
    "MalformedDocumentError",
    "MissingUploadError",
    "EmptySessionError",
    "UploadTooLargeError",
]
