"""HAR (HTTP Archive) parsing and analysis.

Example usage:
    from harview.har import parse_har_file, count_by_method, extract_domains

    document = parse_har_file("capture.har")
    counts = count_by_method(document)
    print(counts.get, counts.post, counts.other)
    print(extract_domains(document))
"""

from harview.har.analyzer import (
    count_by_method,
    extract_domains,
    extract_host,
    format_size,
    status_class,
)
from harview.har.models import (
    HARCreator,
    HARDocument,
    HAREntry,
    HARHeader,
    HARPage,
    HARRequest,
    HARResponse,
    MethodCounts,
)
from harview.har.parser import build_document, parse_har_bytes, parse_har_file

__all__ = [
    # Models
    "HARCreator",
    "HARDocument",
    "HAREntry",
    "HARHeader",
    "HARPage",
    "HARRequest",
    "HARResponse",
    "MethodCounts",
    # Parser
    "build_document",
    "parse_har_bytes",
    "parse_har_file",
    # Analyzer
    "count_by_method",
    "extract_domains",
    "extract_host",
    "format_size",
    "status_class",
]
