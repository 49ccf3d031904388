"""Derived views over a parsed HAR document.

Everything here is a pure function of its input so the web page, the CSV
export and the CLI all agree on the same numbers.
"""

from __future__ import annotations

from urllib.parse import urlsplit

from harview.har.models import HARDocument, MethodCounts
from harview.logging import get_logger

LOG = get_logger(__name__)

KB = 1 << 10
MB = 1 << 20
GB = 1 << 30

# Leading status digit -> severity bucket used for styling
STATUS_CLASSES = {
    1: "info",
    2: "success",
    3: "redirect",
    4: "client-error",
    5: "server-error",
}
UNKNOWN_STATUS_CLASS = "unknown"


def count_by_method(document: HARDocument) -> MethodCounts:
    """Count entries per request-method bucket.

    Matching is exact and case-sensitive: "get" lands in OTHER.

    Args:
        document: Parsed HAR document.

    Returns:
        MethodCounts whose total equals the number of entries.
    """
    get = post = other = 0
    for entry in document.entries:
        method = entry.request.method
        if method == "GET":
            get += 1
        elif method == "POST":
            post += 1
        else:
            other += 1
    return MethodCounts(get=get, post=post, other=other)


def extract_host(url: str) -> str:
    """Extract the host (authority without userinfo) from a URL.

    Args:
        url: Request URL as captured.

    Returns:
        Host, including the port when one is given, or empty string when the
        URL cannot be parsed or has no authority.
    """
    try:
        parts = urlsplit(url)
    except ValueError:
        return ""
    host = parts.netloc.rpartition("@")[2]
    # Port must be digits when present; its range is not checked
    _, sep, port = host.rpartition(":")
    if sep and port and "]" not in port and not (port.isascii() and port.isdigit()):
        return ""
    return host


def extract_domains(document: HARDocument) -> list[str]:
    """Collect the unique hosts referenced by a document.

    Args:
        document: Parsed HAR document.

    Returns:
        Hosts in the order they first appear in the entries. URLs without
        a usable host are skipped.
    """
    domains: list[str] = []
    seen: set[str] = set()
    skipped = 0
    for entry in document.entries:
        host = extract_host(entry.request.url)
        if not host:
            skipped += 1
            continue
        if host not in seen:
            seen.add(host)
            domains.append(host)

    if skipped:
        LOG.debug("domain_extraction_skipped_urls", skipped=skipped)
    return domains


def format_size(byte_count: int) -> str:
    """Render a byte count with 1024-based units.

    Examples:
        >>> format_size(512)
        '512 byte'
        >>> format_size(1536)
        '1.50 KB'
        >>> format_size(1073741824)
        '1.00 GB'
    """
    if byte_count >= GB:
        return f"{byte_count / GB:.2f} GB"
    if byte_count >= MB:
        return f"{byte_count / MB:.2f} MB"
    if byte_count >= KB:
        return f"{byte_count / KB:.2f} KB"
    return f"{byte_count} byte"


def status_class(status: int) -> str:
    """Map a response status code to its severity bucket.

    Codes outside 100-599 (including the 0 browsers record for aborted
    requests) map to "unknown".
    """
    if not 100 <= status <= 599:
        return UNKNOWN_STATUS_CLASS
    return STATUS_CLASSES[status // 100]
