"""Domain list to CSV export.

Spreadsheet tools in Chinese locales open CSV files as GBK by default, so
the export is transcoded to GBK unless configured otherwise. Characters the
target encoding cannot represent are replaced (``ENCODING_ERRORS``) instead
of failing the whole export.
"""

from __future__ import annotations

import csv
import io
from collections.abc import Iterable
from pathlib import Path

from harview.logging import get_logger

LOG = get_logger(__name__)

DEFAULT_HEADER = "域名"
DEFAULT_ENCODING = "gbk"
DEFAULT_FILENAME = "domains.csv"

# Lossy transcoding policy: unencodable characters become "?"
ENCODING_ERRORS = "replace"


def export_domains_csv(
    domains: Iterable[str],
    *,
    header: str = DEFAULT_HEADER,
    encoding: str = DEFAULT_ENCODING,
) -> bytes:
    """Render domains as a single-column CSV document.

    Args:
        domains: Domains in the order they should appear.
        header: Header cell of the only column.
        encoding: Target text encoding of the returned bytes.

    Returns:
        Encoded CSV content: the header row followed by one row per domain.

    Raises:
        LookupError: If ``encoding`` is not a known codec.
    """
    buf = io.StringIO()
    writer = csv.writer(buf)
    writer.writerow([header])
    rows = 0
    for domain in domains:
        writer.writerow([domain])
        rows += 1

    text = buf.getvalue()
    content = text.encode(encoding, errors=ENCODING_ERRORS)
    if content.decode(encoding, errors=ENCODING_ERRORS) != text:
        LOG.warning("csv_export_lossy_encoding", encoding=encoding, rows=rows)

    LOG.debug("csv_exported", rows=rows, encoding=encoding, size=len(content))
    return content


def write_domains_csv(
    domains: list[str],
    output_path: str | Path,
    *,
    header: str = DEFAULT_HEADER,
    encoding: str = DEFAULT_ENCODING,
) -> tuple[str, int]:
    """Write domains as a CSV file.

    Args:
        domains: Domains in the order they should appear.
        output_path: Destination file path (string or Path).
        header: Header cell of the only column.
        encoding: Target text encoding of the file.

    Returns:
        Tuple of (absolute path string, row count).
    """
    output = Path(output_path).resolve()
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(export_domains_csv(domains, header=header, encoding=encoding))
    return str(output), len(domains)
