"""Tests for domain CSV export."""

from __future__ import annotations

import csv
import io
from pathlib import Path

import pytest

from harview.export import (
    DEFAULT_HEADER,
    ENCODING_ERRORS,
    export_domains_csv,
    write_domains_csv,
)


def _read_rows(content: bytes, encoding: str = "gbk") -> list[list[str]]:
    return list(csv.reader(io.StringIO(content.decode(encoding), newline="")))


class TestExportDomainsCsv:
    """Tests for export_domains_csv."""

    def test_round_trip(self) -> None:
        """Decoding through GBK yields the header plus one row per domain."""
        content = export_domains_csv(["x.com", "y.org"])

        rows = _read_rows(content)
        assert rows == [["域名"], ["x.com"], ["y.org"]]

    def test_header_is_gbk(self) -> None:
        """The default header is written as GBK bytes."""
        content = export_domains_csv([])
        assert content.startswith("域名".encode("gbk"))
        assert _read_rows(content) == [[DEFAULT_HEADER]]

    def test_order_preserved(self) -> None:
        """Rows follow input order."""
        domains = ["c.com", "a.com", "b.com"]
        rows = _read_rows(export_domains_csv(domains))
        assert [r[0] for r in rows[1:]] == domains

    def test_quoting(self) -> None:
        """Fields with delimiters, quotes or line breaks are quoted."""
        domains = ["a,b.com", 'say "hi"', "line\nbreak", "plain.com"]
        content = export_domains_csv(domains)

        text = content.decode("gbk")
        assert '"a,b.com"' in text
        assert '"say ""hi"""' in text
        assert [r[0] for r in _read_rows(content)[1:]] == domains

    def test_unencodable_characters_replaced(self) -> None:
        """Characters outside GBK are substituted instead of failing."""
        content = export_domains_csv(["emoji-😀.com", "ok.com"])

        rows = _read_rows(content)
        assert rows[1] == ["emoji-?.com"]
        assert rows[2] == ["ok.com"]
        assert ENCODING_ERRORS == "replace"

    def test_custom_header(self) -> None:
        """Header cell can be replaced."""
        rows = _read_rows(export_domains_csv(["a.com"], header="Domain"))
        assert rows[0] == ["Domain"]

    def test_utf8_bom_alternative(self) -> None:
        """utf-8-sig output starts with a BOM and round-trips."""
        content = export_domains_csv(["例子.测试"], encoding="utf-8-sig")

        assert content.startswith(b"\xef\xbb\xbf")
        assert _read_rows(content, "utf-8-sig") == [["域名"], ["例子.测试"]]

    def test_unknown_encoding(self) -> None:
        """Unknown codecs raise LookupError."""
        with pytest.raises(LookupError):
            export_domains_csv(["a.com"], encoding="no-such-codec")


class TestWriteDomainsCsv:
    """Tests for write_domains_csv."""

    def test_writes_file(self, tmp_path: Path) -> None:
        """File content matches export_domains_csv."""
        output = tmp_path / "out" / "domains.csv"

        path, rows = write_domains_csv(["a.com", "b.com"], output)

        assert path == str(output.resolve())
        assert rows == 2
        assert output.read_bytes() == export_domains_csv(["a.com", "b.com"])
