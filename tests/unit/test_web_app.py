"""Tests for the viewer's HTTP routes."""

from __future__ import annotations

import csv
import io
import re

import pytest
from fastapi.testclient import TestClient
from har_builders import har_bytes, har_entry

from harview.config import HarViewSettings
from harview.session import SessionStore
from harview.web.app import create_app, csv_charset


@pytest.fixture
def store() -> SessionStore:
    return SessionStore()


@pytest.fixture
def client(store: SessionStore) -> TestClient:
    app = create_app(HarViewSettings(), store)
    return TestClient(app, follow_redirects=False)


def _upload(client: TestClient, content: bytes, name: str = "sample.har"):
    return client.post("/upload", files={"harfile": (name, content, "application/json")})


def _row_urls(page: str) -> list[str]:
    return re.findall(r'<tr class="entry-item"[^>]*data-url="([^"]*)"', page)


class TestIndex:
    """Tests for GET /."""

    def test_empty_session(self, client: TestClient) -> None:
        response = client.get("/")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert 'name="harfile"' in response.text
        assert _row_urls(response.text) == []

    def test_error_query_shows_banner(self, client: TestClient) -> None:
        response = client.get("/", params={"error": "malformed"})
        assert 'id="error-banner"' in response.text

    def test_shows_current_capture(self, client: TestClient, sample_har_bytes: bytes) -> None:
        """After an upload the index keeps showing the loaded capture."""
        _upload(client, sample_har_bytes)

        response = client.get("/")

        assert len(_row_urls(response.text)) == 3
        assert "文件名: sample.har" in response.text


class TestUpload:
    """Tests for POST /upload."""

    def test_end_to_end(
        self, client: TestClient, store: SessionStore, sample_har_bytes: bytes
    ) -> None:
        response = _upload(client, sample_har_bytes)

        assert response.status_code == 200
        assert _row_urls(response.text) == [
            "http://x.test/a",
            "http://x.test/b",
            "http://y.test/c",
        ]
        assert "GET 2个" in response.text
        assert "POST 1个" in response.text

        capture = store.current()
        assert capture is not None
        assert capture.file_name == "sample.har"
        assert capture.file_size == len(sample_har_bytes)

    def test_malformed_redirects_and_keeps_session(
        self, client: TestClient, store: SessionStore, sample_har_bytes: bytes
    ) -> None:
        _upload(client, sample_har_bytes)
        before = store.current()

        response = _upload(client, b"this is not json", name="bad.har")

        assert response.status_code == 302
        assert response.headers["location"] == "/?error=malformed"
        assert store.current() is before

    def test_malformed_on_empty_session(self, client: TestClient, store: SessionStore) -> None:
        response = _upload(client, b'{"log": {"entries": [')

        assert response.headers["location"] == "/?error=malformed"
        assert store.is_empty

    @pytest.mark.parametrize(
        "content",
        [
            b'{"log": {"entries": ' + b"[" * 200000,
            b'{"log": {"entries": [{"response": {"status": ' + b"9" * 5000 + b"}}]}}",
        ],
        ids=["deep-nesting", "huge-integer"],
    )
    def test_hostile_json_redirects(
        self, client: TestClient, store: SessionStore, content: bytes
    ) -> None:
        """Decoder limits surface as a malformed upload, not a server error."""
        response = _upload(client, content, name="hostile.har")

        assert response.status_code == 302
        assert response.headers["location"] == "/?error=malformed"
        assert store.is_empty

    def test_missing_file_redirects(self, client: TestClient, store: SessionStore) -> None:
        response = client.post("/upload")

        assert response.status_code == 302
        assert response.headers["location"] == "/"
        assert store.is_empty

    def test_too_large_rejected(self, store: SessionStore) -> None:
        client = TestClient(
            create_app(HarViewSettings(max_upload_bytes=64), store), follow_redirects=False
        )
        content = har_bytes(*(har_entry() for _ in range(5)))

        response = _upload(client, content)

        assert response.status_code == 302
        assert response.headers["location"] == "/?error=too-large"
        assert store.is_empty

    def test_second_upload_replaces(self, client: TestClient, sample_har_bytes: bytes) -> None:
        _upload(client, sample_har_bytes)

        response = _upload(client, har_bytes(har_entry(url="https://z.test/")), name="z.har")

        assert _row_urls(response.text) == ["https://z.test/"]
        assert "文件名: z.har" in client.get("/").text

    def test_get_redirects_home(self, client: TestClient) -> None:
        response = client.get("/upload")

        assert response.status_code == 302
        assert response.headers["location"] == "/"


class TestDownloadCsv:
    """Tests for GET /download-csv."""

    def test_empty_session_redirects(self, client: TestClient) -> None:
        response = client.get("/download-csv")

        assert response.status_code == 302
        assert response.headers["location"] == "/"

    def test_download(self, client: TestClient, sample_har_bytes: bytes) -> None:
        _upload(client, sample_har_bytes)

        response = client.get("/download-csv")

        assert response.status_code == 200
        assert response.headers["content-type"] == "text/csv; charset=GBK"
        assert response.headers["content-disposition"] == "attachment; filename=domains.csv"
        rows = list(csv.reader(io.StringIO(response.content.decode("gbk"), newline="")))
        assert rows == [["域名"], ["x.test"], ["y.test"]]

    def test_configured_encoding(self, store: SessionStore, sample_har_bytes: bytes) -> None:
        settings = HarViewSettings(csv_encoding="utf-8-sig", csv_header="Domain")
        client = TestClient(create_app(settings, store), follow_redirects=False)
        _upload(client, sample_har_bytes)

        response = client.get("/download-csv")

        assert response.headers["content-type"] == "text/csv; charset=UTF-8"
        assert response.content.startswith(b"\xef\xbb\xbfDomain")


class TestReload:
    """Tests for GET /reload."""

    def test_clears_session(
        self, client: TestClient, store: SessionStore, sample_har_bytes: bytes
    ) -> None:
        _upload(client, sample_har_bytes)

        response = client.get("/reload")

        assert response.status_code == 302
        assert response.headers["location"] == "/"
        assert store.is_empty
        assert client.get("/download-csv").status_code == 302

    def test_twice_is_harmless(self, client: TestClient, store: SessionStore) -> None:
        assert client.get("/reload").status_code == 302
        assert client.get("/reload").status_code == 302
        assert store.is_empty


class TestCsvCharset:
    """Tests for csv_charset."""

    @pytest.mark.parametrize(
        ("encoding", "expected"),
        [("gbk", "GBK"), ("GBK", "GBK"), ("utf-8-sig", "UTF-8"), ("utf-8", "UTF-8")],
    )
    def test_labels(self, encoding: str, expected: str) -> None:
        assert csv_charset(encoding) == expected
