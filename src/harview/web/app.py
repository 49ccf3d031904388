"""FastAPI request surface of the viewer.

Routes:
    GET  /              current capture (or the upload-only page)
    POST /upload        parse an uploaded HAR file and show it
    GET  /download-csv  unique domains of the current capture as CSV
    GET  /reload        forget the current capture

Failures are raised as :mod:`harview.exceptions` errors and turned into
redirects by the exception handlers registered in :func:`create_app`, so the
session is only ever touched after a successful parse.
"""

from __future__ import annotations

import codecs
from typing import Annotated

from fastapi import APIRouter, Depends, FastAPI, File, Request, UploadFile, status
from fastapi.responses import HTMLResponse, RedirectResponse, Response
from starlette.concurrency import run_in_threadpool

import harview
from harview.config import HarViewSettings, get_settings
from harview.exceptions import (
    EmptySessionError,
    MalformedDocumentError,
    MissingUploadError,
    UploadTooLargeError,
)
from harview.export import DEFAULT_FILENAME, export_domains_csv
from harview.har.analyzer import extract_domains
from harview.har.parser import parse_har_bytes
from harview.logging import get_logger
from harview.session import LoadedCapture, SessionStore
from harview.web.render import ERROR_MALFORMED, ERROR_TOO_LARGE, render_page

LOG = get_logger(__name__)

router = APIRouter()


def get_store(request: Request) -> SessionStore:
    """Session store of the running application."""
    return request.app.state.store


def get_app_settings(request: Request) -> HarViewSettings:
    """Settings the application was created with."""
    return request.app.state.settings


StoreDep = Annotated[SessionStore, Depends(get_store)]
SettingsDep = Annotated[HarViewSettings, Depends(get_app_settings)]


def csv_charset(encoding: str) -> str:
    """Charset label advertised for a CSV encoding.

    Examples:
        >>> csv_charset("gbk")
        'GBK'
        >>> csv_charset("utf-8-sig")
        'UTF-8'
    """
    name = codecs.lookup(encoding).name
    if name == "utf-8-sig":
        return "UTF-8"
    return name.upper()


def _redirect(url: str = "/") -> RedirectResponse:
    return RedirectResponse(url, status_code=status.HTTP_302_FOUND)


@router.get("/", response_class=HTMLResponse)
def index(store: StoreDep, error: str | None = None) -> HTMLResponse:
    """Show the current capture."""
    return HTMLResponse(render_page(store.current(), error=error))


@router.post("/upload", response_class=HTMLResponse)
async def upload(
    store: StoreDep,
    settings: SettingsDep,
    harfile: Annotated[UploadFile | None, File()] = None,
) -> HTMLResponse:
    """Parse an uploaded HAR file, make it the current capture and show it."""
    if harfile is None or not harfile.filename:
        raise MissingUploadError("No HAR file in upload")

    limit = settings.max_upload_bytes
    content = await harfile.read(limit + 1)
    if len(content) > limit:
        raise UploadTooLargeError(limit=limit, size=len(content))

    document = await run_in_threadpool(parse_har_bytes, content)
    capture = LoadedCapture.from_document(
        document, file_name=harfile.filename, file_size=len(content)
    )
    store.set(capture)

    LOG.info(
        "har_uploaded",
        file_name=capture.file_name,
        size=capture.file_size,
        entries=len(document.entries),
        get=capture.counts.get,
        post=capture.counts.post,
        other=capture.counts.other,
    )
    return HTMLResponse(render_page(capture))


@router.get("/upload")
def upload_redirect() -> RedirectResponse:
    """Uploads are POST-only; send stray GETs home."""
    return _redirect()


@router.get("/download-csv")
def download_csv(store: StoreDep, settings: SettingsDep) -> Response:
    """Download the unique domains of the current capture as CSV."""
    document = store.get()
    if document is None:
        raise EmptySessionError("No HAR document loaded")

    domains = extract_domains(document)
    content = export_domains_csv(
        domains, header=settings.csv_header, encoding=settings.csv_encoding
    )
    LOG.info("domains_exported", domains=len(domains), encoding=settings.csv_encoding)
    return Response(
        content=content,
        media_type=f"text/csv; charset={csv_charset(settings.csv_encoding)}",
        headers={"Content-Disposition": f"attachment; filename={DEFAULT_FILENAME}"},
    )


@router.get("/reload")
def reload(store: StoreDep) -> RedirectResponse:
    """Forget the current capture and start over."""
    store.clear()
    return _redirect()


async def _on_malformed(request: Request, exc: Exception) -> RedirectResponse:
    LOG.warning("har_upload_rejected", reason="malformed", error=str(exc))
    return _redirect(f"/?error={ERROR_MALFORMED}")


async def _on_too_large(request: Request, exc: UploadTooLargeError) -> RedirectResponse:
    LOG.warning("har_upload_rejected", reason="too_large", limit=exc.limit, size=exc.size)
    return _redirect(f"/?error={ERROR_TOO_LARGE}")


async def _on_missing_upload(request: Request, exc: Exception) -> RedirectResponse:
    LOG.info("har_upload_missing")
    return _redirect()


async def _on_empty_session(request: Request, exc: Exception) -> RedirectResponse:
    LOG.debug("empty_session_redirect", path=request.url.path)
    return _redirect()


def create_app(
    settings: HarViewSettings | None = None,
    store: SessionStore | None = None,
) -> FastAPI:
    """Create the viewer application.

    Args:
        settings: Settings to use. Defaults to :func:`get_settings`.
        store: Session store to inject. Defaults to a fresh, empty store.

    Returns:
        Configured FastAPI application.
    """
    app = FastAPI(
        title="harview",
        version=harview.__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.settings = settings or get_settings()
    app.state.store = store if store is not None else SessionStore()

    app.include_router(router)
    app.add_exception_handler(MalformedDocumentError, _on_malformed)
    app.add_exception_handler(UploadTooLargeError, _on_too_large)
    app.add_exception_handler(MissingUploadError, _on_missing_upload)
    app.add_exception_handler(EmptySessionError, _on_empty_session)
    return app
