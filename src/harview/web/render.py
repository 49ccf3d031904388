"""HTML rendering of the viewer page.

:func:`render_page` is a pure function of a :class:`LoadedCapture`: counts
and sizes are computed before it is called, and the only formatting done
here is escaping and fixed-precision numbers.
"""

from __future__ import annotations

from html import escape

from harview.har.analyzer import format_size, status_class
from harview.har.models import HAREntry, HARHeader, MethodCounts
from harview.session import LoadedCapture
from harview.web.assets import SCRIPT, STYLESHEET

PAGE_TITLE = "HAR Viewer"

ERROR_MALFORMED = "malformed"
ERROR_TOO_LARGE = "too-large"

ERROR_MESSAGES = {
    ERROR_MALFORMED: "上传HAR文件失败，请检查文件格式是否正确！",
    ERROR_TOO_LARGE: "上传HAR文件失败，文件超过大小限制！",
}

# (MethodCounts attribute, sortByMethod key, label)
METHOD_BUCKETS = (
    ("get", "GET", "GET"),
    ("post", "POST", "POST"),
    ("other", "OTHER", "其他"),
)


def format_time(time_ms: float) -> str:
    """Elapsed time with two fractional digits, as used in ``data-time``."""
    return f"{time_ms:.2f}"


def _render_upload_form() -> str:
    return (
        '<div class="file-upload">\n'
        '  <form action="/upload" method="post" enctype="multipart/form-data" '
        'onsubmit="showLoadingMask()">\n'
        '    <input type="file" name="harfile" accept=".har" class="file-input">\n'
        '    <input type="submit" value="上传HAR文件" class="btn upload-btn">\n'
        "    <button type=\"button\" onclick=\"location.href='/reload'\" "
        'class="btn reload-btn">重新加载</button>\n'
        "  </form>\n"
        "</div>"
    )


def _render_loading_mask() -> str:
    return (
        '<div id="loading-mask" style="display: none;">\n'
        '  <div class="loading-content">\n'
        '    <div class="loading-spinner"></div>\n'
        "    <p>文件正在读取，请稍后...</p>\n"
        "  </div>\n"
        "</div>"
    )


def _render_error(error: str | None) -> str:
    message = ERROR_MESSAGES.get(error or "")
    if message is None:
        return ""
    return f'<div id="error-banner" class="error-banner">{escape(message)}</div>'


def render_method_counts(counts: MethodCounts) -> str:
    """Clickable count label per non-empty method bucket."""
    labels = []
    for attr, key, label in METHOD_BUCKETS:
        count = getattr(counts, attr)
        if count > 0:
            labels.append(
                f'<span class="method-count {attr}" data-bucket="{key}" '
                f"onclick=\"sortByMethod('{key}')\">{label} {count}个</span>"
            )
    return "    ".join(labels)


def _render_summary(capture: LoadedCapture) -> str:
    return (
        '<div class="har-info">\n'
        "  <h2>HAR文件信息</h2>\n"
        f"  <p>文件名: {escape(capture.file_name)}</p>\n"
        f"  <p>文件大小: {format_size(capture.file_size)}</p>\n"
        f"  <p>请求数量: {render_method_counts(capture.counts)}</p>\n"
        '  <a href="/download-csv" class="btn download-btn">下载域名CSV文件</a>\n'
        "</div>"
    )


def _render_headers(headers: tuple[HARHeader, ...]) -> str:
    items = "".join(f"<li>{escape(h.name)}: {escape(h.value)}</li>" for h in headers)
    return f"<ul>{items}</ul>"


def render_entry(entry: HAREntry) -> str:
    """Render one entry as a data row followed by its hidden detail row."""
    request = entry.request
    response = entry.response
    method = escape(request.method)
    url = escape(request.url)
    time_text = format_time(entry.time_ms)
    status = f"{response.status} {escape(response.status_text)}".rstrip()
    css = status_class(response.status)

    return (
        f'<tr class="entry-item" onclick="toggleDetail(this)" '
        f'data-method="{method}" data-url="{url}" data-time="{time_text}">\n'
        f'  <td class="method-col"><span class="request-method">{method}</span></td>\n'
        '  <td class="url-col">\n'
        f'    <div><span class="url-text">{url}</span>'
        f'<span class="status-code status-{css}">{status}</span></div>\n'
        '    <div class="progress-container"><div class="progress-bar"></div></div>\n'
        "  </td>\n"
        f'  <td class="time-col"><span class="time-text">{time_text} ms</span></td>\n'
        "</tr>\n"
        '<tr class="entry-detail" style="display: none;">\n'
        '  <td colspan="3">\n'
        "    <h3>请求详情</h3>\n"
        f"    <p><strong>URL:</strong> {url}</p>\n"
        f"    <p><strong>方法:</strong> {method}</p>\n"
        f"    <p><strong>状态:</strong> {status}</p>\n"
        f"    <p><strong>耗时:</strong> {time_text} ms</p>\n"
        f"    <h4>请求头</h4>{_render_headers(request.headers)}\n"
        f"    <h4>响应头</h4>{_render_headers(response.headers)}\n"
        "  </td>\n"
        "</tr>"
    )


def _render_entries(entries: tuple[HAREntry, ...]) -> str:
    rows = "\n".join(render_entry(entry) for entry in entries)
    return (
        "<h2>请求列表</h2>\n"
        '<table class="entries-table" id="entries-table">\n'
        "  <thead><tr>\n"
        '    <th class="method-col" onclick="sortEntries(\'method\')">'
        '方法 <span class="sort-indicator" id="sort-method">↕</span></th>\n'
        '    <th class="url-col" onclick="sortEntries(\'url\')">'
        'URL <span class="sort-indicator" id="sort-url">↕</span></th>\n'
        '    <th class="time-col" onclick="sortEntries(\'time\')">'
        '耗时 <span class="sort-indicator" id="sort-time">↕</span></th>\n'
        "  </tr></thead>\n"
        f'  <tbody id="entries-list">\n{rows}\n  </tbody>\n'
        "</table>"
    )


def render_page(capture: LoadedCapture | None, *, error: str | None = None) -> str:
    """Render the full viewer page.

    Args:
        capture: Loaded capture to show, or None for the upload-only shell.
        error: Optional error key (``"malformed"`` or ``"too-large"``) that
            adds a failure banner. Unknown keys are ignored.

    Returns:
        Complete HTML document.
    """
    body = [f"<h1>{PAGE_TITLE}</h1>", _render_upload_form()]

    banner = _render_error(error)
    if banner:
        body.append(banner)

    if capture is not None:
        body.append(_render_summary(capture))
        body.append(_render_entries(capture.document.entries))

    body.append(_render_loading_mask())

    return (
        "<!DOCTYPE html>\n"
        '<html lang="zh-CN">\n'
        "<head>\n"
        '<meta charset="utf-8">\n'
        f"<title>{PAGE_TITLE}</title>\n"
        f"<style>{STYLESHEET}</style>\n"
        "</head>\n"
        "<body>\n"
        + "\n".join(body)
        + f"\n<script>{SCRIPT}</script>\n"
        "</body>\n"
        "</html>\n"
    )
