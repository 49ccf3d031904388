"""Inline stylesheet and script for the viewer page.

The script only reads the ``data-method``, ``data-url`` and ``data-time``
attributes written by :mod:`harview.web.render`; it never talks to the
server.
"""

STYLESHEET = """
body { font-family: Arial, sans-serif; margin: 20px; color: #333; }
.file-upload { margin: 20px 0; }
.file-upload form { display: flex; flex-wrap: wrap; align-items: center; }
.har-info { background-color: #f0f0f0; padding: 10px; margin-bottom: 20px; border-radius: 5px; }
.btn { padding: 8px 16px; border: none; border-radius: 4px; cursor: pointer; margin: 5px;
       font-size: 14px; color: white; text-decoration: none; display: inline-block; }
.upload-btn { background-color: #2196F3; }
.reload-btn { background-color: #f44336; }
.download-btn { background-color: #9E9E9E; }
.file-input { padding: 8px 12px; border: 1px solid #ddd; border-radius: 4px; margin: 5px; }
.method-count { display: inline-block; padding: 4px 8px; border-radius: 12px; font-weight: bold;
                cursor: pointer; margin: 0 5px; color: white; }
.method-count.get { background-color: #2196F3; }
.method-count.post { background-color: #4CAF50; }
.method-count.other { background-color: #ff9800; }
.error-banner { background-color: #fdecea; color: #f44336; font-weight: bold; padding: 12px;
                border-radius: 5px; margin-bottom: 20px; cursor: pointer; }
.entries-table { width: 100%; border-collapse: collapse; table-layout: fixed; }
.entries-table th, .entries-table td { border: 1px solid #ddd; padding: 8px; text-align: left;
                                       overflow: hidden; }
.entries-table th { background-color: #f2f2f2; cursor: pointer; }
.entries-table th.url-col { width: 70%; }
.entry-item { cursor: pointer; }
.entry-item:hover { background-color: #f5f5f5; }
.entry-detail td { background-color: #e0e0e0; word-break: break-all; }
.request-method { font-weight: bold; }
.url-text { white-space: nowrap; overflow: hidden; text-overflow: ellipsis; display: inline-block;
            max-width: 100%; }
.status-code { margin-left: 10px; font-weight: bold; }
.status-info { color: #607d8b; }
.status-success { color: green; }
.status-redirect { color: orange; }
.status-client-error { color: red; }
.status-server-error { color: darkred; }
.status-unknown { color: #999; }
.progress-container { background-color: #f0f0f0; border-radius: 5px; margin: 5px 0; height: 10px; }
.progress-bar { height: 100%; background-color: #4CAF50; border-radius: 5px; width: 0%; }
.time-text { font-size: 12px; color: #666; }
#loading-mask { position: fixed; top: 0; left: 0; width: 100%; height: 100%; z-index: 9999;
                background-color: rgba(0, 0, 0, 0.5);
                justify-content: center; align-items: center; }
.loading-content { background-color: white; padding: 30px; border-radius: 8px; text-align: center; }
.loading-spinner { width: 50px; height: 50px; border: 5px solid #f3f3f3;
                   border-top: 5px solid #2196F3;
                   border-radius: 50%; animation: spin 1s linear infinite; margin: 0 auto 15px; }
@keyframes spin { 0% { transform: rotate(0deg); } 100% { transform: rotate(360deg); } }
"""

SCRIPT = """
var LOADING_DELAY_MS = 300;
var BANNER_TIMEOUT_MS = 5000;

function showLoadingMask() {
    // Delayed so fast uploads do not flash the mask
    setTimeout(function() {
        var mask = document.getElementById('loading-mask');
        if (mask) mask.style.display = 'flex';
    }, LOADING_DELAY_MS);
}

function toggleDetail(row) {
    var detail = row.nextElementSibling;
    if (detail && detail.classList.contains('entry-detail')) {
        detail.style.display = detail.style.display === 'none' ? 'table-row' : 'none';
    }
}

function getRowPairs() {
    var list = document.getElementById('entries-list');
    var pairs = [];
    if (!list) return pairs;
    var rows = list.querySelectorAll('tr.entry-item');
    for (var i = 0; i < rows.length; i++) {
        pairs.push({data: rows[i], detail: rows[i].nextElementSibling});
    }
    return pairs;
}

function replaceRows(pairs) {
    var list = document.getElementById('entries-list');
    for (var i = 0; i < pairs.length; i++) {
        list.appendChild(pairs[i].data);
        list.appendChild(pairs[i].detail);
    }
}

var sortDirections = {method: 'asc', url: 'asc', time: 'asc'};

function sortEntries(key) {
    var pairs = getRowPairs();
    var sign = sortDirections[key] === 'asc' ? 1 : -1;
    pairs.sort(function(a, b) {
        if (key === 'time') {
            return sign * (parseFloat(a.data.dataset.time) - parseFloat(b.data.dataset.time));
        }
        return sign * a.data.dataset[key].localeCompare(b.data.dataset[key]);
    });
    sortDirections[key] = sign === 1 ? 'desc' : 'asc';
    ['method', 'url', 'time'].forEach(function(field) {
        var indicator = document.getElementById('sort-' + field);
        if (indicator) {
            indicator.textContent = sortDirections[field] === 'asc' ? '\\u2191' : '\\u2193';
        }
    });
    replaceRows(pairs);
}

function matchesMethod(method, wanted) {
    if (wanted === 'OTHER') return method !== 'GET' && method !== 'POST';
    return method === wanted;
}

function sortByMethod(wanted) {
    var pairs = getRowPairs();
    pairs.sort(function(a, b) {
        var am = matchesMethod(a.data.dataset.method, wanted);
        var bm = matchesMethod(b.data.dataset.method, wanted);
        return am === bm ? 0 : (am ? -1 : 1);
    });
    replaceRows(pairs);
}

document.addEventListener('DOMContentLoaded', function() {
    var banner = document.getElementById('error-banner');
    if (banner) {
        var hide = function() { banner.style.display = 'none'; };
        var timer = setTimeout(hide, BANNER_TIMEOUT_MS);
        banner.addEventListener('click', function() { clearTimeout(timer); hide(); });
        window.history.replaceState({}, document.title, window.location.pathname);
    }
    var pairs = getRowPairs();
    var maxTime = 0;
    pairs.forEach(function(p) { maxTime = Math.max(maxTime, parseFloat(p.data.dataset.time)); });
    if (maxTime <= 0) return;
    pairs.forEach(function(p) {
        var bar = p.data.querySelector('.progress-bar');
        var time = Math.max(parseFloat(p.data.dataset.time), 0);
        if (bar) bar.style.width = (time / maxTime * 100) + '%';
    });
});
"""
