"""HTML status page and the HTTP server that serves it."""

from __future__ import annotations

import html
import logging
import threading
import time
from collections.abc import Iterable, Sequence
from http import HTTPStatus
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from os import PathLike

from .config import CONFIG_FILE, load_sites
from .storage import StatusStore, StorageError

logger = logging.getLogger(__name__)

DEFAULT_PORT = 8080
HISTORY_POINTS = 24
MAX_HTML_BUF_SIZE = 1024 * 1024

_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"

_PAGE_HEAD = (
    "<html><head><title>Uptime Status</title>"
    "<meta http-equiv='refresh' content='30'>"
    "<style>"
    "body{font-family:Arial,sans-serif;margin:20px;line-height:1.4;background-color:#f4f4f4;color:#333;}"
    "h1{color:#333;text-align:center;}"
    "table{width:100%;border-collapse:collapse;margin-top:20px;box-shadow:0 2px 5px rgba(0,0,0,0.1);}"
    "th,td{padding:12px 15px;text-align:left;border-bottom:1px solid #ddd;}"
    "th{background-color:#4CAF50;color:white;}"
    "tr:nth-child(even){background-color:#f9f9f9;}"
    "tr:hover{background-color:#f1f1f1;}"
    ".status-up{color:green;font-weight:bold;}"
    ".status-down{color:red;font-weight:bold;}"
    ".status-unknown{color:gray;font-weight:bold;}"
    ".url-link{color:#007bff;text-decoration:none;word-break:break-all;}"
    ".url-link:hover{text-decoration:underline;}"
    ".footer{text-align:center;margin-top:20px;font-size:0.9em;color:#777;}"
    ".refresh-btn{display:block;width:120px;margin:20px auto;padding:10px 15px;background:#4CAF50;"
    "color:white;border:none;cursor:pointer;border-radius:4px;text-align:center;text-decoration:none;}"
    ".refresh-btn:hover{background:#45a049;}"
    ".history-bar{margin-top:5px;line-height:0;white-space:nowrap;}"
    ".history-block{display:inline-block;width:8px;height:12px;margin-right:1px;"
    "border:1px solid #ccc;vertical-align:middle;}"
    ".history-up{background-color:rgba(0,128,0,0.7);border-color:#5a5;}"
    ".history-down{background-color:rgba(255,0,0,0.7);border-color:#a55;}"
    ".history-unknown{background-color:rgba(128,128,128,0.7);border-color:#888;}"
    "</style></head><body>"
    "<h1>Website Uptime Monitor</h1>"
    "<a href='/' class='refresh-btn'>Refresh Now</a>"
    "<table><thead><tr>"
)

_TABLE_HEADER = (
    "<th>URL</th><th>Status</th><th>Code</th><th>Time (s)</th><th>Last Check</th>"
    f"<th>History ({HISTORY_POINTS} checks)</th>"
    "</tr></thead><tbody>"
)

_NO_SITES_PAGE = (
    "<html><body><h1>Error</h1>"
    "<p>No site configurations available. Check server logs.</p></body></html>"
)
_INTERNAL_ERROR_PAGE = (
    "<html><body><h1>Error</h1><p>Internal server error.</p></body></html>"
)


def _status_words(is_up: int) -> tuple[str, str]:
    """Return the (text, css class suffix) for a status value."""
    if is_up == 1:
        return "UP", "up"
    if is_up == 0:
        return "DOWN", "down"
    return "UNKNOWN", "unknown"


def _format_local(timestamp: float, fmt: str = _TIME_FORMAT) -> str:
    return time.strftime(fmt, time.localtime(timestamp))


def _render_history(store: StatusStore, url: str) -> str:
    history = store.recent_history(url, HISTORY_POINTS)
    if not history:
        return ""
    blocks = "".join(
        f"<span class='history-block history-{_status_words(entry.is_up)[1]}' "
        f"title='{_format_local(entry.timestamp)}'></span>"
        for entry in history
    )
    return f"<div class='history-bar'>{blocks}</div>"


def _render_row(store: StatusStore, url: str) -> str:
    latest = store.latest_status(url)
    if latest is None:
        is_up, code, response_time, last_check = -1, 0, 0.0, 0
    else:
        is_up, code = latest.is_up, latest.code
        response_time, last_check = latest.response_time, latest.timestamp
    status_text, status_class = _status_words(is_up)
    last_check_text = _format_local(last_check) if last_check > 0 else "Never"
    safe_url = html.escape(url, quote=True)
    return (
        "<tr>"
        f"<td><a href='{safe_url}' target='_blank' class='url-link'>{safe_url}</a></td>"
        f"<td class='status-{status_class}'>{status_text}</td>"
        f"<td>{code}</td>"
        f"<td>{response_time:.3f}</td>"
        f"<td>{last_check_text}</td>"
        f"<td>{_render_history(store, url)}</td>"
        "</tr>"
    )


class _PageBuilder:
    """Collects page fragments while keeping the encoded page under the size limit."""

    def __init__(self, limit: int = MAX_HTML_BUF_SIZE) -> None:
        self._parts: list[str] = []
        self._size = 0
        self._limit = limit

    def append(self, fragment: str) -> bool:
        length = len(fragment.encode("utf-8"))
        # One byte is kept back, as for a terminator.
        if self._size + length + 1 > self._limit:
            logger.error("HTML page size exceeds limit (%d bytes)", self._limit)
            return False
        self._parts.append(fragment)
        self._size += length
        return True

    def text(self) -> str:
        return "".join(self._parts)


def render_status_page(
    store: StatusStore, sites: Iterable[str], now: float | None = None
) -> str:
    """Render the status table for ``sites`` as an HTML page.

    Rows that would push the page past ``MAX_HTML_BUF_SIZE`` bytes are left out.
    """
    builder = _PageBuilder()
    builder.append(_PAGE_HEAD)
    builder.append(_TABLE_HEADER)
    for url in sites:
        if not builder.append(_render_row(store, url)):
            logger.error("Failed to append row for %s to the page", url)
            break
    if now is None:
        now = time.time()
    footer = (
        "</tbody></table>"
        f"<div class='footer'>Page generated: {_format_local(now, _TIME_FORMAT + ' %Z')}</div>"
        "</body></html>"
    )
    if not builder.append(footer):
        logger.error("Failed to append footer to the page")
    return builder.text()


class _StatusHTTPServer(ThreadingHTTPServer):
    daemon_threads = True

    def __init__(
        self, address: tuple[str, int], store: StatusStore, sites: Sequence[str]
    ) -> None:
        self.store = store
        self.sites = list(sites)
        super().__init__(address, _StatusRequestHandler)


class _StatusRequestHandler(BaseHTTPRequestHandler):
    server: _StatusHTTPServer

    def do_GET(self) -> None:  # noqa: N802
        if not self.server.sites:
            logger.error("No site configurations loaded.")
            self._send(HTTPStatus.INTERNAL_SERVER_ERROR, _NO_SITES_PAGE, "text/html")
            return
        try:
            page = render_status_page(self.server.store, self.server.sites)
        except StorageError as exc:
            logger.error("Cannot render status page: %s", exc)
            self._send(HTTPStatus.INTERNAL_SERVER_ERROR, _INTERNAL_ERROR_PAGE, "text/html")
            return
        self._send(HTTPStatus.OK, page, "text/html; charset=utf-8")

    def _drop(self) -> None:
        """Close the connection without answering: only GET is served."""
        self.close_connection = True

    do_HEAD = do_POST = do_PUT = do_DELETE = do_PATCH = do_OPTIONS = _drop

    def _send(self, status: HTTPStatus, body: str, content_type: str) -> None:
        payload = body.encode("utf-8")
        self.send_response(status)
        self.send_header("Content-Type", content_type)
        self.send_header("Content-Length", str(len(payload)))
        self.end_headers()
        self.wfile.write(payload)

    def log_message(self, format: str, *args: object) -> None:  # noqa: A002
        logger.debug("%s - %s", self.address_string(), format % args)


class StatusServer:
    """An HTTP server that answers GET requests with the status page."""

    def __init__(
        self,
        store: StatusStore,
        sites: Iterable[str],
        host: str = "",
        port: int = DEFAULT_PORT,
    ) -> None:
        self._httpd = _StatusHTTPServer((host, port), store, list(sites))
        self._state_lock = threading.Lock()
        self._serving = False
        self._closed = False

    @property
    def port(self) -> int:
        """The port the server is bound to."""
        return self._httpd.server_address[1]

    def serve_forever(self) -> None:
        """Serve requests until ``shutdown`` is called."""
        with self._state_lock:
            if self._closed:
                return
            self._serving = True
        self._httpd.serve_forever()

    def shutdown(self) -> None:
        """Stop serving and release the listening socket."""
        with self._state_lock:
            if self._closed:
                return
            self._closed = True
            serving = self._serving
        if serving:
            self._httpd.shutdown()
        self._httpd.server_close()

    def __enter__(self) -> StatusServer:
        return self

    def __exit__(self, *args: object) -> None:
        self.shutdown()


def start_web_server(
    store: StatusStore,
    config_path: str | PathLike[str] = CONFIG_FILE,
    port: int = DEFAULT_PORT,
) -> None:
    """Serve the status page on ``port`` until Enter is pressed."""
    try:
        sites = load_sites(config_path, require_scheme=False)
    except OSError as exc:
        logger.error(
            "Failed to load site configurations from %s: %s. "
            "Web server will not start with site data.",
            config_path,
            exc,
        )
        sites = []
    else:
        if not sites:
            logger.warning("No sites found in %s or all were invalid.", config_path)

    try:
        server = StatusServer(store, sites, "", port)
    except OSError as exc:
        logger.error("Failed to start web server daemon: %s", exc)
        return

    thread = threading.Thread(target=server.serve_forever, name="webui", daemon=True)
    thread.start()
    print(f"Web server started on port {server.port}. Press Enter to stop.", flush=True)
    try:
        input()
    except EOFError:
        pass
    finally:
        server.shutdown()
        thread.join()