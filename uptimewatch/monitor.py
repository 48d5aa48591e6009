"""Periodic HTTP checks of the configured websites."""

from __future__ import annotations

import http.client
import logging
import threading
import time
import urllib.error
import urllib.request
from dataclasses import dataclass
from os import PathLike

from .config import CONFIG_FILE, load_sites
from .storage import StatusStore

logger = logging.getLogger(__name__)

CHECK_INTERVAL_SECONDS = 60
DEFAULT_TIMEOUT = 10.0


@dataclass(frozen=True)
class CheckResult:
    """The outcome of one website check; ``code`` is -1 on a transport error."""

    url: str
    is_up: bool
    code: int
    response_time: float
    error: str | None = None


class _HeadRedirectHandler(urllib.request.HTTPRedirectHandler):
    """Follows redirects without turning a HEAD request into a GET."""

    def redirect_request(self, req, fp, code, msg, headers, newurl):
        new = super().redirect_request(req, fp, code, msg, headers, newurl)
        if new is not None and req.get_method() == "HEAD":
            new.method = "HEAD"
        return new


_opener = urllib.request.build_opener(_HeadRedirectHandler)


def check_website(url: str, timeout: float = DEFAULT_TIMEOUT) -> CheckResult:
    """Send a HEAD request to ``url``, following redirects.

    The site counts as up when the final status is 2xx or 3xx.
    """
    request = urllib.request.Request(url, method="HEAD")
    start = time.perf_counter()
    try:
        with _opener.open(request, timeout=timeout) as response:
            code = response.status
    except urllib.error.HTTPError as exc:
        code = exc.code
        exc.close()
    except (urllib.error.URLError, OSError, http.client.HTTPException, ValueError) as exc:
        reason = getattr(exc, "reason", exc)
        return CheckResult(url=url, is_up=False, code=-1, response_time=0.0, error=str(reason))
    elapsed = time.perf_counter() - start
    return CheckResult(url=url, is_up=200 <= code < 400, code=code, response_time=elapsed)


def check_and_record(
    store: StatusStore, url: str, timeout: float = DEFAULT_TIMEOUT
) -> CheckResult:
    """Check ``url`` and store the result."""
    result = check_website(url, timeout)
    if result.error is not None:
        logger.warning("Check error for %s: %s", url, result.error)
    store.record_status(url, int(result.is_up), result.code, result.response_time)
    return result


def run_monitor_loop(
    store: StatusStore,
    config_path: str | PathLike[str] = CONFIG_FILE,
    interval: float = CHECK_INTERVAL_SECONDS,
    stop_event: threading.Event | None = None,
) -> None:
    """Check every configured site each ``interval`` seconds until stopped.

    The configuration is reread before every round.
    """
    if stop_event is None:
        stop_event = threading.Event()
    while not stop_event.is_set():
        try:
            sites = load_sites(config_path, require_scheme=True)
        except OSError as exc:
            logger.error("Error opening config file %s: %s", config_path, exc)
            stop_event.wait(interval)
            continue
        if not sites:
            logger.warning("No valid sites found in %s. Sleeping.", config_path)
        for url in sites:
            if stop_event.is_set():
                return
            logger.info("Checking: %s", url)
            check_and_record(store, url)
        stop_event.wait(interval)