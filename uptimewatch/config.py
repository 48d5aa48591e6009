"""Reading the list of monitored sites from a configuration file."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from os import PathLike

logger = logging.getLogger(__name__)

MAX_SITES = 50
MAX_URL_LEN = 2048
CONFIG_FILE = "sites.conf"

_SCHEMES = ("http://", "https://")


def _clean_line(line: str) -> str:
    """Cut the line at its first line break and comment, then trim the right side."""
    for terminator in ("\r", "\n"):
        line = line.split(terminator, 1)[0]
    line = line.split("#", 1)[0]
    return line.rstrip()


def parse_sites(lines: Iterable[str], require_scheme: bool = True) -> list[str]:
    """Return the site URLs found in ``lines``.

    Comments start with ``#``; blank lines are ignored. At most ``MAX_SITES``
    URLs are returned, and URLs of ``MAX_URL_LEN`` characters or more are
    skipped. With ``require_scheme`` only http:// and https:// URLs are kept.
    """
    sites: list[str] = []
    for raw in lines:
        if len(sites) >= MAX_SITES:
            break
        line = _clean_line(raw)
        if not line:
            continue
        if require_scheme and not line.startswith(_SCHEMES):
            logger.warning("Skipping invalid URL: %s", line)
            continue
        if len(line) >= MAX_URL_LEN:
            logger.warning("URL too long: %s", line)
            continue
        sites.append(line)
    return sites


def load_sites(
    path: str | PathLike[str] = CONFIG_FILE, require_scheme: bool = True
) -> list[str]:
    """Read the site URLs from the file at ``path``.

    Raises ``OSError`` when the file cannot be opened.
    """
    with open(path, encoding="utf-8", errors="replace") as handle:
        sites = parse_sites(handle, require_scheme=require_scheme)
    logger.info("Loaded %d sites from %s", len(sites), path)
    return sites