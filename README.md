# uptimewatch

uptimewatch is a small website uptime monitor with these parts:

- It reads a list of URLs from a config file.
- It checks each URL with an HTTP `HEAD` request every round.
- It stores every result in a SQLite database.
- It serves an HTML status page. The page shows the latest state of each site and a history bar.

It needs only the Python standard library (Python 3.10 or later).

## Installation

```
pip install .
```

## Configuring sites

Put one URL per line in `sites.conf`. The file is read as follows:

- Blank lines are ignored.
- Anything after a `#` is ignored.
- Trailing whitespace is removed.
- At most 50 URLs are read.
- URLs of 2048 characters or more are skipped.

```
# production
https://www.example.com
http://example.com/health   # health endpoint
```

The monitor checks only the URLs that start with `http://` or `https://`. It skips the others and logs a warning for each. The status page lists every non-empty line, whatever its scheme.

## Running

```
uptimewatch
```

The command starts the following:

- It opens (or creates) the database.
- It starts the monitor loop in a background thread.
- It serves the status page on all interfaces, port 8080 by default.

Press Enter (or close standard input) to stop the server. The monitor loop then stops as well. If the database cannot be opened, the command prints the error and exits with status 1.

Options:

| Option | Default | Meaning |
| --- | --- | --- |
| `--config PATH` | `sites.conf` | file listing the sites |
| `--db PATH` | `uptime.db` | SQLite database of check results |
| `--port N` | `8080` | port of the status page |
| `--interval SECONDS` | `60` | seconds between rounds of checks |

Progress is logged to standard error. This covers each site checked, each recorded result and any configuration problems.

### Monitoring

Each round rereads the config file, so added or removed sites take effect in the next round. If the file cannot be opened, the loop logs the error, waits one interval and tries again.

Redirects are followed, and a `HEAD` request stays a `HEAD` request. Each request times out after 10 seconds. A site counts as **UP** when the final status is 2xx or 3xx. Any other status counts as **DOWN**. When the request itself fails (connection refused, DNS failure, timeout, bad URL), the check is recorded as **DOWN** with code `-1` and a response time of `0`.

### Status page

The server reads the site list once, at startup. Each `GET` request returns the page, whatever the path. Requests with any other method get no answer; the connection is closed. If no sites were loaded, the server answers with an HTTP 500 error page.

The page reloads itself every 30 seconds. Each row shows the following:

- the URL;
- UP, DOWN or UNKNOWN (never checked);
- the last status code;
- the response time in seconds;
- the local time of the last check, or "Never";
- a bar of the site's last 24 checks, oldest first.

The page is kept under 1 MiB. Rows that would go past that limit are left out.

## Using it as a library

```python
from uptimewatch.config import load_sites
from uptimewatch.monitor import check_and_record, check_website
from uptimewatch.storage import StatusStore
from uptimewatch.webui import render_status_page

with StatusStore("uptime.db") as store:
    for url in load_sites("sites.conf", require_scheme=True):
        result = check_and_record(store, url, 10.0)
        print(result.url, result.is_up, result.code, result.response_time, result.error)
    html = render_status_page(store, load_sites("sites.conf", False), None)
```

### `uptimewatch.config`

- `parse_sites(lines, require_scheme=True)` returns the URLs found in an iterable of lines.
- `load_sites(path="sites.conf", require_scheme=True)` reads them from a file. It raises `OSError` if the file cannot be opened.

### `uptimewatch.storage`

`StatusStore(path="uptime.db")` is a thread-safe store that can be used as a context manager. If the database cannot be opened, it raises `StorageError`. It has these methods:

- `record_status(url, is_up, code, response_time, timestamp=None)` stores one check. It uses the current Unix time when no timestamp is given.
- `latest_status(url)` returns a `LatestStatus`, or `None` if the site was never checked. `LatestStatus` has the fields `is_up`, `code`, `response_time` and `timestamp`.
- `last_check_time(url)` returns the Unix time of the latest check, or `None`.
- `recent_history(url, limit=24)` returns up to `limit` of the latest checks as `StatusHistoryEntry(timestamp, is_up)` items, oldest first. A `limit` of zero or less raises `ValueError`.
- `close()` closes the database. Any later use raises `StorageError`.

### `uptimewatch.monitor`

- `check_website(url, timeout=10.0)` returns a `CheckResult`. It has the fields `url`, `is_up`, `code`, `response_time` and `error`.
- `check_and_record(store, url, timeout=10.0)` checks the URL and stores the result.
- `run_monitor_loop(store, config_path="sites.conf", interval=60, stop_event=None)` runs rounds of checks until the given `threading.Event` is set.

### `uptimewatch.webui`

- `render_status_page(store, sites, now=None)` returns the page as a string.
- `StatusServer(store, sites, host="", port=8080)` serves the page. It has `serve_forever()`, `shutdown()` and a `port` property. It can be used as a context manager.
- `start_web_server(store, config_path="sites.conf", port=8080)` serves the page until Enter is pressed.

## What it does not do

uptimewatch has no alerts or notifications. Each check runs with fixed settings (`HEAD` method, 10-second timeout); these cannot be set per site. Old results are never removed from the database. The status page has no authentication and listens on all interfaces.

## Running the tests

```
pip install ".[test]"
pytest
```