import pytest

from uptimewatch.config import MAX_SITES, MAX_URL_LEN, load_sites, parse_sites


def test_comments_and_blank_lines_are_ignored():
    lines = [
        "# a comment line\n",
        "\n",
        "   \n",
        "https://example.com  # trailing comment\n",
        "http://example.org\t \n",
    ]
    assert parse_sites(lines) == ["https://example.com", "http://example.org"]


def test_crlf_line_endings_are_removed():
    assert parse_sites(["https://example.com\r\n"]) == ["https://example.com"]


def test_invalid_scheme_skipped_when_required():
    lines = ["ftp://example.com\n", "example.com\n", "https://example.net\n"]
    assert parse_sites(lines, require_scheme=True) == ["https://example.net"]


def test_invalid_scheme_kept_when_not_required():
    lines = ["ftp://example.com\n", "https://example.net\n"]
    assert parse_sites(lines, require_scheme=False) == [
        "ftp://example.com",
        "https://example.net",
    ]


def test_site_count_is_capped():
    lines = [f"https://example.com/{n}\n" for n in range(MAX_SITES + 10)]
    sites = parse_sites(lines)
    assert len(sites) == MAX_SITES
    assert sites[-1] == f"https://example.com/{MAX_SITES - 1}"


def test_overlong_url_is_skipped():
    prefix = "https://example.com/"
    fits = prefix + "a" * (MAX_URL_LEN - 1 - len(prefix))
    too_long = prefix + "b" * (MAX_URL_LEN - len(prefix))
    assert parse_sites([too_long + "\n", fits + "\n"]) == [fits]


def test_load_sites_reads_file(tmp_path):
    path = tmp_path / "sites.conf"
    path.write_text("# sites\nhttps://example.com\nnot-a-url\n", encoding="utf-8")
    assert load_sites(path) == ["https://example.com"]
    assert load_sites(path, require_scheme=False) == ["https://example.com", "not-a-url"]


def test_load_sites_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_sites(tmp_path / "absent.conf")