"""Unit tests for depradar.cli — argument handling and exit codes."""

import io
from pathlib import Path
from unittest.mock import patch

import pytest

from depradar.cli import _read_urls, main
from depradar.config import CONFIG_ENV_VAR
from depradar.models import ScanResults


@pytest.fixture(autouse=True)
def _isolated(tmp_path: Path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)


class BrokenStdin:
    def read(self):
        raise OSError("Input/output error")


# ── _read_urls ───────────────────────────────────────────────────────────────


class TestReadUrls:
    def test_lines(self):
        assert _read_urls(io.StringIO("https://a\nhttps://b\n")) == ["https://a", "https://b"]

    def test_blank_lines_kept(self):
        assert _read_urls(io.StringIO("https://a\n\nhttps://b")) == ["https://a", "", "https://b"]

    def test_crlf(self):
        assert _read_urls(io.StringIO("https://a\r\n")) == ["https://a"]

    def test_empty(self):
        assert _read_urls(io.StringIO("")) == []


# ── main ─────────────────────────────────────────────────────────────────────


class TestMain:
    def test_empty_stdin_exits_zero(self, capsys):
        assert main([], stdin=io.StringIO("")) == 0
        assert capsys.readouterr().out == ""

    def test_passes_urls_and_flags(self):
        with patch("depradar.cli.scan_urls", return_value=ScanResults()) as scan:
            rc = main(["-c", "9", "-v"], stdin=io.StringIO("https://a\nhttps://b\n"))
        assert rc == 0
        urls, config, reporter = scan.call_args.args
        assert urls == ["https://a", "https://b"]
        assert config.concurrency == 9
        assert config.verbose is True
        assert reporter.verbose is True

    def test_defaults(self):
        with patch("depradar.cli.scan_urls", return_value=ScanResults()) as scan:
            main([], stdin=io.StringIO("https://a\n"))
        _, config, reporter = scan.call_args.args
        assert config.concurrency == 5
        assert reporter.verbose is False

    def test_zero_concurrency_accepted(self):
        with patch("depradar.cli.scan_urls", return_value=ScanResults()) as scan:
            assert main(["-c", "0"], stdin=io.StringIO("")) == 0
        assert scan.call_args.args[1].concurrency == 1

    def test_config_file_then_flags(self, tmp_path: Path):
        (tmp_path / "depradar.yaml").write_text("concurrency: 20\nconnect_timeout: 2\n")
        with patch("depradar.cli.scan_urls", return_value=ScanResults()) as scan:
            main(["-c", "3"], stdin=io.StringIO(""))
        config = scan.call_args.args[1]
        assert config.concurrency == 3
        assert config.connect_timeout == 2

    def test_bad_config_is_usage_error(self, tmp_path: Path):
        (tmp_path / "depradar.yaml").write_text("request_timeout: -4\n")
        with pytest.raises(SystemExit) as exc_info:
            main([], stdin=io.StringIO(""))
        assert exc_info.value.code == 2

    def test_read_failure_exits_one(self, capsys):
        with patch("depradar.cli.scan_urls") as scan:
            assert main([], stdin=BrokenStdin()) == 1
        scan.assert_not_called()
        assert capsys.readouterr().out.startswith("[ERROR] Failed to read input")

    def test_unknown_flag(self):
        with pytest.raises(SystemExit) as exc_info:
            main(["--bogus"], stdin=io.StringIO(""))
        assert exc_info.value.code == 2

    def test_non_integer_concurrency(self):
        with pytest.raises(SystemExit) as exc_info:
            main(["-c", "lots"], stdin=io.StringIO(""))
        assert exc_info.value.code == 2

    def test_interrupt(self):
        with patch("depradar.cli.scan_urls", side_effect=KeyboardInterrupt):
            assert main([], stdin=io.StringIO("https://a\n")) == 130

    def test_undecodable_stdin_line(self, monkeypatch):
        raw = io.TextIOWrapper(io.BytesIO(b"https://a\n\xff\xfe/package.json\nhttps://b\n"), encoding="utf-8")
        monkeypatch.setattr("sys.stdin", raw)
        with patch("depradar.cli.scan_urls", return_value=ScanResults()) as scan:
            assert main([]) == 0
        urls = scan.call_args.args[0]
        assert len(urls) == 3
        assert urls[0] == "https://a" and urls[2] == "https://b"
        assert "\ufffd" in urls[1]
