"""Tests for running `man`. subprocess.run is mocked; no man install needed."""

from __future__ import annotations

import subprocess
from unittest.mock import MagicMock, patch

import pytest

from manuals.manpage import ProcessError, fetch_page, list_all, page_title, split_lines, strip_overstrike


def _completed(stdout: str = "", returncode: int = 0, stderr: str = "") -> MagicMock:
    result = MagicMock()
    result.stdout = stdout
    result.stderr = stderr
    result.returncode = returncode
    return result


# ---------------------------------------------------------------------------
# fetch_page
# ---------------------------------------------------------------------------


class TestFetchPage:
    def test_section_comes_before_name(self):
        with patch("manuals.manpage.discovery.subprocess.run", return_value=_completed("page")) as run:
            assert fetch_page("printf", "3") == "page"
        command = run.call_args[0][0]
        assert command[1:] == ["3", "printf"]

    def test_without_section(self):
        with patch("manuals.manpage.discovery.subprocess.run", return_value=_completed("page")) as run:
            fetch_page("ls")
        assert run.call_args[0][0][1:] == ["ls"]

    def test_environment_disables_pager(self):
        with patch("manuals.manpage.discovery.subprocess.run", return_value=_completed("page")) as run:
            fetch_page("ls", "1")
        env = run.call_args[1]["env"]
        assert env["MANPAGER"] == "cat"
        assert env["MANWIDTH"].isdigit()
        assert "MAN_KEEP_FORMATTING" not in env

    def test_overstrike_removed(self):
        with patch("manuals.manpage.discovery.subprocess.run",
                   return_value=_completed("N\x08NA\x08AM\x08ME\x08E\n")):
            assert fetch_page("ls", "1") == "NAME\n"

    def test_launch_failure(self):
        with patch("manuals.manpage.discovery.subprocess.run", side_effect=FileNotFoundError("man")):
            with pytest.raises(ProcessError) as exc_info:
                fetch_page("ls", "1")
        assert str(exc_info.value) == "manual renderer unavailable"
        assert exc_info.value.returncode is None

    def test_non_zero_exit(self):
        with patch("manuals.manpage.discovery.subprocess.run",
                   return_value=_completed("", returncode=16, stderr="No manual entry for nope")):
            with pytest.raises(ProcessError) as exc_info:
                fetch_page("nope", "1")
        assert exc_info.value.returncode == 16
        assert exc_info.value.command[1:] == ["1", "nope"]

    def test_timeout(self):
        with patch("manuals.manpage.discovery.subprocess.run",
                   side_effect=subprocess.TimeoutExpired(["man"], 1)):
            with pytest.raises(ProcessError):
                fetch_page("ls", "1", timeout=1)


# ---------------------------------------------------------------------------
# list_all
# ---------------------------------------------------------------------------


class TestListAll:
    def test_keyword_search_with_empty_query(self):
        output = "ls (1)               - list directory contents\nstat (2)             - get file status\n"
        with patch("manuals.manpage.discovery.subprocess.run", return_value=_completed(output)) as run:
            lines = list_all()
        assert run.call_args[0][0][1:] == ["-k", ""]
        assert lines == [
            "ls (1)               - list directory contents",
            "stat (2)             - get file status",
            "",
        ]

    def test_failure(self):
        with patch("manuals.manpage.discovery.subprocess.run", side_effect=OSError("boom")):
            with pytest.raises(ProcessError):
                list_all()


# ---------------------------------------------------------------------------
# Text helpers
# ---------------------------------------------------------------------------


class TestText:
    def test_split_lines_keeps_form_feeds(self):
        assert split_lines("a\x0cb\nc\n") == ["a\x0cb", "c", ""]

    def test_strip_overstrike_underline(self):
        assert strip_overstrike("_\x08f_\x08i_\x08l_\x08e") == "file"

    def test_strip_overstrike_plain_text_unchanged(self):
        assert strip_overstrike("plain text") == "plain text"

    def test_page_title(self, ls_lines):
        assert page_title(ls_lines).startswith("LS(1)")

    def test_page_title_empty(self):
        assert page_title(["", "  "]) == ""
