"""Tests for the command-line interface (non-TUI modes)."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from manuals import cli
from manuals.manpage import MalformedEntry, ManEntry, ProcessError
from manuals.page import analyze_page


@pytest.fixture()
def fake_load(ls_text):
    with patch("manuals.cli.load_page", side_effect=lambda entry: analyze_page(entry, ls_text)) as load:
        yield load


# ---------------------------------------------------------------------------
# resolve_entry
# ---------------------------------------------------------------------------


class TestResolveEntry:
    def test_name_and_section(self):
        assert cli.resolve_entry("ls", "1") == ManEntry("ls", "1")

    def test_link_text(self):
        assert cli.resolve_entry("ls(1)") == ManEntry("ls", "1")

    def test_address(self):
        assert cli.resolve_entry("man:git-annotate (1)") == ManEntry("git-annotate", "1")

    def test_name_only(self):
        assert cli.resolve_entry("ls") == ManEntry("ls", "")

    def test_conflicting_section(self):
        with pytest.raises(MalformedEntry):
            cli.resolve_entry("ls(1)", "3")

    def test_malformed_address(self):
        with pytest.raises(MalformedEntry):
            cli.resolve_entry("ls(1")


# ---------------------------------------------------------------------------
# main
# ---------------------------------------------------------------------------


class TestMain:
    def test_list_skips_malformed_lines(self, capsys):
        lines = ["ls (1)               - list directory contents", "", "junk", "stat (2) - get file status"]
        with patch("manuals.cli.list_all", return_value=lines):
            assert cli.main(["--list"]) == 0
        assert capsys.readouterr().out.splitlines() == ["ls (1)", "stat (2)"]

    def test_list_empty(self, capsys):
        with patch("manuals.cli.list_all", return_value=[""]):
            assert cli.main(["--list"]) == 0
        assert "No manual pages found." in capsys.readouterr().out

    def test_print_page(self, fake_load, ls_text, capsys):
        assert cli.main(["ls(1)", "--no-tui"]) == 0
        assert capsys.readouterr().out == ls_text
        fake_load.assert_called_once_with(ManEntry("ls", "1"))

    def test_links(self, fake_load, capsys):
        assert cli.main(["ls", "-s", "1", "--links"]) == 0
        out = capsys.readouterr().out.splitlines()
        assert out[0] == "11:12\tdircolors(1)"
        assert out[-1].endswith("\tstat(2)")
        assert len(out) == 5

    def test_folds(self, fake_load, capsys):
        assert cli.main(["ls(1)", "--folds"]) == 0
        out = capsys.readouterr().out.splitlines()
        assert out == ["3-5\tNAME", "6-8\tSYNOPSIS", "9-12\tDESCRIPTION", "13-14\tSEE ALSO"]

    def test_folds_unavailable(self, bare_text, capsys):
        with patch("manuals.cli.load_page", side_effect=lambda entry: analyze_page(entry, bare_text)):
            assert cli.main(["foo(1)", "--folds"]) == 0
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Folding unavailable" in captured.err

    def test_renderer_unavailable(self, capsys):
        with patch("manuals.cli.load_page", side_effect=ProcessError(["man", "1", "ls"])):
            assert cli.main(["ls(1)", "--no-tui"]) == 1
        assert "is man installed?" in capsys.readouterr().err

    def test_malformed_page_argument(self, capsys):
        assert cli.main(["ls(1", "--no-tui"]) == 2
        assert "malformed entry" in capsys.readouterr().err

    def test_page_required_without_tui(self, capsys):
        assert cli.main(["--no-tui"]) == 2
        assert "page required" in capsys.readouterr().out
