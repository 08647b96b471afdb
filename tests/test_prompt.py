"""
Tests for the interactive confirmation protocol.
"""

import io

import pytest
from rich.console import Console

from hcpmirror.utils.prompt import console_confirm, is_affirmative


class TestIsAffirmative:

    @pytest.mark.parametrize("answer", ["y", "Y", "yes", "YES", "Yes", " y\n"])
    def test_yes(self, answer):
        assert is_affirmative(answer) is True

    @pytest.mark.parametrize("answer", ["", "n", "no", "yep", "ye", "sure", "y y", None])
    def test_anything_else_is_no(self, answer):
        assert is_affirmative(answer) is False


class TestConsoleConfirm:

    def console(self):
        return Console(file=io.StringIO(), force_terminal=False)

    def test_reads_answer(self, monkeypatch):
        monkeypatch.setattr("sys.stdin", io.StringIO("yes\n"))
        console = self.console()
        assert console_confirm("Delete /dst/100307?", console=console) is True
        assert "Delete /dst/100307? [y/N]" in console.file.getvalue()

    def test_decline(self, monkeypatch):
        monkeypatch.setattr("sys.stdin", io.StringIO("n\n"))
        assert console_confirm("Delete?", console=self.console()) is False

    def test_empty_line_declines(self, monkeypatch):
        monkeypatch.setattr("sys.stdin", io.StringIO("\n"))
        assert console_confirm("Delete?", console=self.console()) is False

    def test_eof_declines(self, monkeypatch):
        monkeypatch.setattr("sys.stdin", io.StringIO(""))
        assert console_confirm("Delete?", console=self.console()) is False

    def test_io_error_declines(self, monkeypatch):
        def broken_input(*args, **kwargs):
            raise OSError("terminal gone")

        console = self.console()
        monkeypatch.setattr(console, "input", broken_input)
        assert console_confirm("Delete?", console=console) is False
