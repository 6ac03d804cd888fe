"""
Tests for the clipboard adapter.
"""

import subprocess

import pytest

from coolctl.adapters import clipboard
from coolctl.adapters.clipboard import ClipboardError, clipboard_command, copy_to_clipboard


class TestClipboard:
    def test_first_available_tool(self, monkeypatch):
        monkeypatch.setattr(clipboard.shutil, "which", lambda name: name if name == "xclip" else None)
        assert clipboard_command() == ("xclip", "-selection", "clipboard")

    def test_no_tool(self, monkeypatch):
        monkeypatch.setattr(clipboard.shutil, "which", lambda name: None)
        with pytest.raises(ClipboardError, match="No clipboard tool"):
            copy_to_clipboard("x")

    def test_copies_via_subprocess(self, monkeypatch):
        calls = []

        def fake_run(cmd, **kwargs):
            calls.append((cmd, kwargs["input"]))
            return subprocess.CompletedProcess(cmd, 0, "", "")

        monkeypatch.setattr(clipboard.shutil, "which", lambda name: name if name == "pbcopy" else None)
        monkeypatch.setattr(clipboard.subprocess, "run", fake_run)
        assert copy_to_clipboard("logs") == "pbcopy"
        assert calls == [(["pbcopy"], "logs")]

    def test_tool_failure(self, monkeypatch):
        monkeypatch.setattr(clipboard.shutil, "which", lambda name: name if name == "wl-copy" else None)
        monkeypatch.setattr(
            clipboard.subprocess, "run",
            lambda cmd, **kw: subprocess.CompletedProcess(cmd, 1, "", "no display"),
        )
        with pytest.raises(ClipboardError, match="no display"):
            copy_to_clipboard("x")
