"""
Clipboard adapter — copy text through the platform's clipboard tool.
"""

from __future__ import annotations

import logging
import shutil
import subprocess

logger = logging.getLogger(__name__)

# Tried in order; the first one on PATH wins
_CLIPBOARD_COMMANDS: tuple[tuple[str, ...], ...] = (
    ("pbcopy",),
    ("wl-copy",),
    ("xclip", "-selection", "clipboard"),
    ("xsel", "--clipboard", "--input"),
    ("clip",),
)


class ClipboardError(Exception):
    """No clipboard tool available, or the tool failed."""


def clipboard_command() -> tuple[str, ...] | None:
    for cmd in _CLIPBOARD_COMMANDS:
        if shutil.which(cmd[0]):
            return cmd
    return None


def copy_to_clipboard(text: str, timeout: int = 10) -> str:
    """Copy *text* to the clipboard.  Returns the tool name used."""
    cmd = clipboard_command()
    if cmd is None:
        raise ClipboardError(
            "No clipboard tool found (install pbcopy, wl-copy, xclip or xsel)"
        )

    logger.debug("Copying %d chars via %s", len(text), cmd[0])
    try:
        result = subprocess.run(
            list(cmd),
            input=text,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except (OSError, subprocess.TimeoutExpired) as e:
        raise ClipboardError(f"{cmd[0]} failed: {e}") from e

    if result.returncode != 0:
        raise ClipboardError(f"{cmd[0]} exited {result.returncode}: {result.stderr.strip()}")
    return cmd[0]
