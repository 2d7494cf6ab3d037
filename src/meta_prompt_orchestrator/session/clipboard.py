"""Clipboard boundary.

Writes go through a platform helper process (pbcopy, wl-copy, xclip, xsel or
clip). Any failure is reported as ``CopyResult(copied=False)``.
"""
from __future__ import annotations
import logging
import shutil
import subprocess
import time
from typing import Callable

from meta_prompt_orchestrator.common.config import CLIPBOARD_TIMEOUT, COPY_STATUS_SECONDS
from meta_prompt_orchestrator.common.schema import CopyResult

LOGGER = logging.getLogger("orchestrator.clipboard")

CLIPBOARD_COMMANDS: list[list[str]] = [
    ["pbcopy"],
    ["wl-copy"],
    ["xclip", "-selection", "clipboard"],
    ["xsel", "--clipboard", "--input"],
    ["clip"],
]

Writer = Callable[[str], None]

def find_clipboard_command() -> list[str] | None:
    for cmd in CLIPBOARD_COMMANDS:
        if shutil.which(cmd[0]):
            return cmd
    return None

def system_writer(text: str) -> None:
    """Pipe ``text`` into the first clipboard helper found on PATH."""
    cmd = find_clipboard_command()
    if cmd is None:
        raise FileNotFoundError("No clipboard helper found on PATH")
    subprocess.run(cmd, input=text.encode("utf-8", errors="replace"), check=True, timeout=CLIPBOARD_TIMEOUT)

def copy_to_clipboard(label: str, text: str, writer: Writer | None = None) -> CopyResult:
    """
    Place text on the clipboard.

    Args:
        label: Copy target shown in the status ("meta", "dispatch", "json").
        text: Text to copy.
        writer: Clipboard write function; defaults to the system helper.
    """
    write = writer or system_writer
    try:
        write(text)
    except Exception as e:
        LOGGER.warning("Clipboard copy failed for %s: %s", label, e)
        return CopyResult(label=label, copied=False, error=str(e))
    return CopyResult(label=label, copied=True)

class CopyStatus:
    """Transient "copied" label that clears itself after ``duration`` seconds."""

    def __init__(self, duration: float = COPY_STATUS_SECONDS, clock: Callable[[], float] = time.monotonic) -> None:
        self.duration = duration
        self._clock = clock
        self._label: str | None = None
        self._since = 0.0

    def record(self, result: CopyResult) -> None:
        if result.copied:
            self._label = result.label
            self._since = self._clock()
        else:
            self._label = None

    @property
    def label(self) -> str | None:
        if self._label is not None and self._clock() - self._since >= self.duration:
            self._label = None
        return self._label
