"""User-facing dialogs: progress, messages, prompts and the clipboard.

The orchestrator only talks to the :class:`Dialog` interface, so the way
prompts are shown can be swapped without touching the link flow:

 - :class:`ZenityDialog` drives the ``zenity`` program (GTK dialogs), which is
   what file-manager integrations want.
 - :class:`ConsoleDialog` prompts on the terminal when no desktop is around.

UI actions other than ``ask`` and ``progress_start`` never raise; failures are
logged and the flow carries on.
"""

from __future__ import annotations

import getpass
import logging
import shutil
import subprocess
from abc import ABC, abstractmethod
from typing import IO, List, Optional

import pyperclip

from . import ui
from .errors import PermanentError, UserAbort

PROGRESS_TEXT = "Creating link."


class Dialog(ABC):
    """Capabilities the link flow needs from the user interface."""

    def __init__(self, title: str, logger: Optional[logging.Logger] = None) -> None:
        self.title = title
        self.logger = logger or logging.getLogger(__name__)

    @abstractmethod
    def progress_start(self) -> None:
        """Show a progress indicator."""

    @abstractmethod
    def progress_report(
        self, percentage: Optional[float] = None, text: Optional[str] = None
    ) -> None:
        """Update the indicator; only the supplied parts change.

        Does nothing when no indicator is showing.
        """

    @abstractmethod
    def progress_stop(self) -> None:
        """Report 100% and close the indicator.

        Safe to call repeatedly or without a prior :meth:`progress_start`.
        """

    @abstractmethod
    def info(self, text: str) -> None:
        """Show an informational message."""

    @abstractmethod
    def error(self, text: str) -> None:
        """Show an error message."""

    @abstractmethod
    def ask(self, prompt: str, secret: bool = False) -> str:
        """Ask the user for a value; raise ``UserAbort`` when cancelled."""

    def copy(self, text: str) -> None:
        """Replace the system clipboard contents with ``text``."""
        pyperclip.copy(text)


class ZenityDialog(Dialog):
    """Dialogs rendered by the ``zenity`` command."""

    def __init__(
        self,
        title: str,
        command: str = "zenity",
        logger: Optional[logging.Logger] = None,
    ) -> None:
        super().__init__(title, logger)
        self.command = command
        self._progress: Optional[subprocess.Popen] = None

    def _argv(self, *args: str) -> List[str]:
        return [self.command, f"--title={self.title}", *args]

    def _pipe(self) -> Optional[IO[str]]:
        proc = self._progress
        if proc is None or proc.stdin is None or proc.stdin.closed:
            return None
        return proc.stdin

    def progress_start(self) -> None:
        self.progress_stop()
        argv = self._argv("--progress", "--auto-close", "--auto-kill", f"--text={PROGRESS_TEXT}")
        try:
            self._progress = subprocess.Popen(
                argv, stdin=subprocess.PIPE, text=True, encoding="utf-8"
            )
        except OSError as e:
            raise PermanentError(f"Cannot start {self.command}: {e}") from e

    def progress_report(
        self, percentage: Optional[float] = None, text: Optional[str] = None
    ) -> None:
        pipe = self._pipe()
        if pipe is None:
            return
        lines = []
        if percentage is not None:
            lines.append(str(int(percentage)))
        if text is not None:
            lines.append(f"# {text}")
        if not lines:
            return
        try:
            pipe.write("\n".join(lines) + "\n")
            pipe.flush()
        except OSError as e:
            # zenity already exited (closed by the user or auto-closed)
            self.logger.debug("Progress update dropped: %s", e)

    def progress_stop(self) -> None:
        proc = self._progress
        if proc is None:
            return
        self._progress = None
        try:
            if proc.stdin is not None and not proc.stdin.closed:
                try:
                    proc.stdin.write("100\n")
                    proc.stdin.flush()
                finally:
                    proc.stdin.close()
        except OSError as e:
            self.logger.debug("Closing progress dialog: %s", e)
        try:
            proc.wait(timeout=5)
        except subprocess.TimeoutExpired:
            proc.kill()
            proc.wait()

    def _show(self, kind: str, text: str) -> None:
        try:
            subprocess.run(self._argv(kind, "--no-markup", f"--text={text}"), check=False)
        except OSError as e:
            self.logger.warning("Cannot show %s dialog (%s): %s", kind, e, text)

    def info(self, text: str) -> None:
        self._show("--info", text)

    def error(self, text: str) -> None:
        self._show("--error", text)

    def ask(self, prompt: str, secret: bool = False) -> str:
        mode = "--password" if secret else "--entry"
        try:
            res = subprocess.run(
                self._argv(mode, f"--text={prompt}"),
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as e:
            raise PermanentError(f"Cannot start {self.command}: {e}") from e
        if res.returncode != 0:
            raise UserAbort()
        return res.stdout.strip()


class ConsoleDialog(Dialog):
    """Terminal stand-in for desktop dialogs."""

    def __init__(self, title: str, logger: Optional[logging.Logger] = None) -> None:
        super().__init__(title, logger)
        self._percentage: Optional[int] = None

    def progress_start(self) -> None:
        self._percentage = 0
        ui.info(f"{self.title}: {PROGRESS_TEXT}")

    def progress_report(
        self, percentage: Optional[float] = None, text: Optional[str] = None
    ) -> None:
        if self._percentage is None:
            return
        if percentage is not None:
            self._percentage = int(percentage)
        if percentage is None and text is None:
            return
        line = f"[{self._percentage:3d}%]"
        if text is not None:
            line += f" {text}"
        print(ui.c(line, ui.GRAY))

    def progress_stop(self) -> None:
        if self._percentage is None:
            return
        if self._percentage < 100:
            self.progress_report(100)
        self._percentage = None

    def info(self, text: str) -> None:
        ui.ok(text)

    def error(self, text: str) -> None:
        ui.err(text)

    def ask(self, prompt: str, secret: bool = False) -> str:
        try:
            if secret:
                return getpass.getpass(prompt + " ").strip()
            return input(prompt + " ").strip()
        except (EOFError, KeyboardInterrupt):
            raise UserAbort() from None


def make_dialog(
    kind: str, title: str, logger: Optional[logging.Logger] = None
) -> Dialog:
    """Build the dialog for ``kind`` (``auto``, ``zenity`` or ``console``).

    ``auto`` uses zenity when it is on ``PATH`` and the console otherwise.
    """
    kind = (kind or "auto").lower()
    if kind == "auto":
        kind = "zenity" if shutil.which("zenity") else "console"
    if kind == "zenity":
        return ZenityDialog(title, logger=logger)
    if kind == "console":
        return ConsoleDialog(title, logger=logger)
    raise ValueError(f"Unknown dialog kind: {kind}")


__all__ = ["Dialog", "ZenityDialog", "ConsoleDialog", "make_dialog", "PROGRESS_TEXT"]
