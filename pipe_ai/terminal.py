"""
Access to the controlling terminal.

Standard input is usually a pipe carrying the data to process, so anything that
needs the user's keyboard (the editor, the interactive prompt) goes through the
terminal device instead. On Unix that is `/dev/tty`, handled with termios. On
Windows it is the console (`CONIN$`/`CONOUT$`), handled with the kernel32 console API.
"""

import logging
import os
import sys

from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import IO, ContextManager, Iterator, Optional

from .errors import TerminalUnavailableError

logger = logging.getLogger(__name__)


class ControllingTerminal(ABC):
    read_path: str = ""
    write_path: str = ""
    eof_key: str = ""

    def open_for_read(self) -> IO[str]:
        return self._open(self.read_path, "r")

    def open_for_write(self) -> IO[str]:
        return self._open(self.write_path, "w")

    def _open(self, path: str, mode: str) -> IO[str]:
        try:
            return open(path, mode, encoding="utf-8")
        except OSError as e:
            raise TerminalUnavailableError(
                f"Cannot open the terminal '{path}': {e}. "
                "Please provide a prompt using the -m option."
            ) from e

    @abstractmethod
    def disable_echo(self, stream: IO[str]) -> None:
        """Stops the terminal from echoing what is typed on `stream`."""

    @abstractmethod
    def restore(self) -> None:
        """Puts the terminal back the way `held` found it. Safe to call more than once."""

    @abstractmethod
    def held(self) -> ContextManager[None]:
        """
        Holds the terminal for an interactive step.

        On exit any unread type-ahead is discarded and the terminal modes are
        restored, whether or not the step succeeded, so nothing typed during the
        step reaches the shell once pipe-ai exits.
        """


class PosixTerminal(ControllingTerminal):
    read_path = "/dev/tty"
    write_path = "/dev/tty"
    eof_key = "Ctrl+D"

    def __init__(self):
        self._fd: Optional[int] = None
        self._saved_attrs = None

    def disable_echo(self, stream: IO[str]) -> None:
        import termios

        fd = stream.fileno()
        attrs = termios.tcgetattr(fd)
        attrs[3] &= ~termios.ECHO
        termios.tcsetattr(fd, termios.TCSANOW, attrs)

    @contextmanager
    def held(self) -> Iterator[None]:
        self._acquire()
        try:
            yield
        finally:
            self.restore()

    def _acquire(self) -> None:
        import termios

        try:
            self._fd = os.open(self.read_path, os.O_RDWR | os.O_NOCTTY)
        except OSError as e:
            # Nothing to save; opening the device for the step itself will report it.
            logger.debug("No controlling terminal to hold: %s", e)
            self._fd = None
            return

        try:
            self._saved_attrs = termios.tcgetattr(self._fd)
        except termios.error as e:
            logger.debug("Could not read terminal modes: %s", e)
            self._saved_attrs = None

    def restore(self) -> None:
        import termios

        fd, attrs = self._fd, self._saved_attrs
        self._fd, self._saved_attrs = None, None
        if fd is None:
            return
        try:
            termios.tcflush(fd, termios.TCIFLUSH)
            if attrs is not None:
                termios.tcsetattr(fd, termios.TCSADRAIN, attrs)
        except termios.error as e:
            logger.warning("Failed to restore the terminal: %s", e)
        finally:
            os.close(fd)


ENABLE_ECHO_INPUT = 0x0004


def _kernel32():
    import ctypes

    return ctypes.WinDLL("kernel32", use_last_error=True)


def _console_handle(fd: int) -> int:
    import msvcrt

    return msvcrt.get_osfhandle(fd)


class WindowsTerminal(ControllingTerminal):
    read_path = "CONIN$"
    write_path = "CONOUT$"
    eof_key = "Ctrl+Z (then Enter)"

    def __init__(self):
        self._fd: Optional[int] = None
        self._saved_mode: Optional[int] = None

    def _get_mode(self, handle: int) -> int:
        import ctypes

        mode = ctypes.c_ulong()
        if not _kernel32().GetConsoleMode(handle, ctypes.byref(mode)):
            raise OSError("Failed to read Windows console mode")
        return mode.value

    def disable_echo(self, stream: IO[str]) -> None:
        handle = _console_handle(stream.fileno())
        mode = self._get_mode(handle)
        if not _kernel32().SetConsoleMode(handle, mode & ~ENABLE_ECHO_INPUT):
            raise OSError("Failed to set Windows console mode")

    @contextmanager
    def held(self) -> Iterator[None]:
        self._acquire()
        try:
            yield
        finally:
            self.restore()

    def _acquire(self) -> None:
        try:
            self._fd = os.open(self.read_path, os.O_RDWR)
        except OSError as e:
            logger.debug("No console to hold: %s", e)
            self._fd = None
            return

        try:
            self._saved_mode = self._get_mode(_console_handle(self._fd))
        except OSError as e:
            logger.debug("Could not read console mode: %s", e)
            self._saved_mode = None

    def restore(self) -> None:
        fd, mode = self._fd, self._saved_mode
        self._fd, self._saved_mode = None, None
        if fd is None:
            return
        try:
            kernel32 = _kernel32()
            handle = _console_handle(fd)
            if not kernel32.FlushConsoleInputBuffer(handle):
                logger.warning("Failed to discard pending console input")
            if mode is not None and not kernel32.SetConsoleMode(handle, mode):
                logger.warning("Failed to restore the console mode")
        finally:
            os.close(fd)


def controlling_terminal() -> ControllingTerminal:
    if sys.platform == "win32":
        return WindowsTerminal()
    return PosixTerminal()
