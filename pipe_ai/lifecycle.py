import logging
import signal

from typing import Callable

from .terminal import ControllingTerminal

EXIT_SUCCESS = 0
EXIT_FAILURE = 1

HANDLED_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class ProcessLifecycle:
    """
    Owns how a pipe-ai run ends: signals, terminal restoration and the exit status.

    Errors raised anywhere below are reported here and nowhere else.
    """

    def __init__(self, log: logging.Logger, terminal: ControllingTerminal, verbose: bool = False):
        self.log = log
        self.terminal = terminal
        self.verbose = verbose

    def install_signal_handlers(self):
        for signum in HANDLED_SIGNALS:
            signal.signal(signum, self._handle_signal)

    def _handle_signal(self, signum, frame):
        self.log.error("Process interrupted by %s.", signal.Signals(signum).name)
        self.cleanup()
        # POSIX shells report a process killed by signal N as 128 + N.
        raise SystemExit(128 + signum)

    def cleanup(self):
        self.log.debug("# Cleaning up...")
        self.terminal.restore()
        for handler in self.log.handlers:
            handler.flush()

    def run(self, operation: Callable[[], None]) -> int:
        """Runs `operation` and returns the exit status for it."""
        try:
            operation()
            return EXIT_SUCCESS
        except Exception as e:
            self._report(e)
            return EXIT_FAILURE
        finally:
            self.cleanup()

    def _report(self, error: Exception):
        self.log.error("Error: %s", error)
        if self.verbose:
            self.log.debug("Traceback:", exc_info=error)
