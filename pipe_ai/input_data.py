import logging
import sys

from typing import Optional, TextIO

from .errors import InputError

logger = logging.getLogger(__name__)


def read_input_data(path: Optional[str] = None, stdin: Optional[TextIO] = None) -> str:
    """
    Reads the data to process from `path`, or from piped standard input.

    Raises:
        InputError: there is no file and stdin is an interactive terminal, or the
            file cannot be read.
    """
    if path:
        try:
            with open(path, "r", encoding="utf-8") as f:
                return f.read()
        except OSError as e:
            raise InputError(f"Cannot read input file '{path}': {e}") from e

    stdin = stdin if stdin is not None else sys.stdin
    if stdin.isatty():
        raise InputError("No input provided. Please provide input via a file or stdin.")

    logger.debug("Reading input data from stdin")
    return stdin.read()
