import logging
import sys

from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

logger = logging.getLogger(__name__)

# Status and log messages go to stderr; stdout only ever carries the reply.
console = Console(stderr=True)


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Configures the `pipe_ai` logger to print to stderr through rich."""
    log = logging.getLogger("pipe_ai")
    log.setLevel(logging.DEBUG if verbose else logging.INFO)
    if not any(isinstance(h, RichHandler) for h in log.handlers):
        handler = RichHandler(
            console=console,
            show_path=False,
            log_time_format="%Y-%m-%d %H:%M:%S",
        )
        log.addHandler(handler)
    return log


def write_result(result: str, output_file: Optional[str] = None):
    """Writes the reply to `output_file`, or to stdout when no file is given."""
    if output_file:
        with open(output_file, "w", encoding="utf-8") as f:
            f.write(result)
        logger.info("Output saved to %s", output_file)
    else:
        print(result, file=sys.stdout)
