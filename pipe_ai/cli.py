#!/usr/bin/env python3

import argparse
import argcomplete
import logging
import sqlite3
import sys

from abc import ABC, abstractmethod
from typing import List, Optional

from . import __version__
from .brain import Brain
from .composer import compose_prompt, join_payload
from .config import load_configuration, load_pre_prompt
from .input_data import read_input_data
from .lifecycle import ProcessLifecycle
from .output import console, setup_logging, write_result
from .providers import load_provider
from .speech import speak
from .terminal import ControllingTerminal, controlling_terminal

logger = logging.getLogger(__name__)


class Argument(ABC):
    def __init__(self, help: str, kwargs: Optional[dict] = None):
        self.help = help
        self.kwargs = kwargs if kwargs is not None else {}

    @abstractmethod
    def add_to_parser(self, parser: argparse.ArgumentParser):
        pass


class OptionalArg(Argument):
    def __init__(
        self,
        short_option: str,
        long_option: str,
        help: str,
        kwargs: Optional[dict] = None,
    ):
        super().__init__(help=help, kwargs=kwargs)
        self.short_option = short_option
        self.long_option = long_option

    def add_to_parser(self, parser: argparse.ArgumentParser):
        parser.add_argument(
            self.short_option, self.long_option, help=self.help, **self.kwargs
        )


class PositionalArg(Argument):
    def __init__(self, name: str, help: str, kwargs: Optional[dict] = None):
        super().__init__(help=help, kwargs=kwargs)
        self.name = name

    def add_to_parser(self, parser: argparse.ArgumentParser):
        parser.add_argument(self.name, help=self.help, **self.kwargs)


ARGUMENTS: List[Argument] = [
    PositionalArg(
        name="file",
        help="File to read the input data from (default: stdin).",
        kwargs={"nargs": "?"},
    ),
    OptionalArg(
        short_option="-m",
        long_option="--message",
        help="Prompt message for the AI. Asked for interactively when omitted.",
        kwargs={"metavar": "TEXT"},
    ),
    OptionalArg(
        short_option="-p",
        long_option="--pre-prompt",
        help="Name or path of a pre-defined prompt to put before the message.",
        kwargs={"metavar": "NAME|PATH"},
    ),
    OptionalArg(
        short_option="-o",
        long_option="--output",
        help="File to save the AI response to (default: stdout).",
        kwargs={"metavar": "PATH"},
    ),
    OptionalArg(
        short_option="-c",
        long_option="--config",
        help="Name or path of the configuration file (default: config).",
        kwargs={"metavar": "NAME|PATH"},
    ),
    OptionalArg(
        short_option="-e",
        long_option="--editor",
        help="Compose the prompt in your editor ($VISUAL or $EDITOR).",
        kwargs={"action": "store_true"},
    ),
    OptionalArg(
        short_option="-s",
        long_option="--speak",
        help="Read the response aloud.",
        kwargs={"action": "store_true"},
    ),
    OptionalArg(
        short_option="-n",
        long_option="--no-history",
        help="Do not save this interaction to the local history.",
        kwargs={"action": "store_true"},
    ),
    OptionalArg(
        short_option="-v",
        long_option="--verbose",
        help="Show debug logs and tracebacks.",
        kwargs={"action": "store_true"},
    ),
]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pipe-ai",
        description="Pipe text from a file or stdin into an AI provider and print the reply.",
        epilog='Example: git log | pipe-ai -m "Summarize the git log."',
    )
    for arg in ARGUMENTS:
        arg.add_to_parser(parser)
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def pipe(args: argparse.Namespace, terminal: ControllingTerminal):
    """Runs one request: configuration, input and prompt in, reply out."""
    config = load_configuration(args.config)
    provider = load_provider(config)

    input_data = read_input_data(args.file)

    pre_prompt = load_pre_prompt(args.pre_prompt) if args.pre_prompt else ""
    prompt = compose_prompt(args.editor, args.message or "", pre_prompt, terminal)
    payload = join_payload(pre_prompt, prompt)

    logger.info("Prompt received. Retrieving response...")
    with console.status(f"Waiting for {provider.name}..."):
        reply = provider.respond(config, input_data, payload)

    write_result(reply, args.output)

    if not args.no_history:
        _save_history(reply, config, input_data, pre_prompt, prompt)

    if args.speak:
        speak(reply)


def _save_history(reply: str, config: dict, input_data: str, pre_prompt: str, prompt: str):
    try:
        Brain().save_interaction(reply, config, input_data, pre_prompt, prompt)
    except (OSError, sqlite3.Error, TypeError, ValueError) as e:
        logger.warning("Failed to save the interaction to the history: %s", e)


def run_cli(argv: Optional[List[str]] = None) -> int:
    """
    Parses command-line arguments, runs the request and returns the exit status.

    Args:
        argv: A list of strings representing the command-line arguments.
              If None, `sys.argv[1:]` is used automatically by `parse_args`.
    """
    parser = build_parser()

    # Enable argument auto-completion.
    argcomplete.autocomplete(parser)

    args = parser.parse_args(argv)

    log = setup_logging(args.verbose)
    terminal = controlling_terminal()
    lifecycle = ProcessLifecycle(log, terminal, verbose=args.verbose)
    lifecycle.install_signal_handlers()

    return lifecycle.run(lambda: pipe(args, terminal))


def main():
    """The entry point of the `pipe-ai` script."""
    sys.exit(run_cli())


if __name__ == "__main__":
    main()
