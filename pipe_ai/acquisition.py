"""
The ways of getting the user's prompt: a literal message, an editor session and an
interactive read from the terminal. Pre-prompt files are loaded by
`pipe_ai.config.load_pre_prompt`.
"""

import logging
import os
import shlex
import subprocess
import sys
import tempfile

from .errors import EditorExitError, EditorLaunchError, EmptyPromptError
from .terminal import ControllingTerminal

logger = logging.getLogger(__name__)

PROMPT_FILE_PREFIX = "pipe-ai-prompt-"

EDITOR_TEMPLATE = """
# Please enter your prompt below. Lines starting with '#' will be ignored.
# -------------------------------------------------------------
# Example:
# Summarize the following git log to highlight major changes.
#
"""


def literal_message(message: str) -> str:
    return message


def default_editor() -> str:
    """$VISUAL, then $EDITOR, then the platform's stock editor."""
    editor = os.environ.get("VISUAL") or os.environ.get("EDITOR")
    if editor:
        return editor
    return "notepad" if sys.platform == "win32" else "vi"


def strip_comments(text: str) -> str:
    """Drops every line whose first non-blank character is '#' and trims the rest."""
    kept = [line for line in text.splitlines() if not line.lstrip().startswith("#")]
    return "\n".join(kept).strip()


def prompt_from_editor(terminal: ControllingTerminal, editor: str = "") -> str:
    """
    Lets the user compose the prompt in their editor.

    The editor runs on the controlling terminal so it works even when stdin and
    stdout are pipes. The temporary file is removed whatever happens.
    """
    editor = editor or default_editor()
    path = _create_prompt_file()
    try:
        _run_editor(editor, path, terminal)
        with open(path, "r", encoding="utf-8") as f:
            content = f.read()
    finally:
        _delete_prompt_file(path)

    prompt = strip_comments(content)
    if not prompt:
        raise EmptyPromptError("No input found in the editor.")
    return prompt


def _create_prompt_file() -> str:
    fd, path = tempfile.mkstemp(prefix=PROMPT_FILE_PREFIX, suffix=".txt")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(EDITOR_TEMPLATE)
    except OSError:
        _delete_prompt_file(path)
        raise
    logger.debug("Temporary file created at: %s", path)
    return path


def _delete_prompt_file(path: str) -> None:
    try:
        os.remove(path)
    except OSError as e:
        logger.warning("Failed to delete temporary file '%s': %s", path, e)


def _run_editor(editor: str, path: str, terminal: ControllingTerminal) -> None:
    command = shlex.split(editor, posix=sys.platform != "win32") + [path]
    logger.debug("Opening editor: %s", editor)

    with terminal.open_for_read() as tty_in, terminal.open_for_write() as tty_out:
        try:
            result = subprocess.run(command, stdin=tty_in, stdout=tty_out, stderr=tty_out)
        except OSError as e:
            raise EditorLaunchError(f"Failed to launch editor '{editor}': {e}") from e

    if result.returncode != 0:
        raise EditorExitError(editor, result.returncode)


def prompt_from_terminal(terminal: ControllingTerminal) -> str:
    """
    Reads a multi-line prompt from the controlling terminal until end-of-file.

    Typing is not echoed. The lines are read from the terminal device, never from
    stdin, which may already have been consumed as input data.
    """
    with terminal.open_for_read() as tty_in:
        with terminal.open_for_write() as tty_out:
            tty_out.write(f"Enter your prompt (press {terminal.eof_key} on a new line to submit):\n> ")
            tty_out.flush()

        terminal.disable_echo(tty_in)
        lines = [line.rstrip("\r\n") for line in tty_in]

    prompt = "\n".join(lines)
    if not prompt.strip():
        raise EmptyPromptError("Prompt cannot be empty. Please provide a prompt using the -m option.")
    return prompt
