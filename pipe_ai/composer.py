import logging

from enum import Enum

from .acquisition import literal_message, prompt_from_editor, prompt_from_terminal
from .errors import EmptyPayloadError
from .terminal import ControllingTerminal

logger = logging.getLogger(__name__)


class PromptStrategy(Enum):
    EDITOR = "editor"
    MESSAGE = "message"
    INTERACTIVE = "interactive"
    PRE_PROMPT_ONLY = "pre-prompt only"


def select_strategy(use_editor: bool, message: str, pre_prompt: str) -> PromptStrategy:
    """
    Picks how the prompt is obtained. The first matching rule wins: the editor when
    asked for, then the literal message, then an interactive read when there is
    nothing else to go on. A pre-prompt on its own is a complete payload.
    """
    if use_editor:
        return PromptStrategy.EDITOR
    if message:
        return PromptStrategy.MESSAGE
    if not pre_prompt:
        return PromptStrategy.INTERACTIVE
    return PromptStrategy.PRE_PROMPT_ONLY


def compose_prompt(
    use_editor: bool, message: str, pre_prompt: str, terminal: ControllingTerminal
) -> str:
    strategy = select_strategy(use_editor, message, pre_prompt)
    logger.debug("Prompt strategy: %s", strategy.value)

    if strategy is PromptStrategy.MESSAGE:
        return literal_message(message)
    if strategy is PromptStrategy.PRE_PROMPT_ONLY:
        return ""

    # Both remaining strategies block on the user's keyboard.
    with terminal.held():
        if strategy is PromptStrategy.EDITOR:
            return prompt_from_editor(terminal)
        return prompt_from_terminal(terminal)


def join_payload(pre_prompt: str, prompt: str) -> str:
    """Joins the pre-prompt and the prompt with a newline, skipping empty parts."""
    payload = "\n".join(part for part in (pre_prompt, prompt) if part)
    if not payload:
        raise EmptyPayloadError()
    return payload
