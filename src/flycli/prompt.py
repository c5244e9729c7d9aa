"""Interactive prompts for Fly CLI."""

from __future__ import annotations

import questionary
from questionary import Choice

from .errors import PromptError, SelectionCancelledError
from .logging import get_logger

logger = get_logger(__name__)


def select_one(message: str, options: list[str]) -> int:
    """Ask the user to pick exactly one option.

    Blocks until the user answers.

    Args:
        message: The question to show.
        options: Option labels, shown in the given order.

    Returns:
        Index of the selected option.

    Raises:
        SelectionCancelledError: If the user cancelled the prompt (Ctrl-C).
        PromptError: If the prompt could not be shown.
    """
    if not options:
        raise PromptError(f"Nothing to choose from for {message!r}")

    choices = [Choice(title=label, value=index) for index, label in enumerate(options)]

    try:
        answer = questionary.select(message, choices=choices).unsafe_ask()
    except KeyboardInterrupt:
        raise SelectionCancelledError() from None
    except Exception as e:
        raise PromptError(f"Prompt failed: {e}") from e

    if answer is None:
        raise SelectionCancelledError()

    logger.debug(f"Selected option {answer}: {options[answer]}")
    return answer


def confirm(message: str, default: bool = False) -> bool:
    """Ask a yes/no question.

    Raises:
        SelectionCancelledError: If the user cancelled the prompt (Ctrl-C).
        PromptError: If the prompt could not be shown.
    """
    try:
        answer = questionary.confirm(message, default=default).unsafe_ask()
    except KeyboardInterrupt:
        raise SelectionCancelledError() from None
    except Exception as e:
        raise PromptError(f"Prompt failed: {e}") from e

    if answer is None:
        raise SelectionCancelledError()
    return answer
