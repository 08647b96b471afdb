"""
Interactive confirmation.

The link driver takes a ``confirm(prompt) -> bool`` collaborator; this module
provides the console implementation. Anything other than an explicit yes is
a no.
"""

from __future__ import annotations

from typing import Callable

from rich.console import Console

Confirm = Callable[[str], bool]

AFFIRMATIVE_ANSWERS = frozenset({"y", "yes"})


def is_affirmative(answer: str | None) -> bool:
    """True for ``y`` or ``yes`` in any case; False for anything else."""
    if answer is None:
        return False
    return answer.strip().lower() in AFFIRMATIVE_ANSWERS


def console_confirm(prompt: str, console: Console | None = None) -> bool:
    """
    Ask a yes/no question on the terminal and block for one line of input.

    End of input or a failing terminal counts as a decline.
    """
    console = console or Console(highlight=False)
    try:
        answer = console.input(f"{prompt} [y/N] ", markup=False)
    except (EOFError, OSError, KeyboardInterrupt):
        console.print()
        return False
    return is_affirmative(answer)
