from __future__ import annotations

from typing import Callable

Confirm = Callable[[str], bool]


def prompt_yes_no(question: str, *, input_fn: Callable[[str], str] = input) -> bool:
    """Ask on stdin; only ``Y``/``y`` counts as yes. Blocks until answered."""

    try:
        answer = input_fn(f"{question} (Y/N): ")
    except EOFError:
        return False
    return answer.strip().lower() == "y"


def fixed_answer(value: bool) -> Confirm:
    def _confirm(question: str) -> bool:
        return value

    return _confirm
