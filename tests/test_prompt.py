from __future__ import annotations

import pytest

from dmg2pkg.prompt import fixed_answer, prompt_yes_no


@pytest.mark.parametrize("answer, expected", [("Y", True), ("y", True), (" y\n", True), ("N", False), ("yes", False), ("", False)])
def test_prompt_yes_no(answer: str, expected: bool) -> None:
    asked = []

    def fake_input(text: str) -> str:
        asked.append(text)
        return answer

    assert prompt_yes_no("Add it?", input_fn=fake_input) is expected
    assert asked == ["Add it? (Y/N): "]


def test_prompt_eof_is_no() -> None:
    def closed(text: str) -> str:
        raise EOFError

    assert prompt_yes_no("Add it?", input_fn=closed) is False


def test_fixed_answer() -> None:
    assert fixed_answer(True)("anything") is True
    assert fixed_answer(False)("anything") is False
