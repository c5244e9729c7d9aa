"""Tests for the interactive prompts."""

from __future__ import annotations

from typing import Any

import pytest

from flycli import prompt
from flycli.errors import PromptError, SelectionCancelledError


class StubQuestion:
    """Stands in for a questionary question; answers or raises on unsafe_ask()."""

    def __init__(self, answer: Any = None, error: BaseException | None = None) -> None:
        self.answer = answer
        self.error = error

    def unsafe_ask(self) -> Any:
        if self.error is not None:
            raise self.error
        return self.answer


class Questions:
    """Replaces questionary.select/confirm, recording each call."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, tuple, dict]] = []
        self.question = StubQuestion()

    def answer_with(self, **kwargs: Any) -> None:
        self.question = StubQuestion(**kwargs)

    def factory(self, kind: str):
        def make(*args: Any, **kwargs: Any) -> StubQuestion:
            self.calls.append((kind, args, kwargs))
            return self.question

        return make


@pytest.fixture
def asked(monkeypatch: pytest.MonkeyPatch) -> Questions:
    questions = Questions()
    monkeypatch.setattr(prompt.questionary, "select", questions.factory("select"))
    monkeypatch.setattr(prompt.questionary, "confirm", questions.factory("confirm"))
    return questions


class TestSelectOne:
    """Tests for select_one()."""

    def test_returns_chosen_index(self, asked: Questions) -> None:
        """Test that the chosen option's index is returned."""
        asked.answer_with(answer=1)

        assert prompt.select_one("Pick:", ["a", "b", "c"]) == 1

        kind, args, kwargs = asked.calls[0]
        assert kind == "select"
        assert args == ("Pick:",)
        assert [choice.title for choice in kwargs["choices"]] == ["a", "b", "c"]
        assert [choice.value for choice in kwargs["choices"]] == [0, 1, 2]

    def test_no_answer_is_cancellation(self, asked: Questions) -> None:
        """Test that an empty answer counts as cancelled."""
        asked.answer_with(answer=None)

        with pytest.raises(SelectionCancelledError):
            prompt.select_one("Pick:", ["a"])

    def test_interrupt_is_cancellation(self, asked: Questions) -> None:
        """Test that Ctrl-C counts as cancelled."""
        asked.answer_with(error=KeyboardInterrupt())

        with pytest.raises(SelectionCancelledError):
            prompt.select_one("Pick:", ["a"])

    @pytest.mark.parametrize("error", [RuntimeError("no terminal"), OSError("bad fd"), EOFError()])
    def test_prompt_failure(self, asked: Questions, error: Exception) -> None:
        """Test that any other failure becomes PromptError chained to the cause."""
        asked.answer_with(error=error)

        with pytest.raises(PromptError) as exc_info:
            prompt.select_one("Pick:", ["a"])

        assert exc_info.value.__cause__ is error

    def test_empty_options(self, asked: Questions) -> None:
        """Test that there is nothing to prompt for without options."""
        with pytest.raises(PromptError):
            prompt.select_one("Pick:", [])

        assert asked.calls == []


class TestConfirm:
    """Tests for confirm()."""

    @pytest.mark.parametrize("answer", [True, False])
    def test_returns_answer(self, asked: Questions, answer: bool) -> None:
        """Test that the answer is returned as given."""
        asked.answer_with(answer=answer)

        assert prompt.confirm("Sure?") is answer

        kind, args, kwargs = asked.calls[0]
        assert kind == "confirm"
        assert args == ("Sure?",)
        assert kwargs["default"] is False

    def test_no_answer_is_cancellation(self, asked: Questions) -> None:
        """Test that an empty answer counts as cancelled."""
        asked.answer_with(answer=None)

        with pytest.raises(SelectionCancelledError):
            prompt.confirm("Sure?")

    def test_interrupt_is_cancellation(self, asked: Questions) -> None:
        """Test that Ctrl-C counts as cancelled."""
        asked.answer_with(error=KeyboardInterrupt())

        with pytest.raises(SelectionCancelledError):
            prompt.confirm("Sure?")

    def test_prompt_failure(self, asked: Questions) -> None:
        """Test that any other failure becomes PromptError."""
        asked.answer_with(error=RuntimeError("no terminal"))

        with pytest.raises(PromptError):
            prompt.confirm("Sure?")
