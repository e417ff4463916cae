"""
Prompt Engine
=============
Asks a list of Question records on the terminal and returns a flat answer map.

Questions whose ``when`` predicate is false are skipped and leave no key in
the map. Invalid answers re-ask the same question; end of input and Ctrl-C
propagate to the caller.

Usage:
    engine = PromptEngine()
    answers = await engine.prompt(QUESTIONS)

Tests pass a scripted ``input_fn`` instead of the builtin ``input``.
"""
from __future__ import annotations

import logging
import re
from typing import Any, Callable, Iterable, Optional

from .questions import AnswerMap, Choice, Question, QuestionKind

logger = logging.getLogger(__name__)

_YES = ("y", "yes")
_NO = ("n", "no")
_SPLIT = re.compile(r"[\s,]+")


class InvalidAnswer(ValueError):
    """Raised by the parsers when typed text doesn't fit the question."""


class PromptEngine:

    def __init__(
        self,
        input_fn: Optional[Callable[[str], str]] = None,
        output: Optional[Callable[..., None]] = None,
    ) -> None:
        self._input_fn = input_fn or input
        self._output = output or print

    async def prompt(
        self,
        questions: Iterable[Question],
        answers: Optional[AnswerMap] = None,
    ) -> AnswerMap:
        """
        Ask every visible question in order.

        ``answers`` seeds the map predicates see; the returned map holds only
        the answers collected in this pass.
        """
        seen: AnswerMap = dict(answers or {})
        collected: AnswerMap = {}
        for question in questions:
            if not question.is_visible(seen):
                logger.debug("Skipping %s", question.name)
                continue
            value = await self.ask(question, seen)
            seen[question.name] = value
            collected[question.name] = value
        return collected

    async def ask(self, question: Question, answers: AnswerMap) -> Any:
        default = question.resolve_default()
        choices = question.resolve_choices(answers)
        if choices:
            self._print_choices(question, choices)
        label = self._label(question, default, choices)
        while True:
            # called on the loop thread so Ctrl-C interrupts the read directly
            raw = self._input_fn(label)
            try:
                value = self._parse(question, raw.strip(), default, choices)
            except InvalidAnswer as exc:
                logger.debug("Invalid answer for %s: %r", question.name, raw)
                self._output(f"  {exc}")
                continue
            logger.debug("Answered %s", question.name)
            return value

    # ── Rendering ────────────────────────────────────────────────────────────

    def _print_choices(self, question: Question, choices: list[Choice]) -> None:
        self._output(f"? {question.message}")
        for i, choice in enumerate(choices, start=1):
            if question.kind is QuestionKind.CHECKBOX:
                mark = "[x]" if choice.checked else "[ ]"
                self._output(f"  {i}) {mark} {choice.name}")
            else:
                self._output(f"  {i}) {choice.name}")

    @staticmethod
    def _label(question: Question, default: Any, choices: list[Choice]) -> str:
        kind = question.kind
        if kind is QuestionKind.CONFIRM:
            hint = "Y/n" if default is not False else "y/N"
            return f"? {question.message} ({hint}) "
        if kind is QuestionKind.INPUT:
            suffix = f" ({default})" if default not in (None, "") else ""
            return f"? {question.message}{suffix} "
        if kind is QuestionKind.LIST:
            return f"  Answer [1-{len(choices)}]: "
        return "  Numbers to select, Enter keeps [x], 'none' clears: "

    # ── Parsing ──────────────────────────────────────────────────────────────

    def _parse(
        self, question: Question, text: str, default: Any, choices: list[Choice]
    ) -> Any:
        kind = question.kind
        if kind is QuestionKind.CONFIRM:
            return _parse_confirm(text, default)
        if kind is QuestionKind.INPUT:
            if text == "":
                return "" if default is None else default
            return text
        if kind is QuestionKind.LIST:
            return _parse_list(text, default, choices)
        return _parse_checkbox(text, choices)


def _parse_confirm(text: str, default: Any) -> bool:
    if text == "":
        return default is not False
    lowered = text.lower()
    if lowered in _YES:
        return True
    if lowered in _NO:
        return False
    raise InvalidAnswer("Please answer y or n.")


def _pick(text: str, choices: list[Choice]) -> int:
    """1-based number typed by the user -> 0-based index into choices."""
    try:
        idx = int(text) - 1
    except ValueError:
        raise InvalidAnswer(f"Please enter a number between 1 and {len(choices)}.") from None
    if not 0 <= idx < len(choices):
        raise InvalidAnswer(f"Please enter a number between 1 and {len(choices)}.")
    return idx


def _parse_list(text: str, default: Any, choices: list[Choice]) -> Any:
    if text == "":
        if default is not None:
            return default
        return choices[0].value
    return choices[_pick(text, choices)].value


def _parse_checkbox(text: str, choices: list[Choice]) -> list[Any]:
    if text == "":
        return [c.value for c in choices if c.checked]
    if text.lower() == "none":
        return []
    picked = {_pick(token, choices) for token in _SPLIT.split(text) if token}
    # selection order follows the choice list, not the typed order
    return [c.value for i, c in enumerate(choices) if i in picked]
