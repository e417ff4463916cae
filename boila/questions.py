"""
Question set
============
Static, ordered question lists for the two prompt passes.

Order matters: a question's ``when`` predicate and computed choices may only
read answers to questions that come before it in the same list.
"""
from __future__ import annotations

import locale
import logging
import os
from dataclasses import dataclass
from enum import Enum, IntEnum
from pathlib import PurePath
from typing import Any, Callable, Optional, Sequence, Union

logger = logging.getLogger(__name__)

AnswerMap = dict[str, Any]


class QuestionKind(str, Enum):
    CONFIRM = "confirm"
    INPUT = "input"
    LIST = "list"
    CHECKBOX = "checkbox"


class ScriptLocation(IntEnum):
    HEAD = 0
    BODY_START = 1
    BODY_END = 2


class NextAction(IntEnum):
    FINISHED = 0
    COPY = 1
    SAVE = 2


_UNSET = object()


@dataclass(frozen=True)
class Choice:
    """One option of a list or checkbox question. ``value`` defaults to ``name``."""
    name: str
    value: Any = _UNSET
    checked: bool = False

    def __post_init__(self) -> None:
        if self.value is _UNSET:
            object.__setattr__(self, "value", self.name)


ChoiceSource = Union[Sequence[Choice], Callable[[AnswerMap], Sequence[Choice]]]


@dataclass(frozen=True)
class Question:
    name: str
    kind: QuestionKind
    message: str
    default: Any = None
    choices: ChoiceSource = ()
    when: Optional[Callable[[AnswerMap], bool]] = None

    def is_visible(self, answers: AnswerMap) -> bool:
        return self.when is None or bool(self.when(answers))

    def resolve_default(self) -> Any:
        return self.default() if callable(self.default) else self.default

    def resolve_choices(self, answers: AnswerMap) -> list[Choice]:
        if callable(self.choices):
            return list(self.choices(answers))
        return list(self.choices)


# ── Helpers ──────────────────────────────────────────────────────────────────

def get_locale() -> str:
    """
    Default document language.

    BOILA_LOCALE wins when set. Otherwise the process locale is turned into a
    language tag (``en_US.UTF-8`` -> ``en-US``); "en" when it can't be resolved.
    """
    override = os.environ.get("BOILA_LOCALE", "").strip()
    if override:
        return override
    try:
        lang, _encoding = locale.getlocale()
    except ValueError:
        logger.debug("Unrecognised process locale; falling back to 'en'")
        return "en"
    if not lang or lang in ("C", "POSIX"):
        return "en"
    return lang.replace("_", "-")


def needs_file_name(path: str) -> bool:
    """True when the last path component has no name or no extension."""
    # splitext keeps a bare trailing dot as the extension ("page." -> ".")
    stem, ext = os.path.splitext(PurePath(path).name)
    return any(part.strip() == "" for part in (stem, ext))


def script_attr_choices(answers: AnswerMap) -> list[Choice]:
    src = str(answers.get("scriptTagSrc", "")).strip()
    location = answers.get("scriptTagLocation")
    return [
        Choice('type="module"', checked=src.lower().endswith(".mjs")),
        Choice("async", checked=False),
        Choice("defer", checked=location in (ScriptLocation.HEAD, ScriptLocation.BODY_START)),
    ]


def _has(key: str) -> Callable[[AnswerMap], bool]:
    return lambda answers: bool(answers.get(key))


def _saving(answers: AnswerMap) -> bool:
    return answers.get("nextAction") == NextAction.SAVE


# ── Primary questions ────────────────────────────────────────────────────────

META_TAG_CHARSET = '<meta charset="UTF-8">'
META_TAG_VIEWPORT = '<meta name="viewport" content="width=device-width, initial-scale=1.0">'
META_TAG_IE_COMPAT = '<meta http-equiv="X-UA-Compatible" content="ie=edge">'

QUESTIONS: tuple[Question, ...] = (
    Question("hasLang", QuestionKind.CONFIRM, "Include language?", default=True),
    Question(
        "lang", QuestionKind.INPUT, "Document language:",
        default=get_locale, when=_has("hasLang"),
    ),
    Question(
        "metaTags", QuestionKind.CHECKBOX, "Include meta tags:",
        choices=(
            Choice(META_TAG_CHARSET, checked=True),
            Choice(META_TAG_VIEWPORT, checked=True),
            Choice(META_TAG_IE_COMPAT, checked=False),
        ),
    ),
    Question("title", QuestionKind.INPUT, "Document title:", default="Untitled"),
    Question("hasStyleTag", QuestionKind.CONFIRM, "Include a stylesheet?", default=False),
    Question(
        "styleTagHref", QuestionKind.INPUT, "Stylesheet path:",
        default="/dist/main.css", when=_has("hasStyleTag"),
    ),
    Question("hasScriptTag", QuestionKind.CONFIRM, "Include a script?", default=False),
    Question(
        "scriptTagLocation", QuestionKind.LIST, "Script location:",
        choices=(
            Choice("In the <head>", ScriptLocation.HEAD),
            Choice("At the start of <body>", ScriptLocation.BODY_START),
            Choice("At the end of <body>", ScriptLocation.BODY_END),
        ),
        when=_has("hasScriptTag"),
    ),
    Question(
        "scriptTagSrc", QuestionKind.INPUT, "Script path:",
        default="/dist/main.js", when=_has("hasScriptTag"),
    ),
    Question(
        "scriptTagAttrs", QuestionKind.CHECKBOX, "Script attributes:",
        choices=script_attr_choices, when=_has("hasScriptTag"),
    ),
)


# ── Follow-up questions ──────────────────────────────────────────────────────

FOLLOW_UP_QUESTIONS: tuple[Question, ...] = (
    Question(
        "nextAction", QuestionKind.LIST, "What would you like to do next?",
        choices=(
            Choice("I'm finished", NextAction.FINISHED),
            Choice("Copy to the clipboard", NextAction.COPY),
            Choice("Save to disk", NextAction.SAVE),
        ),
    ),
    Question(
        "path", QuestionKind.INPUT, "Output path:",
        default=os.getcwd, when=_saving,
    ),
    Question(
        "filename", QuestionKind.INPUT, "File name:",
        default="index.html",
        when=lambda answers: _saving(answers) and needs_file_name(answers["path"]),
    ),
)

OVERWRITE_QUESTION = Question(
    "overwriteFile", QuestionKind.CONFIRM, "File already exists. Overwrite?", default=True,
)
