"""
boila
=====
Interactive HTML boilerplate generator.

Asks about the document (language, meta tags, title, stylesheet, script),
renders the answers through a Jinja2 template, prints the result and then
offers to copy it to the clipboard or save it to disk.

    $ boila
    $ python -m boila
"""

from .config import PACKAGE_NAME, Settings
from .questions import (
    FOLLOW_UP_QUESTIONS, QUESTIONS, Choice, NextAction, Question,
    QuestionKind, ScriptLocation, needs_file_name,
)
from .prompts import PromptEngine
from .renderer import build_context, compile_template, load_template
from .output import OutputDispatcher

__version__ = "1.0.0"

__all__ = [
    "PACKAGE_NAME", "Settings",
    "QUESTIONS", "FOLLOW_UP_QUESTIONS", "Choice", "Question", "QuestionKind",
    "NextAction", "ScriptLocation", "needs_file_name",
    "PromptEngine", "OutputDispatcher",
    "build_context", "compile_template", "load_template",
]
