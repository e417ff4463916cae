"""
Output Dispatcher
=================
Runs the follow-up action the user picked for the rendered boilerplate:

    0  finished   nothing to do
    1  copy       write to the system clipboard (pyperclip)
    2  save       write to disk, asking before overwriting an existing file

Write and clipboard failures are not caught here; cli.main reports them.
"""
from __future__ import annotations

import asyncio
import logging
from pathlib import Path, PurePath
from typing import Any, Callable, Optional

import pyperclip

from .prompts import PromptEngine
from .questions import OVERWRITE_QUESTION, AnswerMap, NextAction

logger = logging.getLogger(__name__)


def resolve_target(answers: AnswerMap) -> Path:
    """``path/filename`` when a file name was asked for, else ``path`` as given."""
    filename = answers.get("filename")
    if filename is not None:
        # an absolute file name still lands under path, not at the root
        name = PurePath(filename)
        parts = name.parts[1:] if name.anchor else name.parts
        return Path(answers["path"], *parts)
    return Path(answers["path"])


class OutputDispatcher:

    def __init__(
        self,
        engine: PromptEngine,
        clipboard_write: Callable[[str], Any] = pyperclip.copy,
        output: Callable[..., None] = print,
    ) -> None:
        self._engine = engine
        self._clipboard_write = clipboard_write
        self._output = output

    async def dispatch(self, rendered: str, answers: AnswerMap) -> None:
        action = NextAction(answers["nextAction"])
        logger.debug("Next action: %s", action.name)
        if action is NextAction.COPY:
            await self.copy_to_clipboard(rendered)
        elif action is NextAction.SAVE:
            await self.save_to_disk(rendered, answers)

    async def copy_to_clipboard(self, rendered: str) -> None:
        await asyncio.to_thread(self._clipboard_write, rendered)
        self._output("Successfully copied boilerplate to clipboard!")

    async def save_to_disk(self, rendered: str, answers: AnswerMap) -> Optional[Path]:
        """
        Write ``rendered`` to the resolved target.

        Returns the path written, or None when the user declined to overwrite
        an existing file (nothing is written or printed in that case).
        """
        target = resolve_target(answers)
        if await asyncio.to_thread(target.exists):
            reply = await self._engine.prompt([OVERWRITE_QUESTION])
            if not reply[OVERWRITE_QUESTION.name]:
                logger.debug("Overwrite of %s declined", target)
                return None

        logger.debug("Writing %d chars to %s", len(rendered), target)
        await asyncio.to_thread(target.write_text, rendered, encoding="utf-8")
        self._output(f'Successfully saved boilerplate to "{target}"')
        return target
