#!/usr/bin/env python3
"""
CLI Entry Point — interactive HTML boilerplate generator
========================================================
Usage:
    boila
    python -m boila

No flags: everything is asked interactively. The run is one linear script:
load template -> ask questions -> render -> print -> ask follow-up -> dispatch.
Any failure aborts the run, prints the error to stderr and exits with status 1.
"""
from __future__ import annotations

import asyncio
import logging
import sys
from typing import Callable, Optional

from dotenv import load_dotenv

from .config import Settings
from .output import OutputDispatcher
from .prompts import PromptEngine
from .questions import FOLLOW_UP_QUESTIONS, QUESTIONS
from .renderer import build_context, load_template

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False):
    # WARNING by default so log lines never interleave with the prompts
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
        force=True,
    )


async def run(
    settings: Settings,
    engine: Optional[PromptEngine] = None,
    dispatcher: Optional[OutputDispatcher] = None,
    output: Callable[..., None] = print,
) -> str:
    """Run one interactive session and return the rendered boilerplate."""
    engine = engine or PromptEngine(output=output)
    dispatcher = dispatcher or OutputDispatcher(engine, output=output)

    render = await load_template(settings.template_path)

    answers = await engine.prompt(QUESTIONS)
    rendered = render(build_context(answers, settings.package_name))

    output("\n")
    output("Your boilerplate:")
    output("\n")
    output(rendered)
    output("\n")

    follow_up = await engine.prompt(FOLLOW_UP_QUESTIONS)
    await dispatcher.dispatch(rendered, follow_up)

    output(f"Thanks for using {settings.package_name}!")
    return rendered


def main() -> None:
    load_dotenv(override=True)  # .env values win over empty system env vars
    settings = Settings.from_env()
    setup_logging(settings.verbose)
    # Explicit loop instead of asyncio.run: its SIGINT handler only cancels
    # the task, which can't interrupt a prompt blocked in input().
    loop = asyncio.new_event_loop()
    try:
        loop.run_until_complete(run(settings))
    except (Exception, KeyboardInterrupt) as exc:
        logger.debug("Run aborted", exc_info=True)
        print(f"ERROR: {exc!r}", file=sys.stderr)
        sys.exit(1)
    finally:
        loop.close()


if __name__ == "__main__":
    main()
