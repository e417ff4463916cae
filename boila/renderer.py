"""
Template Renderer
=================
Compiles the boilerplate template with Jinja2 and returns a pure render
function ``(context) -> str``.

The ``should_show_script_tag`` helper is registered on the environment built
here, not on any shared/global Jinja state. The template calls it at each of
the three candidate script positions (end of <head>, start of <body>,
end of <body>) so exactly one of them emits the tag.
"""
from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any, Callable, Mapping, Optional, Union

from jinja2 import Environment

from .config import PACKAGE_NAME

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE = Path(__file__).parent / "templates" / "boilerplate.html.j2"

RenderFn = Callable[[Mapping[str, Any]], str]


def should_show_script_tag(enabled: Any, location: Any, this_location: int) -> bool:
    return bool(enabled) and location == this_location


def build_environment() -> Environment:
    # autoescape stays off: meta tags and script attributes are raw markup
    env = Environment(
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )
    env.globals["should_show_script_tag"] = should_show_script_tag
    return env


def compile_template(source: str, env: Optional[Environment] = None) -> RenderFn:
    template = (env or build_environment()).from_string(source)

    def render(context: Mapping[str, Any]) -> str:
        return template.render(**context)

    return render


async def load_template(path: Union[str, Path, None] = None) -> RenderFn:
    """Read and compile the template at ``path`` (packaged template by default)."""
    template_path = Path(path) if path else DEFAULT_TEMPLATE
    source = await asyncio.to_thread(template_path.read_text, encoding="utf-8")
    logger.debug("Loaded template %s (%d chars)", template_path, len(source))
    return compile_template(source)


def build_context(answers: Mapping[str, Any], package_name: str = PACKAGE_NAME) -> dict[str, Any]:
    return {**answers, "packageName": package_name}
