"""
Runtime settings
================
The tool name is a fixed constant injected into the render context.
Everything else comes from the environment (a local .env is loaded first
by cli.main):

    BOILA_TEMPLATE   path to an alternative boilerplate template
    BOILA_LOCALE     override for the default document language (read when the
                     "lang" question is asked, see questions.get_locale)
    BOILA_VERBOSE    1/true/yes/on enables DEBUG logging
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

PACKAGE_NAME = "boila"

_TRUTHY = ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    """Settings for one run. Built once in cli.main, never mutated."""
    package_name: str = PACKAGE_NAME
    template_path: Optional[str] = None
    verbose: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        return cls(
            template_path=env.get("BOILA_TEMPLATE") or None,
            verbose=env.get("BOILA_VERBOSE", "").strip().lower() in _TRUTHY,
        )
