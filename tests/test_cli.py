"""
Tests for boila/cli.py — run() sequencing and main() exit codes.
"""
from __future__ import annotations

import os
import signal
import subprocess
import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from boila import cli
from boila.config import Settings
from boila.output import OutputDispatcher
from boila.prompts import PromptEngine


def _session(*replies, clipboard=None):
    remaining = list(replies)

    def _input(_label: str) -> str:
        if not remaining:
            raise EOFError
        return remaining.pop(0)

    lines: list[str] = []
    output = lambda *a: lines.append(" ".join(map(str, a)))  # noqa: E731
    engine = PromptEngine(input_fn=_input, output=output)
    dispatcher = OutputDispatcher(engine, clipboard_write=clipboard or MagicMock(), output=output)
    return engine, dispatcher, lines


class TestRun:

    @pytest.mark.asyncio
    async def test_finished_flow(self):
        # hasLang=n, metaTags=1, title=Hi, no style, no script, then "I'm finished"
        engine, dispatcher, lines = _session("n", "1", "Hi", "n", "n", "1")
        rendered = await cli.run(Settings(), engine, dispatcher, output=lines.append)

        assert "<title>Hi</title>" in rendered
        assert rendered.count("<meta ") == 1
        assert "<link" not in rendered and "<script" not in rendered
        assert "Your boilerplate:" in lines
        assert rendered in lines
        assert lines[-1] == "Thanks for using boila!"

    @pytest.mark.asyncio
    async def test_copy_flow(self):
        clipboard = MagicMock()
        engine, dispatcher, lines = _session("n", "", "", "n", "n", "2", clipboard=clipboard)
        rendered = await cli.run(Settings(), engine, dispatcher, output=lines.append)
        clipboard.assert_called_once_with(rendered)
        assert lines[-2:] == ["Successfully copied boilerplate to clipboard!", "Thanks for using boila!"]

    @pytest.mark.asyncio
    async def test_save_flow_into_directory(self, tmp_path):
        engine, dispatcher, lines = _session("n", "", "", "n", "n", "3", str(tmp_path), "")
        rendered = await cli.run(Settings(), engine, dispatcher, output=lines.append)
        assert (tmp_path / "index.html").read_text(encoding="utf-8") == rendered

    @pytest.mark.asyncio
    async def test_declined_overwrite_still_says_thanks(self, tmp_path):
        target = tmp_path / "index.html"
        target.write_text("keep me", encoding="utf-8")
        engine, dispatcher, lines = _session("n", "", "", "n", "n", "3", str(target), "n")
        await cli.run(Settings(), engine, dispatcher, output=lines.append)
        assert target.read_text(encoding="utf-8") == "keep me"
        assert not any(line.startswith("Successfully saved") for line in lines)
        assert lines[-1] == "Thanks for using boila!"

    @pytest.mark.asyncio
    async def test_custom_template_and_name(self, tmp_path):
        template = tmp_path / "t.j2"
        template.write_text("{{ packageName }}|{{ title }}", encoding="utf-8")
        engine, dispatcher, lines = _session("n", "", "X", "n", "n", "1")
        settings = Settings(package_name="other", template_path=str(template))
        assert await cli.run(settings, engine, dispatcher, output=lines.append) == "other|X"
        assert lines[-1] == "Thanks for using other!"


class TestMain:

    @pytest.fixture(autouse=True)
    def _no_process_setup(self, monkeypatch):
        """Keep main() away from any .env on disk and from pytest's log handlers."""
        monkeypatch.setattr(cli, "load_dotenv", lambda **kwargs: False)
        monkeypatch.setattr(cli, "setup_logging", lambda verbose=False: None)

    def test_success_exits_normally(self, monkeypatch):
        async def _ok(settings):
            return ""

        monkeypatch.setattr(cli, "run", _ok)
        cli.main()

    def test_failure_exits_1_and_reports(self, monkeypatch, capsys):
        async def _boom(settings):
            raise PermissionError("denied")

        monkeypatch.setattr(cli, "run", _boom)
        with pytest.raises(SystemExit) as exc_info:
            cli.main()
        assert exc_info.value.code == 1
        assert "denied" in capsys.readouterr().err

    def test_closed_stdin_exits_1(self, monkeypatch):
        monkeypatch.setattr("builtins.input", MagicMock(side_effect=EOFError))
        with pytest.raises(SystemExit) as exc_info:
            cli.main()
        assert exc_info.value.code == 1

    def test_verbose_from_env(self, monkeypatch):
        seen = {}

        async def _capture(settings):
            seen["settings"] = settings

        monkeypatch.setenv("BOILA_VERBOSE", "yes")
        monkeypatch.setattr(cli, "run", _capture)
        monkeypatch.setattr(cli, "setup_logging", lambda verbose: seen.setdefault("verbose", verbose))
        cli.main()
        assert seen["verbose"] is True
        assert seen["settings"].verbose is True


# ─────────────────────────────────────────────────────────────────────────────
# Ctrl-C at a prompt (real process)
# ─────────────────────────────────────────────────────────────────────────────

REPO_ROOT = Path(__file__).resolve().parents[1]


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX signals")
def test_ctrl_c_at_prompt_exits_1(tmp_path):
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(REPO_ROOT), env.get("PYTHONPATH")]))
    env.pop("BOILA_VERBOSE", None)
    proc = subprocess.Popen(
        [sys.executable, "-m", "boila"],
        cwd=tmp_path,
        env=env,
        stdin=subprocess.PIPE,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
    )
    try:
        # input() writes and flushes the label before it blocks on stdin
        first_prompt = b"? Include language?"
        assert proc.stdout.read(len(first_prompt)) == first_prompt
        proc.send_signal(signal.SIGINT)
        _out, err = proc.communicate(timeout=10)
    finally:
        if proc.poll() is None:
            proc.kill()
            proc.wait()
    assert proc.returncode == 1
    assert b"KeyboardInterrupt" in err
