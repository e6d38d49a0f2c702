"""Tests for the interactive release questions."""

from __future__ import annotations

import io
from unittest.mock import patch

import pytest
from rich.console import Console

from release_helper.cli.prompt import ReleaseAnswers, ask_version, run_prompt
from release_helper.core.version import Version


@pytest.fixture
def console() -> Console:
    return Console(file=io.StringIO(), width=120)


class TestAskVersion:
    @pytest.mark.parametrize(
        ("answer", "expected"),
        [("patch", "1.2.4"), ("minor", "1.3.0"), ("major", "2.0.0")],
    )
    def test_choice_maps_to_bump(self, console: Console, answer: str, expected: str):
        with patch("release_helper.cli.prompt.Prompt.ask", return_value=answer) as ask:
            assert str(ask_version(Version(1, 2, 3), console)) == expected

        assert ask.call_args.kwargs["choices"] == ["patch", "minor", "major"]

    def test_shows_candidates(self, console: Console):
        with patch("release_helper.cli.prompt.Prompt.ask", return_value="patch"):
            ask_version(Version(1, 2, 3), console)

        shown = console.file.getvalue()
        assert "(1.2.4)" in shown
        assert "(1.3.0)" in shown
        assert "(2.0.0)" in shown


class TestRunPrompt:
    def test_asks_everything(self, console: Console):
        with (
            patch("release_helper.cli.prompt.Prompt.ask", return_value="minor"),
            patch("release_helper.cli.prompt.Confirm.ask", side_effect=[False, True]),
        ):
            answers = run_prompt(Version(1, 0, 0), console)

        assert answers == ReleaseAnswers(version=Version(1, 1, 0), verbose=False, dry_run=True)

    def test_given_answers_skip_questions(self, console: Console):
        with (
            patch("release_helper.cli.prompt.Prompt.ask") as prompt_ask,
            patch("release_helper.cli.prompt.Confirm.ask") as confirm_ask,
        ):
            answers = run_prompt(
                Version(1, 0, 0),
                console,
                version=Version(3, 0, 0),
                verbose=True,
                dry_run=False,
            )

        prompt_ask.assert_not_called()
        confirm_ask.assert_not_called()
        assert answers == ReleaseAnswers(version=Version(3, 0, 0), verbose=True, dry_run=False)
