"""Pytest configuration and fixtures for wspick tests."""

from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

import pytest

from wspick.core.config import ConfigStore, Registry
from wspick.core.exceptions import ConfigParseError, PromptCancelledError


class ScriptedPrompter:
    """PrompterInterface that replays canned answers.

    ``None`` in ``selections`` or ``texts`` simulates a dismissed prompt.
    Every call is recorded for assertions.
    """

    def __init__(
        self,
        selections: Sequence[str | None] = (),
        texts: Sequence[str | None] = (),
        recoveries: Sequence[str] = (),
    ) -> None:
        self.selections = list(selections)
        self.texts = list(texts)
        self.recoveries = list(recoveries)
        self.menus: list[list[str]] = []
        self.text_messages: list[str] = []
        self.recovery_errors: list[ConfigParseError] = []

    def select(self, message: str, options: Sequence[str]) -> str | None:
        self.menus.append(list(options))
        return self.selections.pop(0)

    def text(self, message: str, validate: Callable[[str], Any] | None = None) -> str:
        self.text_messages.append(message)
        answer = self.texts.pop(0)
        if answer is None:
            raise PromptCancelledError(f"Prompt cancelled: {message}")
        if validate is not None:
            assert validate(answer) is True, f"scripted answer rejected: {answer!r}"
        return answer

    def recovery_choice(self, error: ConfigParseError) -> str:
        self.recovery_errors.append(error)
        return self.recoveries.pop(0)


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    """Config file location inside a not-yet-existing directory."""
    return tmp_path / "config" / "wspick.yaml"


@pytest.fixture
def prompter() -> ScriptedPrompter:
    """Prompter with no scripted answers; tests append what they need."""
    return ScriptedPrompter()


@pytest.fixture
def runner() -> MagicMock:
    """Spawn-and-wait stand-in that always succeeds."""
    return MagicMock(return_value=0)


@pytest.fixture
def store(config_path: Path, prompter: ScriptedPrompter, runner: MagicMock) -> ConfigStore:
    """ConfigStore wired to the scripted prompter and fake editor runner."""
    return ConfigStore(
        config_path,
        prompter,
        editor_finder=lambda: "fake-editor",
        runner=runner,
    )


@pytest.fixture
def make_registry() -> Callable[..., Registry]:
    """Factory for registries with sensible defaults.

    Usage:
        def test_x(make_registry):
            registry = make_registry(paths={"a": "/tmp/a"}, sort=False)
    """

    def _make(**overrides: Any) -> Registry:
        values: dict[str, Any] = {
            "paths": {},
            "dirs": [],
            "open_cmd": "",
            "editor": "fake-editor",
            "sort": True,
            "exclude_proj_dirs": False,
        }
        values.update(overrides)
        return Registry(**values)

    return _make
