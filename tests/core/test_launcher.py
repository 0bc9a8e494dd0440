"""Tests for the launcher."""

from unittest.mock import MagicMock

import pytest

from wspick.core.exceptions import LaunchError
from wspick.core.launcher import launch


class TestLaunch:
    """Tests for print-or-spawn behavior."""

    def test_empty_command_prints(self, capsys: pytest.CaptureFixture[str]) -> None:
        runner = MagicMock()

        launch("/srv/app", "", runner=runner)

        assert capsys.readouterr().out == "/srv/app\n"
        runner.assert_not_called()

    def test_print_flag_overrides_command(self, capsys: pytest.CaptureFixture[str]) -> None:
        """With --print the configured command is never spawned."""
        runner = MagicMock()

        launch("/srv/app", "code", force_print=True, runner=runner)

        assert capsys.readouterr().out == "/srv/app\n"
        runner.assert_not_called()

    def test_command_spawned_with_path(self, capsys: pytest.CaptureFixture[str]) -> None:
        runner = MagicMock(return_value=0)

        launch("/srv/app", "code", runner=runner)

        runner.assert_called_once_with("code", "/srv/app")
        assert capsys.readouterr().out == ""

    def test_nonzero_exit_is_not_an_error(self) -> None:
        """The launched program failing does not make the launch fail."""
        runner = MagicMock(return_value=3)

        launch("/srv/app", "code", runner=runner)

    def test_spawn_failure_propagates(self) -> None:
        runner = MagicMock(side_effect=LaunchError("Command not found: nope", command="nope"))

        with pytest.raises(LaunchError):
            launch("/srv/app", "nope", runner=runner)
