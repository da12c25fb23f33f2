import re
from types import SimpleNamespace
from unittest.mock import patch

from typer.testing import CliRunner

import workon.cli as cli

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;]*[A-Za-z]")


def _strip_ansi(output: str) -> str:
    return ANSI_ESCAPE_RE.sub("", output)


def test_go_forwards_arguments() -> None:
    runner = CliRunner()
    with patch("workon.cli.go_cmd.start_projects") as start_projects:
        result = runner.invoke(
            cli.app,
            [
                "go",
                "alpha",
                "beta",
                "-s",
                "git@github.com:org",
                "--source",
                "https://host/team",
                "-e",
                "code",
                "-o",
                "-d",
                "/work",
            ],
        )

    assert result.exit_code == 0
    start_projects.assert_called_once_with(
        SimpleNamespace(
            projects=["alpha", "beta"],
            sources=["git@github.com:org", "https://host/team"],
            editor="code",
            open=True,
            directory="/work",
        )
    )


def test_start_is_an_alias_for_go() -> None:
    runner = CliRunner()
    with patch("workon.cli.go_cmd.start_projects") as start_projects:
        result = runner.invoke(cli.app, ["start", "alpha"])

    assert result.exit_code == 0
    start_projects.assert_called_once_with(
        SimpleNamespace(
            projects=["alpha"], sources=[], editor=None, open=False, directory=None
        )
    )


def test_go_requires_a_project() -> None:
    runner = CliRunner()
    with patch("workon.cli.go_cmd.start_projects") as start_projects:
        result = runner.invoke(cli.app, ["go"])

    assert result.exit_code != 0
    start_projects.assert_not_called()


def test_done_forwards_arguments() -> None:
    runner = CliRunner()
    with patch("workon.cli.done_cmd.finish_projects") as finish_projects:
        result = runner.invoke(cli.app, ["done", "alpha", "--force", "-d", "/work"])

    assert result.exit_code == 0
    finish_projects.assert_called_once_with(
        SimpleNamespace(projects=["alpha"], force=True, directory="/work")
    )


def test_done_without_projects_discovers() -> None:
    runner = CliRunner()
    with patch("workon.cli.done_cmd.finish_projects") as finish_projects:
        result = runner.invoke(cli.app, ["done"])

    assert result.exit_code == 0
    finish_projects.assert_called_once_with(
        SimpleNamespace(projects=[], force=False, directory=None)
    )


def test_config_command_shows_settings() -> None:
    runner = CliRunner()
    with patch("workon.cli.config_cmd.show_config") as show_config:
        result = runner.invoke(cli.app, ["config"])

    assert result.exit_code == 0
    show_config.assert_called_once()


def test_global_log_level_flag_sets_runtime_level() -> None:
    runner = CliRunner()
    with (
        patch("workon.cli.config_cmd.show_config", lambda _args: None),
        patch("workon.cli.workon_log.set_level") as mock_set_level,
    ):
        result = runner.invoke(cli.app, ["--log-level", "DEBUG", "config"])

    assert result.exit_code == 0
    mock_set_level.assert_called_once_with("debug")


def test_global_log_level_rejects_unknown_values() -> None:
    runner = CliRunner()
    result = runner.invoke(cli.app, ["--log-level", "loud", "config"], color=False)
    clean_output = _strip_ansi(result.output)

    assert result.exit_code != 0
    assert "--log-level" in clean_output
    assert "expected one of" in clean_output.lower()


def test_no_color_flag_disables_colorized_output() -> None:
    runner = CliRunner()
    with (
        patch("workon.cli.config_cmd.show_config", lambda _args: None),
        patch("workon.cli.workon_log.set_no_color") as mock_set_no_color,
    ):
        result = runner.invoke(cli.app, ["--no-color", "config"])

    assert result.exit_code == 0
    mock_set_no_color.assert_called_once_with(True)


def test_version_flag_prints_version() -> None:
    runner = CliRunner()
    result = runner.invoke(cli.app, ["--version"])

    assert result.exit_code == 0
    assert result.output.strip() == cli.__version__
