"""Tests for the root shiprate CLI."""

from pathlib import Path

import pytest
from click.testing import CliRunner

from shiprate import __version__
from shiprate.cli import cli

pytestmark = pytest.mark.usefixtures("_isolated_root")


def test_cli_help(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "carrier shipping rate estimates" in result.output


def test_cli_version(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_cli_no_args(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, [])
    assert result.exit_code == 0
    assert "Usage" in result.output


@pytest.mark.parametrize("command", ["packages", "cache-key", "quote", "services"])
def test_commands_registered(cli_runner: CliRunner, command: str) -> None:
    result = cli_runner.invoke(cli, [command, "--help"])
    assert result.exit_code == 0, result.output


def test_explicit_config_flag(cli_runner: CliRunner, tmp_path: Path) -> None:
    config = tmp_path / "elsewhere.toml"
    config.write_text('[[services]]\ncarrier = "DHL"\ndescription = "Express"\n')
    result = cli_runner.invoke(cli, ["-c", str(config), "services"])
    assert result.exit_code == 0
    assert "DHL" in result.output


def test_invalid_config(cli_runner: CliRunner, tmp_path: Path) -> None:
    (tmp_path / "shiprate.toml").write_text("locale = \n")
    result = cli_runner.invoke(cli, ["services"])
    assert result.exit_code == 1
    assert "Invalid TOML" in result.output
