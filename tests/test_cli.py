"""Tests for the Gearbox CLI."""

import json

import pytest
from typer.testing import CliRunner

from gearbox import cli
from gearbox.commands import get_commands
from gearbox.models import ExitStatus

from .fakes import HOMEDIR, MemoryFilesystem, ScriptedRunner

runner = CliRunner()
KEY = "ssh-rsa some_key_material and a comment"


def report_of(output: str) -> dict:
    """Parse the change report marker line out of CLI output."""
    lines = [line for line in output.splitlines() if line.startswith("[GEARBOX-RESULT] ")]
    assert len(lines) == 1
    return json.loads(lines[0].split(" ", 1)[1])


@pytest.fixture
def use_fakes(monkeypatch):
    """Wire the CLI to fake collaborators.

    Returns a function taking the scripted process runner and filesystem.
    """

    def install(process_runner=None, filesystem=None):
        monkeypatch.setattr(
            cli,
            "get_commands",
            lambda: get_commands(runner=process_runner or ScriptedRunner(), filesystem=filesystem),
        )

    return install


def test_create_existing_user(use_fakes):
    """Test an existing account exits 1 and reports no change."""
    process_runner = ScriptedRunner(ExitStatus(code=0))
    use_fakes(process_runner)

    result = runner.invoke(cli.app, ["user", "create", "some_username"])

    assert result.exit_code == 1
    assert result.stdout.startswith(
        'I will not create user "some_username" because one already exists with that name'
    )
    assert report_of(result.stdout) == {"changed": False}


def test_create_check_mode(use_fakes):
    """Test --check never spawns adduser but reports the change."""
    process_runner = ScriptedRunner(ExitStatus(code=1))
    use_fakes(process_runner)

    result = runner.invoke(cli.app, ["user", "create", "some_username", "--check"])

    assert result.exit_code == 0
    assert process_runner.calls == [["id", "some_username"]]
    assert result.stdout.startswith('I would create a new user "some_username".')
    assert report_of(result.stdout) == {"changed": True}


def test_create_propagates_tool_exit_code(use_fakes):
    """Test the creation tool's exit code becomes the CLI exit code."""
    process_runner = ScriptedRunner(
        ExitStatus(code=1),
        ExitStatus(code=12, stderr="adduser: The home dir must be an absolute path.\n"),
    )
    use_fakes(process_runner)

    result = runner.invoke(cli.app, ["user", "create", "some_username"])

    assert result.exit_code == 12
    assert 'I cannot create user "some_username": adduser: The home dir must be an absolute path.' in result.stdout
    assert report_of(result.stdout) == {"changed": True}


def test_create_help_mentions_sudoers():
    """Test create help explains the sudo requirement."""
    result = runner.invoke(cli.app, ["user", "create", "--help"])

    assert result.exit_code == 0
    assert "NOPASSWD" in result.stdout


def test_enable_key_auth_on_disk(tmp_path):
    """Test enable-key-auth end to end, twice, against a real homedir."""
    (tmp_path / ".ssh").mkdir()
    keys_file = tmp_path / ".ssh" / "authorized_keys"

    first = runner.invoke(cli.app, ["user", "enable-key-auth", KEY, str(tmp_path)])
    second = runner.invoke(cli.app, ["user", "enable-key-auth", KEY, str(tmp_path)])

    assert first.exit_code == 0
    assert first.stdout.startswith("I have successfully enabled auth for 1 key.")
    assert report_of(first.stdout) == {"changed": True}
    assert second.exit_code == 0
    assert second.stdout.startswith("I have nothing to do: the 1 public key supplied is already enabled.")
    assert report_of(second.stdout) == {"changed": False}
    assert keys_file.read_text() == f"{KEY}\n"


def test_enable_key_auth_check_mode(tmp_path):
    """Test --check leaves the authorized_keys file untouched."""
    (tmp_path / ".ssh").mkdir()

    result = runner.invoke(cli.app, ["user", "enable-key-auth", KEY, str(tmp_path), "--check"])

    assert result.exit_code == 0
    assert result.stdout.startswith("I would have enabled auth for 1 key.")
    assert report_of(result.stdout) == {"changed": True}
    assert not (tmp_path / ".ssh" / "authorized_keys").exists()


def test_enable_key_auth_missing_homedir(use_fakes):
    """Test a precondition failure still prints the change report."""
    use_fakes(filesystem=MemoryFilesystem())

    result = runner.invoke(cli.app, ["user", "enable-key-auth", KEY, str(HOMEDIR)])

    assert result.exit_code == 1
    assert f'the homedir does not exist: "{HOMEDIR}"' in result.stdout
    assert report_of(result.stdout) == {"changed": False}


def test_result_marker_is_configurable(monkeypatch, tmp_path):
    """Test GB_RESULT_MARKER changes the report prefix."""
    from gearbox.settings import reload_settings

    monkeypatch.setenv("GB_RESULT_MARKER", "[DROID-RESULT]")
    reload_settings()
    (tmp_path / ".ssh").mkdir()

    result = runner.invoke(cli.app, ["user", "enable-key-auth", KEY, str(tmp_path), "--check"])

    assert '[DROID-RESULT] {"changed":true}' in result.stdout
