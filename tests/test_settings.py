"""Tests for Gearbox settings."""

from gearbox.commands import get_commands
from gearbox.settings import GearboxSettings, get_settings, reload_settings


def test_defaults():
    """Test default settings."""
    settings = GearboxSettings()

    assert settings.log_level == "WARNING"
    assert settings.lookup_command == ["id"]
    assert settings.create_command == ["sudo", "adduser"]
    assert settings.process_timeout is None
    assert settings.ssh_dir_name == ".ssh"
    assert settings.authorized_keys_name == "authorized_keys"
    assert settings.result_marker == "[GEARBOX-RESULT]"


def test_environment_overrides(monkeypatch):
    """Test GB_ environment variables override defaults."""
    monkeypatch.setenv("GB_CREATE_COMMAND", '["useradd", "-m"]')
    monkeypatch.setenv("GB_PROCESS_TIMEOUT", "30")

    settings = reload_settings()

    assert settings.create_command == ["useradd", "-m"]
    assert settings.process_timeout == 30.0
    assert get_settings() is settings


def test_get_commands_uses_settings():
    """Test commands are wired from settings."""
    settings = GearboxSettings(
        lookup_command=["getent", "passwd"],
        create_command=["useradd"],
        process_timeout=5,
        authorized_keys_name="authorized_keys2",
    )

    commands = get_commands(settings=settings)

    assert set(commands) == {"user:create", "user:enable-key-auth"}
    create = commands["user:create"]
    assert create.checker.lookup_command == ["getent", "passwd"]
    assert create.creator.create_command == ["useradd"]
    assert create.checker.runner.timeout == 5
    assert commands["user:enable-key-auth"].authorized_keys_name == "authorized_keys2"
