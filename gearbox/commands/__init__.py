"""
Gearbox commands - user account and ssh key provisioning.

``get_commands`` is the registration point: it wires every command to its
collaborators and returns them keyed by name.
"""

from typing import Dict, Optional

from ..accounts import UserCreator, UserExistenceChecker
from ..filesystem import Filesystem, LocalFilesystem
from ..runner import ProcessRunner, SubprocessRunner
from ..settings import GearboxSettings, get_settings
from .base import Command
from .enable_key_auth import EnableKeyAuthCommand
from .user_create import UserCreateCommand


def get_commands(
    runner: Optional[ProcessRunner] = None,
    filesystem: Optional[Filesystem] = None,
    settings: Optional[GearboxSettings] = None,
) -> Dict[str, Command]:
    """Build every command.

    Args:
        runner: Process runner (default: SubprocessRunner with the configured timeout)
        filesystem: Filesystem (default: LocalFilesystem)
        settings: Settings (default: the global settings)

    Returns:
        Commands keyed by their name
    """
    settings = settings or get_settings()
    runner = runner or SubprocessRunner(timeout=settings.process_timeout)
    filesystem = filesystem or LocalFilesystem()

    commands = [
        UserCreateCommand(
            checker=UserExistenceChecker(runner, settings.lookup_command),
            creator=UserCreator(runner, settings.create_command),
        ),
        EnableKeyAuthCommand(
            filesystem,
            ssh_dir_name=settings.ssh_dir_name,
            authorized_keys_name=settings.authorized_keys_name,
        ),
    ]
    return {command.name: command for command in commands}


__all__ = [
    "Command",
    "EnableKeyAuthCommand",
    "UserCreateCommand",
    "get_commands",
]
