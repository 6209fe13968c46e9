"""Account lookup and creation through external tools."""

import logging
from typing import List, Optional, Sequence

from .errors import ConfigurationError, CreationError
from .models import ExecutionMode
from .runner import ProcessRunner

logger = logging.getLogger(__name__)

DEFAULT_LOOKUP_COMMAND = ["id"]
DEFAULT_CREATE_COMMAND = ["sudo", "adduser"]


def _command(command: Optional[Sequence[str]], default: List[str], purpose: str) -> List[str]:
    command = list(default if command is None else command)
    if not command:
        raise ConfigurationError(f"The {purpose} command must not be empty")
    return command


class UserExistenceChecker:
    """Decides whether an account exists by asking an identity lookup tool.

    A zero exit status means the account exists. Any other status is the
    normal "not found" answer, not an error.

    Args:
        runner: Process runner used for the lookup
        lookup_command: argv prefix, the username is appended (default: ``id``)
    """

    def __init__(self, runner: ProcessRunner, lookup_command: Optional[Sequence[str]] = None):
        self.runner = runner
        self.lookup_command = _command(lookup_command, DEFAULT_LOOKUP_COMMAND, "lookup")

    def exists(self, username: str) -> bool:
        status = self.runner.run([*self.lookup_command, username])
        logger.debug(f"Lookup of {username} exited with {status.code}")
        return status.succeeded


class UserCreator:
    """Creates an account with an external tool, unless simulating.

    Args:
        runner: Process runner used for creation
        create_command: argv prefix, the username is appended
            (default: ``sudo adduser``)
    """

    def __init__(self, runner: ProcessRunner, create_command: Optional[Sequence[str]] = None):
        self.runner = runner
        self.create_command = _command(create_command, DEFAULT_CREATE_COMMAND, "create")

    def create(self, username: str, mode: ExecutionMode) -> None:
        """Create ``username``.

        Raises:
            CreationError: The creation command exited non-zero. Carries its
                trimmed stderr and its exit status unchanged.
        """
        if mode.simulate:
            logger.info(f"Check mode: skipping creation of {username}")
            return

        status = self.runner.run([*self.create_command, username])
        if not status.succeeded:
            logger.warning(f"Creation of {username} failed with exit code {status.code}")
            raise CreationError(status.error_output, status.code)

        logger.info(f"Created user {username}")
