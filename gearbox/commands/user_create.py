"""The ``user:create`` command."""

import logging

from pydantic import ValidationError

from ..accounts import UserCreator, UserExistenceChecker
from ..errors import CreationError
from ..models import Account, CommandOutcome, ExecutionMode
from .base import EXIT_FAILURE, EXIT_SUCCESS, Command

logger = logging.getLogger(__name__)


class UserCreateCommand(Command):
    """Ensure a Unix account exists.

    An account that already exists is reported with exit status 1 even
    though nothing failed. When the creation tool fails, its own exit
    status becomes the exit status of this command.

    Args:
        checker: Looks up whether the account exists
        creator: Creates the account
    """

    name = "user:create"
    description = "Add a Unix user account."
    help = (
        "This command should be run by a user allowed to execute `sudo adduser`\n"
        "without being required to input a password. Something like the following\n"
        "entry in a sudoers file should work:-\n"
        "\n"
        "    my_user\tALL = NOPASSWD: /usr/sbin/adduser"
    )

    def __init__(self, checker: UserExistenceChecker, creator: UserCreator):
        self.checker = checker
        self.creator = creator

    def execute(self, outcome: CommandOutcome, mode: ExecutionMode, username: str = "") -> int:
        try:
            account = Account(username=username)
        except ValidationError as e:
            reason = "; ".join(error["msg"] for error in e.errors())
            outcome.say(f'I cannot create user "{username}": {reason}')
            return EXIT_FAILURE

        if self.checker.exists(account.username):
            logger.info(f"User {account.username} already exists")
            outcome.say(
                f'I will not create user "{account.username}" because one already exists with that name'
            )
            return EXIT_FAILURE

        outcome.report.mark_change()

        try:
            self.creator.create(account.username, mode)
        except CreationError as e:
            outcome.say(f'I cannot create user "{account.username}": {e.message}')
            return e.code

        outcome.say(
            f'I {"would create" if mode.simulate else "have created"} a new user "{account.username}".'
        )
        return EXIT_SUCCESS
