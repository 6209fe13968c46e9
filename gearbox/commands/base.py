"""Base command class for Gearbox."""

import logging
from typing import Any

from ..errors import GearboxError
from ..models import CommandOutcome, ExecutionMode

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_FAILURE = 1


class Command:
    """Base command - every provisioning command inherits from this.

    A command detects current state, works out the smallest change needed
    and applies it, or only records it when the execution mode simulates.
    Subclasses implement ``execute`` and return the exit status; ``run``
    owns the outcome for the whole invocation.

    Attributes:
        name: Command name, e.g. ``user:create``
        description: One line summary
        help: Longer help text
    """

    name: str = ""
    description: str = ""
    help: str = ""

    def run(self, mode: ExecutionMode, **arguments: Any) -> CommandOutcome:
        """Execute the command and return its finalized outcome.

        Collaborator errors that escape ``execute`` are reported as a message
        and exit status 1, never as a traceback.
        """
        outcome = CommandOutcome()
        logger.debug(f"Running {self.name} (simulate={mode.simulate})")

        try:
            outcome.exit_code = self.execute(outcome, mode, **arguments)
        except (GearboxError, OSError, UnicodeError) as e:
            logger.error(f"{self.name} failed: {e}")
            outcome.say(f"I cannot complete {self.name}: {e}")
            outcome.exit_code = EXIT_FAILURE

        logger.debug(
            f"{self.name} finished with exit code {outcome.exit_code}, changed={outcome.report.changed}"
        )
        return outcome

    def execute(self, outcome: CommandOutcome, mode: ExecutionMode, **arguments: Any) -> int:
        raise NotImplementedError("Subclasses must implement execute()")
