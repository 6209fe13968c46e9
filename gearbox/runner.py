"""Process runners used to call external account tools."""

import logging
import subprocess
from typing import Optional, Protocol, Sequence

from .models import ExitStatus

logger = logging.getLogger(__name__)

# Shell conventions for failures that happen before or instead of an exit
EXIT_TIMEOUT = 124
EXIT_NOT_FOUND = 127
EXIT_SIGNAL_BASE = 128


class ProcessRunner(Protocol):
    """Anything that can run an argv to completion and report how it exited."""

    def run(self, argv: Sequence[str]) -> ExitStatus:
        ...


class SubprocessRunner:
    """Blocking runner on top of ``subprocess.run``.

    Args:
        timeout: Seconds to wait before giving up, None waits forever
    """

    def __init__(self, timeout: Optional[float] = None):
        self.timeout = timeout

    def run(self, argv: Sequence[str]) -> ExitStatus:
        argv = list(argv)
        logger.debug(f"Running: {' '.join(argv)}")

        try:
            process = subprocess.run(
                argv,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except FileNotFoundError as e:
            logger.warning(f"Command not found: {argv[0]}")
            return ExitStatus(code=EXIT_NOT_FOUND, stderr=str(e))
        except subprocess.TimeoutExpired:
            logger.error(f"Command timed out after {self.timeout}s: {' '.join(argv)}")
            return ExitStatus(
                code=EXIT_TIMEOUT,
                stderr=f"{argv[0]} timed out after {self.timeout}s",
            )

        code = process.returncode
        if code < 0:
            # Killed by a signal; report it the way a shell would
            code = EXIT_SIGNAL_BASE - code

        logger.debug(f"{argv[0]} exited with code {code}")
        return ExitStatus(code=code, stdout=process.stdout, stderr=process.stderr)
