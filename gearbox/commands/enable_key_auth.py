"""The ``user:enable-key-auth`` command."""

import logging
from pathlib import Path
from typing import Optional

from ..errors import KeyReadError, KeyWriteError
from ..filesystem import Filesystem
from ..keys import KeyStore, parse_key_data, validate_keys
from ..models import CommandOutcome, ExecutionMode
from .base import EXIT_FAILURE, EXIT_SUCCESS, Command

logger = logging.getLogger(__name__)

DEFAULT_SSH_DIR_NAME = ".ssh"
DEFAULT_AUTHORIZED_KEYS_NAME = "authorized_keys"


def _plural(count: int, singular: str, plural: str) -> str:
    return singular if count == 1 else plural


class EnableKeyAuthCommand(Command):
    """Append ssh public keys to a user's authorized_keys file.

    Keys whose material is already present are skipped, so running the
    command again with the same keys changes nothing.

    Args:
        filesystem: Filesystem holding the homedir
        ssh_dir_name: Name of the config directory under the homedir
        authorized_keys_name: Name of the keys file in the config directory
    """

    name = "user:enable-key-auth"
    description = "Append ssh public keys to a user authorized_keys file."
    help = (
        "PUBKEY is one or more lines of ssh public key data, or data:<path> to\n"
        "read them from a file. HOMEDIR is the path to the homedir of the user.\n"
        "The homedir and its .ssh directory must already exist."
    )

    def __init__(
        self,
        filesystem: Filesystem,
        ssh_dir_name: str = DEFAULT_SSH_DIR_NAME,
        authorized_keys_name: str = DEFAULT_AUTHORIZED_KEYS_NAME,
    ):
        self.filesystem = filesystem
        self.ssh_dir_name = ssh_dir_name
        self.authorized_keys_name = authorized_keys_name

    def _directory_problem(self, path: Path, label: str) -> Optional[str]:
        """Describe why ``path`` is unusable as a directory, or None."""
        if not self.filesystem.exists(path):
            return f'I cannot enable auth because the {label} does not exist: "{path}".'
        if not self.filesystem.is_dir(path):
            return f'I cannot enable auth because the {label} is not a directory: "{path}".'
        if not self.filesystem.is_readable(path):
            return f'I cannot enable auth because the {label} is unreadable: "{path}".'
        return None

    def execute(
        self,
        outcome: CommandOutcome,
        mode: ExecutionMode,
        pubkey: Optional[str] = None,
        homedir: str = "",
    ) -> int:
        # sane keys?
        candidates = validate_keys(parse_key_data(pubkey, self.filesystem))
        if not candidates:
            outcome.say(
                "I cannot enable auth with the provided pubkeys because they are not well formed."
            )
            return EXIT_FAILURE
        candidate_count = len(candidates)

        # sane homedir, and ~/.ssh/ inside it?
        if not homedir or not homedir.strip():
            # Path("") would resolve to the current directory
            outcome.say(f'I cannot enable auth because the homedir does not exist: "{homedir}".')
            return EXIT_FAILURE
        home_path = Path(homedir)
        confdir = home_path / self.ssh_dir_name
        for path, label in ((home_path, "homedir"), (confdir, "config directory")):
            problem = self._directory_problem(path, label)
            if problem:
                outcome.say(problem)
                return EXIT_FAILURE

        # authorized_keys must be readable, if it exists
        keys_file = confdir / self.authorized_keys_name
        if self.filesystem.exists(keys_file) and not self.filesystem.is_readable(keys_file):
            outcome.say(
                f'I cannot enable auth because the authorized_keys file is unreadable: "{keys_file}".'
            )
            return EXIT_FAILURE

        store = KeyStore(self.filesystem, keys_file)
        try:
            existing = store.read_existing()
        except KeyReadError as e:
            outcome.say(f'I cannot read existing authorized_keys at "{keys_file}": "{e}".')
            return EXIT_FAILURE

        # filter out already authorized keys
        to_enable = store.filter_new(candidates, existing)
        if existing:
            already = candidate_count - len(to_enable)
            if not to_enable:
                outcome.say(
                    f"I have nothing to do: the {candidate_count} public "
                    f"{_plural(candidate_count, 'key', 'keys')} supplied "
                    f"{_plural(candidate_count, 'is', 'are')} already enabled."
                )
                return EXIT_SUCCESS
            if already:
                outcome.say(
                    f"I will enable just {len(to_enable)} of the {candidate_count} supplied "
                    f"public keys because {already} {_plural(already, 'is', 'are')} already enabled."
                )
        logger.info(f"{len(to_enable)} of {candidate_count} key(s) to enable in {keys_file}")

        outcome.report.mark_change()
        try:
            store.append(to_enable, mode)
        except KeyWriteError as e:
            outcome.say(f'I cannot write the provided keys to "{keys_file}": "{e}".')
            return EXIT_FAILURE

        outcome.say(
            f"I {'would have' if mode.simulate else 'have successfully'} enabled auth for "
            f"{len(to_enable)} {_plural(len(to_enable), 'key', 'keys')}."
        )
        return EXIT_SUCCESS
