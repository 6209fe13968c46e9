"""
SSH public key parsing and the authorized_keys store.

Candidate keys are parsed from raw text, validated as a batch and then
compared with the keys already present by the SHA-256 hash of their key
material. Only keys whose material is new are appended.
"""

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Set

from .errors import KeyReadError, KeyWriteError
from .filesystem import Filesystem
from .models import ExecutionMode, PublicKey, hash_material

logger = logging.getLogger(__name__)

DATA_PREFIX = "data:"


def parse_key_data(raw: Optional[str], filesystem: Filesystem) -> Optional[List[str]]:
    """Split raw key data into lines.

    Args:
        raw: Key data, or ``data:<path>`` to read the key data from a file
        filesystem: Used to read the file named by a ``data:`` argument

    Returns:
        The lines of key data, or None when there is nothing to read
    """
    if not raw:
        return None

    if raw.startswith(DATA_PREFIX):
        path = raw[len(DATA_PREFIX):]
        if not path:
            return None
        try:
            raw = filesystem.read_text(Path(path))
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Cannot read key data from {path}: {e}")
            return None

    return [line.rstrip("\r") for line in raw.split("\n")]


def validate_keys(lines: Optional[Iterable[str]]) -> Optional[List[PublicKey]]:
    """Validate every line, all or nothing.

    Blank lines are skipped. A single malformed line rejects the batch.
    """
    if lines is None:
        return None

    keys = []
    for line in lines:
        if not line.strip():
            continue
        key = PublicKey.from_line(line)
        if key is None:
            logger.info(f"Rejecting key batch, malformed line: {line!r}")
            return None
        keys.append(key)
    return keys


def existing_material_hashes(existing_raw: str) -> Set[str]:
    """Hashes of the key material found in authorized_keys content."""
    hashes = set()
    for line in existing_raw.split("\n"):
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        parts = line.split()
        if len(parts) < 2:
            continue
        hashes.add(hash_material(parts[1]))
    return hashes


class KeyStore:
    """An authorized_keys file.

    Args:
        filesystem: Filesystem the file lives on
        path: Path of the authorized_keys file
    """

    def __init__(self, filesystem: Filesystem, path: Path):
        self.filesystem = filesystem
        self.path = Path(path)

    def read_existing(self) -> Optional[str]:
        """Content of the file, or None when it does not exist.

        Raises:
            KeyReadError: The file exists but could not be read
        """
        if not self.filesystem.exists(self.path):
            return None
        try:
            return self.filesystem.read_text(self.path)
        except (OSError, UnicodeDecodeError) as e:
            raise KeyReadError(f'Failed to read the content of "{self.path}": {e}') from e

    def filter_new(self, candidates: List[PublicKey], existing_raw: Optional[str]) -> List[PublicKey]:
        """Drop candidates whose key material is already present.

        Type and comment are ignored. Candidate order is preserved.
        """
        if not existing_raw:
            return list(candidates)

        known = existing_material_hashes(existing_raw)
        return [key for key in candidates if key.material_hash not in known]

    def needs_initial_newline(self) -> bool:
        """True if the file exists and definitely doesn't end in a newline."""
        last = self.filesystem.last_byte(self.path)
        return last is not None and last not in (b"\n", b"\r")

    def append(self, keys: List[PublicKey], mode: ExecutionMode) -> None:
        """Append ``keys``, one per line, with a trailing newline.

        Raises:
            KeyWriteError: The file could not be opened or written
        """
        if mode.simulate:
            logger.info(f"Check mode: skipping append of {len(keys)} key(s) to {self.path}")
            return

        text = "\n".join(key.line for key in keys) + "\n"
        if self.needs_initial_newline():
            text = "\n" + text

        try:
            self.filesystem.append_text(self.path, text)
        except OSError as e:
            raise KeyWriteError(e.strerror or str(e)) from e
        except UnicodeError as e:
            raise KeyWriteError(str(e)) from e

        logger.info(f"Appended {len(keys)} key(s) to {self.path}")
