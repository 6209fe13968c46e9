"""Filesystem access needed by the key commands."""

import os
from pathlib import Path
from typing import Optional, Protocol


class Filesystem(Protocol):
    """The handful of filesystem queries and mutations the commands use."""

    def exists(self, path: Path) -> bool:
        ...

    def is_dir(self, path: Path) -> bool:
        ...

    def is_readable(self, path: Path) -> bool:
        ...

    def read_text(self, path: Path) -> str:
        ...

    def last_byte(self, path: Path) -> Optional[bytes]:
        ...

    def append_text(self, path: Path, text: str) -> None:
        ...


class LocalFilesystem:
    """Filesystem implementation backed by the local disk."""

    def exists(self, path: Path) -> bool:
        return Path(path).exists()

    def is_dir(self, path: Path) -> bool:
        return Path(path).is_dir()

    def is_readable(self, path: Path) -> bool:
        return os.access(path, os.R_OK)

    def read_text(self, path: Path) -> str:
        return Path(path).read_text(encoding="utf-8")

    def last_byte(self, path: Path) -> Optional[bytes]:
        """Return the final byte of a file.

        None when the file is missing, empty or cannot be opened.
        """
        try:
            with open(path, "rb") as fh:
                fh.seek(0, os.SEEK_END)
                if fh.tell() == 0:
                    return None
                fh.seek(-1, os.SEEK_END)
                return fh.read(1)
        except OSError:
            return None

    def append_text(self, path: Path, text: str) -> None:
        with open(path, "a", encoding="utf-8", newline="") as fh:
            fh.write(text)
