"""
Pydantic models shared by the Gearbox commands.

This module contains the data passed between the command handlers and
their collaborators:
- ExecutionMode, the check-mode switch threaded through every mutation
- ExitStatus returned by process runners
- Account and PublicKey inputs
- ChangeReport and CommandOutcome produced by each invocation
"""

import hashlib
from typing import Iterator, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

KEY_TYPE_PREFIX = "ssh-"


# =============================================================================
# Execution
# =============================================================================

class ExecutionMode(BaseModel):
    """How mutating operations behave for one invocation.

    When ``simulate`` is set every mutation is skipped, while detection and
    reporting run exactly as they would for a real change.
    """

    model_config = ConfigDict(frozen=True)

    simulate: bool = False

    @classmethod
    def from_flag(cls, check: bool) -> "ExecutionMode":
        return cls(simulate=bool(check))


class ExitStatus(BaseModel):
    """Result of one external process invocation."""

    code: int
    stdout: str = ""
    stderr: str = ""

    @property
    def succeeded(self) -> bool:
        return self.code == 0

    @property
    def error_output(self) -> str:
        return self.stderr.strip()


# =============================================================================
# Inputs
# =============================================================================

class Account(BaseModel):
    """A Unix account, identified by its username only.

    Existence is never stored here; it is looked up each time it is needed.
    """

    username: str

    @field_validator("username")
    @classmethod
    def _check_username(cls, value: str) -> str:
        if not value:
            raise ValueError("username must not be empty")
        if any(char.isspace() for char in value):
            raise ValueError("username must not contain whitespace")
        if value.startswith("-"):
            raise ValueError("username must not start with '-'")
        return value


def hash_material(material: str) -> str:
    """SHA-256 hex digest of key material, the identity used for dedup."""
    return hashlib.sha256(material.encode("utf-8")).hexdigest()


class PublicKey(BaseModel):
    """One line of ssh public key data.

    Attributes:
        key_type: First field, e.g. ``ssh-rsa``
        material: Second field, the base64 key data
        comment: Remainder of the line, may contain spaces
        line: The line as supplied, written verbatim to authorized_keys
    """

    model_config = ConfigDict(frozen=True)

    key_type: str
    material: str
    comment: str
    line: str

    @classmethod
    def from_line(cls, line: str) -> Optional["PublicKey"]:
        """Parse a single line, returning None when it is not well formed.

        A well formed line has at least three whitespace separated fields
        and a first field starting with ``ssh-``. Fields are split on any run
        of whitespace rather than single spaces, so a line whose comment is
        only trailing blanks is not well formed. Lines that cannot be encoded
        as UTF-8 (undecodable bytes from the command line) are rejected too.
        """
        try:
            line.encode("utf-8")
        except UnicodeEncodeError:
            return None
        parts = line.split(None, 2)
        if len(parts) < 3:
            return None
        key_type, material, comment = parts
        if not key_type.startswith(KEY_TYPE_PREFIX):
            return None
        return cls(key_type=key_type, material=material, comment=comment, line=line)

    @property
    def material_hash(self) -> str:
        return hash_material(self.material)


# =============================================================================
# Reporting
# =============================================================================

class ChangeReport(BaseModel):
    """Whether an invocation altered state, or would have in check mode."""

    changed: bool = False

    def mark_change(self) -> None:
        self.changed = True

    def to_marker_line(self, marker: str) -> str:
        """Render the report as ``<marker> {"changed":...}`` for orchestrators."""
        return f"{marker} {self.model_dump_json()}"


class CommandOutcome(BaseModel):
    """Everything one command invocation produces.

    The outcome is created before the command starts so that every exit
    path, including failures, carries a finalized change report.
    """

    exit_code: int = 0
    messages: List[str] = Field(default_factory=list)
    report: ChangeReport = Field(default_factory=ChangeReport)

    def say(self, message: str) -> None:
        self.messages.append(message)

    def lines(self, marker: str) -> Iterator[str]:
        """Human-readable messages followed by the report marker line."""
        yield from self.messages
        yield self.report.to_marker_line(marker)
