"""
Gearbox - Idempotent, check-mode aware provisioning primitives.

Two commands, each safe to run repeatedly:
- user:create ensures a Unix account exists
- user:enable-key-auth ensures ssh public keys are in a user's authorized_keys

Every invocation prints a human-readable status line followed by a
machine-parsable change report, and honours --check by detecting and
reporting without mutating anything.
"""

from .commands import get_commands
from .models import ChangeReport, CommandOutcome, ExecutionMode
from .settings import GearboxSettings, get_settings, reload_settings

__version__ = "0.1.0"
__all__ = [
    "ChangeReport",
    "CommandOutcome",
    "ExecutionMode",
    "GearboxSettings",
    "get_commands",
    "get_settings",
    "reload_settings",
]
