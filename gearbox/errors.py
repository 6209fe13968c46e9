"""
Gearbox errors.
"""


class GearboxError(Exception):
    """Base exception for all Gearbox errors."""
    pass


class ConfigurationError(GearboxError):
    """Errors in configuration."""
    pass


class CreationError(GearboxError):
    """The account creation command exited non-zero.

    Attributes:
        message: Trimmed standard error of the creation command
        code: Exit status of the creation command, propagated as-is
    """

    def __init__(self, message: str, code: int):
        super().__init__(message)
        self.message = message
        self.code = code


class KeyReadError(GearboxError):
    """Existing authorized keys could not be read."""
    pass


class KeyWriteError(GearboxError):
    """Keys could not be appended to the authorized keys file."""
    pass
