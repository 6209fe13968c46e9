"""
Gearbox Settings - Configuration management using Pydantic Settings.

Loads configuration from environment variables and .env files.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Find project root (where .env file is located)
PROJECT_ROOT = Path(__file__).parent.parent


class GearboxSettings(BaseSettings):
    """
    Gearbox configuration settings.

    Settings are loaded from:
    1. Environment variables (highest priority)
    2. .env file in project root
    3. Default values (lowest priority)
    """

    model_config = SettingsConfigDict(
        env_file=str(PROJECT_ROOT / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_prefix="GB_",  # All Gearbox env vars must start with GB_
    )

    # Logging Configuration
    log_level: str = Field(
        default="WARNING",
        description="Logging level (DEBUG, INFO, WARNING, ERROR) (env: GB_LOG_LEVEL)",
    )

    # External tools
    lookup_command: list[str] = Field(
        default_factory=lambda: ["id"],
        description="Command used to look up an account, username appended (env: GB_LOOKUP_COMMAND)",
    )

    create_command: list[str] = Field(
        default_factory=lambda: ["sudo", "adduser"],
        description="Command used to create an account, username appended (env: GB_CREATE_COMMAND)",
    )

    process_timeout: float | None = Field(
        default=None,
        description="Seconds before an external command is abandoned, unset for no limit (env: GB_PROCESS_TIMEOUT)",
    )

    # SSH layout
    ssh_dir_name: str = Field(
        default=".ssh",
        description="Name of the ssh client config directory under a homedir (env: GB_SSH_DIR_NAME)",
    )

    authorized_keys_name: str = Field(
        default="authorized_keys",
        description="Name of the authorized keys file inside the config directory (env: GB_AUTHORIZED_KEYS_NAME)",
    )

    # Reporting
    result_marker: str = Field(
        default="[GEARBOX-RESULT]",
        description="Prefix of the machine-parsable change report line (env: GB_RESULT_MARKER)",
    )


# Global settings instance
_settings: GearboxSettings | None = None


def get_settings() -> GearboxSettings:
    """
    Get the global settings instance.

    Creates the settings instance on first call, then returns cached instance.

    Returns:
        GearboxSettings instance
    """
    global _settings
    if _settings is None:
        _settings = GearboxSettings()
    return _settings


def reload_settings() -> GearboxSettings:
    """
    Reload settings from environment/files.

    Useful for testing or when .env file changes.

    Returns:
        Fresh GearboxSettings instance
    """
    global _settings
    _settings = GearboxSettings()
    return _settings
