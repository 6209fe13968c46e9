"""
Gearbox CLI - Idempotent user and ssh key provisioning.
"""

import logging

import typer
from rich.console import Console

from .commands import EnableKeyAuthCommand, UserCreateCommand, get_commands
from .models import CommandOutcome, ExecutionMode
from .settings import get_settings

# Setup
app = typer.Typer(
    name="gearbox",
    help="Idempotent, check-mode aware provisioning primitives",
    add_completion=False,
)
user_app = typer.Typer(help="Manage Unix user accounts and their ssh keys.")
app.add_typer(user_app, name="user")
console = Console()

CHECK_HELP = "Check mode: report what would change without changing anything."


def configure_logging():
    """Configure logging based on settings."""
    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.WARNING),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


# Configure logging on module import
configure_logging()


def _emit(outcome: CommandOutcome) -> None:
    """Print the outcome and exit with its status.

    Raises:
        SystemExit: Always, with the outcome's exit code
    """
    marker = get_settings().result_marker
    for line in outcome.lines(marker):
        # User supplied paths and keys are printed verbatim
        console.print(line, markup=False, emoji=False, highlight=False, soft_wrap=True)
    raise typer.Exit(code=outcome.exit_code)


def _run(command_name: str, check: bool, **arguments) -> None:
    command = get_commands()[command_name]
    outcome = command.run(ExecutionMode.from_flag(check), **arguments)
    _emit(outcome)


@user_app.command(
    "create",
    help=f"{UserCreateCommand.description}\n\n{UserCreateCommand.help}",
)
def create(
    username: str = typer.Argument(..., help="Create a user with this user name."),
    check: bool = typer.Option(False, "--check", help=CHECK_HELP),
):
    _run(UserCreateCommand.name, check, username=username)


@user_app.command(
    "enable-key-auth",
    help=f"{EnableKeyAuthCommand.description}\n\n{EnableKeyAuthCommand.help}",
)
def enable_key_auth(
    pubkey: str = typer.Argument(..., help="One or more lines of ssh public key data."),
    homedir: str = typer.Argument(..., help="Path to the homedir of the user."),
    check: bool = typer.Option(False, "--check", help=CHECK_HELP),
):
    _run(EnableKeyAuthCommand.name, check, pubkey=pubkey, homedir=homedir)


if __name__ == "__main__":
    app()
