"""Console helpers shared by CLI commands."""

from typing import List, NoReturn

import typer
from rich.console import Console

from stackplan_common import StackPlanError, ValidationError
from stackplan_sdk import Environment

console = Console()


def error(message: str) -> None:
    console.print(f"[bold red]✗[/bold red] {message}")


def build_environment(envs: List[str]) -> Environment:
    """
    Build an Environment from ``--env`` options.

    Raises:
        typer.Exit: If an assignment is invalid
    """
    try:
        return Environment.from_envs(envs)
    except ValidationError as e:
        error(e.message)
        raise typer.Exit(1)


def fail(exc: StackPlanError) -> NoReturn:
    """Report a StackPlan error and exit with status 1."""
    error(f"{exc.message} [dim]({exc.code})[/dim]")
    raise typer.Exit(1)
