"""stackplan CLI - Main entry point."""

from typing import Optional

import typer

from stackplan_common import LOG_LEVELS, configure_logging

from . import plan_cmd
from .utils import error

app = typer.Typer(
    name="stackplan",
    help="stackplan CLI - Detect an application's stack and compile its build plan",
    no_args_is_help=True,
    add_completion=False,
)


@app.callback()
def configure(
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help=f"Log level for JSON logs on stderr ({', '.join(LOG_LEVELS)})",
    ),
):
    if log_level:
        try:
            configure_logging("stackplan-cli", log_level=log_level, stream="stderr")
        except ValueError as e:
            error(str(e))
            raise typer.Exit(1)


# Register all commands
app.command()(plan_cmd.detect)
app.command()(plan_cmd.plan)


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
