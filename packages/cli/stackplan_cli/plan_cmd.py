"""Detect and plan commands."""

from typing import List, Optional

import typer
import yaml

from stackplan_common import StackPlanError
from stackplan_sdk import App, PlanGenerator, ProviderRegistry

from .utils import build_environment, console, error, fail

OUTPUT_FORMATS = ["json", "yaml"]


def detect(
    path: str = typer.Argument(".", help="Application source directory"),
    env: List[str] = typer.Option(
        [],
        "--env",
        "-e",
        help="Environment variable KEY=VALUE (repeatable)",
    ),
):
    """
    Print the provider that detects the application.

    \b
    Examples:
        stackplan detect ./my-app
        stackplan detect ./my-app --env STACKPLAN_USE_DENO_2=1
    """
    environment = build_environment(env)
    try:
        provider = ProviderRegistry().detect(App(path), environment)
    except StackPlanError as e:
        fail(e)
    console.print(provider.name())


def plan(
    path: str = typer.Argument(".", help="Application source directory"),
    env: List[str] = typer.Option(
        [],
        "--env",
        "-e",
        help="Environment variable KEY=VALUE (repeatable)",
    ),
    provider: Optional[str] = typer.Option(
        None,
        "--provider",
        "-p",
        help="Use this provider instead of detecting one",
    ),
    output_format: str = typer.Option(
        "json",
        "--format",
        "-f",
        help="Output format: json (default) or yaml",
    ),
):
    """
    Generate the build plan for an application.

    \b
    Examples:
        stackplan plan ./my-app
        stackplan plan ./my-app --env NODE_ENV=staging --format yaml
        stackplan plan ./my-app --provider node --env STACKPLAN_START_CMD="node server.js"
    """
    if output_format not in OUTPUT_FORMATS:
        error(f"Invalid format: '{output_format}'. Valid options: {', '.join(OUTPUT_FORMATS)}")
        raise typer.Exit(1)

    environment = build_environment(env)
    try:
        build_plan = PlanGenerator().generate(App(path), environment, provider_name=provider)
    except StackPlanError as e:
        fail(e)

    if output_format == "yaml":
        typer.echo(yaml.safe_dump(build_plan.to_dict(), default_flow_style=False, sort_keys=False))
    else:
        typer.echo(build_plan.to_json())
