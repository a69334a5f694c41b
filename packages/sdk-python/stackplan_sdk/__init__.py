"""StackPlan SDK - detect an application's ecosystem and compile its build plan.

This package provides:
- A read-only source accessor (App) and configuration accessor (Environment)
- Ecosystem providers (Deno, Node, Pixi) and a priority-ordered registry
- Runtime version resolution
- Build plan generation

Example:
    >>> from stackplan_sdk import App, Environment, generate_build_plan
    >>> plan = generate_build_plan(App("./my-app"), Environment.from_envs(["PORT=8080"]))
    >>> print(plan.to_json())
"""

from .app import App
from .environment import Environment
from .generator import PlanGenerator, assemble_generic_plan, generate_build_plan
from .providers import (
    DenoProvider,
    NodeProvider,
    PixiProvider,
    Provider,
    ProviderRegistry,
    default_providers,
)
from .resolution import NODE_VERSION_RESOLVER, VersionMatch, VersionResolver

__version__ = "0.1.0"

__all__ = [
    # Accessors
    "App",
    "Environment",
    # Providers
    "Provider",
    "DenoProvider",
    "NodeProvider",
    "PixiProvider",
    "ProviderRegistry",
    "default_providers",
    # Resolution
    "VersionResolver",
    "VersionMatch",
    "NODE_VERSION_RESOLVER",
    # Generation
    "PlanGenerator",
    "assemble_generic_plan",
    "generate_build_plan",
]
