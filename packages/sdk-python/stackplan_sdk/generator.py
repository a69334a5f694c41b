"""
Build Plan Generator
====================

Turns a source tree into a BuildPlan:
- Provider selection (forced by name, or first detected)
- Custom provider plan, or generic setup -> install -> build assembly
- Variable merging (provider defaults, then user variables)
- Configuration overrides (STACKPLAN_INSTALL_CMD, _BUILD_CMD, _START_CMD, _PKGS)

Nothing is executed. The returned plan is owned by the caller.
"""

import re
from typing import List, Optional

from stackplan_common import ConfigDefaults, PhaseNames
from stackplan_common.logger import get_logger
from stackplan_schema import BuildPlan, Phase, Pkg, StartPhase

from .app import App
from .environment import Environment
from .providers.base import Provider
from .providers.registry import ProviderRegistry

logger = get_logger(__name__)


def assemble_generic_plan(provider: Provider, app: App, env: Environment) -> BuildPlan:
    """
    Compose the conventional plan from a provider's pieces.

    Phases:
    - ``setup``: required packages
    - ``install``: install command, depends on setup
    - ``build``: build command, depends on install (omitted without a command)
    - start phase when a start command is derived
    """
    plan = BuildPlan()

    plan.add_phase(Phase.setup(provider.pkgs(app, env)))
    plan.add_phase(Phase.install(provider.install_cmd(app, env)))

    build_cmd = provider.suggested_build_cmd(app, env)
    if build_cmd:
        plan.add_phase(Phase.build(build_cmd))

    start_cmd = provider.suggested_start_command(app, env)
    if start_cmd:
        plan.set_start_phase(StartPhase(cmd=start_cmd))

    plan.add_variables(provider.get_environment_variables(app, env))
    return plan


def parse_pkgs(value: str) -> List[Pkg]:
    """Split a space- or comma-separated package list."""
    return [Pkg(name=name) for name in re.split(r"[\s,]+", value) if name]


class PlanGenerator:
    """
    Generates build plans from a provider registry.

    Example:
        >>> generator = PlanGenerator()
        >>> plan = generator.generate(App("/project"), Environment())
        >>> plan.providers
        ['node']
        >>> sorted(plan.phase_names())
        ['build', 'install', 'setup']
    """

    def __init__(self, registry: Optional[ProviderRegistry] = None):
        self.registry = registry or ProviderRegistry()

    def generate(
        self,
        app: App,
        env: Environment,
        provider_name: Optional[str] = None,
    ) -> BuildPlan:
        """
        Generate the build plan for ``app``.

        Resolution order:
        1. Select provider
        2. Custom plan, or generic assembly
        3. Merge user variables
        4. Apply configuration overrides

        Raises:
            NoProviderMatchedError: If no provider detects the app
            ValidationError: If ``provider_name`` is unknown
            StackPlanError: Any provider error (manifest, version, missing task)
        """
        # 1. Select provider
        provider = self.select_provider(app, env, provider_name)
        log = logger.with_context(provider=provider.name(), source=str(app.source))

        # 2. Custom plan or generic assembly
        plan = provider.get_build_plan(app, env)
        if plan is None:
            log.debug("Using generic plan assembly")
            plan = assemble_generic_plan(provider, app, env)
        else:
            log.debug("Using custom provider plan")

        # 3. User variables override provider defaults
        plan.add_variables(env.user_variables())

        # 4. Configuration overrides
        self.apply_overrides(plan, env)

        plan.providers = [provider.name()]
        log.info(
            "Generated build plan",
            phases=sorted(plan.phase_names()),
            has_start=plan.start_phase is not None,
        )
        return plan

    def select_provider(
        self,
        app: App,
        env: Environment,
        provider_name: Optional[str] = None,
    ) -> Provider:
        if provider_name:
            logger.info("Using forced provider", provider=provider_name)
            return self.registry.get(provider_name)
        return self.registry.detect(app, env)

    def apply_overrides(self, plan: BuildPlan, env: Environment) -> None:
        """Apply STACKPLAN_* command and package overrides to ``plan``."""
        install_cmd = env.get_config_variable(ConfigDefaults.INSTALL_CMD)
        if install_cmd:
            self._override_phase_cmd(plan, Phase.install(install_cmd), install_cmd)

        build_cmd = env.get_config_variable(ConfigDefaults.BUILD_CMD)
        if build_cmd:
            self._override_phase_cmd(plan, Phase.build(build_cmd), build_cmd)

        start_cmd = env.get_config_variable(ConfigDefaults.START_CMD)
        if start_cmd:
            logger.info("Overriding start command", cmd=start_cmd)
            plan.replace_start_phase(StartPhase(cmd=start_cmd))

        pkgs = env.get_config_variable(ConfigDefaults.PKGS)
        if pkgs:
            setup = plan.get_phase(PhaseNames.SETUP)
            if setup is None:
                setup = Phase.setup()
                plan.add_phase(setup)
            setup.add_nix_pkgs(parse_pkgs(pkgs))
            logger.info("Added packages to setup phase", pkgs=pkgs)

    def _override_phase_cmd(self, plan: BuildPlan, default: Phase, cmd: str) -> None:
        phase = plan.get_phase(default.name)
        if phase is None:
            plan.add_phase(default)
        else:
            phase.cmds = [cmd]
        logger.info("Overriding phase command", phase=default.name, cmd=cmd)


def generate_build_plan(
    app: App,
    env: Optional[Environment] = None,
    provider_name: Optional[str] = None,
    registry: Optional[ProviderRegistry] = None,
) -> BuildPlan:
    """Generate a build plan with the default registry."""
    return PlanGenerator(registry).generate(app, env or Environment(), provider_name)
