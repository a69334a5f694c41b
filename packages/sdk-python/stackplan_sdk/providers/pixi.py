"""
Pixi provider.

Phase presence is driven by the ``[tasks]`` table of pixi.toml: a
``build`` task adds a build phase, and a ``start`` task is mandatory.
"""

from typing import Optional

from stackplan_common import MissingStartTaskError, PhaseNames, PixiDefaults
from stackplan_schema import BuildPlan, Phase, PixiToml, StartPhase

from ..app import App
from ..environment import Environment
from .base import Provider


class PixiProvider(Provider):
    def name(self) -> str:
        return "pixi"

    def detect(self, app: App, env: Environment) -> bool:
        return app.has_match(PixiDefaults.MANIFEST)

    def get_build_plan(self, app: App, env: Environment) -> Optional[BuildPlan]:
        """
        Raises:
            ManifestError: If pixi.toml is unreadable or has no [tasks] table
            MissingStartTaskError: If no start task is declared
        """
        config = app.read_toml(PixiDefaults.MANIFEST, PixiToml)
        plan = BuildPlan()

        setup = Phase(name=PhaseNames.SETUP, only_include_files=[])
        setup.add_cmd(PixiDefaults.INSTALLER_CMD)
        plan.add_phase(setup)

        install = Phase.install(f"{PixiDefaults.BIN} install")
        install.only_include_files = [PixiDefaults.MANIFEST, PixiDefaults.LOCKFILE]
        plan.add_phase(install)

        if config.has_task("build"):
            plan.add_phase(Phase.build(f"{PixiDefaults.BIN} run build"))

        if not config.has_task("start"):
            raise MissingStartTaskError(
                "No start task provided; please add one to your pixi.toml."
            )
        plan.set_start_phase(StartPhase(cmd=f"{PixiDefaults.BIN} run start"))

        return plan
