"""Deno provider: ``deno.json`` tasks or an index file run with ``deno run``."""

import re
from typing import Optional

from stackplan_common import DenoDefaults, ManifestError, PhaseNames
from stackplan_common.logger import get_logger
from stackplan_schema import BuildPlan, DenoJson, Phase, Pkg, StartPhase

from ..app import App
from ..environment import Environment
from .base import Provider

logger = get_logger(__name__)

DENO_IMPORT_RE = re.compile(DenoDefaults.IMPORT_PATTERN)


class DenoProvider(Provider):
    def name(self) -> str:
        return "deno"

    def detect(self, app: App, env: Environment) -> bool:
        if any(app.includes_file(manifest) for manifest in DenoDefaults.MANIFESTS):
            return True
        return app.find_match(DENO_IMPORT_RE, DenoDefaults.SOURCE_GLOB)

    def get_build_plan(self, app: App, env: Environment) -> Optional[BuildPlan]:
        plan = BuildPlan()

        setup = Phase.setup([Pkg(name=DenoDefaults.PKG)])
        if env.is_config_variable_truthy(DenoDefaults.USE_DENO_2_FLAG):
            setup.pin(DenoDefaults.ARCHIVE_LATEST)
            logger.info("Pinning setup phase archive", archive=DenoDefaults.ARCHIVE_LATEST)
        plan.add_phase(setup)

        build_cmd = self.get_build_cmd(app)
        if build_cmd:
            build = Phase.build(build_cmd)
            build.depends_on_phase(PhaseNames.SETUP)
            plan.add_phase(build)

        start_cmd = self.get_start_cmd(app)
        if start_cmd:
            plan.set_start_phase(StartPhase(cmd=start_cmd))

        return plan

    def get_build_cmd(self, app: App) -> Optional[str]:
        start_file = self.get_start_file(app)
        if start_file is None:
            return None
        return f"deno cache {start_file}"

    def get_start_cmd(self, app: App) -> Optional[str]:
        """
        Start command, in order of precedence:

        1. ``tasks.start`` from deno.json (or deno.jsonc)
        2. ``deno run --allow-all <index file>``
        """
        deno_json = self.read_deno_json(app)
        if deno_json is not None and deno_json.start_task:
            return deno_json.start_task

        start_file = self.get_start_file(app)
        if start_file is None:
            return None
        return f"deno run --allow-all {start_file}"

    def read_deno_json(self, app: App) -> Optional[DenoJson]:
        """
        Read deno.json, falling back to deno.jsonc when it is missing or invalid.

        Raises:
            ManifestError: If a manifest exists but cannot be parsed. A broken
                deno.json with no deno.jsonc beside it raises its own error.
        """
        json_name, jsonc_name = DenoDefaults.MANIFESTS
        has_jsonc = app.includes_file(jsonc_name)
        if app.includes_file(json_name):
            try:
                return app.read_json(json_name, DenoJson)
            except ManifestError:
                if not has_jsonc:
                    raise
                logger.debug("Falling back to deno.jsonc", manifest=json_name)
        if not has_jsonc:
            return None
        return app.read_json(jsonc_name, DenoJson)

    def get_start_file(self, app: App) -> Optional[str]:
        """First ``index.{ts,tsx,js,jsx}`` in the tree, relative to the root."""
        matches = app.find_files(DenoDefaults.INDEX_GLOB)
        if not matches:
            return None
        return app.strip_source_path(matches[0])
