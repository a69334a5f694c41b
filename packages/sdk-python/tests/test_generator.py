"""Tests for build plan generation."""

import json

import pytest

from stackplan_common import (
    ManifestError,
    MissingStartTaskError,
    NoProviderMatchedError,
    UnsupportedVersionError,
    ValidationError,
)
from stackplan_schema import Pkg
from stackplan_sdk import (
    Environment,
    NodeProvider,
    PlanGenerator,
    ProviderRegistry,
    assemble_generic_plan,
    generate_build_plan,
)
from stackplan_sdk.generator import parse_pkgs

NODE_APP = {
    "package.json": {
        "name": "web",
        "scripts": {"build": "tsc", "start": "node dist/server.js"},
        "engines": {"node": "16.x"},
    },
}


class TestGenericAssembly:
    def test_node_phases(self, make_app):
        plan = assemble_generic_plan(NodeProvider(), make_app(NODE_APP), Environment())

        assert plan.phase_names() == {"setup", "install", "build"}
        assert plan.edges() == {("install", "setup"), ("build", "install")}
        assert plan.get_phase("setup").nix_pkgs == [Pkg(name="pkgs.stdenv"), Pkg(name="nodejs-16_x")]
        assert plan.get_phase("install").cmds == ["npm install"]
        assert plan.get_phase("build").cmds == ["npm run build"]
        assert plan.start_phase.cmd == "npm run start"

    def test_no_build_script_omits_build(self, make_app):
        app = make_app({"package.json": {"name": "web"}, "index.js": ""})

        plan = assemble_generic_plan(NodeProvider(), app, Environment())

        assert plan.phase_names() == {"setup", "install"}
        assert plan.start_phase.cmd == "node index.js"

    def test_no_start_command(self, make_app):
        plan = assemble_generic_plan(NodeProvider(), make_app({"package.json": {}}), Environment())

        assert plan.start_phase is None

    def test_provider_variables(self, make_app):
        plan = assemble_generic_plan(NodeProvider(), make_app(NODE_APP), Environment())

        assert plan.variables == {"NODE_ENV": "production", "NPM_CONFIG_PRODUCTION": "false"}


class TestPlanGenerator:
    def test_records_provider(self, make_app):
        plan = PlanGenerator().generate(make_app(NODE_APP), Environment())

        assert plan.providers == ["node"]

    def test_deno_custom_plan(self, make_app):
        app = make_app({"deno.json": {"tasks": {"start": "deno task serve"}}, "index.ts": ""})

        plan = PlanGenerator().generate(app, Environment())

        assert plan.providers == ["deno"]
        assert plan.phase_names() == {"setup", "build"}
        assert plan.start_phase.cmd == "deno task serve"

    def test_user_variables_override_provider(self, make_app):
        env = Environment.from_envs(["NODE_ENV=staging", "PORT=8080", "STACKPLAN_USE_DENO_2=1"])

        plan = PlanGenerator().generate(make_app(NODE_APP), env)

        assert plan.variables == {
            "NODE_ENV": "staging",
            "NPM_CONFIG_PRODUCTION": "false",
            "PORT": "8080",
        }

    def test_forced_provider(self, make_app):
        app = make_app({"package.json": {"name": "web"}, "index.ts": ""})

        plan = PlanGenerator().generate(app, Environment(), provider_name="deno")

        assert plan.providers == ["deno"]
        assert plan.start_phase.cmd == "deno run --allow-all index.ts"

    def test_forced_unknown_provider(self, make_app):
        with pytest.raises(ValidationError):
            PlanGenerator().generate(make_app(NODE_APP), Environment(), provider_name="ruby")

    def test_no_provider(self, make_app):
        with pytest.raises(NoProviderMatchedError):
            PlanGenerator().generate(make_app({"README.md": ""}), Environment())

    def test_restricted_registry(self, make_app):
        generator = PlanGenerator(ProviderRegistry([NodeProvider()]))

        with pytest.raises(NoProviderMatchedError):
            generator.generate(make_app({"deno.json": {}}), Environment())

    @pytest.mark.parametrize(
        "files, error",
        [
            ({"package.json": {"engines": {"node": "15"}}}, UnsupportedVersionError),
            ({"package.json": "not json"}, ManifestError),
            ({"pixi.toml": '[tasks]\nbuild = "make"\n'}, MissingStartTaskError),
        ],
    )
    def test_provider_errors_propagate(self, make_app, files, error):
        with pytest.raises(error):
            PlanGenerator().generate(make_app(files), Environment())

    def test_plan_serializes(self, make_app):
        plan = generate_build_plan(make_app(NODE_APP))

        data = json.loads(plan.to_json())

        assert data["providers"] == ["node"]
        assert data["phases"]["setup"]["nix_pkgs"] == ["pkgs.stdenv", "nodejs-16_x"]
        assert data["start_phase"] == {"cmd": "npm run start"}


class TestOverrides:
    def test_install_override(self, make_app):
        env = Environment.from_envs(["STACKPLAN_INSTALL_CMD=npm ci"])

        plan = generate_build_plan(make_app(NODE_APP), env)

        install = plan.get_phase("install")
        assert install.cmds == ["npm ci"]
        assert install.depends_on == ["setup"]

    def test_build_override_adds_missing_phase(self, make_app):
        app = make_app({"package.json": {"name": "web"}, "index.js": ""})
        env = Environment.from_envs(["STACKPLAN_BUILD_CMD=make dist"])

        plan = generate_build_plan(app, env)

        assert plan.get_phase("build").cmds == ["make dist"]
        assert ("build", "install") in plan.edges()

    def test_start_override_replaces_derived(self, make_app):
        env = Environment.from_envs(["STACKPLAN_START_CMD=node worker.js"])

        plan = generate_build_plan(make_app(NODE_APP), env)

        assert plan.start_phase.cmd == "node worker.js"

    def test_pkgs_override_appends(self, make_app):
        env = Environment.from_envs(["STACKPLAN_PKGS=ffmpeg, imagemagick pkgs.stdenv"])

        plan = generate_build_plan(make_app(NODE_APP), env)

        assert plan.get_phase("setup").nix_pkgs == [
            Pkg(name="pkgs.stdenv"),
            Pkg(name="nodejs-16_x"),
            Pkg(name="ffmpeg"),
            Pkg(name="imagemagick"),
        ]

    def test_pkgs_override_creates_setup(self, make_app):
        env = Environment.from_envs(["STACKPLAN_PKGS=git"])
        plan = generate_build_plan(make_app({"deno.json": {}}), env)
        plan.phases.pop("setup")

        PlanGenerator().apply_overrides(plan, env)

        assert plan.get_phase("setup").nix_pkgs == [Pkg(name="git")]

    def test_config_flags_not_in_variables(self, make_app):
        env = Environment.from_envs(["STACKPLAN_START_CMD=node worker.js"])

        plan = generate_build_plan(make_app(NODE_APP), env)

        assert "STACKPLAN_START_CMD" not in plan.variables


class TestParsePkgs:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("git", ["git"]),
            ("git curl", ["git", "curl"]),
            ("git,curl", ["git", "curl"]),
            (" git ,  curl ", ["git", "curl"]),
        ],
    )
    def test_parse(self, value, expected):
        assert parse_pkgs(value) == [Pkg(name=name) for name in expected]
