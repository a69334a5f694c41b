"""Tests for manifest models."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from stackplan_schema.manifests import DenoJson, PackageJson, PixiToml


class TestPackageJson:
    """Tests for PackageJson."""

    def test_minimal(self):
        package_json = PackageJson.model_validate({})

        assert package_json.name is None
        assert not package_json.has_script("build")
        assert package_json.engine("node") is None

    def test_fields(self):
        package_json = PackageJson.model_validate(
            {
                "name": "web",
                "main": "server.js",
                "scripts": {"build": "tsc", "start": "node dist/server.js"},
                "engines": {"node": "14.x"},
                "dependencies": {"express": "^4.18.0"},
            }
        )

        assert package_json.has_script("build")
        assert package_json.has_script("start")
        assert not package_json.has_script("test")
        assert package_json.engine("node") == "14.x"
        assert package_json.main == "server.js"

    def test_non_string_script_fails(self):
        with pytest.raises(PydanticValidationError):
            PackageJson.model_validate({"scripts": {"build": ["tsc"]}})


class TestDenoJson:
    """Tests for DenoJson."""

    def test_start_task(self):
        deno_json = DenoJson.model_validate({"tasks": {"start": "deno run main.ts"}})

        assert deno_json.start_task == "deno run main.ts"

    def test_no_tasks(self):
        assert DenoJson.model_validate({"imports": {}}).start_task is None

    def test_tasks_without_start(self):
        assert DenoJson.model_validate({"tasks": {"dev": "deno run -A dev.ts"}}).start_task is None


class TestPixiToml:
    """Tests for PixiToml."""

    def test_presence_only(self):
        config = PixiToml.model_validate({"tasks": {"build": {"cmd": "make"}, "start": "python app.py"}})

        assert config.has_task("build")
        assert config.has_task("start")

    def test_missing_tasks(self):
        config = PixiToml.model_validate({"tasks": {"lint": "ruff ."}})

        assert not config.has_task("build")
        assert not config.has_task("start")
        assert config.has_task("lint")

    def test_tasks_table_required(self):
        with pytest.raises(PydanticValidationError):
            PixiToml.model_validate({"project": {"name": "demo"}})
