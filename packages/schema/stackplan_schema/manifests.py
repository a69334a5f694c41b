"""
Ecosystem Manifest Schemas

Pydantic models for the manifest files providers read. Models are pure
validation: the SDK reads and decodes the file, then validates the
resulting dict here.

Unknown fields are accepted; only fields that drive plan derivation are
declared.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict

# =============================================================================
# NODE
# =============================================================================


class PackageJson(BaseModel):
    """
    ``package.json`` fields used by the Node provider.

    Example:
        ```json
        {
          "name": "web",
          "main": "server.js",
          "scripts": {"build": "tsc", "start": "node dist/server.js"},
          "engines": {"node": ">=14.10.3 <16"}
        }
        ```
    """

    name: Optional[str] = None
    scripts: Optional[Dict[str, str]] = None
    engines: Optional[Dict[str, str]] = None
    main: Optional[str] = None

    model_config = ConfigDict(extra="allow")

    def has_script(self, name: str) -> bool:
        return bool(self.scripts) and name in self.scripts

    def engine(self, runtime: str) -> Optional[str]:
        """Declared version constraint for ``runtime``, if any."""
        return (self.engines or {}).get(runtime)


# =============================================================================
# DENO
# =============================================================================


class DenoTasks(BaseModel):
    start: Optional[str] = None

    model_config = ConfigDict(extra="allow")


class DenoJson(BaseModel):
    """``deno.json`` / ``deno.jsonc`` fields used by the Deno provider."""

    tasks: Optional[DenoTasks] = None

    model_config = ConfigDict(extra="allow")

    @property
    def start_task(self) -> Optional[str]:
        return self.tasks.start if self.tasks else None


# =============================================================================
# PIXI
# =============================================================================


class PixiTasks(BaseModel):
    """
    Pixi task table. Only the presence of ``build`` / ``start`` matters,
    never their content (a task may be a string or an inline table).
    """

    build: Optional[Any] = None
    start: Optional[Any] = None

    model_config = ConfigDict(extra="allow")


class PixiToml(BaseModel):
    """``pixi.toml``; the ``[tasks]`` table is required."""

    tasks: PixiTasks

    model_config = ConfigDict(extra="allow")

    def has_task(self, name: str) -> bool:
        return getattr(self.tasks, name, None) is not None or name in (
            self.tasks.model_extra or {}
        )
