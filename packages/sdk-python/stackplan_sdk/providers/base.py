"""
Provider Contract
=================

A provider detects one ecosystem and contributes its build plan. Either
override ``get_build_plan`` for custom phase wiring, or leave it returning
None and implement the pieces (``pkgs``, ``install_cmd``,
``suggested_build_cmd``, ``suggested_start_command``,
``get_environment_variables``) for the generic setup -> install -> build
assembly.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from stackplan_schema import BuildPlan, Pkg

from ..app import App
from ..environment import Environment


class Provider(ABC):
    """Abstract base for ecosystem providers."""

    @abstractmethod
    def name(self) -> str:
        """Stable label used in logs and ``BuildPlan.providers``."""
        ...

    @abstractmethod
    def detect(self, app: App, env: Environment) -> bool:
        """
        Return True if this ecosystem's conventions are present.

        Must be read-only and idempotent. Check cheap signals (manifest
        existence) before expensive ones (glob expansion, content scans).
        """
        ...

    def pkgs(self, app: App, env: Environment) -> List[Pkg]:
        return []

    def install_cmd(self, app: App, env: Environment) -> Optional[str]:
        return None

    def suggested_build_cmd(self, app: App, env: Environment) -> Optional[str]:
        return None

    def suggested_start_command(self, app: App, env: Environment) -> Optional[str]:
        return None

    def get_environment_variables(self, app: App, env: Environment) -> Dict[str, str]:
        return {}

    def get_build_plan(self, app: App, env: Environment) -> Optional[BuildPlan]:
        """Return a fully custom plan, or None to use generic assembly."""
        return None

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name='{self.name()}')"
