"""
Configuration Accessor
======================

Environment variables supplied for a plan. Keys prefixed with
``STACKPLAN_`` are configuration flags for StackPlan itself; every other
key is a user variable merged into the plan.
"""

import os
from typing import Dict, Iterable, List, Mapping, Optional

from stackplan_common import ConfigDefaults, ValidationError


class Environment:
    """
    Immutable set of environment variables.

    Example:
        >>> env = Environment.from_envs(["STACKPLAN_USE_DENO_2=1", "PORT=8080"])
        >>> env.is_config_variable_truthy("USE_DENO_2")
        True
        >>> env.get_variable("PORT")
        '8080'
    """

    def __init__(self, variables: Optional[Mapping[str, str]] = None):
        self._variables: Dict[str, str] = dict(variables or {})

    def __repr__(self) -> str:
        return f"Environment(keys={sorted(self._variables)})"

    @classmethod
    def from_envs(cls, envs: Iterable[str]) -> "Environment":
        """
        Build from ``KEY=VALUE`` strings.

        A bare ``KEY`` takes its value from the current process environment.

        Raises:
            ValidationError: If a key is empty or a bare key is not set
        """
        variables: Dict[str, str] = {}
        for env in envs:
            if "=" in env:
                key, value = env.split("=", 1)
            else:
                key, value = env, os.environ.get(env)
                if value is None:
                    raise ValidationError(f"Environment variable '{env}' is not set")
            key = key.strip()
            if not key:
                raise ValidationError(f"Invalid environment assignment: '{env}'")
            variables[key] = value
        return cls(variables)

    @property
    def variables(self) -> Dict[str, str]:
        return dict(self._variables)

    def get_variable(self, name: str) -> Optional[str]:
        return self._variables.get(name)

    def get_variable_names(self) -> List[str]:
        return sorted(self._variables)

    def get_config_variable(self, name: str) -> Optional[str]:
        """Look up ``STACKPLAN_<name>``."""
        return self._variables.get(f"{ConfigDefaults.PREFIX}{name}")

    def is_config_variable_truthy(self, name: str) -> bool:
        value = self.get_config_variable(name)
        return value is not None and value.strip().lower() in ConfigDefaults.TRUTHY_VALUES

    def user_variables(self) -> Dict[str, str]:
        """Variables that are not StackPlan configuration flags."""
        return {
            key: value
            for key, value in self._variables.items()
            if not key.startswith(ConfigDefaults.PREFIX)
        }
