"""
StackPlan schema: build plan graph and ecosystem manifest models.

Usage:
    from stackplan_schema import BuildPlan, Phase, StartPhase, Pkg
    from stackplan_schema import PackageJson
"""

from .manifests import DenoJson, DenoTasks, PackageJson, PixiTasks, PixiToml
from .plan import BuildPlan, Phase, Pkg, StartPhase

__all__ = [
    # Plan
    "BuildPlan",
    "Phase",
    "StartPhase",
    "Pkg",
    # Manifests
    "PackageJson",
    "DenoJson",
    "DenoTasks",
    "PixiToml",
    "PixiTasks",
]
