"""
StackPlan Build Plan Model

Pydantic models for the declarative build plan handed to renderers.

Design Principles:
- Pure data: phases carry commands and dependency edges, never execute them
- Edges are names: ``depends_on`` is not checked for existence or cycles here,
  the renderer resolves the graph
- One owner: a plan is built by one provider call, then handed off

Usage:
    from stackplan_schema import BuildPlan, Phase, Pkg, StartPhase

    plan = BuildPlan()
    plan.add_phase(Phase.setup([Pkg(name="deno")]))
    plan.set_start_phase(StartPhase(cmd="deno run --allow-all index.ts"))
    print(plan.to_json())
"""

from typing import Any, Dict, List, Optional, Set, Tuple

from pydantic import BaseModel, ConfigDict, field_validator, model_serializer, model_validator

from stackplan_common import PhaseNames, PlanConflictError, ValidationError

# =============================================================================
# PACKAGES
# =============================================================================


class Pkg(BaseModel):
    """
    Reference to a build-time package.

    Equality and hashing are by name only. Accepts and serializes to a
    bare string, so ``["deno"]`` and ``[Pkg(name="deno")]`` validate alike.
    """

    name: str

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="before")
    @classmethod
    def coerce_string(cls, data: Any) -> Any:
        if isinstance(data, str):
            return {"name": data}
        return data

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValidationError("Package name cannot be empty")
        return v

    @model_serializer
    def serialize(self) -> str:
        return self.name

    def __str__(self) -> str:
        return self.name


# =============================================================================
# PHASES
# =============================================================================


class Phase(BaseModel):
    """
    Named, orderable unit of build work.

    Attributes:
        name: Unique name within a plan
        cmds: Shell commands run in order
        depends_on: Names of phases that must run first
        nix_pkgs: Packages made available to this phase
        nixpkgs_archive: Override of the default package archive (archive pin)
        only_include_files: Source paths visible to this phase; ``[]`` means none,
            ``None`` means the whole tree
    """

    name: str
    cmds: Optional[List[str]] = None
    depends_on: Optional[List[str]] = None
    nix_pkgs: Optional[List[Pkg]] = None
    nixpkgs_archive: Optional[str] = None
    only_include_files: Optional[List[str]] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValidationError("Phase name cannot be empty")
        return v

    @classmethod
    def setup(cls, pkgs: Optional[List[Pkg]] = None) -> "Phase":
        """Phase that installs required packages. Has no dependencies."""
        return cls(name=PhaseNames.SETUP, nix_pkgs=list(pkgs) if pkgs else None)

    @classmethod
    def install(cls, cmd: Optional[str] = None) -> "Phase":
        """Phase that fetches dependencies. Depends on ``setup``."""
        return cls(
            name=PhaseNames.INSTALL,
            cmds=[cmd] if cmd else None,
            depends_on=[PhaseNames.SETUP],
        )

    @classmethod
    def build(cls, cmd: Optional[str] = None) -> "Phase":
        """Phase that builds the application. Depends on ``install``."""
        return cls(
            name=PhaseNames.BUILD,
            cmds=[cmd] if cmd else None,
            depends_on=[PhaseNames.INSTALL],
        )

    def add_cmd(self, cmd: str) -> None:
        self.cmds = [*(self.cmds or []), cmd]

    def depends_on_phase(self, name: str) -> None:
        """Add a dependency edge. Adding an existing edge is a no-op."""
        deps = self.depends_on or []
        if name not in deps:
            self.depends_on = [*deps, name]

    def add_nix_pkgs(self, pkgs: List[Pkg]) -> None:
        current = self.nix_pkgs or []
        self.nix_pkgs = current + [p for p in pkgs if p not in current]

    def pin(self, archive: Optional[str]) -> None:
        """Override the package archive this phase installs from."""
        self.nixpkgs_archive = archive


class StartPhase(BaseModel):
    """Runtime entry point. Holds exactly one command and no edges."""

    cmd: str

    @field_validator("cmd")
    @classmethod
    def validate_cmd(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValidationError("Start command cannot be empty")
        return v


# =============================================================================
# BUILD PLAN
# =============================================================================


class BuildPlan(BaseModel):
    """
    Aggregate output of a provider: phases, start phase, variables.

    Only ``add_phase``, ``set_start_phase`` and ``add_variables`` mutate a
    plan during assembly. Once returned to the caller it is treated as
    immutable by this package.
    """

    providers: Optional[List[str]] = None
    variables: Optional[Dict[str, str]] = None
    phases: Optional[Dict[str, Phase]] = None
    start_phase: Optional[StartPhase] = None

    @model_validator(mode="after")
    def validate_phase_keys(self) -> "BuildPlan":
        for key, phase in (self.phases or {}).items():
            if key != phase.name:
                raise ValidationError(f"Phase stored under '{key}' is named '{phase.name}'")
        return self

    def add_phase(self, phase: Phase) -> None:
        """
        Add a phase to the plan.

        Raises:
            PlanConflictError: If a phase with the same name already exists
        """
        phases = self.phases or {}
        if phase.name in phases:
            raise PlanConflictError(f"Phase '{phase.name}' already exists in plan")
        phases[phase.name] = phase
        self.phases = phases

    def get_phase(self, name: str) -> Optional[Phase]:
        return (self.phases or {}).get(name)

    def phase_names(self) -> Set[str]:
        return set(self.phases or {})

    def edges(self) -> Set[Tuple[str, str]]:
        """Dependency edges as ``(phase, depends_on)`` pairs."""
        return {
            (phase.name, dep)
            for phase in (self.phases or {}).values()
            for dep in phase.depends_on or []
        }

    def set_start_phase(self, start: StartPhase) -> None:
        """
        Set the start phase.

        Raises:
            PlanConflictError: If a start phase is already set
        """
        if self.start_phase is not None:
            raise PlanConflictError(
                f"Start phase already set to '{self.start_phase.cmd}'; "
                f"refusing to replace it with '{start.cmd}'"
            )
        self.start_phase = start

    def replace_start_phase(self, start: StartPhase) -> None:
        """Set the start phase, discarding any existing one."""
        self.start_phase = start

    def add_variables(self, variables: Dict[str, str]) -> None:
        """Merge variables; later writers override earlier keys."""
        if not variables:
            return
        self.variables = {**(self.variables or {}), **variables}

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)

    def to_json(self, indent: Optional[int] = 2) -> str:
        return self.model_dump_json(indent=indent, exclude_none=True)
