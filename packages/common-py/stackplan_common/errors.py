"""
StackPlan Exception Classes

This module defines the exception hierarchy for all StackPlan packages.
All custom exceptions inherit from StackPlanError to enable consistent error handling.

Usage:
    from stackplan_common.errors import ManifestError, UnsupportedVersionError

    if not app.includes_file("package.json"):
        raise ManifestError("package.json not found")
"""

from typing import Any, Dict, Optional


class StackPlanError(Exception):
    """
    Base exception for all StackPlan errors.

    All custom StackPlan exceptions should inherit from this class to enable
    consistent error handling across packages.

    Attributes:
        message: Human-readable error message
        code: Error code for programmatic handling
    """

    def __init__(self, message: str, code: str = "INTERNAL_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize error to dictionary for CLI/JSON output.

        Returns:
            dict with error details including class name, code, and message
        """
        return {
            "error": self.__class__.__name__,
            "code": self.code,
            "message": self.message,
        }

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code='{self.code}', message='{self.message}')"


class ValidationError(StackPlanError):
    """
    Raised when input validation fails.

    Use this for:
    - Empty phase names or commands
    - Malformed environment assignments
    - Invalid values passed to plan models

    Example:
        if not cmd.strip():
            raise ValidationError("Start command cannot be empty")
    """

    def __init__(self, message: str):
        super().__init__(message, code="VALIDATION_ERROR")


class ManifestError(StackPlanError):
    """
    Raised when a manifest file cannot be read or parsed.

    The underlying error (I/O, JSON, TOML or schema) is included in the
    message and chained as ``__cause__`` by the raiser.

    Example:
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise ManifestError(f"Failed to parse {path}: {e}", path=path) from e
    """

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message, code="MANIFEST_ERROR")
        self.path = path


class SourceNotFoundError(StackPlanError):
    """
    Raised when the application source directory does not exist.

    Example:
        if not source.is_dir():
            raise SourceNotFoundError(f"Source directory '{source}' not found")
    """

    def __init__(self, message: str):
        super().__init__(message, code="SOURCE_NOT_FOUND")


class UnsupportedVersionError(ValidationError):
    """
    Raised when a declared runtime version is not in the supported allow-list.

    Never replaced by a default package: the rejected value is always surfaced.

    Example:
        if version not in supported:
            raise UnsupportedVersionError("Node", version)
    """

    def __init__(self, runtime: str, version: int):
        super().__init__(f"{runtime} version {version} is not available")
        self.code = "UNSUPPORTED_VERSION"
        self.runtime = runtime
        self.version = version


class MissingStartTaskError(StackPlanError):
    """
    Raised when a manifest that must declare a start task does not.

    Example:
        if tasks.start is None:
            raise MissingStartTaskError("No start task provided; please add one to your pixi.toml.")
    """

    def __init__(self, message: str):
        super().__init__(message, code="MISSING_START_TASK")


class PlanConflictError(StackPlanError):
    """
    Raised when assembling a build plan would overwrite existing state.

    Use this for:
    - Adding a phase whose name is already taken
    - Setting a start phase twice

    Example:
        if phase.name in self.phases:
            raise PlanConflictError(f"Phase '{phase.name}' already exists in plan")
    """

    def __init__(self, message: str):
        super().__init__(message, code="PLAN_CONFLICT")


class NoProviderMatchedError(StackPlanError):
    """
    Raised when no registered provider detects the application.

    Callers decide the fallback policy (e.g. force a provider by name).
    """

    def __init__(self, message: str):
        super().__init__(message, code="NO_PROVIDER_MATCHED")
