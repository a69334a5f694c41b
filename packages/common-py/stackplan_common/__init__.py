"""StackPlan common utilities: errors, constants and structured logging."""

from .constants import (
    LOG_LEVELS,
    LOG_STREAMS,
    ConfigDefaults,
    DenoDefaults,
    NodeDefaults,
    PhaseNames,
    PixiDefaults,
)
from .errors import (
    ManifestError,
    MissingStartTaskError,
    NoProviderMatchedError,
    PlanConflictError,
    SourceNotFoundError,
    StackPlanError,
    UnsupportedVersionError,
    ValidationError,
)
from .logger import StackPlanLogger, configure_logging, get_logger

__all__ = [
    # Constants
    "LOG_LEVELS",
    "LOG_STREAMS",
    "ConfigDefaults",
    "DenoDefaults",
    "NodeDefaults",
    "PhaseNames",
    "PixiDefaults",
    # Errors
    "StackPlanError",
    "ValidationError",
    "ManifestError",
    "SourceNotFoundError",
    "UnsupportedVersionError",
    "MissingStartTaskError",
    "PlanConflictError",
    "NoProviderMatchedError",
    # Logging
    "StackPlanLogger",
    "get_logger",
    "configure_logging",
]
