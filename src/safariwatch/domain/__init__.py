"""Domain models for safariwatch.

This package contains the core data structures, enumerations, and value
objects used throughout the system. All models use Pydantic v2 for
validation and serialization.
"""

from safariwatch.domain.models import (
    AnchorBrowserConfig,
    AnchorSessionConfig,
    CameraFeed,
    Confidence,
    CountResult,
    DiagnosticResult,
    DiagnosticStatus,
    SafariReport,
    SessionRequest,
    VisualTaskRequest,
    WorkflowRun,
)

__all__ = [
    "AnchorBrowserConfig",
    "AnchorSessionConfig",
    "CameraFeed",
    "Confidence",
    "CountResult",
    "DiagnosticResult",
    "DiagnosticStatus",
    "SafariReport",
    "SessionRequest",
    "VisualTaskRequest",
    "WorkflowRun",
]
