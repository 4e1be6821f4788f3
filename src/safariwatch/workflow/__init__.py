"""Scheduled monitoring workflow for safariwatch."""

from safariwatch.workflow.pipeline import (
    SafariMonitoringWorkflow,
    WorkflowTrigger,
    generate_report,
)

__all__ = ["SafariMonitoringWorkflow", "WorkflowTrigger", "generate_report"]
