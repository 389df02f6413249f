"""Refresh orchestration."""

from edgeboard.runtime.orchestrator import DashboardSnapshot, RefreshOrchestrator, RefreshState

__all__ = ["DashboardSnapshot", "RefreshOrchestrator", "RefreshState"]
