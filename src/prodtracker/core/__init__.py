"""Core package.

Pure computation over canonical job records: time metrics, aggregation,
filtering and the immutable dashboard state that ties them together.
"""

from prodtracker.core.aggregator import dashboard_kpis, summarize, volume_by_process
from prodtracker.core.dashboard import DashboardState, DashboardView
from prodtracker.core.filters import (
    ALL,
    DelayFilter,
    FilterState,
    apply_filters,
    available_dates,
    available_job_names,
    available_processes,
    select,
)
from prodtracker.core.models import DashboardKpis, JobMetrics, ProcessSummary, ProductionJob, TimeWindow
from prodtracker.core.policy import MetricsPolicy
from prodtracker.core.time_metrics import compute_metrics, job_metrics, to_minutes

__all__ = [
    "ALL",
    "DashboardKpis",
    "DashboardState",
    "DashboardView",
    "DelayFilter",
    "FilterState",
    "JobMetrics",
    "MetricsPolicy",
    "ProcessSummary",
    "ProductionJob",
    "TimeWindow",
    "apply_filters",
    "available_dates",
    "available_job_names",
    "available_processes",
    "compute_metrics",
    "dashboard_kpis",
    "job_metrics",
    "select",
    "summarize",
    "to_minutes",
    "volume_by_process",
]
