from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from prodtracker.core import filters as fe
from prodtracker.core.aggregator import dashboard_kpis, summarize
from prodtracker.core.models import DashboardKpis, JobMetrics, ProcessSummary, ProductionJob
from prodtracker.core.policy import DEFAULT_POLICY, MetricsPolicy
from prodtracker.core.time_metrics import job_metrics


@dataclass(frozen=True)
class DashboardView:
    """Everything a table/chart/export collaborator needs for one filter state."""
    jobs: list[ProductionJob]
    metrics: list[JobMetrics]
    summaries: list[ProcessSummary]
    kpis: DashboardKpis
    dates: list[str]
    processes: list[str]
    job_names: list[str]


@dataclass(frozen=True)
class DashboardState:
    jobs: tuple[ProductionJob, ...] = ()
    filters: fe.FilterState = field(default_factory=fe.FilterState)
    policy: MetricsPolicy = DEFAULT_POLICY

    @classmethod
    def load(cls, jobs: Iterable[ProductionJob], *, policy: MetricsPolicy = DEFAULT_POLICY) -> DashboardState:
        return cls(jobs=tuple(jobs), filters=fe.FilterState(), policy=policy)

    def with_jobs(self, jobs: Iterable[ProductionJob]) -> DashboardState:
        """Swap the base collection, keeping only selectors that still match."""
        new_jobs = tuple(jobs)
        return DashboardState(jobs=new_jobs, filters=fe.reconcile(new_jobs, self.filters), policy=self.policy)

    def append(self, jobs: Iterable[ProductionJob]) -> DashboardState:
        return self.with_jobs(self.jobs + tuple(jobs))

    def select(self, **changes: str) -> DashboardState:
        return DashboardState(jobs=self.jobs, filters=fe.select(self.jobs, self.filters, **changes), policy=self.policy)

    def reset_filters(self) -> DashboardState:
        return DashboardState(jobs=self.jobs, filters=fe.FilterState(), policy=self.policy)

    def view(self) -> DashboardView:
        rows = fe.apply_filters(self.jobs, self.filters, policy=self.policy)
        return DashboardView(
            jobs=rows,
            metrics=[job_metrics(j, policy=self.policy) for j in rows],
            summaries=summarize(rows, policy=self.policy),
            kpis=dashboard_kpis(rows, policy=self.policy),
            dates=fe.available_dates(self.jobs),
            processes=fe.available_processes(self.jobs, self.filters),
            job_names=fe.available_job_names(self.jobs, self.filters),
        )
