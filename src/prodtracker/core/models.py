from __future__ import annotations

from dataclasses import dataclass

UNKNOWN_PROCESS = "Unknown"


@dataclass(frozen=True)
class ProductionJob:
    job_id: int
    job_name: str
    cut_time: str
    quantity: int
    line: str
    process: str
    status: str
    plan_start: str
    plan_finish: str
    actual_start: str
    actual_finish: str
    date: str


def process_key(job: ProductionJob) -> str:
    """Group name of a job; blank processes fall under UNKNOWN_PROCESS."""
    return str(job.process or "").strip() or UNKNOWN_PROCESS


@dataclass(frozen=True)
class TimeWindow:
    """Pair of minute offsets; finish may be pushed past 1440 when rolled."""
    start: int
    finish: int
    rolled: bool = False

    @property
    def duration(self) -> int:
        return self.finish - self.start


@dataclass(frozen=True)
class JobMetrics:
    planned_duration: int | None
    delay: int
    is_on_time: bool
    score: int | None
    deducted: int | None
    is_completed: bool
    start_delay: int | None = None

    @property
    def has_score(self) -> bool:
        return self.score is not None


@dataclass(frozen=True)
class ProcessSummary:
    process: str
    job_count: int
    quantity: int
    completed: int
    perfect_count: int
    delayed_count: int
    scored_count: int
    avg_score: int | None
    date: str | None = None


@dataclass(frozen=True)
class DashboardKpis:
    """Headline numbers shown above the job table."""
    job_count: int
    quantity: int
    completed: int
    avg_score: int | None
    delayed_jobs: int
    avg_delay: int
