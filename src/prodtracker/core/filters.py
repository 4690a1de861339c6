from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, replace

from prodtracker.core.models import JobMetrics, ProductionJob, process_key
from prodtracker.core.policy import DEFAULT_POLICY, MetricsPolicy
from prodtracker.core.time_metrics import job_metrics

ALL = "ALL"


class DelayFilter:
    ALL = "ALL"
    DELAYED = "DELAYED"
    ON_TIME = "ON_TIME"

    choices = (ALL, DELAYED, ON_TIME)


@dataclass(frozen=True)
class FilterState:
    date: str = ALL
    process: str = ALL
    job_name: str = ALL
    delay: str = DelayFilter.ALL

    def __post_init__(self) -> None:
        if self.delay not in DelayFilter.choices:
            raise ValueError(f"invalid delay filter: {self.delay!r}")

    @property
    def is_empty(self) -> bool:
        return self.date == ALL and self.process == ALL and self.job_name == ALL and self.delay == DelayFilter.ALL


def matches_delay(metrics: JobMetrics, delay: str) -> bool:
    """Jobs without a score are neither delayed nor on time."""
    if delay == DelayFilter.ALL:
        return True
    if metrics.score is None:
        return False
    if delay == DelayFilter.DELAYED:
        return metrics.delay > 0
    if delay == DelayFilter.ON_TIME:
        return metrics.delay == 0
    raise ValueError(f"invalid delay filter: {delay!r}")


def _by_date(jobs: Iterable[ProductionJob], date: str) -> list[ProductionJob]:
    if date == ALL:
        return list(jobs)
    return [j for j in jobs if j.date == date]


def _by_process(jobs: Iterable[ProductionJob], process: str) -> list[ProductionJob]:
    if process == ALL:
        return list(jobs)
    return [j for j in jobs if process_key(j) == process]


def apply_filters(
    jobs: Sequence[ProductionJob],
    state: FilterState,
    *,
    policy: MetricsPolicy = DEFAULT_POLICY,
) -> list[ProductionJob]:
    """AND of all selectors; input order is preserved."""
    if state.is_empty:
        return list(jobs)

    out = _by_process(_by_date(jobs, state.date), state.process)
    if state.job_name != ALL:
        out = [j for j in out if j.job_name == state.job_name]
    if state.delay != DelayFilter.ALL:
        out = [j for j in out if matches_delay(job_metrics(j, policy=policy), state.delay)]
    return out


def _unique(values: Iterable[str]) -> list[str]:
    seen: dict[str, None] = {}
    for v in values:
        seen.setdefault(v, None)
    return list(seen)


def available_dates(jobs: Iterable[ProductionJob]) -> list[str]:
    return sorted(_unique(j.date for j in jobs))


def available_processes(jobs: Iterable[ProductionJob], state: FilterState) -> list[str]:
    # First-seen order keeps sheet order from the workbook.
    return _unique(process_key(j) for j in _by_date(jobs, state.date))


def available_job_names(jobs: Iterable[ProductionJob], state: FilterState) -> list[str]:
    scoped = _by_process(_by_date(jobs, state.date), state.process)
    return sorted(_unique(j.job_name for j in scoped))


def reconcile(jobs: Sequence[ProductionJob], state: FilterState) -> FilterState:
    """Reset selectors that no longer have any matching rows to ALL."""
    if state.date != ALL and state.date not in available_dates(jobs):
        state = replace(state, date=ALL)
    if state.process != ALL and state.process not in available_processes(jobs, state):
        state = replace(state, process=ALL)
    if state.job_name != ALL and state.job_name not in available_job_names(jobs, state):
        state = replace(state, job_name=ALL)
    return state


def select(jobs: Sequence[ProductionJob], state: FilterState, **changes: str) -> FilterState:
    """Return a new state with ``changes`` applied and stale selectors reset."""
    unknown = set(changes) - {"date", "process", "job_name", "delay"}
    if unknown:
        raise ValueError(f"unsupported filter: {sorted(unknown)}")
    return reconcile(jobs, replace(state, **changes))
