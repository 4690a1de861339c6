from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from prodtracker.core.policy import (
    DEFAULT_COMPLETED_MARKERS,
    DEFAULT_IN_PROGRESS_MARKERS,
    ROLLOVER_THRESHOLD_MIN,
    MetricsPolicy,
)
from prodtracker.data.batches import FLAT_PROCESS_LABEL


@dataclass(frozen=True)
class Settings:
    report_dir: Path
    log_level: str = "INFO"
    flat_process_label: str = FLAT_PROCESS_LABEL
    completed_markers: tuple[str, ...] = DEFAULT_COMPLETED_MARKERS
    in_progress_markers: tuple[str, ...] = DEFAULT_IN_PROGRESS_MARKERS
    rollover_threshold: int = ROLLOVER_THRESHOLD_MIN

    def metrics_policy(self) -> MetricsPolicy:
        return MetricsPolicy(
            completed_markers=tuple(self.completed_markers),
            in_progress_markers=tuple(self.in_progress_markers),
            rollover_threshold=int(self.rollover_threshold),
        )


def default_report_dir() -> Path:
    # Repo-local output folder, same place regardless of machine.
    return Path("reports")
