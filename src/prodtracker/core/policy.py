from __future__ import annotations

from dataclasses import dataclass

DEFAULT_COMPLETED_MARKERS: tuple[str, ...] = ("เสร็จแล้ว", "completed")
DEFAULT_IN_PROGRESS_MARKERS: tuple[str, ...] = ("กำลัง", "in progress")

# Heuristic: an actual time more than half a day "before" the plan start is
# read as having rolled into the next day. Confirm with the plant before
# relying on it for audits.
ROLLOVER_THRESHOLD_MIN = 12 * 60

STATUS_COMPLETED = "completed"
STATUS_IN_PROGRESS = "in_progress"
STATUS_PENDING = "pending"


@dataclass(frozen=True)
class MetricsPolicy:
    """Plant-specific rules used when deriving job metrics.

    Status text is classified by case-insensitive substring markers. Status
    vocabularies differ per plant (Thai/English exports, suffixes like
    ``"เสร็จแล้ว @ 16:44"``), so the markers are data, not code.
    ``rollover_threshold`` is how far (minutes) an actual time may sit before
    the plan start before it is read as the next day.
    """

    completed_markers: tuple[str, ...] = DEFAULT_COMPLETED_MARKERS
    in_progress_markers: tuple[str, ...] = DEFAULT_IN_PROGRESS_MARKERS
    rollover_threshold: int = ROLLOVER_THRESHOLD_MIN

    def __post_init__(self) -> None:
        if not 0 <= self.rollover_threshold <= 24 * 60:
            raise ValueError(f"rollover threshold out of range: {self.rollover_threshold!r}")

    @staticmethod
    def _contains_any(text: str | None, markers: tuple[str, ...]) -> bool:
        s = str(text or "").casefold()
        if not s:
            return False
        return any(m and m.casefold() in s for m in markers)

    def is_completed(self, text: str | None) -> bool:
        return self._contains_any(text, self.completed_markers)

    def is_in_progress(self, text: str | None) -> bool:
        return self._contains_any(text, self.in_progress_markers)

    def category(self, text: str | None) -> str:
        if self.is_completed(text):
            return STATUS_COMPLETED
        if self.is_in_progress(text):
            return STATUS_IN_PROGRESS
        return STATUS_PENDING


DEFAULT_POLICY = MetricsPolicy()
