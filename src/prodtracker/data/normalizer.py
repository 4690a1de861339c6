from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from prodtracker.core.models import UNKNOWN_PROCESS, ProductionJob
from prodtracker.data.batches import BatchFailure, DelimitedBatch, RawBatch, RawRow, SheetBatch
from prodtracker.data.excel_io import cell_text, parse_int_lenient

logger = logging.getLogger(__name__)

# Positional layout shared by CSV exports and every workbook sheet.
COL_ID = 0
COL_JOB_NAME = 1
COL_CUT_TIME = 2
COL_QUANTITY = 3
COL_LINE = 4
COL_STATUS = 5
COL_PLAN_START = 6
COL_PLAN_FINISH = 7
COL_ACTUAL_START = 8
COL_ACTUAL_FINISH = 9

DEFAULT_JOB_NAME = "Unknown"
DEFAULT_LINE = "Line 1"
DEFAULT_STATUS = "Pending"
MISSING = "-"


class EmptyBatchError(ValueError):
    """A source batch produced no usable rows."""

    def __init__(self, source: str):
        super().__init__(f"no usable rows in {source!r}")
        self.source = source


@dataclass
class IngestResult:
    jobs: list[ProductionJob] = field(default_factory=list)
    failures: list[BatchFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    def extend(self, other: IngestResult) -> None:
        self.jobs.extend(other.jobs)
        self.failures.extend(other.failures)


class _IdCounter:
    """Per-batch id source; advances only when an id is synthesized."""

    def __init__(self, start: int = 1):
        self.next_id = start

    def resolve(self, raw) -> int:
        explicit = parse_int_lenient(raw)
        if explicit is not None:
            return explicit
        value = self.next_id
        self.next_id += 1
        return value


def _cell(row: RawRow, idx: int) -> str:
    # Rows may be shorter than the layout; missing trailing cells are empty.
    if idx >= len(row):
        return ""
    return cell_text(row[idx])


def _text_or(row: RawRow, idx: int, default: str) -> str:
    return _cell(row, idx) or default


def _is_blank(row: RawRow) -> bool:
    return all(not cell_text(v) for v in row)


def _data_rows(rows: Sequence[RawRow], *, has_header: bool) -> list[RawRow]:
    body = rows[1:] if has_header else rows
    return [r for r in body if not _is_blank(r)]


def normalize_row(row: RawRow, *, process: str, date: str, ids: _IdCounter) -> ProductionJob:
    process = str(process or "").strip() or UNKNOWN_PROCESS
    quantity = parse_int_lenient(row[COL_QUANTITY] if COL_QUANTITY < len(row) else None)
    return ProductionJob(
        job_id=ids.resolve(row[COL_ID] if row else None),
        job_name=_text_or(row, COL_JOB_NAME, DEFAULT_JOB_NAME),
        cut_time=_text_or(row, COL_CUT_TIME, MISSING),
        quantity=max(0, quantity or 0),
        line=_text_or(row, COL_LINE, DEFAULT_LINE),
        process=process,
        status=_text_or(row, COL_STATUS, DEFAULT_STATUS),
        plan_start=_text_or(row, COL_PLAN_START, MISSING),
        plan_finish=_text_or(row, COL_PLAN_FINISH, MISSING),
        actual_start=_text_or(row, COL_ACTUAL_START, MISSING),
        actual_finish=_text_or(row, COL_ACTUAL_FINISH, MISSING),
        date=date,
    )


def _normalize_delimited(batch: DelimitedBatch) -> list[ProductionJob]:
    ids = _IdCounter()
    return [
        normalize_row(r, process=batch.process, date=batch.date, ids=ids)
        for r in _data_rows(batch.rows, has_header=batch.has_header)
    ]


def _normalize_sheets(batch: SheetBatch) -> list[ProductionJob]:
    # One counter for the whole workbook, so sheets don't reuse synthetic ids.
    ids = _IdCounter()
    jobs: list[ProductionJob] = []
    for group in batch.groups:
        rows = _data_rows(group.rows, has_header=batch.has_header)
        if not rows:
            logger.debug("Skipping sheet %r in %s: no data rows", group.name, batch.source)
            continue
        jobs.extend(normalize_row(r, process=group.name, date=batch.date, ids=ids) for r in rows)
    return jobs


def normalize_batch(batch: RawBatch) -> list[ProductionJob]:
    """Map one raw batch into canonical jobs.

    Raises EmptyBatchError when nothing usable was found.
    """
    if isinstance(batch, SheetBatch):
        jobs = _normalize_sheets(batch)
    elif isinstance(batch, DelimitedBatch):
        jobs = _normalize_delimited(batch)
    else:
        raise TypeError(f"unsupported batch type: {type(batch).__name__}")

    if not jobs:
        raise EmptyBatchError(batch.source)
    logger.info("Normalized %d jobs from %s", len(jobs), batch.source)
    return jobs


def normalize_batches(batches: Iterable[RawBatch]) -> IngestResult:
    """Normalize independent batches; an empty one does not abort its siblings."""
    result = IngestResult()
    for batch in batches:
        try:
            result.jobs.extend(normalize_batch(batch))
        except EmptyBatchError as e:
            logger.warning("Skipping %s: %s", batch.source, e)
            result.failures.append(BatchFailure(source=batch.source, reason=str(e)))
    return result
