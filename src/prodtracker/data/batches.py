"""Raw input batches, before normalization.

A batch is one source file. Delimited text has no embedded grouping and is
tagged with a constant process label; workbooks carry one group per sheet
and the sheet name becomes the process.
"""
from __future__ import annotations

from dataclasses import dataclass

FLAT_PROCESS_LABEL = "Imported CSV"

RawRow = tuple


@dataclass(frozen=True)
class RawGroup:
    name: str
    rows: tuple[RawRow, ...]


@dataclass(frozen=True)
class DelimitedBatch:
    source: str
    date: str
    rows: tuple[RawRow, ...]
    process: str = FLAT_PROCESS_LABEL
    has_header: bool = True


@dataclass(frozen=True)
class SheetBatch:
    source: str
    date: str
    groups: tuple[RawGroup, ...]
    has_header: bool = True


RawBatch = DelimitedBatch | SheetBatch


@dataclass(frozen=True)
class BatchFailure:
    source: str
    reason: str
