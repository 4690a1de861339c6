"""Data package.

Decoding of CSV/workbook sources into raw batches and their normalization
into canonical ProductionJob records.
"""

from prodtracker.data.batches import BatchFailure, DelimitedBatch, RawGroup, SheetBatch
from prodtracker.data.ingest import ingest_files, ingest_files_async
from prodtracker.data.normalizer import EmptyBatchError, IngestResult, normalize_batch, normalize_batches

__all__ = [
    "BatchFailure",
    "DelimitedBatch",
    "EmptyBatchError",
    "IngestResult",
    "RawGroup",
    "SheetBatch",
    "ingest_files",
    "ingest_files_async",
    "normalize_batch",
    "normalize_batches",
]
