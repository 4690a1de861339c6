from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from prodtracker.data.batches import FLAT_PROCESS_LABEL, BatchFailure
from prodtracker.data.excel_io import load_source
from prodtracker.data.normalizer import EmptyBatchError, IngestResult, normalize_batch

logger = logging.getLogger(__name__)


def _ingest_one(path: Path, date: str | None, flat_process: str = FLAT_PROCESS_LABEL) -> IngestResult:
    """Decode and normalize one file; failures come back as data, not exceptions."""
    try:
        batch = load_source(path, date=date, flat_process=flat_process)
        return IngestResult(jobs=normalize_batch(batch))
    except EmptyBatchError as e:
        logger.warning("Skipping %s: %s", path, e)
        return IngestResult(failures=[BatchFailure(source=path.name, reason=str(e))])
    except (OSError, ValueError) as e:
        logger.warning("Could not read %s: %s", path, e)
        return IngestResult(failures=[BatchFailure(source=path.name, reason=str(e))])


def _merge(results: Sequence[IngestResult]) -> IngestResult:
    merged = IngestResult()
    for r in results:
        merged.extend(r)
    logger.info("Ingested %d jobs (%d failed sources)", len(merged.jobs), len(merged.failures))
    return merged


def ingest_files(
    paths: Sequence[str | Path],
    *,
    date: str | None = None,
    flat_process: str = FLAT_PROCESS_LABEL,
    max_workers: int | None = None,
) -> IngestResult:
    """Read several files on worker threads.

    Files share no state, so they run independently; the merged result keeps
    submission order. ``date`` overrides the per-file modification date.
    """
    files = [Path(p) for p in paths]
    if not files:
        return IngestResult()
    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        results = list(pool.map(lambda p: _ingest_one(p, date, flat_process), files))
    return _merge(results)


async def ingest_files_async(
    paths: Sequence[str | Path],
    *,
    date: str | None = None,
    flat_process: str = FLAT_PROCESS_LABEL,
) -> IngestResult:
    # pandas/openpyxl parsing blocks; keep it off the event loop.
    files = [Path(p) for p in paths]
    results = await asyncio.gather(*(asyncio.to_thread(_ingest_one, p, date, flat_process) for p in files))
    return _merge(results)
