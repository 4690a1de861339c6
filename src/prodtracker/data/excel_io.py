from __future__ import annotations

import csv
import io
import logging
import re
import zipfile
from datetime import date, datetime, time, timezone
from pathlib import Path

import pandas as pd

from prodtracker.data.batches import FLAT_PROCESS_LABEL, DelimitedBatch, RawBatch, RawGroup, SheetBatch

logger = logging.getLogger(__name__)

CSV_SUFFIXES = {".csv"}
WORKBOOK_SUFFIXES = {".xlsx", ".xlsm"}


def _is_nan(value) -> bool:
    try:
        return isinstance(value, float) and pd.isna(value)
    except Exception:
        return False


def cell_text(value) -> str:
    """Coerce a loosely-typed spreadsheet cell into trimmed text.

    Time cells come back from openpyxl as datetime.time (or datetime when the
    cell also carries a date); both are rendered as HH:MM.
    """
    if value is None or _is_nan(value):
        return ""
    if value is pd.NaT:
        return ""

    if isinstance(value, datetime):
        if value.hour == 0 and value.minute == 0 and value.second == 0:
            return value.date().isoformat()
        return value.strftime("%H:%M")
    if isinstance(value, time):
        return value.strftime("%H:%M")
    if isinstance(value, date):
        return value.isoformat()

    if isinstance(value, float) and float(value).is_integer():
        return str(int(value))

    s = str(value).replace("\u00a0", " ").strip()
    if s.lower() == "nan":
        return ""
    return s


_INT_RE = re.compile(r"^[+-]?\d+(\.0+)?$")


def parse_int_lenient(value) -> int | None:
    """Parse an integer from Excel/CSV cells.

    Accepts ints, integral floats (12.0), digit strings ("12", "12.0") and
    thousands separators ("1,200"). Returns None otherwise.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return int(value)
    if isinstance(value, float):
        if _is_nan(value) or not float(value).is_integer():
            return None
        return int(value)

    s = cell_text(value).replace(",", "").replace(" ", "")
    if not s or not _INT_RE.match(s):
        return None
    return int(float(s)) if "." in s else int(s)


def read_workbook_bytes(content: bytes) -> list[RawGroup]:
    """Read every sheet of an .xlsx file, in workbook order."""
    bio = io.BytesIO(content)
    try:
        sheets = pd.read_excel(bio, sheet_name=None, header=None, dtype=object)
    except zipfile.BadZipFile as e:
        raise ValueError(f"invalid workbook: {e}") from e
    groups: list[RawGroup] = []
    for name, df in sheets.items():
        rows = tuple(tuple(r) for r in df.itertuples(index=False, name=None))
        groups.append(RawGroup(name=str(name), rows=rows))
    return groups


def read_csv_text(text: str) -> list[tuple]:
    """Read delimited text without interpreting the header.

    Rows may be wider or narrower than the first line; every row is padded to
    the widest one instead of failing the whole file.
    """
    if not text.strip():
        return []
    width = max((len(r) for r in csv.reader(io.StringIO(text))), default=0)
    if width == 0:
        return []
    try:
        df = pd.read_csv(
            io.StringIO(text),
            header=None,
            names=list(range(width)),
            dtype=str,
            keep_default_na=False,
            skipinitialspace=True,
            skip_blank_lines=True,
        )
    except pd.errors.EmptyDataError:
        return []
    except pd.errors.ParserError as e:
        raise ValueError(f"invalid CSV: {e}") from e
    return [tuple(r) for r in df.itertuples(index=False, name=None)]


def file_date(path: Path) -> str:
    """ISO date (UTC) of the file's last modification."""
    ts = Path(path).stat().st_mtime
    return datetime.fromtimestamp(ts, tz=timezone.utc).date().isoformat()


def batch_from_bytes(name: str, content: bytes, *, date: str, flat_process: str = FLAT_PROCESS_LABEL) -> RawBatch:
    suffix = Path(name).suffix.lower()
    if suffix in CSV_SUFFIXES:
        text = content.decode("utf-8-sig", errors="replace")
        return DelimitedBatch(source=name, date=date, rows=tuple(read_csv_text(text)), process=flat_process)
    if suffix in WORKBOOK_SUFFIXES:
        return SheetBatch(source=name, date=date, groups=tuple(read_workbook_bytes(content)))
    raise ValueError(f"unsupported file type: {name!r}")


def load_source(path: str | Path, *, date: str | None = None, flat_process: str = FLAT_PROCESS_LABEL) -> RawBatch:
    p = Path(path)
    day = date or file_date(p)
    logger.debug("Reading %s (date=%s)", p, day)
    return batch_from_bytes(p.name, p.read_bytes(), date=day, flat_process=flat_process)
