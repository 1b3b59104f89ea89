# app/machines/ingest/workbook.py
from __future__ import annotations

import logging
import zipfile
from typing import Any, Iterable, List, Sequence, Tuple

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from app.machines.errors import MalformedInputError
from app.machines.models import MACHINE_COLUMNS, UNKNOWN_MACHINE
from app.machines.normalize import normalize_date, normalize_part_number, passthrough

log = logging.getLogger(__name__)

COLUMN_COUNT = len(MACHINE_COLUMNS)  # A..K

# Strictly positional; header names in row 1 are ignored
_NORMALIZERS = {
    "pn": normalize_part_number,
    "etb": normalize_date,
    "eta_port": normalize_date,
    "eta_destination": normalize_date,
}


# -------------------------- helpers --------------------------

def _is_blank(v) -> bool:
    return not v or str(v).strip() == ""


def is_blank_row(cells: Sequence[Any]) -> bool:
    return all(_is_blank(v) for v in cells)


def _pad(row: Sequence[Any]) -> List[Any]:
    cells = list(row[:COLUMN_COUNT])
    return cells + [None] * (COLUMN_COUNT - len(cells))


def normalize_row(cells: Sequence[Any]) -> Tuple[Any, ...]:
    """Map the 11 positional cells to the values stored in MACHINE_COLUMNS order."""
    out = []
    for col, raw in zip(MACHINE_COLUMNS, cells):
        if col == "machine":
            out.append(raw or UNKNOWN_MACHINE)
            continue
        out.append(_NORMALIZERS.get(col, passthrough)(raw))
    return tuple(out)


# -------------------------- parsing --------------------------

def extract_rows(rows: Iterable[Sequence[Any]]) -> List[Tuple[Any, ...]]:
    """
    Turn worksheet rows (header first) into insert-ready tuples.

    Blank rows are skipped silently. Raises MalformedInputError when there is
    nothing beyond the header.
    """
    rows = list(rows)
    if len(rows) < 2:
        raise MalformedInputError()

    out: List[Tuple[Any, ...]] = []
    for row_number, row in enumerate(rows[1:], start=2):
        cells = _pad(row)
        if is_blank_row(cells):
            log.info("Skipping empty row %d.", row_number)
            continue
        out.append(normalize_row(cells))
    return out


def read_workbook_rows(source) -> List[Tuple[Any, ...]]:
    """Read the first worksheet of an .xlsx path or stream; other sheets are ignored."""
    try:
        wb = load_workbook(filename=source, data_only=True)
    except (InvalidFileException, zipfile.BadZipFile, KeyError, OSError) as e:
        raise MalformedInputError(f"Could not read Excel file: {e}") from e

    try:
        ws = wb.worksheets[0]
        rows = extract_rows(ws.iter_rows(min_row=1, max_col=COLUMN_COUNT, values_only=True))
    finally:
        wb.close()

    log.info("Parsed %d rows from sheet '%s'.", len(rows), ws.title)
    return rows
