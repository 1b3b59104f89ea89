# app/machines/ingest/replace.py
from __future__ import annotations

import logging
from typing import Any, List, Sequence

from sqlalchemy import insert
from sqlalchemy.exc import SQLAlchemyError

from app.machines.errors import InsertFailure
from app.machines.models import MACHINE_COLUMNS, Machine

log = logging.getLogger(__name__)


def replace_machines(engine, rows: Sequence[Sequence[Any]]) -> int:
    """
    Replace the whole machines table with ``rows`` (tuples in MACHINE_COLUMNS order).

    Drop, re-create and insert all run in one transaction: if anything fails
    the previous table is left as it was. Returns the number of rows inserted.
    """
    table = Machine.__table__
    params: List[dict] = [dict(zip(MACHINE_COLUMNS, row)) for row in rows]

    try:
        with engine.begin() as conn:
            table.drop(conn, checkfirst=True)
            table.create(conn)
            if params:
                conn.execute(insert(table), params)
    except SQLAlchemyError as e:
        log.error("Replace of '%s' rolled back: %s", table.name, e)
        raise InsertFailure(details=str(getattr(e, "orig", None) or e)) from e

    log.info("Transaction committed successfully. Inserted %d rows.", len(params))
    return len(params)
