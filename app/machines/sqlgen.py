# app/machines/sqlgen.py
from __future__ import annotations

import logging
import re
from typing import Any, Dict, List

from sqlalchemy.exc import SQLAlchemyError

from app.machines.completion import CompletionBackend
from app.machines.errors import DatabaseQueryError, GenerationFailure, UnsafeQueryError
from app.machines.prompts import get_sql_prompt

log = logging.getLogger(__name__)

# ```sql / ```sqlite / bare ``` fences
_FENCE_RE = re.compile(r"```[A-Za-z0-9_-]*")


def strip_code_fences(text: str) -> str:
    return _FENCE_RE.sub("", text or "").strip()


def generate_sql(question: str, backend: CompletionBackend) -> str:
    """Ask the backend for SQL answering ``question``. Nothing is executed here."""
    prompt = get_sql_prompt(question)
    try:
        raw = backend.complete(prompt)
    except GenerationFailure:
        raise
    except Exception as e:
        raise GenerationFailure(details=str(e)) from e

    sql = strip_code_fences(raw)
    log.info("[AI - %s] Generated SQL: %s", backend.name, sql)
    return sql


def ensure_safe_sql(sql: str) -> str:
    """
    Textual gate: one statement, starting with SELECT. Returns the trimmed SQL.

    Any ';' counts as a second statement, trailing ones included.
    """
    candidate = (sql or "").strip()
    lowered = candidate.lower()
    if not lowered.startswith("select"):
        raise UnsafeQueryError(details="Only SELECT statements are allowed.")
    if ";" in lowered:
        raise UnsafeQueryError(details="Multiple statements are not allowed.")
    return candidate


def execute_select(engine, sql: str) -> List[Dict[str, Any]]:
    # exec_driver_sql: model-written text must not go through bind-param parsing
    try:
        with engine.connect() as conn:
            result = conn.exec_driver_sql(sql)
            return [dict(row) for row in result.mappings()]
    except SQLAlchemyError as e:
        log.error("SQL Execution Error: %s", e)
        raise DatabaseQueryError(details=str(getattr(e, "orig", None) or e)) from e
