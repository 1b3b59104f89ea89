# app/machines/service.py
"""
End-to-end handling of one question.

received -> sql_generated -> sql_validated -> executed -> explained -> responded

Any error before ``explained`` ends the session in ``failed`` and propagates;
a failed explanation only swaps in the localized fallback sentence.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from app.machines.completion import CompletionBackend
from app.machines.errors import MachineTrackerError
from app.machines.explain import explain_or_fallback
from app.machines.sqlgen import ensure_safe_sql, execute_select, generate_sql

log = logging.getLogger(__name__)


class QueryState:
    RECEIVED = "received"
    SQL_GENERATED = "sql_generated"
    SQL_VALIDATED = "sql_validated"
    EXECUTED = "executed"
    EXPLAINED = "explained"
    RESPONDED = "responded"
    FAILED = "failed"


class ViewMode:
    CARD = "CARD"
    TABLE = "TABLE"


def suggest_view(rows: List[Dict[str, Any]]) -> Optional[str]:
    if len(rows) == 1:
        return ViewMode.CARD
    if len(rows) > 1:
        return ViewMode.TABLE
    return None


@dataclass
class QuerySession:
    question: str
    lang: str = "en"
    model: str = "gemini"
    state: str = QueryState.RECEIVED
    sql: Optional[str] = None
    rows: List[Dict[str, Any]] = field(default_factory=list)
    answer: Optional[str] = None
    error: Optional[MachineTrackerError] = None

    def to_response(self) -> Dict[str, Any]:
        out = {
            "data": self.rows,
            "sql": self.sql,
            "directAnswer": self.answer,
        }
        view = suggest_view(self.rows)
        if view:
            out["view"] = view
        return out


def run_query(session: QuerySession, backend: CompletionBackend, engine) -> QuerySession:
    try:
        sql = generate_sql(session.question, backend)
        session.sql, session.state = sql, QueryState.SQL_GENERATED

        session.sql = ensure_safe_sql(sql)
        session.state = QueryState.SQL_VALIDATED

        session.rows = execute_select(engine, session.sql)
        session.state = QueryState.EXECUTED
    except MachineTrackerError as e:
        log.error("Query failed after state '%s': %s (%s)", session.state, e.message, e.details)
        session.error, session.state = e, QueryState.FAILED
        raise

    session.answer = explain_or_fallback(session.rows, session.question, session.lang, backend)
    session.state = QueryState.EXPLAINED
    return session
