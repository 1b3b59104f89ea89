# app/machines/explain.py
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from app.machines.completion import CompletionBackend
from app.machines.errors import ExplanationFailure
from app.machines.prompts import get_explanation_prompt
from app.machines.translations import get_translation

log = logging.getLogger(__name__)

# Summaries only for small, specific results (1..4 rows)
EXPLANATION_ROW_LIMIT = 5


def should_explain(rows: List[Dict[str, Any]]) -> bool:
    return 0 < len(rows) < EXPLANATION_ROW_LIMIT


def generate_explanation(rows: List[Dict[str, Any]], question: str, lang: str,
                         backend: CompletionBackend) -> Optional[str]:
    if not should_explain(rows):
        return None

    prompt = get_explanation_prompt(rows, question, lang)
    try:
        explanation = backend.complete(prompt)
    except Exception as e:
        raise ExplanationFailure(details=str(e)) from e

    explanation = (explanation or "").strip()
    log.info("[AI - %s] Generated Explanation: %s...", backend.name, explanation[:100])
    return explanation


def explain_or_fallback(rows: List[Dict[str, Any]], question: str, lang: str,
                        backend: CompletionBackend) -> Optional[str]:
    """Like generate_explanation, but a backend failure yields the localized fallback sentence."""
    try:
        return generate_explanation(rows, question, lang, backend)
    except ExplanationFailure as e:
        log.warning("[AI - %s] Explanation Generation Error: %s", backend.name, e.details)
        return get_translation(lang, "explanation_error")
