# app/machines/prompts.py
"""
Prompt templates for the language model.

Bump SQL_INSTRUCTIONS_VERSION whenever the instruction text or the table
schema it describes changes.
"""
import json

SQL_INSTRUCTIONS_VERSION = "3"

SQL_INSTRUCTIONS = """
You translate questions about machine shipments into a single SQLite query.

TABLE machines (
  id               INTEGER PRIMARY KEY  -- row number, no business meaning
  customs          TEXT   -- customs clearance reference / status
  reference        TEXT   -- internal order or purchase reference
  machine          TEXT   -- machine model or name, e.g. 'CT2', 'ST14' (never NULL)
  pn               TEXT   -- part number
  etb              TEXT   -- estimated time of berthing, 'YYYY-MM-DD' or NULL
  eta_port         TEXT   -- estimated arrival at the port, 'YYYY-MM-DD' or NULL
  eta_destination  TEXT   -- estimated arrival at the final destination, 'YYYY-MM-DD' or NULL
  ship             TEXT   -- vessel name
  division         TEXT   -- business division that ordered the machine
  status           TEXT   -- free-text shipment status
  bl               TEXT   -- bill of lading number
)

RULES:
- Return exactly ONE read-only SELECT statement. Never INSERT, UPDATE, DELETE, DROP, ALTER, CREATE, PRAGMA or ATTACH.
- Do not end the statement with a semicolon and do not chain statements.
- Match text columns case-insensitively on substrings: LOWER(col) LIKE LOWER('%value%').
- NULL dates mean the date is still to be confirmed.
- Compare dates as 'YYYY-MM-DD' strings; use date('now') for today.
- Unless the question asks for specific columns or an aggregate, SELECT *.
- The question may be in Spanish, English, Portuguese or Swedish.
- Reply with the SQL only: no markdown, no code fences, no explanation.
""".strip()

CONTEXT_PROMPT_TEMPLATE = """
You are an assistant for a machine shipment tracking team.

A user asked: "{question}"

These rows were returned from the database (JSON):
{data}

Answer the question in ONE short sentence written in {lang}, using only the data above.
Mention the machine and the relevant dates or status. Do not mention SQL, tables or JSON.
""".strip()

LANGUAGE_NAMES = {
    "es": "Spanish",
    "en": "English",
    "pt": "Portuguese",
    "sv": "Swedish",
}


def get_sql_prompt(question: str) -> str:
    return f'{SQL_INSTRUCTIONS}\nQuestion: "{question}"\nSQL:'


def get_explanation_prompt(rows, question: str, lang: str) -> str:
    """
    Build the summary prompt for a small result set.

    Args:
        rows: Result rows as dicts
        question: The user's original question
        lang: Language code from the request; unknown codes are passed through as-is
    """
    return CONTEXT_PROMPT_TEMPLATE.format(
        data=json.dumps(rows, ensure_ascii=False, default=str),
        question=question,
        lang=LANGUAGE_NAMES.get((lang or "").lower(), lang or "English"),
    )
