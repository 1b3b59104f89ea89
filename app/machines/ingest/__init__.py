# app/machines/ingest/__init__.py
from .replace import replace_machines
from .workbook import extract_rows, read_workbook_rows

__all__ = ["extract_rows", "read_workbook_rows", "replace_machines"]
