# app/machines/routes.py
import os
import time

from flask import Blueprint, current_app, jsonify, request
from sqlalchemy import func, select
from werkzeug.exceptions import InternalServerError
from werkzeug.utils import secure_filename

from app.extensions import db
from app.machines.errors import MachineTrackerError, NoFileProvided
from app.machines.ingest import read_workbook_rows, replace_machines
from app.machines.models import Machine
from app.machines.service import QuerySession, QueryState, run_query

machines_api_bp = Blueprint("machines_api", __name__, url_prefix="/api")


# ------------------------------------------------------------------------------
# Errors -> JSON
# ------------------------------------------------------------------------------
@machines_api_bp.errorhandler(MachineTrackerError)
def handle_tracker_error(e):
    current_app.logger.error("%s %s failed: %s (%s)", request.method, request.path, e.message, e.details)
    return jsonify(e.to_dict()), e.status_code


@machines_api_bp.errorhandler(InternalServerError)
def handle_unexpected(e):
    original = getattr(e, "original_exception", None) or e
    current_app.logger.exception("%s %s crashed: %s", request.method, request.path, original)
    return jsonify({"ok": False, "error": "Unexpected server error"}), 500


def _temp_upload_path(filename: str) -> str:
    safe_name = secure_filename(filename).lower() or "upload.xlsx"
    return os.path.join(current_app.config["UPLOAD_FOLDER"], f"{int(time.time() * 1000)}-{safe_name}")


# ------------------------------------------------------------------------------
# Admin: replace the whole table from an .xlsx
# ------------------------------------------------------------------------------
@machines_api_bp.post("/admin/upload")
def admin_upload():
    file = request.files.get("file")
    if not file or file.filename == "":
        raise NoFileProvided()

    log = current_app.logger
    log.info("--- ADMIN UPLOAD START --- Received file: %s", file.filename)

    path = _temp_upload_path(file.filename)
    try:
        file.save(path)
        rows = read_workbook_rows(path)
        inserted = replace_machines(db.engine, rows)
    finally:
        try:
            os.remove(path)
            log.info("Cleaned up temporary file: %s", path)
        except FileNotFoundError:
            pass  # save never created it
        except OSError as e:
            log.error("Error deleting temp file %s: %s", path, e)

    log.info("--- ADMIN UPLOAD END --- %d rows", inserted)
    return jsonify({"ok": True, "rows": inserted})


# ------------------------------------------------------------------------------
# Chat: question -> SQL -> rows (+ short answer)
# ------------------------------------------------------------------------------
@machines_api_bp.post("/query")
def query_machines():
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        payload = {}
    question = str(payload.get("question") or "").strip()
    lang = str(payload.get("lang") or "en").strip().lower()
    model = str(payload.get("model") or current_app.config["DEFAULT_MODEL"]).strip().lower()

    if not question:
        return jsonify({"ok": False, "error": "Question is required"}), 400

    backend = current_app.extensions["completion_backends"].get(model)
    if backend is None:
        return jsonify({"ok": False, "error": "Invalid model specified"}), 400

    session = run_query(QuerySession(question=question, lang=lang, model=model), backend, db.engine)
    session.state = QueryState.RESPONDED
    return jsonify(session.to_response())


# Lightweight DB health
@machines_api_bp.get("/health/db")
def health_db():
    count = db.session.execute(select(func.count()).select_from(Machine)).scalar()
    return jsonify(ok=True, rows=count)
