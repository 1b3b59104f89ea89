# app/routes_root.py
from flask import Blueprint, jsonify

root_bp = Blueprint("root_bp", __name__)


@root_bp.get("/")
def root():
    # no UI served here; the chat and admin pages talk to /api/*
    return jsonify(
        service="machine-tracker",
        endpoints=["POST /api/admin/upload", "POST /api/query", "GET /api/health/db"],
    )
