from __future__ import annotations

from flask import Blueprint, current_app, jsonify

from src.domain.errors import CatalogError

health_bp = Blueprint("health_bp", __name__)


@health_bp.route("/healthz")
def healthz():
    backend = current_app.config.get("CATALOG_BACKEND")
    try:
        current_app.extensions["catalog_store"].ping()
    except CatalogError as exc:
        return jsonify({"status": "degraded", "backend": backend, "error": str(exc)}), 503
    return jsonify({"status": "ok", "backend": backend}), 200
