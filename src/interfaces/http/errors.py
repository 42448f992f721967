"""JSON error bodies shared by the API blueprints."""

from __future__ import annotations

import logging

from flask import jsonify

from src.domain.errors import CatalogError, StoreError

logger = logging.getLogger(__name__)

GENERIC_MESSAGE = "An unexpected error occurred. Please try again later."


def error_response(code: str, message: str, status: int):
    return jsonify({"error": code, "message": message}), status


def catalog_error_response(exc: Exception, context: str):
    """Translate a store exception; unexpected ones are logged and hidden."""
    if isinstance(exc, CatalogError) and not isinstance(exc, StoreError):
        return error_response(exc.code, str(exc), exc.status_code)
    logger.error("%s: %s", context, exc, exc_info=True)
    return error_response("internal_error", GENERIC_MESSAGE, 500)


__all__ = ["error_response", "catalog_error_response", "GENERIC_MESSAGE"]
