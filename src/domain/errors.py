"""Error taxonomy shared by the catalog and playlist stores.

Routes translate these into HTTP responses: ``ValidationError`` maps to 400,
``NotFoundError`` to 404 and ``StoreError`` to 500.
"""

from __future__ import annotations


class CatalogError(Exception):
    """Base class for store-level failures."""

    status_code = 500
    code = "internal_error"


class ValidationError(CatalogError):
    status_code = 400
    code = "invalid_request"


class NotFoundError(CatalogError):
    status_code = 404
    code = "not_found"


class StoreError(CatalogError):
    """Unexpected I/O or database failure."""


__all__ = ["CatalogError", "ValidationError", "NotFoundError", "StoreError"]
