from __future__ import annotations

import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from ..errors import DataAccessError
from ..services.invoice_svc import list_invoices_by_amount

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/query")
def api_query():
    """Diagnostic listing of invoices with the configured amount (666 cents by default)."""
    try:
        return list_invoices_by_amount()
    except DataAccessError as e:
        logger.error("Error fetching invoices: %s", e.message)
        return JSONResponse(
            status_code=500,
            content={"message": "Failed to fetch invoices", "error": e.message},
        )
