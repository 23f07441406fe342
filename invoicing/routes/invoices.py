from __future__ import annotations

from typing import Literal

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel

from ..errors import DataAccessError, NotFoundError, ValidationError
from ..logs import LogContext, entity_history
from ..domain.money import generate_pagination
from ..services.invoice_svc import (
    fetch_filtered_invoices,
    fetch_invoices_pages,
    fetch_invoice_by_id,
    create_invoice,
    update_invoice,
    delete_invoice,
)

router = APIRouter()


class InvoiceBody(BaseModel):
    customer_id: str
    amount: float  # dollars
    status: Literal["pending", "paid"]


def _validation_detail(e: ValidationError) -> dict:
    return {"message": e.message, "fields": e.fields}


@router.get("/api/invoices")
def api_invoices(query: str = Query(""), page: int = Query(1, ge=1)):
    try:
        items = fetch_filtered_invoices(query, page)
        pages = fetch_invoices_pages(query)
    except DataAccessError as e:
        raise HTTPException(status_code=500, detail=e.message)
    return {
        "items": items,
        "page": page,
        "total_pages": pages,
        "pagination": generate_pagination(page, pages),
    }


@router.get("/api/invoices/{invoice_id}")
def api_invoice_get(invoice_id: str):
    try:
        invoice = fetch_invoice_by_id(invoice_id)
    except DataAccessError as e:
        raise HTTPException(status_code=500, detail=e.message)
    if invoice is None:
        raise HTTPException(status_code=404, detail="Invoice not found")
    return invoice


@router.get("/api/invoices/{invoice_id}/history")
def api_invoice_history(invoice_id: str):
    """Successful create/update/delete operations on one invoice, oldest first."""
    return entity_history("invoice", invoice_id)


@router.post("/api/invoices", status_code=201)
def api_invoice_create(body: InvoiceBody):
    log = LogContext("CREATE_INVOICE")
    log.set_payload(body.model_dump())
    try:
        created = create_invoice(body.model_dump(), log)
        log.write("OK")
        return {"message": "ok", "invoice": created}
    except ValidationError as e:
        log.write("ERROR", e.message)
        raise HTTPException(status_code=400, detail=_validation_detail(e))
    except Exception as e:
        log.write("ERROR", str(e))
        raise HTTPException(status_code=500, detail="Database Error: Failed to Create Invoice.")


@router.put("/api/invoices/{invoice_id}")
def api_invoice_update(invoice_id: str, body: InvoiceBody):
    log = LogContext("UPDATE_INVOICE")
    log.set_payload(body.model_dump())
    try:
        updated = update_invoice(invoice_id, body.model_dump(), log)
        log.write("OK")
        return {"message": "ok", "invoice": updated}
    except NotFoundError as e:
        log.write("ERROR", e.message)
        raise HTTPException(status_code=404, detail=e.message)
    except ValidationError as e:
        log.write("ERROR", e.message)
        raise HTTPException(status_code=400, detail=_validation_detail(e))
    except Exception as e:
        log.write("ERROR", str(e))
        raise HTTPException(status_code=500, detail="Database Error: Failed to Update Invoice.")


@router.delete("/api/invoices/{invoice_id}")
def api_invoice_delete(invoice_id: str):
    log = LogContext("DELETE_INVOICE")
    try:
        delete_invoice(invoice_id, log)
        log.write("OK")
        return {"message": "Deleted Invoice."}
    except NotFoundError as e:
        log.write("ERROR", e.message)
        raise HTTPException(status_code=404, detail=e.message)
    except Exception as e:
        log.write("ERROR", str(e))
        raise HTTPException(status_code=500, detail="Database Error: Failed to Delete Invoice.")
