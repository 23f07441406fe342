from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query

from ..errors import DataAccessError
from ..services.customer_svc import fetch_customers, fetch_filtered_customers

router = APIRouter()


@router.get("/api/customers")
def api_customers():
    try:
        return fetch_customers()
    except DataAccessError as e:
        raise HTTPException(status_code=500, detail=e.message)


@router.get("/api/customers/table")
def api_customers_table(query: str = Query("")):
    try:
        return fetch_filtered_customers(query)
    except DataAccessError as e:
        raise HTTPException(status_code=500, detail=e.message)
