from __future__ import annotations

from fastapi import APIRouter, HTTPException

from ..errors import DataAccessError
from ..services.dashboard_svc import (
    fetch_revenue,
    fetch_latest_invoices,
    fetch_card_data,
    revenue_chart,
)

router = APIRouter()


@router.get("/api/revenue")
def api_revenue():
    try:
        return fetch_revenue()
    except DataAccessError as e:
        raise HTTPException(status_code=500, detail=e.message)


@router.get("/api/revenue/chart")
def api_revenue_chart():
    try:
        return revenue_chart()
    except DataAccessError as e:
        raise HTTPException(status_code=500, detail=e.message)


@router.get("/api/invoices/latest")
def api_latest_invoices():
    try:
        return fetch_latest_invoices()
    except DataAccessError as e:
        raise HTTPException(status_code=500, detail=e.message)


@router.get("/api/dashboard/cards")
def api_card_data():
    try:
        return fetch_card_data()
    except DataAccessError as e:
        raise HTTPException(status_code=500, detail=e.message)
