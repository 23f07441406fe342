"""
FastAPI app entry point aggregating per-domain routers under invoicing/routes.
Run with `uvicorn invoicing.api:app`.
"""
from __future__ import annotations


from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .db import ensure_schema
from .logs import ensure_log_schema
from .services.config_svc import ensure_default_config


app = FastAPI(title="invoicing-dashboard-api", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
def on_startup():
    ensure_schema()
    ensure_log_schema()
    ensure_default_config()


# Include routers (split by business domain).
# dashboard goes before invoices so /api/invoices/latest is not read as an invoice id.
from .routes import base as base_routes
from .routes import dashboard as dashboard_routes
from .routes import invoices as invoices_routes
from .routes import customers as customers_routes
from .routes import query as query_routes
from .routes import settings as settings_routes
from .routes import logs as logs_routes

app.include_router(base_routes.router)
app.include_router(dashboard_routes.router)
app.include_router(invoices_routes.router)
app.include_router(customers_routes.router)
app.include_router(query_routes.router)
app.include_router(settings_routes.router)
app.include_router(logs_routes.router)
