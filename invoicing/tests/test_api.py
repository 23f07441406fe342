from __future__ import annotations

import sqlite3
from unittest.mock import patch

from .conftest import ALICE


def test_health_and_version(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json().get("status") == "ok"

    v = client.get("/version")
    assert v.status_code == 200
    assert v.json().get("app") == "invoicing-dashboard-api"


def test_dashboard_endpoints(client, sample_data):
    assert len(client.get("/api/revenue").json()) == 3

    chart = client.get("/api/revenue/chart").json()
    assert chart["top_label"] == 5000

    latest = client.get("/api/invoices/latest")
    assert latest.status_code == 200
    assert latest.json()[0]["amount"] == "$85.46"

    cards = client.get("/api/dashboard/cards").json()
    assert cards["number_of_invoices"] == 8


def test_invoices_list_with_pagination(client, sample_data):
    r = client.get("/api/invoices", params={"query": "", "page": 1})
    assert r.status_code == 200
    body = r.json()
    assert len(body["items"]) == 6
    assert body["total_pages"] == 2
    assert body["pagination"] == [1, 2]

    assert client.get("/api/invoices", params={"page": 0}).status_code == 422


def test_invoice_crud_roundtrip(client, sample_data):
    r = client.post("/api/invoices", json={"customer_id": ALICE, "amount": 12.34, "status": "pending"})
    assert r.status_code == 201
    invoice_id = r.json()["invoice"]["id"]

    got = client.get(f"/api/invoices/{invoice_id}").json()
    assert got["amount"] == 12.34

    r = client.put(f"/api/invoices/{invoice_id}", json={"customer_id": ALICE, "amount": 20, "status": "paid"})
    assert r.status_code == 200
    assert r.json()["invoice"]["amount"] == 2000

    assert client.delete(f"/api/invoices/{invoice_id}").status_code == 200
    assert client.get(f"/api/invoices/{invoice_id}").status_code == 404
    assert client.delete(f"/api/invoices/{invoice_id}").status_code == 404

    logs = client.get("/api/logs/search", params={"action": "CREATE_INVOICE"}).json()
    assert logs["total"] == 1
    assert logs["items"][0]["entity_id"] == invoice_id


def test_invoice_create_validation(client, sample_data):
    r = client.post("/api/invoices", json={"customer_id": "ghost", "amount": 0, "status": "paid"})
    assert r.status_code == 400
    detail = r.json()["detail"]
    assert set(detail["fields"]) == {"customer_id", "amount"}

    # status outside pending/paid is rejected by the request model
    r = client.post("/api/invoices", json={"customer_id": ALICE, "amount": 1, "status": "overdue"})
    assert r.status_code == 422


def test_customers_endpoints(client, sample_data):
    assert [c["name"] for c in client.get("/api/customers").json()] == ["Alice Adams", "Bob Brown", "Carol Chen"]
    table = client.get("/api/customers/table", params={"query": "alice"}).json()
    assert len(table) == 1 and table[0]["total_invoices"] == 4


def test_query_route(client, sample_data):
    r = client.get("/query")
    assert r.status_code == 200
    assert r.json() == [{"amount": 666, "name": "Alice Adams"}]


def test_query_route_error(client):
    with patch("invoicing.services.invoice_svc.get_conn", side_effect=sqlite3.OperationalError("boom")):
        r = client.get("/query")
    assert r.status_code == 500
    assert r.json() == {"message": "Failed to fetch invoices", "error": "boom"}


def test_read_error_returns_500_with_public_message(client):
    with patch("invoicing.services.utils.get_conn", side_effect=sqlite3.OperationalError("secret path")):
        r = client.get("/api/revenue")
    assert r.status_code == 500
    assert r.json()["detail"] == "Failed to fetch revenue data."


def test_settings_update_changes_page_size(client, sample_data):
    r = client.post("/api/settings/update", json={"updates": {"items_per_page": 3}})
    assert r.status_code == 200
    assert r.json()["updated"] == ["items_per_page"]
    assert client.get("/api/settings/get").json()["items_per_page"] == 3

    body = client.get("/api/invoices", params={"page": 2}).json()
    assert [i["id"] for i in body["items"]] == ["inv-5", "inv-4", "inv-3"]
    assert body["total_pages"] == 3

    bad = client.post("/api/settings/update", json={"updates": {"nope": 1}})
    assert bad.status_code == 400


def test_settings_update_rejects_out_of_range_and_non_integral(client):
    for updates in (
        {"bcrypt_rounds": 2},
        {"bcrypt_rounds": 32},
        {"items_per_page": 0},
        {"items_per_page": 1.9},
        {"latest_invoices_limit": True},
        {"diagnostic_amount": "abc"},
    ):
        r = client.post("/api/settings/update", json={"updates": updates})
        assert r.status_code == 400, updates

    # nothing was written by the rejected updates
    cfg = client.get("/api/settings/get").json()
    assert cfg["bcrypt_rounds"] == 10
    assert cfg["items_per_page"] == 6

    ok = client.post("/api/settings/update", json={"updates": {"bcrypt_rounds": 12, "items_per_page": 4.0}})
    assert ok.status_code == 200
    cfg = client.get("/api/settings/get").json()
    assert cfg["bcrypt_rounds"] == 12
    assert cfg["items_per_page"] == 4


def test_invoice_history_and_entity_log_filter(client, sample_data):
    created = client.post("/api/invoices", json={"customer_id": ALICE, "amount": 5, "status": "pending"}).json()
    invoice_id = created["invoice"]["id"]
    client.put(f"/api/invoices/{invoice_id}", json={"customer_id": ALICE, "amount": 7.5, "status": "paid"})
    # an unrelated edit must not show up in this invoice's trail
    client.put("/api/invoices/inv-1", json={"customer_id": ALICE, "amount": 1, "status": "paid"})
    # a failed update is logged as ERROR but left out of the history
    client.put(f"/api/invoices/{invoice_id}", json={"customer_id": "ghost", "amount": 1, "status": "paid"})

    history = client.get(f"/api/invoices/{invoice_id}/history").json()
    assert [h["action"] for h in history] == ["CREATE_INVOICE", "UPDATE_INVOICE"]
    assert history[0]["source"] == "api"
    assert history[1]["before"]["amount"] == 500
    assert history[1]["after"]["amount"] == 750

    logs = client.get("/api/logs/search", params={"entity_type": "invoice", "entity_id": invoice_id}).json()
    assert logs["total"] == 3
    assert {i["result"] for i in logs["items"]} == {"OK", "ERROR"}

    assert client.get("/api/invoices/unknown/history").json() == []
