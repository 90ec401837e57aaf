"""
Integration tests for the HTTP API.

Uses FastAPI TestClient with the real app (minus lifespan). Stores are
in-memory, the scheduler only collects jobs, and outcomes are forced by
queueing draws on the shared ScriptedRandom.
"""
import asyncio
import pytest
from datetime import timedelta
from unittest.mock import patch

from tests.conftest import BASE_TIME, make_ticket, make_txn, payment_request


def camel_card_payload(**overrides):
    payload = {
        "amount": 1000,
        "paymentMethod": "card",
        "description": "Roof repair",
        "customerInfo": {"firstName": "Jane", "lastName": "Doe", "email": "jane@example.com"},
        "cardNumber": "4111111111111111",
        "expiryDate": "12/29",
        "cvv": "123",
        "cardName": "Jane Doe",
    }
    payload.update(overrides)
    return payload


# ---------------------------------------------------------------------------
# POST /api/payment
# ---------------------------------------------------------------------------
class TestSubmitPayment:
    def test_card_payment_accepted(self, client, stores, scheduler):
        resp = client.post("/api/payment", json=payment_request("card"))

        assert resp.status_code == 200
        body = resp.json()
        assert body["success"] is True
        assert body["transaction_id"].startswith("TXN_")
        assert body["message"] == "CARD payment is being processed. You will receive a confirmation shortly."
        assert body["estimated_processing_time"].endswith("seconds")
        assert body.get("payment_details") is None

        stored = stores.transactions.find_by_id(body["transaction_id"])
        assert stored["status"] == "processing"
        assert stored["processing_fee"] == 29.0
        assert stored["net_amount"] == 971.0
        assert len(scheduler.jobs) == 1

    def test_resolution_completes_and_notifies(self, client, stores, scheduler, notifier, rng):
        rng.values.extend([0.0, 0.0])
        txn_id = client.post("/api/payment", json=payment_request("card")).json()["transaction_id"]

        asyncio.run(scheduler.run_all())

        body = client.get(f"/api/payment/{txn_id}").json()
        assert body["transaction"]["status"] == "completed"
        assert body["transaction"]["confirmation_code"].startswith("CARD_")
        assert body["transaction"]["failure_reason"] is None
        assert [t["id"] for t in notifier.notified] == [txn_id]

    def test_resolution_fails(self, client, scheduler, notifier, rng):
        rng.values.extend([0.0, 0.99])
        txn_id = client.post("/api/payment", json=payment_request("card")).json()["transaction_id"]

        asyncio.run(scheduler.run_all())

        txn = client.get(f"/api/payment/{txn_id}").json()["transaction"]
        assert txn["status"] == "failed"
        assert txn["confirmation_code"] is None
        assert txn["failure_reason"]
        assert notifier.notified == []

    def test_crypto_summary_in_response(self, client):
        resp = client.post("/api/payment", json=payment_request("bitcoin", amount=500))

        assert resp.status_code == 200
        assert resp.json()["payment_details"] == {
            "crypto_amount": "0.01200000",
            "crypto_type": "BITCOIN",
            "network_fee": 0.0001,
        }
        assert resp.json()["message"].startswith("BITCOIN payment is being processed")

    def test_camel_case_payload(self, client, stores):
        resp = client.post("/api/payment", json=camel_card_payload())

        assert resp.status_code == 200
        stored = stores.transactions.find_by_id(resp.json()["transaction_id"])
        assert stored["customer_info"]["name"] == "Jane Doe"
        assert stored["payment_details"]["card_holder_name"] == "Jane Doe"

    def test_request_metadata_recorded(self, client, stores):
        resp = client.post("/api/payment", json=payment_request("paypal"), headers={"User-Agent": "site-form/1.0"})
        stored = stores.transactions.find_by_id(resp.json()["transaction_id"])
        assert stored["user_agent"] == "site-form/1.0"
        assert stored["ip_address"]

    def test_unsupported_method(self, client, stores, scheduler):
        resp = client.post("/api/payment", json=payment_request("unknown-method"))

        assert resp.status_code == 400
        assert resp.json() == {"error": "Unsupported payment method"}
        assert stores.transactions.count() == 0
        assert scheduler.jobs == []

    @pytest.mark.parametrize("overrides,message", [
        ({"amount": None}, "Amount, payment method, and customer info are required"),
        ({"amount": "-10"}, "Invalid payment amount"),
        ({"amount": True}, "Invalid payment amount"),
        ({"amount": False}, "Invalid payment amount"),
        ({"cvv": None}, "Card details are required for card payments"),
        ({"card_number": "1234"}, "Invalid card number"),
        ({"customer_info": {"name": "Jane"}}, "Customer name and email are required"),
    ])
    def test_validation_errors(self, client, overrides, message):
        resp = client.post("/api/payment", json=payment_request("card", **overrides))
        assert resp.status_code == 400
        assert resp.json()["error"] == message

    def test_boolean_amount_not_charged(self, client, stores, scheduler):
        resp = client.post("/api/payment", json=payment_request("card", amount=True))

        assert resp.status_code == 400
        assert resp.json() == {"error": "Invalid payment amount"}
        assert stores.transactions.count() == 0
        assert scheduler.jobs == []

    def test_crypto_without_wallet(self, client):
        resp = client.post("/api/payment", json=payment_request("ethereum", wallet_address=None))
        assert resp.status_code == 400
        assert resp.json()["error"] == "Wallet address is required for crypto payments"

    def test_unexpected_store_error(self, client, stores):
        with patch.object(stores.transactions, "create", side_effect=RuntimeError("disk full")):
            resp = client.post("/api/payment", json=payment_request("card"))

        assert resp.status_code == 500
        assert resp.json()["error"] == "Payment processing failed. Please try again or contact support."
        assert resp.json()["detail"] == "disk full"


# ---------------------------------------------------------------------------
# GET /api/payment/{id}, /api/payment-methods
# ---------------------------------------------------------------------------
class TestPaymentQueries:
    def test_status_of_unknown_transaction(self, client):
        resp = client.get("/api/payment/TXN_0_missing")
        assert resp.status_code == 404
        assert resp.json() == {"error": "Transaction not found"}

    def test_status_returns_record(self, client, stores):
        make_txn(stores.transactions, "txn_1", status="completed")
        body = client.get("/api/payment/txn_1").json()
        assert body["success"] is True
        assert body["transaction"]["confirmation_code"] == "CARD_TEST0001"

    def test_payment_methods(self, client):
        methods = client.get("/api/payment-methods").json()["payment_methods"]
        ids = [m["id"] for m in methods]
        assert "card" in ids and "bitcoin" in ids
        card = methods[ids.index("card")]
        assert card["fee"] == "2.9%"


# ---------------------------------------------------------------------------
# POST /api/contact, /api/quote
# ---------------------------------------------------------------------------
class TestIntake:
    def test_contact(self, client, stores, notifier):
        resp = client.post("/api/contact", json={
            "name": "Sam", "email": "sam@example.com", "projectType": "Residential", "message": "Hi",
        })

        assert resp.status_code == 200
        body = resp.json()
        assert body["message"] == "Your inquiry has been received! We will contact you soon."
        ticket = stores.tickets.find_by_id(body["ticket_id"])
        assert ticket["type"] == "contact"
        assert ticket["project_type"] == "Residential"
        assert len(notifier.tickets) == 1

    def test_quote(self, client, stores):
        resp = client.post("/api/quote", json={
            "name": "Sam", "email": "sam@example.com", "budget": "$10k", "description": "  Deck  ",
        })

        assert resp.status_code == 200
        ticket = stores.tickets.find_by_id(resp.json()["ticket_id"])
        assert ticket["type"] == "quote"
        assert ticket["description"] == "Deck"

    def test_contact_missing_email(self, client, stores):
        resp = client.post("/api/contact", json={"name": "Sam"})
        assert resp.status_code == 422
        assert stores.tickets.count() == 0


# ---------------------------------------------------------------------------
# /api/admin/*
# ---------------------------------------------------------------------------
class TestAdminTransactions:
    def test_filter_sort_and_limit(self, client, stores):
        for i in range(15):
            make_txn(stores.transactions, f"c{i:02d}", status="completed", timestamp=BASE_TIME + timedelta(minutes=i))
        make_txn(stores.transactions, "f1", status="failed")

        body = client.get("/api/admin/transactions", params={"status": "completed", "limit": 10, "sort": "asc"}).json()

        assert [t["id"] for t in body["transactions"]] == [f"c{i:02d}" for i in range(10)]
        assert body["pagination"] == {"skip": 0, "limit": 10, "count": 10, "total": 15}

    def test_default_newest_first(self, client, stores):
        make_txn(stores.transactions, "old", timestamp=BASE_TIME)
        make_txn(stores.transactions, "new", timestamp=BASE_TIME + timedelta(days=1))
        ids = [t["id"] for t in client.get("/api/admin/transactions").json()["transactions"]]
        assert ids == ["new", "old"]

    def test_limit_is_capped(self, client):
        body = client.get("/api/admin/transactions", params={"limit": 5000}).json()
        assert body["pagination"]["limit"] == 200

    def test_bad_sort_rejected(self, client):
        assert client.get("/api/admin/transactions", params={"sort": "sideways"}).status_code == 422

    def test_update_status(self, client, stores):
        make_txn(stores.transactions, "txn_1")
        resp = client.put("/api/admin/transactions/txn_1", json={"status": "completed"})

        assert resp.status_code == 200
        txn = resp.json()["transaction"]
        assert txn["status"] == "completed"
        assert txn["confirmation_code"].startswith("CARD_")
        assert txn["failure_reason"] is None
        assert txn["processed_at"] is not None
        assert stores.transactions.find_by_id("txn_1")["status"] == "completed"

    def test_update_terminal_rejected(self, client, stores):
        make_txn(stores.transactions, "txn_1", status="failed")
        resp = client.put("/api/admin/transactions/txn_1", json={"status": "completed"})

        assert resp.status_code == 400
        assert resp.json() == {"error": "Transaction already failed"}
        stored = stores.transactions.find_by_id("txn_1")
        assert stored["status"] == "failed"
        assert stored["confirmation_code"] is None

    def test_update_to_processing_rejected(self, client, stores):
        make_txn(stores.transactions, "txn_1", status="completed")
        resp = client.put("/api/admin/transactions/txn_1", json={"status": "processing"})
        assert resp.status_code == 400
        assert stores.transactions.find_by_id("txn_1")["status"] == "completed"

    def test_update_without_status(self, client, stores):
        make_txn(stores.transactions, "txn_1")
        resp = client.put("/api/admin/transactions/txn_1", json={})
        assert resp.status_code == 400
        assert resp.json() == {"error": "Status is required"}

    def test_update_unknown(self, client):
        resp = client.put("/api/admin/transactions/missing", json={"status": "completed"})
        assert resp.status_code == 404
        assert resp.json() == {"error": "Transaction not found"}


class TestAdminTickets:
    def test_filter_by_type(self, client, stores):
        make_ticket(stores.tickets, "T1", ticket_type="contact")
        make_ticket(stores.tickets, "T2", ticket_type="quote")

        body = client.get("/api/admin/tickets", params={"type": "quote"}).json()
        assert [t["id"] for t in body["tickets"]] == ["T2"]
        assert body["pagination"]["total"] == 1

    def test_respond_and_close(self, client, stores):
        make_ticket(stores.tickets, "T1")
        resp = client.put("/api/admin/tickets/T1", json={
            "status": "closed", "response": "All done", "adminName": "Alex",
        })

        assert resp.status_code == 200
        ticket = resp.json()["ticket"]
        assert ticket["status"] == "closed"
        assert ticket["responses"][0]["message"] == "All done"
        assert ticket["responses"][0]["admin_name"] == "Alex"
        assert ticket["updated_at"] is not None

    def test_invalid_status(self, client, stores):
        make_ticket(stores.tickets, "T1")
        resp = client.put("/api/admin/tickets/T1", json={"status": "archived"})
        assert resp.status_code == 400
        assert resp.json() == {"error": "Invalid status: archived"}

    def test_unknown_ticket(self, client):
        resp = client.put("/api/admin/tickets/missing", json={"status": "closed"})
        assert resp.status_code == 404


class TestDashboards:
    def test_admin_dashboard(self, client, stores):
        make_txn(stores.transactions, "a", amount=1000, status="completed")
        make_txn(stores.transactions, "b", amount=250, status="failed")
        make_ticket(stores.tickets, "T1")

        body = client.get("/api/admin/dashboard").json()

        assert body["total_transactions"] == 2
        assert body["completed_transactions"] == 1
        assert body["failed_transactions"] == 1
        assert body["total_revenue"] == 1000
        assert body["net_revenue"] == 971.0
        assert body["new_tickets"] == 1
        assert len(body["recent_transactions"]) == 2

    def test_client_dashboard(self, client, stores):
        make_txn(stores.transactions, "mine", amount=400, status="completed", email="me@example.com")
        make_txn(stores.transactions, "theirs", amount=900, status="completed", email="you@example.com")

        body = client.get("/api/client/dashboard", params={"email": "me@example.com"}).json()

        assert body["stats"]["total_transactions"] == 1
        assert body["stats"]["total_spent"] == 400
        assert [t["id"] for t in body["recent_transactions"]] == ["mine"]

    def test_client_dashboard_requires_email(self, client):
        assert client.get("/api/client/dashboard").status_code == 422


class TestMisc:
    def test_health(self, client):
        body = client.get("/api/health").json()
        assert body["status"] == "ok"
        assert body["version"] == "1.0.0"
        assert "timestamp" in body

    def test_company_info(self, client):
        body = client.get("/api/company-info").json()
        assert set(body) == {"name", "email", "phone", "address"}
