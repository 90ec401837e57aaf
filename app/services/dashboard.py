"""
Dashboard aggregates over the record stores.

Revenue counts completed transactions only: gross sums `amount`, net sums
`net_amount`. Client dashboards correlate records by the customer email
copied onto each transaction/ticket, which is best-effort only.
"""
from typing import Any, Dict

from app.services.builder import STATUS_COMPLETED, STATUS_FAILED, STATUS_PROCESSING
from app.stores.base import RecordStore

RECENT_ADMIN_ITEMS = 5
RECENT_CLIENT_TRANSACTIONS = 5
RECENT_CLIENT_TICKETS = 3


def build_admin_dashboard(transactions: RecordStore, tickets: RecordStore) -> Dict[str, Any]:
    completed = transactions.find({"status": STATUS_COMPLETED})

    return {
        "total_transactions": transactions.count(),
        "completed_transactions": len(completed),
        "pending_transactions": transactions.count({"status": STATUS_PROCESSING}),
        "failed_transactions": transactions.count({"status": STATUS_FAILED}),
        "total_tickets": tickets.count(),
        "new_tickets": tickets.count({"status": "new"}),
        "total_revenue": round(sum(t["amount"] for t in completed), 2),
        "net_revenue": round(sum(t["net_amount"] for t in completed), 2),
        "recent_transactions": transactions.find(limit=RECENT_ADMIN_ITEMS, sort="desc"),
        "recent_tickets": tickets.find(limit=RECENT_ADMIN_ITEMS, sort="desc"),
    }


def build_client_dashboard(email: str, transactions: RecordStore, tickets: RecordStore) -> Dict[str, Any]:
    # customer_info is a nested document, so filter in Python
    user_transactions = [
        t for t in transactions.find(sort="desc")
        if (t.get("customer_info") or {}).get("email") == email
    ]
    user_tickets = tickets.find({"email": email}, sort="desc")

    return {
        "stats": {
            "total_transactions": len(user_transactions),
            "total_spent": round(
                sum(t["amount"] for t in user_transactions if t["status"] == STATUS_COMPLETED), 2
            ),
            "active_tickets": sum(1 for t in user_tickets if t["status"] != "closed"),
            "last_payment": user_transactions[0]["timestamp"] if user_transactions else None,
        },
        "recent_transactions": user_transactions[:RECENT_CLIENT_TRANSACTIONS],
        "recent_tickets": user_tickets[:RECENT_CLIENT_TICKETS],
    }
