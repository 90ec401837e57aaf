"""
Seeds the configured record store with sample transactions and tickets.

Each collection is only seeded when it is empty. With no DATABASE_URL the
in-memory store is used, which is only useful from tests or a REPL.
"""
import sys
import os
import logging
import random
from datetime import datetime

# Allow running from project root
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.config import get_settings
from app.logging_config import configure_logging
from app.processors import resolve_processor
from app.services.rates import calculate_processing_fee
from app.stores import Stores, build_stores

logger = logging.getLogger("seed_data")

# (id, amount, description, method, customer name, email, details, status, date)
SAMPLE_TRANSACTIONS = [
    ("TXN-001", 45000, "Initial deposit - Residential complex", "bank-transfer",
     "ABC Corp", "billing@abccorp.com", {"ref": "BT123"}, "completed", datetime(2024, 12, 20)),
    ("TXN-002", 32000, "Progress payment - Office building", "credit-card",
     "XYZ Ltd", "pay@xyz.com", {"card_last4": "4242", "card_type": "Visa"}, "processing", datetime(2024, 12, 19)),
    ("TXN-003", 78000, "Milestone - Warehouse foundation", "check",
     "Smith Enterprises", "acct@smithent.com", {"check_no": "987654"}, "completed", datetime(2024, 12, 18)),
    ("TXN-004", 25000, "Change order fee", "bank-transfer",
     "Johnson Co", "fin@johnson.co", {"ref": "BT456"}, "failed", datetime(2024, 12, 17)),
    ("TXN-005", 95000, "Final payment - Mall renovation", "wire-transfer",
     "Wilson Group", "ap@wilsongroup.com", {"swift": "WILSON123"}, "completed", datetime(2024, 12, 16)),
    ("TXN-006", 56000, "Equipment advance", "credit-card",
     "Brown LLC", "acc@brownllc.com", {"card_last4": "1881", "card_type": "Visa"}, "processing", datetime(2024, 12, 15)),
    ("TXN-007", 67000, "Progress payment", "bank-transfer",
     "Davis Inc", "billing@davis.inc", {"ref": "BT789"}, "completed", datetime(2024, 12, 14)),
]

# (type, name, email, phone, company, project type, budget, message, status, date, priority)
SAMPLE_TICKETS = [
    ("quote", "John Smith", "john@example.com", "555-1111", "Smith Ent.", "Residential", "$50k-$80k",
     "Need quote for house renovation", "new", datetime(2024, 12, 20), "high"),
    ("contact", "Sarah Johnson", "sarah@example.com", "555-2222", "SJ Holdings", "Commercial", None,
     "Office building construction", "in-progress", datetime(2024, 12, 19), "normal"),
    ("quote", "Mike Wilson", "mike@example.com", "555-3333", "Wilson Group", "Industrial", "$1M+",
     "Warehouse construction project", "closed", datetime(2024, 12, 18), "normal"),
    ("contact", "Lisa Brown", "lisa@example.com", "555-4444", "LB Homes", "Residential", None,
     "Kitchen remodeling questions", "new", datetime(2024, 12, 17), "normal"),
    ("quote", "David Davis", "david@example.com", "555-5555", "Davis Inc", "Commercial", "$500k-$800k",
     "Shopping center renovation quote", "in-progress", datetime(2024, 12, 16), "normal"),
    ("contact", "Emma Garcia", "emma@example.com", "555-6666", "EG Homes", "Residential", None,
     "Bathroom renovation inquiry", "new", datetime(2024, 12, 15), "normal"),
    ("quote", "James Martinez", "james@example.com", "555-7777", "JM Factory", "Industrial", None,
     "Factory extension project", "closed", datetime(2024, 12, 14), "normal"),
]


def make_transaction(txn_id, amount, description, method, name, email, details, status, created_at):
    rng = random.Random(txn_id)
    processor = resolve_processor(method)
    fee = calculate_processing_fee(method, amount)
    return {
        "id": txn_id,
        "amount": float(amount),
        "description": description,
        "payment_method": method,
        "customer_info": {
            "name": name,
            "email": email,
            "phone": "Not provided",
            "company": name,
            "address": "Not provided",
        },
        "payment_details": details,
        "status": status,
        "timestamp": created_at,
        "processing_fee": fee,
        "net_amount": round(amount - fee, 2),
        "confirmation_code": processor.generate_confirmation_code(rng) if status == "completed" else None,
        "failure_reason": processor.pick_failure_reason(rng) if status == "failed" else None,
        "processed_at": created_at if status != "processing" else None,
        "ip_address": None,
        "user_agent": None,
    }


def make_ticket(index, ticket_type, name, email, phone, company, project_type, budget, message,
                status, created_at, priority):
    return {
        "id": f"TKT-{index:03d}",
        "type": ticket_type,
        "name": name,
        "email": email,
        "phone": phone,
        "company": company,
        "project_type": project_type,
        "budget": budget,
        "timeline": None,
        "message": message,
        "description": None,
        "status": status,
        "priority": priority,
        "timestamp": created_at,
        "updated_at": None,
        "responses": [],
    }


def seed(stores: Stores) -> dict:
    inserted = {"transactions": 0, "tickets": 0}

    if stores.transactions.count() == 0:
        for row in SAMPLE_TRANSACTIONS:
            stores.transactions.create(make_transaction(*row))
        inserted["transactions"] = len(SAMPLE_TRANSACTIONS)
        logger.info("Inserted %d transactions", len(SAMPLE_TRANSACTIONS))
    else:
        logger.info("Transactions already exist, skipping")

    if stores.tickets.count() == 0:
        for i, row in enumerate(SAMPLE_TICKETS, start=1):
            stores.tickets.create(make_ticket(i, *row))
        inserted["tickets"] = len(SAMPLE_TICKETS)
        logger.info("Inserted %d tickets", len(SAMPLE_TICKETS))
    else:
        logger.info("Tickets already exist, skipping")

    return inserted


if __name__ == "__main__":
    settings = get_settings()
    configure_logging(settings.log_level)
    stores = build_stores(settings)
    result = seed(stores)
    print(f"Seeded {result['transactions']} transactions and {result['tickets']} tickets "
          f"into the {stores.transactions.backend_name} store")
