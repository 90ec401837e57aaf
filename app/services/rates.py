"""
Fee, timing and success-rate tables for the payment simulator.

Every lookup falls back to a permissive default for methods it does not
know: no fee, a flat 3 second settlement, an 85% success rate. Whether a
method is accepted at all is decided earlier, by the processor allow-list.
"""
import random
from typing import Any, Dict, List, Optional, Tuple

CARD_METHODS = ("card", "credit-card", "debit-card")
CRYPTO_METHODS = ("bitcoin", "ethereum", "litecoin", "dogecoin", "cardano", "solana")
BANK_METHODS = ("bank-transfer", "wire-transfer")


PROCESSING_FEE_RATES: Dict[str, float] = {
    "card": 0.029,
    "credit-card": 0.029,
    "debit-card": 0.025,
    "bitcoin": 0.005,
    "ethereum": 0.01,
    "litecoin": 0.005,
    "dogecoin": 0.005,
    "cardano": 0.005,
    "solana": 0.005,
}

# (minimum ms, random span ms)
PROCESSING_TIME_WINDOWS: Dict[str, Tuple[int, int]] = {
    "card": (2000, 3000),
    "credit-card": (2000, 3000),
    "debit-card": (1000, 2000),
    "bitcoin": (10000, 20000),
    "ethereum": (5000, 10000),
    "litecoin": (3000, 7000),
    "dogecoin": (1000, 4000),
    "cardano": (2000, 5000),
    "solana": (1000, 2000),
    "paypal": (3000, 5000),
    "bank-transfer": (5000, 10000),
    "wire-transfer": (8000, 12000),
    "check": (1000, 2000),
}
DEFAULT_PROCESSING_TIME_MS = 3000

SUCCESS_RATES: Dict[str, float] = {
    "card": 0.85,
    "credit-card": 0.85,
    "debit-card": 0.90,
    "bitcoin": 0.95,
    "ethereum": 0.93,
    "litecoin": 0.95,
    "dogecoin": 0.97,
    "cardano": 0.95,
    "solana": 0.95,
}
DEFAULT_SUCCESS_RATE = 0.85

# 1 USD in each coin
EXCHANGE_RATES: Dict[str, float] = {
    "bitcoin": 0.000024,
    "ethereum": 0.0004,
    "litecoin": 0.0135,
    "dogecoin": 12.5,
    "cardano": 2.0,
    "solana": 0.01,
}

# Denominated in the coin itself
NETWORK_FEES: Dict[str, float] = {
    "bitcoin": 0.0001,
    "ethereum": 0.001,
    "litecoin": 0.001,
    "dogecoin": 1.0,
    "cardano": 0.17,
    "solana": 0.00025,
}


def is_card_payment(method: str) -> bool:
    return method in CARD_METHODS


def is_crypto_payment(method: str) -> bool:
    return method in CRYPTO_METHODS


def payment_family(method: str) -> str:
    """card / crypto / paypal / bank / check, or "other"."""
    if is_crypto_payment(method):
        return "crypto"
    if "card" in method:
        return "card"
    if "paypal" in method:
        return "paypal"
    if "transfer" in method:
        return "bank"
    if "check" in method:
        return "check"
    return "other"


def get_fee_rate(method: str) -> float:
    return PROCESSING_FEE_RATES.get(method, 0.0)


def calculate_processing_fee(method: str, amount: float) -> float:
    return round(amount * get_fee_rate(method), 2)


def calculate_network_fee(method: str) -> float:
    return NETWORK_FEES.get(method, 0.0)


def get_processing_window(method: str) -> Tuple[int, int]:
    return PROCESSING_TIME_WINDOWS.get(method, (DEFAULT_PROCESSING_TIME_MS, 0))


def get_processing_delay_ms(method: str, rng: Optional[random.Random] = None) -> float:
    """Draw a settlement delay uniformly from the method's [min, min + span) window."""
    rng = rng or random
    minimum, span = get_processing_window(method)
    return minimum + rng.random() * span


def get_success_rate(method: str) -> float:
    return SUCCESS_RATES.get(method, DEFAULT_SUCCESS_RATE)


def format_processing_time(ms: float) -> str:
    seconds = round(ms / 1000)
    if seconds < 60:
        return f"{seconds} seconds"
    minutes = round(seconds / 60)
    return f"{minutes} minute{'s' if minutes > 1 else ''}"


METHOD_CATALOG = {
    "card": ("Credit/Debit Card", ["USD"]),
    "bitcoin": ("Bitcoin", ["BTC"]),
    "ethereum": ("Ethereum", ["ETH"]),
    "litecoin": ("Litecoin", ["LTC"]),
    "dogecoin": ("Dogecoin", ["DOGE"]),
    "cardano": ("Cardano", ["ADA"]),
    "solana": ("Solana", ["SOL"]),
    "paypal": ("PayPal", ["USD"]),
    "bank-transfer": ("Bank Transfer", ["USD"]),
    "wire-transfer": ("Wire Transfer", ["USD"]),
    "check": ("Check", ["USD"]),
}


def payment_method_catalog() -> List[Dict[str, Any]]:
    """Public description of the selectable methods, derived from the tables above."""
    catalog = []
    for method, (name, currencies) in METHOD_CATALOG.items():
        minimum, span = get_processing_window(method)
        catalog.append({
            "id": method,
            "name": name,
            "fee": f"{get_fee_rate(method) * 100:.1f}%",
            "processing_time": f"{round(minimum / 1000)}-{round((minimum + span) / 1000)} seconds",
            "currencies": currencies,
        })
    return catalog
