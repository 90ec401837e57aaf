import random
from typing import Any, Dict

from app.exceptions import PaymentValidationError
from app.processors.base import BaseProcessor
from app.services.rates import EXCHANGE_RATES, calculate_network_fee
from app.utils import random_base36

TX_HASH_PREFIXES = {
    "bitcoin": "1",
    "ethereum": "0x",
    "litecoin": "L",
    "dogecoin": "D",
    "cardano": "addr1",
    "solana": "",
}
TX_HASH_LENGTH = 30


def generate_tx_hash(method: str, rng: random.Random) -> str:
    """Synthetic hash shaped like the chain's address format. Not a real hash."""
    return TX_HASH_PREFIXES.get(method, "") + random_base36(TX_HASH_LENGTH, rng)


class CryptoProcessor(BaseProcessor):
    """
    bitcoin / ethereum / litecoin / dogecoin / cardano / solana.
    USD amount is converted at a fixed simulated rate; the crypto amount keeps
    8 decimal places. Network fee is informational and never deducted.
    """

    confirmation_prefix = "CRYPTO"
    failure_reasons = [
        "Network congestion",
        "Insufficient gas fees",
        "Invalid wallet address",
        "Transaction timeout",
    ]

    @property
    def processor_name(self) -> str:
        return "crypto"

    def build_payment_details(self, method: str, request: Dict[str, Any], amount: float) -> Dict[str, Any]:
        wallet_address = request.get("wallet_address")
        if not wallet_address:
            raise PaymentValidationError("Wallet address is required for crypto payments")

        rate = EXCHANGE_RATES[method]
        return {
            "crypto_type": method.upper(),
            "crypto_amount": f"{amount * rate:.8f}",
            "wallet_address": wallet_address,
            "exchange_rate": rate,
            "network_fee": calculate_network_fee(method),
            "transaction_hash": request.get("crypto_tx_hash") or None,
        }

    def completion_fields(self, method: str, transaction: Dict[str, Any], rng: random.Random) -> Dict[str, Any]:
        details = dict(transaction.get("payment_details") or {})
        if details.get("transaction_hash"):
            return {}
        details["transaction_hash"] = generate_tx_hash(method, rng)
        return {"payment_details": details}
