from typing import Dict, Optional

from app.processors.bank import BankTransferProcessor
from app.processors.base import BaseProcessor, GenericProcessor
from app.processors.card import CardProcessor
from app.processors.check import CheckProcessor
from app.processors.crypto import CryptoProcessor
from app.processors.paypal import PayPalProcessor
from app.services.rates import BANK_METHODS, CARD_METHODS, CRYPTO_METHODS, payment_family

_card = CardProcessor()
_crypto = CryptoProcessor()
_bank = BankTransferProcessor()
_paypal = PayPalProcessor()
_check = CheckProcessor()

# Allow-list: a method is supported iff it has a processor here
PROCESSOR_MAP: Dict[str, BaseProcessor] = {
    **{method: _card for method in CARD_METHODS},
    **{method: _crypto for method in CRYPTO_METHODS},
    **{method: _bank for method in BANK_METHODS},
    "paypal": _paypal,
    "check": _check,
}

FAMILY_PROCESSORS: Dict[str, BaseProcessor] = {
    "card": _card,
    "crypto": _crypto,
    "bank": _bank,
    "paypal": _paypal,
    "check": _check,
}

GENERIC_PROCESSOR = GenericProcessor()


def get_processor(method: str) -> Optional[BaseProcessor]:
    return PROCESSOR_MAP.get(method)


def resolve_processor(method: str) -> BaseProcessor:
    """
    Processor used at resolution time; never None.

    Stored records may carry method ids from before the allow-list existed,
    so unknown ids are matched by family before falling back to the generic one.
    """
    processor = PROCESSOR_MAP.get(method)
    if processor is None:
        processor = FAMILY_PROCESSORS.get(payment_family(method), GENERIC_PROCESSOR)
    return processor
