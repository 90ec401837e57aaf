import random
from datetime import datetime, timezone
from typing import Optional

BASE36_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"


def utc_now() -> datetime:
    """Naive UTC timestamp, matching what the SQL DateTime columns store."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def random_base36(length: int, rng: Optional[random.Random] = None) -> str:
    rng = rng or random
    return "".join(rng.choice(BASE36_ALPHABET) for _ in range(length))


def epoch_ms(dt: datetime) -> int:
    return int(dt.replace(tzinfo=timezone.utc).timestamp() * 1000)
