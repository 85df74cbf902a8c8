"""Common domain types."""
import secrets
import string
import time
from typing import Callable, Optional

_BASE36 = string.digits + string.ascii_lowercase


def random_suffix(length: int = 9) -> str:
    """Random lowercase base36 string."""
    return "".join(secrets.choice(_BASE36) for _ in range(length))


def generate_activity_id(index: int, clock: Optional[Callable[[], float]] = None) -> str:
    """Build an activity id from epoch milliseconds, the item's position in its batch and a random suffix."""
    now = (clock or time.time)()
    return f"{int(now * 1000)}-{index}-{random_suffix()}"
