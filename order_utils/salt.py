"""Per-order salt generation."""

import secrets
import time

# Random suffix width in decimal digits
_RANDOM_DIGITS = 18


def generate_order_salt() -> str:
    """Generate a fresh salt: millisecond timestamp followed by random digits.

    The result is a base-10 integer string, well inside uint256.
    """
    now_ms = int(time.time() * 1000)
    suffix = secrets.randbelow(10**_RANDOM_DIGITS)
    return str(int(f"{now_ms}{suffix:0{_RANDOM_DIGITS}d}"))
