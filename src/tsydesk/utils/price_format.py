"""Treasury handle notation: "N-FF[x]".

N is the integer handle, FF the 32nds (00-31) and x the eighths of a 32nd
(0-7, with "+" standing for 4). "100-16+" is 100 + 16/32 + 4/256.
"""

from __future__ import annotations

import re
from decimal import ROUND_FLOOR, Decimal

_HANDLE_RE = re.compile(r"^(\d+)-(\d{2})([0-7+])$")

_THIRTY_SECOND = Decimal(32)
_TWO_FIFTY_SIXTH = Decimal(256)


def parse_price(text: str) -> Decimal:
    """
    Parse a handle-notation price into an exact Decimal.

    Raises:
        ValueError: If text is not valid handle notation.
    """
    match = _HANDLE_RE.match(text.strip())
    if not match:
        raise ValueError(f"Invalid handle price: {text!r}")

    handle, thirty_seconds, eighths = match.groups()
    if int(thirty_seconds) > 31:
        raise ValueError(f"32nds out of range in price: {text!r}")

    eighth = 4 if eighths == "+" else int(eighths)
    return Decimal(handle) + Decimal(thirty_seconds) / _THIRTY_SECOND + Decimal(eighth) / _TWO_FIFTY_SIXTH


def format_price(price: Decimal | float) -> str:
    """
    Format a price in handle notation, truncating below 1/256.

    Raises:
        ValueError: If price is negative.
    """
    value = price if isinstance(price, Decimal) else Decimal(price)
    if value < 0:
        raise ValueError(f"Cannot format negative price: {price}")

    handle = int(value.to_integral_value(rounding=ROUND_FLOOR))
    ticks = int(((value - handle) * _TWO_FIFTY_SIXTH).to_integral_value(rounding=ROUND_FLOOR))
    thirty_seconds, eighths = divmod(ticks, 8)

    eighth_text = "+" if eighths == 4 else str(eighths)
    return f"{handle}-{thirty_seconds:02d}{eighth_text}"
