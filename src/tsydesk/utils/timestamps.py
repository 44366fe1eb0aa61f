"""Wall-clock helpers for sink output."""

from __future__ import annotations

import time
from datetime import datetime

from tsydesk.constants import TIMESTAMP_FORMAT


def current_timestamp(now: datetime | None = None) -> str:
    """Local time with millisecond precision, e.g. 2024-01-03 09:30:00:042."""
    now = now or datetime.now()
    return f"{now.strftime(TIMESTAMP_FORMAT)}:{now.microsecond // 1000:03d}"


def epoch_millis() -> int:
    return int(time.time() * 1000)
