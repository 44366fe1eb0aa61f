"""Core constants for TSYDesk."""

from decimal import Decimal
from enum import Enum


class PricingSide(str, Enum):
    """Side of a quote or market data order."""

    BID = "BID"
    OFFER = "OFFER"


class TradeSide(str, Enum):
    """Side of a booked trade or customer inquiry."""

    BUY = "BUY"
    SELL = "SELL"


class OrderType(str, Enum):
    """Execution order type."""

    FOK = "FOK"
    IOC = "IOC"
    MARKET = "MARKET"
    LIMIT = "LIMIT"
    STOP = "STOP"


class Market(str, Enum):
    """Execution venue."""

    BROKERTEC = "BROKERTEC"
    ESPEED = "ESPEED"
    CME = "CME"


class InquiryState(str, Enum):
    """Customer inquiry lifecycle state."""

    RECEIVED = "RECEIVED"
    QUOTED = "QUOTED"
    DONE = "DONE"
    REJECTED = "REJECTED"
    CUSTOMER_REJECTED = "CUSTOMER_REJECTED"


class BondIdType(str, Enum):
    """Bond identifier scheme."""

    CUSIP = "CUSIP"
    ISIN = "ISIN"


class ListenerErrorPolicy(str, Enum):
    """What a service does when one of its listeners raises."""

    PROPAGATE = "propagate"
    ISOLATE = "isolate"


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


# ============================================
# Default Values
# ============================================

DEFAULT_BOOKS = ("TRSY1", "TRSY2", "TRSY3")

# Smallest tick in handle notation is 1/256
PRICE_TICK = Decimal(1) / Decimal(256)
DEFAULT_AGGRESSIVENESS_THRESHOLD = Decimal(1) / Decimal(128)

DEFAULT_VISIBLE_QUANTITY_UNIT = 10_000_000
DEFAULT_HIDDEN_MULTIPLIER = 2

DEFAULT_QUOTE_PRICE = Decimal("100")
DEFAULT_VENUE = Market.CME

DEFAULT_GUI_THROTTLE_MS = 300
DEFAULT_GUI_MAX_UPDATES = 100

BOOK_DEPTH = 5

# ============================================
# Application Constants
# ============================================

APP_NAME = "tsydesk"
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
