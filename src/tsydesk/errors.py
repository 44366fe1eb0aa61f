"""Exception hierarchy for TSYDesk."""


class TradingSystemError(Exception):
    """Base application error."""


class UnknownTickerError(TradingSystemError, KeyError):
    """Ticker is missing from the static reference data."""

    def __init__(self, ticker: str) -> None:
        self.ticker = ticker
        super().__init__(f"Unknown ticker: {ticker!r}")

    def __str__(self) -> str:
        return self.args[0]


class UnknownInquiryError(TradingSystemError, KeyError):
    """Inquiry id has never been ingested."""

    def __init__(self, inquiry_id: str) -> None:
        self.inquiry_id = inquiry_id
        super().__init__(f"Unknown inquiry: {inquiry_id!r}")

    def __str__(self) -> str:
        return self.args[0]


class MalformedRecordError(TradingSystemError, ValueError):
    """A feed record could not be turned into a typed event."""

    def __init__(self, line_no: int, line: str, reason: str) -> None:
        self.line_no = line_no
        self.line = line
        self.reason = reason
        super().__init__(f"Malformed record at line {line_no}: {reason} ({line!r})")
