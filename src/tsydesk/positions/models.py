"""Position types."""

from __future__ import annotations

from dataclasses import dataclass, field

from tsydesk.reference.products import Bond


@dataclass
class Position:
    """Signed position per book for one product."""

    product: Bond
    books: dict[str, int] = field(default_factory=dict)  # + Long, - Short

    @classmethod
    def empty(cls, ticker: str) -> Position:
        return cls(Bond.placeholder(ticker))

    @property
    def ticker(self) -> str:
        return self.product.ticker

    def get_position(self, book: str) -> int:
        return self.books.get(book, 0)

    def add_position(self, book: str, quantity: int) -> None:
        """Accumulate a signed quantity into book."""
        self.books[book] = self.books.get(book, 0) + quantity

    @property
    def aggregate_position(self) -> int:
        return sum(self.books.values())

    def __str__(self) -> str:
        per_book = "".join(f"{book}: {qty}, " for book, qty in sorted(self.books.items()))
        return f"{self.ticker}, {per_book}Total: {self.aggregate_position}"
