"""Transaction CSV loader.

One record per line: ``date,category,amount``. Blank lines and ``#``
comments are skipped. Any malformed line aborts the whole load.
"""

from __future__ import annotations

import datetime as dt
from pathlib import Path
from typing import Iterable

from cardsim.engine.errors import ParseError, ValidationError
from cardsim.engine.transaction import Transaction, sort_transactions, to_amount
from cardsim.utils.config import resolve_path


def parse_transactions(lines: Iterable[str]) -> list[Transaction]:
    """Parse CSV lines into transactions sorted by date.

    Args:
        lines: Raw text lines (e.g. an open file or ``text.splitlines()``).

    Returns:
        Transactions in date order; same-date records keep file order.

    Raises:
        ParseError: Fewer than 3 fields, bad ISO date or bad amount. Carries
            the 1-based line number.
    """
    transactions: list[Transaction] = []

    for line_number, raw in enumerate(lines, start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue

        cols = [c.strip() for c in line.split(",")]
        if len(cols) < 3:
            raise ParseError(line_number, f"expected date,category,amount but got {line!r}")

        date_str, category, amount_str = cols[0], cols[1], cols[2]
        try:
            date = dt.date.fromisoformat(date_str)
        except ValueError as exc:
            raise ParseError(line_number, f"invalid date {date_str!r}") from exc
        try:
            amount = to_amount(amount_str)
        except ValidationError as exc:
            raise ParseError(line_number, f"invalid amount {amount_str!r}") from exc

        transactions.append(Transaction(date, category, amount))

    return sort_transactions(transactions)


def load_transactions(path: str | Path) -> list[Transaction]:
    """Load transactions from a CSV file.

    Relative paths are tried as-is first, then against the project root.

    Raises:
        FileNotFoundError: If the file does not exist.
        ParseError: If any record is malformed.
    """
    path = resolve_path(path)
    with open(path, "r", encoding="utf-8") as f:
        return parse_transactions(f)
