"""Exception types raised by the simulation engine and its loaders."""

from __future__ import annotations


class CardSimError(Exception):
    """Base class for all cardsim errors."""


class ValidationError(CardSimError, ValueError):
    """A required value is missing or out of range. Nothing was computed."""


class ParseError(CardSimError, ValueError):
    """A transaction record could not be parsed.

    Attributes:
        line_number: 1-based line of the offending record.
    """

    def __init__(self, line_number: int, message: str):
        super().__init__(f"line {line_number}: {message}")
        self.line_number = line_number
