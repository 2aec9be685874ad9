"""Decimal column values kept in their textual form."""

from __future__ import annotations

from dataclasses import dataclass

from mariapp.conversion import string_cast
from mariapp.types import ValueType


@dataclass(frozen=True)
class Decimal:
    """A DECIMAL value held exactly as the server's text."""

    text: str = ""

    def __str__(self):
        return self.text

    def float32(self):
        """The value as a single-precision float."""
        return string_cast(self.text, ValueType.FLOAT32)

    def double64(self):
        """The value as a double-precision float."""
        return string_cast(self.text, ValueType.DOUBLE64)