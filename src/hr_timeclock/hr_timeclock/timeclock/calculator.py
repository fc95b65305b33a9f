from __future__ import annotations

from datetime import datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from ..core.constants import DEFAULT_HOURS_DECIMALS

_MICROSECONDS_PER_HOUR = Decimal(3_600_000_000)


class HoursCalculator:
    """Wall-clock hour arithmetic with explicit half-up rounding."""

    def __init__(self, decimals: int = DEFAULT_HOURS_DECIMALS):
        if decimals < 0:
            raise ValueError("decimals must be >= 0")
        self._quantum = Decimal(1).scaleb(-int(decimals))

    def round(self, value: Decimal) -> Decimal:
        return Decimal(value).quantize(self._quantum, rounding=ROUND_HALF_UP)

    def between(self, start: datetime, end: datetime) -> Decimal:
        """Hours from ``start`` to ``end``, never below 0."""
        micros = (end - start) // timedelta(microseconds=1)
        hours = Decimal(max(micros, 0)) / _MICROSECONDS_PER_HOUR
        return self.round(hours)

    def total(self, values: Iterable[Decimal]) -> Decimal:
        return self.round(sum((Decimal(v) for v in values), Decimal(0)))
