from __future__ import annotations

from .base import PercentageCalculator
from ...core.constants import PERCENTAGE_DECIMALS


class StandardPercentageCalculator(PercentageCalculator):
    """Standard rule: present / total * 100, rounded; zero lectures gives 0, never NaN."""

    def __init__(self, decimals: int = PERCENTAGE_DECIMALS):
        self._decimals = int(decimals)

    def percentage(self, present_count: int, total_lectures: int) -> float:
        if total_lectures <= 0:
            return 0.0
        value = present_count / total_lectures * 100
        return round(value, self._decimals)

