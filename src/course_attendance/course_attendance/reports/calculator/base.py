from __future__ import annotations

from abc import ABC, abstractmethod


class PercentageCalculator(ABC):
    """Calculator interface (Strategy Pattern for attendance percentages)."""

    @abstractmethod
    def percentage(self, present_count: int, total_lectures: int) -> float:
        raise NotImplementedError
