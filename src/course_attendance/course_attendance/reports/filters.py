from __future__ import annotations

from typing import Any, Optional, Sequence

from ..common.validators import optional_number
from .model import ReportEntry


def filter_by_min_percentage(entries: Sequence[ReportEntry], min_percentage: Optional[Any] = None) -> list[ReportEntry]:
    """Keep entries with ``percentage >= min_percentage``; pass through when no threshold.

    Runs strictly after aggregation, so the total-lectures denominator is never affected.
    """

    threshold = optional_number(min_percentage, "minPercentage")
    if threshold is None:
        return list(entries)
    return [e for e in entries if e.percentage >= threshold]
