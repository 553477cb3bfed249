from __future__ import annotations

import pytest

from course_attendance.core.exceptions import ValidationError
from course_attendance.reports.filters import filter_by_min_percentage
from course_attendance.reports.model import ReportEntry

ENTRIES = [
    ReportEntry(student_id=1, present_count=0, total=4, percentage=0.0),
    ReportEntry(student_id=2, present_count=1, total=4, percentage=25.0),
    ReportEntry(student_id=3, present_count=3, total=4, percentage=75.0),
    ReportEntry(student_id=4, present_count=4, total=4, percentage=100.0),
]


@pytest.mark.parametrize("threshold", [-5, 0, 25, 25.01, 74.99, 75, 99, 100, 101])
def test_filter_keeps_exactly_entries_at_or_above_threshold(threshold):
    kept = filter_by_min_percentage(ENTRIES, threshold)

    assert kept == [e for e in ENTRIES if e.percentage >= threshold]


def test_no_threshold_passes_report_through():
    assert filter_by_min_percentage(ENTRIES) == ENTRIES
    assert filter_by_min_percentage(ENTRIES, None) == ENTRIES
    assert filter_by_min_percentage(ENTRIES, "") == ENTRIES


def test_filter_preserves_fields():
    (entry,) = filter_by_min_percentage(ENTRIES, 100)

    assert entry is ENTRIES[3]


def test_boolean_threshold_is_not_numeric():
    with pytest.raises(ValidationError):
        filter_by_min_percentage(ENTRIES, True)


@pytest.mark.parametrize("threshold", ["nan", "inf", "-inf", float("nan"), float("inf")])
def test_non_finite_threshold_is_rejected(threshold):
    with pytest.raises(ValidationError):
        filter_by_min_percentage(ENTRIES, threshold)


def test_non_finite_threshold_is_rejected_by_report(container):
    with pytest.raises(ValidationError):
        container.report_service.build_report(100, min_percentage="NaN")
