"""Tests for plan analysis, filters, presets and duration formatting."""

from __future__ import annotations

import pytest

from cinemarathon.core.marathon import (
    MARATHON_PRESETS,
    analyze_plan,
    build_plan,
    filter_by_min_rating,
    filter_valid,
    format_minutes,
    get_preset_budget,
)
from cinemarathon.shared.constants import QualityLabels
from cinemarathon.shared.errors import ApplicationError, ErrorCode


class TestAnalyzePlan:
    """Test cases for analyze_plan."""

    def test_excellent_plan(self, make_enriched):
        plan = build_plan((make_enriched(1, rating=8.5, duration=120), make_enriched(2, rating=7.0, duration=60)), 240)

        report = analyze_plan(plan)

        assert report.time_utilization == pytest.approx(0.75)
        assert report.utilization_label == "75.0%"
        assert report.excellent_count == 1
        assert report.free_time == "1h 0m"
        assert report.quality == QualityLabels.EXCELLENT

    def test_good_plan(self, make_enriched):
        plan = build_plan((make_enriched(1, rating=6.5, duration=100),), 100)

        report = analyze_plan(plan)

        assert report.time_utilization == pytest.approx(1.0)
        assert report.excellent_count == 0
        assert report.quality == QualityLabels.GOOD

    def test_empty_plan(self):
        report = analyze_plan(build_plan((), 240))

        assert report.time_utilization == 0.0
        assert report.free_time == "4h 0m"
        assert report.quality == QualityLabels.GOOD

    def test_zero_budget_has_no_utilization(self):
        assert analyze_plan(build_plan((), 0)).time_utilization == 0.0


class TestFilters:
    """Test cases for candidate filters."""

    def test_filter_valid_preserves_order(self, make_enriched):
        movies = [make_enriched(3), make_enriched(1, duration=0), make_enriched(2)]

        assert [m.id for m in filter_valid(movies)] == [3, 2]

    def test_min_rating_is_inclusive(self, make_enriched):
        movies = [make_enriched(1, rating=6.0), make_enriched(2, rating=5.9)]

        assert [m.id for m in filter_by_min_rating(6.0, movies)] == [1]

    def test_filters_do_not_mutate_input(self, make_enriched):
        movies = [make_enriched(1, rating=1.0)]

        filter_by_min_rating(6.0, movies)

        assert len(movies) == 1


class TestPresets:
    """Test cases for named budgets."""

    @pytest.mark.parametrize(
        ("name", "minutes"),
        [("afternoon", 240), ("night", 360), ("weekend", 720), ("full_day", 960), ("Full-Day", 960)],
    )
    def test_known_presets(self, name, minutes):
        assert get_preset_budget(name) == minutes

    def test_unknown_preset(self):
        with pytest.raises(ApplicationError) as exc_info:
            get_preset_budget("fortnight")

        assert exc_info.value.code == ErrorCode.VALIDATION_ERROR
        assert "afternoon" in exc_info.value.message

    def test_presets_are_read_only(self):
        with pytest.raises(TypeError):
            MARATHON_PRESETS["night"] = 1  # type: ignore[index]


@pytest.mark.parametrize(
    ("minutes", "expected"),
    [(0, "0h 0m"), (59, "0h 59m"), (150, "2h 30m"), (960, "16h 0m"), (-20, "0h 0m")],
)
def test_format_minutes(minutes, expected):
    assert format_minutes(minutes) == expected
