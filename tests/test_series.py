"""Tests for the Series Aggregator and active-day counters."""

from datetime import date, timedelta

import pytest

from habitscore.series import (
    SeriesPoint,
    active_days_this_month,
    active_days_this_week,
    build_charts,
    build_series,
    day_series,
    month_series,
    week_series,
)


TODAY = date(2025, 3, 5)  # a Wednesday


# ═══════════════════════════════════════════════════════════════════════════
# Day mode
# ═══════════════════════════════════════════════════════════════════════════

class TestDaySeries:
    def test_always_thirty_points(self):
        assert len(day_series({}, TODAY, 4)) == 30
        assert len(day_series({"2025-03-01": 2}, TODAY, 4)) == 30

    def test_ascending_without_gaps(self):
        points = day_series({}, TODAY, 4)
        days = [date.fromisoformat(p.key) for p in points]
        assert days[-1] == TODAY
        assert days[0] == TODAY - timedelta(days=29)
        for a, b in zip(days, days[1:]):
            assert b - a == timedelta(days=1)

    def test_empty_map_is_all_zero(self):
        points = day_series({}, TODAY, 4)
        assert all(p.score == 0 and p.percent == 0 for p in points)

    def test_scores_and_percent(self):
        points = day_series({"2025-03-05": 3, "2025-03-04": 4}, TODAY, 4)
        assert points[-1] == SeriesPoint(key="2025-03-05", label="5 Mar", score=3, percent=75)
        assert points[-2].percent == 100

    def test_days_outside_window_ignored(self):
        points = day_series({"2025-01-01": 4, "2025-03-06": 4}, TODAY, 4)
        assert sum(p.score for p in points) == 0

    def test_labels(self):
        points = day_series({}, TODAY, 1)
        assert points[0].label == "4 Feb"
        assert points[-1].label == "5 Mar"

    def test_zero_habits(self):
        points = day_series({"2025-03-05": 2}, TODAY, 0)
        assert points[-1].score == 2
        assert points[-1].percent == 0


# ═══════════════════════════════════════════════════════════════════════════
# Week mode
# ═══════════════════════════════════════════════════════════════════════════

class TestWeekSeries:
    def test_two_mondays_two_buckets(self):
        points = week_series({"2024-01-01": 2, "2024-01-08": 1}, 1)
        assert [p.key for p in points] == ["2024-01-01", "2024-01-08"]
        assert [p.score for p in points] == [2, 1]
        assert [p.label for p in points] == ["1 Jan", "8 Jan"]

    def test_percent_uses_seven_days(self):
        points = week_series({"2024-01-01": 2, "2024-01-08": 1}, 1)
        assert [p.percent for p in points] == [29, 14]

    def test_full_week_is_100(self):
        daily = {f"2025-03-{d:02d}": 4 for d in range(3, 10)}
        assert week_series(daily, 4)[0].percent == 100

    def test_partial_week_uses_full_capacity(self):
        # Only Monday-Wednesday so far, every habit done each day
        daily = {"2025-03-03": 2, "2025-03-04": 2, "2025-03-05": 2}
        assert week_series(daily, 2)[0].percent == 43

    def test_groups_into_monday_start_week_across_year(self):
        daily = {"2024-12-31": 1, "2025-01-01": 2, "2025-01-05": 1, "2025-01-06": 5}
        points = week_series(daily, 3)
        assert [p.key for p in points] == ["2024-12-30", "2025-01-06"]
        assert [p.score for p in points] == [4, 5]
        assert points[0].label == "30 Dec"

    def test_sunday_belongs_to_previous_monday(self):
        points = week_series({"2025-03-09": 1}, 1)
        assert points[0].key == "2025-03-03"

    def test_keeps_last_twelve_weeks(self):
        start = date(2024, 1, 1)
        daily = {(start + timedelta(weeks=i)).isoformat(): 1 for i in range(15)}
        points = week_series(daily, 1)
        assert len(points) == 12
        assert points[0].key == "2024-01-22"
        assert points[-1].key == "2024-04-08"

    def test_weeks_without_activity_are_absent(self):
        points = week_series({"2024-01-01": 1, "2024-02-05": 1}, 1)
        assert len(points) == 2

    def test_empty(self):
        assert week_series({}, 4) == []

    def test_zero_entries_same_as_absent(self):
        assert week_series({"2024-01-01": 0}, 4) == []
        assert week_series({"2024-01-01": 1, "2024-01-02": 0}, 4) == week_series({"2024-01-01": 1}, 4)

    def test_score_sum_matches_window(self):
        start = date(2024, 1, 3)
        daily = {(start + timedelta(days=3 * i)).isoformat(): i % 4 + 1 for i in range(40)}
        points = week_series(daily, 4)
        first = date.fromisoformat(points[0].key)
        in_window = sum(v for k, v in daily.items() if date.fromisoformat(k) >= first)
        assert sum(p.score for p in points) == in_window

    def test_idempotent(self):
        daily = {"2024-01-01": 2, "2024-01-03": 1, "2024-02-14": 3}
        assert week_series(daily, 3) == week_series(dict(daily), 3)

    def test_zero_habits(self):
        points = week_series({"2024-01-01": 2}, 0)
        assert points[0].percent == 0

    def test_over_100_not_clamped(self):
        # More completions than today's habits can account for
        daily = {f"2025-03-{d:02d}": 2 for d in range(3, 10)}
        assert week_series(daily, 1)[0].percent == 200


# ═══════════════════════════════════════════════════════════════════════════
# Month mode
# ═══════════════════════════════════════════════════════════════════════════

class TestMonthSeries:
    def test_groups_by_first_of_month(self):
        daily = {"2025-01-31": 1, "2025-02-01": 2, "2025-02-28": 3}
        points = month_series(daily, 1)
        assert [p.key for p in points] == ["2025-01-01", "2025-02-01"]
        assert [p.score for p in points] == [1, 5]
        assert [p.label for p in points] == ["Jan 2025", "Feb 2025"]

    def test_february_non_leap_uses_28(self):
        assert month_series({"2023-02-10": 28}, 1)[0].percent == 100

    def test_february_leap_uses_29(self):
        assert month_series({"2024-02-10": 29}, 1)[0].percent == 100
        assert month_series({"2024-02-10": 28}, 1)[0].percent == 97

    def test_thirty_one_day_month(self):
        assert month_series({"2025-03-01": 31, "2025-03-31": 31}, 2)[0].percent == 100

    def test_partial_month_uses_full_capacity(self):
        daily = {f"2025-03-{d:02d}": 1 for d in range(1, 6)}
        assert month_series(daily, 1)[0].percent == 16

    def test_keeps_last_twelve_months(self):
        daily = {}
        for i in range(14):
            year, month = 2023 + i // 12, i % 12 + 1
            daily[f"{year}-{month:02d}-15"] = 1
        points = month_series(daily, 1)
        assert len(points) == 12
        assert points[0].key == "2023-03-01"
        assert points[-1].key == "2024-02-01"

    def test_year_boundary_sorts_correctly(self):
        points = month_series({"2025-01-02": 1, "2024-12-30": 1}, 1)
        assert [p.label for p in points] == ["Dec 2024", "Jan 2025"]

    def test_empty(self):
        assert month_series({}, 4) == []

    def test_zero_habits(self):
        assert month_series({"2024-01-01": 2}, 0)[0].percent == 0


# ═══════════════════════════════════════════════════════════════════════════
# Dispatch
# ═══════════════════════════════════════════════════════════════════════════

class TestBuildSeries:
    DAILY = {"2025-02-24": 2, "2025-03-05": 3}

    def test_day(self):
        assert build_series(self.DAILY, "day", TODAY, 4) == day_series(self.DAILY, TODAY, 4)

    def test_week(self):
        assert build_series(self.DAILY, "week", TODAY, 4) == week_series(self.DAILY, 4)

    def test_month(self):
        assert build_series(self.DAILY, "month", TODAY, 4) == month_series(self.DAILY, 4)

    def test_unknown_mode(self):
        with pytest.raises(ValueError):
            build_series(self.DAILY, "year", TODAY, 4)


# ═══════════════════════════════════════════════════════════════════════════
# Active days
# ═══════════════════════════════════════════════════════════════════════════

class TestActiveDays:
    DAILY = {
        "2025-02-28": 1,   # last month
        "2025-03-02": 1,   # Sunday, previous week
        "2025-03-03": 2,
        "2025-03-04": 0,
        "2025-03-05": 1,
        "2025-03-06": 3,   # after today
    }

    def test_this_week_counts_days_not_scores(self):
        assert active_days_this_week(self.DAILY, TODAY) == 2

    def test_this_month(self):
        assert active_days_this_month(self.DAILY, TODAY) == 3

    def test_monday_only_counts_itself(self):
        assert active_days_this_week(self.DAILY, date(2025, 3, 3)) == 1

    def test_first_of_month(self):
        assert active_days_this_month({"2025-03-01": 1, "2025-02-28": 1}, date(2025, 3, 1)) == 1

    def test_empty(self):
        assert active_days_this_week({}, TODAY) == 0
        assert active_days_this_month({}, TODAY) == 0


class TestBuildCharts:
    def test_bundles_everything(self):
        daily = {"2025-03-03": 2, "2025-03-05": 1}
        charts = build_charts(daily, TODAY, 2)
        assert charts.total_habits == 2
        assert charts.active_days_this_week == 2
        assert charts.active_days_this_month == 2
        assert len(charts.day_series) == 30
        assert len(charts.week_series) == 1
        assert len(charts.month_series) == 1
        assert charts.series("week") is charts.week_series
        assert charts.series("month") is charts.month_series
        assert charts.series("day") is charts.day_series

    def test_empty_history(self):
        charts = build_charts({}, TODAY, 3)
        assert charts.week_series == []
        assert charts.month_series == []
        assert len(charts.day_series) == 30

    def test_to_dict(self):
        data = build_charts({"2025-03-05": 1}, TODAY, 1).to_dict()
        assert data["month_series"] == [
            {"key": "2025-03-01", "label": "Mar 2025", "score": 1, "percent": 3},
        ]
