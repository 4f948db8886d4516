"""Series Aggregator — chart-ready day/week/month series from daily scores.

Input is a flat `{day-stamp: score}` map where score is the number of habits
completed that day. Days with nothing done are simply missing from the map.

- day:   trailing window ending on `today`, one point per day, zero-filled
- week:  Monday-start weeks that have activity, last N only
- month: calendar months that have activity, last N only

Week and month percentages use the full period capacity (habits * 7, habits *
days in month) even for the period still in progress. Scores are counted from
raw completions while the denominator is today's active habit count, so a
percentage can exceed 100 after habits are archived; it is not clamped.
"""

import logging
from collections.abc import Mapping
from dataclasses import asdict, dataclass, field
from datetime import date

from habitscore.config import DAY_SERIES_DAYS, SERIES_BUCKET_LIMIT
from habitscore.dates import (
    add_days,
    day_label,
    days_in_month,
    from_day_stamp,
    month_label,
    start_of_month,
    start_of_week,
    to_day_stamp,
)
from habitscore.scoring import percent_of

log = logging.getLogger(__name__)

MODES = ("day", "week", "month")


@dataclass(frozen=True)
class SeriesPoint:
    key: str        # bucket start day-stamp
    label: str
    score: int
    percent: int

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class Charts:
    """Everything a progress page needs, computed in one pass."""
    total_habits: int
    active_days_this_week: int
    active_days_this_month: int
    day_series: list[SeriesPoint] = field(default_factory=list)
    week_series: list[SeriesPoint] = field(default_factory=list)
    month_series: list[SeriesPoint] = field(default_factory=list)

    def series(self, mode: str) -> list[SeriesPoint]:
        if mode == "week":
            return self.week_series
        if mode == "month":
            return self.month_series
        return self.day_series

    def to_dict(self) -> dict:
        return asdict(self)


# ═══════════════════════════════════════════════════════════════════════════
# Series builders
# ═══════════════════════════════════════════════════════════════════════════

def day_series(daily_scores: Mapping[str, int], today: date, total_habits: int,
               days: int = DAY_SERIES_DAYS) -> list[SeriesPoint]:
    """One point per day for the `days` days ending on `today`, oldest first."""
    points = []
    for offset in range(days - 1, -1, -1):
        d = add_days(today, -offset)
        key = to_day_stamp(d)
        score = daily_scores.get(key, 0)
        points.append(SeriesPoint(
            key=key,
            label=day_label(d),
            score=score,
            percent=percent_of(score, total_habits),
        ))
    return points


def _bucket_totals(daily_scores: Mapping[str, int], bucket_start) -> dict[date, int]:
    totals: dict[date, int] = {}
    for stamp, score in daily_scores.items():
        if not score:
            continue  # same as absent
        start = bucket_start(from_day_stamp(stamp))
        totals[start] = totals.get(start, 0) + score
    return totals


def week_series(daily_scores: Mapping[str, int], total_habits: int,
                limit: int = SERIES_BUCKET_LIMIT) -> list[SeriesPoint]:
    """Most recent `limit` weeks with any recorded day, oldest first."""
    totals = _bucket_totals(daily_scores, start_of_week)
    starts = sorted(totals)[-limit:] if limit > 0 else []
    return [
        SeriesPoint(
            key=to_day_stamp(start),
            label=day_label(start),
            score=totals[start],
            percent=percent_of(totals[start], total_habits * 7),
        )
        for start in starts
    ]


def month_series(daily_scores: Mapping[str, int], total_habits: int,
                 limit: int = SERIES_BUCKET_LIMIT) -> list[SeriesPoint]:
    """Most recent `limit` months with any recorded day, oldest first."""
    totals = _bucket_totals(daily_scores, start_of_month)
    starts = sorted(totals)[-limit:] if limit > 0 else []
    return [
        SeriesPoint(
            key=to_day_stamp(start),
            label=month_label(start),
            score=totals[start],
            percent=percent_of(totals[start], total_habits * days_in_month(start)),
        )
        for start in starts
    ]


def build_series(daily_scores: Mapping[str, int], mode: str, today: date,
                 total_habits: int) -> list[SeriesPoint]:
    """Dispatch on `mode` ("day", "week" or "month")."""
    if mode == "day":
        return day_series(daily_scores, today, total_habits)
    if mode == "week":
        return week_series(daily_scores, total_habits)
    if mode == "month":
        return month_series(daily_scores, total_habits)
    raise ValueError(f"Unknown series mode: {mode!r} (expected one of {', '.join(MODES)})")


# ═══════════════════════════════════════════════════════════════════════════
# Active-day counters
# ═══════════════════════════════════════════════════════════════════════════

def _active_days_between(daily_scores: Mapping[str, int], start: date, end: date) -> int:
    count = 0
    d = start
    while d <= end:
        if daily_scores.get(to_day_stamp(d), 0) > 0:
            count += 1
        d = add_days(d, 1)
    return count


def active_days_this_week(daily_scores: Mapping[str, int], today: date) -> int:
    """Days from this week's Monday through `today` with any completion."""
    return _active_days_between(daily_scores, start_of_week(today), today)


def active_days_this_month(daily_scores: Mapping[str, int], today: date) -> int:
    """Days from the 1st of this month through `today` with any completion."""
    return _active_days_between(daily_scores, start_of_month(today), today)


def build_charts(daily_scores: Mapping[str, int], today: date, total_habits: int) -> Charts:
    charts = Charts(
        total_habits=total_habits,
        active_days_this_week=active_days_this_week(daily_scores, today),
        active_days_this_month=active_days_this_month(daily_scores, today),
        day_series=day_series(daily_scores, today, total_habits),
        week_series=week_series(daily_scores, total_habits),
        month_series=month_series(daily_scores, total_habits),
    )
    log.debug(
        "Charts for %s: %d days, %d weeks, %d months",
        today, len(charts.day_series), len(charts.week_series), len(charts.month_series),
    )
    return charts
