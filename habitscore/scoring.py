"""Day Scorer — turns one day's completions into a pass/fail verdict.

Every active habit is worth one point. The percentage is taken against the
number of habits that are active *now*, not when the day was logged.
"""

import logging
from collections.abc import Iterable
from dataclasses import asdict, dataclass

log = logging.getLogger(__name__)


def percent_of(score: int, capacity: int) -> int:
    """round(100 * score / capacity), half-up, 0 when capacity is 0.

    Integer arithmetic only, so 0.5 -> 1 and 2.5 -> 3 with no float error.
    """
    if capacity <= 0:
        return 0
    return (200 * score + capacity) // (2 * capacity)


@dataclass(frozen=True)
class DayScore:
    score: int
    total: int
    percent: int
    passed: bool

    def to_dict(self) -> dict:
        return asdict(self)


def score_day(total: int, completed: int, pass_threshold: int) -> DayScore:
    """Score a day from counts.

    `pass_threshold` is used as given; validate it before persisting.
    """
    percent = percent_of(completed, total)
    return DayScore(
        score=completed,
        total=total,
        percent=percent,
        passed=percent >= pass_threshold,
    )


def score_completed_ids(habit_ids: Iterable, completed_ids: Iterable,
                        pass_threshold: int) -> DayScore:
    """Score a day by checking each active habit against the completed set.

    Completed ids that aren't active habits (archived, deleted) are ignored.
    """
    done = set(completed_ids)
    ids = list(habit_ids)
    completed = sum(1 for hid in ids if hid in done)
    log.debug("Scored %d/%d habits (threshold %d)", completed, len(ids), pass_threshold)
    return score_day(len(ids), completed, pass_threshold)
