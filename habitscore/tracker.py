"""Tracker service — glue between the store and the scoring engine.

Mutations validate their input, write through `habitscore.db` and return an
ActionResult instead of raising, so any front end can show `message` as-is.
Read views load rows, fold them into plain data and hand that to the engine.
"""

import logging
import sqlite3
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date

from habitscore import db
from habitscore.config import DEFAULT_PASS_PERCENTAGE, LOOKBACK_DAYS
from habitscore.dates import add_days, heading_label, local_today, to_day_stamp
from habitscore.scoring import DayScore, score_completed_ids
from habitscore.series import Charts, build_charts
from habitscore.validation import (
    ValidationError,
    parse_completion,
    parse_day_stamp,
    parse_habit_name,
    parse_pass_percentage,
    parse_template_selection,
)

log = logging.getLogger(__name__)


@dataclass
class ActionResult:
    """Outcome of a mutation. `message` is only meaningful when not ok."""
    ok: bool = True
    message: str = ""


@dataclass
class DayView:
    day: str
    heading: str
    prev_day: str
    next_day: str
    pass_percentage: int
    score: DayScore
    habits: list[dict] = field(default_factory=list)  # {id, name, completed}

    @property
    def summary(self) -> str:
        s = self.score
        verdict = "pass" if s.passed else "fail"
        return f"{s.score}/{s.total} habits done ({s.percent}%), {verdict}"


def _failed(action: str, e: Exception) -> ActionResult:
    if isinstance(e, ValidationError):
        log.info("%s rejected: %s=%s", action, e.field, e.message)
        return ActionResult(ok=False, message=e.message)
    log.error("%s failed: %s", action, e, exc_info=True)
    return ActionResult(ok=False, message=str(e))


# ═══════════════════════════════════════════════════════════════════════════
# Settings
# ═══════════════════════════════════════════════════════════════════════════

def ensure_user_settings(user_id: int) -> int:
    """Return the user's pass percentage, creating the default row if missing."""
    value = db.get_pass_percentage(user_id)
    if value is not None:
        return value
    log.info("No settings for user %s, storing default %d%%", user_id, DEFAULT_PASS_PERCENTAGE)
    return db.insert_default_settings(user_id, DEFAULT_PASS_PERCENTAGE)


def set_pass_percentage(user_id: int, value) -> ActionResult:
    try:
        pct = parse_pass_percentage(value)
        db.upsert_pass_percentage(user_id, pct)
    except (ValidationError, sqlite3.Error) as e:
        return _failed("set_pass_percentage", e)
    log.info("User %s pass percentage set to %d%%", user_id, pct)
    return ActionResult()


# ═══════════════════════════════════════════════════════════════════════════
# Habits
# ═══════════════════════════════════════════════════════════════════════════

def create_habit(user_id: int, name) -> ActionResult:
    try:
        clean = parse_habit_name(name)
        hid = db.create_habit(user_id, clean)
    except (ValidationError, sqlite3.Error) as e:
        return _failed("create_habit", e)
    log.info("User %s created habit #%d %r", user_id, hid, clean)
    return ActionResult()


def apply_template(user_id: int, selected) -> ActionResult:
    """Add the selected template habits the user doesn't already have.

    Matching is case-insensitive on trimmed names, against active habits only.
    """
    try:
        names = parse_template_selection(selected)
        existing = {h["name"].strip().lower() for h in db.get_active_habits(user_id)}
        to_insert = []
        for name in names:
            if name.lower() in existing:
                continue
            existing.add(name.lower())
            to_insert.append(name)
        if not to_insert:
            return ActionResult()
        db.create_habits(user_id, to_insert)
    except (ValidationError, sqlite3.Error) as e:
        return _failed("apply_template", e)
    log.info("User %s added %d template habits", user_id, len(to_insert))
    return ActionResult()


# ═══════════════════════════════════════════════════════════════════════════
# Completions
# ═══════════════════════════════════════════════════════════════════════════

def set_habit_completion(user_id: int, habit_id, day, completed) -> ActionResult:
    """Check (completed=True) or uncheck a habit for one day."""
    try:
        hid, d, done = parse_completion(habit_id, day, completed)
        if not db.habit_belongs_to(user_id, hid):
            raise ValidationError("habit_id", "Unknown habit.")
        stamp = to_day_stamp(d)
        if done:
            db.upsert_completion(user_id, hid, stamp)
        else:
            db.delete_completion(user_id, hid, stamp)
    except (ValidationError, sqlite3.Error) as e:
        return _failed("set_habit_completion", e)
    log.info("User %s habit #%d on %s -> %s", user_id, hid, stamp, "done" if done else "undone")
    return ActionResult()


def fold_daily_scores(days: Iterable[str]) -> dict[str, int]:
    """Count completion rows per day-stamp. Only days with rows appear."""
    scores: dict[str, int] = {}
    for day in days:
        scores[day] = scores.get(day, 0) + 1
    return scores


# ═══════════════════════════════════════════════════════════════════════════
# Views
# ═══════════════════════════════════════════════════════════════════════════

def day_view(user_id: int, day: str | None = None) -> DayView:
    """Habits and score for one day. A missing or invalid `day` means today."""
    try:
        d = parse_day_stamp(day) if day is not None else local_today()
    except ValidationError as e:
        log.info("Ignoring bad day %r: %s", day, e.message)
        d = local_today()
    stamp = to_day_stamp(d)

    threshold = ensure_user_settings(user_id)
    habits = db.get_active_habits(user_id)
    completed_ids = set(db.get_completed_habit_ids(user_id, stamp))

    return DayView(
        day=stamp,
        heading=heading_label(d),
        prev_day=to_day_stamp(add_days(d, -1)),
        next_day=to_day_stamp(add_days(d, 1)),
        pass_percentage=threshold,
        score=score_completed_ids([h["id"] for h in habits], completed_ids, threshold),
        habits=[
            {"id": h["id"], "name": h["name"], "completed": h["id"] in completed_ids}
            for h in habits
        ],
    )


def charts_view(user_id: int, today: date | None = None) -> Charts:
    """Day/week/month progress from the last LOOKBACK_DAYS of completions."""
    today = today or local_today()
    since = to_day_stamp(add_days(today, -LOOKBACK_DAYS))
    total = db.count_active_habits(user_id)
    daily = fold_daily_scores(db.get_completion_days(user_id, since))
    return build_charts(daily, today, total)
