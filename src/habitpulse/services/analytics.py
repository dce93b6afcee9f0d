"""Streak, progress and aggregate analytics over habit completion histories.

Every function here is pure: it takes immutable :class:`HabitSnapshot` values and
an explicit reference ``today`` and never touches the database or the clock.
Completion values may be ``date``/``datetime`` objects or ISO strings; values that
cannot be read as a calendar date are ignored, and duplicate days count once.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Sequence

from ..constants.habits import (
    CATEGORY_WINDOW_DAYS,
    DEFAULT_CATEGORY,
    DEFAULT_DIFFICULTY,
    HEATMAP_WINDOW_DAYS,
    MAX_INTENSITY,
    HabitCategory,
    HabitDifficulty,
)


def parse_day(value: object) -> date | None:
    """Return the calendar day a completion value refers to, or None."""

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    text = value.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        return None


def daterange(start: date, end: date) -> list[date]:
    """Inclusive list of days from ``start`` to ``end``."""

    days = []
    cursor = start
    while cursor <= end:
        days.append(cursor)
        cursor += timedelta(days=1)
    return days


def percentage(part: int, whole: int) -> int:
    """``round(part / whole * 100)`` with halves rounded up; 0 when ``whole`` is 0."""

    if whole <= 0:
        return 0
    ratio = Decimal(part) * 100 / Decimal(whole)
    return int(ratio.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def category_of(habit: HabitSnapshot) -> HabitCategory:
    """Return the habit's category; unknown values fall back to the default."""

    try:
        return HabitCategory.parse(habit.category)
    except ValueError:
        return DEFAULT_CATEGORY


@dataclass(frozen=True, slots=True)
class HabitSnapshot:
    """Read-only view of a habit and its completion history."""

    id: str
    name: str = ""
    category: HabitCategory | str = DEFAULT_CATEGORY
    difficulty: HabitDifficulty | str = DEFAULT_DIFFICULTY
    created_at: datetime | None = None
    completions: tuple = field(default_factory=tuple)

    def completion_days(self) -> frozenset[date]:
        days = (parse_day(value) for value in self.completions)
        return frozenset(day for day in days if day is not None)


@dataclass(frozen=True, slots=True)
class HeatmapDay:
    date: date
    count: int
    intensity: int

    def to_dict(self) -> dict:
        return {"date": self.date.isoformat(), "count": self.count, "intensity": self.intensity}


@dataclass(frozen=True, slots=True)
class CategoryPerformance:
    category: HabitCategory
    total_habits: int
    actual_completions: int
    total_possible_completions: int
    completion_rate: int

    def to_dict(self) -> dict:
        return {
            "category": self.category.value,
            "completionRate": self.completion_rate,
            "totalHabits": self.total_habits,
            "actualCompletions": self.actual_completions,
            "totalPossibleCompletions": self.total_possible_completions,
        }


@dataclass(frozen=True, slots=True)
class HabitSummary:
    """Dashboard totals across every habit of a user."""

    total_habits: int
    completed_today: int
    active_streaks: int
    weekly_completions: int
    monthly_completions: int
    longest_current_streak: int
    today_completion_rate: int
    weekly_completion_rate: int
    categories_today: dict[HabitCategory, tuple[int, int, int]]

    def to_dict(self) -> dict:
        return {
            "totalHabits": self.total_habits,
            "completedToday": self.completed_today,
            "activeStreaks": self.active_streaks,
            "weeklyCompletions": self.weekly_completions,
            "monthlyCompletions": self.monthly_completions,
            "longestStreak": self.longest_current_streak,
            "todayCompletionRate": self.today_completion_rate,
            "weeklyCompletionRate": self.weekly_completion_rate,
            "categories": [
                {
                    "category": category.value,
                    "totalHabits": total,
                    "completedToday": done,
                    "completionRate": rate,
                }
                for category, (total, done, rate) in self.categories_today.items()
            ],
        }


def is_completed_today(habit: HabitSnapshot, today: date) -> bool:
    return today in habit.completion_days()


def current_streak(habit: HabitSnapshot, today: date) -> int:
    """Return the active streak length ending at ``today``.

    A habit done neither today nor yesterday has no active streak, whatever its
    history. Otherwise days are counted backward from ``today`` until the first
    missing day.
    """

    days = habit.completion_days()
    if not days:
        return 0

    yesterday = today - timedelta(days=1)
    if today not in days and yesterday not in days:
        return 0

    streak = 0
    cursor = today
    while cursor in days:
        streak += 1
        cursor -= timedelta(days=1)
    return streak


def longest_streak(habit: HabitSnapshot) -> int:
    """Return the longest run of consecutive completed days in the history."""

    longest = 0
    run = 0
    last_day: date | None = None
    for day in sorted(habit.completion_days()):
        if last_day is not None and day == last_day + timedelta(days=1):
            run += 1
        else:
            run = 1
        longest = max(longest, run)
        last_day = day
    return longest


def week_bounds(today: date, first_weekday: int = calendar.SUNDAY) -> tuple[date, date]:
    """Return the first and last day of the calendar week containing ``today``."""

    start = today - timedelta(days=(today.weekday() - first_weekday) % 7)
    return start, start + timedelta(days=6)


def month_bounds(today: date) -> tuple[date, date]:
    """Return the first and last day of ``today``'s month."""

    _, days_in_month = calendar.monthrange(today.year, today.month)
    return today.replace(day=1), today.replace(day=days_in_month)


def _count_in_window(days: frozenset[date], start: date, end: date) -> int:
    return sum(1 for day in daterange(start, end) if day in days)


def weekly_progress(
    habit: HabitSnapshot, today: date, first_weekday: int = calendar.SUNDAY
) -> int:
    """Count completed days in the current calendar week."""

    start, end = week_bounds(today, first_weekday)
    return _count_in_window(habit.completion_days(), start, end)


def monthly_progress(habit: HabitSnapshot, today: date) -> int:
    """Count completed days in the current calendar month."""

    start, end = month_bounds(today)
    return _count_in_window(habit.completion_days(), start, end)


def intensity(count: int) -> int:
    """Bucket a per-day completion count into 0, 1, 2 or 3 (three or more)."""

    return max(0, min(count, MAX_INTENSITY))


def heatmap(
    habits: Iterable[HabitSnapshot], today: date, window_days: int = HEATMAP_WINDOW_DAYS
) -> list[HeatmapDay]:
    """Per-day completion counts across all habits for the trailing window."""

    if window_days < 1:
        return []

    start = today - timedelta(days=window_days - 1)
    counts = {day: 0 for day in daterange(start, today)}
    for habit in habits:
        for day in habit.completion_days():
            if day in counts:
                counts[day] += 1

    return [
        HeatmapDay(date=day, count=count, intensity=intensity(count))
        for day, count in counts.items()
    ]


def category_performance(
    habits: Iterable[HabitSnapshot],
    today: date,
    window_days: int = CATEGORY_WINDOW_DAYS,
    *,
    include_empty: bool = True,
) -> list[CategoryPerformance]:
    """Completion rate per category over the trailing ``window_days``.

    Possible completions are ``habits_in_category * window_days``; categories
    without habits report a rate of 0.
    """

    window_days = max(window_days, 0)
    start = today - timedelta(days=window_days - 1)
    grouped: dict[HabitCategory, list[HabitSnapshot]] = {category: [] for category in HabitCategory}
    for habit in habits:
        grouped[category_of(habit)].append(habit)

    results: list[CategoryPerformance] = []
    for category, members in grouped.items():
        if not members and not include_empty:
            continue
        possible = len(members) * window_days
        actual = sum(
            1
            for habit in members
            for day in habit.completion_days()
            if start <= day <= today
        )
        results.append(
            CategoryPerformance(
                category=category,
                total_habits=len(members),
                actual_completions=actual,
                total_possible_completions=possible,
                completion_rate=percentage(actual, possible),
            )
        )
    return results


def summary(
    habits: Sequence[HabitSnapshot], today: date, first_weekday: int = calendar.SUNDAY
) -> HabitSummary:
    """Aggregate today/week/month figures across ``habits``."""

    total = len(habits)
    done_today = [habit for habit in habits if is_completed_today(habit, today)]
    streaks = [current_streak(habit, today) for habit in habits]
    weekly = sum(weekly_progress(habit, today, first_weekday) for habit in habits)
    monthly = sum(monthly_progress(habit, today) for habit in habits)

    categories_today: dict[HabitCategory, tuple[int, int, int]] = {}
    for category in HabitCategory:
        members = [habit for habit in habits if category_of(habit) is category]
        completed = sum(1 for habit in members if is_completed_today(habit, today))
        categories_today[category] = (len(members), completed, percentage(completed, len(members)))

    return HabitSummary(
        total_habits=total,
        completed_today=len(done_today),
        active_streaks=sum(1 for streak in streaks if streak > 0),
        weekly_completions=weekly,
        monthly_completions=monthly,
        longest_current_streak=max(streaks, default=0),
        today_completion_rate=percentage(len(done_today), total),
        weekly_completion_rate=min(percentage(weekly, total * 7), 100),
        categories_today=categories_today,
    )


__all__ = [
    "CategoryPerformance",
    "HabitSnapshot",
    "HabitSummary",
    "HeatmapDay",
    "category_of",
    "category_performance",
    "current_streak",
    "daterange",
    "heatmap",
    "intensity",
    "is_completed_today",
    "longest_streak",
    "month_bounds",
    "monthly_progress",
    "parse_day",
    "percentage",
    "summary",
    "weekly_progress",
    "week_bounds",
]
