"""Calorie statistics: per-day series, averages, streaks and compliance.

The aggregation functions are pure and take a sparse ``date_key -> calories``
mapping; a missing key means nothing was logged that day. ``StatsService``
builds those mappings from stored rows through the local calendar clock.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Protocol

from snacktrack.domain.profile import DailyGoals, WeightGoal
from snacktrack.domain.stats import (
    CalorieRow,
    DailyCalorieSample,
    DayStat,
    StatsPeriod,
    StatsResult,
)
from snacktrack.services.clock import LocalCalendarClock, to_date, to_date_key
from snacktrack.services.goals import round_half_up

WEEK_DAYS = 7
_WEEKDAY_LABELS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")

GoalPredicate = Callable[[int], bool]


def met_goal(calories: int, calorie_goal: int, is_gaining_weight: bool) -> bool:
    """Return True when a day's calories satisfy the goal.

    A day without calories never counts. Users gaining weight must reach the
    goal; everyone else must stay at or under it.
    """
    if calories == 0:
        return False
    if is_gaining_weight:
        return calories >= calorie_goal
    return calories <= calorie_goal


def goal_predicate(calorie_goal: int, is_gaining_weight: bool) -> GoalPredicate:
    """Bind ``met_goal`` to a goal and direction."""
    return lambda calories: met_goal(calories, calorie_goal, is_gaining_weight)


def period_start(period: StatsPeriod, today: date) -> date:
    """Return the first day of the trailing week or the current month."""
    if period == StatsPeriod.WEEKLY:
        return today - timedelta(days=WEEK_DAYS - 1)
    return today.replace(day=1)


def _day_label(period: StatsPeriod, day: date) -> str:
    if period == StatsPeriod.WEEKLY:
        return _WEEKDAY_LABELS[day.weekday()]
    return str(day.day)


def build_daily_series(
    period: StatsPeriod,
    today: date,
    totals: Mapping[str, int],
    predicate: GoalPredicate,
) -> list[DayStat]:
    """Return one entry per day of the period, oldest first."""
    start = period_start(period, today)
    series = []
    for offset in range((today - start).days + 1):
        day = start + timedelta(days=offset)
        key = to_date_key(day)
        calories = totals.get(key, 0)
        series.append(
            DayStat(
                date_key=key,
                label=_day_label(period, day),
                calories=calories,
                met_goal=predicate(calories),
            )
        )
    return series


def average_calories(series: list[DayStat]) -> int:
    """Average over days that have data; zero-calorie days are skipped."""
    logged = [day.calories for day in series if day.calories > 0]
    if not logged:
        return 0
    return round_half_up(sum(logged) / len(logged))


def current_streak(
    totals: Mapping[str, int], today: date, predicate: GoalPredicate
) -> int:
    """Count consecutive goal-met days ending today.

    An empty today is still in progress, so counting starts at yesterday.
    """
    check = today
    if not totals.get(to_date_key(today), 0):
        check -= timedelta(days=1)
    streak = 0
    while predicate(totals.get(to_date_key(check), 0)):
        streak += 1
        check -= timedelta(days=1)
    return streak


def best_streak(
    totals: Mapping[str, int], today: date, predicate: GoalPredicate
) -> int:
    """Return the longest goal-met run from the first logged day to today."""
    if not totals:
        return 0
    check = min(to_date(key) for key in totals)
    best = 0
    running = 0
    while check <= today:
        if predicate(totals.get(to_date_key(check), 0)):
            running += 1
            best = max(best, running)
        else:
            running = 0
        check += timedelta(days=1)
    return best


def compliance_rate(series: list[DayStat]) -> int:
    """Percentage of days with data that met the goal."""
    with_data = sum(1 for day in series if day.calories > 0)
    if with_data == 0:
        return 0
    met = sum(1 for day in series if day.met_goal)
    return round_half_up(100 * met / with_data)


def aggregate_stats(  # noqa: PLR0913
    period: StatsPeriod,
    today_key: str,
    period_totals: Mapping[str, int],
    all_totals: Mapping[str, int],
    calorie_goal: int,
    is_gaining_weight: bool,
) -> StatsResult:
    """Build the stats for a period.

    The best streak is all-time: it scans ``all_totals`` regardless of the
    requested period.
    """
    today = to_date(today_key)
    predicate = goal_predicate(calorie_goal, is_gaining_weight)
    series = build_daily_series(period, today, period_totals, predicate)
    current = current_streak(all_totals, today, predicate)
    return StatsResult(
        period=period,
        days=series,
        average_calories=average_calories(series),
        current_streak=current,
        best_streak=max(best_streak(all_totals, today, predicate), current),
        days_goal_met=sum(1 for day in series if day.met_goal),
        days_with_data=sum(1 for day in series if day.calories > 0),
        compliance_rate=compliance_rate(series),
    )


def group_daily_calories(
    rows: list[CalorieRow], clock: LocalCalendarClock
) -> dict[str, int]:
    """Sum row calories per local calendar day."""
    totals: dict[str, int] = {}
    for row in rows:
        key = clock.date_key_of(row.timestamp)
        totals[key] = totals.get(key, 0) + row.calories
    return totals


class StatsRepository(Protocol):
    """Persistence interface for calorie statistics."""

    def list_calorie_rows(
        self, start_ms: int | None = None, end_ms: int | None = None
    ) -> list[CalorieRow]:
        """Return calorie rows with start <= timestamp < end; None is unbounded."""


@dataclass
class StatsService:
    """Service that reads stored calories and aggregates them."""

    repository: StatsRepository
    clock: LocalCalendarClock

    def get_daily_calorie_totals(self, start_key: str, end_key: str) -> dict[str, int]:
        """Return local-day totals for an inclusive range of date keys."""
        start_ms, _ = self.clock.day_bounds(start_key)
        _, end_ms = self.clock.day_bounds(end_key)
        rows = self.repository.list_calorie_rows(start_ms, end_ms)
        return group_daily_calories(rows, self.clock)

    def get_all_daily_calorie_totals(self) -> dict[str, int]:
        """Return local-day totals for every day ever logged."""
        return group_daily_calories(self.repository.list_calorie_rows(), self.clock)

    def get_daily_samples(
        self, start_key: str, end_key: str
    ) -> list[DailyCalorieSample]:
        """Return the range's logged days as samples, oldest first."""
        totals = self.get_daily_calorie_totals(start_key, end_key)
        return [
            DailyCalorieSample(date_key=key, total_calories=totals[key])
            for key in sorted(totals)
        ]

    def get_stats(
        self, period: StatsPeriod, goals: DailyGoals, weight_goal: WeightGoal
    ) -> StatsResult:
        """Return the stats for a period using freshly read totals.

        Storage is read once; the period totals are cut from the all-time
        totals so the series and the streaks see the same rows.
        """
        today_key = self.clock.today()
        start_key = to_date_key(period_start(period, to_date(today_key)))
        all_totals = self.get_all_daily_calorie_totals()
        period_totals = {
            key: calories
            for key, calories in all_totals.items()
            if start_key <= key <= today_key
        }
        return aggregate_stats(
            period=period,
            today_key=today_key,
            period_totals=period_totals,
            all_totals=all_totals,
            calorie_goal=goals.calorie_goal,
            is_gaining_weight=weight_goal == WeightGoal.GAIN,
        )
