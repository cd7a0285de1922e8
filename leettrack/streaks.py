# backend/leettrack/streaks.py
from collections import namedtuple
from datetime import date
from typing import Optional

EASY_POINTS = 1
MEDIUM_POINTS = 2
HARD_POINTS = 3
STREAK_DAY_POINTS = 5

StreakUpdate = namedtuple(
    "StreakUpdate",
    ["current_streak", "max_streak", "total_points", "last_solved_date", "solved_new"],
)


def days_between(earlier: date, later: date) -> int:
    """Whole calendar days from ``earlier`` to ``later`` (negative if reversed)."""
    return later.toordinal() - earlier.toordinal()


def compute_points(easy: int, medium: int, hard: int, current_streak: int) -> int:
    return (
        easy * EASY_POINTS
        + medium * MEDIUM_POINTS
        + hard * HARD_POINTS
        + current_streak * STREAK_DAY_POINTS
    )


def compute_streak_update(
    previous_total: int,
    last_solved_date: Optional[date],
    current_streak: int,
    max_streak: int,
    new_total: int,
    easy: int,
    medium: int,
    hard: int,
    today: date,
) -> StreakUpdate:
    """
    Streak / points rule applied every time fresh solve counts arrive.

    - nothing new solved: streak drops to 0 once more than one day has passed
      since ``last_solved_date``, otherwise it is left alone
    - something new solved: +1 on the day after the last solve, unchanged
      (min 1) on the same day, back to 1 after a gap
    Points always use the same formula with whatever streak results.
    """
    previous_total = previous_total or 0
    current_streak = current_streak or 0
    max_streak = max_streak or 0

    if new_total <= previous_total:
        new_streak = current_streak
        if last_solved_date is not None and days_between(last_solved_date, today) > 1:
            new_streak = 0

        return StreakUpdate(
            current_streak=new_streak,
            max_streak=max_streak,
            total_points=compute_points(easy, medium, hard, new_streak),
            last_solved_date=last_solved_date,
            solved_new=False,
        )

    if last_solved_date is None:
        new_streak = 1
    else:
        diff = days_between(last_solved_date, today)
        if diff == 1:
            new_streak = current_streak + 1
        elif diff == 0:
            new_streak = max(current_streak, 1)
        else:
            new_streak = 1

    return StreakUpdate(
        current_streak=new_streak,
        max_streak=max(max_streak, new_streak),
        total_points=compute_points(easy, medium, hard, new_streak),
        last_solved_date=today,
        solved_new=True,
    )


def apply_solve_counts(user, total: int, easy: int, medium: int, hard: int, today: date = None) -> StreakUpdate:
    """
    Run the streak rule against ``user`` and write the results back onto it.
    The caller owns the session commit.
    """
    today = today or date.today()

    update = compute_streak_update(
        previous_total=user.total_solved,
        last_solved_date=user.last_solved_date,
        current_streak=user.current_streak,
        max_streak=user.max_streak,
        new_total=total,
        easy=easy,
        medium=medium,
        hard=hard,
        today=today,
    )

    user.total_solved = total
    user.easy_solved = easy
    user.medium_solved = medium
    user.hard_solved = hard
    user.current_streak = update.current_streak
    user.max_streak = update.max_streak
    user.total_points = update.total_points
    user.last_solved_date = update.last_solved_date

    return update
