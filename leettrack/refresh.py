# backend/leettrack/refresh.py
from datetime import date, datetime

from flask import current_app

from . import db
from .challenges import update_progress
from .leetcode import fetch_solved_counts
from .models.user import User
from .streaks import apply_solve_counts


def record_counts(user: User, counts, today: date = None):
    """
    Streak/points update followed by challenge progress, for one user.
    Returns (StreakUpdate, [completed challenge ids]).
    """
    update = apply_solve_counts(
        user, counts.total, counts.easy, counts.medium, counts.hard, today=today
    )
    user.last_refresh = datetime.utcnow()
    db.session.commit()

    completed = update_progress(user.id, counts.total)
    return update, completed


def refresh_user(user: User, today: date = None):
    """Fetch fresh counts from LeetCode and record them. None when there is no data."""
    if not user.leetcode_username:
        return None

    counts = fetch_solved_counts(user.leetcode_username)
    if counts is None:
        return None

    return record_counts(user, counts, today=today)


def refresh_all_users(today: date = None):
    """
    Bulk refresh for every user with a linked LeetCode account.
    A failing user is rolled back, counted and skipped.
    """
    users = User.query.filter(User.leetcode_username.isnot(None)).order_by(User.id).all()

    refreshed = []
    failed = []
    for user in users:
        username = user.leetcode_username
        try:
            result = refresh_user(user, today=today)
        except Exception as e:
            db.session.rollback()
            current_app.logger.exception(f"[refresh] error refreshing '{username}': {e}")
            failed.append(username)
            continue

        if result is None:
            failed.append(username)
        else:
            refreshed.append(username)

    current_app.logger.info(
        f"[refresh] done: refreshed={len(refreshed)} failed={len(failed)}"
    )
    return refreshed, failed
