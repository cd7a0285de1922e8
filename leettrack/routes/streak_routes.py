# backend/leettrack/routes/streak_routes.py
from flask import Blueprint, jsonify, request
from flask_jwt_extended import jwt_required

from .. import db
from ..errors import ValidationError
from ..identity import get_current_user
from ..ratelimit import rate_limited
from ..streaks import apply_solve_counts

streaks_bp = Blueprint("streaks", __name__)


def _count(data: dict, key: str, default: int) -> int:
    value = data.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValidationError(f"{key} must be a non-negative integer")
    return value


@streaks_bp.route("", methods=["GET"])
@jwt_required()
@rate_limited("streaks_get", 30)
def get_streak():
    user = get_current_user()
    return (
        jsonify(
            {
                "currentStreak": user.current_streak or 0,
                "maxStreak": user.max_streak or 0,
                "lastSolvedDate": user.last_solved_date.isoformat()
                if user.last_solved_date
                else None,
                "totalSolved": user.total_solved or 0,
                "totalPoints": user.total_points or 0,
            }
        ),
        200,
    )


@streaks_bp.route("", methods=["POST"])
@jwt_required()
@rate_limited("streaks", 20)
def post_streak():
    """
    Body:
    {
      "problemsSolved": 120,
      "easySolved": 60,     # optional, defaults to stored value
      "mediumSolved": 50,   # optional
      "hardSolved": 10      # optional
    }
    """
    user = get_current_user()
    data = request.get_json(silent=True) or {}

    if "problemsSolved" not in data:
        raise ValidationError("Problems solved count required")

    total = _count(data, "problemsSolved", 0)
    update = apply_solve_counts(
        user,
        total,
        _count(data, "easySolved", user.easy_solved or 0),
        _count(data, "mediumSolved", user.medium_solved or 0),
        _count(data, "hardSolved", user.hard_solved or 0),
    )
    db.session.commit()

    if update.solved_new:
        message = "Streak updated"
    elif update.current_streak == 0 and update.last_solved_date is not None:
        message = "Streak reset due to inactivity"
    else:
        message = "No new problems solved"

    return (
        jsonify(
            {
                "message": message,
                "currentStreak": update.current_streak,
                "maxStreak": update.max_streak,
                "totalPoints": update.total_points,
                "problemsSolved": total,
            }
        ),
        200,
    )
