#backend/leettrack/routes/dashboard_routes.py
from flask import Blueprint, jsonify
from flask_jwt_extended import jwt_required
from sqlalchemy import or_

from ..errors import UpstreamError, ValidationError
from ..identity import get_current_user
from ..models.social import Challenge, Friendship
from ..ratelimit import rate_limited
from ..refresh import refresh_user

# Blueprint for dashboard-related endpoints
dashboard_bp = Blueprint("dashboard", __name__)


# -------------------------
# DASHBOARD OVERVIEW
# -------------------------
@dashboard_bp.route("/overview", methods=["GET"])
@jwt_required()
@rate_limited("dashboard_get", 30)
def dashboard_overview():
    user = get_current_user()

    friends_count = Friendship.query.filter(
        Friendship.status == "accepted",
        or_(
            Friendship.requester_id == user.id,
            Friendship.addressee_id == user.id,
        ),
    ).count()

    pending_requests_count = Friendship.query.filter_by(
        addressee_id=user.id, status="pending"
    ).count()

    challenges = Challenge.query.filter(
        or_(Challenge.challenger_id == user.id, Challenge.challenged_id == user.id)
    ).all()
    by_status = {"pending": 0, "active": 0, "completed": 0, "declined": 0}
    for c in challenges:
        by_status[c.status] += 1

    streak = {
        "current_streak": user.current_streak or 0,
        "max_streak": user.max_streak or 0,
        "last_solved_date": user.last_solved_date.isoformat()
        if user.last_solved_date
        else None,
    }

    difficulty = {
        "easy": user.easy_solved or 0,
        "medium": user.medium_solved or 0,
        "hard": user.hard_solved or 0,
    }

    return (
        jsonify(
            {
                "user": user.to_dict(),
                "streak": streak,
                "difficulty": difficulty,
                "friends_count": friends_count,
                "pending_requests_count": pending_requests_count,
                "challenges": by_status,
            }
        ),
        200,
    )


# -------------------------
# REFRESH FROM LEETCODE
# -------------------------
@dashboard_bp.route("/refresh", methods=["POST"])
@jwt_required()
@rate_limited("dashboard_refresh", 10)
def refresh():
    """
    Pull the caller's counts from LeetCode, update streak/points, then
    challenge progress.
    """
    user = get_current_user()
    if not user.leetcode_username:
        raise ValidationError("link a leetcode_username first")

    result = refresh_user(user)
    if result is None:
        raise UpstreamError("Failed to fetch LeetCode data")

    update, completed = result
    return (
        jsonify(
            {
                "user": user.to_dict(),
                "currentStreak": update.current_streak,
                "maxStreak": update.max_streak,
                "totalPoints": update.total_points,
                "completedChallenges": completed,
            }
        ),
        200,
    )
