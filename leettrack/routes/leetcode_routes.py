# backend/leettrack/routes/leetcode_routes.py
from flask import Blueprint, jsonify, request
from flask_jwt_extended import jwt_required

from ..errors import UpstreamError, ValidationError
from ..leetcode import fetch_profile, fetch_solved_counts, is_valid_username
from ..ratelimit import rate_limited

leetcode_bp = Blueprint("leetcode", __name__)


def _username_from_body() -> str:
    data = request.get_json(silent=True) or {}
    username = data.get("username")
    if not username:
        raise ValidationError("Username is required")
    if not is_valid_username(username):
        raise ValidationError("invalid username")
    return username.strip()


@leetcode_bp.route("/stats", methods=["POST"])
@jwt_required()
@rate_limited("leetcode_stats", 30)
def solved_stats():
    """
    Body: { "username": "leetcodeUser" }

    Returns:
    { "username": "...", "total": 120, "easy": 60, "medium": 50, "hard": 10 }
    """
    username = _username_from_body()

    counts = fetch_solved_counts(username)
    if counts is None:
        raise UpstreamError("Failed to fetch LeetCode data")

    return jsonify({"username": username, **counts._asdict()}), 200


@leetcode_bp.route("/profile", methods=["POST"])
@jwt_required()
@rate_limited("leetcode_profile", 30)
def profile():
    username = _username_from_body()

    matched_user = fetch_profile(username)
    if matched_user is None:
        raise UpstreamError("Failed to fetch LeetCode data")

    return jsonify({"matchedUser": matched_user}), 200
