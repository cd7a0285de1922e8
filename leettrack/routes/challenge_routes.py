# backend/leettrack/routes/challenge_routes.py
from flask import Blueprint, jsonify, request
from flask_jwt_extended import jwt_required

from .. import challenges as lifecycle
from ..errors import ValidationError
from ..identity import current_user_id
from ..ratelimit import rate_limited

challenges_bp = Blueprint("challenges", __name__)


@challenges_bp.route("", methods=["GET"])
@jwt_required()
@rate_limited("challenges_get", 30)
def get_challenges():
    """
    Every challenge the caller takes part in, newest first.
    """
    user_id = current_user_id()
    rows = lifecycle.list_challenges(user_id)
    return jsonify({"challenges": [c.to_dict() for c in rows]}), 200


@challenges_bp.route("", methods=["POST"])
@jwt_required()
@rate_limited("challenges_post", 5)
def create_challenge():
    """
    Body:
    {
      "challengedId": 2,
      "title": "Weekend grind",
      "description": "first to 10",   # optional
      "targetProblems": 10,
      "durationDays": 7
    }
    """
    data = request.get_json(silent=True) or {}
    challenge = lifecycle.create_challenge(current_user_id(), data)
    return jsonify({"challenge": challenge.to_dict()}), 201


@challenges_bp.route("/<int:challenge_id>/accept", methods=["POST"])
@jwt_required()
@rate_limited("challenges_patch", 10)
def accept_challenge(challenge_id: int):
    challenge = lifecycle.accept_challenge(challenge_id, current_user_id())
    return jsonify({"message": "Challenge accepted", "challenge": challenge.to_dict()}), 200


@challenges_bp.route("/<int:challenge_id>/decline", methods=["POST"])
@jwt_required()
@rate_limited("challenges_patch", 10)
def decline_challenge(challenge_id: int):
    challenge = lifecycle.decline_challenge(challenge_id, current_user_id())
    return jsonify({"message": "Challenge declined", "challenge": challenge.to_dict()}), 200


@challenges_bp.route("/<int:challenge_id>/claim", methods=["POST"])
@jwt_required()
@rate_limited("challenges_patch", 10)
def claim_challenge(challenge_id: int):
    bonus = lifecycle.claim_challenge(challenge_id, current_user_id())
    return (
        jsonify({"message": "Points claimed and challenge completed", "bonus_points": bonus}),
        200,
    )


_ACTIONS = {
    "accept": accept_challenge,
    "decline": decline_challenge,
    "claim": claim_challenge,
}


@challenges_bp.route("", methods=["PATCH"])
@jwt_required()
def update_challenge():
    """
    Body: { "challengeId": 1, "action": "accept" | "decline" | "claim" }
    """
    data = request.get_json(silent=True) or {}
    challenge_id = data.get("challengeId")
    action = data.get("action")

    if not challenge_id or not action:
        raise ValidationError("Missing challengeId or action")
    if action not in _ACTIONS:
        raise ValidationError("Invalid action")

    try:
        challenge_id = int(challenge_id)
    except (TypeError, ValueError):
        raise ValidationError("challengeId must be an integer")

    return _ACTIONS[action](challenge_id)


@challenges_bp.route("/update-progress", methods=["POST"])
@jwt_required()
@rate_limited("challenges_progress", 20)
def update_progress():
    """
    Body: { "currentTotal": 134 }
    """
    data = request.get_json(silent=True) or {}
    current_total = data.get("currentTotal")
    if isinstance(current_total, bool) or not isinstance(current_total, int) or current_total < 0:
        raise ValidationError("currentTotal must be a non-negative integer")

    completed = lifecycle.update_progress(current_user_id(), current_total)
    return jsonify({"message": "Progress updated", "completed": completed}), 200
