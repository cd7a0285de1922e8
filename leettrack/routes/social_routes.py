# backend/leettrack/routes/social_routes.py
from flask import Blueprint, current_app, jsonify, request
from flask_jwt_extended import jwt_required
from sqlalchemy import or_, and_

from .. import db
from ..errors import Conflict, Forbidden, NotFound, ValidationError
from ..identity import current_user_id
from ..models.user import User
from ..models.social import Friendship
from ..ratelimit import rate_limited

social_bp = Blueprint("social", __name__)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _get_friend_ids(user_id: int) -> list[int]:
    friendships = Friendship.query.filter(
        Friendship.status == "accepted",
        or_(
            Friendship.requester_id == user_id,
            Friendship.addressee_id == user_id,
        ),
    ).all()

    friend_ids = set()
    for f in friendships:
        if f.requester_id == user_id:
            friend_ids.add(f.addressee_id)
        else:
            friend_ids.add(f.requester_id)
    return list(friend_ids)


def _pair_filter(a_id: int, b_id: int):
    return or_(
        and_(
            Friendship.requester_id == a_id,
            Friendship.addressee_id == b_id,
        ),
        and_(
            Friendship.requester_id == b_id,
            Friendship.addressee_id == a_id,
        ),
    )


def _ranked(users, current_id: int = None) -> list[dict]:
    rows = []
    for index, u in enumerate(users):
        row = u.to_public_dict()
        row["rank"] = index + 1
        if current_id is not None:
            row["is_current_user"] = u.id == current_id
        rows.append(row)
    return rows


# ---------------------------------------------------------------------------
# Friends
# ---------------------------------------------------------------------------

@social_bp.route("/friends", methods=["GET"])
@jwt_required()
@rate_limited("friends_get", 30)
def get_friends():
    """
    Returns:
    {
      "friends": [ { "id": 7, "status": "accepted", "friend": {...} }, ... ],
      "incoming_requests": [ { "id": 9, "status": "pending", "requester": {...} }, ... ],
      "outgoing_requests": [ { "id": 11, "status": "pending", "addressee": {...} }, ... ]
    }
    """
    user_id = current_user_id()

    friendships = Friendship.query.filter(
        Friendship.status == "accepted",
        or_(
            Friendship.requester_id == user_id,
            Friendship.addressee_id == user_id,
        ),
    ).all()

    friends = []
    for f in friendships:
        other = f.addressee if f.requester_id == user_id else f.requester
        row = f.to_dict()
        row["friend"] = other.to_public_dict() if other else None
        friends.append(row)
    friends.sort(key=lambda r: (r["friend"] or {}).get("total_points", 0), reverse=True)

    incoming = []
    for f in Friendship.query.filter_by(addressee_id=user_id, status="pending").all():
        row = f.to_dict()
        row["requester"] = f.requester.to_public_dict() if f.requester else None
        incoming.append(row)

    outgoing = []
    for f in Friendship.query.filter_by(requester_id=user_id, status="pending").all():
        row = f.to_dict()
        row["addressee"] = f.addressee.to_public_dict() if f.addressee else None
        outgoing.append(row)

    return (
        jsonify(
            {
                "friends": friends,
                "incoming_requests": incoming,
                "outgoing_requests": outgoing,
            }
        ),
        200,
    )


@social_bp.route("/friends/request", methods=["POST"])
@jwt_required()
@rate_limited("friends_post", 5)
def send_friend_request():
    """
    Body:
    {
      "email": "friend@example.com"
      // OR "username": "leetcodeUsername"
      // OR "user_id": 2
    }
    """
    user_id = current_user_id()
    data = request.get_json(silent=True) or {}

    friend_email = (data.get("email") or data.get("friendEmail") or "").strip().lower()
    friend_username = (data.get("username") or "").strip()
    friend_user_id = data.get("user_id")

    if friend_email:
        target = User.query.filter_by(email=friend_email).first()
    elif friend_username:
        target = User.query.filter_by(leetcode_username=friend_username).first()
    elif friend_user_id:
        try:
            target = db.session.get(User, int(friend_user_id))
        except (TypeError, ValueError):
            raise ValidationError("user_id must be an integer")
    else:
        raise ValidationError("email, username or user_id is required")

    if not target:
        raise NotFound("User not found")

    if target.id == user_id:
        raise ValidationError("Cannot send friend request to yourself")

    # Active request or friendship in either direction
    existing = Friendship.query.filter(
        _pair_filter(user_id, target.id),
        Friendship.status != "rejected",
    ).first()
    if existing:
        raise Conflict("Friend request already exists or you are already friends")

    # Clear old rejections so the pair can start over
    Friendship.query.filter(
        _pair_filter(user_id, target.id),
        Friendship.status == "rejected",
    ).delete(synchronize_session=False)

    friendship = Friendship(
        requester_id=user_id,
        addressee_id=target.id,
        status="pending",
    )
    db.session.add(friendship)
    db.session.commit()

    current_app.logger.info(f"[friends] {user_id} -> {target.id} request id={friendship.id}")
    return jsonify({"message": "Friend request sent", "friendship": friendship.to_dict()}), 201


def _respond(request_id: int, status: str):
    user_id = current_user_id()

    friendship = db.session.get(Friendship, request_id)
    if not friendship:
        raise NotFound("Friend request not found")

    if friendship.addressee_id != user_id:
        raise Forbidden("Not authorized to update this request")

    if friendship.status != "pending":
        raise Conflict(f"Friend request already {friendship.status}")

    friendship.status = status
    db.session.commit()

    return jsonify({"message": f"Friend request {status}", "friendship": friendship.to_dict()}), 200


@social_bp.route("/friends/<int:request_id>/accept", methods=["POST"])
@jwt_required()
@rate_limited("friends_patch", 10)
def accept_friend_request(request_id: int):
    return _respond(request_id, "accepted")


@social_bp.route("/friends/<int:request_id>/reject", methods=["POST"])
@jwt_required()
@rate_limited("friends_patch", 10)
def reject_friend_request(request_id: int):
    return _respond(request_id, "rejected")


@social_bp.route("/friends", methods=["PATCH"])
@jwt_required()
@rate_limited("friends_patch", 10)
def update_friend_request():
    """
    Body: { "friendRequestId": 9, "action": "accepted" | "rejected" }
    """
    data = request.get_json(silent=True) or {}
    request_id = data.get("friendRequestId")
    action = data.get("action")

    if not request_id or action not in ("accepted", "rejected"):
        raise ValidationError("Invalid input")

    try:
        request_id = int(request_id)
    except (TypeError, ValueError):
        raise ValidationError("Invalid input")

    return _respond(request_id, action)


# ---------------------------------------------------------------------------
# Leaderboards
# ---------------------------------------------------------------------------

@social_bp.route("/leaderboard", methods=["GET"])
@jwt_required()
@rate_limited("leaderboard_get", 30)
def friends_leaderboard():
    """
    Caller plus accepted friends, highest points first.
    """
    user_id = current_user_id()
    all_ids = [user_id] + _get_friend_ids(user_id)

    users = (
        User.query.filter(User.id.in_(all_ids))
        .order_by(User.total_points.desc(), User.id.asc())
        .all()
    )

    return jsonify({"leaderboard": _ranked(users, current_id=user_id)}), 200


@social_bp.route("/leaderboard/global", methods=["GET"])
def global_leaderboard():
    limit = current_app.config.get("GLOBAL_LEADERBOARD_LIMIT", 50)

    users = (
        User.query.filter(User.leetcode_username.isnot(None))
        .order_by(User.total_points.desc(), User.id.asc())
        .limit(limit)
        .all()
    )

    return jsonify({"global_leaderboard": _ranked(users)}), 200
