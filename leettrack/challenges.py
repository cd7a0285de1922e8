# backend/leettrack/challenges.py
"""
Challenge lifecycle: pending -> active -> completed -> (deleted on claim),
with declined as a dead end from pending.

Functions here validate, mutate and commit; they raise ``ApiError``
subclasses that the app turns into JSON responses.
"""
from datetime import date, timedelta

from flask import current_app
from sqlalchemy import and_, or_

from . import db
from .errors import Conflict, Forbidden, NotFound, ValidationError
from .models.social import CHALLENGE_OPEN_STATUSES, Challenge
from .models.user import User


MAX_TITLE_LENGTH = 100
MAX_DESCRIPTION_LENGTH = 255
MAX_DURATION_DAYS = 365
MAX_TARGET_PROBLEMS = 10000


def _pair_filter(a_id: int, b_id: int):
    return or_(
        and_(Challenge.challenger_id == a_id, Challenge.challenged_id == b_id),
        and_(Challenge.challenger_id == b_id, Challenge.challenged_id == a_id),
    )


def _positive_int(value, field: str, maximum: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{field} must be an integer")
    if value <= 0 or value > maximum:
        raise ValidationError(f"{field} must be between 1 and {maximum}")
    return value


def _text(value, field: str, max_length: int):
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a string")
    value = value.strip()
    if len(value) > max_length:
        raise ValidationError(f"{field} must be at most {max_length} characters")
    return value or None


def progress_for(current_total: int, baseline: int) -> int:
    return max(0, (current_total or 0) - (baseline or 0))


def get_challenge_for(challenge_id: int, user_id: int) -> Challenge:
    challenge = db.session.get(Challenge, challenge_id)
    if not challenge:
        raise NotFound("challenge not found")
    if not challenge.is_participant(user_id):
        raise Forbidden("not a participant of this challenge")
    return challenge


def list_challenges(user_id: int):
    return (
        Challenge.query.filter(
            or_(Challenge.challenger_id == user_id, Challenge.challenged_id == user_id)
        )
        .order_by(Challenge.created_at.desc(), Challenge.id.desc())
        .all()
    )


def create_challenge(challenger_id: int, data: dict, today: date = None) -> Challenge:
    challenged_id = data.get("challengedId") or data.get("challenged_id")
    title = _text(data.get("title"), "title", MAX_TITLE_LENGTH)
    description = _text(data.get("description"), "description", MAX_DESCRIPTION_LENGTH)
    target = data.get("targetProblems", data.get("target_problems"))
    duration = data.get("durationDays", data.get("duration_days"))

    if not challenged_id or not title or target is None or duration is None:
        raise ValidationError("Missing required fields")

    target = _positive_int(target, "targetProblems", MAX_TARGET_PROBLEMS)
    duration = _positive_int(duration, "durationDays", MAX_DURATION_DAYS)

    # ids may arrive as numeric strings from form selects
    if isinstance(challenged_id, str) and challenged_id.isdecimal():
        challenged_id = int(challenged_id)
    if (
        isinstance(challenged_id, bool)
        or not isinstance(challenged_id, int)
        or not 0 < challenged_id < 2**63
    ):
        raise ValidationError("challengedId must be an integer")

    if challenged_id == challenger_id:
        raise ValidationError("cannot challenge yourself")

    if not db.session.get(User, challenged_id):
        raise NotFound("challenged user not found")

    existing = Challenge.query.filter(
        _pair_filter(challenger_id, challenged_id),
        Challenge.status.in_(CHALLENGE_OPEN_STATUSES),
    ).first()
    if existing:
        raise Conflict("You already have an active challenge with this friend")

    today = today or date.today()
    challenge = Challenge(
        challenger_id=challenger_id,
        challenged_id=challenged_id,
        title=title,
        description=description,
        target_problems=target,
        duration_days=duration,
        start_date=today,
        end_date=today + timedelta(days=duration),
        status="pending",
    )
    db.session.add(challenge)
    db.session.commit()

    current_app.logger.info(
        f"[challenges] {challenger_id} challenged {challenged_id} id={challenge.id} target={target}"
    )
    return challenge


def _require_pending_for_challenged(challenge: Challenge, user_id: int, action: str):
    if challenge.challenged_id != user_id:
        raise Forbidden(f"only the challenged user can {action} this challenge")
    if challenge.status != "pending":
        raise Conflict(f"challenge is {challenge.status}, cannot {action}")


def accept_challenge(challenge_id: int, user_id: int) -> Challenge:
    challenge = get_challenge_for(challenge_id, user_id)
    _require_pending_for_challenged(challenge, user_id, "accept")

    challenger = db.session.get(User, challenge.challenger_id)
    challenged = db.session.get(User, challenge.challenged_id)

    challenge.challenger_start_total = challenger.total_solved if challenger else 0
    challenge.challenged_start_total = challenged.total_solved if challenged else 0
    challenge.challenger_progress = 0
    challenge.challenged_progress = 0
    challenge.status = "active"
    db.session.commit()

    current_app.logger.info(f"[challenges] id={challenge.id} accepted by {user_id}")
    return challenge


def decline_challenge(challenge_id: int, user_id: int) -> Challenge:
    challenge = get_challenge_for(challenge_id, user_id)
    _require_pending_for_challenged(challenge, user_id, "decline")

    challenge.status = "declined"
    db.session.commit()
    return challenge


def update_progress(user_id: int, current_total: int):
    """
    Recompute the caller's progress on each of their active challenges.

    Completion is a compare-and-set on ``status == 'active'`` so when both
    participants cross the target the first committed update wins.
    Each challenge is committed on its own; there is no group rollback.

    Returns the ids of the challenges this call completed.
    """
    challenges = Challenge.query.filter(
        or_(Challenge.challenger_id == user_id, Challenge.challenged_id == user_id),
        Challenge.status == "active",
    ).all()

    completed = []
    for challenge in challenges:
        if challenge.challenger_id == user_id:
            progress = progress_for(current_total, challenge.challenger_start_total)
            values = {"challenger_progress": progress}
        else:
            progress = progress_for(current_total, challenge.challenged_start_total)
            values = {"challenged_progress": progress}

        reached = progress >= challenge.target_problems
        if reached:
            values["status"] = "completed"
            values["winner_id"] = user_id

        changed = Challenge.query.filter(
            Challenge.id == challenge.id,
            Challenge.status == "active",
        ).update(values, synchronize_session=False)
        db.session.commit()

        if changed and reached:
            completed.append(challenge.id)
            current_app.logger.info(
                f"[challenges] id={challenge.id} completed, winner={user_id}"
            )

    return completed


def claim_challenge(challenge_id: int, user_id: int) -> int:
    """Award the bonus to the winner and delete the challenge. Returns the bonus."""
    challenge = get_challenge_for(challenge_id, user_id)
    if challenge.status != "completed":
        raise Conflict("challenge is not completed")
    if challenge.winner_id != user_id:
        raise Forbidden("only the winner can claim this challenge")

    bonus = challenge.target_problems
    winner = db.session.get(User, user_id)
    winner.total_points = (winner.total_points or 0) + bonus

    db.session.delete(challenge)
    db.session.commit()

    current_app.logger.info(f"[challenges] id={challenge_id} claimed by {user_id} (+{bonus})")
    return bonus
