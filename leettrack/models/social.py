# backend/leettrack/models/social.py
from datetime import datetime
from .. import db
from .user import BigIntId


# -----------------------------
# Friendships
# -----------------------------
class Friendship(db.Model):
    __tablename__ = "friendships"

    id = db.Column(BigIntId, primary_key=True)
    requester_id = db.Column(db.BigInteger, db.ForeignKey("users.id"), nullable=False)
    addressee_id = db.Column(db.BigInteger, db.ForeignKey("users.id"), nullable=False)
    status = db.Column(
        db.Enum("pending", "accepted", "rejected", name="friendship_status"),
        nullable=False,
        default="pending",
    )
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(
        db.DateTime,
        nullable=False,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )

    requester = db.relationship(
        "User", foreign_keys=[requester_id], backref="sent_friendships"
    )
    addressee = db.relationship(
        "User", foreign_keys=[addressee_id], backref="received_friendships"
    )

    def to_dict(self):
        return {
            "id": self.id,
            "requester_id": self.requester_id,
            "addressee_id": self.addressee_id,
            "status": self.status,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


# -----------------------------
# Challenges
# -----------------------------
CHALLENGE_OPEN_STATUSES = ("pending", "active", "completed")


class Challenge(db.Model):
    """
    One-on-one race: first participant to solve ``target_problems`` new
    problems after acceptance wins. Deleted once the winner claims.
    """
    __tablename__ = "challenges"

    id = db.Column(BigIntId, primary_key=True)
    challenger_id = db.Column(db.BigInteger, db.ForeignKey("users.id"), nullable=False)
    challenged_id = db.Column(db.BigInteger, db.ForeignKey("users.id"), nullable=False)
    title = db.Column(db.String(100), nullable=False)
    description = db.Column(db.String(255))
    status = db.Column(
        db.Enum(
            "pending",
            "active",
            "completed",
            "declined",
            name="challenge_status",
        ),
        nullable=False,
        default="pending",
    )
    target_problems = db.Column(db.Integer, nullable=False)
    duration_days = db.Column(db.Integer, nullable=False)
    start_date = db.Column(db.Date, nullable=False)
    end_date = db.Column(db.Date, nullable=False)

    # baselines captured on accept
    challenger_start_total = db.Column(db.Integer, nullable=False, default=0)
    challenged_start_total = db.Column(db.Integer, nullable=False, default=0)
    challenger_progress = db.Column(db.Integer, nullable=False, default=0)
    challenged_progress = db.Column(db.Integer, nullable=False, default=0)

    winner_id = db.Column(db.BigInteger, db.ForeignKey("users.id"))
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    challenger = db.relationship("User", foreign_keys=[challenger_id])
    challenged = db.relationship("User", foreign_keys=[challenged_id])

    def is_participant(self, user_id: int) -> bool:
        return user_id in (self.challenger_id, self.challenged_id)

    def to_dict(self):
        return {
            "id": self.id,
            "challenger_id": self.challenger_id,
            "challenged_id": self.challenged_id,
            "challenger_username": self.challenger.leetcode_username if self.challenger else None,
            "challenged_username": self.challenged.leetcode_username if self.challenged else None,
            "title": self.title,
            "description": self.description,
            "status": self.status,
            "target_problems": self.target_problems,
            "duration_days": self.duration_days,
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "challenger_start_total": self.challenger_start_total,
            "challenged_start_total": self.challenged_start_total,
            "challenger_progress": self.challenger_progress,
            "challenged_progress": self.challenged_progress,
            "winner_id": self.winner_id,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
