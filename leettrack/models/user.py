# backend/leettrack/models/user.py
from datetime import datetime
from werkzeug.security import generate_password_hash, check_password_hash
from .. import db

# SQLite only autoincrements a plain INTEGER primary key
BigIntId = db.BigInteger().with_variant(db.Integer, "sqlite")


class User(db.Model):
    __tablename__ = "users"

    id = db.Column(BigIntId, primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    display_name = db.Column(db.String(100))
    leetcode_username = db.Column(db.String(50), unique=True)

    total_solved = db.Column(db.Integer, default=0, nullable=False)
    easy_solved = db.Column(db.Integer, default=0, nullable=False)
    medium_solved = db.Column(db.Integer, default=0, nullable=False)
    hard_solved = db.Column(db.Integer, default=0, nullable=False)

    current_streak = db.Column(db.Integer, default=0, nullable=False)
    max_streak = db.Column(db.Integer, default=0, nullable=False)
    last_solved_date = db.Column(db.Date)
    total_points = db.Column(db.Integer, default=0, nullable=False)
    last_refresh = db.Column(db.DateTime)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(
        db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )


    def set_password(self, password: str) -> None:
        self.password_hash = generate_password_hash(password)

    def check_password(self, password: str) -> bool:
        return check_password_hash(self.password_hash, password)

    def to_public_dict(self):
        """Fields other users may see (friends lists, leaderboards)."""
        return {
            "id": self.id,
            "email": self.email,
            "display_name": self.display_name,
            "leetcode_username": self.leetcode_username,
            "total_solved": self.total_solved or 0,
            "easy_solved": self.easy_solved or 0,
            "medium_solved": self.medium_solved or 0,
            "hard_solved": self.hard_solved or 0,
            "current_streak": self.current_streak or 0,
            "max_streak": self.max_streak or 0,
            "total_points": self.total_points or 0,
        }

    def to_dict(self):
        data = self.to_public_dict()
        data.update(
            {
                "last_solved_date": self.last_solved_date.isoformat()
                if self.last_solved_date
                else None,
                "last_refresh": self.last_refresh.isoformat() if self.last_refresh else None,
            }
        )
        return data
