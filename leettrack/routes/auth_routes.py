# backend/leettrack/routes/auth_routes.py

from flask import Blueprint, current_app, jsonify, request
from flask_jwt_extended import create_access_token, jwt_required

from .. import db
from ..errors import Conflict, Unauthenticated, ValidationError
from ..identity import get_current_user
from ..models.user import User

auth_bp = Blueprint("auth", __name__)


def _string(data: dict, key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError(f"{key} must be a string")
    return value


def _credentials(data: dict):
    email = _string(data, "email").strip().lower()
    password = _string(data, "password")  # do NOT strip passwords
    if not email or not password:
        raise ValidationError("email and password are required")
    return email, password


# -----------------------------
# Routes
# -----------------------------
@auth_bp.route("/register", methods=["POST"])
def register():
    data = request.get_json(silent=True) or {}

    email, password = _credentials(data)
    display_name = _string(data, "display_name").strip() or None

    if len(email) > 255:
        raise ValidationError("email must be at most 255 characters")
    if display_name and len(display_name) > 100:
        raise ValidationError("display_name must be at most 100 characters")
    if len(password) < 6:
        raise ValidationError("password must be at least 6 characters")

    if User.query.filter_by(email=email).first():
        raise Conflict("email already in use")

    user = User(email=email, display_name=display_name or email.split("@")[0])
    user.set_password(password)

    db.session.add(user)
    db.session.commit()
    current_app.logger.info(f"[auth/register] user_id={user.id}")

    access_token = create_access_token(identity=str(user.id))
    return jsonify({"token": access_token, "user": user.to_dict()}), 201


@auth_bp.route("/login", methods=["POST"])
def login():
    """
    Accepts { "email": "...", "password": "..." }
    """
    data = request.get_json(silent=True) or {}

    email, password = _credentials(data)

    user = User.query.filter_by(email=email).first()
    if not user or not user.check_password(password):
        current_app.logger.info(f"[auth/login] failed login for '{email}'")
        raise Unauthenticated("invalid credentials")

    access_token = create_access_token(identity=str(user.id))
    return jsonify({"token": access_token, "user": user.to_dict()}), 200


@auth_bp.route("/me", methods=["GET"])
@jwt_required()
def me():
    user = get_current_user()
    return jsonify({"user": user.to_dict()}), 200
