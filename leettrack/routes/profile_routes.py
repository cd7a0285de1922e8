# backend/leettrack/routes/profile_routes.py
from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required
from .. import db
from ..errors import Conflict, ValidationError
from ..identity import get_current_user
from ..leetcode import is_valid_username
from ..models.user import User

profile_bp = Blueprint("profile", __name__)

@profile_bp.route("", methods=["PUT"])
@jwt_required()
def update_profile():
    user = get_current_user()
    data = request.get_json(silent=True) or {}

    if "leetcode_username" in data:
        username = data.get("leetcode_username")
        if username is None or username == "":
            user.leetcode_username = None
        else:
            # letters, numbers and underscores only
            if not is_valid_username(username):
                raise ValidationError("invalid leetcode_username")
            username = username.strip()
            taken = User.query.filter(
                User.leetcode_username == username, User.id != user.id
            ).first()
            if taken:
                raise Conflict("leetcode_username already linked to another account")
            user.leetcode_username = username

    display_name = data.get("display_name")
    if display_name is not None:
        display_name = str(display_name).strip()
        if len(display_name) > 100:
            raise ValidationError("display_name is too long")
        user.display_name = display_name or None

    db.session.commit()

    return jsonify({"user": user.to_dict()}), 200
