# backend/leettrack/routes/cron_routes.py
from datetime import datetime
from hmac import compare_digest

from flask import Blueprint, current_app, jsonify, request

from ..errors import Unauthenticated, ValidationError
from ..refresh import refresh_all_users

cron_bp = Blueprint("cron", __name__)


def in_refresh_window(now: datetime, hour: int, window_minutes: int) -> bool:
    return now.hour == hour and 0 <= now.minute <= window_minutes


def _check_secret():
    secret = current_app.config.get("CRON_SECRET")
    header = request.headers.get("Authorization", "")
    if not secret or not compare_digest(header, f"Bearer {secret}"):
        raise Unauthenticated("Unauthorized")


@cron_bp.route("/refresh-profiles", methods=["POST"])
def refresh_profiles():
    """
    Daily bulk refresh, called by an external scheduler.

    Only runs inside the configured window (22:00-22:05 server time by default)
    unless the request carries ``X-Manual-Trigger: true``.
    """
    _check_secret()

    now = datetime.now()
    hour = current_app.config["REFRESH_HOUR"]
    window = current_app.config["REFRESH_WINDOW_MINUTES"]
    manual = request.headers.get("X-Manual-Trigger", "").lower() == "true"

    if not manual and not in_refresh_window(now, hour, window):
        raise ValidationError(
            f"This endpoint should only be called at {hour:02d}:00 (now {now:%H:%M})"
        )

    refreshed, failed = refresh_all_users(today=now.date())

    return (
        jsonify(
            {
                "message": "Profile refresh completed",
                "refreshed": len(refreshed),
                "failed": len(failed),
                "time": f"{now:%H:%M}",
            }
        ),
        200,
    )
