# backend/leettrack/__init__.py

from flask import Flask, current_app, jsonify
from flask_cors import CORS
from flask_sqlalchemy import SQLAlchemy
from flask_jwt_extended import JWTManager
from sqlalchemy.exc import SQLAlchemyError

from config import Config

db = SQLAlchemy()
jwt = JWTManager()

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "X-XSS-Protection": "1; mode=block",
    "Referrer-Policy": "strict-origin-when-cross-origin",
}


def create_app(config_class=Config, rate_limiter=None):
    from .errors import ApiError
    from .ratelimit import LimitsRateLimitStore

    app = Flask(__name__)
    app.config.from_object(config_class)

    # Init extensions
    db.init_app(app)
    jwt.init_app(app)
    app.extensions["rate_limiter"] = rate_limiter or LimitsRateLimitStore(
        app.config.get("RATELIMIT_STORAGE_URI", "memory://")
    )

    # CORS: allow the web client (and others) to call /api/*
    CORS(app, resources={r"/api/*": {"origins": "*"}})

    # -----------------------------
    # JWT error handlers
    # -----------------------------
    @jwt.unauthorized_loader
    def unauthorized_callback(reason):
        return (
            jsonify(
                {
                    "message": "Missing or invalid auth token",
                    "error": "unauthenticated",
                }
            ),
            401,
        )

    @jwt.invalid_token_loader
    def invalid_token_callback(reason):
        return (
            jsonify(
                {
                    "message": f"Invalid auth token: {reason}",
                    "error": "unauthenticated",
                }
            ),
            401,
        )

    @jwt.expired_token_loader
    def expired_token_callback(jwt_header, jwt_payload):
        return jsonify({"message": "Token has expired", "error": "unauthenticated"}), 401

    # -----------------------------
    # API error handlers
    # -----------------------------
    @app.errorhandler(ApiError)
    def api_error_handler(e):
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(SQLAlchemyError)
    def db_error_handler(e):
        db.session.rollback()
        current_app.logger.exception(f"Database error: {e}")
        return jsonify({"message": "Internal server error", "error": "internal"}), 500

    @app.after_request
    def add_security_headers(response):
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response

    # -----------------------------
    # IMPORT BLUEPRINTS (all routes)
    # -----------------------------
    from .routes.auth_routes import auth_bp
    from .routes.profile_routes import profile_bp
    from .routes.leetcode_routes import leetcode_bp
    from .routes.streak_routes import streaks_bp
    from .routes.dashboard_routes import dashboard_bp
    from .routes.social_routes import social_bp
    from .routes.challenge_routes import challenges_bp
    from .routes.cron_routes import cron_bp

    # -----------------------------
    # REGISTER BLUEPRINTS
    # -----------------------------
    app.register_blueprint(auth_bp, url_prefix="/api/auth")
    app.register_blueprint(profile_bp, url_prefix="/api/profile")
    app.register_blueprint(leetcode_bp, url_prefix="/api/leetcode")
    app.register_blueprint(streaks_bp, url_prefix="/api/streaks")
    app.register_blueprint(dashboard_bp, url_prefix="/api/dashboard")
    app.register_blueprint(social_bp, url_prefix="/api/social")
    app.register_blueprint(challenges_bp, url_prefix="/api/challenges")
    app.register_blueprint(cron_bp, url_prefix="/api/cron")

    @app.route("/api/health")
    def health():
        return {"status": "ok"}

    # -----------------------------
    # DB init
    # -----------------------------
    with app.app_context():
        db.create_all()

    return app
