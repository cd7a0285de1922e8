# backend/config.py
import os
from datetime import timedelta

class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key-change-me")
    JWT_SECRET_KEY = os.environ.get("JWT_SECRET_KEY", "dev-jwt-secret-change-me")

    SQLALCHEMY_DATABASE_URI = os.environ.get(
        "DATABASE_URL",
        "mysql+pymysql://root:@localhost/leettrack"
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # 🔐 JWT config
    JWT_TOKEN_LOCATION = ["headers"]     # where to look for tokens
    JWT_HEADER_NAME = "Authorization"    # header name
    JWT_HEADER_TYPE = "Bearer"           # expected prefix
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(days=7)  # dev: 7 days

    # LeetCode GraphQL
    LEETCODE_GRAPHQL_URL = os.environ.get("LEETCODE_GRAPHQL_URL", "https://leetcode.com/graphql")
    LEETCODE_TIMEOUT_SECONDS = float(os.environ.get("LEETCODE_TIMEOUT_SECONDS", "10"))

    # daily bulk refresh, called by an external scheduler
    CRON_SECRET = os.environ.get("CRON_SECRET")
    REFRESH_HOUR = int(os.environ.get("REFRESH_HOUR", "22"))
    REFRESH_WINDOW_MINUTES = int(os.environ.get("REFRESH_WINDOW_MINUTES", "5"))

    GLOBAL_LEADERBOARD_LIMIT = 50

    # limits storage, e.g. redis://localhost:6379 when running several instances
    RATELIMIT_STORAGE_URI = os.environ.get("RATELIMIT_STORAGE_URI", "memory://")


class TestConfig(Config):
    TESTING = True
    SECRET_KEY = "test-secret-key-that-is-long-enough-for-hs256"
    JWT_SECRET_KEY = "test-jwt-secret-key-that-is-long-enough-for-hs256"
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    CRON_SECRET = "test-cron-secret"
    LEETCODE_GRAPHQL_URL = "http://leetcode.invalid/graphql"
