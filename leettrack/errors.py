# backend/leettrack/errors.py
"""
API error taxonomy.

Route handlers and the lifecycle helpers raise these; ``create_app`` registers
a handler that renders them as ``{"message": ..., "error": <code>}``.
"""


class ApiError(Exception):
    status_code = 500
    code = "internal"

    def __init__(self, message: str = None):
        super().__init__(message)
        self.message = message or "Internal server error"

    def to_dict(self):
        return {"message": self.message, "error": self.code}


class ValidationError(ApiError):
    status_code = 400
    code = "validation"


class Unauthenticated(ApiError):
    status_code = 401
    code = "unauthenticated"


class Forbidden(ApiError):
    status_code = 403
    code = "unauthorized"


class NotFound(ApiError):
    status_code = 404
    code = "not_found"


class Conflict(ApiError):
    status_code = 409
    code = "conflict"


class RateLimited(ApiError):
    status_code = 429
    code = "rate_limited"


class UpstreamError(ApiError):
    status_code = 502
    code = "upstream_failure"
