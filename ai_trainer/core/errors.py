"""
Error taxonomy for plan requests.

Every failure of the gateway surfaces as one of these; the route maps them
to an HTTP status and a JSON ``{"error": ..., "code": ...}`` body.
"""


class TrainerError(Exception):
    """Base class for classified trainer failures."""

    code = "trainer_error"
    status_code = 500
    default_message = "AI trainer request failed"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"error": self.message, "code": self.code}


class RateLimited(TrainerError):
    """Upstream signalled too many requests. Wait and retry."""

    code = "rate_limited"
    status_code = 429
    default_message = "Rate limit exceeded. Please try again later."


class QuotaExceeded(TrainerError):
    """Upstream signalled a billing or usage limit."""

    code = "quota_exceeded"
    status_code = 402
    default_message = "Usage limit reached. Please add credits."


class UpstreamError(TrainerError):
    """Any other upstream failure (non-2xx status, connection, timeout)."""

    code = "upstream_error"
    status_code = 502
    default_message = "AI gateway error"

    def __init__(self, message: str = None, status: int = None):
        self.status = status
        if message is None and status is not None:
            message = f"AI gateway error: {status}"
        super().__init__(message)

    def to_dict(self) -> dict:
        body = super().to_dict()
        if self.status is not None:
            body["status"] = self.status
        return body


class MalformedPlan(TrainerError):
    """Model output could not be read as the expected plan shape."""

    code = "malformed_plan"
    status_code = 502
    default_message = "AI response did not contain a valid plan"


class ConfigurationError(TrainerError):
    """No credential is available for the AI gateway."""

    code = "configuration_error"
    status_code = 500
    default_message = "AI_GATEWAY_API_KEY is not configured"


class InvalidRequest(TrainerError):
    """The trainer service rejected the request itself. Retrying will not help."""

    code = "invalid_request"
    status_code = 422
    default_message = "Trainer request was rejected"

    def __init__(self, message: str = None, detail=None):
        self.detail = detail
        super().__init__(message)

    def to_dict(self) -> dict:
        body = super().to_dict()
        if self.detail is not None:
            body["detail"] = self.detail
        return body


ERRORS_BY_CODE = {
    cls.code: cls
    for cls in (RateLimited, QuotaExceeded, UpstreamError, MalformedPlan, ConfigurationError, InvalidRequest)
}
