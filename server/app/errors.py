# server/app/errors.py
from typing import Any, Dict, Optional


class TranslateError(Exception):
    """Base for every failure that ends a translate request."""

    status_code = 500
    error = "Internal server error"

    def __init__(self, error: Optional[str] = None, *, message: Optional[str] = None, details: Optional[str] = None):
        self.error = error or self.error
        self.message = message
        self.details = details
        super().__init__(self.error)

    def to_body(self, include_details: bool = False) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.error}
        if self.message:
            body["message"] = self.message
        if include_details and self.details:
            body["details"] = self.details
        return body


class ClientInputError(TranslateError):
    status_code = 400
    error = "Text is required"


class ConfigurationError(TranslateError):
    error = "Server configuration error"


class UpstreamAuthError(TranslateError):
    error = "Invalid or insufficient API credentials"


class UpstreamQuotaError(TranslateError):
    status_code = 429
    error = "API quota exceeded"


class UpstreamGenericError(TranslateError):
    error = "Upstream AI service error"


class UpstreamFormatError(TranslateError):
    error = "Invalid upstream response"


class UnexpectedError(TranslateError):
    pass
