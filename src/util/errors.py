from typing import Any

from util.error_codes import (
    UNRECOGNIZED_ENDPOINT,
    USAGE_API_BAD_SCHEMA,
    USAGE_API_BAD_STATUS,
    USAGE_API_TRANSPORT_FAILED,
)


class ServiceError(Exception):
    error_code: int
    http_status: int
    emoji: str

    def __init__(
        self,
        message: str,
        error_code: int,
        http_status: int = 500,
        emoji: str = "⚠️",
    ):
        super().__init__(message)
        self.error_code = error_code
        self.http_status = http_status
        self.emoji = emoji

    def __str__(self) -> str:
        return self.to_log_string()

    def to_log_string(self) -> str:
        cause_str = f" # Caused by: {self.__cause__}" if self.__cause__ else ""
        return f"[{self.emoji} E{self.error_code}] {super().__str__()}{cause_str}"

    def to_api_dict(self) -> dict[str, Any]:
        return {
            "error_code": self.error_code,
            "message": str(self),
            "emoji": self.emoji,
        }


class ValidationError(ServiceError):
    def __init__(self, message: str, error_code: int, emoji: str = "✏️"):
        super().__init__(message, error_code, http_status = 422, emoji = emoji)


class NotFoundError(ServiceError):
    def __init__(self, message: str, error_code: int, emoji: str = "🔍"):
        super().__init__(message, error_code, http_status = 404, emoji = emoji)


class ExternalServiceError(ServiceError):
    def __init__(self, message: str, error_code: int, emoji: str = "🌐"):
        super().__init__(message, error_code, http_status = 502, emoji = emoji)


class ConfigurationError(ServiceError):
    def __init__(self, message: str, error_code: int, emoji: str = "⚙️"):
        super().__init__(message, error_code, http_status = 500, emoji = emoji)


class InternalError(ServiceError):
    def __init__(self, message: str, error_code: int, emoji: str = "⚠️"):
        super().__init__(message, error_code, http_status = 500, emoji = emoji)


# Usage API failures

class UnrecognizedEndpointError(ValidationError):
    base_url: str

    def __init__(self, base_url: str):
        super().__init__(f"Unrecognized base URL: '{base_url}'", UNRECOGNIZED_ENDPOINT)
        self.base_url = base_url


class TransportError(ExternalServiceError):
    def __init__(self, message: str):
        super().__init__(message, USAGE_API_TRANSPORT_FAILED, emoji = "📡")


class HttpStatusError(ExternalServiceError):
    status: int
    body: str

    def __init__(self, status: int, body: str):
        super().__init__(f"HTTP {status}: {body}", USAGE_API_BAD_STATUS)
        self.status = status
        self.body = body


class SchemaError(ExternalServiceError):
    raw_body: str

    def __init__(self, cause: str, raw_body: str):
        super().__init__(f"Parse error: {cause} - Response was: {raw_body}", USAGE_API_BAD_SCHEMA, emoji = "🧩")
        self.raw_body = raw_body
