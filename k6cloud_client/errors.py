from __future__ import annotations

import httpx


class CloudClientError(Exception):
    """Base client error."""


class SerializationError(CloudClientError):
    """Request body could not be encoded as JSON."""


class NetworkError(CloudClientError):
    """Transport/network layer error."""


class DecodeError(CloudClientError):
    """Successful response whose body could not be decoded."""


class AuthError(CloudClientError):
    status_code = 0
    default_message = "Authentication error"

    def __init__(self, response: httpx.Response | None = None, message: str | None = None):
        super().__init__(message or self.default_message)
        self.response = response


class NotAuthenticated(AuthError):
    status_code = 401
    default_message = "Failed to authenticate with Load Impact cloud"


class NotAuthorized(AuthError):
    status_code = 403
    default_message = "Not allowed to upload result to Load Impact cloud"


class ErrorResponse(CloudClientError):
    def __init__(self, response: httpx.Response, message: str, code: int):
        super().__init__(message)
        self.response = response
        self.message = message
        self.code = code

    @property
    def status_code(self) -> int:
        return self.response.status_code


class NonStandardErrorResponse(CloudClientError):
    def __init__(self, response: httpx.Response, message: str = "Non-standard API error response"):
        super().__init__(message)
        self.response = response
