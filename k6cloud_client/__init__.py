import logging

from .client import CloudClient, new_client
from .config_types import ClientConfig
from .errors import (
    AuthError,
    CloudClientError,
    DecodeError,
    ErrorResponse,
    NetworkError,
    NonStandardErrorResponse,
    NotAuthenticated,
    NotAuthorized,
    SerializationError,
)
from .logging_ import setup_logging
from .models import CreateTestRunResponse, Sample, SampleData, TestRun

__all__ = [
    "CloudClient",
    "new_client",
    "ClientConfig",
    "AuthError",
    "CloudClientError",
    "DecodeError",
    "ErrorResponse",
    "NetworkError",
    "NonStandardErrorResponse",
    "NotAuthenticated",
    "NotAuthorized",
    "SerializationError",
    "CreateTestRunResponse",
    "Sample",
    "SampleData",
    "TestRun",
    "setup_logging",
]

logging.getLogger(__name__).addHandler(logging.NullHandler())
