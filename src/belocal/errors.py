# SPDX-License-Identifier: Apache-2.0
"""Error codes and exceptions for the BeLocal SDK."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ErrorCode(str, Enum):
    """Kinds of failure reported by the SDK."""

    NETWORK = "NETWORK"
    HTTP_NON_200 = "HTTP_NON_200"
    PAYMENT_REQUIRED = "PAYMENT_REQUIRED"
    INVALID_API_KEY = "INVALID_API_KEY"
    DECODE = "DECODE"
    API_SCHEMA = "API_SCHEMA"
    INVALID_UTF8 = "INVALID_UTF8"
    JSON_ENCODE_FAILED = "JSON_ENCODE_FAILED"
    INVALID_INPUT = "INVALID_INPUT"
    UNCAUGHT = "UNCAUGHT"


@dataclass(frozen=True)
class BeLocalError:
    """Error value carried by responses and results.

    Attributes:
        code: Error kind.
        message: Human-readable description.
    """

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class BeLocalException(Exception):
    """Base exception for the SDK."""

    def __init__(
        self,
        error: BeLocalError,
        http_code: int | None = None,
        errno: int | None = None,
    ) -> None:
        super().__init__(error.message)
        self.error = error
        self.http_code = http_code
        self.errno = errno


class InvalidInputError(BeLocalException, ValueError):
    """Caller passed invalid texts or context.

    Raised before any network call and never swallowed by the engine.
    """

    def __init__(self, message: str) -> None:
        super().__init__(BeLocalError(ErrorCode.INVALID_INPUT, message))


class ConfigurationError(BeLocalException):
    """Configuration error (missing API key, invalid timeout, etc.).

    This error type is NOT retryable - fix the configuration first.
    """

    def __init__(self, message: str) -> None:
        super().__init__(BeLocalError(ErrorCode.INVALID_INPUT, message))
