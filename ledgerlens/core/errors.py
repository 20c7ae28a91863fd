"""Exception hierarchy shared by every stage of the analysis pipeline."""

from __future__ import annotations

from enum import Enum


class FailureReason(str, Enum):
    """Closed set of reasons an analysis attempt can fail."""

    INPUT_MISSING = "input_missing"
    FILE_TOO_LARGE = "file_too_large"
    UNSUPPORTED_FORMAT = "unsupported_format"
    CONFIGURATION_MISSING = "configuration_missing"
    CONTENT_BLOCKED = "content_blocked"
    EMPTY_RESPONSE = "empty_response"
    MALFORMED_RESPONSE = "malformed_response"
    TRANSPORT_FAILURE = "transport_failure"


class AnalysisError(RuntimeError):
    """Base class for failures that terminate an analysis attempt."""

    reason: FailureReason = FailureReason.TRANSPORT_FAILURE

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InputMissingError(AnalysisError):
    """Raised when neither a file nor pasted text was supplied."""

    reason = FailureReason.INPUT_MISSING


class FileTooLargeError(AnalysisError):
    """Raised when an uploaded file exceeds the configured size ceiling."""

    reason = FailureReason.FILE_TOO_LARGE

    def __init__(self, *, size_bytes: int, max_bytes: int) -> None:
        self.size_bytes = size_bytes
        self.max_bytes = max_bytes
        super().__init__(
            f"File is too large ({size_bytes / 1024 / 1024:.2f} MB); "
            f"the maximum supported size is {max_bytes / 1024 / 1024:.2f} MB."
        )


class UnsupportedFormatError(AnalysisError):
    """Raised when a file cannot be classified or read as text."""

    reason = FailureReason.UNSUPPORTED_FORMAT


class ConfigurationMissingError(AnalysisError):
    """Raised when no credential is available for the Gemini call."""

    reason = FailureReason.CONFIGURATION_MISSING


class ContentBlockedError(AnalysisError):
    """Raised when Gemini's safety filters withheld the output."""

    reason = FailureReason.CONTENT_BLOCKED


class EmptyResponseError(AnalysisError):
    """Raised when Gemini returned no text for a non-safety reason."""

    reason = FailureReason.EMPTY_RESPONSE

    def __init__(self, message: str, *, finish_reason: str | None = None) -> None:
        super().__init__(message)
        self.finish_reason = finish_reason


class MalformedResponseError(AnalysisError):
    """Raised when returned text does not satisfy the response contract."""

    reason = FailureReason.MALFORMED_RESPONSE


class TransportFailureError(AnalysisError):
    """Raised when the generation call itself could not complete."""

    reason = FailureReason.TRANSPORT_FAILURE


__all__ = [
    "AnalysisError",
    "ConfigurationMissingError",
    "ContentBlockedError",
    "EmptyResponseError",
    "FailureReason",
    "FileTooLargeError",
    "InputMissingError",
    "MalformedResponseError",
    "TransportFailureError",
    "UnsupportedFormatError",
]
