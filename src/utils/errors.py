from enum import Enum
from typing import Optional

MISSING_CREDENTIAL_MESSAGE = "API Key is missing. Please check your environment configuration."
NO_MEDIA_MESSAGE = "No video files provided."


class RejectionCause(str, Enum):
    TOTAL_SIZE_EXCEEDED = "total_size_exceeded"
    UNSUPPORTED_TYPE = "unsupported_type"
    FILE_TOO_LARGE = "file_too_large"


class ErrorCause(str, Enum):
    CREDENTIAL_INVALID = "credential_invalid"
    PAYLOAD_TOO_LARGE = "payload_too_large"
    UNCLASSIFIED = "unclassified"


class AnalysisError(Exception):
    """Base class for every failure the pipeline reports to its caller."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AnalysisError):
    """A batch of files was rejected before reaching the working set."""

    def __init__(self, cause: RejectionCause, message: str, file_name: Optional[str] = None):
        super().__init__(message)
        self.cause = cause
        self.file_name = file_name


class MissingCredentialError(AnalysisError):
    def __init__(self, message: str = MISSING_CREDENTIAL_MESSAGE):
        super().__init__(message)


class NoMediaError(AnalysisError):
    def __init__(self, message: str = NO_MEDIA_MESSAGE):
        super().__init__(message)


class EncodingError(AnalysisError):
    def __init__(self, file_name: str, reason: str):
        super().__init__(f'Could not read video "{file_name}": {reason}')
        self.file_name = file_name


class BackendError(AnalysisError):
    """A classified failure of the Gemini request."""

    def __init__(self, cause: ErrorCause, message: str):
        super().__init__(message)
        self.cause = cause


class SessionBusyError(AnalysisError):
    def __init__(self, status: str):
        super().__init__(f"An analysis is already in progress (status: {status}).")
        self.status = status
