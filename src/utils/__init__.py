from .config import AnalyzerConfig
from .errors import (
    AnalysisError,
    BackendError,
    EncodingError,
    MissingCredentialError,
    NoMediaError,
    SessionBusyError,
    ValidationError,
)
from .error_classifier import ErrorCause, classify
from .gemini_client import GeminiClient, get_gemini_client

__all__ = [
    "AnalyzerConfig",
    "AnalysisError",
    "BackendError",
    "EncodingError",
    "MissingCredentialError",
    "NoMediaError",
    "SessionBusyError",
    "ValidationError",
    "ErrorCause",
    "classify",
    "GeminiClient",
    "get_gemini_client",
]
