import logging
import re
from typing import Optional

from .errors import BackendError, ErrorCause

logger = logging.getLogger(__name__)

AUTH_FAILED_MESSAGE = "Authentication failed. The API Key provided is invalid or expired."
PAYLOAD_TOO_LARGE_MESSAGE = "The video data is too large for the API request. Please reduce the video size or length."
UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred during analysis."

AUTH_CODES = {401}
# Numeric codes only count as whole words, e.g. not inside "1413120"
AUTH_PATTERN = re.compile(r"\b401\b|UNAUTHENTICATED|API key not valid")
PAYLOAD_CODES = {413}
PAYLOAD_PATTERN = re.compile(r"\b413\b|Payload Too Large")


def _raw_message(raw_error: BaseException) -> Optional[str]:
    # google.genai APIError keeps the backend message apart from str(e)
    message = getattr(raw_error, "message", None)
    if isinstance(message, str) and message.strip():
        return message
    text = str(raw_error)
    return text if text.strip() else None


def classify(raw_error: BaseException) -> BackendError:
    """
    Maps a raw backend failure onto a user facing BackendError.

    Structured fields (``code`` and ``status`` on google.genai APIError) are
    checked first, then the error text. Anything unrecognised keeps its own
    message so new failure modes are not masked.
    """
    if isinstance(raw_error, BackendError):
        return raw_error

    code = getattr(raw_error, "code", None)
    status = getattr(raw_error, "status", None)
    text = f"{_raw_message(raw_error) or ''} {raw_error}"

    if code in AUTH_CODES or status == "UNAUTHENTICATED" or AUTH_PATTERN.search(text):
        cause, message = ErrorCause.CREDENTIAL_INVALID, AUTH_FAILED_MESSAGE
    elif code in PAYLOAD_CODES or PAYLOAD_PATTERN.search(text):
        cause, message = ErrorCause.PAYLOAD_TOO_LARGE, PAYLOAD_TOO_LARGE_MESSAGE
    else:
        cause, message = ErrorCause.UNCLASSIFIED, _raw_message(raw_error) or UNEXPECTED_ERROR_MESSAGE

    logger.info(f"Classified backend error {type(raw_error).__name__} as {cause.value}")
    return BackendError(cause, message)
