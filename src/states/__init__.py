from .media_file_state import MediaFile, WorkingSet, format_bytes
from .encoded_part_state import EncodedPart
from .request_payload_state import RequestPayload, TextPart
from .session_state import AnalysisStatus, SessionSnapshot

__all__ = [
    "MediaFile",
    "WorkingSet",
    "format_bytes",
    "EncodedPart",
    "RequestPayload",
    "TextPart",
    "AnalysisStatus",
    "SessionSnapshot",
]
