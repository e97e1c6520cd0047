from enum import Enum
from typing import TypedDict, Optional


class AnalysisStatus(str, Enum):
    IDLE = "IDLE"
    PREPARING = "PREPARING"   # Reading and encoding the video parts
    ANALYZING = "ANALYZING"   # Waiting for Gemini
    COMPLETED = "COMPLETED"
    ERROR = "ERROR"


class SessionSnapshot(TypedDict):
    """
    Read-only view of a session for the presentation layer.
    """
    status: AnalysisStatus
    part_count: int
    total_size_bytes: int
    context: str
    result: Optional[str]   # Markdown report, only when COMPLETED
    error: Optional[str]    # Human readable message, only when ERROR
