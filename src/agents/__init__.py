from .validator import UploadValidatorAgent, ValidationOutcome
from .encoder import MediaEncoderAgent
from .assembler import RequestAssemblerAgent, SYSTEM_INSTRUCTION
from .analyst import AnalystAgent, analyze
from .session import AnalysisSession

__all__ = [
    "UploadValidatorAgent",
    "ValidationOutcome",
    "MediaEncoderAgent",
    "RequestAssemblerAgent",
    "SYSTEM_INSTRUCTION",
    "AnalystAgent",
    "analyze",
    "AnalysisSession",
]
