# agents/analyst.py
import logging
import time
from typing import Optional, Sequence

from states import MediaFile
from utils.config import AnalyzerConfig
from utils.errors import MissingCredentialError, NoMediaError
from utils.gemini_client import GeminiClient
from .assembler import RequestAssemblerAgent
from .encoder import MediaEncoderAgent

logger = logging.getLogger(__name__)


class AnalystAgent:
    """
    Runs one analysis attempt: encode every part, assemble the request and
    send it to Gemini. Failures surface as AnalysisError subclasses.
    """
    def __init__(self, config: AnalyzerConfig, gemini_client: Optional[GeminiClient] = None):
        self.config = config
        self.encoder = MediaEncoderAgent()
        self.assembler = RequestAssemblerAgent(config)
        self.gemini_client = gemini_client or GeminiClient(config)

    async def analyze(self, files: Sequence[MediaFile], context: str = "") -> str:
        files = list(files)
        # Both checks run before any file is read or any request is made
        if not self.config.has_credential:
            raise MissingCredentialError()
        if not files:
            raise NoMediaError()

        start = time.time()
        logger.info(f"Analyst Agent: Starting analysis of {len(files)} video part(s)...")
        parts = await self.encoder.encode_all(files)
        payload = self.assembler.assemble(context, parts)
        result = await self.gemini_client.infer(payload)
        logger.info(f"Analyst Agent: Analysis complete in {time.time() - start:.2f} seconds.")
        return result


async def analyze(files: Sequence[MediaFile], context: str = "", config: Optional[AnalyzerConfig] = None) -> str:
    """Analyzes the given video parts with a configuration read from the environment by default."""
    return await AnalystAgent(config or AnalyzerConfig.from_env()).analyze(files, context)
