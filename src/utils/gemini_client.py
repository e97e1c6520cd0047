import base64
import logging
from typing import Any, List, Optional

import google.genai as genai
from google.genai import types

from states.request_payload_state import RequestPayload
from .config import AnalyzerConfig
from .error_classifier import classify
from .errors import MissingCredentialError, NoMediaError

logger = logging.getLogger(__name__)

NO_ANALYSIS_MESSAGE = "No analysis generated."


class GeminiClient:
    """
    Sends an assembled RequestPayload to Gemini in a single
    generate_content call and returns the markdown text.

    The SDK client is created lazily so that a missing credential is reported
    without touching the network. Tests pass a stand-in through ``client``.
    """
    def __init__(self, config: AnalyzerConfig, client: Any = None):
        self.config = config
        self._client = client

    @staticmethod
    def _model_path(model_name: str) -> str:
        if model_name.startswith("models/"):
            return model_name
        return f"models/{model_name}"

    def _get_client(self) -> Any:
        if not self.config.has_credential:
            logger.error("Gemini request refused: no API key configured.")
            raise MissingCredentialError()
        if self._client is None:
            self._client = genai.Client(api_key=self.config.api_key)
            logger.info("Gemini client initialized.")
        return self._client

    @staticmethod
    def _build_contents(payload: RequestPayload) -> List[types.Part]:
        contents = [types.Part(text=payload.text)]
        for part in payload.media_parts:
            contents.append(
                types.Part(
                    inline_data=types.Blob(
                        data=base64.b64decode(part["data"]),
                        mime_type=part["mime_type"],
                    )
                )
            )
        return contents

    async def infer(self, payload: RequestPayload) -> str:
        client = self._get_client()
        if payload.part_count == 0:
            raise NoMediaError()

        model = self._model_path(payload.model)
        logger.info(f"Sending {payload.part_count} video part(s) to {model}...")
        try:
            response = await client.aio.models.generate_content(
                model=model,
                contents=self._build_contents(payload),
                config=types.GenerateContentConfig(
                    system_instruction=payload.system_instruction,
                    temperature=payload.temperature,
                ),
            )
        except Exception as e:
            logger.error(f"Gemini API error: {e}")
            raise classify(e) from e

        text = getattr(response, "text", None)
        if not text:
            logger.warning("Gemini returned no text for the analysis request.")
            return NO_ANALYSIS_MESSAGE
        logger.info("Received analysis from Gemini.")
        return text


def get_gemini_client(config: Optional[AnalyzerConfig] = None, client: Any = None) -> GeminiClient:
    return GeminiClient(config or AnalyzerConfig.from_env(), client=client)
