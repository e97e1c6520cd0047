# agents/assembler.py
from typing import Sequence

from states import EncodedPart, RequestPayload
from utils.config import AnalyzerConfig

SYSTEM_INSTRUCTION = """
You are a Senior Product Manager and QA Engineer expert in reverse-engineering application requirements from visual demonstrations.

Your goal is to watch the provided video demonstration(s) of a software application (mobile or web) and listen to the accompanying audio to produce a detailed Feature Specification.
If multiple video parts are provided, treat them as a sequential demonstration of the same application.

Structure your response in Markdown with the following sections:

1.  **Overview**: A 1-2 sentence summary of what the app does.
2.  **Core Features**: A bulleted list of specific functionalities demonstrated (e.g., "User Login via OTP", "Dashboard with Sales Charts").
3.  **User Flow Analysis**: Describe the steps the user took in the video (e.g., "User clicked Settings > Profile > Edit").
4.  **UI/UX Observations**: Details about the design, colors, layout, or specific UI components noticed.
5.  **Audio Insights**: Information derived specifically from the spoken narration (e.g., "The narrator mentioned this feature is currently in beta").
6.  **Technical Inferences**: Any deduced technical details (e.g., "Real-time updates implies WebSocket usage").

If the video seems to be a specific part of a larger app (e.g., part 2 of 3), explicitly mention this in the Overview.
"""

REPORT_SECTIONS = (
    "Overview",
    "Core Features",
    "User Flow Analysis",
    "UI/UX Observations",
    "Audio Insights",
    "Technical Inferences",
)


class RequestAssemblerAgent:
    def __init__(self, config: AnalyzerConfig):
        self.config = config

    def _build_prompt_for_video_parts(self, context: str, part_count: int) -> str:
        if context:
            return (
                f'Context provided by user: "{context}". \n\n'
                f"The user has provided {part_count} video part(s). "
                "Analyze them as a continuous sequence to understand the full app functionality."
            )
        return (
            f"Analyze the attached {part_count} video part(s) as a continuous demonstration of the app. "
            "Identify all features and flows."
        )

    def assemble(self, context: str, parts: Sequence[EncodedPart]) -> RequestPayload:
        return RequestPayload(
            model=self.config.model_name,
            text=self._build_prompt_for_video_parts(context, len(parts)),
            media_parts=tuple(EncodedPart(mime_type=p["mime_type"], data=p["data"]) for p in parts),
            system_instruction=SYSTEM_INSTRUCTION,
            temperature=self.config.temperature,
        )
