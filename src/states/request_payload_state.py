from typing import List, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field
from typing_extensions import TypedDict

from .encoded_part_state import EncodedPart


class TextPart(TypedDict):
    text: str


class RequestPayload(BaseModel):
    """
    The single multimodal request sent for one attempt: a leading text part,
    then the video parts in working set order, with a fixed system
    instruction and sampling temperature.
    """
    model_config = ConfigDict(frozen=True)

    model: str = Field(..., description="Gemini model identifier.")
    text: str = Field(..., description="Leading instruction placed before the videos.")
    media_parts: Tuple[EncodedPart, ...] = Field(default=(), description="Encoded videos, Part 1 first.")
    system_instruction: str = Field(..., description="Fixed output schema instruction.")
    temperature: float = Field(..., description="Sampling temperature.")

    @property
    def parts(self) -> List[Union[TextPart, EncodedPart]]:
        # Fresh dicts each call so callers cannot alter the stored parts
        return [TextPart(text=self.text), *(EncodedPart(**p) for p in self.media_parts)]

    @property
    def part_count(self) -> int:
        return len(self.media_parts)
