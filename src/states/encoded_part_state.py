from typing_extensions import TypedDict


class EncodedPart(TypedDict):
    """
    Inline representation of one video part: the declared media type and the
    base64 text of its bytes. Rebuilt for every attempt.
    """
    mime_type: str
    data: str
