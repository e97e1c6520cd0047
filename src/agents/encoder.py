# agents/encoder.py
import asyncio
import base64
import logging
from typing import List, Sequence

from states import EncodedPart, MediaFile
from utils.errors import EncodingError

logger = logging.getLogger(__name__)


class MediaEncoderAgent:
    @staticmethod
    def _read_and_encode(media: MediaFile) -> str:
        return base64.b64encode(media.read()).decode("ascii")

    async def encode(self, media: MediaFile) -> EncodedPart:
        """Reads the whole video off the event loop and base64 encodes it."""
        try:
            data = await asyncio.to_thread(self._read_and_encode, media)
        except Exception as e:
            logger.error(f"Failed to encode '{media.name}': {e}")
            raise EncodingError(media.name, str(e)) from e
        return EncodedPart(mime_type=media.mime_type, data=data)

    async def encode_all(self, files: Sequence[MediaFile]) -> List[EncodedPart]:
        """
        Encodes every part concurrently. Results keep the order of ``files``;
        the first failure aborts the whole batch.
        """
        logger.info(f"Encoding {len(files)} video part(s)...")
        encode_tasks = [asyncio.ensure_future(self.encode(media)) for media in files]
        try:
            return list(await asyncio.gather(*encode_tasks))
        except BaseException:
            for task in encode_tasks:
                task.cancel()
            # Collect sibling outcomes so no task exception goes unretrieved
            await asyncio.gather(*encode_tasks, return_exceptions=True)
            raise
