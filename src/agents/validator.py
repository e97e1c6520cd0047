# agents/validator.py
import logging
from typing import Iterable, List, Optional

from states import MediaFile, WorkingSet, format_bytes
from utils.config import AnalyzerConfig
from utils.errors import RejectionCause, ValidationError

logger = logging.getLogger(__name__)


class ValidationOutcome:
    def __init__(self, error: Optional[ValidationError] = None):
        self.error = error

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def cause(self) -> Optional[RejectionCause]:
        return self.error.cause if self.error else None

    @property
    def message(self) -> Optional[str]:
        return self.error.message if self.error else None

    def __repr__(self) -> str:
        return "ValidationOutcome(ok)" if self.ok else f"ValidationOutcome({self.cause.value}: {self.message})"


class UploadValidatorAgent:
    def __init__(self, config: AnalyzerConfig):
        self.config = config

    def _fmt_mb(self, value: float) -> str:
        return f"{value:g}MB"

    def validate(self, new_files: Iterable[MediaFile], existing: Iterable[MediaFile]) -> ValidationOutcome:
        """
        Checks a batch against the working set it would join. The first
        failing rule wins: total size, then media type of every new file,
        then size of every new file, each in submission order.
        """
        new_files = list(new_files)
        total = sum(f.size for f in existing) + sum(f.size for f in new_files)

        if total > self.config.max_total_size_bytes:
            return ValidationOutcome(ValidationError(
                RejectionCause.TOTAL_SIZE_EXCEEDED,
                f"Total size exceeds {self._fmt_mb(self.config.max_total_size_mb)}. "
                "Please split videos or compress them.",
            ))

        for media in new_files:
            if not media.mime_type.startswith("video/"):
                return ValidationOutcome(ValidationError(
                    RejectionCause.UNSUPPORTED_TYPE,
                    "Only video files are supported.",
                    file_name=media.name,
                ))

        for media in new_files:
            if media.size > self.config.max_file_size_bytes:
                return ValidationOutcome(ValidationError(
                    RejectionCause.FILE_TOO_LARGE,
                    f'File "{media.name}" is too large ({format_bytes(media.size)}). '
                    f"Max single file size is {self._fmt_mb(self.config.max_file_size_mb)}.",
                    file_name=media.name,
                ))

        return ValidationOutcome()

    def add(self, working_set: WorkingSet, new_files: Iterable[MediaFile]) -> List[MediaFile]:
        """
        Appends the whole batch or nothing. Raises ValidationError on
        rejection, leaving the working set as it was.
        """
        new_files = list(new_files)
        outcome = self.validate(new_files, working_set)
        if not outcome.ok:
            logger.warning(f"Upload rejected ({outcome.cause.value}): {outcome.message}")
            raise outcome.error

        working_set.extend(new_files)
        logger.info(
            f"Accepted {len(new_files)} video file(s); working set now has {len(working_set)} "
            f"part(s), {format_bytes(working_set.total_size)} total."
        )
        return new_files
