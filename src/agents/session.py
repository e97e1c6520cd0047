# agents/session.py
import asyncio
import logging
from typing import Callable, Iterable, Optional

from states import AnalysisStatus, MediaFile, SessionSnapshot, WorkingSet
from utils.config import AnalyzerConfig
from utils.errors import AnalysisError, SessionBusyError
from .analyst import AnalystAgent
from .validator import UploadValidatorAgent

logger = logging.getLogger(__name__)

FAILED_ANALYSIS_MESSAGE = "Failed to analyze video."

TRIGGERABLE_STATES = {AnalysisStatus.IDLE, AnalysisStatus.COMPLETED, AnalysisStatus.ERROR}
BUSY_STATES = {AnalysisStatus.PREPARING, AnalysisStatus.ANALYZING}


class AnalysisSession:
    """
    Drives one user's analysis attempts:

        IDLE -> PREPARING -> ANALYZING -> COMPLETED | ERROR

    Only one attempt runs at a time. Editing the working set after an attempt
    returns the session to IDLE and drops the previous result or error.
    """
    def __init__(
        self,
        config: AnalyzerConfig,
        analyst: Optional[AnalystAgent] = None,
        on_status_change: Optional[Callable[[AnalysisStatus], None]] = None,
    ):
        self.config = config
        self.validator = UploadValidatorAgent(config)
        self.analyst = analyst or AnalystAgent(config)
        self.on_status_change = on_status_change

        self.working_set = WorkingSet()
        self.context = ""
        self.status = AnalysisStatus.IDLE
        self.result: Optional[str] = None
        self.error: Optional[str] = None

    @property
    def is_processing(self) -> bool:
        return self.status in BUSY_STATES

    def _set_status(self, status: AnalysisStatus):
        logger.info(f"Session status: {self.status.value} -> {status.value}")
        self.status = status
        if self.on_status_change:
            self.on_status_change(status)

    def _ensure_idle_inputs(self):
        if self.is_processing:
            raise SessionBusyError(self.status.value)

    def _reset_outcome(self):
        if self.status in (AnalysisStatus.COMPLETED, AnalysisStatus.ERROR):
            self.result = None
            self.error = None
            self._set_status(AnalysisStatus.IDLE)

    def select_files(self, files: Iterable[MediaFile]):
        """Validates and appends a batch. Raises ValidationError on rejection."""
        self._ensure_idle_inputs()
        files = list(files)
        if not files:
            return
        self.validator.add(self.working_set, files)
        self._reset_outcome()

    def remove_file(self, index: int) -> MediaFile:
        self._ensure_idle_inputs()
        removed = self.working_set.remove(index)
        self._reset_outcome()
        return removed

    def set_context(self, text: str):
        self._ensure_idle_inputs()
        self.context = text or ""

    async def trigger(self) -> Optional[str]:
        """
        Runs one attempt and returns the report, or None when the attempt
        failed or there was nothing to analyze. Failures are stored in
        ``error``; they are never raised.
        """
        if self.status not in TRIGGERABLE_STATES:
            raise SessionBusyError(self.status.value)
        if len(self.working_set) == 0:
            logger.info("Trigger ignored: no video parts selected.")
            return None

        self.result = None
        self.error = None
        self._set_status(AnalysisStatus.PREPARING)
        if self.config.settle_delay_seconds:
            await asyncio.sleep(self.config.settle_delay_seconds)
        self._set_status(AnalysisStatus.ANALYZING)

        try:
            analysis = await self.analyst.analyze(self.working_set.files, self.context)
        except AnalysisError as e:
            self.result = None
            self.error = e.message
            self._set_status(AnalysisStatus.ERROR)
            return None
        except Exception as e:
            logger.exception(f"Unexpected failure during analysis: {e}")
            self.result = None
            self.error = str(e) or FAILED_ANALYSIS_MESSAGE
            self._set_status(AnalysisStatus.ERROR)
            return None

        self.result = analysis
        self._set_status(AnalysisStatus.COMPLETED)
        return analysis

    def start_new(self):
        """Clears parts, context and result for a fresh analysis."""
        self._ensure_idle_inputs()
        self.working_set.clear()
        self.context = ""
        self.result = None
        self.error = None
        if self.status != AnalysisStatus.IDLE:
            self._set_status(AnalysisStatus.IDLE)

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            status=self.status,
            part_count=len(self.working_set),
            total_size_bytes=self.working_set.total_size,
            context=self.context,
            result=self.result,
            error=self.error,
        )
