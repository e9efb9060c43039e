"""CV upload, parsing and job scoring state."""

import asyncio
import logging
from collections.abc import Callable
from enum import Enum
from typing import Any

from jobfinder.api.schemas import JobPosting, JobScore
from jobfinder.client.api import JobFinderClient
from jobfinder.errors import JobFinderError

logger = logging.getLogger(__name__)

UPLOAD_ERROR_MESSAGE = "Failed to upload and parse CV."
MISSING_CV_MESSAGE = "Please upload and parse your CV first."
SCORE_ERROR_MESSAGE = "Failed to score the selected job."


class UploadState(str, Enum):
    IDLE = "idle"
    UPLOADING = "uploading"
    PARSING = "parsing"
    SUCCESS = "success"


class CVController:
    """
    Upload lifecycle plus scoring of the selected job.

    States run idle -> uploading -> parsing -> success, and back to idle once
    ``success_delay`` seconds have passed. A failure while uploading or parsing
    goes straight back to idle and leaves the held CV untouched.
    """

    def __init__(
        self,
        client: JobFinderClient,
        success_delay: float = 3.0,
        on_state_change: Callable[[UploadState], None] | None = None,
    ):
        self.client = client
        self.success_delay = success_delay
        self.on_state_change = on_state_change

        self.state = UploadState.IDLE
        self.parsed_cv: dict[str, Any] | None = None
        self.selected_job: JobPosting | None = None
        self.job_score: JobScore | None = None
        self.scored_job_id: str | None = None
        self.scoring = False
        self.error: str | None = None

        self._reset_task: asyncio.Task | None = None
        self._score_sequence = 0

    def _set_state(self, state: UploadState) -> None:
        self.state = state
        if self.on_state_change is not None:
            self.on_state_change(state)

    async def upload(self, filename: str, content: bytes) -> bool:
        """Upload and parse a CV. Returns True once the parsed CV is held."""
        if not content:
            return False

        if self._reset_task is not None and not self._reset_task.done():
            self._reset_task.cancel()

        self.error = None
        self._set_state(UploadState.UPLOADING)
        try:
            uploaded = await self.client.upload_resume(filename, content)
            self._set_state(UploadState.PARSING)
            parsed_cv = await self.client.parse_cv(uploaded.cv_text)
        except JobFinderError as e:
            logger.warning("CV upload of %s failed: %s", filename, e)
            self.error = UPLOAD_ERROR_MESSAGE
            self._set_state(UploadState.IDLE)
            return False

        self.parsed_cv = parsed_cv
        self._set_state(UploadState.SUCCESS)
        self._reset_task = asyncio.create_task(self._reset_after_delay())
        return True

    async def _reset_after_delay(self) -> None:
        await asyncio.sleep(self.success_delay)
        if self.state is UploadState.SUCCESS:
            self._set_state(UploadState.IDLE)

    async def wait_for_reset(self) -> None:
        """Wait until a pending success -> idle reset has happened."""
        if self._reset_task is not None:
            await asyncio.wait({self._reset_task})

    async def select_job(self, job: JobPosting) -> JobScore | None:
        """Show ``job`` in detail, scoring it right away when a CV is held."""
        self.selected_job = job
        if self.parsed_cv is None:
            return None
        return await self.score_job(job, self.parsed_cv)

    async def score_job(self, job: JobPosting, parsed_cv: dict[str, Any] | None) -> JobScore | None:
        """
        Score ``job`` against ``parsed_cv``.

        A failed call keeps the previous score. When scoring calls overlap,
        only the most recently issued one updates the score and the
        ``scoring`` flag.
        """
        if parsed_cv is None:
            self.error = MISSING_CV_MESSAGE
            return None

        self._score_sequence += 1
        ticket = self._score_sequence
        self.scoring = True
        self.error = None
        try:
            score = await self.client.score_job(job, parsed_cv)
        except JobFinderError as e:
            if ticket != self._score_sequence:
                logger.debug("Ignoring failure of superseded scoring for job %s", job.id)
                return None
            logger.warning("Scoring job %s failed: %s", job.id, e)
            self.error = SCORE_ERROR_MESSAGE
            self.scoring = False
            return None

        if ticket != self._score_sequence:
            logger.debug("Discarding stale score for job %s", job.id)
            return None

        self.job_score = score
        self.scored_job_id = job.id
        self.scoring = False
        return score

    def score_for(self, job: JobPosting) -> JobScore | None:
        """The held score if it was computed for ``job``."""
        if self.job_score is None or self.scored_job_id != job.id:
            return None
        return self.job_score

    def clear_selection(self) -> None:
        self.selected_job = None
