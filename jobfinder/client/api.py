"""Async HTTP client for the Job Finder proxy API."""

import logging
from typing import Any

import httpx

from jobfinder.api.schemas import (
    JobPosting,
    JobScore,
    ParseCVResponse,
    ResumeUploadResponse,
    ScoreJobResponse,
    SearchResultsResponse,
)
from jobfinder.config import settings
from jobfinder.errors import JobFinderError
from jobfinder.utils.parser import decode_json_payload, validate_upstream

logger = logging.getLogger(__name__)

SERVICE_NAME = "Job Finder API"


class ApiError(JobFinderError):
    """The proxy API could not be reached or answered with a non-2xx status."""

    def __init__(self, message: str, status_code: int | None = None, detail: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail


class JobFinderClient:
    """Calls the four proxy endpoints and decodes their responses."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        http: httpx.AsyncClient | None = None,
    ):
        self._http = http or httpx.AsyncClient(
            base_url=base_url or settings.api_base_url,
            timeout=timeout or settings.request_timeout,
        )

    async def __aenter__(self) -> "JobFinderClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            response = await self._http.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            raise ApiError(f"{method} {path} failed: {str(e) or type(e).__name__}") from e

        if response.is_error:
            try:
                detail = response.json().get("detail")
            except (ValueError, AttributeError):
                detail = response.text
            raise ApiError(f"{method} {path} returned {response.status_code}", response.status_code, detail)

        try:
            data = response.json()
        except ValueError as e:
            raise ApiError(f"{method} {path} returned a non-JSON body", response.status_code) from e
        return decode_json_payload(data, SERVICE_NAME)

    async def search_jobs(
        self,
        job_title: str,
        country: str,
        page: int = 1,
        per_page: int = 15,
        sort_by: str = "relevance",
    ) -> SearchResultsResponse:
        data = await self._request(
            "GET",
            "/api/search-jobs",
            params={
                "jobTitle": job_title,
                "country": country,
                "page": page,
                "jobPerPage": per_page,
                "sort_by": sort_by,
            },
        )
        return validate_upstream(SearchResultsResponse, data, SERVICE_NAME)

    async def upload_resume(self, filename: str, content: bytes) -> ResumeUploadResponse:
        data = await self._request("POST", "/api/upload-resume", files={"file": (filename, content)})
        return validate_upstream(ResumeUploadResponse, data, SERVICE_NAME)

    async def parse_cv(self, cv_text: str) -> dict[str, Any]:
        data = await self._request("POST", "/api/parse-cv", json={"cv_text": cv_text})
        return validate_upstream(ParseCVResponse, data, SERVICE_NAME).parsed_cv

    async def score_job(self, job: JobPosting, cv: dict[str, Any]) -> JobScore:
        data = await self._request(
            "POST",
            "/api/score-job",
            json={"jobs": [job.model_dump(mode="json")], "cv": cv},
        )
        return validate_upstream(ScoreJobResponse, data, SERVICE_NAME).score
