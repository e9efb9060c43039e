"""
Client-side controllers for the Job Finder API.

- api: HTTP client for the proxy endpoints
- pagination: Page-number window computation
- search_controller: Query, filters and paginated results
- cv_controller: CV upload/parse lifecycle and job scoring
"""

from jobfinder.client.api import ApiError, JobFinderClient
from jobfinder.client.cv_controller import CVController, UploadState
from jobfinder.client.pagination import PageWindow, compute_page_window
from jobfinder.client.search_controller import SearchController

__all__ = [
    "ApiError",
    "JobFinderClient",
    "CVController",
    "UploadState",
    "PageWindow",
    "compute_page_window",
    "SearchController",
]
