"""Search and pagination state for the job list."""

import logging

from jobfinder.api.schemas import JobPosting
from jobfinder.client.api import JobFinderClient
from jobfinder.client.pagination import PageWindow, compute_page_window, total_pages
from jobfinder.errors import JobFinderError

logger = logging.getLogger(__name__)

SEARCH_ERROR_MESSAGE = "Failed to fetch jobs. Please try again."


class SearchController:
    """
    Turns a query plus filters into page-scoped fetches.

    Each request is tagged with a sequence number when dispatched. A response
    is applied only if no newer request was dispatched since, so overlapping
    searches resolve to the most recent one.
    """

    def __init__(
        self,
        client: JobFinderClient,
        page_size: int = 15,
        max_buttons: int = 5,
        country: str = "DE",
        sort_by: str = "relevance",
    ):
        self.client = client
        self.page_size = page_size
        self.max_buttons = max_buttons

        self.query = ""
        self.country = country
        self.sort_by = sort_by

        self.results: list[JobPosting] = []
        self.total_items = 0
        self.current_page = 1
        self.searched = False
        self.loading = False
        self.error: str | None = None
        self.scroll_offset = 0

        self._sequence = 0

    @property
    def total_pages(self) -> int:
        return total_pages(self.total_items, self.page_size)

    def page_window(self) -> PageWindow:
        return compute_page_window(self.current_page, self.total_items, self.page_size, self.max_buttons)

    def showing_range(self) -> tuple[int, int]:
        """1-based indices of the first and last result on the current page."""
        if not self.total_items:
            return (0, 0)
        first = (self.current_page - 1) * self.page_size + 1
        return (first, min(self.current_page * self.page_size, self.total_items))

    async def search(self, page: int = 1) -> bool:
        """Fetch ``page`` for the current query. Returns True if state was updated."""
        query = self.query.strip()
        if not query:
            return False

        self._sequence += 1
        ticket = self._sequence
        self.loading = True
        self.error = None

        try:
            result = await self.client.search_jobs(
                query,
                self.country.lower(),
                page=page,
                per_page=self.page_size,
                sort_by=self.sort_by,
            )
        except JobFinderError as e:
            if ticket != self._sequence:
                logger.debug("Ignoring failure of superseded search for page %d", page)
                return False
            logger.warning("Job search for %r failed: %s", query, e)
            self.error = SEARCH_ERROR_MESSAGE
            self.loading = False
            return False

        if ticket != self._sequence:
            logger.debug("Discarding stale response for page %d", page)
            return False

        self.results = list(result.results)
        self.total_items = result.count
        self.current_page = page
        self.searched = True
        self.loading = False
        return True

    async def change_page(self, new_page: int) -> bool:
        """Load ``new_page`` and scroll back to the top; out-of-range pages are ignored."""
        if new_page < 1 or new_page > self.total_pages:
            return False
        updated = await self.search(new_page)
        self.scroll_offset = 0
        return updated

    async def next_page(self) -> bool:
        return await self.change_page(self.current_page + 1)

    async def previous_page(self) -> bool:
        return await self.change_page(self.current_page - 1)
