"""
CLI smoke test for a live job search against Adzuna.

Tests:
1. Credentials are configured
2. First page comes back with results and a total count
3. Page window for that total
4. Second page returns different postings

Usage:
    uv run python scripts/smoke_search.py "python developer" de
"""

import asyncio
import sys
import time

from dotenv import load_dotenv

load_dotenv()

from jobfinder.api.schemas import AdzunaSearchPayload
from jobfinder.client.pagination import compute_page_window, total_pages
from jobfinder.config import settings
from jobfinder.errors import JobFinderError
from jobfinder.tools.adzuna_search import AdzunaClient
from jobfinder.utils.display import render_job_card, render_pagination


async def main(query: str, country: str) -> int:
    print("=" * 60)
    print(f"Adzuna search -- CLI Test ({query!r} in {country.upper()})")
    print("=" * 60)

    print("\n[1/4] Checking credentials...")
    if not settings.adzuna_app_id or not settings.adzuna_app_key:
        print("  FAIL: ADZUNA_APP_ID / ADZUNA_APP_KEY not set")
        return 1
    print("  OK")

    client = AdzunaClient(
        settings.adzuna_app_id,
        settings.adzuna_app_key,
        base_url=settings.adzuna_base_url,
        max_days_old=settings.max_days_old,
        timeout=settings.request_timeout,
    )
    try:
        print("\n[2/4] Fetching page 1...")
        t0 = time.time()
        first = AdzunaSearchPayload.model_validate(
            await client.search(query, country.lower(), 1, settings.page_size)
        )
        print(f"  {len(first.results)} results of {first.count:,} in {time.time() - t0:.1f}s")
        for i, job in enumerate(first.results[:3], 1):
            print(render_job_card(i, job))

        print("\n[3/4] Page window...")
        pages = total_pages(first.count, settings.page_size)
        window = compute_page_window(1, first.count, settings.page_size, settings.max_page_buttons)
        print(f"  {pages} pages: {render_pagination(window, 1)}")

        if pages < 2:
            print("\n[4/4] Only one page, skipping")
            return 0

        print("\n[4/4] Fetching page 2...")
        second = AdzunaSearchPayload.model_validate(
            await client.search(query, country.lower(), 2, settings.page_size)
        )
        overlap = {job.id for job in first.results} & {job.id for job in second.results}
        print(f"  {len(second.results)} results, {len(overlap)} overlapping with page 1")
    except JobFinderError as e:
        print(f"  FAIL: {e}")
        return 1
    finally:
        await client.aclose()

    print("\nDone.")
    return 0


if __name__ == "__main__":
    args = sys.argv[1:]
    sys.exit(asyncio.run(main(args[0] if args else "python developer", args[1] if len(args) > 1 else "de")))
