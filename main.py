"""
Job Finder - CLI Entry Point.

Terminal front end for the Job Finder API: search, paginate, upload a CV
and score jobs against it.
"""

import asyncio
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

from jobfinder.client import CVController, JobFinderClient, SearchController, UploadState
from jobfinder.config import settings
from jobfinder.tools.adzuna_search import SUPPORTED_COUNTRIES
from jobfinder.utils.display import render_job_card, render_job_detail, render_pagination

UPLOAD_LABELS = {
    UploadState.UPLOADING: "Uploading...",
    UploadState.PARSING: "Analyzing CV...",
    UploadState.SUCCESS: "CV Ready!",
}

HELP = """Commands:
  <text>             search job titles
  /country <code>    set country (US, GB, DE, FR, ES, IT, NL, CA, AU, IN)
  /sort <mode>       relevance or date
  /page <n>, /next, /prev
  /job <n>           show job details (scored when a CV is loaded)
  /close             close job details
  /upload <path>     upload your CV
  /help, /quit"""


def show_results(search: SearchController) -> None:
    if search.error:
        print(f"\n{search.error}")
    if search.searched and not search.results:
        print("\nNo jobs found. Try adjusting your search or filters.")
        return
    if not search.results:
        return

    first, last = search.showing_range()
    print(f"\nShowing {first} to {last} of {search.total_items:,} results\n")
    for i, job in enumerate(search.results, 1):
        print(render_job_card(i, job))
        print()
    print(render_pagination(search.page_window(), search.current_page))


def show_upload_state(state: UploadState) -> None:
    label = UPLOAD_LABELS.get(state)
    if label:
        print(f"[CV] {label}")


async def handle(command: str, search: SearchController, cv: CVController) -> None:
    """Run one command line."""
    name, _, arg = command.partition(" ")
    arg = arg.strip()

    if name == "/help":
        print(HELP)
    elif name == "/country":
        codes = {code for code, _, _ in SUPPORTED_COUNTRIES}
        if arg.upper() not in codes:
            print(f"Unknown country: {arg}")
            return
        search.country = arg.upper()
        print(f"Country: {search.country}")
    elif name == "/sort":
        if arg not in ("relevance", "date"):
            print("Sort must be 'relevance' or 'date'")
            return
        search.sort_by = arg
        print(f"Sort: {arg}")
    elif name in ("/page", "/next", "/prev"):
        if name == "/next":
            changed = await search.next_page()
        elif name == "/prev":
            changed = await search.previous_page()
        else:
            changed = arg.isdigit() and await search.change_page(int(arg))
        if changed or search.error:
            show_results(search)
        else:
            print("No such page")
    elif name == "/job":
        if not arg.isdigit() or not 1 <= int(arg) <= len(search.results):
            print("Pick a job number from the current page")
            return
        job = search.results[int(arg) - 1]
        if cv.parsed_cv is None:
            print("Upload your CV (/upload <path>) to see how well you match.\n")
        else:
            print("Scoring against your CV...")
        await cv.select_job(job)
        if cv.error:
            print(cv.error)
        print()
        print(render_job_detail(job, cv.score_for(job)))
    elif name == "/close":
        cv.clear_selection()
    elif name == "/upload":
        path = Path(arg)
        if not path.is_file():
            print(f"Not found: {path}")
            return
        if await cv.upload(path.name, path.read_bytes()):
            print("CV parsed. Select a job with /job <n> to score it.")
        else:
            print(cv.error)
    else:
        search.query = command
        await search.search(1)
        show_results(search)


async def run() -> int:
    print("Job Finder")
    print("=" * 40)
    print(f"API: {settings.api_base_url}")
    print(HELP)
    print("-" * 40)

    async with JobFinderClient() as client:
        search = SearchController(
            client,
            page_size=settings.page_size,
            max_buttons=settings.max_page_buttons,
        )
        cv = CVController(client, success_delay=settings.success_display_delay, on_state_change=show_upload_state)

        while True:
            try:
                user_input = (await asyncio.to_thread(input, "You: ")).strip()
            except (EOFError, KeyboardInterrupt):
                break

            if not user_input:
                continue
            if user_input.lower() == "/quit":
                break

            await handle(user_input, search, cv)

    print("Goodbye!")
    return 0


def main() -> int:
    """Run the Job Finder CLI."""
    logging.basicConfig(level=settings.log_level.upper())
    return asyncio.run(run())


if __name__ == "__main__":
    sys.exit(main())
