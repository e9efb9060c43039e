"""
Plain-text rendering for the terminal front end.

Job cards, the job detail view, score breakdown bars and the pagination bar.
"""

from markdownify import markdownify

from jobfinder.api.schemas import JobPosting, JobScore
from jobfinder.client.pagination import PageWindow

BAR_WIDTH = 20
SNIPPET_LENGTH = 150

# Block tags keep their separation; script and style bodies are dropped.
# Every other tag is flattened to its text.
SNIPPET_TAGS = ["p", "br", "div", "li", "script", "style"]


def strip_html(text: str) -> str:
    """Plain one-line text of an HTML description."""
    if not text:
        return ""
    plain = markdownify(text, convert=SNIPPET_TAGS, escape_asterisks=False, escape_underscores=False)
    return " ".join(plain.split())


def _amount(value: float) -> str:
    return f"{value:,.0f}"


def format_salary(job: JobPosting, period: str = "/year") -> str | None:
    """Salary range label, or None when the posting has no salary."""
    currency = f"{job.salary_currency} " if job.salary_currency else ""
    if job.salary_min and job.salary_max:
        return f"{currency}{_amount(job.salary_min)} - {_amount(job.salary_max)}{period}"
    if job.salary_min:
        return f"From {currency}{_amount(job.salary_min)}"
    if job.salary_max:
        return f"Up to {currency}{_amount(job.salary_max)}"
    return None


def format_contract_time(job: JobPosting) -> str | None:
    """'full_time' -> 'Full_time', matching the upstream label with a capital."""
    if not job.contract_time:
        return None
    return job.contract_time[:1].upper() + job.contract_time[1:]


def render_job_card(index: int, job: JobPosting) -> str:
    lines = [f"{index:>3}. {job.title}", f"     {job.company.display_name}"]
    if job.location.display_name:
        lines.append(f"     Location: {job.location.display_name}")
    salary = format_salary(job)
    if salary:
        lines.append(f"     Salary:   {salary}")
    contract = format_contract_time(job)
    if contract:
        lines.append(f"     Contract: {contract}")
    if job.created:
        lines.append(f"     Posted:   {job.created.date().isoformat()}")

    snippet = strip_html(job.description)
    if len(snippet) > SNIPPET_LENGTH:
        snippet = snippet[:SNIPPET_LENGTH].rstrip() + "..."
    if snippet:
        lines.append(f"     {snippet}")
    return "\n".join(lines)


def render_score_bar(label: str, value: float, maximum: float = 100.0) -> str:
    filled = round(BAR_WIDTH * max(0.0, min(value, maximum)) / maximum)
    return f"  {label:<11}[{'#' * filled}{'.' * (BAR_WIDTH - filled)}] {value:.0f}"


def render_score(score: JobScore) -> str:
    lines = [f"Match score: {score.score:.0f}/100"]
    for name, value in score.breakdown.items():
        lines.append(render_score_bar(name.capitalize(), value))
    if score.satisfied:
        lines.append("Matches:")
        lines.extend(f"  + {reason}" for reason in score.satisfied)
    if score.unsatisfied:
        lines.append("Gaps:")
        lines.extend(f"  - {reason}" for reason in score.unsatisfied)
    if score.reason:
        lines.append(f"Reason: {score.reason}")
    return "\n".join(lines)


def render_job_detail(job: JobPosting, score: JobScore | None = None, scoring: bool = False) -> str:
    lines = [job.title, job.company.display_name, job.location.display_name]
    salary = format_salary(job, period=" per year")
    if salary:
        lines.append(salary)
    contract = format_contract_time(job)
    if contract:
        lines.append(contract)
    if job.category and job.category.label:
        lines.append(f"Category: {job.category.label}")

    description = markdownify(job.description).strip() if job.description else ""
    lines.extend(["", "Job Description", description or "No description available."])

    if scoring:
        lines.extend(["", "Scoring against your CV..."])
    elif score is not None:
        lines.extend(["", render_score(score)])

    if job.redirect_url:
        lines.extend(["", f"Apply: {job.redirect_url}"])
    return "\n".join(lines)


def render_pagination(window: PageWindow, current_page: int) -> str:
    """One-line page bar, e.g. ``< 1 ... 4 [5] 6 ... 20 >``."""
    if not window:
        return ""

    parts = ["<"]
    if window.show_first:
        parts.append("1")
        if window.leading_ellipsis:
            parts.append("...")
    parts.extend(f"[{page}]" if page == current_page else str(page) for page in window.pages)
    if window.show_last:
        if window.trailing_ellipsis:
            parts.append("...")
        parts.append(str(window.total_pages))
    parts.append(">")
    return " ".join(parts)
