"""Job search endpoints."""

import logging
import math

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from jobfinder.api.deps import Services, get_services
from jobfinder.api.limiter import limiter
from jobfinder.api.schemas import AdzunaSearchPayload, CountryResponse, SearchResultsResponse, SortMode
from jobfinder.config import settings
from jobfinder.tools.adzuna_search import COUNTRY_CODES, SERVICE_NAME, SUPPORTED_COUNTRIES
from jobfinder.utils.parser import validate_upstream

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/search-jobs", response_model=SearchResultsResponse)
@limiter.limit(settings.search_rate_limit)
async def search_jobs(
    request: Request,
    job_title: str = Query(..., alias="jobTitle"),
    country: str = Query("de"),
    page: int = Query(1, ge=1),
    per_page: int = Query(15, alias="jobPerPage", ge=1, le=50),
    sort_by: SortMode = Query("relevance"),
    services: Services = Depends(get_services),
):
    """Search job postings for one page of results."""
    query = job_title.strip()
    if not query:
        raise HTTPException(status_code=400, detail="jobTitle is required")

    country = country.lower()
    if country not in COUNTRY_CODES:
        raise HTTPException(status_code=400, detail=f"Unsupported country: {country}")

    data = await services.job_search.search(query, country, page=page, per_page=per_page, sort_by=sort_by)
    payload = validate_upstream(AdzunaSearchPayload, data, SERVICE_NAME)

    total_pages = math.ceil(payload.count / per_page)
    logger.info("Search %r (%s, %s) page %d/%d: %d total", query, country, sort_by, page, total_pages, payload.count)

    return SearchResultsResponse(
        results=payload.results,
        count=payload.count,
        currentPage=page,
        totalPages=total_pages,
        hasMore=page < total_pages,
    )


@router.get("/countries", response_model=list[CountryResponse])
def list_countries():
    """Countries the search endpoint accepts."""
    return [CountryResponse(code=code, name=name, flag=flag) for code, name, flag in SUPPORTED_COUNTRIES]
