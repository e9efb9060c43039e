"""Service container and FastAPI dependencies."""

from dataclasses import dataclass

import httpx
from fastapi import Request

from jobfinder.config import Settings
from jobfinder.tools.adzuna_search import AdzunaClient
from jobfinder.tools.aws_lambda import LambdaEndpoint
from jobfinder.tools.s3_upload import ResumeStorage


@dataclass
class Services:
    """External-service clients owned by one running application."""

    job_search: AdzunaClient
    storage: ResumeStorage
    text_extractor: LambdaEndpoint
    cv_parser: LambdaEndpoint
    job_scorer: LambdaEndpoint
    http: httpx.AsyncClient

    async def aclose(self) -> None:
        await self.job_search.aclose()
        await self.http.aclose()


def build_services(settings: Settings) -> Services:
    """Create the service clients for one application lifetime."""
    http = httpx.AsyncClient(timeout=settings.request_timeout)
    return Services(
        job_search=AdzunaClient(
            app_id=settings.adzuna_app_id,
            app_key=settings.adzuna_app_key,
            base_url=settings.adzuna_base_url,
            max_days_old=settings.max_days_old,
            timeout=settings.request_timeout,
        ),
        storage=ResumeStorage(bucket=settings.aws_s3_bucket_name, region=settings.aws_region),
        text_extractor=LambdaEndpoint("Text extraction", settings.upload_endpoint_url, settings.aws_region, http),
        cv_parser=LambdaEndpoint("CV parsing", settings.parse_endpoint_url, settings.aws_region, http),
        job_scorer=LambdaEndpoint("Job scoring", settings.score_endpoint_url, settings.aws_region, http),
        http=http,
    )


def get_services(request: Request) -> Services:
    """FastAPI dependency for the application's service clients."""
    services = getattr(request.app.state, "services", None)
    if services is None:
        raise RuntimeError("Services not initialized; the app lifespan has not run")
    return services
