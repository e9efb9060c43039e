import json
from collections.abc import Callable

import httpx
import pytest
from botocore.credentials import Credentials
from fastapi.testclient import TestClient

from jobfinder.api.app import app
from jobfinder.api.deps import Services, get_services
from jobfinder.api.limiter import limiter
from jobfinder.tools.adzuna_search import AdzunaClient
from jobfinder.tools.aws_lambda import LambdaEndpoint
from jobfinder.tools.s3_upload import ResumeStorage

ADZUNA_URL = "https://adzuna.test/v1/api/jobs"
UPLOAD_URL = "https://upload.execute-api.eu-central-1.amazonaws.com/development-env"
PARSE_URL = "https://parse.execute-api.eu-central-1.amazonaws.com/development-env"
SCORE_URL = "https://score.execute-api.eu-central-1.amazonaws.com/development-env"

TEST_CREDENTIALS = Credentials("AKIDEXAMPLE", "wJalrXUtnFEMI/K7MDENG+bPxRfiCYEXAMPLEKEY")


def make_job(job_id: str = "4711", **overrides) -> dict:
    """An Adzuna-shaped job record."""
    job = {
        "id": job_id,
        "title": "Backend Engineer",
        "company": {"display_name": "ACME GmbH", "__CLASS__": "Adzuna::API::Response::Company"},
        "location": {"display_name": "Berlin", "area": ["Deutschland", "Berlin"]},
        "description": "<p>Build <b>APIs</b> in Python &amp; Go.</p>",
        "created": "2024-05-01T10:00:00Z",
        "salary_min": 60000,
        "salary_max": 80000,
        "contract_time": "full_time",
        "category": {"label": "IT Jobs", "tag": "it-jobs"},
        "redirect_url": "https://www.adzuna.de/land/ad/4711",
        "adref": "abc",
    }
    job.update(overrides)
    return job


class FakeS3:
    """Records put_object calls; optionally fails."""

    def __init__(self, error: Exception | None = None):
        self.calls: list[dict] = []
        self.error = error

    def put_object(self, **kwargs):
        if self.error is not None:
            raise self.error
        self.calls.append(kwargs)
        return {"ETag": '"etag"'}


class Upstream:
    """Routes outbound requests by host to per-service handlers."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.handlers: dict[str, Callable[[httpx.Request], httpx.Response]] = {
            "adzuna.test": lambda request: httpx.Response(200, json={"results": [make_job()], "count": 1}),
            "upload.execute-api.eu-central-1.amazonaws.com": lambda request: httpx.Response(
                200, json={"statusCode": 200, "body": json.dumps({"cv_text": "Jane Doe\nPython developer"})}
            ),
            "parse.execute-api.eu-central-1.amazonaws.com": lambda request: httpx.Response(
                200, json={"body": {"parsed_cv": {"Full Name": "Jane Doe", "Skills": "Python"}}}
            ),
            "score.execute-api.eu-central-1.amazonaws.com": lambda request: httpx.Response(
                200, json={"body": json.dumps({"jobs": [{"id": "4711", "score": {"score": 82, "reason": "Good fit"}}]})}
            ),
        }

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handlers[request.url.host](request)

    def requests_to(self, host_prefix: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.host.startswith(host_prefix)]


def build_test_services(upstream: Upstream, s3: FakeS3, app_id: str = "id", app_key: str = "key") -> Services:
    http = httpx.AsyncClient(transport=httpx.MockTransport(upstream))
    region = "eu-central-1"
    return Services(
        job_search=AdzunaClient(app_id, app_key, base_url=ADZUNA_URL, max_days_old=7, http=http),
        storage=ResumeStorage(bucket="resumes-bucket", region=region, client=s3),
        text_extractor=LambdaEndpoint("Text extraction", UPLOAD_URL, region, http, TEST_CREDENTIALS),
        cv_parser=LambdaEndpoint("CV parsing", PARSE_URL, region, http, TEST_CREDENTIALS),
        job_scorer=LambdaEndpoint("Job scoring", SCORE_URL, region, http, TEST_CREDENTIALS),
        http=http,
    )


@pytest.fixture
def upstream() -> Upstream:
    return Upstream()


@pytest.fixture
def s3() -> FakeS3:
    return FakeS3()


@pytest.fixture
def services(upstream, s3) -> Services:
    return build_test_services(upstream, s3)


@pytest.fixture
def client(services):
    limiter.enabled = False
    app.dependency_overrides[get_services] = lambda: services
    yield TestClient(app)
    app.dependency_overrides.clear()
    limiter.enabled = True
