import asyncio
import json

import httpx
import pytest

from conftest import make_job
from jobfinder.api.app import app
from jobfinder.api.deps import get_services
from jobfinder.api.limiter import limiter
from jobfinder.api.schemas import JobPosting
from jobfinder.client.api import ApiError, JobFinderClient
from jobfinder.client.cv_controller import CVController, UploadState
from jobfinder.client.search_controller import SearchController


@pytest.fixture
def proxied(services):
    """A JobFinderClient talking to the app in-process."""
    limiter.enabled = False
    app.dependency_overrides[get_services] = lambda: services
    http = httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://testserver")
    yield JobFinderClient(http=http)
    app.dependency_overrides.clear()
    limiter.enabled = True


def test_search_through_proxy(proxied, upstream):
    upstream.handlers["adzuna.test"] = lambda request: httpx.Response(
        200, json={"results": [make_job(str(i)) for i in range(15)], "count": 42}
    )

    async def scenario():
        controller = SearchController(proxied, page_size=15, max_buttons=5, country="GB")
        controller.query = "engineer"
        await controller.search(1)
        await controller.change_page(2)
        return controller

    controller = asyncio.run(scenario())

    assert controller.total_items == 42
    assert controller.current_page == 2
    assert controller.page_window().pages == (1, 2, 3)
    assert controller.results[0].company.display_name == "ACME GmbH"
    assert [r.url.path for r in upstream.requests] == ["/v1/api/jobs/gb/search/1", "/v1/api/jobs/gb/search/2"]


def test_search_failure_through_proxy(proxied, upstream):
    upstream.handlers["adzuna.test"] = lambda request: httpx.Response(503)

    async def scenario():
        controller = SearchController(proxied)
        controller.query = "engineer"
        await controller.search(1)
        return controller

    controller = asyncio.run(scenario())

    assert controller.error == "Failed to fetch jobs. Please try again."
    assert controller.searched is False


def test_upload_parse_and_score_through_proxy(proxied, upstream, s3):
    states = []

    async def scenario():
        controller = CVController(proxied, success_delay=0, on_state_change=states.append)
        assert await controller.upload("cv.pdf", b"%PDF-1.4") is True
        await controller.wait_for_reset()
        await controller.select_job(JobPosting.model_validate(make_job()))
        return controller

    controller = asyncio.run(scenario())

    assert states == [UploadState.UPLOADING, UploadState.PARSING, UploadState.SUCCESS, UploadState.IDLE]
    assert controller.parsed_cv == {"Full Name": "Jane Doe", "Skills": "Python"}
    assert controller.job_score.score == 82
    assert controller.job_score.reason == "Good fit"
    assert len(s3.calls) == 1

    [score_request] = upstream.requests_to("score")
    sent = json.loads(score_request.content)
    assert sent["cv"] == {"Full Name": "Jane Doe", "Skills": "Python"}
    assert sent["jobs"][0]["id"] == "4711"


def test_string_encoded_score_response():
    def handler(request):
        body = json.dumps({"message": "Job scored based on CV", "score": json.dumps({"score": 55, "reason": "ok"})})
        return httpx.Response(200, json=body)

    client = JobFinderClient(http=httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://api"))
    score = asyncio.run(client.score_job(JobPosting.model_validate(make_job()), {"Skills": "Python"}))

    assert score.score == 55
    assert score.reason == "ok"


def test_api_error_carries_status_and_detail():
    def handler(request):
        return httpx.Response(400, json={"detail": "cv_text is required"})

    client = JobFinderClient(http=httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://api"))
    with pytest.raises(ApiError) as exc_info:
        asyncio.run(client.parse_cv(""))

    assert exc_info.value.status_code == 400
    assert exc_info.value.detail == "cv_text is required"


def test_transport_error_becomes_api_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    client = JobFinderClient(http=httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://api"))
    with pytest.raises(ApiError):
        asyncio.run(client.search_jobs("engineer", "de"))
