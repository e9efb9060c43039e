"""
Signed calls to the inference endpoints.

Each endpoint is an API Gateway stage in front of a Lambda function and
expects SigV4-signed JSON POSTs (service ``execute-api``).
"""

import json
import logging
from typing import Any

import boto3
import httpx
from botocore.auth import SigV4Auth
from botocore.awsrequest import AWSRequest
from botocore.credentials import Credentials

from jobfinder.errors import ConfigurationError, MalformedUpstreamResponse, UpstreamError
from jobfinder.utils.parser import decode_lambda_body

logger = logging.getLogger(__name__)

EXECUTE_API_SERVICE = "execute-api"


def sign_request(url: str, body: str, region: str, credentials: Credentials) -> dict[str, str]:
    """Return the headers of a SigV4-signed JSON POST to ``url``."""
    request = AWSRequest(
        method="POST",
        url=url,
        data=body.encode("utf-8"),
        headers={"Content-Type": "application/json"},
    )
    SigV4Auth(credentials, EXECUTE_API_SERVICE, region).add_auth(request)
    return dict(request.headers.items())


def resolve_credentials(region: str) -> Credentials:
    """Resolve AWS credentials from the default provider chain."""
    credentials = boto3.Session(region_name=region).get_credentials()
    if credentials is None:
        raise ConfigurationError("AWS credentials not found")
    return credentials.get_frozen_credentials()


class LambdaEndpoint:
    """One signed inference endpoint."""

    def __init__(
        self,
        name: str,
        url: str,
        region: str,
        http: httpx.AsyncClient,
        credentials: Credentials | None = None,
    ):
        self.name = name
        self.url = url
        self.region = region
        self._http = http
        self._credentials = credentials

    def _get_credentials(self) -> Credentials:
        if self._credentials is None:
            self._credentials = resolve_credentials(self.region)
        return self._credentials

    async def invoke(self, payload: dict[str, Any]) -> dict[str, Any]:
        """POST ``payload`` and return the decoded response body."""
        if not self.url:
            raise ConfigurationError(f"{self.name} endpoint URL not set")

        body = json.dumps(payload)
        headers = sign_request(self.url, body, self.region, self._get_credentials())

        try:
            response = await self._http.post(self.url, content=body.encode(), headers=headers)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error("%s endpoint returned %s", self.name, e.response.status_code)
            raise UpstreamError(self.name, f"HTTP {e.response.status_code}", e.response.status_code) from e
        except httpx.HTTPError as e:
            logger.error("%s endpoint call failed: %s", self.name, e)
            raise UpstreamError(self.name, str(e) or type(e).__name__) from e

        try:
            envelope = response.json()
        except ValueError as e:
            raise MalformedUpstreamResponse(self.name, "Response is not JSON") from e

        return decode_lambda_body(envelope, self.name)
