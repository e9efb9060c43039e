"""Error types shared by the proxy service and the client library."""


class JobFinderError(Exception):
    """Base class for Job Finder errors."""


class ConfigurationError(JobFinderError):
    """Required credentials or endpoints are not configured."""


class UpstreamError(JobFinderError):
    """An external service failed or returned a non-2xx status."""

    def __init__(self, service: str, message: str, status_code: int | None = None):
        super().__init__(f"{service}: {message}")
        self.service = service
        self.message = message
        self.status_code = status_code


class MalformedUpstreamResponse(UpstreamError):
    """An external service answered, but not with the expected shape."""
