"""
Tools for Job Finder.

- adzuna_search: Job search via the Adzuna API
- aws_lambda: SigV4-signed calls to the inference endpoints
- s3_upload: Resume storage in S3
"""

from jobfinder.tools.adzuna_search import SUPPORTED_COUNTRIES, AdzunaClient
from jobfinder.tools.aws_lambda import LambdaEndpoint, sign_request
from jobfinder.tools.s3_upload import ResumeStorage, StoredObject

__all__ = [
    "AdzunaClient",
    "SUPPORTED_COUNTRIES",
    "LambdaEndpoint",
    "sign_request",
    "ResumeStorage",
    "StoredObject",
]
