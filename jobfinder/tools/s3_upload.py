"""Resume storage in S3."""

import logging
import mimetypes
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from jobfinder.errors import ConfigurationError, UpstreamError

logger = logging.getLogger(__name__)

RESUME_PREFIX = "resumes"


@dataclass(frozen=True)
class StoredObject:
    bucket: str
    key: str
    url: str


class ResumeStorage:
    """Puts uploaded resumes into a bucket under ``resumes/<uuid><ext>``."""

    def __init__(self, bucket: str, region: str, client: Any = None):
        self.bucket = bucket
        self.region = region
        self._client = client

    @property
    def client(self):
        if self._client is None:
            self._client = boto3.client("s3", region_name=self.region)
        return self._client

    def object_url(self, key: str) -> str:
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{key}"

    def put_resume(self, content: bytes, original_name: str) -> StoredObject:
        """Store ``content`` and return where it landed."""
        if not self.bucket:
            raise ConfigurationError("AWS_S3_BUCKET_NAME not set")

        extension = Path(original_name).suffix.lower() or ".pdf"
        key = f"{RESUME_PREFIX}/{uuid.uuid4()}{extension}"
        content_type = mimetypes.guess_type(f"resume{extension}")[0] or "application/pdf"

        try:
            self.client.put_object(Bucket=self.bucket, Key=key, Body=content, ContentType=content_type)
        except (BotoCoreError, ClientError) as e:
            logger.error("S3 upload of %s failed: %s", key, e)
            raise UpstreamError("S3", str(e)) from e

        logger.info("Stored resume %s (%d bytes) in %s", key, len(content), self.bucket)
        return StoredObject(bucket=self.bucket, key=key, url=self.object_url(key))
