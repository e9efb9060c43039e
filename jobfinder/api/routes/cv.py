"""CV upload and parsing endpoints."""

import logging

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from fastapi.concurrency import run_in_threadpool

from jobfinder.api.deps import Services, get_services
from jobfinder.api.schemas import (
    ExtractedTextPayload,
    ParseCVRequest,
    ParseCVResponse,
    ParsedCVPayload,
    ResumeUploadResponse,
)
from jobfinder.utils.parser import validate_upstream

logger = logging.getLogger(__name__)

MAX_UPLOAD_SIZE = 5 * 1024 * 1024  # 5 MB

router = APIRouter()


@router.post("/upload-resume", response_model=ResumeUploadResponse)
async def upload_resume(
    file: UploadFile | None = File(None),
    services: Services = Depends(get_services),
):
    """Store an uploaded resume and extract its text."""
    if file is None or not file.filename:
        raise HTTPException(status_code=400, detail="No file uploaded")

    content = await file.read()
    if not content:
        raise HTTPException(status_code=400, detail="No file uploaded")
    if len(content) > MAX_UPLOAD_SIZE:
        raise HTTPException(status_code=413, detail="File too large (max 5 MB)")

    stored = await run_in_threadpool(services.storage.put_resume, content, file.filename)

    extractor = services.text_extractor
    body = await extractor.invoke({"bucket": stored.bucket, "key": stored.key})
    extracted = validate_upstream(ExtractedTextPayload, body, extractor.name)
    logger.info("Extracted %d chars from %s", len(extracted.cv_text), stored.key)

    return ResumeUploadResponse(
        message="Upload succeeded",
        key=stored.key,
        bucket=stored.bucket,
        url=stored.url,
        cv_text=extracted.cv_text,
    )


@router.post("/parse-cv", response_model=ParseCVResponse)
async def parse_cv(
    data: ParseCVRequest,
    services: Services = Depends(get_services),
):
    """Turn extracted resume text into a structured CV."""
    if not data.cv_text or not data.cv_text.strip():
        raise HTTPException(status_code=400, detail="cv_text is required")

    parser = services.cv_parser
    body = await parser.invoke({"cv_text": data.cv_text})
    parsed = validate_upstream(ParsedCVPayload, body, parser.name)

    return ParseCVResponse(message="Parsed CV data", parsed_cv=parsed.parsed_cv)
