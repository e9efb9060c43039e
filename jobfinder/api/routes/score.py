"""Job scoring endpoint."""

from fastapi import APIRouter, Depends, HTTPException

from jobfinder.api.deps import Services, get_services
from jobfinder.api.schemas import ScoreJobRequest, ScoreJobResponse, ScorePayload
from jobfinder.utils.parser import validate_upstream

router = APIRouter()


@router.post("/score-job", response_model=ScoreJobResponse)
async def score_job(
    data: ScoreJobRequest,
    services: Services = Depends(get_services),
):
    """Score a parsed CV against one job posting."""
    if not data.cv:
        raise HTTPException(status_code=400, detail="parsed cv is required")
    if not data.jobs:
        raise HTTPException(status_code=400, detail="jobs is required")

    scorer = services.job_scorer
    body = await scorer.invoke({"jobs": data.jobs[:1], "cv": data.cv})
    scored = validate_upstream(ScorePayload, body, scorer.name)

    return ScoreJobResponse(message="Job scored based on CV", score=scored.jobs[0].score)
