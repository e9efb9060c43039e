"""API request/response schemas."""

import json
from datetime import datetime
from typing import Any, Literal

from pydantic import AliasChoices, BaseModel, Field, field_validator

SortMode = Literal["relevance", "date"]


def _decode_json_string(value: Any) -> Any:
    """Some upstream fields arrive JSON-encoded a second time."""
    return json.loads(value) if isinstance(value, str) else value


# Job posting schemas (Adzuna record shape)
class JobCompany(BaseModel):
    display_name: str = ""


class JobLocation(BaseModel):
    display_name: str = ""
    area: list[str] = Field(default_factory=list)


class JobCategory(BaseModel):
    label: str = ""
    tag: str | None = None


class JobPosting(BaseModel):
    id: str
    title: str = ""
    company: JobCompany = Field(default_factory=JobCompany)
    location: JobLocation = Field(default_factory=JobLocation)
    description: str = ""
    created: datetime | None = None
    salary_min: float | None = None
    salary_max: float | None = None
    salary_currency: str | None = None
    contract_time: str | None = None
    category: JobCategory | None = None
    redirect_url: str = ""

    class Config:
        extra = "allow"  # Pass through upstream fields we don't model
        frozen = True

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        return str(value) if isinstance(value, int) else value


# Search schemas
class AdzunaSearchPayload(BaseModel):
    """Upstream search response (only the fields we rely on)."""

    results: list[JobPosting] = Field(default_factory=list)
    count: int = 0


class SearchResultsResponse(BaseModel):
    results: list[JobPosting]
    count: int = Field(ge=0)
    current_page: int = Field(alias="currentPage", ge=1)
    total_pages: int = Field(alias="totalPages", ge=0)
    has_more: bool = Field(alias="hasMore")

    class Config:
        populate_by_name = True


class CountryResponse(BaseModel):
    code: str
    name: str
    flag: str


# CV schemas
class ResumeUploadResponse(BaseModel):
    message: str
    key: str
    bucket: str
    url: str
    cv_text: str


class ParseCVRequest(BaseModel):
    cv_text: str | None = None


class ParseCVResponse(BaseModel):
    message: str
    parsed_cv: dict[str, Any]


class ExtractedTextPayload(BaseModel):
    """Upstream text-extraction result."""

    cv_text: str


class ParsedCVPayload(BaseModel):
    """Upstream CV-structuring result."""

    parsed_cv: dict[str, Any]

    decode_parsed_cv = field_validator("parsed_cv", mode="before")(_decode_json_string)


# Scoring schemas
class JobScore(BaseModel):
    """Fit of one CV against one job posting."""

    score: float = Field(validation_alias=AliasChoices("score", "overall", "overall_score"))
    skills: float | None = Field(default=None, validation_alias=AliasChoices("skills", "skills_score"))
    experience: float | None = Field(
        default=None, validation_alias=AliasChoices("experience", "experience_score")
    )
    education: float | None = Field(
        default=None, validation_alias=AliasChoices("education", "education_score")
    )
    industry: float | None = Field(default=None, validation_alias=AliasChoices("industry", "industry_score"))
    satisfied: list[str] = Field(
        default_factory=list, validation_alias=AliasChoices("satisfied", "satisfied_reasons")
    )
    unsatisfied: list[str] = Field(
        default_factory=list, validation_alias=AliasChoices("unsatisfied", "unsatisfied_reasons")
    )
    reason: str = ""

    @property
    def breakdown(self) -> dict[str, float]:
        """Sub-scores that were reported, in display order."""
        scores = {
            "skills": self.skills,
            "experience": self.experience,
            "education": self.education,
            "industry": self.industry,
        }
        return {name: value for name, value in scores.items() if value is not None}


class ScoredJobPayload(BaseModel):
    score: JobScore

    decode_score = field_validator("score", mode="before")(_decode_json_string)


class ScorePayload(BaseModel):
    """Upstream scoring result."""

    jobs: list[ScoredJobPayload] = Field(min_length=1)


class ScoreJobRequest(BaseModel):
    cv: dict[str, Any] | None = None
    jobs: list[dict[str, Any]] = Field(default_factory=list)


class ScoreJobResponse(BaseModel):
    message: str
    score: JobScore

    decode_score = field_validator("score", mode="before")(_decode_json_string)
