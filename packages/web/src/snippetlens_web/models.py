"""Pydantic models for the web API."""

from typing import Optional

from pydantic import BaseModel, Field

from snippetlens_core.sections import SectionTitle


class CodeReviewRequest(BaseModel):
    """Request body for a snippet review.

    ``code`` is optional at the schema level so a missing field reaches the
    handler and gets the same 400 answer as a blank one.
    """

    code: Optional[str] = Field(default=None, description="The code snippet to review")


class CodeReviewResponse(BaseModel):
    review: str
    detectedLanguage: str


class ErrorResponse(BaseModel):
    error: str


class RenderRequest(BaseModel):
    """Request body for segmenting and formatting an existing review text."""

    review: str = Field(..., description="Raw review text returned by /api/code-review")
    collapsed: list[SectionTitle] = Field(default_factory=list, description="Titles to mark as collapsed")


class RenderResponse(BaseModel):
    sections: list[dict]


class HealthResponse(BaseModel):
    status: str = "ok"
    model: str
