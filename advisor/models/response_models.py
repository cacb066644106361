"""Response models for the recommendation and consultation API."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Recommendation(BaseModel):
    """A single AI use-case / automation suggestion returned to the visitor."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int = Field(..., ge=1, description="1-based position after filtering")
    title: str
    description: str
    category: str = Field(..., examples=["Customer Service", "Marketing", "Automation"])
    difficulty: str = Field(..., examples=["Easy", "Medium", "Advanced"])
    estimated_cost: str = Field(..., examples=["$50-150/month"])
    time_to_implement: str = Field(..., examples=["2-4 weeks"])
    suggested_tools: Optional[list[str]] = None


class RecommendationsResponse(BaseModel):
    """Standard response returned by POST /api/recommendations."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    recommendations: list[Recommendation]
    business_description: str


class FieldError(BaseModel):
    """One violated rule on one field of an inbound payload."""

    field: str = Field(..., examples=["contactInfo.email"])
    message: str = Field(..., examples=["invalid format"])
    type: str = ""


class ErrorResponse(BaseModel):
    """Error body shared by every endpoint."""

    error: str
    message: Optional[str] = None
    details: Optional[list[FieldError]] = None


class ConsultationAck(BaseModel):
    """Acknowledgement built from the submitted consultation payload."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    submission_id: str
    timestamp: str
    email: str
    selected_recommendations: list[str]


class ConsultationResponse(BaseModel):
    """Standard response returned by POST /api/consultation-request."""

    success: bool = True
    message: str = "Consultation request submitted successfully"
    data: ConsultationAck


class HealthResponse(BaseModel):
    """Health-check response."""

    status: str = "ok"
    version: str = "1.0.0"
