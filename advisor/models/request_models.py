"""Request models for the recommendation and consultation endpoints.

Field names are snake_case in Python and camelCase on the wire, matching what
the marketing site posts.  Unknown fields are ignored everywhere.
"""

from __future__ import annotations

import logging
from typing import Any, Literal, Optional

from pydantic import (
    AnyUrl,
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    TypeAdapter,
    ValidationError,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

logger = logging.getLogger(__name__)

_URL_ADAPTER = TypeAdapter(AnyUrl)
_EMAIL_ADAPTER = TypeAdapter(EmailStr)


class CamelModel(BaseModel):
    """Base model accepting camelCase keys and ignoring unknown ones."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


# ── Recommendations ───────────────────────────────────────────────────────────


class BusinessProfile(CamelModel):
    """Structured intake form.  Every field is an advisory prompt hint.

    Hints are coerced rather than rejected: numbers become strings, ``null``
    becomes empty and a lone string in a list field becomes a one-item list.
    """

    model_config = ConfigDict(coerce_numbers_to_str=True)

    business_name: str = ""
    business_type: str = ""
    business_description: str = ""
    company_size: str = ""
    monthly_revenue: str = ""
    years_in_business: str = ""
    primary_goals: list[str] = Field(default_factory=list)
    current_challenges: list[str] = Field(default_factory=list)
    tech_comfort: str = ""
    budget: str = ""
    timeline: str = ""
    focus_areas: list[str] = Field(default_factory=list)
    additional_info: Optional[str] = None

    @field_validator(
        "business_name", "business_type", "business_description", "company_size",
        "monthly_revenue", "years_in_business", "tech_comfort", "budget", "timeline",
        mode="before",
    )
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("primary_goals", "current_challenges", "focus_areas", mode="before")
    @classmethod
    def _as_list(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, (str, int, float)):
            return [str(value)]
        return value


class RecommendationRequest(CamelModel):
    """Body of POST /api/recommendations."""

    business_description: str = Field(
        ...,
        description="Free-text description of the visitor's business",
        examples=["I run a small bakery in downtown Portland"],
    )
    structured: bool = False
    form_data: Optional[BusinessProfile] = None

    @model_validator(mode="before")
    @classmethod
    def _usable_form_data(cls, data: Any) -> Any:
        # formData is only read in structured mode; an unusable profile means basic mode
        if not isinstance(data, dict):
            return data
        key = "formData" if "formData" in data else "form_data"
        if key not in data:
            return data
        data = dict(data)
        form_data = data.pop(key)
        if not data.get("structured") or not form_data:
            return data
        try:
            data[key] = BusinessProfile.model_validate(form_data)
        except ValidationError as exc:
            logger.info("Ignoring unusable formData (%d errors)", exc.error_count())
        return data

    @field_validator("business_description", mode="before")
    @classmethod
    def _strip_description(cls, value: Any) -> Any:
        if value is None:
            return ""
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("business_description")
    @classmethod
    def _description_not_blank(cls, value: str) -> str:
        if not value:
            raise PydanticCustomError("string_too_short", "Business description is required")
        return value

    @property
    def mode(self) -> Literal["basic", "advanced"]:
        """``advanced`` only when structured mode comes with a profile."""
        if self.structured and self.form_data is not None:
            return "advanced"
        return "basic"


# ── Consultation ──────────────────────────────────────────────────────────────


class ContactInfo(CamelModel):
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    email: str
    phone: Optional[str] = None
    preferred_contact_method: Literal["email", "phone"]

    @field_validator("email")
    @classmethod
    def _email_is_valid(cls, value: str) -> str:
        # Checked as an address but relayed exactly as typed, not normalised.
        try:
            _EMAIL_ADAPTER.validate_python(value)
        except ValidationError as exc:
            raise PydanticCustomError("value_error", "value is not a valid email address") from exc
        return value


class BusinessInfo(CamelModel):
    business_name: Optional[str] = None
    website: Optional[str] = None
    business_description: str = Field(..., min_length=1)
    company_size: Optional[str] = None
    industry: Optional[str] = None

    @field_validator("website")
    @classmethod
    def _website_is_url(cls, value: Optional[str]) -> Optional[str]:
        # Empty string is allowed; the original text is kept, not the parsed URL.
        if value:
            try:
                _URL_ADAPTER.validate_python(value)
            except ValidationError as exc:
                raise PydanticCustomError("url_parsing", "invalid URL") from exc
        return value


class ProjectDetails(CamelModel):
    selected_recommendations: list[str] = Field(..., min_length=1)
    timeline: Optional[str] = None
    budget: Optional[str] = None
    biggest_challenge: Optional[str] = None


class SubmissionMetadata(CamelModel):
    source: str
    timestamp: str
    session_id: str
    original_recommendations: list[Any]


class ConsultationRequest(CamelModel):
    """Body of POST /api/consultation-request."""

    contact_info: ContactInfo
    business_info: BusinessInfo
    project_details: ProjectDetails
    metadata: SubmissionMetadata

    def to_webhook_payload(self) -> dict[str, Any]:
        """Validated payload in wire form; absent optional fields stay absent."""
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)
