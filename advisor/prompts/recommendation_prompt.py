"""Prompt templates and builder for business recommendations.

Each template variant is plain data: how many recommendations to ask for,
how many to keep, which category taxonomy to embed, which fields the output
objects must carry and the completion token ceiling.  ``build_prompt`` picks a
variant for the request mode and renders the system and user instructions.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

from advisor.models.request_models import BusinessProfile
from advisor.tools.phone_business_tool import is_phone_business

Mode = Literal["basic", "advanced"]

CATEGORIES: tuple[str, ...] = (
    "Customer Service",
    "Marketing",
    "Operations",
    "Analytics",
    "Automation",
    "Content Creation",
    "Sales",
    "Finance",
    "HR & Hiring",
    "Legal & Compliance",
    "Productivity",
    "E-commerce",
    "Customer Insights",
    "IT & Security",
)

# Taxonomy used by the earlier, tool-suggesting prompt variant
CORE_CATEGORIES: tuple[str, ...] = CATEGORIES[:6]

DIFFICULTIES: tuple[str, ...] = ("Easy", "Medium", "Advanced")

BASE_FIELDS: tuple[str, ...] = (
    "title",
    "description",
    "category",
    "difficulty",
    "estimatedCost",
    "timeToImplement",
)


@dataclass(frozen=True)
class PromptTemplate:
    """Per-variant parameters shared by the prompt and the output validator."""

    name: str
    min_count: int
    max_count: int
    categories: tuple[str, ...]
    required_fields: tuple[str, ...]
    max_tokens: int

    @property
    def count_phrase(self) -> str:
        return f"{self.min_count}-{self.max_count}"


TEMPLATES: dict[str, PromptTemplate] = {
    "basic": PromptTemplate(
        name="basic",
        min_count=3,
        max_count=4,
        categories=CATEGORIES,
        required_fields=BASE_FIELDS,
        max_tokens=1500,
    ),
    "basic_tools": PromptTemplate(
        name="basic_tools",
        min_count=3,
        max_count=5,
        categories=CORE_CATEGORIES,
        required_fields=BASE_FIELDS + ("suggestedTools",),
        max_tokens=1500,
    ),
    "advanced": PromptTemplate(
        name="advanced",
        min_count=4,
        max_count=5,
        categories=CATEGORIES,
        required_fields=BASE_FIELDS,
        max_tokens=2000,
    ),
}


@dataclass(frozen=True)
class PromptText:
    system: str
    user: str
    template: PromptTemplate
    phone_business: bool = False


# ── Shared instruction blocks ─────────────────────────────────────────────────

SYSTEM_PROMPT = (
    "You are a helpful AI business consultant focused on practical, implementable AI "
    "solutions and automation ideas for small businesses. For phone-based businesses, "
    "always prioritize chatbot and voice agent recommendations. Always respond with "
    "valid JSON only."
)

USE_CASE_DEFINITION = (
    "AI use cases are specific AI implementations that would benefit the business, "
    "while AI automation ideas are ideas for automating business processes."
)

PHONE_RULE = (
    "IMPORTANT: If the business takes phone calls, customer service calls, appointments, "
    "or handles phone-based interactions, ALWAYS prioritize recommending both: "
    "(1) A chatbot for website/messaging support, and (2) A voice agent/AI phone system "
    "that can handle calls 24/7 outside business hours"
)

PHONE_RULE_EXPLICIT = (
    "This business handles phone calls or appointments. Your recommendations MUST include "
    "both a chatbot for website/messaging support AND a voice agent/AI phone system."
)


def get_template(name: str) -> PromptTemplate:
    """Look up a template variant by name."""
    try:
        return TEMPLATES[name]
    except KeyError:
        raise ValueError(
            f"Unknown prompt template '{name}'. Available: {sorted(TEMPLATES)}"
        ) from None


def build_prompt(
    mode: Mode,
    description: str,
    profile: Optional[BusinessProfile] = None,
    basic_template: str = "basic",
) -> PromptText:
    """Render system and user instructions for a recommendation request.

    ``advanced`` mode requires a profile; callers fall back to ``basic`` when
    none was supplied.
    """
    if mode == "advanced":
        if profile is None:
            raise ValueError("advanced mode requires a BusinessProfile")
        template = TEMPLATES["advanced"]
        phone = is_phone_business(_profile_text(description, profile))
        user = _render_advanced(template, description, profile, phone)
        system = f"{SYSTEM_PROMPT}  {USE_CASE_DEFINITION}"
    else:
        template = get_template(basic_template)
        phone = is_phone_business(description)
        user = _render_basic(template, description, phone)
        system = SYSTEM_PROMPT

    return PromptText(system=system, user=user, template=template, phone_business=phone)


# ── Renderers ─────────────────────────────────────────────────────────────────


def _render_basic(template: PromptTemplate, description: str, phone: bool) -> str:
    focus = [
        "Solutions that are actually implementable with current technology and are not "
        "too complex for small businesses to implement.",
        "Clear, measurable business value for THIS specific business type.",
        "Appropriate for small business budgets ($20-500/month range)",
        "Industry-specific recommendations, not generic suggestions.",
        "Prioritize Easy and Medium difficulty solutions",
        PHONE_RULE,
    ]
    if phone:
        focus.append(PHONE_RULE_EXPLICIT)

    return f"""You are an AI business consultant specializing in practical AI implementations for small businesses like data entry, lead generation, marketing, social media, customer service, etc.

Business Description: "{description}"

Based on this business description, provide exactly {template.count_phrase} specific, actionable AI use case or AI automation ideas that would genuinely benefit this particular business.  {USE_CASE_DEFINITION}

For each recommendation, provide:
{_field_instructions(template)}

Focus on:
{_bullets(focus)}

{_output_instruction(template)}"""


def _render_advanced(
    template: PromptTemplate,
    description: str,
    profile: BusinessProfile,
    phone: bool,
) -> str:
    goals = ", ".join(profile.primary_goals)
    challenges = ", ".join(profile.current_challenges)
    focus_areas = ", ".join(profile.focus_areas)

    info = [
        f"Business Name: {profile.business_name}",
        f"Type: {profile.business_type}",
        f"Description: {profile.business_description or description}",
        f"Company Size: {profile.company_size} employees",
        f"Monthly Revenue: {profile.monthly_revenue}",
        f"Years in Business: {profile.years_in_business}",
        f"Primary Goals: {goals}",
        f"Current Challenges: {challenges}",
        f"Technical Comfort Level: {profile.tech_comfort}",
        f"Budget: {profile.budget}/month for AI tools",
        f"Implementation Timeline: {profile.timeline}",
        f"Focus Areas: {focus_areas}",
    ]
    if profile.additional_info:
        info.append(f"Additional Info: {profile.additional_info}")

    focus = [
        "Solutions that directly address their stated goals and challenges.",
        f"Match their technical comfort level ({profile.tech_comfort})",
        f"Stay within their budget range ({profile.budget}/month)",
        f"Align with their timeline ({profile.timeline})",
        f"Prioritize their selected focus areas: {focus_areas}",
        f"Consider their business type ({profile.business_type}) and size ({profile.company_size})",
        PHONE_RULE,
    ]
    if phone:
        focus.append(PHONE_RULE_EXPLICIT)

    return f"""You are an AI business consultant specializing in practical AI implementations for small businesses.

Business Information:
{_bullets(info)}

Based on this detailed business profile, provide exactly {template.count_phrase} highly specific, actionable AI use case recommendations or automation ideas that would genuinely benefit this particular business.  {USE_CASE_DEFINITION}

Focus on:
{_bullets(focus)}

For each recommendation, provide:
{_field_instructions(template, profile)}

{_output_instruction(template)}"""


def _field_instructions(template: PromptTemplate, profile: Optional[BusinessProfile] = None) -> str:
    categories = ", ".join(template.categories[:-1]) + f", or {template.categories[-1]}"
    difficulties = ", ".join(DIFFICULTIES[:-1]) + f", or {DIFFICULTIES[-1]}"

    difficulty = f"Difficulty level: {difficulties}"
    cost = 'Monthly cost estimate in format "$X-Y/month"'
    time = 'Time to implement in format "X-Y weeks"'
    if profile is not None:
        difficulty += f" (match their tech comfort: {profile.tech_comfort})"
        cost += f" (stay within their budget: {profile.budget})"
        time += f" (align with their timeline: {profile.timeline})"
    else:
        cost += " (be realistic for small businesses)"

    lines = [
        "A clear, descriptive title (max 6 words)",
        "A practical description of how it works and benefits THIS specific business (2-3 sentences)",
        f"A category from: {categories}.  AI automation ideas are in the category of Automation.",
        difficulty,
        cost,
        time,
    ]
    if "suggestedTools" in template.required_fields:
        lines.append("2-4 suggested tools or platforms that could implement it")

    return "\n".join(f"{i}. {line}" for i, line in enumerate(lines, start=1))


def _output_instruction(template: PromptTemplate) -> str:
    fields = ", ".join(template.required_fields)
    return (
        "Return ONLY a valid JSON array with no additional text or formatting. "
        f"Each object should have exactly these fields: {fields}."
    )


def _bullets(items: list[str]) -> str:
    return "\n".join(f"- {item}" for item in items)


def _profile_text(description: str, profile: BusinessProfile) -> str:
    parts = [
        description,
        profile.business_type,
        profile.business_description,
        " ".join(profile.primary_goals),
        " ".join(profile.current_challenges),
        " ".join(profile.focus_areas),
        profile.additional_info or "",
    ]
    return " ".join(p for p in parts if p)
