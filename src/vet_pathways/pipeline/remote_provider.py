"""Real Mode provider: delegate pathway generation to Claude."""

from __future__ import annotations

import logging

from vet_pathways.clients.llm_client import DEFAULT_MODEL, LLMClient
from vet_pathways.errors import RemoteAnalysisError, ValidationError
from vet_pathways.models.analysis import PATHWAY_TYPES, AnalysisResult
from vet_pathways.models.profile import VeteranProfile
from vet_pathways.pipeline.customizer import format_years
from vet_pathways.validation import validate_result

logger = logging.getLogger(__name__)

TOOL_NAME = "emit_analysis"

_ROADMAP_SCHEMA = {
    "type": "array",
    "description": "Step-by-step roadmap phases",
    "items": {
        "type": "object",
        "properties": {
            "phase": {"type": "string", "description": "Phase name"},
            "duration": {"type": "string", "description": "Duration of this phase"},
            "steps": {
                "type": "array",
                "items": {"type": "string"},
                "description": "Specific steps in this phase",
            },
        },
        "required": ["phase", "duration", "steps"],
    },
}

_CREDENTIALS_SCHEMA = {
    "type": "array",
    "description": "Required credentials for this pathway",
    "items": {
        "type": "object",
        "properties": {
            "name": {"type": "string", "description": "Credential name"},
            "timeline": {"type": "string", "description": "Time to obtain"},
            "cost": {"type": "string", "description": "Estimated cost"},
        },
        "required": ["name", "timeline", "cost"],
    },
}

ANALYSIS_TOOL = {
    "name": TOOL_NAME,
    "description": "Emit the complete career pathway analysis for the veteran",
    "input_schema": {
        "type": "object",
        "properties": {
            "summary": {
                "type": "string",
                "description": "A brief 2-3 sentence overview of this veteran's strengths and transition outlook",
            },
            "pathways": {
                "type": "array",
                "description": "Three distinct career pathways, one of each type",
                "minItems": 3,
                "maxItems": 3,
                "items": {
                    "type": "object",
                    "properties": {
                        "type": {
                            "type": "string",
                            "enum": list(PATHWAY_TYPES),
                            "description": "The type of pathway",
                        },
                        "title": {"type": "string", "description": "The career title for this pathway"},
                        "description": {
                            "type": "string",
                            "description": "2-3 sentence description of this pathway",
                        },
                        "incomeTrajectory": {
                            "type": "object",
                            "properties": {
                                "year1": {"type": "string", "description": "Expected income in year 1"},
                                "year3": {"type": "string", "description": "Expected income in year 3"},
                                "year5": {"type": "string", "description": "Expected income in year 5"},
                            },
                            "required": ["year1", "year3", "year5"],
                        },
                        "roadmap": _ROADMAP_SCHEMA,
                        "requiredCredentials": _CREDENTIALS_SCHEMA,
                        "familyImpact": {
                            "type": "object",
                            "properties": {
                                "timeCommitment": {"type": "string", "description": "Time commitment per week"},
                                "flexibility": {"type": "string", "description": "Schedule flexibility"},
                                "stability": {"type": "string", "description": "Job stability description"},
                                "notes": {"type": "string", "description": "Family considerations"},
                            },
                            "required": ["timeCommitment", "flexibility", "stability", "notes"],
                        },
                        "whyThisPath": {
                            "type": "string",
                            "description": "2-3 sentences on why this path fits this veteran",
                        },
                    },
                    "required": [
                        "type",
                        "title",
                        "description",
                        "incomeTrajectory",
                        "roadmap",
                        "requiredCredentials",
                        "familyImpact",
                        "whyThisPath",
                    ],
                },
            },
        },
        "required": ["summary", "pathways"],
    },
}


def build_prompt(profile: VeteranProfile) -> str:
    """Render every profile field into the advisor instruction."""
    preferred = ""
    if profile.willing_to_relocate:
        preferred = f"Preferred Locations: {', '.join(profile.preferred_locations)}"

    return f"""You are a career transition advisor for veterans. Analyze the following veteran profile and generate THREE distinct career pathways:

1. FAST-INCOME PATH: Quick entry to workforce with immediate income
2. BALANCED PATH: Mix of short-term income and long-term growth
3. MAX-UPSIDE PATH: Higher investment in education/training for maximum career potential

VETERAN PROFILE:
Branch: {profile.branch}
Years of Service: {format_years(profile.years_of_service)}
Rank: {profile.rank}
MOS/Job Code: {profile.mos}

Technical Skills: {', '.join(profile.technical_skills)}
Certifications: {', '.join(profile.certifications)}
Leadership Experience: {profile.leadership_experience}

Family Status: {profile.family_status}
Dependents: {profile.dependents}
Spouse Employment: {profile.spouse_employment}

Current Location: {profile.current_location}
Willing to Relocate: {'Yes' if profile.willing_to_relocate else 'No'}
{preferred}

Career Goals: {profile.career_goals}
Income Expectations: {profile.income_expectations}
Education Interest: {profile.education_interest}
Timeline: {profile.timeline}

Call the tool {TOOL_NAME} with the complete analysis payload. Do not output prose. Make each pathway specific, actionable, and realistic. Consider the veteran's military background, skills, family situation, and goals. Include real job titles, actual certifications, and market-based salary ranges."""


class RemoteProvider:
    """Generates pathways through one forced tool call. No retries here."""

    def __init__(self, llm: LLMClient, model: str = DEFAULT_MODEL, max_tokens: int = 16000):
        self.llm = llm
        self.model = model
        self.max_tokens = max_tokens

    async def produce(self, profile: VeteranProfile) -> AnalysisResult:
        logger.info("Requesting remote analysis (model=%s)", self.model)
        try:
            payload = await self.llm.generate_tool_input(
                prompt=build_prompt(profile),
                tool=ANALYSIS_TOOL,
                model=self.model,
                max_tokens=self.max_tokens,
            )
        except Exception as exc:
            raise RemoteAnalysisError(f"Remote analysis call failed: {exc}") from exc

        try:
            return validate_result(payload)
        except ValidationError as exc:
            raise RemoteAnalysisError(
                f"Remote analysis returned a non-conforming payload: {', '.join(exc.fields)}"
            ) from exc
