"""Turn a selected pathway template into three personalized pathways."""

from __future__ import annotations

from vet_pathways.models.analysis import (
    AnalysisResult,
    CareerPathway,
    Credential,
    FamilyImpact,
    IncomeTrajectory,
)
from vet_pathways.models.profile import VeteranProfile
from vet_pathways.models.template import PathwayOption, PathwayTemplate

RELOCATION_BONUS = 15_000
EDUCATION_BONUS = 10_000
SENIOR_EXPERIENCE_YEARS = 8
SENIOR_EXPERIENCE_BONUS = 15_000
MID_EXPERIENCE_YEARS = 4
MID_EXPERIENCE_BONUS = 8_000

EDUCATION_KEYWORDS = ("bachelor", "master")

# (low, high) offsets from the base salary for year 1, 3 and 5.
FAST_INCOME_SPREADS = ((0, 10_000), (15_000, 25_000), (30_000, 45_000))
BALANCED_SPREADS = ((0, 12_000), (20_000, 35_000), (45_000, 65_000))
MAX_UPSIDE_SPREADS = ((0, 15_000), (35_000, 60_000), (70_000, 110_000))

ACCELERATED_DEGREE = Credential(
    name="Bachelor's Degree (optional accelerated program)",
    timeline="18-24 months",
    cost="$5,000 - $15,000 (post-GI Bill)",
)

FAST_INCOME_IMPACT = FamilyImpact(
    time_commitment="Low (40-45 hrs/week)",
    flexibility="High - stable schedule",
    stability="High - immediate employment",
    notes="Ideal for veterans needing quick income with family responsibilities.",
)

MAX_UPSIDE_IMPACT = FamilyImpact(
    time_commitment="High (50-60 hrs/week + education)",
    flexibility="Low initially - requires significant time investment",
    stability="Moderate initially, High long-term",
    notes=(
        "Requires upfront investment in education/training. "
        "Best for those with family support and financial runway."
    ),
)


def format_currency(amount: int) -> str:
    return f"${amount:,}"


def salary_range(low: int, high: int) -> str:
    return f"{format_currency(low)} - {format_currency(high)}"


def income_trajectory(base: int, spreads) -> IncomeTrajectory:
    year1, year3, year5 = (
        salary_range(base + low, base + high) for low, high in spreads
    )
    return IncomeTrajectory(year1=year1, year3=year3, year5=year5)


def relocation_bonus(willing_to_relocate: bool) -> int:
    return RELOCATION_BONUS if willing_to_relocate else 0


def has_degree_interest(education_interest: str) -> bool:
    """Loose substring match; "no bachelor plans" still counts."""
    text = education_interest.lower()
    return any(keyword in text for keyword in EDUCATION_KEYWORDS)


def education_bonus(education_interest: str) -> int:
    return EDUCATION_BONUS if has_degree_interest(education_interest) else 0


def experience_bonus(years_of_service: float) -> int:
    if years_of_service >= SENIOR_EXPERIENCE_YEARS:
        return SENIOR_EXPERIENCE_BONUS
    if years_of_service >= MID_EXPERIENCE_YEARS:
        return MID_EXPERIENCE_BONUS
    return 0


def format_years(years: float) -> str:
    if float(years).is_integer():
        return str(int(years))
    return str(years)


def build_summary(profile: VeteranProfile, template: PathwayTemplate) -> str:
    if profile.willing_to_relocate:
        location = "Your flexibility to relocate opens up opportunities in high-demand markets."
    else:
        location = f"Focusing on opportunities in {profile.current_location} and surrounding areas."
    return (
        f"Based on your {format_years(profile.years_of_service)} years of service as "
        f"{profile.rank} in the {profile.branch} (MOS: {profile.mos}), you have strong "
        f"{template.skill_area} skills that translate well to civilian careers. "
        f"Your {profile.leadership_experience.lower()} positions you well for roles "
        f"requiring {template.leadership_value}. {location}"
    )


def _pathway(
    pathway_type: str,
    option: PathwayOption,
    base: int,
    spreads,
    family_impact: FamilyImpact,
    extra_credentials: list[Credential] | None = None,
) -> CareerPathway:
    credentials = [c.model_copy(deep=True) for c in option.credentials]
    credentials.extend(c.model_copy(deep=True) for c in extra_credentials or [])
    return CareerPathway(
        type=pathway_type,
        title=option.title,
        description=option.description,
        income_trajectory=income_trajectory(base, spreads),
        roadmap=[phase.model_copy(deep=True) for phase in option.roadmap],
        required_credentials=credentials,
        family_impact=family_impact.model_copy(),
        why_this_path=option.why_this_path,
    )


def fast_income_pathway(profile: VeteranProfile, template: PathwayTemplate) -> CareerPathway:
    option = template.fast_income
    base = option.starting_salary + relocation_bonus(profile.willing_to_relocate)
    return _pathway("fast-income", option, base, FAST_INCOME_SPREADS, FAST_INCOME_IMPACT)


def balanced_pathway(profile: VeteranProfile, template: PathwayTemplate) -> CareerPathway:
    option = template.balanced
    wants_degree = has_degree_interest(profile.education_interest)
    base = option.starting_salary + education_bonus(profile.education_interest)
    impact = FamilyImpact(
        time_commitment="Moderate (45-50 hrs/week + some studying)",
        flexibility="Moderate - some evening/weekend flexibility",
        stability="Growing - increasing job security over time",
        notes=(
            "Combining work with part-time education requires time management."
            if wants_degree
            else "Balanced approach with steady progression."
        ),
    )
    extra = [ACCELERATED_DEGREE] if wants_degree else None
    return _pathway("balanced", option, base, BALANCED_SPREADS, impact, extra)


def max_upside_pathway(profile: VeteranProfile, template: PathwayTemplate) -> CareerPathway:
    option = template.max_upside
    base = option.starting_salary + experience_bonus(profile.years_of_service)
    return _pathway("max-upside", option, base, MAX_UPSIDE_SPREADS, MAX_UPSIDE_IMPACT)


def customize(profile: VeteranProfile, template: PathwayTemplate) -> AnalysisResult:
    """Build the summary and the three pathways, always in the fixed order."""
    return AnalysisResult(
        summary=build_summary(profile, template),
        pathways=[
            fast_income_pathway(profile, template),
            balanced_pathway(profile, template),
            max_upside_pathway(profile, template),
        ],
    )
