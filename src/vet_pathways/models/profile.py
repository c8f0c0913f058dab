"""Pydantic model for the veteran intake profile."""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, Field, StrictStr


class VeteranProfile(BaseModel):
    # Service background
    branch: str = Field(min_length=1, strict=True)
    years_of_service: float = Field(alias="yearsOfService", ge=0, strict=True, allow_inf_nan=False)
    rank: str = Field(min_length=1, strict=True)
    mos: str = Field(
        min_length=1,
        strict=True,
        validation_alias=AliasChoices("mos", "militaryOccupationCode"),
        serialization_alias="mos",
    )

    # Skills
    technical_skills: tuple[StrictStr, ...] = Field(default=(), alias="technicalSkills")
    certifications: tuple[StrictStr, ...] = ()
    leadership_experience: str = Field(alias="leadershipExperience", strict=True)

    # Family
    family_status: str = Field(alias="familyStatus", min_length=1, strict=True)
    dependents: int = Field(ge=0, strict=True)
    spouse_employment: str = Field(alias="spouseEmployment", strict=True)

    # Location
    current_location: str = Field(alias="currentLocation", min_length=1, strict=True)
    willing_to_relocate: bool = Field(alias="willingToRelocate", strict=True)
    preferred_locations: tuple[StrictStr, ...] = Field(default=(), alias="preferredLocations")

    # Goals
    career_goals: str = Field(alias="careerGoals", min_length=1, strict=True)
    income_expectations: str = Field(alias="incomeExpectations", min_length=1, strict=True)
    education_interest: str = Field(alias="educationInterest", min_length=1, strict=True)
    timeline: str = Field(min_length=1, strict=True)

    model_config = {"populate_by_name": True, "frozen": True}

    def to_wire(self) -> dict:
        """Dump with the camelCase field names used on the wire."""
        return self.model_dump(by_alias=True, mode="json")
