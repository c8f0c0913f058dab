"""Pydantic models for the analysis result contract."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator

PathwayType = Literal["fast-income", "balanced", "max-upside"]

PATHWAY_TYPES: tuple[str, ...] = ("fast-income", "balanced", "max-upside")


class RoadmapPhase(BaseModel):
    phase: str
    duration: str
    steps: list[str]


class Credential(BaseModel):
    name: str
    timeline: str
    cost: str


class IncomeTrajectory(BaseModel):
    year1: str
    year3: str
    year5: str


class FamilyImpact(BaseModel):
    time_commitment: str = Field(alias="timeCommitment")
    flexibility: str
    stability: str
    notes: str

    model_config = {"populate_by_name": True}


class CareerPathway(BaseModel):
    type: PathwayType
    title: str
    description: str
    income_trajectory: IncomeTrajectory = Field(alias="incomeTrajectory")
    roadmap: list[RoadmapPhase]
    required_credentials: list[Credential] = Field(alias="requiredCredentials")
    family_impact: FamilyImpact = Field(alias="familyImpact")
    why_this_path: str = Field(alias="whyThisPath")

    model_config = {"populate_by_name": True}


class AnalysisResult(BaseModel):
    summary: str
    pathways: list[CareerPathway] = Field(min_length=3, max_length=3)

    @field_validator("pathways")
    @classmethod
    def _one_pathway_per_type(cls, pathways: list[CareerPathway]) -> list[CareerPathway]:
        types = [p.type for p in pathways]
        if sorted(types) != sorted(PATHWAY_TYPES):
            raise ValueError(
                f"pathway types must be exactly {', '.join(PATHWAY_TYPES)} "
                f"(one each), got {', '.join(types)}"
            )
        return pathways

    def pathway(self, pathway_type: str) -> CareerPathway:
        """Return the pathway with the given type tag."""
        for p in self.pathways:
            if p.type == pathway_type:
                return p
        raise KeyError(pathway_type)

    def to_wire(self) -> dict:
        """Dump with the camelCase field names used on the wire."""
        return self.model_dump(by_alias=True, mode="json")
