"""Pydantic models for the pre-authored pathway catalogue."""

from __future__ import annotations

from pydantic import BaseModel

from vet_pathways.models.analysis import Credential, RoadmapPhase


class PathwayOption(BaseModel):
    title: str
    description: str
    starting_salary: int
    roadmap: list[RoadmapPhase]
    credentials: list[Credential]
    why_this_path: str

    model_config = {"frozen": True}


class PathwayTemplate(BaseModel):
    key: str
    name: str
    skill_area: str  # interpolated into the summary paragraph
    leadership_value: str
    fast_income: PathwayOption
    balanced: PathwayOption
    max_upside: PathwayOption

    model_config = {"frozen": True}
