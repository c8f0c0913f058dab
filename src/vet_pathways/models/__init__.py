"""Data models for the pathway analyzer."""

from vet_pathways.models.analysis import (
    PATHWAY_TYPES,
    AnalysisResult,
    CareerPathway,
    Credential,
    FamilyImpact,
    IncomeTrajectory,
    RoadmapPhase,
)
from vet_pathways.models.profile import VeteranProfile
from vet_pathways.models.template import PathwayOption, PathwayTemplate

__all__ = [
    "PATHWAY_TYPES",
    "AnalysisResult",
    "CareerPathway",
    "Credential",
    "FamilyImpact",
    "IncomeTrajectory",
    "PathwayOption",
    "PathwayTemplate",
    "RoadmapPhase",
    "VeteranProfile",
]
