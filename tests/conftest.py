"""Shared test fixtures."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from vet_pathways.catalog import load_template
from vet_pathways.clients.llm_client import LLMClient
from vet_pathways.models.profile import VeteranProfile
from vet_pathways.models.template import PathwayTemplate
from vet_pathways.pipeline.customizer import customize


@pytest.fixture
def sample_profile_data() -> dict:
    return {
        "branch": "Army",
        "yearsOfService": 8,
        "rank": "Staff Sergeant (E-6)",
        "mos": "25B",
        "technicalSkills": ["Network administration", "Active Directory", "Cisco routing"],
        "certifications": ["Security+", "CCNA"],
        "leadershipExperience": "Led a team of 12 soldiers",
        "familyStatus": "Married",
        "dependents": 2,
        "spouseEmployment": "Part-time teacher",
        "currentLocation": "Fort Liberty, NC",
        "willingToRelocate": True,
        "preferredLocations": ["Raleigh, NC", "Austin, TX"],
        "careerGoals": "Move into cybersecurity engineering",
        "incomeExpectations": "$70,000+",
        "educationInterest": "Interested in a bachelor's degree in cybersecurity",
        "timeline": "6 months",
    }


@pytest.fixture
def sample_profile(sample_profile_data) -> VeteranProfile:
    return VeteranProfile.model_validate(sample_profile_data)


@pytest.fixture
def homebound_profile(sample_profile_data) -> VeteranProfile:
    """Junior veteran staying put with no degree plans."""
    data = {
        **sample_profile_data,
        "yearsOfService": 3,
        "willingToRelocate": False,
        "preferredLocations": [],
        "educationInterest": "Certifications only",
    }
    return VeteranProfile.model_validate(data)


@pytest.fixture
def technical_template() -> PathwayTemplate:
    return load_template("technical_it")


@pytest.fixture
def valid_result_data(sample_profile, technical_template) -> dict:
    return customize(sample_profile, technical_template).to_wire()


@pytest.fixture
def mock_llm(valid_result_data) -> MagicMock:
    llm = MagicMock(spec=LLMClient)
    llm.generate_tool_input = AsyncMock(return_value=valid_result_data)
    return llm
