"""Schema validation for inbound profiles and outbound analysis results."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from vet_pathways.errors import FieldIssue, ValidationError
from vet_pathways.models.analysis import AnalysisResult
from vet_pathways.models.profile import VeteranProfile


def validate_profile(raw: Any) -> VeteranProfile:
    """Validate a raw submitted profile, reporting every offending field."""
    if isinstance(raw, VeteranProfile):
        return raw
    return _validate(VeteranProfile, raw, subject="profile")


def validate_result(raw: Any) -> AnalysisResult:
    """Validate provider output against the AnalysisResult contract.

    An AnalysisResult instance is re-validated from its dump so that
    objects assembled with ``model_construct`` cannot slip through.
    """
    if isinstance(raw, AnalysisResult):
        raw = raw.model_dump(by_alias=True)
    return _validate(AnalysisResult, raw, subject="analysis result")


def _validate(model: type[BaseModel], raw: Any, *, subject: str):
    if not isinstance(raw, Mapping):
        raise ValidationError(
            [FieldIssue("__root__", f"Expected an object, got {type(raw).__name__}")],
            subject=subject,
        )
    try:
        return model.model_validate(dict(raw))
    except PydanticValidationError as exc:
        raise ValidationError(_issues_from(exc), subject=subject) from exc


def _issues_from(exc: PydanticValidationError) -> list[FieldIssue]:
    issues = []
    for err in exc.errors():
        field = ".".join(str(part) for part in err["loc"]) or "__root__"
        issues.append(FieldIssue(field, err["msg"]))
    return issues
