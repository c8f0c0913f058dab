"""Exception types shared across the analyzer."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FieldIssue:
    """One offending field: dotted wire path plus a human-readable message."""

    field: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"field": self.field, "message": self.message}


class ValidationError(ValueError):
    """Profile or analysis result failed schema validation.

    Carries every offending field, not just the first one.
    """

    def __init__(self, issues: list[FieldIssue], subject: str = "profile"):
        self.issues = list(issues)
        self.subject = subject
        fields = ", ".join(issue.field for issue in self.issues) or "<none>"
        super().__init__(f"Invalid {subject}: {len(self.issues)} issue(s) in {fields}")

    @property
    def fields(self) -> list[str]:
        return [issue.field for issue in self.issues]


class RemoteAnalysisError(RuntimeError):
    """The remote analysis service failed or returned a non-conforming payload."""
