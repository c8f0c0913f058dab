"""Provider selection with fallback from Real Mode to Demo Mode."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Protocol

from vet_pathways.clients.llm_client import LLMClient
from vet_pathways.config import AppConfig
from vet_pathways.errors import RemoteAnalysisError
from vet_pathways.models.analysis import AnalysisResult
from vet_pathways.models.profile import VeteranProfile
from vet_pathways.pipeline.demo_provider import DemoProvider
from vet_pathways.pipeline.remote_provider import RemoteProvider
from vet_pathways.validation import validate_profile, validate_result

logger = logging.getLogger(__name__)


class Mode(str, Enum):
    DEMO = "demo"
    REAL = "real"


MODE_DESCRIPTIONS = {
    Mode.DEMO: "Running in Demo Mode - using deterministic templates (no API key required)",
    Mode.REAL: "Running in Real Mode - using Anthropic AI for personalized analysis",
}


class Provider(Protocol):
    async def produce(self, profile: VeteranProfile) -> AnalysisResult: ...


def current_mode(api_key: str | None) -> Mode:
    """Report which provider a credential would select. Never calls out."""
    return Mode.REAL if api_key else Mode.DEMO


def describe_failure(exc: BaseException) -> tuple[str, str]:
    """Return (message, type name) for the fallback warning.

    Looks through a RemoteAnalysisError to the failure that caused it.
    """
    if isinstance(exc, RemoteAnalysisError) and exc.__cause__ is not None:
        exc = exc.__cause__
    message = str(exc) or "Unknown error"
    if type(exc) is Exception and not exc.args:
        return message, "Unknown"
    return message, type(exc).__name__


class Analyzer:
    """Runs the remote provider when configured, else the demo provider.

    Remote failures of any kind are logged and absorbed; the caller always
    gets a schema-valid result or a profile ValidationError.
    """

    def __init__(self, demo: DemoProvider | None = None, remote: Provider | None = None):
        self.demo = demo or DemoProvider()
        self.remote = remote

    @classmethod
    def from_config(cls, config: AppConfig, api_key: str | None) -> Analyzer:
        remote = None
        if current_mode(api_key) is Mode.REAL:
            llm = LLMClient(
                api_key=api_key,
                timeout=config.llm.timeout,
                max_retries=config.llm.max_retries,
            )
            remote = RemoteProvider(llm, model=config.llm.model, max_tokens=config.llm.max_tokens)
        return cls(remote=remote)

    @property
    def mode(self) -> Mode:
        return Mode.REAL if self.remote is not None else Mode.DEMO

    async def analyze(self, profile: VeteranProfile | dict) -> AnalysisResult:
        profile = validate_profile(profile)

        if self.remote is None:
            logger.info("Analyzing profile", extra={"mode": Mode.DEMO.value})
            return validate_result(self.demo.generate(profile))

        logger.info("Analyzing profile", extra={"mode": Mode.REAL.value})
        try:
            result = await self.remote.produce(profile)
            return validate_result(result)
        except Exception as exc:
            message, error_type = describe_failure(exc)
            logger.warning(
                "Real mode failed, falling back to demo mode: %s (%s)",
                message,
                error_type,
                extra={"mode": Mode.DEMO.value, "error": message, "error_type": error_type},
            )

        return validate_result(self.demo.generate(profile))
