"""Demo Mode provider: deterministic pathways, no external service."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from vet_pathways.catalog import load_templates
from vet_pathways.models.analysis import AnalysisResult
from vet_pathways.models.profile import VeteranProfile
from vet_pathways.models.template import PathwayTemplate
from vet_pathways.pipeline.customizer import customize
from vet_pathways.pipeline.template_selector import select_template

logger = logging.getLogger(__name__)


class DemoProvider:
    def __init__(self, templates: Sequence[PathwayTemplate] | None = None):
        self.templates = tuple(templates) if templates is not None else load_templates()

    def generate(self, profile: VeteranProfile) -> AnalysisResult:
        template = select_template(profile, self.templates)
        logger.debug("Demo mode selected template %s", template.key, extra={"template": template.key})
        return customize(profile, template)

    async def produce(self, profile: VeteranProfile) -> AnalysisResult:
        return self.generate(profile)
