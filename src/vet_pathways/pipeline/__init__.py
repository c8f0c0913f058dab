"""Recommendation pipeline: template selection, customization and provider fallback."""

from vet_pathways.pipeline.analyzer import Analyzer, Mode, current_mode
from vet_pathways.pipeline.demo_provider import DemoProvider
from vet_pathways.pipeline.remote_provider import RemoteProvider

__all__ = ["Analyzer", "DemoProvider", "Mode", "RemoteProvider", "current_mode"]
