"""Report export for analysis results."""
from vet_pathways.export.report import (
    PATHWAY_LABELS,
    render_html,
    render_markdown,
    save_report,
)

__all__ = ["render_markdown", "render_html", "save_report", "PATHWAY_LABELS"]
