from __future__ import annotations

from pathlib import Path

import markdown
from jinja2 import Environment, FileSystemLoader
from markupsafe import Markup, escape

from vet_pathways.models.analysis import AnalysisResult

TEMPLATE_DIR = Path(__file__).parent

PATHWAY_LABELS = {
    "fast-income": "Fast Income",
    "balanced": "Balanced",
    "max-upside": "Max Upside",
}


def _environment(escape_html: bool) -> Environment:
    kwargs = {}
    if escape_html:
        # Free text from the profile or the model must not become live HTML
        kwargs["finalize"] = lambda value: escape(value) if isinstance(value, str) else value
    return Environment(
        loader=FileSystemLoader(str(TEMPLATE_DIR)),
        keep_trailing_newline=True,
        **kwargs,
    )


def render_markdown(
    result: AnalysisResult,
    title: str = "Career Pathway Analysis",
    *,
    escape_html: bool = False,
) -> str:
    """Render an analysis result as a Markdown report."""
    template = _environment(escape_html).get_template("report.md.j2")
    return template.render(result=result, title=title, labels=PATHWAY_LABELS)


def render_html(result: AnalysisResult, title: str = "Career Pathway Analysis") -> str:
    """Render an analysis result as a standalone HTML page."""
    md_text = render_markdown(result, title, escape_html=True)
    html_body = markdown.markdown(md_text, extensions=["tables"])
    env = Environment(loader=FileSystemLoader(str(TEMPLATE_DIR)), autoescape=True)
    return env.get_template("base.html").render(title=title, body=Markup(html_body))


def save_report(content: str, output_path: str | Path) -> Path:
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path
