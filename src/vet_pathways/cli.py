"""CLI interface using typer + rich."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

import typer
import yaml
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from vet_pathways.catalog import load_templates
from vet_pathways.config import load_config, resolve_api_key
from vet_pathways.errors import ValidationError
from vet_pathways.export import PATHWAY_LABELS, render_html, render_markdown, save_report
from vet_pathways.logging import setup_logging
from vet_pathways.pipeline.analyzer import MODE_DESCRIPTIONS, Analyzer, Mode, current_mode
from vet_pathways.validation import validate_profile

app = typer.Typer(
    name="vet-pathways",
    help="Career pathway recommendations for transitioning veterans",
    no_args_is_help=True,
)
console = Console()


def _read_profile(path: Path) -> dict:
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() in (".yaml", ".yml"):
        return yaml.safe_load(text) or {}
    return json.loads(text)


@app.command()
def analyze(
    profile_file: Path = typer.Argument(help="Profile file (JSON or YAML)"),
    json_out: Path = typer.Option(None, "--json", help="Write the result as JSON"),
    report: Path = typer.Option(None, "--report", help="Write a Markdown report"),
    html: Path = typer.Option(None, "--html", help="Write an HTML report"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
) -> None:
    """Analyze a veteran profile and print three career pathways."""
    if not profile_file.exists():
        console.print(f"[red]Profile file not found: {profile_file}[/red]")
        raise typer.Exit(1)

    config = load_config()
    setup_logging(config.logging)

    try:
        raw = _read_profile(profile_file)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        console.print(f"[red]Could not parse {profile_file}: {exc}[/red]")
        raise typer.Exit(1)

    try:
        profile = validate_profile(raw)
    except ValidationError as exc:
        console.print("[red]Invalid profile:[/red]")
        for issue in exc.issues:
            console.print(f"  - [bold]{issue.field}[/bold]: {issue.message}")
        raise typer.Exit(1)

    analyzer = Analyzer.from_config(config, resolve_api_key())
    if verbose:
        console.print(f"[dim]{MODE_DESCRIPTIONS[analyzer.mode]}[/dim]")

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
    ) as progress:
        progress.add_task("Analyzing profile...", total=None)
        result = asyncio.run(analyzer.analyze(profile))

    console.print(Panel(result.summary, title="Summary"))
    for pathway in result.pathways:
        trajectory = pathway.income_trajectory
        console.print(
            Panel(
                f"{pathway.description}\n\n"
                f"Year 1: {trajectory.year1} | Year 3: {trajectory.year3} | Year 5: {trajectory.year5}\n"
                f"Credentials: {', '.join(c.name for c in pathway.required_credentials)}\n\n"
                f"[dim]{pathway.why_this_path}[/dim]",
                title=f"{PATHWAY_LABELS[pathway.type]}: {pathway.title}",
            )
        )

    if json_out:
        save_report(json.dumps(result.to_wire(), indent=2), json_out)
        console.print(f"[green]JSON saved: {json_out}[/green]")
    if report:
        save_report(render_markdown(result), report)
        console.print(f"[green]Report saved: {report}[/green]")
    if html:
        save_report(render_html(result), html)
        console.print(f"[green]HTML saved: {html}[/green]")


@app.command()
def mode() -> None:
    """Show whether analysis runs in demo or real mode."""
    current = current_mode(resolve_api_key())
    color = "green" if current is Mode.REAL else "yellow"
    console.print(f"[{color}]{current.value}[/{color}] - {MODE_DESCRIPTIONS[current]}")


@app.command()
def templates() -> None:
    """List the pathway templates used in demo mode."""
    table = Table(title="Pathway templates")
    table.add_column("#", justify="right")
    table.add_column("Key", no_wrap=True)
    table.add_column("Skill area")
    table.add_column("Fast income / Balanced / Max upside")
    for i, t in enumerate(load_templates()):
        table.add_row(
            str(i),
            t.key,
            t.skill_area,
            f"{t.fast_income.title} / {t.balanced.title} / {t.max_upside.title}",
        )
    console.print(table)


@app.command()
def serve(
    host: str = typer.Option(None, "--host", help="Bind address"),
    port: int = typer.Option(None, "--port", help="Port"),
) -> None:
    """Run the HTTP API."""
    import uvicorn

    from vet_pathways.web import create_app

    config = load_config()
    setup_logging(config.logging)
    uvicorn.run(
        create_app(config),
        host=host or config.server.host,
        port=port or config.server.port,
    )


if __name__ == "__main__":
    app()
