"""CLI entry-point: run the review-to-ad pipeline locally."""

import json
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from rta.config import get_settings
from rta.errors import RTAError
from rta.jobs import InMemoryJobStore, JobStatus
from rta.pipeline import JobOrchestrator
from rta.report import render_job_markdown
from rta.reviews import PlaceResolver
from rta.schemas.models import FORM_OPTIONS, FormData

app = typer.Typer(help="Review-to-Ad Studio: customer reviews in, ad content out")


@app.command()
def generate(
    business_name: str = typer.Option(..., help="Business name"),
    business_type: list[str] = typer.Option(..., help="Business type (repeatable)"),
    marketing_goal: list[str] = typer.Option(..., help="Marketing goal (repeatable)"),
    target_audience: list[str] = typer.Option(..., help="Target audience (repeatable)"),
    platform: list[str] = typer.Option(..., help="Advertising platform (repeatable)"),
    tone: list[str] = typer.Option(..., help="Brand tone (repeatable)"),
    cta: list[str] = typer.Option(..., help="Preferred CTA (repeatable; the first one is used)"),
    reviews_file: Path = typer.Option(None, help="Text file with one review per line"),
    maps_link: str = typer.Option(None, help="Maps link (requires RTA_REVIEW_SOURCE=maps_link)"),
    format: str = typer.Option("json", help="Output format: json or md"),
    output: Path = typer.Option(None, help="Write result to this file instead of stdout"),
    no_images: bool = typer.Option(False, "--no-images", help="Skip the image generation stage"),
):
    """Run the full pipeline for one questionnaire and print the job record."""
    console = Console(stderr=True)
    settings = get_settings()
    if no_images:
        settings.rta_enable_images = False

    reviews = None
    if reviews_file is not None:
        try:
            reviews = reviews_file.read_text(encoding="utf-8")
        except OSError as e:
            console.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(1)

    try:
        form = FormData(
            business_name=business_name,
            business_type=business_type,
            marketing_goal=marketing_goal,
            target_audience=target_audience,
            advertising_platform=platform,
            brand_tone=tone,
            preferred_cta=cta,
            reviews=reviews,
            maps_link=maps_link,
        )
    except ValueError as e:
        console.print(f"[red]Invalid questionnaire: {e}[/red]")
        raise typer.Exit(2)

    unknown = form.unknown_options()
    if unknown and settings.rta_strict_options:
        for field, values in unknown.items():
            console.print(f"[red]Unknown {field}: {', '.join(values)}[/red]")
        raise typer.Exit(2)

    orchestrator = JobOrchestrator(InMemoryJobStore(), settings)
    console.print("Processing reviews and generating content...")
    job = orchestrator.submit(form)

    if job.status == JobStatus.ERROR:
        console.print(f"[red]Error: {job.error}[/red]")
        raise typer.Exit(1)

    if format.lower() == "md":
        text = render_job_markdown(job)
    else:
        text = json.dumps(job.model_dump(mode="json", by_alias=True), indent=2, ensure_ascii=False)

    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(text, encoding="utf-8")
        console.print(f"[green]Wrote {output}[/green]")
    else:
        typer.echo(text)


@app.command("resolve-place")
def resolve_place(url: str = typer.Argument(..., help="Maps link")):
    """Resolve a Maps link to a place id and count its reviews."""
    console = Console()
    settings = get_settings()
    try:
        resolver = PlaceResolver(
            settings.google_places_api_key,
            max_reviews=settings.rta_max_place_reviews,
            timeout=settings.rta_http_timeout,
        )
        place_id = resolver.resolve(url)
        reviews = resolver.fetch_reviews(place_id)
    except RTAError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)
    console.print(f"Place id: [bold]{place_id}[/bold]")
    console.print(f"Reviews: {len(reviews)}")


@app.command()
def options():
    """Print the questionnaire option lists."""
    console = Console()
    table = Table(title="Questionnaire options")
    table.add_column("Field")
    table.add_column("Allowed values")
    for name, values in FORM_OPTIONS.items():
        table.add_row(name, "\n".join(values))
    console.print(table)


if __name__ == "__main__":
    app()
