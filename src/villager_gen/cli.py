"""CLI interface for the random villager creator."""

import asyncio
import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from villager_gen import __version__
from villager_gen.config import Settings, get_settings
from villager_gen.context import AppContext, build_context
from villager_gen.errors import StartupLoadError
from villager_gen.generator.config_generator import Configuration, category_odds
from villager_gen.sequence.phases import PhaseState, SequencePhase
from villager_gen.sequence.scheduler import AsyncioScheduler, InstantScheduler

app = typer.Typer(
    name="villager-gen",
    help="Random villager creator: weighted forms and the reroll sequence",
    no_args_is_help=True,
)

console = Console()


def version_callback(value: bool):
    if value:
        console.print(f"villager-gen version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option("--version", "-v", callback=version_callback, is_eager=True),
    ] = False,
    verbose: Annotated[bool, typer.Option("--verbose", help="Debug logging")] = False,
):
    """Random Villager Creator - roll villagers and play the reroll sequence."""
    level = "DEBUG" if verbose else get_settings().log_level
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


# --- Shared helpers ---


def _settings_with(catalog: Path | None, seed: int | None, **overrides) -> Settings:
    """Settings with command-line overrides applied (the cached instance is left untouched)."""
    update = {k: v for k, v in overrides.items() if v is not None}
    if catalog is not None:
        update["catalog_path"] = catalog
    if seed is not None:
        update["random_seed"] = seed
    return get_settings().model_copy(update=update)


def _build(settings: Settings, **kwargs) -> AppContext:
    """Build the app context, turning startup failures into a clean exit."""
    try:
        return build_context(settings, **kwargs)
    except StartupLoadError as e:
        console.print(f"[red]Failed to load: {e}[/]")
        raise typer.Exit(1)


def _config_row(ctx: AppContext, config: Configuration) -> tuple[str, ...]:
    form = ctx.catalog.forms[config.form_id]
    pool_size = len(form.sets) + len(ctx.catalog.general_color_sets)
    return (
        form.display_name,
        str(form.category),
        form.variants[config.form_variant_index],
        f"{config.form_color_index}/{pool_size}" if form.can_be_tinted else "[dim]untinted[/]",
        config.clothing_id,
    )


# --- Commands ---


@app.command()
def roll(
    count: Annotated[int, typer.Option("--count", "-n", min=1, help="Configurations to generate")] = 1,
    seed: Annotated[Optional[int], typer.Option("--seed", help="Random seed for reproducible rolls")] = None,
    catalog: Annotated[Optional[Path], typer.Option("--catalog", "-c", help="Catalog JSON file")] = None,
):
    """Generate random villager configurations.

    Examples:
        villager-gen roll
        villager-gen roll -n 10 --seed 12345
    """
    ctx = _build(_settings_with(catalog, seed))
    configs = ctx.generator.generate_multiple(count)

    table = Table(title=f"Villagers (seed {ctx.seed_used})")
    table.add_column("#", style="dim")
    table.add_column("Form", style="cyan")
    table.add_column("Category")
    table.add_column("Variant")
    table.add_column("Color set")
    table.add_column("Clothing")
    for i, config in enumerate(configs, 1):
        table.add_row(str(i), *_config_row(ctx, config))
    console.print(table)


@app.command()
def play(
    cycles: Annotated[int, typer.Option("--cycles", "-n", min=1, help="Reroll cycles to run")] = 1,
    seed: Annotated[Optional[int], typer.Option("--seed", help="Random seed")] = None,
    frames: Annotated[Optional[int], typer.Option("--frames", "-f", min=1, help="Shuffle frames per cycle")] = None,
    instant: Annotated[bool, typer.Option("--instant", help="Skip waiting between phases")] = False,
    catalog: Annotated[Optional[Path], typer.Option("--catalog", "-c", help="Catalog JSON file")] = None,
):
    """Play reroll cycles against the headless renderer.

    Example: villager-gen play -n 3 --instant
    """
    settings = _settings_with(catalog, seed, shuffle_frames=frames)
    scheduler = InstantScheduler() if instant else AsyncioScheduler()

    def output(path: Path, volume: float) -> None:
        console.print(f"  [dim]sound {path.name} @ {volume:.0%}[/]")

    ctx = _build(settings, scheduler=scheduler, sound_output=output)
    controller = ctx.controller

    def on_phase(state: PhaseState) -> None:
        if state.phase is SequencePhase.IDLE:
            console.print(f"  [green]idle[/] settled on [bold]{controller.label}[/]")
        elif state.phase in (SequencePhase.DEATH, SequencePhase.SETTLING):
            console.print(f"  [cyan]{state}[/]")

    def on_label(label: str) -> None:
        # Spawn and shuffle frames each show a new villager
        console.print(f"  [yellow]{controller.state}[/] {label}")

    async def _run() -> None:
        ctx.renderer.start()
        try:
            initial = controller.show_initial()
            console.print(f"Initial villager: [bold]{ctx.generator.label_for(initial)}[/]")
            controller.add_listener(on_phase)
            controller.add_label_listener(on_label)
            for i in range(1, cycles + 1):
                console.print(f"\n[bold]Reroll {i}/{cycles}[/]")
                await controller.reroll()
        finally:
            ctx.renderer.stop()

    asyncio.run(_run())
    console.print(
        f"\n[dim]{controller.cycles_completed} cycle(s), seed {ctx.seed_used}, "
        f"{ctx.renderer.frames_rendered} frames rendered[/]"
    )


@app.command("catalog")
def show_catalog(
    catalog: Annotated[Optional[Path], typer.Option("--catalog", "-c", help="Catalog JSON file")] = None,
):
    """Show form categories, their weights and effective selection odds."""
    ctx = _build(_settings_with(catalog, None))
    buckets = ctx.generator.forms_by_category
    weights = ctx.generator.weights
    odds = category_odds(buckets, weights)

    table = Table(title="Form Categories")
    table.add_column("Category", style="cyan")
    table.add_column("Forms")
    table.add_column("Weight")
    table.add_column("Odds")
    table.add_column("Members", style="dim")
    for category in sorted(set(buckets) | set(weights)):
        entries = buckets.bucket(category)
        weight = weights.get(category)
        table.add_row(
            str(category),
            str(len(entries)),
            "-" if weight is None else f"{weight:g}",
            f"{odds[category]:.1%}" if category in odds else "-",
            ", ".join(e.display_name for e in entries),
        )
    console.print(table)
    console.print(
        f"[dim]{len(ctx.catalog.clothing)} clothing, "
        f"{len(ctx.catalog.general_color_sets)} general color sets, "
        f"{len(ctx.catalog.animations)} animations[/]"
    )


@app.command()
def info():
    """Show configuration information."""
    settings = get_settings()

    table = Table(title="Villager-Gen Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    table.add_row("Catalog", str(settings.catalog_path or "bundled"))
    table.add_row("Default Clothing", settings.default_clothing)
    table.add_row("Random Seed", "random" if settings.random_seed is None else str(settings.random_seed))
    table.add_row("Shuffle Frames", str(settings.shuffle_frames))
    table.add_row(
        "Shuffle Delay",
        f"{settings.shuffle_base_delay_ms:g}-{settings.shuffle_max_delay_ms:g} ms",
    )
    table.add_row("Death Speed", f"{settings.death_speed:g}x")
    table.add_row("Spawn Speed", f"{settings.spawn_speed:g}x")
    sounds_status = "" if settings.sounds_dir.is_dir() else " [yellow](not found)[/]"
    table.add_row("Sounds", f"{settings.sounds_dir}{sounds_status}")
    table.add_row("Log Level", settings.log_level)

    console.print(table)


@app.command()
def ui(
    port: Annotated[int, typer.Option("--port", "-p", help="Port to serve on")] = 8421,
    host: Annotated[str, typer.Option("--host", help="Host to bind to")] = "127.0.0.1",
):
    """Serve the reroll HTTP API."""
    try:
        import uvicorn
    except ImportError:
        console.print("[red]Web UI dependencies not installed.[/]")
        console.print("Install with: [bold]pip install -e \".[ui]\"[/]")
        raise typer.Exit(1)

    from villager_gen.api.app import create_app

    try:
        app_instance = create_app(build_context(get_settings()))
    except StartupLoadError as e:
        console.print(Panel(f"[red]{e}[/]", title="Failed to load"))
        raise typer.Exit(1)

    console.print(f"[bold green]Villager-Gen API[/] http://{host}:{port}")
    console.print(f"[dim]API docs: http://{host}:{port}/api/docs[/]")
    uvicorn.run(app_instance, host=host, port=port, log_level="info")


if __name__ == "__main__":
    app()
