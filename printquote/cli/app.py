"""Command-line interface for printquote."""

import json
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from printquote.core import Config, PrintQuoteError, load_config
from printquote.core.engine import QuoteEngine
from printquote.parsers import ParserFactory
from printquote.pricing import Estimate
from printquote.utils import setup_logging

app = typer.Typer(
    name="printquote",
    help="Estimate mass, print time and price of 3D model files",
    add_completion=False,
)
console = Console()
err_console = Console(stderr=True)


def _load(config: Optional[Path], overrides: dict, log_level: Optional[str]) -> Config:
    pricing = {k: v for k, v in overrides.items() if v is not None}
    layered: dict = {"pricing": pricing} if pricing else {}
    if log_level:
        layered["logging"] = {"level": log_level.upper()}
    return load_config(config, overrides=layered)


def _estimate_table(estimate: Estimate) -> Table:
    table = Table(title=estimate.file_name, show_header=False)
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="white")

    bb = estimate.bounding_box_mm
    table.add_row("File Size", f"{estimate.file_size_bytes:,} bytes")
    table.add_row("Confidence", estimate.confidence.value)
    table.add_row("Triangles", f"{estimate.triangle_count:,}")
    table.add_row(
        "Bounding Box (mm)",
        f"[{bb.min[0]:.2f}, {bb.min[1]:.2f}, {bb.min[2]:.2f}] to "
        f"[{bb.max[0]:.2f}, {bb.max[1]:.2f}, {bb.max[2]:.2f}]",
    )
    table.add_row("Volume", f"{estimate.volume_cm3:.2f} cm³")
    table.add_row("Surface Area", f"{estimate.surface_area_cm2:.2f} cm²")
    table.add_row("Material", f"{estimate.material} ({estimate.density} g/cm³)")
    table.add_row("Mass", f"{estimate.estimated_grams:.1f} g")
    table.add_row("Print Time", f"{estimate.estimated_hours:.2f} h")
    table.add_row("Infill", f"{estimate.recommended_infill}%")
    table.add_row("Price", f"{estimate.estimated_price:.2f}")
    return table


@app.command()
def estimate(
    files: List[Path] = typer.Argument(
        ...,
        exists=True,
        dir_okay=False,
        help="Model files to estimate (.stl, .obj; others use the size heuristic)",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file (TOML)",
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        "-j",
        help="Print estimates as JSON",
    ),
    material_cost: Optional[float] = typer.Option(
        None, "--material-cost", help="Material cost per gram"
    ),
    machine_rate: Optional[float] = typer.Option(
        None, "--machine-rate", help="Machine cost per hour"
    ),
    setup_fee: Optional[float] = typer.Option(
        None, "--setup-fee", help="Flat fee per job"
    ),
    print_speed: Optional[float] = typer.Option(
        None, "--print-speed", help="Throughput in mm³ per hour (0 disables)"
    ),
    log_level: Optional[str] = typer.Option(
        None, "--log-level", "-l", help="DEBUG, INFO, WARNING or ERROR"
    ),
) -> None:
    """Estimate one or more model files."""
    try:
        cfg = _load(
            config,
            {
                "material_cost_per_gram": material_cost,
                "machine_rate_per_hour": machine_rate,
                "setup_fee": setup_fee,
                "print_speed": print_speed,
            },
            log_level,
        )
    except PrintQuoteError as e:
        err_console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    setup_logging(cfg.logging)
    engine = QuoteEngine(cfg.pricing)

    results = []
    failed = 0
    for path in files:
        try:
            result, warnings = engine.estimate(path.name, path.read_bytes())
        except (PrintQuoteError, OSError) as e:
            err_console.print(f"[red]Error: {path.name}: {e}[/red]")
            failed += 1
            continue

        if as_json:
            results.append(result.to_dict())
            continue

        console.print(_estimate_table(result))
        for warning in warnings:
            console.print(f"  ⚠️  {warning}", style="yellow")

    if as_json:
        payload = results[0] if len(files) == 1 and results else results
        console.print_json(json.dumps(payload))

    if failed:
        raise typer.Exit(1)


@app.command()
def formats() -> None:
    """List file extensions and the parsers tried for each."""
    table = Table(title="Supported Formats")
    table.add_column("Extension", style="cyan")
    table.add_column("Parsers (in order)", style="white")

    for ext, parsers in ParserFactory.available_formats().items():
        table.add_row(ext, " → ".join(parsers))

    console.print(table)
    console.print("Other files are priced from their size (low confidence).")


@app.command("show-config")
def show_config(
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file (TOML)",
    ),
    write: Optional[Path] = typer.Option(
        None,
        "--write",
        "-w",
        help="Write the effective configuration to this TOML file",
    ),
) -> None:
    """Show the effective configuration (defaults, file and environment)."""
    try:
        cfg = load_config(config)
    except PrintQuoteError as e:
        err_console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    table = Table(title="Pricing", show_header=False)
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="white")
    for key, value in cfg.pricing.model_dump().items():
        table.add_row(key, str(value))
    console.print(table)

    if write:
        cfg.save_toml(write)
        console.print(f"💾 Saved configuration to [cyan]{write}[/cyan]")


def main() -> None:
    """Main entry point for CLI."""
    app()


if __name__ == "__main__":
    main()
