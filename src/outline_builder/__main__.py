"""Outline Builder CLI.

Usage:
    python -m outline_builder [--verbose] [--config settings.json] <command> <building.json> [options]

All modifications go through the 'apply' command with JSON actions.
Read-only commands (validate, eaves, dimensions, elevations, extrude) print
derived geometry as JSON.
"""
from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError as ModelValidationError

from outline_builder import __version__
from outline_builder.config import DEFAULT_SETTINGS, EngineSettings
from outline_builder.edits.actions import apply_actions, parse_action
from outline_builder.generators.shell import create_initial_building
from outline_builder.generators.templates import list_templates
from outline_builder.models.building import Building
from outline_builder.persistence import load_building, save_building
from outline_builder.queries.eaves import build_eave_segments, eave_extents
from outline_builder.queries.elevation import build_elevation_data
from outline_builder.queries.extrusion import build_extrusion
from outline_builder.queries.plan_dimensions import build_plan_dimension_groups
from outline_builder.validators.structural import validate_building

app = typer.Typer(
    name="outline_builder",
    help="Outline Builder: geometry engine CLI for multi-storey building outlines.",
    no_args_is_help=True,
)

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _output(data: dict) -> None:
    """Print JSON output to stdout."""
    typer.echo(json.dumps(data, indent=2, ensure_ascii=False))


def _fail(message: str) -> None:
    _output({"ok": False, "error": message})
    raise typer.Exit(1)


def _load_building(path: str) -> Building:
    result = load_building(path)
    if not result.ok:
        _fail(result.error or "Failed to load building")
    if result.building is None:
        _fail(f"Building file not found: {path}")
    return result.building


def _settings(ctx: typer.Context) -> EngineSettings:
    return ctx.obj if isinstance(ctx.obj, EngineSettings) else DEFAULT_SETTINGS


def _validate_json(building: Building) -> dict:
    """Run the validators and return structured results."""
    errors = validate_building(building)
    return {
        "errors": sum(1 for e in errors if e.severity == "error"),
        "warnings": sum(1 for e in errors if e.severity == "warning"),
        "details": [
            {
                "severity": e.severity,
                "element_type": e.element_type,
                "element_id": e.element_id,
                "message": e.message,
            }
            for e in errors
        ],
    }


def _selected_floors(building: Building, floor: Optional[str]):
    if floor is None:
        return building.floors
    match = building.get_floor(floor)
    if match is None:
        _fail(f"Floor '{floor}' not found")
    return [match]


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log to stderr"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Engine settings JSON"),
):
    """Configure logging and engine settings for the command."""
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if config:
        try:
            ctx.obj = EngineSettings.load(config)
        except (OSError, ModelValidationError) as e:
            _fail(f"Invalid settings file {config}: {e}")
    else:
        ctx.obj = DEFAULT_SETTINGS


# ---------------------------------------------------------------------------
# Setup commands
# ---------------------------------------------------------------------------

@app.command()
def version() -> None:
    """Show version."""
    typer.echo(f"outline-builder v{__version__}")


@app.command()
def templates():
    """List the outline template catalog."""
    _output({
        "ok": True,
        "templates": [
            {
                "id": t.id.value,
                "label": t.label,
                "vertices": [[p.x, p.y] for p in t.base_vertices],
                "default_eave": t.default_eave,
                "min_width": t.metadata.min_width,
                "min_depth": t.metadata.min_depth,
            }
            for t in list_templates()
        ],
    })


@app.command()
def new(
    path: str = typer.Argument(..., help="Building JSON file to create"),
    template: str = typer.Option("rectangle", "--template", "-t", help="Template id"),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing file"),
):
    """Create a single-floor building from a template."""
    if Path(path).exists() and not force:
        _fail(f"{path} already exists (use --force to overwrite)")
    building = create_initial_building(template)
    result = save_building(building, path)
    if not result.ok:
        _fail(result.error or "Failed to save building")
    _output({
        "ok": True,
        "path": path,
        "template": building.template.value,
        "floors": [f.id for f in building.floors],
    })


# ---------------------------------------------------------------------------
# Read-only commands
# ---------------------------------------------------------------------------

@app.command()
def validate(path: str = typer.Argument(..., help="Building JSON file")):
    """Run structural validators on a building file."""
    result = load_building(path)
    if result.building is None:
        _fail(result.error or f"Building file not found: {path}")
    _output({"ok": True, "validation": _validate_json(result.building)})


@app.command()
def eaves(
    path: str = typer.Argument(..., help="Building JSON file"),
    floor: Optional[str] = typer.Option(None, "--floor", "-f", help="Only this floor"),
):
    """Plan eave outline segments per floor."""
    building = _load_building(path)
    floors = []
    for f in _selected_floors(building, floor):
        segments = build_eave_segments(f.polygon, f.dimensions, f.style.roof_stroke_color)
        floors.append({
            "floor": f.id,
            "segments": [s.model_dump(mode="json") for s in segments],
            "extents": [
                eave_extents(f.polygon, f.dimensions, axis).model_dump(mode="json")
                for axis in ("x", "y")
            ],
        })
    _output({"ok": True, "floors": floors})


@app.command()
def dimensions(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="Building JSON file"),
    floor: Optional[str] = typer.Option(None, "--floor", "-f", help="Only this floor"),
):
    """Plan dimension lines per floor and side."""
    building = _load_building(path)
    floors = []
    for f in _selected_floors(building, floor):
        groups = build_plan_dimension_groups(f.polygon, f.dimensions, _settings(ctx).dimensions)
        floors.append({
            "floor": f.id,
            "groups": [g.model_dump(mode="json") for g in groups],
        })
    _output({"ok": True, "floors": floors})


@app.command()
def elevations(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="Building JSON file"),
    direction: Optional[str] = typer.Option(None, "--direction", "-d", help="north, south, east or west"),
):
    """Elevation views (all four directions unless one is given)."""
    building = _load_building(path)
    result = build_elevation_data(building, _settings(ctx))
    views = [v for v in result.views if direction is None or v.direction == direction]
    if direction is not None and not views:
        _fail(f"Unknown direction: {direction}. Use: north, south, east, west")
    _output({
        "ok": result.ok,
        "error": result.error,
        "views": [v.model_dump(mode="json") for v in views],
    })


@app.command()
def extrude(path: str = typer.Argument(..., help="Building JSON file")):
    """Stacked bottom/top rings per floor for a 3D viewer."""
    building = _load_building(path)
    result = build_extrusion(building)
    _output(result.model_dump(mode="json"))


# ---------------------------------------------------------------------------
# Apply command (modifications)
# ---------------------------------------------------------------------------

@app.command()
def apply(
    path: str = typer.Argument(..., help="Building JSON file"),
    actions_json: Optional[str] = typer.Argument(None, help="JSON array of actions"),
    file: Optional[str] = typer.Option(None, "--file", "-f", help="Read actions from JSON file"),
    stdin: bool = typer.Option(False, "--stdin", help="Read actions from stdin"),
    no_validate: bool = typer.Option(False, "--no-validate", help="Skip validation after apply"),
):
    """Apply edits to a building via JSON actions."""
    # Parse actions from one of: positional arg, --file, --stdin
    if stdin:
        raw = sys.stdin.read()
    elif file:
        raw = Path(file).read_text()
    elif actions_json:
        raw = actions_json
    else:
        _fail("Provide actions as argument, --file, or --stdin")

    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as e:
        _fail(f"Invalid JSON: {e}")

    if not isinstance(payload, list):
        payload = [payload]  # allow single action without wrapping in array

    try:
        actions = [parse_action(a) for a in payload]
    except ModelValidationError as e:
        _fail(f"Invalid action: {e}")

    building = _load_building(path)
    building, applied = apply_actions(building, actions)
    if building.last_error is not None:
        _output({
            "ok": False,
            "error": f"Action {applied} ({actions[applied].action}) failed: {building.last_error}",
            "applied": applied,
        })
        raise typer.Exit(1)

    result = save_building(building, path)
    if not result.ok:
        _fail(result.error or "Failed to save building")

    output: dict = {
        "ok": True,
        "actions_applied": applied,
        "active_floor": building.active_floor_id,
        "floors": [f.id for f in building.floors],
    }
    if not no_validate:
        output["validation"] = _validate_json(building)
    _output(output)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    app()
