# roadmap_assembler/cli.py
"""
CLI interface for roadmap-assembler.

Thin presentation layer over the tools/ service layer.
All commands delegate to the same functions that MCP wraps.
"""

import asyncio
import json
from pathlib import Path
from typing import Any

import typer
from fastmcp.exceptions import ToolError

from roadmap_assembler.config.loader import get_db_path, load_config
from roadmap_assembler.config.schema import RoadmapAssemblerConfig
from roadmap_assembler.logging_config import configure_cli_logging
from roadmap_assembler.models.repository import RoadmapRepository
from roadmap_assembler.validation.sanitize import load_json_file, sanitize_file_stem

app = typer.Typer(
    name="roadmap-assembler",
    help="Validate, merge and partition modular roadmap documents.",
    no_args_is_help=True,
)

_SEVERITY_COLORS = {
    "error": typer.colors.RED,
    "warning": typer.colors.YELLOW,
    "info": typer.colors.CYAN,
}


def _run(coro):
    """Run async function from sync CLI context."""
    return asyncio.run(coro)


async def _get_store(config: RoadmapAssemblerConfig):
    """Open the SQLite fragment store at the configured path."""
    from roadmap_assembler.models.sqlite_store import SQLiteFragmentStore

    store = SQLiteFragmentStore(str(get_db_path(config)))
    await store.initialize()
    return store


async def _with_repository(config: RoadmapAssemblerConfig, action):
    """Open the store, run ``action(repository)``, always close the store."""
    store = await _get_store(config)
    try:
        return await action(RoadmapRepository.from_config(store, config))
    finally:
        await store.close()


def _fail(message: str) -> None:
    typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(1)


def _load(path: Path) -> Any:
    try:
        return load_json_file(path)
    except ToolError as e:
        _fail(str(e))


def _emit_json(data: Any, output: Path | None) -> None:
    """Write JSON to output, or to stdout when no output path is given."""
    text = json.dumps(data, indent=2, ensure_ascii=False)
    if output is None:
        typer.echo(text)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text + "\n", encoding="utf-8")
    typer.echo(f"Wrote {output}", err=True)


def _print_issues(issues: list[dict]) -> None:
    for issue in issues:
        color = _SEVERITY_COLORS.get(issue["severity"], typer.colors.WHITE)
        typer.echo(typer.style(f"  - {issue['message']}", fg=color))
        typer.echo(typer.style(f"    {issue['suggestion']}", fg=typer.colors.BRIGHT_BLACK))


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log progress to stderr"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log errors"),
):
    """Load configuration and set up stderr logging."""
    config = load_config()
    verbosity = "verbose" if verbose else "quiet" if quiet else config.output.verbosity
    configure_cli_logging(verbosity)
    ctx.obj = config


@app.command()
def validate(
    ctx: typer.Context,
    file: Path = typer.Argument(..., help="JSON file to validate"),
    kind: str = typer.Option(
        ..., "--kind", "-k", help="Document kind: skeleton, phase_tasks, task_details, final"
    ),
):
    """Validate one roadmap document."""
    from roadmap_assembler.tools.validate_fragment import validate_fragment

    config: RoadmapAssemblerConfig = ctx.obj
    document = _load(file)

    try:
        result = validate_fragment(
            document, kind, strict_fragment_kind=config.validation.strict_fragment_kind
        )
    except ToolError as e:
        _fail(str(e))

    if result["is_valid"]:
        typer.echo(typer.style(f"{file.name}: valid {result['kind']} document", fg=typer.colors.GREEN))
        return

    typer.echo(typer.style(f"{file.name}: {len(result['issues'])} issue(s)", fg=typer.colors.RED))
    _print_issues(result["issues"])
    raise typer.Exit(1)


@app.command()
def assemble(
    ctx: typer.Context,
    skeleton: Path = typer.Argument(..., help="Roadmap skeleton JSON file"),
    tasks: list[Path] = typer.Option(
        [], "--tasks", "-t", help="Phase tasks JSON file (repeatable)"
    ),
    details: list[Path] = typer.Option(
        [], "--details", "-d", help="Task details JSON file (repeatable)"
    ),
    output: Path = typer.Option(None, "--output", "-o", help="Write merged roadmap here"),
):
    """Validate modular roadmap files and merge them into one roadmap."""
    from rich.console import Console
    from rich.table import Table

    from roadmap_assembler.tools.assemble_roadmap import assemble_roadmap

    config: RoadmapAssemblerConfig = ctx.obj
    skeleton_data = _load(skeleton)
    task_data = [_load(path) for path in tasks]
    detail_data = [_load(path) for path in details]

    result = assemble_roadmap(
        skeleton_data,
        task_data,
        detail_data,
        strict_fragment_kind=config.validation.strict_fragment_kind,
    )

    if not result["is_valid"]:
        typer.echo(
            typer.style(f"Assembly failed at {result['stage']} stage:", fg=typer.colors.RED),
            err=True,
        )
        _print_issues(result["issues"])
        raise typer.Exit(1)

    stats = result["stats"]
    table = Table(title="Merge statistics", show_header=False)
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    table.add_row("Phases", str(stats["total_phases"]))
    table.add_row("Phases with tasks", str(stats["phases_with_tasks"]))
    table.add_row("Tasks", str(stats["total_tasks"]))
    table.add_row("Tasks with details", str(stats["tasks_with_details"]))
    table.add_row("Completion", f"{stats['completion_percentage']}%")
    Console(stderr=True).print(table)

    if stats["phases_without_fragments"]:
        typer.echo(
            f"Phases without task files: {', '.join(stats['phases_without_fragments'])}",
            err=True,
        )

    _emit_json(result["roadmap"], output)


@app.command()
def split(
    file: Path = typer.Argument(..., help="Canonical roadmap JSON file"),
    output_dir: Path = typer.Option(
        None, "--output-dir", "-o", help="Write outline.json and phase_tasks/<phase_id>.json here"
    ),
):
    """Split a roadmap into an outline and per-phase task fragments."""
    from roadmap_assembler.tools.partition_roadmap import split_roadmap

    roadmap = _load(file)
    try:
        result = split_roadmap(roadmap)
    except ToolError as e:
        _fail(str(e))

    if output_dir is None:
        _emit_json(result, None)
        return

    try:
        stems = [sanitize_file_stem(fragment["phase_id"]) for fragment in result["phase_fragments"]]
    except ToolError as e:
        _fail(str(e))

    _emit_json(result["outline"], output_dir / "outline.json")
    for stem, fragment in zip(stems, result["phase_fragments"]):
        _emit_json(fragment, output_dir / "phase_tasks" / f"{stem}.json")

    typer.echo(f"Split into outline + {len(result['phase_fragments'])} phase fragment(s)")


@app.command()
def reconstruct(
    outline: Path = typer.Argument(..., help="Outline JSON file"),
    fragments: list[Path] = typer.Argument(None, help="Phase fragment JSON files"),
    policy: str = typer.Option("degrade", "--policy", "-p", help="Missing fragment policy: degrade or fail"),
    output: Path = typer.Option(None, "--output", "-o", help="Write roadmap here"),
):
    """Rebuild a roadmap from an outline and its phase fragments."""
    from roadmap_assembler.tools.partition_roadmap import reconstruct_roadmap

    outline_data = _load(outline)
    fragment_data = [_load(path) for path in fragments or []]

    try:
        result = reconstruct_roadmap(outline_data, fragment_data, policy)
    except ToolError as e:
        _fail(str(e))

    for error in result["errors"]:
        typer.echo(typer.style(f"Warning: {error}", fg=typer.colors.YELLOW), err=True)
    _emit_json(result["roadmap"], output)


@app.command()
def save(
    ctx: typer.Context,
    file: Path = typer.Argument(..., help="Canonical roadmap JSON file"),
    roadmap_id: str = typer.Option(None, "--id", help="Overwrite this roadmap ID"),
):
    """Store a roadmap as outline + phase fragments."""
    from roadmap_assembler.tools.save_roadmap import save_roadmap

    roadmap = _load(file)
    try:
        result = _run(
            _with_repository(ctx.obj, lambda repo: save_roadmap(roadmap, repo, roadmap_id))
        )
    except ToolError as e:
        _fail(str(e))

    typer.echo(
        f"Saved {result['roadmap_id']}: {result['total_phases']} phases, "
        f"{result['total_tasks']} tasks in {result['fragments_written']} fragment(s)"
    )
    if result["fragments_removed"]:
        typer.echo(f"Removed {result['fragments_removed']} stale fragment(s)")


@app.command()
def load(
    ctx: typer.Context,
    roadmap_id: str = typer.Argument(..., help="Roadmap ID to load"),
    policy: str = typer.Option(None, "--policy", "-p", help="Missing fragment policy: degrade or fail"),
    output: Path = typer.Option(None, "--output", "-o", help="Write roadmap here"),
):
    """Load a stored roadmap."""
    from roadmap_assembler.tools.load_roadmap import load_roadmap

    try:
        result = _run(_with_repository(ctx.obj, lambda repo: load_roadmap(roadmap_id, repo, policy)))
    except ToolError as e:
        _fail(str(e))

    for error in result["errors"]:
        typer.echo(typer.style(f"Warning: {error}", fg=typer.colors.YELLOW), err=True)
    _emit_json(result["roadmap"], output)


@app.command("list")
def list_command(ctx: typer.Context):
    """List stored roadmaps."""
    from roadmap_assembler.tools.list_roadmaps import list_roadmaps

    result = _run(_with_repository(ctx.obj, list_roadmaps))
    roadmaps = result["roadmaps"]

    if not roadmaps:
        typer.echo("No roadmaps found.")
        return

    typer.echo(f"{'ROADMAP ID':<40} {'PHASES':>6} {'TASKS':>6}  TITLE")
    typer.echo("-" * 80)
    for r in roadmaps:
        typer.echo(f"{r['roadmap_id']:<40} {r['total_phases']:>6} {r['total_tasks']:>6}  {r['title']}")


@app.command()
def delete(
    ctx: typer.Context,
    roadmap_id: str = typer.Argument(..., help="Roadmap ID to delete"),
):
    """Delete a stored roadmap and its phase fragments."""
    from roadmap_assembler.tools.delete_roadmap import delete_roadmap

    try:
        result = _run(_with_repository(ctx.obj, lambda repo: delete_roadmap(roadmap_id, repo)))
    except ToolError as e:
        _fail(str(e))

    typer.echo(f"Deleted {result['roadmap_id']} ({result['fragments_removed']} phase fragment(s))")


@app.command()
def recount(ctx: typer.Context):
    """Recompute stored task counts from phase fragments."""
    from roadmap_assembler.tools.recount_roadmaps import recount_roadmaps

    result = _run(_with_repository(ctx.obj, recount_roadmaps))
    typer.echo(
        f"Recounted {len(result['roadmaps'])} roadmap(s), corrected {result['corrected']}"
    )


@app.command()
def serve():
    """Start the MCP server on stdio."""
    from roadmap_assembler.__main__ import main as server_main

    asyncio.run(server_main())


if __name__ == "__main__":
    app()
