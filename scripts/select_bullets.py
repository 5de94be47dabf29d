#!/usr/bin/env python3
"""
Bullet Selection CLI

Selects role-targeted resume bullets from a resume data file.

Commands:
    profiles - List role profiles defined in the resume data
    presets  - List selection presets
    count    - Count selectable items (bullets + position descriptions)
    validate - Check resume data structure and report problems
    select   - Run selection for one role profile
    events   - Show recent selection events from the pipeline log

Examples:\n

    select_bullets.py profiles                                   # Profiles in RESUME_DATA_PATH

    select_bullets.py select platform-engineer                   # Default caps (18/6/4)

    select_bullets.py select platform-engineer -p length_compact # Apply a preset

    select_bullets.py select platform-engineer -o payload.json   # Write generation payload
"""

import json
import os
import time
from datetime import datetime
from pathlib import Path
from typing import List, Optional

import typer
from dotenv import load_dotenv
from omegaconf import OmegaConf
from typing_extensions import Annotated

from resumate.contexts.intake import (
    InvalidResumeDataError,
    RoleProfileNotFoundError,
    get_role_profile,
    load_resume_data,
    prepare_role_profile,
)
from resumate.contexts.targeting import (
    build_generation_payload,
    count_selectable_items,
    format_selection_report,
    resolve_selection_config,
    select_bullets,
    summarize_selection,
)
from resumate.contexts.intake.logger import setup_intake_logger
from resumate.contexts.intake.validator import find_duplicate_ids, validate_resume_data
from resumate.contexts.targeting.logger import log_selection_result, setup_targeting_logger
from resumate.contexts.targeting.selection_config import SELECTION_PRESETS_PATH
from resumate.utils.event_logging import get_recent_events, log_selection_event
from resumate.utils.timestamp import format_timestamp

load_dotenv()
RESUME_DATA_PATH = Path(os.getenv("RESUME_DATA_PATH", "data/resume-data.json"))
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))

app = typer.Typer(
    help="Select role-targeted resume bullets from a career history",
    add_completion=False,
    invoke_without_command=True,
)

DataOption = Annotated[
    Path,
    typer.Option("--data", "-d", help="Resume data file (JSON or YAML)"),
]


def _load(data_path: Path):
    """Load resume data or exit with a readable error."""
    try:
        return load_resume_data(data_path)
    except (FileNotFoundError, InvalidResumeDataError) as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


@app.command("profiles")
def profiles_command(data: DataOption = RESUME_DATA_PATH):
    """List role profiles defined in the resume data."""
    resume_data = _load(data)
    profiles = resume_data.role_profiles or []
    if not profiles:
        typer.echo("No role profiles defined")
        return

    for profile in profiles:
        typer.secho(f"{profile.id}", bold=True, nl=False)
        typer.echo(f"  {profile.name}")
        top_tags = sorted(profile.tag_weights.items(), key=lambda kv: kv[1], reverse=True)[:5]
        if top_tags:
            typer.echo("    " + ", ".join(f"{tag} ({weight:.1f})" for tag, weight in top_tags))


@app.command("presets")
def presets_command():
    """List available selection presets."""
    nested = OmegaConf.to_container(OmegaConf.load(SELECTION_PRESETS_PATH), resolve=True)
    for category, presets in nested.items():
        typer.secho(category, bold=True)
        for name, values in presets.items():
            settings = ", ".join(f"{key}={value}" for key, value in (values or {}).items())
            typer.echo(f"  {category}_{name}: {settings}")


@app.command("count")
def count_command(data: DataOption = RESUME_DATA_PATH):
    """Count selectable items in the resume data."""
    resume_data = _load(data)
    bullets, descriptions, total = count_selectable_items(resume_data)
    typer.echo(f"Companies: {len(resume_data.experience)}")
    typer.echo(f"Bullets: {bullets}")
    typer.echo(f"Position descriptions: {descriptions}")
    typer.echo(f"Total selectable: {total}")


@app.command("validate")
def validate_command(
    data: DataOption = RESUME_DATA_PATH,
    log_dir: Annotated[
        Optional[Path],
        typer.Option("--log-dir", help="Session log directory (default: LOGS_PATH/validate_<timestamp>)"),
    ] = None,
):
    """
    Check resume data structure and report problems.

    Examples:\n

        $ select_bullets.py validate

        $ select_bullets.py validate -d data/resume-data.yaml
    """
    if log_dir is None:
        log_dir = LOGS_PATH / f"validate_{datetime.now():%Y%m%d_%H%M%S}"
    setup_intake_logger(log_dir, source=str(data))

    try:
        resume_data = load_resume_data(data, validate=False)
        validate_resume_data(resume_data, check_unique_ids=False)
    except (FileNotFoundError, InvalidResumeDataError) as e:
        typer.secho(f"Invalid: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    duplicates = find_duplicate_ids(resume_data)
    if duplicates:
        typer.secho(f"Invalid: duplicate IDs: {', '.join(duplicates)}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    _, _, total = count_selectable_items(resume_data)
    profiles = resume_data.role_profiles or []
    typer.secho(
        f"Valid: {len(resume_data.experience)} companies, {total} selectable items, {len(profiles)} role profiles",
        fg=typer.colors.GREEN,
    )


@app.command("select")
def select_command(
    profile_id: Annotated[str, typer.Argument(help="Role profile ID")],
    data: DataOption = RESUME_DATA_PATH,
    presets: Annotated[
        Optional[List[str]],
        typer.Option("--preset", "-p", help="Selection preset, repeatable (later overrides earlier)"),
    ] = None,
    max_bullets: Annotated[Optional[int], typer.Option("--max-bullets", min=0)] = None,
    max_per_company: Annotated[Optional[int], typer.Option("--max-per-company", min=0)] = None,
    max_per_position: Annotated[Optional[int], typer.Option("--max-per-position", min=0)] = None,
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Write the generation payload as JSON"),
    ] = None,
    log_dir: Annotated[
        Optional[Path],
        typer.Option("--log-dir", help="Session log directory (default: LOGS_PATH/select_<timestamp>)"),
    ] = None,
    record_event: Annotated[
        bool,
        typer.Option("--event/--no-event", help="Append a resume_prepared event to the pipeline log"),
    ] = True,
):
    """
    Select bullets for one role profile.

    Examples:\n

        $ select_bullets.py select platform-engineer

        $ select_bullets.py select platform-engineer -p length_compact -p diversity_strict

        $ select_bullets.py select platform-engineer --max-bullets 10 -o payload.json
    """
    try:
        config = resolve_selection_config(
            presets or [],
            overrides={
                "max_bullets": max_bullets,
                "max_per_company": max_per_company,
                "max_per_position": max_per_position,
            },
        )
    except ValueError as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    if log_dir is None:
        log_dir = LOGS_PATH / f"select_{datetime.now():%Y%m%d_%H%M%S}"
    log_file = setup_targeting_logger(log_dir, profile_id, config.to_dict())

    resume_data = _load(data)
    try:
        role_profile = prepare_role_profile(get_role_profile(resume_data, profile_id))
    except (RoleProfileNotFoundError, InvalidResumeDataError) as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    _, _, total_selectable = count_selectable_items(resume_data)

    start = time.perf_counter()
    selected = select_bullets(resume_data, role_profile, config)
    elapsed_ms = (time.perf_counter() - start) * 1000

    log_selection_result(role_profile.name, selected, total_selectable, elapsed_ms)

    if record_event:
        log_selection_event(
            role_profile_id=role_profile.id,
            role_profile_name=role_profile.name,
            selected=selected,
            summary=summarize_selection(selected),
            config=config.to_dict(),
            duration_ms=elapsed_ms,
            source="cli",
        )

    typer.echo("")
    typer.echo(format_selection_report(role_profile.name, selected, total_selectable))

    if output is not None:
        payload = build_generation_payload(resume_data, role_profile, config, selected=selected)
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(json.dumps(payload.to_dict(), indent=2), encoding="utf-8")
        typer.secho(f"\nPayload written to {output}", fg=typer.colors.GREEN)

    typer.echo(f"Log: {log_file}")


@app.command("events")
def events_command(
    n: Annotated[int, typer.Option("--num", "-n", help="Number of recent events to show")] = 10,
    profile: Annotated[
        Optional[str], typer.Option("--profile", "-r", help="Filter to events for this role profile")
    ] = None,
    events_file: Annotated[
        Optional[Path], typer.Option("--events-file", help="Event log (default: PIPELINE_EVENTS_FILE)")
    ] = None,
    compact: Annotated[bool, typer.Option("--compact", "-c", help="Print raw JSON, one event per line")] = False,
):
    """
    Show recent selection events from the pipeline log.

    Examples:\n

        $ select_bullets.py events                          # Last 10 events

        $ select_bullets.py events -n 5 -r platform-engineer
    """
    events = get_recent_events(n=n, role_profile_id=profile, events_file=events_file)

    if not events:
        typer.secho("No events found", fg=typer.colors.YELLOW, err=True)
        raise typer.Exit(code=1)

    for event in events:
        if compact:
            typer.echo(json.dumps(event))
            continue
        typer.secho(f"{format_timestamp(event.get('timestamp'))}  {event.get('event_type')}", bold=True)
        typer.echo(f"  Profile: {event.get('role_profile_id')} (source: {event.get('source')})")
        if "bullet_count" in event:
            typer.echo(f"  Bullets: {event['bullet_count']}  {event.get('bullets_by_company', {})}")


if __name__ == "__main__":
    app()
