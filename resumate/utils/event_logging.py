"""
Pipeline event logging utilities.

Appends selection events to a JSON Lines log so that batch runs can be
audited after the fact (which profile, which bullets, how long it took).

For detailed within-context logging, use resumate.utils.logger instead.

Usage:
    from resumate.utils.event_logging import log_selection_event

    log_selection_event(
        role_profile_id="platform-engineer",
        role_profile_name="Platform Engineer",
        selected=selected,
        summary=summarize_selection(selected),
        config=config.to_dict(),
        duration_ms=1.7,
        source="cli",
    )
"""

import json
import os
from pathlib import Path
from typing import Dict, List, Optional

from dotenv import load_dotenv

from resumate.utils.timestamp import now_exact

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))
PIPELINE_EVENTS_FILE = Path(
    os.getenv("PIPELINE_EVENTS_FILE", str(LOGS_PATH / "selection_events.log"))
)

SELECTION_EVENT = "resume_prepared"


def log_pipeline_event(
    event_type: str,
    role_profile_id: str,
    source: str,
    events_file: Optional[Path] = None,
    **extra_fields,
) -> Dict:
    """
    Append an event to the pipeline event log.

    Args:
        event_type: Type of event (e.g., "resume_prepared")
        role_profile_id: Role profile the event relates to
        source: Event source (e.g., "cli", "batch", "manual")
        events_file: Override for the log location (defaults to PIPELINE_EVENTS_FILE)
        **extra_fields: Additional event-specific fields

    Returns:
        The event dict that was written
    """
    events_file = events_file or PIPELINE_EVENTS_FILE
    events_file.parent.mkdir(parents=True, exist_ok=True)

    event = {
        "timestamp": now_exact(),
        "event_type": event_type,
        "role_profile_id": role_profile_id,
        "source": source,
        **extra_fields,
    }

    with open(events_file, "a", encoding="utf-8") as f:
        f.write(json.dumps(event) + "\n")

    return event


def log_selection_event(
    role_profile_id: str,
    role_profile_name: str,
    selected: List,
    summary: Dict[str, Dict[str, int]],
    config: Dict,
    duration_ms: float,
    source: str,
    events_file: Optional[Path] = None,
) -> Dict:
    """
    Record a completed selection with per-company and per-tag breakdowns.

    Args:
        role_profile_id: ID of the role profile used
        role_profile_name: Display name of the role profile
        selected: ScoredBullet list returned by select_bullets()
        summary: Breakdown from summarize_selection(selected)
        config: Selection config as a plain dict
        duration_ms: Wall time of the selection
        source: Event source
        events_file: Override for the log location

    Returns:
        The event dict that was written
    """
    return log_pipeline_event(
        event_type=SELECTION_EVENT,
        role_profile_id=role_profile_id,
        source=source,
        events_file=events_file,
        role_profile_name=role_profile_name,
        bullet_ids=[item.bullet.id for item in selected],
        bullet_count=len(selected),
        bullets_by_company=dict(summary["by_company"]),
        bullets_by_tag=dict(summary["by_tag"]),
        config=config,
        selection_duration_ms=round(duration_ms, 3),
    )


def get_recent_events(
    n: int = 10,
    role_profile_id: Optional[str] = None,
    event_type: Optional[str] = None,
    events_file: Optional[Path] = None,
) -> List[Dict]:
    """
    Get the last n events from the pipeline log, optionally filtered.

    Args:
        n: Number of recent events to return (default: 10)
        role_profile_id: Filter to only events for this profile (optional)
        event_type: Filter to only events of this type (optional)
        events_file: Override for the log location

    Returns:
        List of event dicts (most recent last)
    """
    events_file = events_file or PIPELINE_EVENTS_FILE
    if not events_file.exists():
        return []

    events = []
    with open(events_file, "r", encoding="utf-8") as f:
        for line in f:
            try:
                events.append(json.loads(line.strip()))
            except json.JSONDecodeError:
                # Skip malformed lines
                continue

    if role_profile_id:
        events = [e for e in events if e.get("role_profile_id") == role_profile_id]

    if event_type:
        events = [e for e in events if e.get("event_type") == event_type]

    if n <= 0:
        return []
    return events[-n:] if len(events) > n else events
