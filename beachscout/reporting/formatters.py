"""Output formatters for run summaries."""

import json
from dataclasses import asdict

from beachscout.models.reporting import LocationStatus, RunSummary

_STATUS_ICONS = {
    LocationStatus.SUCCESS: "OK",
    LocationStatus.PARTIAL: "PARTIAL",
    LocationStatus.FAILED: "FAILED",
}


def format_summary_text(s: RunSummary) -> str:
    """Plain text summary for logging and the CLI."""
    lines = [
        f"=== Run Complete | Run {s.run_id[:8]} ===",
        f"Locations: {s.locations_scanned} scanned, {s.locations_succeeded} ok, "
        f"{s.locations_partial} partial, {s.locations_failed} failed",
        f"Rows: {s.hourly_rows_written} hourly, {s.daily_rows_written} daily",
    ]
    for o in s.outcomes:
        line = f"  [{_STATUS_ICONS[o.status]}] {o.location_id}"
        if o.error:
            line += f": {o.error}"
        elif o.warnings:
            line += f": {'; '.join(o.warnings)}"
        lines.append(line)
    if s.errors:
        lines.append(f"Errors: {len(s.errors)}")
        lines.extend(f"  {e}" for e in s.errors)
    lines.append(f"Duration: {s.duration_seconds:.1f}s")
    return "\n".join(lines)


def format_summary_json(s: RunSummary) -> str:
    """JSON summary for programmatic consumption."""
    return json.dumps(asdict(s), indent=2)
