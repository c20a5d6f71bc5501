"""Run summarizer: aggregates per-location outcomes into a RunSummary."""

from beachscout.models.reporting import LocationOutcome, LocationStatus, RunSummary


class RunSummarizer:
    def __init__(self, run_id: str, config_hash: str = ""):
        self.summary = RunSummary(run_id=run_id, config_hash=config_hash)

    def record_locations(self, count: int) -> None:
        self.summary.locations_scanned = count

    def record_outcome(self, outcome: LocationOutcome) -> None:
        self.summary.outcomes.append(outcome)
        self.summary.hourly_rows_written += outcome.hourly_rows
        self.summary.daily_rows_written += outcome.daily_rows
        if outcome.status == LocationStatus.SUCCESS:
            self.summary.locations_succeeded += 1
        elif outcome.status == LocationStatus.PARTIAL:
            self.summary.locations_partial += 1
        else:
            self.summary.locations_failed += 1

    def record_duration(self, seconds: float) -> None:
        self.summary.duration_seconds = seconds

    def record_error(self, error: str) -> None:
        self.summary.errors.append(error)

    def finalize(self) -> RunSummary:
        return self.summary
