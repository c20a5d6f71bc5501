"""Repository for pipeline run tracking."""

import sqlite3


def create_run(
    conn: sqlite3.Connection, run_id: str, config_hash: str | None = None
) -> None:
    """Record the start of a pipeline run."""
    conn.execute(
        "INSERT INTO runs (run_id, config_hash) VALUES (?, ?)",
        (run_id, config_hash),
    )
    conn.commit()


def complete_run(
    conn: sqlite3.Connection,
    run_id: str,
    status: str,
    summary_json: str | None = None,
    error_message: str | None = None,
    **metrics: int | float | None,
) -> None:
    """Record run completion with metrics."""
    sets = ["completed_at = CURRENT_TIMESTAMP", "status = ?"]
    params: list = [status]

    if summary_json is not None:
        sets.append("summary_json = ?")
        params.append(summary_json)
    if error_message is not None:
        sets.append("error_message = ?")
        params.append(error_message)
    for key, val in metrics.items():
        if val is not None:
            sets.append(f"{key} = ?")
            params.append(val)

    params.append(run_id)
    conn.execute(f"UPDATE runs SET {', '.join(sets)} WHERE run_id = ?", params)
    conn.commit()


def get_latest_run(conn: sqlite3.Connection) -> dict | None:
    """Get the most recent run."""
    row = conn.execute(
        "SELECT * FROM runs ORDER BY started_at DESC, id DESC LIMIT 1"
    ).fetchone()
    if row is None:
        return None
    return dict(row)


def get_run(conn: sqlite3.Connection, run_id: str) -> dict | None:
    """Get a specific run by ID."""
    row = conn.execute(
        "SELECT * FROM runs WHERE run_id = ?", (run_id,)
    ).fetchone()
    if row is None:
        return None
    return dict(row)
