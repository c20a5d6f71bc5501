"""Result of a write against the store."""

from dataclasses import dataclass


@dataclass(frozen=True)
class WriteResult:
    table: str
    ok: bool
    rows: int = 0
    error: str | None = None
