"""Periodic scout daemon: runs the pipeline on a fixed interval.

Usage:
    python -m beachscout daemon                 # every ops.run_interval_minutes
    python -m beachscout daemon --interval 900  # every 15 minutes
    python -m beachscout daemon --stop
    python -m beachscout daemon --status
"""

import json
import logging
import os
import signal
import sys
import time
from datetime import UTC, datetime
from pathlib import Path

from beachscout.config.schema import ScoutConfig
from beachscout.pipeline.scout_pipeline import DEFAULT_DB, ScoutPipeline

logger = logging.getLogger(__name__)

PID_DIR = Path("data")
PID_FILE = PID_DIR / "daemon.pid"
STATE_FILE = PID_DIR / "daemon_state.json"
LOG_DIR = Path("logs")
MAX_LOG_FILES = 100


class ScoutDaemon:
    """Runs the scout pipeline in a loop until SIGTERM/SIGINT."""

    def __init__(
        self,
        config: ScoutConfig,
        db_path: str = DEFAULT_DB,
        interval: int | None = None,
    ):
        self.config = config
        self.db_path = db_path
        self.interval = interval or config.ops.run_interval_minutes * 60
        self._running = False
        self._total_runs = 0
        self._total_successes = 0
        self._total_failures = 0
        self._started_at: str | None = None

    def start(self) -> None:
        self._check_not_already_running()
        self._write_pid()
        self._setup_signals()
        self._running = True
        self._started_at = datetime.now(UTC).isoformat()

        logger.info("Daemon started, interval=%ds pid=%d", self.interval, os.getpid())
        print(f"Scout daemon started (pid {os.getpid()}, every {self.interval}s)")
        print("   Stop: python -m beachscout daemon --stop")

        try:
            self._loop()
        except KeyboardInterrupt:
            logger.info("Daemon interrupted by keyboard")
        finally:
            self._cleanup()

    def _loop(self) -> None:
        while self._running:
            run_start = time.monotonic()
            self._run_once()
            self._save_state()

            # sleep in 1s steps so a signal stops us promptly
            sleep_until = run_start + self.interval
            while self._running and time.monotonic() < sleep_until:
                time.sleep(1)

    def _run_once(self) -> bool:
        """Execute a single pipeline run with its own log file. True on success."""
        self._total_runs += 1
        timestamp = datetime.now(UTC).strftime("%Y%m%dT%H%M%SZ")

        LOG_DIR.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(LOG_DIR / f"run_{timestamp}.log")
        file_handler.setLevel(logging.INFO)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        root_logger = logging.getLogger()
        root_logger.addHandler(file_handler)

        try:
            logger.info("=== Run #%d starting ===", self._total_runs)
            summary = ScoutPipeline(self.config, self.db_path).run()
            if summary.errors:
                self._total_failures += 1
                logger.error("Run #%d failed: %s", self._total_runs, summary.errors)
                return False
            self._total_successes += 1
            logger.info(
                "Run #%d OK: %d ok, %d partial, %d failed locations",
                self._total_runs,
                summary.locations_succeeded,
                summary.locations_partial,
                summary.locations_failed,
            )
            return True
        except Exception:
            self._total_failures += 1
            logger.exception("Run #%d crashed", self._total_runs)
            return False
        finally:
            root_logger.removeHandler(file_handler)
            file_handler.close()
            self._rotate_logs()

    def _rotate_logs(self) -> None:
        if not LOG_DIR.exists():
            return
        logs = sorted(LOG_DIR.glob("run_*.log"))
        for old in logs[: max(0, len(logs) - MAX_LOG_FILES)]:
            old.unlink(missing_ok=True)

    def _setup_signals(self) -> None:
        def _stop(signum: int, frame: object) -> None:
            sig_name = signal.Signals(signum).name
            logger.info("Received %s, finishing current run", sig_name)
            self._running = False

        signal.signal(signal.SIGTERM, _stop)
        signal.signal(signal.SIGINT, _stop)

    def _check_not_already_running(self) -> None:
        pid = _read_pid()
        if pid is None:
            PID_FILE.unlink(missing_ok=True)
            return
        try:
            os.kill(pid, 0)
        except ProcessLookupError:
            PID_FILE.unlink(missing_ok=True)
            return
        except PermissionError:
            pass
        print(f"Daemon already running (pid {pid}). Stop it first:")
        print("   python -m beachscout daemon --stop")
        sys.exit(1)

    def _write_pid(self) -> None:
        PID_DIR.mkdir(parents=True, exist_ok=True)
        PID_FILE.write_text(str(os.getpid()))

    def _save_state(self) -> None:
        state = {
            "pid": os.getpid(),
            "started_at": self._started_at,
            "interval": self.interval,
            "total_runs": self._total_runs,
            "total_successes": self._total_successes,
            "total_failures": self._total_failures,
            "last_update": datetime.now(UTC).isoformat(),
        }
        PID_DIR.mkdir(parents=True, exist_ok=True)
        STATE_FILE.write_text(json.dumps(state, indent=2))

    def _cleanup(self) -> None:
        PID_FILE.unlink(missing_ok=True)
        self._save_state()
        logger.info(
            "Daemon stopped after %d runs (%d ok, %d failed)",
            self._total_runs, self._total_successes, self._total_failures,
        )


def _read_pid() -> int | None:
    if not PID_FILE.exists():
        return None
    try:
        return int(PID_FILE.read_text().strip())
    except ValueError:
        return None


def stop_daemon() -> int:
    """Send SIGTERM to a running daemon and wait for it to exit."""
    if not PID_FILE.exists():
        print("No daemon running (no PID file found)")
        return 1

    pid = _read_pid()
    if pid is None:
        print("Corrupt PID file, removing")
        PID_FILE.unlink(missing_ok=True)
        return 1

    try:
        os.kill(pid, signal.SIGTERM)
    except ProcessLookupError:
        print(f"Daemon not running (stale pid {pid}), cleaning up")
        PID_FILE.unlink(missing_ok=True)
        return 0

    print(f"Stopping daemon (pid {pid})...")
    for _ in range(60):
        time.sleep(1)
        try:
            os.kill(pid, 0)
        except ProcessLookupError:
            print("Daemon stopped")
            PID_FILE.unlink(missing_ok=True)
            return 0

    print("Daemon didn't stop in 60s, sending SIGKILL")
    os.kill(pid, signal.SIGKILL)
    PID_FILE.unlink(missing_ok=True)
    return 0


def daemon_status() -> int:
    """Print daemon stats from the state file."""
    if not STATE_FILE.exists():
        print("No daemon state found")
        return 1

    state = json.loads(STATE_FILE.read_text())
    pid = state.get("pid")
    running = False
    try:
        os.kill(int(pid), 0)
        running = True
    except PermissionError:
        running = True  # alive, owned by another user
    except (ProcessLookupError, ValueError, TypeError):
        pass

    print(f"Daemon {'running' if running else 'stopped'}")
    print(f"  PID: {pid}")
    print(f"  Interval: {state.get('interval', '?')}s")
    print(f"  Started: {state.get('started_at', '?')}")
    print(f"  Total runs: {state.get('total_runs', 0)}")
    print(f"  Successes: {state.get('total_successes', 0)}")
    print(f"  Failures: {state.get('total_failures', 0)}")
    print(f"  Last update: {state.get('last_update', '?')}")
    return 0
