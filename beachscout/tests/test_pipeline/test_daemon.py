"""Tests for the scout daemon."""

import json
import os
from unittest.mock import MagicMock, patch

import pytest

from beachscout.config.schema import OpsConfig, ScoutConfig
from beachscout.daemon import ScoutDaemon, daemon_status, stop_daemon


@pytest.fixture
def tmp_data(tmp_path, monkeypatch):
    """Redirect PID/state files to temp directory."""
    pid_file = tmp_path / "daemon.pid"
    state_file = tmp_path / "daemon_state.json"
    monkeypatch.setattr("beachscout.daemon.PID_FILE", pid_file)
    monkeypatch.setattr("beachscout.daemon.PID_DIR", tmp_path)
    monkeypatch.setattr("beachscout.daemon.STATE_FILE", state_file)
    monkeypatch.setattr("beachscout.daemon.LOG_DIR", tmp_path / "logs")
    return {"pid": pid_file, "state": state_file, "dir": tmp_path}


@pytest.fixture
def config() -> ScoutConfig:
    return ScoutConfig(ops=OpsConfig(run_interval_minutes=30))


class TestScoutDaemon:
    def test_interval_from_config(self, config):
        assert ScoutDaemon(config).interval == 1800

    def test_interval_override(self, config):
        assert ScoutDaemon(config, interval=15).interval == 15

    def test_start_writes_state(self, tmp_data, config):
        daemon = ScoutDaemon(config, interval=1)
        with patch.object(daemon, "_loop"), patch.object(daemon, "_setup_signals"):
            daemon.start()

        assert tmp_data["state"].exists()
        assert not tmp_data["pid"].exists()

    def test_prevents_duplicate_start(self, tmp_data, config):
        tmp_data["pid"].write_text(str(os.getpid()))
        with pytest.raises(SystemExit):
            ScoutDaemon(config)._check_not_already_running()

    def test_cleans_stale_pid(self, tmp_data, config):
        tmp_data["pid"].write_text("999999999")
        ScoutDaemon(config)._check_not_already_running()
        assert not tmp_data["pid"].exists()

    def test_saves_state(self, tmp_data, config):
        daemon = ScoutDaemon(config, interval=60)
        daemon._started_at = "2026-10-16T15:00:00+00:00"
        daemon._total_runs = 5
        daemon._total_successes = 4
        daemon._total_failures = 1
        daemon._save_state()

        state = json.loads(tmp_data["state"].read_text())
        assert state["total_runs"] == 5
        assert state["total_successes"] == 4
        assert state["total_failures"] == 1
        assert state["interval"] == 60

    def test_run_once_success(self, tmp_data, config):
        daemon = ScoutDaemon(config, db_path=str(tmp_data["dir"] / "t.db"))
        summary = MagicMock(errors=[], locations_succeeded=4,
                            locations_partial=0, locations_failed=0)

        with patch("beachscout.daemon.ScoutPipeline") as MockPipeline:
            MockPipeline.return_value.run.return_value = summary
            assert daemon._run_once() is True

        assert daemon._total_successes == 1
        assert daemon._total_failures == 0
        assert len(list((tmp_data["dir"] / "logs").glob("run_*.log"))) == 1

    def test_run_once_failure(self, tmp_data, config):
        daemon = ScoutDaemon(config)
        with patch("beachscout.daemon.ScoutPipeline") as MockPipeline:
            MockPipeline.return_value.run.return_value = MagicMock(errors=["boom"])
            assert daemon._run_once() is False
        assert daemon._total_failures == 1

    def test_run_once_crash(self, tmp_data, config):
        daemon = ScoutDaemon(config)
        with patch("beachscout.daemon.ScoutPipeline") as MockPipeline:
            MockPipeline.return_value.run.side_effect = RuntimeError("boom")
            assert daemon._run_once() is False
        assert daemon._total_runs == 1
        assert daemon._total_failures == 1

    def test_log_rotation(self, tmp_data, config):
        log_dir = tmp_data["dir"] / "logs"
        log_dir.mkdir()
        for i in range(110):
            (log_dir / f"run_{i:04d}.log").write_text(f"log {i}")

        ScoutDaemon(config)._rotate_logs()

        remaining = sorted(p.name for p in log_dir.glob("run_*.log"))
        assert len(remaining) == 100
        assert remaining[0] == "run_0010.log"

    def test_cleanup_removes_pid(self, tmp_data, config):
        daemon = ScoutDaemon(config)
        daemon._write_pid()
        assert tmp_data["pid"].exists()
        daemon._cleanup()
        assert not tmp_data["pid"].exists()


class TestDaemonControl:
    def test_stop_no_daemon(self, tmp_data):
        assert stop_daemon() == 1

    def test_stop_corrupt_pid(self, tmp_data):
        tmp_data["pid"].write_text("not-a-pid")
        assert stop_daemon() == 1
        assert not tmp_data["pid"].exists()

    def test_stop_stale_pid(self, tmp_data):
        tmp_data["pid"].write_text("999999999")
        assert stop_daemon() == 0
        assert not tmp_data["pid"].exists()

    def test_status_no_state(self, tmp_data):
        assert daemon_status() == 1

    def test_status_with_state(self, tmp_data, capsys):
        state = {
            "pid": 999999999,
            "started_at": "2026-10-16T15:00:00+00:00",
            "interval": 3600,
            "total_runs": 12,
            "total_successes": 11,
            "total_failures": 1,
            "last_update": "2026-10-17T02:00:00+00:00",
        }
        tmp_data["state"].write_text(json.dumps(state))

        assert daemon_status() == 0
        out = capsys.readouterr().out
        assert "Daemon stopped" in out
        assert "Total runs: 12" in out
        assert "Interval: 3600s" in out

    def test_status_running(self, tmp_data, capsys):
        tmp_data["state"].write_text(json.dumps({"pid": os.getpid()}))
        daemon_status()
        assert "Daemon running" in capsys.readouterr().out
