"""CLI entry point for the beach scout."""

import argparse
import logging

from beachscout.config.loader import get_config_value, load_config
from beachscout.daemon import ScoutDaemon, daemon_status, stop_daemon
from beachscout.models.location import Location
from beachscout.pipeline.scout_pipeline import DEFAULT_DB, ScoutPipeline
from beachscout.reporting.formatters import format_summary_json, format_summary_text
from beachscout.reporting.health_checker import HealthChecker
from beachscout.storage import location_repo
from beachscout.storage.database import open_store

DEFAULT_CONFIG = "ops/configs/default.yaml"


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="beachscout",
        description="Coastal location forecast scoring",
    )
    parser.add_argument(
        "--config", default=DEFAULT_CONFIG, help="Config YAML path"
    )
    parser.add_argument("--db", default=DEFAULT_DB, help="SQLite DB path")

    sub = parser.add_subparsers(dest="command")

    # run
    run_p = sub.add_parser("run", help="Scout all active locations once")
    run_p.add_argument("--json", action="store_true", help="Print JSON summary")

    # daemon
    daemon_p = sub.add_parser("daemon", help="Scout on a fixed interval")
    daemon_p.add_argument("--interval", type=int, help="Seconds between runs")
    daemon_p.add_argument("--stop", action="store_true", help="Stop the daemon")
    daemon_p.add_argument("--status", action="store_true", help="Show daemon state")

    # locations seed / list
    loc_p = sub.add_parser("locations", help="Location operations")
    loc_sub = loc_p.add_subparsers(dest="locations_command")
    loc_sub.add_parser("seed", help="Upsert configured locations into the DB")
    loc_sub.add_parser("list", help="List stored locations")

    # config show
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    show_p = config_sub.add_parser("show", help="Display current config")
    show_p.add_argument("key", nargs="?", help="Dotted key, e.g. scoring.max_wind_mph")

    # health
    sub.add_parser("health", help="Run health checks")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "daemon" and args.stop:
        return stop_daemon()
    if args.command == "daemon" and args.status:
        return daemon_status()

    config = load_config(args.config)

    if args.command == "run":
        return _cmd_run(config, args)
    elif args.command == "daemon":
        ScoutDaemon(config, args.db, args.interval).start()
        return 0
    elif args.command == "locations":
        return _cmd_locations(config, args)
    elif args.command == "config":
        return _cmd_config(config, args)
    elif args.command == "health":
        return _cmd_health(config, args)
    else:
        parser.print_help()
        return 1


def _cmd_run(config, args) -> int:
    summary = ScoutPipeline(config, args.db).run()
    if args.json:
        print(format_summary_json(summary))
    else:
        print(format_summary_text(summary))
    print("Mission complete.")
    return 0 if not summary.errors else 1


def _cmd_locations(config, args) -> int:
    conn = open_store(args.db)
    try:
        if args.locations_command == "seed":
            count = location_repo.upsert_locations(
                conn, [Location(**loc.model_dump()) for loc in config.locations]
            )
            print(f"Seeded {count} locations")
            return 0
        elif args.locations_command == "list":
            locations = location_repo.list_locations(conn)
            print(f"Locations: {len(locations)}")
            for loc in locations:
                flag = "active" if loc.is_active else "inactive"
                print(
                    f"  {loc.location_id} ({loc.display_name}) "
                    f"{loc.latitude:.4f},{loc.longitude:.4f} "
                    f"station={loc.noaa_station_id} {flag}"
                )
            return 0
        else:
            print("Use: locations seed | locations list")
            return 1
    finally:
        conn.close()


def _cmd_config(config, args) -> int:
    if args.config_command != "show":
        print("Use: config show [key]")
        return 1
    if args.key is None:
        print(config.model_dump_json(indent=2))
        return 0
    try:
        value = get_config_value(config, args.key)
    except (KeyError, IndexError, ValueError) as e:
        print(f"Error: {e}")
        return 1
    print(f"{args.key} = {value}")
    return 0


def _cmd_health(config, args) -> int:
    conn = open_store(args.db)
    try:
        status = HealthChecker(conn, config.providers).check()
    finally:
        conn.close()

    print(f"DB: {'OK' if status.db_connected else 'FAIL'}")
    print(f"Weather API: {'OK' if status.weather_api_reachable else 'FAIL'}")
    print(f"Tides API: {'OK' if status.tides_api_reachable else 'FAIL'}")
    print(f"Active locations: {status.active_locations}")
    if status.last_run_age_minutes is not None:
        print(
            f"Last run: {status.last_run_age_minutes:.0f} min ago "
            f"({status.last_run_status})"
        )
    else:
        print("Last run: never")
    return 0 if status.db_connected else 1
