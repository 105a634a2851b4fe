"""Command-line access to a registry loaded from CSV files."""

import argparse
import json
import logging
import sys
from collections.abc import Sequence

from ridedispatch.core.exceptions import NoDriverAvailableError, RegistryError
from ridedispatch.dispatch_logging import setup_logging
from ridedispatch.dispatcher import TripDispatcher
from ridedispatch.models import Driver, Passenger, Trip
from ridedispatch.settings import get_settings

logger = logging.getLogger(__name__)


def _format_passenger(passenger: Passenger) -> str:
    return f"Passenger {passenger.id}: {passenger.name} ({len(passenger.trips)} trips)"


def _format_driver(driver: Driver) -> str:
    return (
        f"Driver {driver.id}: {driver.name} [{driver.vehicle_id}] "
        f"{driver.status.value} ({len(driver.trips)} trips)"
    )


def _format_trip(trip: Trip) -> str:
    return (
        f"Trip {trip.id}: passenger {trip.passenger_id}, driver {trip.driver_id}, "
        f"started {trip.start_time.isoformat()}"
    )


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(prog="ridedispatch", description="Ride dispatch registry")
    parser.add_argument(
        "--data-dir",
        default=str(settings.data_directory),
        help=f"Directory with passengers.csv, drivers.csv, trips.csv (default: {settings.data_directory})",
    )
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        default=settings.log_format == "json",
        help="Emit logs as JSON",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("summary", help="Show entity counts")
    passenger_parser = subparsers.add_parser("passenger", help="Show one passenger")
    passenger_parser.add_argument("id", type=int)
    driver_parser = subparsers.add_parser("driver", help="Show one driver")
    driver_parser.add_argument("id", type=int)
    request_parser = subparsers.add_parser("request", help="Request a trip for a passenger")
    request_parser.add_argument("passenger_id", type=int)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(
        level=args.log_level,
        json_output=args.json_logs,
        environment=get_settings().environment,
    )

    try:
        dispatcher = TripDispatcher.from_directory(args.data_dir)

        if args.command == "summary":
            print(json.dumps(dispatcher.summary(), indent=2))
        elif args.command == "passenger":
            print(_format_passenger(dispatcher.find_passenger(args.id)))
        elif args.command == "driver":
            print(_format_driver(dispatcher.find_driver(args.id)))
        elif args.command == "request":
            print(_format_trip(dispatcher.request_trip(args.passenger_id)))
    except NoDriverAvailableError as e:
        print(f"error: {e.message}", file=sys.stderr)
        return 2
    except RegistryError as e:
        logger.debug("Command %s failed", args.command, exc_info=e)
        print(f"error: {e.message}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
