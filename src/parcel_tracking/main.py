# main.py
# Entry point: tracks one parcel from the command line until it arrives.
#
# Usage: parcel-tracker BLR555 --tick 1
# The marker moves one waypoint per tick; a status line is printed on every move.

import argparse
import asyncio
import json
import logging
import sys
from typing import List, Optional

from .models import ProgressState
from .resolver import NotFoundError
from .route_registry import known_ids
from .track_config import AVERAGE_SPEED_KMH, LOOKUP_DELAY_S, TICK_INTERVAL_S, TrackConfig
from .tracker import ParcelTracker


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="parcel-tracker",
        description="Simulate live tracking of a parcel along its route.",
    )
    parser.add_argument("tracking_id", help=f"Tracking ID, e.g. {', '.join(known_ids())}")
    parser.add_argument("--tick", type=float, default=TICK_INTERVAL_S,
                        help="Seconds between marker moves (default: %(default)s)")
    parser.add_argument("--speed", type=float, default=AVERAGE_SPEED_KMH,
                        help="Average courier speed in km/h used for the ETA (default: %(default)s)")
    parser.add_argument("--delay", type=float, default=LOOKUP_DELAY_S,
                        help="Simulated lookup latency in seconds (default: %(default)s)")
    parser.add_argument("--no-follow", action="store_true", help="Do not pan the map to the marker")
    parser.add_argument("--json", action="store_true", help="Print one JSON object per update")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def _print_summary(tracker: ParcelTracker, as_json: bool) -> None:
    summary = tracker.summary()
    if summary is None:
        return
    if as_json:
        print(json.dumps(summary, ensure_ascii=False))
        return
    print(
        f"  [{summary['waypoint']}] {summary['status']} · {summary['route']} · "
        f"{summary['progress_pct']}% · ETA {summary['eta']}"
    )


async def run(tracking_id: str, config: TrackConfig, as_json: bool = False) -> int:
    tracker = ParcelTracker(config)
    arrived = asyncio.Event()

    def on_progress(progress: Optional[ProgressState]) -> None:
        if progress is None:
            return
        _print_summary(tracker, as_json)
        if progress.at_destination:
            arrived.set()

    tracker.simulator.subscribe(on_progress)

    try:
        route = await tracker.track(tracking_id)
    except (NotFoundError, ValueError) as e:
        print(f"[Tracker] {e}", file=sys.stderr)
        print(f"[Tracker] Try {', '.join(known_ids())}", file=sys.stderr)
        return 1

    if not as_json:
        print(f"[Tracker] {route.tracking_id} via {route.carrier}, last updated {route.last_updated:%Y-%m-%d %H:%M:%S %Z}")
        print(f"[Tracker] Marker advances every {config.tick_interval_s:g}s at ~{config.average_speed_kmh:g} km/h.")

    try:
        await arrived.wait()
    finally:
        tracker.clear()

    if not as_json:
        print("[Tracker] Parcel reached its destination.")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    # ------------------------------------------------------------------
    # Logging setup: configure once here, all modules inherit
    # ------------------------------------------------------------------
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    try:
        config = TrackConfig(
            tick_interval_s=args.tick,
            lookup_delay_s=args.delay,
            average_speed_kmh=args.speed,
            follow=not args.no_follow,
        )
    except ValueError as e:
        print(f"[Tracker] Invalid option: {e}", file=sys.stderr)
        return 2

    try:
        return asyncio.run(run(args.tracking_id, config, as_json=args.json))
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    sys.exit(main())
