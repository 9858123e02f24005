"""
CLI entry point for the choreolib-inspect command.

Loads a trajectory (or one of its splits) from a deploy directory and prints a
summary plus the interpolated state at the requested times.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

from choreolib.cache import TrajectoryCache
from choreolib.config import LOG_LEVEL_DEFAULT, TRACE
from choreolib.loader import ChoreoLoader
from choreolib.utils.errors import ChoreoConfigError

logger = logging.getLogger("choreolib.cli.inspect")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Inspect a Choreo trajectory file")
    parser.add_argument("directory", help="Deploy directory holding the .chor and .traj files")
    parser.add_argument("name", help="Trajectory name (the .traj extension is optional)")
    parser.add_argument("--split", type=int, help="Only inspect this split of the trajectory")
    parser.add_argument("--at", type=float, action="append", default=[], metavar="SECONDS",
                        help="Print the sampled state at this time (repeatable)")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="Increase verbosity; -v=INFO, -vv=DEBUG, -vvv=TRACE")
    parser.add_argument("-q", "--quiet", action="store_true",
                        help="Enable quiet logging (WARNING level)")
    parser.add_argument("--log-level", choices=["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
                        help="Set specific log level")
    return parser


def _log_level(args: argparse.Namespace) -> int:
    if args.log_level:
        return TRACE if args.log_level == "TRACE" else getattr(logging, args.log_level)
    if args.verbose >= 3:
        return TRACE
    if args.verbose >= 2:
        return logging.DEBUG
    if args.verbose == 1:
        return logging.INFO
    if args.quiet:
        return logging.WARNING
    return getattr(logging, LOG_LEVEL_DEFAULT)


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=_log_level(args),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    cache = TrajectoryCache(ChoreoLoader(args.directory))
    try:
        trajectory = cache.load(args.name, args.split)
    except ChoreoConfigError as e:
        logger.error(f"{e}")
        return 1
    if trajectory is None:
        logger.error(f"Trajectory {args.name} could not be loaded")
        return 1

    print(f"name:       {trajectory.name}")
    print(f"samples:    {len(trajectory)}")
    print(f"total time: {trajectory.total_time:.3f} s")
    print(f"splits:     {list(trajectory.splits)}")
    event_names = sorted({e.event for e in trajectory.events})
    print(f"events:     {', '.join(event_names) if event_names else '-'}")
    for t in args.at:
        sample = trajectory.sample_at(t)
        if sample is None:
            print(f"t={t:.3f}: <empty trajectory>")
            continue
        pose = sample.pose
        print(f"t={t:.3f}: x={pose.x:.4f} y={pose.y:.4f} heading={pose.heading:.4f}")
    return 0


def main_entry():
    """Entry point for the choreolib-inspect command."""
    sys.exit(main())


if __name__ == "__main__":
    main_entry()
