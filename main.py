"""Main entry point for the pixel garden.

This module provides command-line options to run the garden:
- Window mode (default): interactive pygame window
- Headless mode: no display, fixed-size frames, stats only
"""

import argparse
import logging
import sys

from garden.config.display import REFERENCE_FRAME_MS
from garden.logging_config import configure_logging

logger = logging.getLogger(__name__)


def run_window(seed=None):
    """Open the interactive garden window."""
    try:
        import garden_app
    except ImportError as e:
        logger.error("Error: Required dependencies not installed: %s", e)
        logger.error("Install with: pip install -e .")
        sys.exit(1)

    garden_app.main(seed=seed)


def run_headless(max_frames, frame_ms, stats_interval, seed=None, export_stats=None, demo=True):
    """Run the garden in headless mode (no visualization).

    Args:
        max_frames: Number of update steps to simulate
        frame_ms: Simulated milliseconds per step
        stats_interval: Log stats every N frames
        seed: Optional random seed for deterministic behavior
        export_stats: Optional filename to export JSON stats
        demo: Plant and tend one seed of each species
    """
    from garden.simulation import GardenEngine

    engine = GardenEngine(seed=seed)
    # Note: run_headless() calls setup() internally
    return engine.run_headless(
        max_frames=max_frames,
        frame_ms=frame_ms,
        stats_interval=stats_interval,
        export_json=export_stats,
        demo=demo,
    )


def build_parser():
    parser = argparse.ArgumentParser(
        description="Pixel Garden - plant, water and watch the weather",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Open the garden window (default)
  python main.py

  # Run headless for a simulated ten minutes
  python main.py --headless --max-frames 36000 --stats-interval 3600

  # Reproducible run with exported stats
  python main.py --headless --seed 42 --export-stats garden_run.json
        """,
    )

    parser.add_argument(
        "--headless", action="store_true", help="Run in headless mode (no window, stats only)"
    )

    parser.add_argument(
        "--max-frames",
        type=int,
        default=10000,
        help="Maximum frames to simulate in headless mode (default: 10000)",
    )

    parser.add_argument(
        "--frame-ms",
        type=float,
        default=REFERENCE_FRAME_MS,
        help="Simulated milliseconds per headless frame (default: one 60fps frame)",
    )

    parser.add_argument(
        "--stats-interval",
        type=int,
        default=600,
        help="Log stats every N frames in headless mode, 0 to disable (default: 600)",
    )

    parser.add_argument(
        "--seed", type=int, default=None, help="Random seed for deterministic behavior (optional)"
    )

    parser.add_argument(
        "--no-demo",
        action="store_true",
        help="Headless mode: start with an empty garden instead of planting one seed per species",
    )

    parser.add_argument(
        "--export-stats",
        type=str,
        default=None,
        metavar="FILENAME",
        help="Export summary stats to a JSON file (e.g., garden_run.json)",
    )

    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Log level (default: GARDEN_LOG_LEVEL or INFO)",
    )
    return parser


def main(argv=None):
    """Parse command-line arguments and run the appropriate mode."""
    args = build_parser().parse_args(argv)
    configure_logging(level=args.log_level, extra_loggers=("rendering", "garden_app"))

    if args.max_frames < 0:
        logger.error("--max-frames must be non-negative")
        return 2
    if args.frame_ms <= 0:
        logger.error("--frame-ms must be positive")
        return 2

    if args.headless:
        logger.info("Starting headless garden...")
        logger.info(
            "Configuration: %d frames of %.2fms, stats every %d frames",
            args.max_frames,
            args.frame_ms,
            args.stats_interval,
        )
        if args.export_stats:
            logger.info("Stats will be exported to: %s", args.export_stats)
        run_headless(
            args.max_frames,
            args.frame_ms,
            args.stats_interval,
            seed=args.seed,
            export_stats=args.export_stats,
            demo=not args.no_demo,
        )
    else:
        run_window(seed=args.seed)
    return 0


if __name__ == "__main__":
    sys.exit(main())
