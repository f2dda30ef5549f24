"""Garden diagnostics and reporting.

Formatting, logging and exporting of summary statistics, kept apart from
the engine that produces them.
"""

import json
import logging
import time
from typing import TYPE_CHECKING

from garden.config.display import SEPARATOR_WIDTH

if TYPE_CHECKING:
    from garden.simulation.engine import GardenEngine

logger = logging.getLogger(__name__)


def log_summary_stats(engine: "GardenEngine", start_time: float) -> None:
    """Log the current garden statistics.

    Args:
        engine: The garden engine instance
        start_time: Wall-clock time when the run started
    """
    stats = engine.get_summary_stats()
    elapsed_time = time.time() - start_time

    logger.info("-" * SEPARATOR_WIDTH)
    logger.info(
        "Frame: %d | Sim time: %.1fs | Wall time: %.1fs",
        stats["frame"],
        stats["elapsed_ms"] / 1000.0,
        elapsed_time,
    )
    logger.info("Day %d | Weather: %s | Waterings: %d", stats["day"], stats["weather"], stats["water_count"])

    stages = ", ".join(f"{stage}: {count}" for stage, count in stats["plants_by_stage"].items() if count)
    logger.info("Plants (%d): %s", stats["plants"], stages or "none")

    deaths = stats["deaths"]
    if any(deaths.values()):
        logger.info("Deaths: %s", ", ".join(f"{cause}: {count}" for cause, count in deaths.items()))

    logger.info(
        "Grass: %d | Snowflakes: %d | Snow deposits: %d",
        stats["grass"],
        stats["snowflakes"],
        stats["snow_deposits"],
    )
    logger.info("-" * SEPARATOR_WIDTH)


def export_stats_json(engine: "GardenEngine", filename: str, start_time: float) -> bool:
    """Write the summary statistics to a JSON file.

    Returns:
        True if the file was written
    """
    stats = engine.get_summary_stats()
    stats["wall_time"] = time.time() - start_time

    try:
        with open(filename, "w") as f:
            json.dump(stats, f, indent=2)
    except OSError as e:
        logger.error("Failed to export stats to %s: %s", filename, e)
        return False
    logger.info("Exported stats to %s", filename)
    return True
