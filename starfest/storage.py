"""
Persistence Gateway

Saves and restores the two durable documents:
- matches.json: append-only match log (list of match records)
- stats.json:   event id -> event statistics

Both documents are written as a pair. Each is fully written to a temporary
file first and the files are only moved into place once both temporary
files exist, so a failed save never leaves a half-written document behind.
"""

import json
import os
from pathlib import Path

from starfest.config import DATA_FOLDER, MATCH_LOG_FILENAME, STATS_FILENAME
from starfest.errors import PersistenceError
from starfest.stats.models import EventStats
from starfest.utils import setup_logging, write_temp_json

# --- Module Logger ---
logger = setup_logging(__name__)


class PersistenceGateway:
    """JSON-file persistence for the match log and statistics."""

    def __init__(self, data_folder: Path | None = None):
        self.data_folder = Path(data_folder) if data_folder is not None else DATA_FOLDER
        self.match_log_path = self.data_folder / MATCH_LOG_FILENAME
        self.stats_path = self.data_folder / STATS_FILENAME

    def save(self, match_log: list[dict], all_event_stats: dict) -> None:
        """
        Persist the match log and all event stats together.

        Args:
            match_log: Full list of match records
            all_event_stats: Mapping of event id -> EventStats (or its dict form)

        Raises:
            PersistenceError: If either document could not be written. Neither
                              document should then be assumed durable.
        """
        stats_doc = {
            event_id: stats.to_dict() if isinstance(stats, EventStats) else stats
            for event_id, stats in all_event_stats.items()
        }

        temp_files: list[Path] = []
        try:
            log_tmp = write_temp_json(list(match_log), self.data_folder)
            temp_files.append(log_tmp)
            stats_tmp = write_temp_json(stats_doc, self.data_folder)
            temp_files.append(stats_tmp)

            os.replace(log_tmp, self.match_log_path)
            temp_files.remove(log_tmp)
            os.replace(stats_tmp, self.stats_path)
            temp_files.remove(stats_tmp)
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Failed to persist state to {self.data_folder}: {e}. Durability is at risk.")
            raise PersistenceError(f"Could not save state to {self.data_folder}: {e}") from e
        finally:
            for tmp_path in temp_files:
                tmp_path.unlink(missing_ok=True)

        logger.debug(f"Saved {len(match_log)} match records and {len(stats_doc)} event stats")

    def _load(self, path: Path, default):
        if not path.exists():
            return default
        try:
            with open(path, encoding="utf-8") as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError, UnicodeDecodeError) as e:
            raise PersistenceError(f"Could not read {path}: {e}") from e

    def restore(self) -> tuple[list[dict], dict[str, EventStats]]:
        """
        Load the persisted match log and event stats.

        Returns:
            (match_log, all_event_stats); each is empty when its file is absent

        Raises:
            PersistenceError: If a file exists but cannot be parsed
        """
        match_log = self._load(self.match_log_path, [])
        if not isinstance(match_log, list):
            raise PersistenceError(f"{self.match_log_path} must contain a list of match records")

        raw_stats = self._load(self.stats_path, {})
        if not isinstance(raw_stats, dict):
            raise PersistenceError(f"{self.stats_path} must contain an object keyed by event id")

        try:
            all_event_stats = {
                str(event_id): EventStats.from_dict(stats) for event_id, stats in raw_stats.items()
            }
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise PersistenceError(f"Malformed statistics in {self.stats_path}: {e}") from e

        logger.info(f"Restored {len(match_log)} match records and stats for {len(all_event_stats)} events")
        return match_log, all_event_stats
