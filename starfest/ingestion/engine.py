"""
Match Ingestion Engine

Folds one reported match into the statistics of the active event.

Usage:
    engine = MatchIngestionEngine(catalog.active_event(), store, gateway)
    snapshot = engine.ingest(payload)

Steps (3-5 run under the store lock):
    1. Reject when there is no active event
    2. Validate the whole payload
    3. Append the match record to the log
    4. Apply team-mode scoring and per-player stats
    5. Save match log and stats together
"""

import copy
from datetime import datetime, timezone
from typing import Optional

from starfest.errors import NoActiveEventError
from starfest.events.catalog import Event
from starfest.ingestion.payload import parse_match_payload
from starfest.stats.store import StatsStore
from starfest.storage import PersistenceGateway
from starfest.utils import setup_logging

# --- Module Logger ---
logger = setup_logging(__name__)


def build_match_record(raw_payload: dict, event_id: str, now: datetime | None = None) -> dict:
    """Copy of the reported payload tagged with its event and receive time."""
    now = now or datetime.now(timezone.utc)
    record = copy.deepcopy(raw_payload)
    record['eventId'] = event_id
    record['timestamp'] = now.isoformat()
    return record


class MatchIngestionEngine:
    """Single writer for the statistics store."""

    def __init__(
        self,
        active_event: Optional[Event],
        store: StatsStore,
        gateway: Optional[PersistenceGateway] = None,
    ):
        self.active_event = active_event
        self.store = store
        self.gateway = gateway

        if active_event is not None:
            store.initialize(active_event)

    def ingest(self, raw_payload: dict) -> dict:
        """
        Ingest one match report.

        Args:
            raw_payload: Decoded JSON match report

        Returns:
            Dictionary with:
                - eventInfo: the active event
                - stats: snapshot of the active event's stats after this match

        Raises:
            NoActiveEventError: If no event is active
            ValidationError: If the payload is malformed (nothing is changed)
            PersistenceError: If saving failed (in-memory stats are updated)
        """
        event = self.active_event
        if event is None:
            raise NoActiveEventError("No active event to report matches for")

        payload = parse_match_payload(raw_payload)

        with self.store.lock:
            event_stats = self.store.get(event.id)
            if event_stats is None:
                event_stats = self.store.initialize(event)

            self.store.append_match(build_match_record(raw_payload, event.id))
            skipped = self.store.apply_match(event_stats, payload)

            for team_id in skipped:
                logger.warning(f"Ignoring unknown team '{team_id}' for event {event.id}")

            logger.info(
                f"Ingested match #{len(self.store.match_log)} for {event.id}: "
                f"{len(payload.teams)} teams, {len(payload.players)} players"
                f"{' (team mode)' if payload.is_team_mode else ''}"
            )

            if self.gateway is not None:
                self.gateway.save(self.store.match_log, self.store.all_event_stats)

            return {
                'eventInfo': event.to_dict(),
                'stats': event_stats.to_dict(),
            }

    def flush(self) -> None:
        """Save the current state; used on shutdown."""
        if self.gateway is None:
            return
        with self.store.lock:
            self.gateway.save(self.store.match_log, self.store.all_event_stats)
