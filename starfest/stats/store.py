"""
Statistics Store

Owns the mutable, event-scoped aggregates and the match log. One StatsStore
is created at startup (restored from disk or empty) and handed to the
ingestion engine and the query surface; nothing here is a module global.

Lifecycle:
    store = StatsStore(*gateway.restore())
    event_stats = store.initialize(active_event)
    ... engine mutates under store.lock ...
"""

import threading
from typing import Optional

from starfest.events.catalog import Event
from starfest.ingestion.payload import MatchPayload
from starfest.stats.models import EventStats, TeamStats
from starfest.stats.scoring import is_top_three, is_win, points_for_rank
from starfest.utils import setup_logging

# --- Module Logger ---
logger = setup_logging(__name__)


class StatsStore:
    """All event statistics plus the append-only match log."""

    def __init__(
        self,
        match_log: Optional[list[dict]] = None,
        all_event_stats: Optional[dict[str, EventStats]] = None,
    ):
        self.match_log: list[dict] = list(match_log or [])
        self.all_event_stats: dict[str, EventStats] = dict(all_event_stats or {})
        # Guards every mutation and the save that follows it
        self.lock = threading.Lock()

    def initialize(self, event: Event) -> EventStats:
        """
        Return the stats for event, creating zero-valued ones if none exist.

        Restored stats are reused unchanged, so calling this repeatedly never
        resets accumulated totals.
        """
        existing = self.all_event_stats.get(event.id)
        if existing is not None:
            missing = [team_id for team_id in event.teams if team_id not in existing.teams]
            if missing:
                logger.warning(f"Restored stats for {event.id} lack roster teams: {', '.join(missing)}")
            logger.info(f"Reusing restored stats for {event.id} ({len(existing.player_stats)} players)")
            return existing

        event_stats = EventStats(
            teams={team_id: TeamStats(name=event.team_name(team_id)) for team_id in event.teams},
        )
        self.all_event_stats[event.id] = event_stats
        logger.info(f"Initialized stats for {event.id} with {len(event_stats.teams)} teams")
        return event_stats

    def get(self, event_id: str) -> Optional[EventStats]:
        return self.all_event_stats.get(event_id)

    def append_match(self, record: dict) -> None:
        self.match_log.append(record)

    def apply_match(self, event_stats: EventStats, payload: MatchPayload) -> list[str]:
        """
        Fold one validated match into event_stats.

        Args:
            event_stats: Stats of the event the match belongs to
            payload: Validated match report

        Returns:
            Team ids from the report that are not on the roster (skipped)
        """
        skipped = []

        if payload.is_team_mode:
            for entry in payload.teams:
                team = event_stats.teams.get(entry.team_id)
                if team is None:
                    skipped.append(entry.team_id)
                    continue
                team.total_stars += entry.score
                team.points += points_for_rank(entry.rank)
                if is_win(entry.rank):
                    team.matches_won += 1

        for entry in payload.players:
            bucket = event_stats.player_bucket(entry.player_id, entry.team, entry.nickname)
            bucket.matches_played += 1
            bucket.total_stars += entry.stars
            if is_win(entry.rank):
                bucket.wins += 1
                bucket.top_three += 1
            elif is_top_three(entry.rank):
                bucket.top_three += 1

        return skipped

    def snapshot(self, event_id: str) -> Optional[dict]:
        """JSON-ready copy of one event's stats, or None."""
        event_stats = self.all_event_stats.get(event_id)
        return event_stats.to_dict() if event_stats is not None else None

    def serialize_stats(self) -> dict:
        return {event_id: stats.to_dict() for event_id, stats in self.all_event_stats.items()}
