"""
Query Surface

Read-only projections over the statistics of the active event:
- current_event: whole-event snapshot
- player / team: single player or team snapshots
- team_standings / player_leaderboard: tabular views (pandas) used by the
  dashboard and the CSV export

Every projection is copied under the store lock, so callers never see a
match half-applied and cannot mutate the store through the result.
"""

from pathlib import Path

import pandas as pd

from starfest.config import PLAYER_LEADERBOARD_FILENAME, STANDINGS_FILENAME
from starfest.errors import NoActiveEventError, NotFoundError
from starfest.events.catalog import Event, EventCatalog
from starfest.stats.models import TeamStats
from starfest.stats.store import StatsStore
from starfest.utils import atomic_write_csv, default_export_folder, setup_logging

# --- Module Logger ---
logger = setup_logging(__name__)

STANDINGS_COLUMNS = ['position', 'teamId', 'name', 'points', 'matchesWon', 'totalStars']
LEADERBOARD_COLUMNS = [
    'playerId', 'nickname', 'teamId', 'matchesPlayed', 'wins', 'topThree', 'totalStars', 'winRate',
]


class StatsQueries:
    """Read-only access to the active event's statistics."""

    def __init__(self, catalog: EventCatalog, store: StatsStore):
        self.catalog = catalog
        self.store = store

    def _active(self) -> Event:
        event = self.catalog.active_event()
        if event is None:
            raise NoActiveEventError()
        return event

    def _snapshot(self, event: Event) -> dict:
        with self.store.lock:
            snapshot = self.store.snapshot(event.id)
        if snapshot is None:
            # Active event whose store was never initialized: nothing reported yet
            return {'teams': {}, 'playerStats': {}}
        return snapshot

    def list_events(self) -> list[dict]:
        return [event.to_dict() for event in self.catalog.events]

    def current_event(self) -> dict:
        """
        Returns:
            {'info': event definition, 'stats': event stats}

        Raises:
            NoActiveEventError: If no event is active
        """
        event = self._active()
        return {'info': event.to_dict(), 'stats': self._snapshot(event)}

    def player(self, player_id: str) -> dict:
        """
        Stats of one player in the active event, per team played for.

        Raises:
            NoActiveEventError: If no event is active
            NotFoundError: If the player has not played in the active event
        """
        player_id = str(player_id)
        stats = self._snapshot(self._active())
        record = stats['playerStats'].get(player_id)
        if record is None:
            raise NotFoundError(f"Player '{player_id}' not found")
        return {'playerId': player_id, **record}

    def team(self, team_id: str) -> dict:
        """
        Team stats plus every player with a stats bucket under that team.

        Raises:
            NoActiveEventError: If no event is active
            NotFoundError: If the team is not part of the active event
        """
        team_id = str(team_id)
        event = self._active()
        if team_id not in event.teams:
            raise NotFoundError(f"Team '{team_id}' not found")

        stats = self._snapshot(event)
        # Roster team missing from restored stats: report it as zero-valued
        team_stats = stats['teams'].get(team_id) or TeamStats(name=event.team_name(team_id)).to_dict()

        players = [
            {
                'playerId': player_id,
                'nickname': record['nickname'],
                'stats': record['teams'][team_id],
            }
            for player_id, record in stats['playerStats'].items()
            if team_id in record['teams']
        ]
        return {'teamId': team_id, 'teamStats': team_stats, 'players': players}

    def team_standings(self) -> pd.DataFrame:
        """
        Team table of the active event, best team first.

        Ordered by points, then matches won, then total stars.
        """
        stats = self._snapshot(self._active())
        rows = [{'teamId': team_id, **team} for team_id, team in stats['teams'].items()]
        if not rows:
            return pd.DataFrame(columns=STANDINGS_COLUMNS)

        df = pd.DataFrame(rows)
        df = df.sort_values(
            ['points', 'matchesWon', 'totalStars', 'teamId'],
            ascending=[False, False, False, True],
        ).reset_index(drop=True)
        df['position'] = range(1, len(df) + 1)
        return df[STANDINGS_COLUMNS]

    def player_leaderboard(self, team_id: str | None = None) -> pd.DataFrame:
        """
        One row per (player, team) bucket, optionally limited to one team.

        Ordered by wins, then top-three finishes, then total stars.
        """
        stats = self._snapshot(self._active())
        rows = []
        for player_id, record in stats['playerStats'].items():
            for bucket_team, bucket in record['teams'].items():
                if team_id is not None and bucket_team != str(team_id):
                    continue
                rows.append({
                    'playerId': player_id,
                    'nickname': record['nickname'],
                    'teamId': bucket_team,
                    **bucket,
                })

        if not rows:
            return pd.DataFrame(columns=LEADERBOARD_COLUMNS)

        df = pd.DataFrame(rows)
        df['winRate'] = (df['wins'] / df['matchesPlayed']).round(3)
        df = df.sort_values(
            ['wins', 'topThree', 'totalStars', 'playerId'],
            ascending=[False, False, False, True],
        ).reset_index(drop=True)
        return df[LEADERBOARD_COLUMNS]

    def export_standings(self, folder: Path | None = None) -> dict:
        """
        Write team standings and the player leaderboard to CSV.

        Returns:
            Dictionary with the paths of both files
        """
        target = default_export_folder(folder)
        standings_path = target / STANDINGS_FILENAME
        leaderboard_path = target / PLAYER_LEADERBOARD_FILENAME

        atomic_write_csv(self.team_standings(), standings_path, index=False)
        atomic_write_csv(self.player_leaderboard(), leaderboard_path, index=False)
        logger.info(f"Exported standings to {target}")

        return {'standings': standings_path, 'leaderboard': leaderboard_path}
