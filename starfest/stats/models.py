"""
Statistics records for one event.

TeamStats, PlayerTeamStats, PlayerRecord and EventStats are plain mutable
records. Persisted documents use camelCase keys; to_dict/from_dict convert
between the two.
"""

from dataclasses import dataclass, field


@dataclass
class TeamStats:
    name: str
    points: int = 0
    total_stars: int = 0
    matches_won: int = 0

    def to_dict(self) -> dict:
        return {
            'name': self.name,
            'points': self.points,
            'totalStars': self.total_stars,
            'matchesWon': self.matches_won,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "TeamStats":
        return cls(
            name=data['name'],
            points=int(data.get('points', 0)),
            total_stars=int(data.get('totalStars', 0)),
            matches_won=int(data.get('matchesWon', 0)),
        )


@dataclass
class PlayerTeamStats:
    matches_played: int = 0
    total_stars: int = 0
    wins: int = 0
    top_three: int = 0

    def to_dict(self) -> dict:
        return {
            'matchesPlayed': self.matches_played,
            'totalStars': self.total_stars,
            'wins': self.wins,
            'topThree': self.top_three,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "PlayerTeamStats":
        return cls(
            matches_played=int(data.get('matchesPlayed', 0)),
            total_stars=int(data.get('totalStars', 0)),
            wins=int(data.get('wins', 0)),
            top_three=int(data.get('topThree', 0)),
        )


@dataclass
class PlayerRecord:
    nickname: str
    teams: dict[str, PlayerTeamStats] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            'nickname': self.nickname,
            'teams': {team_id: stats.to_dict() for team_id, stats in self.teams.items()},
        }

    @classmethod
    def from_dict(cls, data: dict) -> "PlayerRecord":
        return cls(
            nickname=data.get('nickname', ''),
            teams={
                str(team_id): PlayerTeamStats.from_dict(stats)
                for team_id, stats in data.get('teams', {}).items()
            },
        )


@dataclass
class EventStats:
    teams: dict[str, TeamStats] = field(default_factory=dict)
    player_stats: dict[str, PlayerRecord] = field(default_factory=dict)

    def player_bucket(self, player_id: str, team_id: str, nickname: str) -> PlayerTeamStats:
        """
        Get or create the stats bucket for a player under one team.

        The player's nickname is overwritten with the latest value.
        """
        record = self.player_stats.get(player_id)
        if record is None:
            record = self.player_stats[player_id] = PlayerRecord(nickname=nickname)
        else:
            record.nickname = nickname

        return record.teams.setdefault(team_id, PlayerTeamStats())

    def players_for_team(self, team_id: str) -> dict[str, PlayerRecord]:
        """Players that have a stats bucket under team_id."""
        return {
            player_id: record
            for player_id, record in self.player_stats.items()
            if team_id in record.teams
        }

    def to_dict(self) -> dict:
        return {
            'teams': {team_id: stats.to_dict() for team_id, stats in self.teams.items()},
            'playerStats': {
                player_id: record.to_dict() for player_id, record in self.player_stats.items()
            },
        }

    @classmethod
    def from_dict(cls, data: dict) -> "EventStats":
        return cls(
            teams={
                str(team_id): TeamStats.from_dict(stats)
                for team_id, stats in data.get('teams', {}).items()
            },
            player_stats={
                str(player_id): PlayerRecord.from_dict(record)
                for player_id, record in data.get('playerStats', {}).items()
            },
        )
