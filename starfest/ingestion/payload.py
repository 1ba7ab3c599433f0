"""
Match Payload Validation

Turns a raw, already JSON-decoded match report into typed records. The whole
payload is checked before ingestion touches any state, so a rejected report
leaves neither a match log entry nor a partial statistics update.

Expected shape:
    {
        "isTeamMode": true,
        "teams":   [{"teamId": "T1", "score": 10, "rank": 1}, ...],
        "players": [{"playerId": "P1", "nickname": "Ann", "team": "T1",
                     "stars": 6, "rank": 1}, ...]
    }
"""

import json
from dataclasses import dataclass

from starfest.config import MAX_NICKNAME_LENGTH, MAX_PAYLOAD_PLAYERS, MAX_PAYLOAD_TEAMS
from starfest.errors import ValidationError
from starfest.utils import validate_collection_size


@dataclass(frozen=True)
class TeamEntry:
    team_id: str
    score: int
    rank: int


@dataclass(frozen=True)
class PlayerEntry:
    player_id: str
    nickname: str
    team: str
    stars: int
    rank: int


@dataclass(frozen=True)
class MatchPayload:
    is_team_mode: bool
    teams: tuple[TeamEntry, ...]
    players: tuple[PlayerEntry, ...]


def _require(raw: dict, key: str, where: str):
    if key not in raw or raw[key] is None:
        raise ValidationError("required field is missing", field=f"{where}{key}")
    return raw[key]


def _as_id(value, field: str) -> str:
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise ValidationError(f"expected a string id, got {type(value).__name__}", field=field)
    value = str(value).strip()
    if not value:
        raise ValidationError("id must not be empty", field=field)
    return value


def _as_int(value, field: str, minimum: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"expected an integer, got {type(value).__name__}", field=field)
    if value < minimum:
        raise ValidationError(f"must be >= {minimum}, got {value}", field=field)
    return value


def _as_list(value, field: str, max_size: int) -> list:
    if not isinstance(value, list):
        raise ValidationError(f"expected a list, got {type(value).__name__}", field=field)
    try:
        validate_collection_size(value, max_size, field)
    except ValueError as e:
        raise ValidationError(str(e), field=field) from e
    return value


def parse_team_entry(raw, index: int) -> TeamEntry:
    where = f"teams[{index}]."
    if not isinstance(raw, dict):
        raise ValidationError("expected an object", field=f"teams[{index}]")
    return TeamEntry(
        team_id=_as_id(_require(raw, 'teamId', where), f"{where}teamId"),
        score=_as_int(_require(raw, 'score', where), f"{where}score", 0),
        rank=_as_int(_require(raw, 'rank', where), f"{where}rank", 1),
    )


def parse_player_entry(raw, index: int) -> PlayerEntry:
    where = f"players[{index}]."
    if not isinstance(raw, dict):
        raise ValidationError("expected an object", field=f"players[{index}]")

    nickname = _require(raw, 'nickname', where)
    if not isinstance(nickname, str):
        raise ValidationError(f"expected a string, got {type(nickname).__name__}", field=f"{where}nickname")
    if len(nickname) > MAX_NICKNAME_LENGTH:
        raise ValidationError(f"longer than {MAX_NICKNAME_LENGTH} characters", field=f"{where}nickname")

    return PlayerEntry(
        player_id=_as_id(_require(raw, 'playerId', where), f"{where}playerId"),
        nickname=nickname,
        team=_as_id(_require(raw, 'team', where), f"{where}team"),
        stars=_as_int(_require(raw, 'stars', where), f"{where}stars", 0),
        rank=_as_int(_require(raw, 'rank', where), f"{where}rank", 1),
    )


def parse_match_payload(raw) -> MatchPayload:
    """
    Validate a raw match report.

    Args:
        raw: Decoded JSON object for one match

    Returns:
        MatchPayload with typed team and player entries

    Raises:
        ValidationError: On the first missing or malformed field
    """
    if not isinstance(raw, dict):
        raise ValidationError(f"match payload must be an object, got {type(raw).__name__}")

    # The raw report goes into the match log verbatim
    try:
        json.dumps(raw)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"match payload is not JSON-serializable: {e}") from e

    is_team_mode = _require(raw, 'isTeamMode', '')
    if not isinstance(is_team_mode, bool):
        raise ValidationError("expected true or false", field='isTeamMode')

    if is_team_mode:
        raw_teams = _as_list(_require(raw, 'teams', ''), 'teams', MAX_PAYLOAD_TEAMS)
    else:
        raw_teams = _as_list(raw.get('teams') or [], 'teams', MAX_PAYLOAD_TEAMS)
    raw_players = _as_list(_require(raw, 'players', ''), 'players', MAX_PAYLOAD_PLAYERS)

    return MatchPayload(
        is_team_mode=is_team_mode,
        teams=tuple(parse_team_entry(t, i) for i, t in enumerate(raw_teams)),
        players=tuple(parse_player_entry(p, i) for i, p in enumerate(raw_players)),
    )
