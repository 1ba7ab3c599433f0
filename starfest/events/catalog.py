"""
Event Catalog

This module loads the static event definitions (ids, names, team rosters)
and identifies the single currently active event. The catalog is read once
at startup and never changes afterwards.

Usage:
    from starfest.events.catalog import load_catalog
    catalog = load_catalog(EVENTS_FILE)
    event = catalog.active_event()
"""

import copy
import json
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping, Optional

from starfest.errors import ConfigError
from starfest.utils import setup_logging

# --- Module Logger ---
logger = setup_logging(__name__)


@dataclass(frozen=True)
class Event:
    """One competition with a fixed team roster."""
    id: str
    name: str
    teams: Mapping[str, Mapping[str, Any]] = field(default_factory=dict)
    active: bool = False

    def team_name(self, team_id: str) -> str:
        return str(self.teams.get(team_id, {}).get('name', team_id))

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'name': self.name,
            'teams': {team_id: copy.deepcopy(dict(info)) for team_id, info in self.teams.items()},
            'active': self.active,
        }


class EventCatalog:
    """Immutable collection of all known events."""

    def __init__(self, events: list[Event]):
        self._events = tuple(events)
        self._by_id = {event.id: event for event in self._events}

    @property
    def events(self) -> tuple[Event, ...]:
        return self._events

    def get(self, event_id: str) -> Optional[Event]:
        return self._by_id.get(str(event_id))

    def active_event(self) -> Optional[Event]:
        for event in self._events:
            if event.active:
                return event
        return None

    def __len__(self) -> int:
        return len(self._events)


def _normalize_id(value, where: str) -> str:
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise ConfigError(f"{where}: id must be a string or integer, got {value!r}")
    value = str(value).strip()
    if not value:
        raise ConfigError(f"{where}: id must not be empty")
    return value


def _parse_teams(raw_teams, where: str) -> Mapping[str, Mapping[str, Any]]:
    """
    Parse a team roster given either as {teamId: {name, ...}} or [{id, name, ...}].
    """
    teams: dict[str, Mapping[str, Any]] = {}

    if raw_teams is None:
        return MappingProxyType(teams)

    if isinstance(raw_teams, dict):
        items = []
        for team_id, info in raw_teams.items():
            if not isinstance(info, dict):
                raise ConfigError(f"{where}.teams[{team_id}]: team definition must be an object")
            items.append((team_id, info))
    elif isinstance(raw_teams, list):
        items = []
        for i, info in enumerate(raw_teams):
            if not isinstance(info, dict) or 'id' not in info:
                raise ConfigError(f"{where}.teams[{i}]: team definition must be an object with an 'id'")
            info = dict(info)
            items.append((info.pop('id'), info))
    else:
        raise ConfigError(f"{where}.teams: expected an object or a list")

    for team_id, info in items:
        team_id = _normalize_id(team_id, f"{where}.teams")
        if team_id in teams:
            raise ConfigError(f"{where}.teams: duplicate team id '{team_id}'")
        info = copy.deepcopy(dict(info))
        info.setdefault('name', team_id)
        teams[team_id] = MappingProxyType(info)

    return MappingProxyType(teams)


def parse_event(raw: dict, index: int) -> Event:
    """
    Build an Event from one raw definition.

    Raises:
        ConfigError: If required fields are missing or malformed
    """
    where = f"events[{index}]"
    if not isinstance(raw, dict):
        raise ConfigError(f"{where}: event definition must be an object")

    if 'id' not in raw:
        raise ConfigError(f"{where}: missing 'id'")
    event_id = _normalize_id(raw['id'], where)

    name = raw.get('name')
    if not isinstance(name, str) or not name.strip():
        raise ConfigError(f"{where}: missing or empty 'name'")

    active = raw.get('active', False)
    if not isinstance(active, bool):
        raise ConfigError(f"{where}: 'active' must be true or false")

    return Event(
        id=event_id,
        name=name.strip(),
        teams=_parse_teams(raw.get('teams'), where),
        active=active,
    )


def _read_source(source) -> Any:
    if isinstance(source, (list, dict)):
        return source

    path = Path(source)
    if not path.exists():
        raise ConfigError(f"Event definitions not found: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ConfigError(f"Malformed event definitions in {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Could not read event definitions {path}: {e}") from e


def load_catalog(source) -> EventCatalog:
    """
    Load and validate the event catalog.

    Args:
        source: Path to a JSON document, or already parsed data. Either a list
                of events or an object with an "events" list.

    Returns:
        EventCatalog with at most one active event

    Raises:
        ConfigError: If the source is missing, malformed, or marks more than
                     one event as active
    """
    data = _read_source(source)

    if isinstance(data, dict) and 'events' in data:
        data = data['events']
    if not isinstance(data, list):
        raise ConfigError("Event definitions must be a list or an object with an 'events' list")

    events = [parse_event(raw, i) for i, raw in enumerate(data)]

    seen = set()
    for event in events:
        if event.id in seen:
            raise ConfigError(f"Duplicate event id '{event.id}'")
        seen.add(event.id)

    active = [event.id for event in events if event.active]
    if len(active) > 1:
        raise ConfigError(f"More than one active event: {', '.join(active)}")

    catalog = EventCatalog(events)
    if active:
        event = catalog.active_event()
        logger.info(f"Loaded {len(catalog)} events, active: {event.id} ({event.name}, {len(event.teams)} teams)")
    else:
        logger.warning(f"Loaded {len(catalog)} events, none is active")

    return catalog
