"""
StarFest Service

Transport-agnostic boundary between a request handler (HTTP or CLI) and the
statistics core. Every call returns a result dictionary with a `status` code
and a `message`; per-request errors never escape from here.

Usage:
    python -m starfest.service submit match.json
    python -m starfest.service event
    python -m starfest.service player <player_id>
    python -m starfest.service team <team_id>
    python -m starfest.service events
    python -m starfest.service export

    Programmatic usage:
        from starfest.service import create_service
        service = create_service()
        result = service.submit_match(payload)
"""

import sys
from pathlib import Path

# Add project root to path for direct script execution
_project_root = str(Path(__file__).parent.parent)
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

import argparse
import json

from starfest.config import (
    EVENTS_FILE,
    STATUS_BAD_REQUEST,
    STATUS_CONFLICT,
    STATUS_NOT_FOUND,
    STATUS_OK,
    STATUS_SERVER_ERROR,
)
from starfest.errors import (
    ConfigError,
    NoActiveEventError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from starfest.events.catalog import EventCatalog, load_catalog
from starfest.ingestion.engine import MatchIngestionEngine
from starfest.queries import StatsQueries
from starfest.stats.store import StatsStore
from starfest.storage import PersistenceGateway
from starfest.utils import setup_logging

# --- Module Logger ---
logger = setup_logging(__name__)


def _error(status: int, error: Exception) -> dict:
    return {'status': status, 'message': str(error)}


class StarfestService:
    """Match submission and statistics lookups for the active event."""

    def __init__(
        self,
        catalog: EventCatalog,
        store: StatsStore,
        gateway: PersistenceGateway | None = None,
    ):
        self.catalog = catalog
        self.store = store
        self.engine = MatchIngestionEngine(catalog.active_event(), store, gateway)
        self.queries = StatsQueries(catalog, store)

    def submit_match(self, payload) -> dict:
        try:
            snapshot = self.engine.ingest(payload)
        except NoActiveEventError as e:
            return _error(STATUS_CONFLICT, e)
        except ValidationError as e:
            logger.info(f"Rejected match report: {e}")
            return _error(STATUS_BAD_REQUEST, e)
        except PersistenceError as e:
            # In-memory stats already include this match; only durability failed
            return _error(STATUS_SERVER_ERROR, e)

        return {
            'status': STATUS_OK,
            'message': 'Match data processed successfully',
            'currentEvent': snapshot,
        }

    def get_current_event(self) -> dict:
        try:
            result = self.queries.current_event()
        except NoActiveEventError as e:
            return _error(STATUS_NOT_FOUND, e)
        return {'status': STATUS_OK, 'message': 'OK', **result}

    def get_player_stats(self, player_id) -> dict:
        try:
            result = self.queries.player(player_id)
        except (NoActiveEventError, NotFoundError) as e:
            return _error(STATUS_NOT_FOUND, e)
        return {'status': STATUS_OK, 'message': 'OK', 'player': result}

    def get_team_stats(self, team_id) -> dict:
        try:
            result = self.queries.team(team_id)
        except (NoActiveEventError, NotFoundError) as e:
            return _error(STATUS_NOT_FOUND, e)
        return {'status': STATUS_OK, 'message': 'OK', **result}

    def list_events(self) -> dict:
        return {'status': STATUS_OK, 'message': 'OK', 'events': self.queries.list_events()}

    def export_standings(self, folder: Path | None = None) -> dict:
        try:
            paths = self.queries.export_standings(folder)
        except NoActiveEventError as e:
            return _error(STATUS_NOT_FOUND, e)
        except OSError as e:
            logger.error(f"Standings export failed: {e}")
            return _error(STATUS_SERVER_ERROR, e)
        return {'status': STATUS_OK, 'message': 'OK', **{k: str(v) for k, v in paths.items()}}

    def shutdown(self) -> None:
        """Final save of the in-memory state."""
        self.engine.flush()


def create_service(events_path: Path | None = None, data_folder: Path | None = None) -> StarfestService:
    """
    Load the event catalog, restore persisted state and initialize the active event.

    Args:
        events_path: Event definitions (default: EVENTS_FILE)
        data_folder: Folder holding matches.json / stats.json (default: DATA_FOLDER)

    Raises:
        ConfigError: If the catalog or the persisted state cannot be loaded.
                     This is fatal: the service must not start.
    """
    catalog = load_catalog(events_path or EVENTS_FILE)

    gateway = PersistenceGateway(data_folder)
    try:
        match_log, all_event_stats = gateway.restore()
    except PersistenceError as e:
        raise ConfigError(f"Cannot restore persisted state: {e}") from e

    store = StatsStore(match_log, all_event_stats)
    return StarfestService(catalog, store, gateway)


def main(argv: list[str] | None = None) -> int:
    """CLI interface for submitting matches and reading stats."""
    parser = argparse.ArgumentParser(description="StarFest match results and statistics")
    parser.add_argument('--events', type=Path, default=None, help="Event definitions JSON")
    parser.add_argument('--data', type=Path, default=None, help="Folder for matches.json / stats.json")
    sub = parser.add_subparsers(dest='command', required=True)

    submit = sub.add_parser('submit', help="Submit a match report (JSON file, '-' for stdin)")
    submit.add_argument('match_file')
    sub.add_parser('event', help="Show the current event and its stats")
    sub.add_parser('events', help="List all configured events")
    player = sub.add_parser('player', help="Show one player's stats")
    player.add_argument('player_id')
    team = sub.add_parser('team', help="Show one team's stats and players")
    team.add_argument('team_id')
    export = sub.add_parser('export', help="Write standings CSV files")
    export.add_argument('--folder', type=Path, default=None)

    args = parser.parse_args(argv)

    try:
        service = create_service(args.events, args.data)
    except ConfigError as e:
        print(f"\nCONFIG ERROR: {e}")
        return 1

    if args.command == 'submit':
        try:
            if args.match_file == '-':
                payload = json.load(sys.stdin)
            else:
                with open(args.match_file, encoding="utf-8") as f:
                    payload = json.load(f)
        except (OSError, json.JSONDecodeError, UnicodeDecodeError) as e:
            print(f"\nINPUT ERROR: {e}")
            return 1
        result = service.submit_match(payload)
    elif args.command == 'event':
        result = service.get_current_event()
    elif args.command == 'events':
        result = service.list_events()
    elif args.command == 'player':
        result = service.get_player_stats(args.player_id)
    elif args.command == 'team':
        result = service.get_team_stats(args.team_id)
    else:
        result = service.export_standings(args.folder)

    print(json.dumps(result, indent=2, ensure_ascii=False))
    return 0 if result['status'] == STATUS_OK else 1


if __name__ == "__main__":
    sys.exit(main())
