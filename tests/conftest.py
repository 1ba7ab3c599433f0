"""
Shared fixtures: a two-team event and the reference match report.
"""

import pytest

from starfest.events.catalog import load_catalog
from starfest.stats.store import StatsStore


EVENT_DEFINITIONS = {
    "events": [
        {"id": "E0", "name": "Old Fest", "teams": {"T9": {"name": "Retired"}}},
        {
            "id": "E1",
            "name": "Star Fest",
            "active": True,
            "teams": {"T1": {"name": "Team One"}, "T2": {"name": "Team Two"}},
        },
    ]
}


def make_match(teams=None, players=None, is_team_mode=True):
    return {
        "isTeamMode": is_team_mode,
        "teams": teams if teams is not None else [],
        "players": players if players is not None else [],
    }


@pytest.fixture
def catalog():
    return load_catalog(EVENT_DEFINITIONS)


@pytest.fixture
def event(catalog):
    return catalog.active_event()


@pytest.fixture
def store():
    return StatsStore()


@pytest.fixture
def reference_match():
    return make_match(
        teams=[
            {"teamId": "T1", "score": 10, "rank": 1},
            {"teamId": "T2", "score": 8, "rank": 2},
        ],
        players=[
            {"playerId": "P1", "nickname": "Ann", "team": "T1", "stars": 6, "rank": 1},
        ],
    )
