"""
Tests for the statistics store: initialization and match folding.
"""

from starfest.ingestion.payload import parse_match_payload
from starfest.stats.models import EventStats, PlayerTeamStats, TeamStats
from starfest.stats.scoring import is_top_three, is_win, points_for_rank
from starfest.stats.store import StatsStore

from conftest import make_match


class TestScoringRules:
    """Tests for rank-based scoring."""

    def test_points_table(self):
        assert [points_for_rank(r) for r in range(1, 6)] == [3, 2, 1, 0, 0]

    def test_win_and_top_three(self):
        assert is_win(1) and not is_win(2)
        assert is_top_three(3) and not is_top_three(4)


class TestInitialize:
    """Tests for StatsStore.initialize."""

    def test_creates_zero_valued_teams(self, store, event):
        stats = store.initialize(event)
        assert stats.teams == {
            "T1": TeamStats(name="Team One"),
            "T2": TeamStats(name="Team Two"),
        }
        assert stats.player_stats == {}
        assert store.get("E1") is stats

    def test_idempotent(self, store, event, reference_match):
        stats = store.initialize(event)
        store.apply_match(stats, parse_match_payload(reference_match))
        before = stats.to_dict()

        again = store.initialize(event)
        assert again is stats
        assert again.to_dict() == before

    def test_reuses_restored_stats(self, event):
        restored = EventStats(teams={"T1": TeamStats(name="Team One", points=9)})
        store = StatsStore(all_event_stats={"E1": restored})
        assert store.initialize(event) is restored
        assert store.get("E1").teams["T1"].points == 9

    def test_positional_order_matches_restore(self, event):
        match_log = [{"eventId": "E1", "timestamp": "2024-01-01T00:00:00+00:00"}]
        restored = EventStats(teams={"T1": TeamStats(name="Team One", points=9)})
        store = StatsStore(match_log, {"E1": restored})
        assert store.match_log == match_log
        assert store.initialize(event) is restored

    def test_only_initialized_events_have_stats(self, store, event, catalog):
        store.initialize(event)
        assert store.get(catalog.get("E0").id) is None


class TestApplyMatch:
    """Tests for folding a match into event stats."""

    def test_reference_match(self, store, event, reference_match):
        stats = store.initialize(event)
        skipped = store.apply_match(stats, parse_match_payload(reference_match))

        assert skipped == []
        assert stats.teams["T1"] == TeamStats(name="Team One", points=3, total_stars=10, matches_won=1)
        assert stats.teams["T2"] == TeamStats(name="Team Two", points=2, total_stars=8, matches_won=0)
        assert stats.player_stats["P1"].teams["T1"] == PlayerTeamStats(
            matches_played=1, total_stars=6, wins=1, top_three=1
        )

    def test_team_stats_ignored_outside_team_mode(self, store, event):
        stats = store.initialize(event)
        match = make_match(
            is_team_mode=False,
            teams=[{"teamId": "T1", "score": 10, "rank": 1}],
            players=[{"playerId": "P1", "nickname": "Ann", "team": "T1", "stars": 2, "rank": 3}],
        )
        store.apply_match(stats, parse_match_payload(match))

        assert stats.teams["T1"] == TeamStats(name="Team One")
        assert stats.player_stats["P1"].teams["T1"] == PlayerTeamStats(
            matches_played=1, total_stars=2, wins=0, top_three=1
        )

    def test_unknown_team_skipped(self, store, event):
        stats = store.initialize(event)
        match = make_match(teams=[
            {"teamId": "T9", "score": 50, "rank": 1},
            {"teamId": "T2", "score": 4, "rank": 3},
        ])
        skipped = store.apply_match(stats, parse_match_payload(match))

        assert skipped == ["T9"]
        assert "T9" not in stats.teams
        assert stats.teams["T2"].points == 1
        assert stats.teams["T2"].total_stars == 4

    def test_low_rank_earns_nothing(self, store, event):
        stats = store.initialize(event)
        match = make_match(
            teams=[{"teamId": "T1", "score": 5, "rank": 4}],
            players=[{"playerId": "P1", "nickname": "Ann", "team": "T1", "stars": 1, "rank": 7}],
        )
        store.apply_match(stats, parse_match_payload(match))

        assert stats.teams["T1"].points == 0
        assert stats.teams["T1"].total_stars == 5
        bucket = stats.player_stats["P1"].teams["T1"]
        assert (bucket.wins, bucket.top_three, bucket.matches_played) == (0, 0, 1)

    def test_player_on_unknown_team_gets_bucket(self, store, event):
        stats = store.initialize(event)
        match = make_match(players=[
            {"playerId": "P7", "nickname": "Zed", "team": "TX", "stars": 3, "rank": 2},
        ])
        store.apply_match(stats, parse_match_payload(match))
        assert stats.player_stats["P7"].teams["TX"].matches_played == 1

    def test_nickname_latest_wins_and_team_switch(self, store, event):
        stats = store.initialize(event)
        first = make_match(players=[{"playerId": "P1", "nickname": "Ann", "team": "T1", "stars": 1, "rank": 1}])
        second = make_match(players=[{"playerId": "P1", "nickname": "Annie", "team": "T2", "stars": 2, "rank": 2}])
        store.apply_match(stats, parse_match_payload(first))
        store.apply_match(stats, parse_match_payload(second))

        record = stats.player_stats["P1"]
        assert record.nickname == "Annie"
        assert set(record.teams) == {"T1", "T2"}
        assert record.teams["T1"].wins == 1
        assert record.teams["T2"].top_three == 1

    def test_players_for_team(self, store, event):
        stats = store.initialize(event)
        match = make_match(players=[
            {"playerId": "P1", "nickname": "Ann", "team": "T1", "stars": 1, "rank": 1},
            {"playerId": "P2", "nickname": "Bob", "team": "T2", "stars": 1, "rank": 2},
        ])
        store.apply_match(stats, parse_match_payload(match))
        assert list(stats.players_for_team("T1")) == ["P1"]


class TestSerialization:
    """Tests for the camelCase document form."""

    def test_event_stats_document(self, store, event, reference_match):
        stats = store.initialize(event)
        store.apply_match(stats, parse_match_payload(reference_match))
        doc = stats.to_dict()

        assert doc["teams"]["T1"] == {"name": "Team One", "points": 3, "totalStars": 10, "matchesWon": 1}
        assert doc["playerStats"]["P1"] == {
            "nickname": "Ann",
            "teams": {"T1": {"matchesPlayed": 1, "totalStars": 6, "wins": 1, "topThree": 1}},
        }
        assert EventStats.from_dict(doc) == stats
