"""
Statistics Aggregation

Modules:
- models: Team / player / event statistics records
- scoring: Rank-to-points and win/top-three rules
- store: Event-scoped statistics state and match folding
"""


def __getattr__(name):
    """Lazy imports to avoid RuntimeWarning when running modules directly."""
    if name == "StatsStore":
        from starfest.stats.store import StatsStore
        return StatsStore
    if name == "EventStats":
        from starfest.stats.models import EventStats
        return EventStats
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
