"""
Match Ingestion

Modules:
- payload: Typed match reports and validation
- engine: Fold a reported match into event statistics
"""


def __getattr__(name):
    """Lazy imports to avoid RuntimeWarning when running modules directly."""
    if name == "parse_match_payload":
        from starfest.ingestion.payload import parse_match_payload
        return parse_match_payload
    if name == "MatchIngestionEngine":
        from starfest.ingestion.engine import MatchIngestionEngine
        return MatchIngestionEngine
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
