"""
Event Definitions

Modules:
- catalog: Load event rosters and find the active event
"""


def __getattr__(name):
    """Lazy imports to avoid RuntimeWarning when running modules directly."""
    if name == "load_catalog":
        from starfest.events.catalog import load_catalog
        return load_catalog
    if name == "EventCatalog":
        from starfest.events.catalog import EventCatalog
        return EventCatalog
    if name == "Event":
        from starfest.events.catalog import Event
        return Event
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
