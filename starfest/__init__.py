"""
StarFest Score System - Core Package

This package contains the core modules for:
- Event definitions (starfest.events)
- Statistics aggregation (starfest.stats)
- Match ingestion (starfest.ingestion)
- Persistence, queries and the service boundary
"""

__version__ = "1.0.0"
