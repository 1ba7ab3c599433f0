"""
Central configuration for StarFest Score System.

All shared constants and configuration values should be defined here
to avoid duplication and ensure consistency across modules.
"""

import os
from pathlib import Path

# --- Project Paths ---
PROJECT_ROOT = Path(__file__).parent.parent
DATA_FOLDER = Path(os.environ.get("STARFEST_DATA_DIR", PROJECT_ROOT / "data"))
EXPORT_FOLDER = DATA_FOLDER / "exports"

# Event definitions (static, loaded once at startup)
EVENTS_FILE = Path(os.environ.get("STARFEST_EVENTS_FILE", DATA_FOLDER / "events.json"))

# Persisted state documents
MATCH_LOG_FILENAME = "matches.json"
STATS_FILENAME = "stats.json"

# Standings exports
STANDINGS_FILENAME = "team_standings.csv"
PLAYER_LEADERBOARD_FILENAME = "player_leaderboard.csv"

# --- Scoring Configuration ---
# Team points awarded per rank in team mode; any other rank earns nothing
RANK_POINTS = {1: 3, 2: 2, 3: 1}
WIN_RANK = 1
TOP_THREE_CUTOFF = 3  # Player ranks <= this count as a top-three finish

# --- Input Validation ---
MAX_PAYLOAD_TEAMS = 64
MAX_PAYLOAD_PLAYERS = 256
MAX_NICKNAME_LENGTH = 64

# --- Service Status Codes ---
STATUS_OK = 200
STATUS_BAD_REQUEST = 400
STATUS_NOT_FOUND = 404
STATUS_CONFLICT = 409
STATUS_SERVER_ERROR = 500
