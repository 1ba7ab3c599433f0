"""
Rank-based scoring rules shared by team and player aggregation.
"""

from starfest.config import RANK_POINTS, TOP_THREE_CUTOFF, WIN_RANK


def points_for_rank(rank: int) -> int:
    """Team points for a placement: 1st -> 3, 2nd -> 2, 3rd -> 1, else 0."""
    return RANK_POINTS.get(rank, 0)


def is_win(rank: int) -> bool:
    return rank == WIN_RANK


def is_top_three(rank: int) -> bool:
    return rank <= TOP_THREE_CUTOFF
