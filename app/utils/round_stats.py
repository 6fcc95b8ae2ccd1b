"""Aggregate statistics over a player's rounds."""
from statistics import mean
from typing import Iterable

from app.models.round import Round, RoundStats
from app.utils.handicap import recent_rounds, round_half_up


def summarize_rounds(rounds: Iterable[Round], recent: int = 5) -> RoundStats:
    """
    Summarize a round history.

    Best score covers every round; averages cover the ``recent`` most recent
    rounds.

    Example:
        >>> summarize_rounds([]).rounds_played
        0
    """
    rounds = list(rounds)
    if not rounds:
        return RoundStats(rounds_played=0)

    window = recent_rounds(rounds, limit=max(recent, 1))

    def average(values: list[int]) -> float:
        return round_half_up(mean(values))

    return RoundStats(
        rounds_played=len(rounds),
        best_score=min(r.score for r in rounds),
        average_score=average([r.score for r in window]),
        average_putts=average([r.putts for r in window]),
        average_fairways_hit=average([r.fairways_hit for r in window]),
        average_greens_hit=average([r.greens_hit for r in window]),
    )
