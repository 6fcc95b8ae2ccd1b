"""Handicap differential and handicap index calculations."""
import math
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Sequence

from app.exceptions import InvalidInput, InvalidTee
from app.models.course import Course, Tee
from app.models.round import HandicapSummary, Round


MIN_SLOPE = 55
MAX_SLOPE = 155
STANDARD_SLOPE = 113
MIN_ROUNDS = 3
MAX_ROUNDS = 20

# Rounds available -> (lowest differentials averaged, adjustment)
HANDICAP_TABLE: dict[int, tuple[int, float]] = {
    3: (1, -2.0),
    4: (1, -1.0),
    5: (1, 0.0),
    6: (2, -1.0),
    7: (2, 0.0),
    8: (2, 0.0),
    9: (3, 0.0),
    10: (3, 0.0),
    11: (3, 0.0),
    12: (4, 0.0),
    13: (4, 0.0),
    14: (4, 0.0),
    15: (5, 0.0),
    16: (5, 0.0),
    17: (6, 0.0),
    18: (6, 0.0),
    19: (7, 0.0),
    20: (8, 0.0),
}


def round_half_up(value: float, places: int = 1) -> float:
    """
    Round to a number of decimal places, halves away from zero.

    The float is converted through its shortest repr so values such as
    12.25 are not pulled down by binary representation error. Negative
    halves round away from zero (-2.45 -> -2.5), unlike JavaScript's
    Math.round which would give -2.4.

    Example:
        >>> round_half_up(12.25)
        12.3
        >>> round_half_up(-2.45)
        -2.5
    """
    return _quantize(Decimal(repr(value)), places)


def _quantize(value: Decimal, places: int = 1) -> float:
    quantum = Decimal(1).scaleb(-places)
    return float(value.quantize(quantum, rounding=ROUND_HALF_UP))


def _require_finite(name: str, value: float) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidInput(f"{name} must be a number")
    if not math.isfinite(value):
        raise InvalidInput(f"{name} must be a finite number")


def compute_differential(score: float, rating: float, slope: float) -> float:
    """
    Compute the handicap differential for a single round.

    Args:
        score: Gross strokes for the round
        rating: Course rating of the tee played
        slope: Slope rating of the tee played

    Returns:
        (score - rating) * 113 / slope, rounded to one decimal

    Raises:
        InvalidInput: If any value is not finite or out of range

    Example:
        >>> compute_differential(85, 72.0, 113)
        13.0
        >>> compute_differential(90, 71.5, 130)
        16.1
    """
    _require_finite("score", score)
    _require_finite("rating", rating)
    _require_finite("slope", slope)

    if score < 1:
        raise InvalidInput("score must be at least 1")
    if rating <= 0:
        raise InvalidInput("rating must be positive")
    if not MIN_SLOPE <= slope <= MAX_SLOPE:
        raise InvalidInput(f"slope must be between {MIN_SLOPE} and {MAX_SLOPE}")

    return round_half_up((score - rating) * STANDARD_SLOPE / slope)


def resolve_tee(course: Course, tee_name: str) -> Tee:
    """
    Find a tee on a course by name.

    Raises:
        InvalidTee: If the course has no tee with that name
    """
    for tee in course.tees:
        if tee.name == tee_name:
            return tee
    raise InvalidTee(tee_name, course.name)


def compute_round_differential(score: float, tee: Tee) -> float:
    """Compute the differential for a score played from a resolved tee."""
    return compute_differential(score, tee.rating, tee.slope)


def recent_rounds(rounds: Iterable[Round], limit: int = MAX_ROUNDS) -> list[Round]:
    """Most recent rounds first; rounds on the same day ordered by id."""
    ordered = sorted(rounds, key=lambda r: r.id)
    ordered.sort(key=lambda r: r.played_on, reverse=True)
    return ordered[:limit]


def _lowest_differentials(rounds: Sequence[Round]) -> list[float]:
    ranked = sorted(rounds, key=lambda r: (r.differential, r.id))
    return [r.differential for r in ranked]


def handicap_summary(rounds: Iterable[Round]) -> HandicapSummary:
    """
    Compute the handicap index and report how it was derived.

    With fewer than three rounds no handicap exists yet; the index is 0.0 and
    ``established`` is False.
    """
    considered = recent_rounds(rounds)
    count = len(considered)

    if count < MIN_ROUNDS:
        return HandicapSummary(
            handicap_index=0.0,
            established=False,
            rounds_counted=count,
            differentials_used=0,
        )

    used, adjustment = HANDICAP_TABLE[count]
    lowest = _lowest_differentials(considered)[:used]
    # Averaged in Decimal so exact halves such as 10.15 are not lost to float error
    average = sum(Decimal(repr(d)) for d in lowest) / used
    index = _quantize(average + Decimal(repr(adjustment)))

    return HandicapSummary(
        handicap_index=index,
        established=True,
        rounds_counted=count,
        differentials_used=used,
    )


def compute_handicap_index(rounds: Iterable[Round]) -> float:
    """
    Compute a player's handicap index from their round history.

    Only the 20 most recent rounds count. Returns 0.0 when fewer than three
    rounds exist.
    """
    return handicap_summary(rounds).handicap_index
