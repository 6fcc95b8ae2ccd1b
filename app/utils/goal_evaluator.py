"""Goal achievement evaluation against round history."""
import logging
import operator
from datetime import datetime
from typing import Callable, Iterable, NamedTuple, Optional, Sequence

from app.models.goal import Goal, GoalCategory, GoalEvaluation, GoalStats
from app.models.round import Round
from app.utils.handicap import handicap_summary


logger = logging.getLogger(__name__)


def _best_handicap(rounds: Sequence[Round]) -> Optional[float]:
    summary = handicap_summary(rounds)
    if not summary.established:
        return None
    return summary.handicap_index


def _lowest_score(rounds: Sequence[Round]) -> Optional[float]:
    return min((r.score for r in rounds), default=None)


def _most_fairways(rounds: Sequence[Round]) -> Optional[float]:
    return max((r.fairways_hit for r in rounds), default=None)


def _most_greens(rounds: Sequence[Round]) -> Optional[float]:
    return max((r.greens_hit for r in rounds), default=None)


def _fewest_putts(rounds: Sequence[Round]) -> Optional[float]:
    return min((r.putts for r in rounds if r.putts > 0), default=None)


class CategoryRule(NamedTuple):
    """How a goal category is measured and compared against its target."""

    statistic: Callable[[Sequence[Round]], Optional[float]]
    meets_target: Callable[[float, float], bool]


LOWER_IS_BETTER = operator.le
HIGHER_IS_BETTER = operator.ge

CATEGORY_RULES: dict[GoalCategory, CategoryRule] = {
    GoalCategory.HANDICAP: CategoryRule(_best_handicap, LOWER_IS_BETTER),
    GoalCategory.SCORING: CategoryRule(_lowest_score, LOWER_IS_BETTER),
    GoalCategory.FAIRWAYS: CategoryRule(_most_fairways, HIGHER_IS_BETTER),
    GoalCategory.GREENS: CategoryRule(_most_greens, HIGHER_IS_BETTER),
    GoalCategory.PUTTS: CategoryRule(_fewest_putts, LOWER_IS_BETTER),
}


def best_statistic(category: GoalCategory, rounds: Sequence[Round]) -> Optional[float]:
    """
    Best value of the statistic a goal category tracks.

    Returns None for custom goals and when no round carries the statistic.
    """
    rule = CATEGORY_RULES.get(category)
    if rule is None:
        return None
    return rule.statistic(rounds)


def is_target_met(category: GoalCategory, current_value: Optional[float], target_value: float) -> bool:
    """Check a value against a goal target in the category's direction."""
    rule = CATEGORY_RULES.get(category)
    if rule is None or current_value is None:
        return False
    return rule.meets_target(current_value, target_value)


def initialize_goal_stats(
    category: GoalCategory,
    rounds: Iterable[Round],
    target_value: float,
) -> GoalStats:
    """
    Compute the starting value of a new goal from existing rounds.

    Args:
        category: Goal category
        rounds: The player's full round history
        target_value: Goal target

    Returns:
        Current value (None if nothing to measure yet) and whether the
        target is already met
    """
    current = best_statistic(category, list(rounds))
    return GoalStats(
        current_value=current,
        achieved=is_target_met(category, current, target_value),
    )


def evaluate_goals(
    goals: Iterable[Goal],
    rounds: Iterable[Round],
    evaluated_at: Optional[datetime] = None,
) -> GoalEvaluation:
    """
    Refresh goal values from round history and promote goals that are met.

    Goals that are already achieved are passed through untouched; the
    evaluator never un-achieves a goal. Input goals are not mutated.

    Args:
        goals: The player's goals
        rounds: The player's full round history
        evaluated_at: Timestamp recorded as completed_at (defaults to now)

    Returns:
        Every goal in input order, plus the goals that became achieved
    """
    rounds = list(rounds)
    evaluated_at = evaluated_at or datetime.utcnow()
    statistics: dict[GoalCategory, Optional[float]] = {}

    updated: list[Goal] = []
    newly_achieved: list[Goal] = []

    for goal in goals:
        if goal.achieved or goal.category not in CATEGORY_RULES:
            updated.append(goal)
            continue

        if goal.category not in statistics:
            statistics[goal.category] = best_statistic(goal.category, rounds)
        current = statistics[goal.category]

        if current is None:
            updated.append(goal)
            continue

        changes: dict = {"current_value": current}
        if is_target_met(goal.category, current, goal.target_value):
            changes["achieved"] = True
            changes["completed_at"] = evaluated_at

        refreshed = goal.model_copy(update=changes)
        updated.append(refreshed)
        if refreshed.achieved:
            logger.info("Goal %s (%s) achieved with %s", goal.id, goal.category.value, current)
            newly_achieved.append(refreshed)

    return GoalEvaluation(updated_goals=updated, newly_achieved=newly_achieved)
