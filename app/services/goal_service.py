"""Goal service - business logic for performance goals."""
import logging
from datetime import datetime
from typing import Optional

from bson import ObjectId

from app.models.goal import Goal, GoalCategory, GoalCreate, GoalEvaluation, GoalUpdate
from app.services.round_service import RoundService
from app.utils.goal_evaluator import evaluate_goals, initialize_goal_stats
from app.utils.object_id import parse_object_id


logger = logging.getLogger(__name__)


class GoalService:
    """Service for handling goal operations."""

    def __init__(self, db):
        """Initialize service with database connection."""
        self.db = db
        self.goals = db["goals"]
        self.round_service = RoundService(db)

    def _doc_to_goal(self, doc: dict) -> Goal:
        """
        Convert database document to Goal model.

        Handles datetime to date conversion for the target date.
        """
        target_date = doc.get("target_date")
        return Goal(
            _id=str(doc["_id"]),
            user_id=doc["user_id"],
            name=doc["name"],
            description=doc.get("description"),
            category=doc["category"],
            target_value=doc["target_value"],
            target_date=target_date.date() if isinstance(target_date, datetime) else target_date,
            current_value=doc.get("current_value"),
            achieved=doc.get("achieved", False),
            completed_at=doc.get("completed_at"),
            created_at=doc["created_at"],
            updated_at=doc["updated_at"],
        )

    def _goal_filter(self, user_id: str, goal_id: str) -> dict:
        return {"_id": parse_object_id(goal_id, "Goal not found"), "user_id": user_id}

    async def create_goal(self, user_id: str, goal_create: GoalCreate) -> Goal:
        """
        Create a new goal, seeded from the user's existing rounds.

        A goal whose target is already met by past rounds is created achieved.

        Args:
            user_id: User ID who owns the goal
            goal_create: Goal creation data

        Returns:
            Created goal object
        """
        current_value = goal_create.current_value
        achieved = False

        if goal_create.category != GoalCategory.CUSTOM:
            rounds = await self.round_service.list_rounds(user_id)
            stats = initialize_goal_stats(goal_create.category, rounds, goal_create.target_value)
            if stats.current_value is not None:
                current_value = stats.current_value
            achieved = stats.achieved

        now = datetime.utcnow()
        goal_doc = {
            "user_id": user_id,
            "name": goal_create.name.strip(),
            "description": goal_create.description,
            "category": goal_create.category.value,
            "target_value": goal_create.target_value,
            "target_date": (
                datetime.combine(goal_create.target_date, datetime.min.time())
                if goal_create.target_date
                else None
            ),
            "current_value": current_value,
            "achieved": achieved,
            "completed_at": now if achieved else None,
            "created_at": now,
            "updated_at": now,
        }

        result = await self.goals.insert_one(goal_doc)
        goal_doc["_id"] = result.inserted_id

        if achieved:
            logger.info("Goal %s created already achieved (%s)", result.inserted_id, current_value)
        return self._doc_to_goal(goal_doc)

    async def list_goals(self, user_id: str) -> list[Goal]:
        """List a user's goals, newest first."""
        cursor = self.goals.find({"user_id": user_id}).sort("created_at", -1)
        goal_docs = await cursor.to_list(length=None)

        return [self._doc_to_goal(doc) for doc in goal_docs]

    async def get_goal(self, user_id: str, goal_id: str) -> Goal:
        """
        Get a single goal.

        Raises:
            ValueError: If goal not found
        """
        goal_doc = await self.goals.find_one(self._goal_filter(user_id, goal_id))
        if not goal_doc:
            raise ValueError("Goal not found")

        return self._doc_to_goal(goal_doc)

    async def update_goal(
        self,
        user_id: str,
        goal_id: str,
        goal_update: GoalUpdate,
    ) -> Goal:
        """
        Update a goal's editable fields.

        Changing the category or target of an open goal recomputes its
        progress from the user's rounds, as on creation.

        Raises:
            ValueError: If goal not found
        """
        update_doc = goal_update.model_dump(exclude_unset=True, exclude_none=True)
        goal_filter = self._goal_filter(user_id, goal_id)

        if "category" in update_doc or "target_value" in update_doc:
            update_doc.update(await self._reseed(user_id, goal_filter, update_doc))

        if "category" in update_doc:
            update_doc["category"] = GoalCategory(update_doc["category"]).value
        if "name" in update_doc:
            update_doc["name"] = update_doc["name"].strip()
        if "target_date" in update_doc:
            update_doc["target_date"] = datetime.combine(
                update_doc["target_date"], datetime.min.time()
            )
        update_doc["updated_at"] = datetime.utcnow()

        updated_doc = await self.goals.find_one_and_update(
            goal_filter,
            {"$set": update_doc},
            return_document=True,
        )
        if not updated_doc:
            raise ValueError("Goal not found")

        return self._doc_to_goal(updated_doc)

    async def _reseed(self, user_id: str, goal_filter: dict, update_doc: dict) -> dict:
        """
        Recompute progress for a goal whose category or target is changing.

        Achieved and custom goals are left alone. A value measured under a
        different category is cleared when the new category has nothing to
        measure yet.
        """
        existing = await self.goals.find_one(goal_filter)
        if not existing:
            raise ValueError("Goal not found")
        if existing.get("achieved"):
            return {}

        category = GoalCategory(update_doc.get("category", existing["category"]))
        if category == GoalCategory.CUSTOM:
            return {}

        target_value = update_doc.get("target_value", existing["target_value"])
        rounds = await self.round_service.list_rounds(user_id)
        stats = initialize_goal_stats(category, rounds, target_value)

        change: dict = {}
        if stats.current_value is not None:
            change["current_value"] = stats.current_value
        elif "current_value" not in update_doc and category.value != existing["category"]:
            change["current_value"] = None
        if stats.achieved:
            change.update({"achieved": True, "completed_at": datetime.utcnow()})
            logger.info("Goal %s achieved on edit (%s)", existing["_id"], stats.current_value)
        return change

    async def set_achievement(
        self,
        user_id: str,
        goal_id: str,
        achieved: bool,
        completed_at: Optional[datetime] = None,
    ) -> Goal:
        """
        Manually mark or unmark a goal as achieved.

        Unmarking clears the completion timestamp.

        Raises:
            ValueError: If goal not found
        """
        now = datetime.utcnow()
        if achieved:
            change = {"$set": {"achieved": True, "completed_at": completed_at or now, "updated_at": now}}
        else:
            change = {"$set": {"achieved": False, "updated_at": now}, "$unset": {"completed_at": ""}}

        updated_doc = await self.goals.find_one_and_update(
            self._goal_filter(user_id, goal_id),
            change,
            return_document=True,
        )
        if not updated_doc:
            raise ValueError("Goal not found")

        return self._doc_to_goal(updated_doc)

    async def delete_goal(self, user_id: str, goal_id: str) -> dict:
        """
        Delete a goal.

        Raises:
            ValueError: If goal not found
        """
        result = await self.goals.delete_one(self._goal_filter(user_id, goal_id))
        if result.deleted_count == 0:
            raise ValueError("Goal not found")

        return {"deleted_count": result.deleted_count}

    async def evaluate_goals(
        self,
        user_id: str,
        evaluated_at: Optional[datetime] = None,
    ) -> GoalEvaluation:
        """
        Re-evaluate every goal against the user's round history and persist it.

        A goal is only reported as newly achieved if this call is the one that
        flipped it in the database.

        Returns:
            Updated goals and the goals that became achieved
        """
        goals = await self.list_goals(user_id)
        if not goals:
            return GoalEvaluation()

        rounds = await self.round_service.list_rounds(user_id)
        evaluation = evaluate_goals(goals, rounds, evaluated_at=evaluated_at or datetime.utcnow())

        previous = {goal.id: goal for goal in goals}
        updated_goals: list[Goal] = []
        newly_achieved: list[Goal] = []
        now = datetime.utcnow()

        for goal in evaluation.updated_goals:
            before = previous[goal.id]
            if goal.achieved == before.achieved and goal.current_value == before.current_value:
                updated_goals.append(goal)
                continue

            change = {"current_value": goal.current_value, "updated_at": now}
            if goal.achieved:
                change.update({"achieved": True, "completed_at": goal.completed_at})

            query = {"_id": ObjectId(goal.id), "user_id": user_id}
            result = await self.goals.update_one({**query, "achieved": False}, {"$set": change})
            if result.modified_count:
                updated_goals.append(goal)
                if goal.achieved:
                    newly_achieved.append(goal)
                continue

            # Changed or removed since it was read; report what is stored now
            logger.warning("Goal %s was modified elsewhere during evaluation", goal.id)
            current_doc = await self.goals.find_one(query)
            if current_doc:
                updated_goals.append(self._doc_to_goal(current_doc))

        logger.info(
            "Evaluated %d goals for %s, %d newly achieved",
            len(goals), user_id, len(newly_achieved),
        )
        return GoalEvaluation(
            updated_goals=updated_goals,
            newly_achieved=newly_achieved,
        )
