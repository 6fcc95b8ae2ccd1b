"""Round service - business logic for recording rounds."""
import logging
from datetime import date, datetime

from app.models.course import Tee
from app.models.round import HandicapSummary, Round, RoundCreate, RoundStats, RoundUpdate
from app.services.course_service import CourseService
from app.utils.handicap import compute_round_differential, handicap_summary
from app.utils.object_id import parse_object_id
from app.utils.round_stats import summarize_rounds


logger = logging.getLogger(__name__)

# Changing any of these invalidates the stored differential
DIFFERENTIAL_FIELDS = ("score", "course_id", "tee_name")


def _to_datetime(value: date) -> datetime:
    return datetime.combine(value, datetime.min.time())


class RoundService:
    """Service for handling round operations."""

    def __init__(self, db):
        """Initialize service with database connection."""
        self.db = db
        self.rounds = db["rounds"]
        self.course_service = CourseService(db)

    def _doc_to_round(self, doc: dict) -> Round:
        """
        Convert database document to Round model.

        MongoDB stores the played date as a datetime.
        """
        played_on = doc["played_on"]
        return Round(
            _id=str(doc["_id"]),
            user_id=doc["user_id"],
            course_id=doc["course_id"],
            tee_name=doc["tee_name"],
            played_on=played_on.date() if isinstance(played_on, datetime) else played_on,
            score=doc["score"],
            putts=doc["putts"],
            fairways_hit=doc["fairways_hit"],
            greens_hit=doc["greens_hit"],
            notes=doc.get("notes"),
            differential=doc["differential"],
            created_at=doc["created_at"],
            updated_at=doc["updated_at"],
        )

    def _check_fairways(self, fairways_hit: int, tee: Tee) -> None:
        if fairways_hit > tee.number_of_fairways:
            raise ValueError(
                f"Fairways hit cannot exceed {tee.number_of_fairways} for the {tee.name} tees"
            )

    async def create_round(self, user_id: str, round_create: RoundCreate) -> Round:
        """
        Record a round and compute its differential.

        Args:
            user_id: User who played the round
            round_create: Round data

        Returns:
            Created round

        Raises:
            ValueError: If the course is unknown or the stats don't fit the tee
            InvalidTee: If the tee is not on the course
        """
        tee = await self.course_service.get_tee(round_create.course_id, round_create.tee_name)
        self._check_fairways(round_create.fairways_hit, tee)

        now = datetime.utcnow()
        round_doc = round_create.model_dump()
        round_doc.update({
            "user_id": user_id,
            "played_on": _to_datetime(round_create.played_on),
            "differential": compute_round_differential(round_create.score, tee),
            "created_at": now,
            "updated_at": now,
        })

        result = await self.rounds.insert_one(round_doc)
        round_doc["_id"] = result.inserted_id

        logger.info(
            "Round %s recorded for %s (score %s, differential %s)",
            result.inserted_id, user_id, round_doc["score"], round_doc["differential"],
        )
        return self._doc_to_round(round_doc)

    async def list_rounds(self, user_id: str) -> list[Round]:
        """List a user's rounds, most recent first."""
        cursor = self.rounds.find({"user_id": user_id}).sort("played_on", -1)
        round_docs = await cursor.to_list(length=None)

        return [self._doc_to_round(doc) for doc in round_docs]

    async def get_round(self, user_id: str, round_id: str) -> Round:
        """
        Get a single round.

        Raises:
            ValueError: If round not found
        """
        round_doc = await self.rounds.find_one({
            "_id": parse_object_id(round_id, "Round not found"),
            "user_id": user_id,
        })
        if not round_doc:
            raise ValueError("Round not found")

        return self._doc_to_round(round_doc)

    async def update_round(
        self,
        user_id: str,
        round_id: str,
        round_update: RoundUpdate,
    ) -> Round:
        """
        Edit a round.

        The differential is recomputed only when score, course or tee change.

        Raises:
            ValueError: If round or course not found, or stats don't fit the tee
            InvalidTee: If the tee is not on the course
        """
        existing = await self.get_round(user_id, round_id)
        changes = round_update.model_dump(exclude_unset=True, exclude_none=True)

        update_doc = dict(changes)
        update_doc["updated_at"] = datetime.utcnow()
        if "played_on" in changes:
            update_doc["played_on"] = _to_datetime(changes["played_on"])

        touches_tee = any(
            field in changes and changes[field] != getattr(existing, field)
            for field in DIFFERENTIAL_FIELDS
        )
        if touches_tee or "fairways_hit" in changes:
            merged = existing.model_copy(update=changes)
            tee = await self.course_service.get_tee(merged.course_id, merged.tee_name)
            self._check_fairways(merged.fairways_hit, tee)
            if touches_tee:
                update_doc["differential"] = compute_round_differential(merged.score, tee)

        updated_doc = await self.rounds.find_one_and_update(
            {"_id": parse_object_id(round_id, "Round not found"), "user_id": user_id},
            {"$set": update_doc},
            return_document=True,
        )
        if not updated_doc:
            raise ValueError("Round not found")

        return self._doc_to_round(updated_doc)

    async def delete_round(self, user_id: str, round_id: str) -> dict:
        """
        Delete a round.

        Raises:
            ValueError: If round not found
        """
        result = await self.rounds.delete_one({
            "_id": parse_object_id(round_id, "Round not found"),
            "user_id": user_id,
        })
        if result.deleted_count == 0:
            raise ValueError("Round not found")

        logger.info("Round %s deleted for %s", round_id, user_id)
        return {"deleted_count": result.deleted_count}

    async def get_handicap(self, user_id: str) -> HandicapSummary:
        """Compute the user's current handicap index."""
        return handicap_summary(await self.list_rounds(user_id))

    async def get_stats(self, user_id: str, recent: int = 5) -> RoundStats:
        """Summarize the user's rounds, averaging the most recent ones."""
        return summarize_rounds(await self.list_rounds(user_id), recent=recent)
