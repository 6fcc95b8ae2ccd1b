"""Course service - business logic for courses and their tees."""
import logging
import re
from datetime import datetime
from typing import Optional

from pymongo.errors import DuplicateKeyError

from app.models.course import Course, CourseCreate, Tee
from app.utils.handicap import resolve_tee
from app.utils.object_id import parse_object_id


logger = logging.getLogger(__name__)

CASE_INSENSITIVE = {"locale": "en", "strength": 2}
SEARCH_LIMIT = 50


class CourseService:
    """Service for handling course operations."""

    def __init__(self, db):
        """Initialize service with database connection."""
        self.db = db
        self.courses = db["courses"]

    def _doc_to_course(self, doc: dict) -> Course:
        """Convert database document to Course model."""
        return Course(
            _id=str(doc["_id"]),
            user_id=doc["user_id"],
            name=doc["name"],
            location=doc.get("location") or {},
            tees=doc["tees"],
            created_at=doc["created_at"],
            updated_at=doc["updated_at"],
        )

    async def create_course(self, user_id: str, course_create: CourseCreate) -> Course:
        """
        Add a course.

        Args:
            user_id: User adding the course
            course_create: Course data including its tees

        Returns:
            Created course

        Raises:
            ValueError: If a course with the same name and location exists
        """
        location = course_create.location.model_dump()
        duplicate_query = {"name": course_create.name.strip()}
        duplicate_query.update(
            {f"location.{key}": value for key, value in location.items()}
        )

        existing = await self.courses.find_one(duplicate_query, collation=CASE_INSENSITIVE)
        if existing:
            raise ValueError("A course with this name and location already exists")

        now = datetime.utcnow()
        course_doc = {
            "user_id": user_id,
            "name": course_create.name.strip(),
            "location": location,
            "tees": [tee.model_dump() for tee in course_create.tees],
            "created_at": now,
            "updated_at": now,
        }

        try:
            result = await self.courses.insert_one(course_doc)
        except DuplicateKeyError:
            raise ValueError("A course with this name and location already exists")

        course_doc["_id"] = result.inserted_id
        logger.info("Course %s added by %s", result.inserted_id, user_id)
        return self._doc_to_course(course_doc)

    async def list_courses(self, search: Optional[str] = None) -> list[Course]:
        """
        List courses, optionally matching name or city.

        Args:
            search: Case-insensitive text matched against name and city

        Returns:
            Up to 50 courses sorted by name
        """
        query = {}
        if search:
            pattern = {"$regex": re.escape(search), "$options": "i"}
            query = {"$or": [{"name": pattern}, {"location.city": pattern}]}

        cursor = self.courses.find(query).sort("name", 1).limit(SEARCH_LIMIT)
        course_docs = await cursor.to_list(length=None)

        return [self._doc_to_course(doc) for doc in course_docs]

    async def get_course(self, course_id: str) -> Course:
        """
        Get a course by id.

        Raises:
            ValueError: If course not found
        """
        course_doc = await self.courses.find_one(
            {"_id": parse_object_id(course_id, "Course not found")}
        )
        if not course_doc:
            raise ValueError("Course not found")

        return self._doc_to_course(course_doc)

    async def get_tee(self, course_id: str, tee_name: str) -> Tee:
        """
        Resolve a tee on a course.

        Raises:
            ValueError: If course not found
            InvalidTee: If the course has no such tee
        """
        course = await self.get_course(course_id)
        return resolve_tee(course, tee_name)
