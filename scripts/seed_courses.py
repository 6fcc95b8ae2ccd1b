"""Seed MongoDB with a handful of well-known courses.

Usage:
    python scripts/seed_courses.py \\
        --mongodb-url mongodb://localhost:27017 \\
        --user-id <user-id>
"""
import argparse
import asyncio
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from motor.motor_asyncio import AsyncIOMotorClient
from app.models.course import CourseCreate
from app.services.course_service import CourseService


COURSES = [
    {
        "name": "Pebble Beach Golf Links",
        "location": {"city": "Pebble Beach", "state": "CA", "country": "USA"},
        "tees": [
            {"name": "Black", "rating": 74.7, "slope": 143, "number_of_fairways": 14},
            {"name": "Blue", "rating": 72.6, "slope": 138, "number_of_fairways": 14},
            {"name": "White", "rating": 70.8, "slope": 135, "number_of_fairways": 14},
        ],
    },
    {
        "name": "Augusta National Golf Club",
        "location": {"city": "Augusta", "state": "GA", "country": "USA"},
        "tees": [
            {"name": "Championship", "rating": 76.2, "slope": 148, "number_of_fairways": 14},
            {"name": "Member", "rating": 73.5, "slope": 140, "number_of_fairways": 14},
        ],
    },
    {
        "name": "St Andrews Old Course",
        "location": {"city": "St Andrews", "country": "Scotland"},
        "tees": [
            {"name": "Championship", "rating": 73.1, "slope": 132, "number_of_fairways": 14},
            {"name": "White", "rating": 71.8, "slope": 130, "number_of_fairways": 14},
        ],
    },
    {
        "name": "Torrey Pines South Course",
        "location": {"city": "La Jolla", "state": "CA", "country": "USA"},
        "tees": [
            {"name": "Black", "rating": 75.3, "slope": 144, "number_of_fairways": 14},
            {"name": "Blue", "rating": 73.2, "slope": 140, "number_of_fairways": 14},
            {"name": "White", "rating": 71.5, "slope": 135, "number_of_fairways": 14},
        ],
    },
]


async def seed_courses(mongodb_url: str, db_name: str, user_id: str):
    """Insert the sample courses, skipping ones that already exist."""
    client = AsyncIOMotorClient(mongodb_url)
    service = CourseService(client[db_name])

    for data in COURSES:
        try:
            course = await service.create_course(user_id, CourseCreate(**data))
            print(f"Added {course.name} ({course.id})")
        except ValueError as e:
            print(f"Skipped {data['name']}: {e}")

    client.close()


async def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Seed sample golf courses")
    parser.add_argument("--mongodb-url", required=True, help="MongoDB connection URL")
    parser.add_argument("--db-name", default="golf_tracker", help="Database name")
    parser.add_argument("--user-id", required=True, help="User ID recorded as the course author")
    args = parser.parse_args()

    await seed_courses(args.mongodb_url, args.db_name, args.user_id)


if __name__ == "__main__":
    asyncio.run(main())
