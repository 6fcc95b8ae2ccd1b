"""Generate random rounds for a user so handicap and goals have data.

Usage:
    python scripts/simulate_rounds.py \\
        --mongodb-url mongodb://localhost:27017 \\
        --email test@example.com \\
        --count 20
"""
import argparse
import asyncio
import random
import sys
from datetime import date, timedelta
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from motor.motor_asyncio import AsyncIOMotorClient
from app.models.course import Course
from app.models.round import RoundCreate
from app.services.course_service import CourseService
from app.services.goal_service import GoalService
from app.services.round_service import RoundService


NOTES = [
    "Driver was solid.",
    "Struggled with putting. Need practice.",
    "Good iron play today.",
    "Windy conditions affected my game.",
    "Tournament round. Nervous at first.",
    "Practice round focusing on course management.",
]


def random_round(course: Course, start: date, end: date) -> RoundCreate:
    """Build a plausible round on a random tee of the course."""
    tee = random.choice(course.tees)
    played_on = start + timedelta(days=random.randint(0, (end - start).days))

    return RoundCreate(
        course_id=course.id,
        tee_name=tee.name,
        played_on=played_on,
        score=random.randint(70, 100),
        putts=random.randint(28, 36),
        fairways_hit=random.randint(min(5, tee.number_of_fairways), tee.number_of_fairways),
        greens_hit=random.randint(6, 18),
        notes=random.choice(NOTES) if random.random() > 0.7 else None,
    )


async def simulate_rounds(mongodb_url: str, db_name: str, email: str, count: int, days: int):
    """Insert ``count`` rounds played over the last ``days`` days."""
    client = AsyncIOMotorClient(mongodb_url)
    db = client[db_name]

    user = await db["users"].find_one({"email": email.lower()})
    if not user:
        print(f"User with email {email} not found")
        client.close()
        sys.exit(1)
    user_id = str(user["_id"])

    courses = await CourseService(db).list_courses()
    if not courses:
        print("No courses found. Run seed_courses.py first.")
        client.close()
        sys.exit(1)

    round_service = RoundService(db)
    end = date.today()
    start = end - timedelta(days=days)

    for _ in range(count):
        created = await round_service.create_round(user_id, random_round(random.choice(courses), start, end))
        print(f"{created.played_on} {created.tee_name:<12} score {created.score} differential {created.differential}")

    handicap = await round_service.get_handicap(user_id)
    evaluation = await GoalService(db).evaluate_goals(user_id)
    print(f"Handicap index: {handicap.handicap_index} ({handicap.rounds_counted} rounds)")
    print(f"Goals newly achieved: {len(evaluation.newly_achieved)}")

    client.close()


async def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Simulate golf rounds for a user")
    parser.add_argument("--mongodb-url", required=True, help="MongoDB connection URL")
    parser.add_argument("--db-name", default="golf_tracker", help="Database name")
    parser.add_argument("--email", default="test@example.com", help="Email of the user")
    parser.add_argument("--count", type=int, default=20, help="Number of rounds")
    parser.add_argument("--days", type=int, default=365, help="Spread rounds over this many days")
    args = parser.parse_args()

    await simulate_rounds(args.mongodb_url, args.db_name, args.email, args.count, args.days)


if __name__ == "__main__":
    asyncio.run(main())
