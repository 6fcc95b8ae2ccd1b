"""Integration tests for goal endpoints."""
import pytest
import pytest_asyncio


@pytest_asyncio.fixture
async def rounds_played(app_client, auth_headers):
    """Record three rounds with putts 34, 29 and 31."""
    course = await app_client.post(
        "/courses",
        json={
            "name": "Augusta National Golf Club",
            "location": {"city": "Augusta", "state": "GA", "country": "USA"},
            "tees": [{"name": "Member", "rating": 73.5, "slope": 140, "number_of_fairways": 14}],
        },
        headers=auth_headers,
    )
    course_id = course.json()["id"]

    for day, putts, score in (("2024-06-01", 34, 90), ("2024-06-02", 29, 85), ("2024-06-03", 31, 87)):
        await app_client.post(
            "/rounds",
            json={
                "course_id": course_id,
                "tee_name": "Member",
                "played_on": day,
                "score": score,
                "putts": putts,
                "fairways_hit": 9,
                "greens_hit": 7,
            },
            headers=auth_headers,
        )


@pytest.mark.asyncio
class TestGoalCreate:
    """Tests for creating goals."""

    async def test_create_goal_unauthenticated(self, app_client):
        """Test that creating goal requires authentication."""
        response = await app_client.post(
            "/goals", json={"name": "Break 80", "category": "scoring", "target_value": 79}
        )

        assert response.status_code == 401

    async def test_create_goal_born_achieved(self, app_client, auth_headers, rounds_played):
        """Test a goal already met by history is created achieved."""
        response = await app_client.post(
            "/goals",
            json={"name": "Fewer putts", "category": "putts", "target_value": 30},
            headers=auth_headers,
        )

        assert response.status_code == 201
        data = response.json()
        assert data["current_value"] == 29
        assert data["achieved"] is True
        assert data["completed_at"] is not None

    async def test_create_goal_not_met(self, app_client, auth_headers, rounds_played):
        """Test a goal short of target records the current value."""
        response = await app_client.post(
            "/goals",
            json={"name": "Ten fairways", "category": "fairways", "target_value": 10},
            headers=auth_headers,
        )

        data = response.json()
        assert data["current_value"] == 9
        assert data["achieved"] is False

    async def test_create_goal_bad_category(self, app_client, auth_headers):
        """Test an unknown category returns 422."""
        response = await app_client.post(
            "/goals",
            json={"name": "Drive 300", "category": "driving", "target_value": 300},
            headers=auth_headers,
        )

        assert response.status_code == 422


@pytest.mark.asyncio
class TestGoalManage:
    """Tests for listing, updating and deleting goals."""

    async def test_list_goals_empty(self, app_client, auth_headers):
        """Test listing goals when user has none."""
        response = await app_client.get("/goals", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == []

    async def test_update_custom_goal_value(self, app_client, auth_headers):
        """Test custom goals are updated by hand."""
        created = await app_client.post(
            "/goals",
            json={"name": "Play 5 new courses", "category": "custom", "target_value": 5, "current_value": 1},
            headers=auth_headers,
        )
        goal_id = created.json()["id"]

        response = await app_client.put(f"/goals/{goal_id}", json={"current_value": 3}, headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["current_value"] == 3
        assert response.json()["achieved"] is False

    async def test_mark_and_unmark(self, app_client, auth_headers):
        """Test manual achievement toggling."""
        created = await app_client.post(
            "/goals",
            json={"name": "Play 5 new courses", "category": "custom", "target_value": 5},
            headers=auth_headers,
        )
        goal_id = created.json()["id"]

        marked = await app_client.patch(
            f"/goals/{goal_id}/achievement", json={"achieved": True}, headers=auth_headers
        )
        assert marked.json()["achieved"] is True
        assert marked.json()["completed_at"] is not None

        unmarked = await app_client.patch(
            f"/goals/{goal_id}/achievement", json={"achieved": False}, headers=auth_headers
        )
        assert unmarked.json()["achieved"] is False
        assert unmarked.json()["completed_at"] is None

    async def test_achievement_requires_boolean(self, app_client, auth_headers):
        """Test a non-boolean achieved flag returns 422."""
        created = await app_client.post(
            "/goals",
            json={"name": "Break 80", "category": "scoring", "target_value": 79},
            headers=auth_headers,
        )
        goal_id = created.json()["id"]

        response = await app_client.patch(
            f"/goals/{goal_id}/achievement", json={"achieved": "maybe"}, headers=auth_headers
        )

        assert response.status_code == 422

    async def test_delete_goal(self, app_client, auth_headers):
        """Test a deleted goal is gone."""
        created = await app_client.post(
            "/goals",
            json={"name": "Break 80", "category": "scoring", "target_value": 79},
            headers=auth_headers,
        )
        goal_id = created.json()["id"]

        response = await app_client.delete(f"/goals/{goal_id}", headers=auth_headers)
        assert response.status_code == 200

        response = await app_client.get(f"/goals/{goal_id}", headers=auth_headers)
        assert response.status_code == 404


@pytest.mark.asyncio
class TestGoalEvaluate:
    """Tests for POST /goals/evaluate."""

    async def test_evaluate_reports_each_goal_once(self, app_client, auth_headers):
        """Test goals met by later rounds are reported once."""
        await app_client.post(
            "/goals",
            json={"name": "Fewer putts", "category": "putts", "target_value": 30},
            headers=auth_headers,
        )
        course = await app_client.post(
            "/courses",
            json={
                "name": "St Andrews Old Course",
                "location": {"city": "St Andrews", "country": "Scotland"},
                "tees": [{"name": "White", "rating": 71.8, "slope": 130, "number_of_fairways": 14}],
            },
            headers=auth_headers,
        )
        # Insert the round straight into the database so the round endpoint
        # does not evaluate goals first
        from bson import ObjectId
        from datetime import datetime
        from app.database import database

        me = await app_client.get("/auth/me", headers=auth_headers)
        await database.db["rounds"].insert_one({
            "_id": ObjectId(),
            "user_id": me.json()["id"],
            "course_id": course.json()["id"],
            "tee_name": "White",
            "played_on": datetime(2024, 6, 1),
            "score": 84,
            "putts": 29,
            "fairways_hit": 8,
            "greens_hit": 9,
            "differential": 10.6,
            "created_at": datetime.utcnow(),
            "updated_at": datetime.utcnow(),
        })

        first = await app_client.post("/goals/evaluate", headers=auth_headers)
        assert [g["name"] for g in first.json()["newly_achieved"]] == ["Fewer putts"]
        assert first.json()["updated_goals"][0]["current_value"] == 29

        second = await app_client.post("/goals/evaluate", headers=auth_headers)
        assert second.json()["newly_achieved"] == []
        assert second.json()["updated_goals"][0]["achieved"] is True
