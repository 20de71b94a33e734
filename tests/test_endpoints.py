"""
Integration tests for API endpoints using the SQLite test database.
"""
from datetime import date, timedelta

from conftest import auth_headers


def _earn(client, *amounts):
    for points in amounts:
        r = client.post("/api/gamification", json={"type": "ikigai_quiz", "points": points})
        assert r.status_code == 201


class TestHealth:
    def test_health(self, client):
        r = client.get("/health")
        assert r.status_code == 200
        assert r.json()["status"] == "ok"


class TestProfile:
    def test_profile_created_on_first_request(self, anon_client):
        headers = auth_headers("profile-user-1", email="Ana@Example.com", username="Ana Lopez")
        r = anon_client.get("/api/profile", headers=headers)
        assert r.status_code == 200
        body = r.json()
        assert body["id"] == "profile-user-1"
        assert body["name"] == "Ana Lopez"
        assert body["email"] == "ana@example.com"
        assert body["slug"] == "ana-lopez" or body["slug"].startswith("ana-lopez-")

        again = anon_client.get("/api/profile", headers=headers)
        assert again.json()["created_at"] == body["created_at"]

    def test_patch_profile(self, client):
        r = client.patch("/api/profile", json={"name": "New Name", "image_url": "https://img/x.png"})
        assert r.status_code == 200
        assert r.json()["name"] == "New Name"
        assert r.json()["image_url"] == "https://img/x.png"

    def test_other_users_profile_with_map(self, client):
        other = auth_headers("profile-owner-2", email="owner@example.com", username="Map Owner")
        client.post("/api/ikigai", json={"passion": ["painting"]}, headers=other)

        r = client.get("/api/profile/profile-owner-2")
        assert r.status_code == 200
        body = r.json()
        assert body["name"] == "Map Owner"
        assert body["ikigai"]["passion"] == ["painting"]
        assert "email" not in body

    def test_other_users_profile_without_map(self, client):
        client.get("/api/profile", headers=auth_headers("profile-no-map-3"))
        r = client.get("/api/profile/profile-no-map-3")
        assert r.status_code == 200
        assert r.json()["ikigai"] is None

    def test_unknown_profile_is_404(self, client):
        r = client.get("/api/profile/nobody-here")
        assert r.status_code == 404
        assert r.json()["code"] == "PROFILE_NOT_FOUND"


class TestGamification:
    def test_activity_and_progress(self, client):
        r = client.post("/api/gamification", json={"type": "daily_reflection", "points": 20})
        assert r.status_code == 201
        body = r.json()
        assert body["points_awarded"] == 20
        assert body["total_points"] == 20
        assert body["streak"]["outcome"] == "created"

        r = client.get("/api/gamification")
        progress = r.json()
        assert progress["points"] == 20
        assert progress["level"] == 1
        assert [s["type"] for s in progress["streaks"]] == ["daily_reflection"]

    def test_other_activity_has_no_streak(self, client):
        r = client.post("/api/gamification", json={"type": "quiz", "points": 5})
        assert r.json()["streak"] is None

    def test_ledger(self, client):
        _earn(client, 120)
        r = client.get("/api/gamification/ledger")
        assert r.status_code == 200
        body = r.json()
        assert body["total_points"] == 120
        assert body["level"] == 2
        assert body["entries"][0]["kind"] == "reward"
        assert body["entries"][0]["description"] == "Completed ikigai_quiz"

    def test_recent_achievements(self, client):
        client.post("/api/ikigai", json={"passion": ["music"]})
        r = client.get("/api/achievements/recent")
        assert r.status_code == 200
        items = r.json()
        assert [a["title"] for a in items] == ["Ikigai Pioneer"]
        assert items[0]["emoji"] == "🏆"


class TestGoals:
    def test_unlock_flow(self, client):
        _earn(client, 50, 30, 100)
        assert client.get("/api/gamification").json()["points"] == 180

        r = client.post("/api/goals", json={
            "title": "Open a studio", "category": "VOCATION", "points_cost": 200,
        })
        assert r.status_code == 201
        expensive = r.json()
        assert expensive["status"] == "locked"

        r = client.post(f"/api/goals/{expensive['id']}/unlock")
        assert r.status_code == 400
        assert r.json()["code"] == "INSUFFICIENT_POINTS"
        assert r.json()["details"] == {"required": 200, "available": 180}

        cheap = client.post("/api/goals", json={
            "title": "Take a course", "category": "PROFESSION", "points_cost": 150,
        }).json()
        r = client.post(f"/api/goals/{cheap['id']}/unlock")
        assert r.status_code == 200
        body = r.json()
        assert body["points_spent"] == 150
        assert body["points_remaining"] == 30
        assert body["goal"]["status"] == "active"
        assert len(body["goal"]["feedback"]) == 1

        assert client.get("/api/gamification").json()["points"] == 30

        r = client.post(f"/api/goals/{cheap['id']}/unlock")
        assert r.status_code == 409
        assert r.json()["code"] == "GOAL_NOT_LOCKED"

    def test_list_and_detail(self, client):
        created = client.post("/api/goals", json={
            "title": "Write a book",
            "category": "PASSION",
            "sub_goals": [{"title": "Outline", "milestones": [{"title": "Chapters"}]}],
        }).json()
        assert created["status"] == "active"

        listed = client.get("/api/goals").json()
        assert [g["id"] for g in listed] == [created["id"]]
        assert client.get("/api/goals", params={"status": "locked"}).json() == []

        detail = client.get(f"/api/goals/{created['id']}").json()
        assert detail["sub_goals"][0]["title"] == "Outline"
        assert detail["sub_goals"][0]["milestones"][0]["title"] == "Chapters"

    def test_progress_and_milestones(self, client):
        goal = client.post("/api/goals", json={
            "title": "Run a marathon",
            "category": "PASSION",
            "points_reward": 100,
            "sub_goals": [{"title": "Train", "milestones": [
                {"title": "10k", "points_reward": 10},
                {"title": "Half", "points_reward": 20},
            ]}],
        }).json()
        sub = goal["sub_goals"][0]
        first, second = sub["milestones"]
        base = f"/api/goals/{goal['id']}/subgoals/{sub['id']}/milestones"

        r = client.post(f"{base}/{first['id']}/complete")
        assert r.status_code == 200
        assert r.json()["points_awarded"] == 10
        assert r.json()["goal"]["progress"] == 50

        r = client.post(f"{base}/{second['id']}/complete")
        body = r.json()
        assert body["goal_completed"] is True
        assert body["points_awarded"] == 120
        assert body["goal"]["status"] == "completed"

        assert client.post(f"{base}/999999/complete").json()["code"] == "MILESTONE_NOT_FOUND"

    def test_put_progress(self, client):
        goal = client.post("/api/goals", json={"title": "Learn Go", "category": "PROFESSION"}).json()
        r = client.put(f"/api/goals/{goal['id']}", json={"progress": 40})
        assert r.status_code == 200
        assert r.json()["goal"]["progress"] == 40

        locked = client.post("/api/goals", json={
            "title": "Locked", "category": "MISSION", "points_cost": 10,
        }).json()
        r = client.put(f"/api/goals/{locked['id']}", json={"progress": 40})
        assert r.status_code == 409
        assert r.json()["code"] == "GOAL_LOCKED"

    def test_goals_are_private(self, client):
        goal = client.post("/api/goals", json={"title": "Mine", "category": "PASSION"}).json()
        r = client.get(f"/api/goals/{goal['id']}", headers=auth_headers("someone-else-1"))
        assert r.status_code == 404


class TestChallenges:
    def test_daily_complete_and_history(self, client):
        r = client.get("/api/challenges")
        assert r.status_code == 200
        challenges = r.json()
        assert len(challenges) == 4
        assert all(c["status"] == "pending" for c in challenges)

        target = challenges[0]
        r = client.post("/api/challenges", json={"challenge_id": target["id"]})
        assert r.status_code == 200
        body = r.json()
        assert body["points_awarded"] == target["points"]
        assert body["total_points"] == target["points"]
        assert body["challenge"]["status"] == "completed"
        assert body["achievements_unlocked"] == ["Challenge Beginner"]
        assert body["streak"]["streak"]["type"] == "daily_challenges"

        r = client.post("/api/challenges", json={"challenge_id": target["id"]})
        assert r.status_code == 409
        assert r.json()["code"] == "CHALLENGE_ALREADY_COMPLETED"

        history = client.get("/api/challenges/history", params={"status": "completed"}).json()
        assert [c["id"] for c in history] == [target["id"]]

    def test_custom_challenge(self, client):
        r = client.post("/api/challenges/custom", json={
            "title": "Mentor a student", "points": 120, "type": "weekly", "category": "MISSION",
        })
        assert r.status_code == 201
        created = r.json()
        assert (created["type"], created["status"], created["points"]) == ("weekly", "pending", 120)

        weekly = client.get("/api/challenges/history", params={"type": "weekly"}).json()
        assert [c["id"] for c in weekly] == [created["id"]]

        r = client.post("/api/challenges/custom", json={"title": "Daily?", "type": "daily"})
        assert r.status_code == 422

    def test_unknown_challenge(self, client):
        r = client.post("/api/challenges", json={"challenge_id": 999999})
        assert r.status_code == 404
        assert r.json()["code"] == "CHALLENGE_NOT_FOUND"


class TestIkigai:
    def test_map_lifecycle(self, client, user_id):
        r = client.get("/api/ikigai")
        assert r.status_code == 404
        assert r.json()["code"] == "IKIGAI_MAP_NOT_FOUND"

        r = client.post("/api/ikigai", json={
            "passion": ["music"], "mission": ["education"],
            "profession": ["design"], "vocation": ["courses"],
        })
        assert r.status_code == 200
        body = r.json()
        assert body["created"] is True
        assert body["points_awarded"] == 100
        assert body["ikigai"]["is_complete"] is True

        r = client.get(f"/api/ikigai/map/{user_id}", headers=auth_headers("viewer-1"))
        assert r.status_code == 200
        assert r.json()["passion"] == ["music"]

    def test_sections(self, client):
        client.post("/api/ikigai", json={"passion": ["music"]})
        r = client.post("/api/ikigai/sections", json={"section": "passion"})
        assert r.status_code == 200
        assert r.json()["points_awarded"] == 25
        assert r.json()["is_complete"] is False

        r = client.post("/api/ikigai/sections", json={"section": "hobbies"})
        assert r.status_code == 422
        assert r.json()["code"] == "INVALID_SECTION"


class TestReflection:
    def test_one_per_day(self, client):
        payload = {"mood": "calm", "gratitude": "sun", "challenges": "", "wins": "run", "content": "ok"}
        r = client.post("/api/reflection", json=payload)
        assert r.status_code == 201
        assert r.json()["streak"]["outcome"] == "created"

        r = client.post("/api/reflection", json=payload)
        assert r.status_code == 409
        assert r.json()["code"] == "REFLECTION_ALREADY_SUBMITTED"

        listed = client.get("/api/reflection").json()
        assert len(listed) == 1
        assert listed[0]["mood"] == "calm"


class TestCommunity:
    def test_post_like_comment(self, client):
        r = client.post("/api/community/posts", json={"title": "Hello", "content": "First post"})
        assert r.status_code == 201
        post = r.json()
        assert post["type"] == "reflection"
        assert post["likes"] == 0
        assert client.get("/api/gamification").json()["points"] == 10

        r = client.post(f"/api/community/posts/{post['id']}/like")
        assert r.json() == {"post_id": post["id"], "liked": True, "likes": 1}

        r = client.post(f"/api/community/posts/{post['id']}/comments", json={"content": "Nice"})
        assert r.status_code == 201

        feed = client.get("/api/community/posts", params={"limit": 100}).json()
        item = next(p for p in feed["items"] if p["id"] == post["id"])
        assert (item["likes"], item["comments"]) == (1, 1)
        assert item["author_name"]

        r = client.post("/api/community/posts/999999/like")
        assert r.status_code == 404
        assert r.json()["code"] == "POST_NOT_FOUND"

    def test_team_challenge_flow(self, client):
        end = (date.today() + timedelta(days=7)).isoformat()
        r = client.post("/api/community/challenges", json={
            "title": "Workshop week", "category": "skills", "reward_points": 60, "end_date": end,
        })
        assert r.status_code == 201
        challenge = r.json()

        listed = client.get("/api/community/challenges").json()
        assert challenge["id"] in [c["id"] for c in listed]

        r = client.post(f"/api/community/challenges/{challenge['id']}/join")
        assert r.status_code == 201
        r = client.post(f"/api/community/challenges/{challenge['id']}/join")
        assert r.status_code == 409
        assert r.json()["code"] == "ALREADY_PARTICIPATING"

        r = client.put(f"/api/community/challenges/{challenge['id']}/progress", json={"progress": 100})
        assert r.status_code == 200
        assert r.json()["points_awarded"] == 60
        assert r.json()["participant"]["status"] == "completed"

    def test_invalid_team_category(self, client):
        r = client.post("/api/community/challenges", json={
            "title": "x", "category": "cooking", "end_date": date.today().isoformat(),
        })
        assert r.status_code == 422
        assert r.json()["code"] == "INVALID_CATEGORY"


class TestDashboard:
    def test_dashboard_summary(self, client):
        client.post("/api/ikigai", json={"passion": ["music"]})
        client.post("/api/goals", json={"title": "Goal", "category": "PASSION"})
        challenge = client.get("/api/challenges").json()[0]
        client.post("/api/challenges", json={"challenge_id": challenge["id"]})

        r = client.get("/api/dashboard")
        assert r.status_code == 200
        body = r.json()
        assert body["ikigai"]["passion"] == ["music"]
        assert len(body["goals"]) == 1
        assert len(body["challenges"]) == 4
        stats = body["stats"]
        assert stats["completed_challenges"] == 1
        assert stats["completed_goals"] == 0
        assert stats["total_achievements"] == 2
        assert stats["current_points"] == 100 + challenge["points"]
        assert stats["streak_count"] == 1

    def test_dashboard_without_map(self, client):
        body = client.get("/api/dashboard").json()
        assert body["ikigai"] is None
        assert body["stats"]["current_points"] == 0

    def test_completed_goals_are_counted(self, client):
        goal = client.post("/api/goals", json={"title": "Finish", "category": "MISSION"}).json()
        client.post("/api/goals", json={"title": "Still going", "category": "MISSION"})
        client.put(f"/api/goals/{goal['id']}", json={"progress": 100})
        assert client.get("/api/dashboard").json()["stats"]["completed_goals"] == 1
