from lecture_portal.controllers import lectures as lectures_controller
from lecture_portal.schemas import VideoInfo


def test_schedule_buckets(client, user_headers, catalog):
    resp = client.get("/schedule", headers=user_headers)
    assert resp.status_code == 200
    body = resp.json()

    assert [lec["title"] for lec in body["upcoming"]] == ["Chemical Bonding", "Human Anatomy"]
    assert [lec["title"] for lec in body["live"]] == ["Plant Physiology"]
    assert [lec["title"] for lec in body["completed"]] == ["Thermodynamics"]


def test_upcoming_lecture_has_countdown(client, user_headers, catalog):
    lecture = catalog["lectures"]["upcoming"]
    body = client.get(f"/lectures/{lecture['id']}", headers=user_headers).json()

    assert body["status"] == "upcoming"
    assert body["countdown"] == {"days": 1, "hours": 2, "minutes": 5}
    assert body["starts_in"] == "1d 2h 5m"
    assert body["course_name"] == "JEE Chemistry"
    assert body["week_name"] == "Week 1"
    assert body["embed_url"] == "https://www.youtube.com/embed/dQw4w9WgXcQ"


def test_live_lecture_autoplays_and_has_chat(client, user_headers, catalog):
    lecture = catalog["lectures"]["live"]
    body = client.get(f"/lectures/{lecture['id']}", headers=user_headers).json()

    assert body["status"] == "live"
    assert body["countdown"] is None
    assert body["starts_in"] == ""
    assert body["embed_url"].endswith("?autoplay=1")
    assert body["chat_url"] == (
        "https://www.youtube.com/live_chat?v=dQw4w9WgXcQ&embed_domain=lectures.portal.io"
    )


def test_dashboard(client, user_headers, catalog):
    body = client.get("/dashboard", headers=user_headers).json()

    assert body["is_admin"] is False
    assert [lec["title"] for lec in body["live"]] == ["Plant Physiology"]
    assert [lec["title"] for lec in body["upcoming"]] == ["Chemical Bonding", "Human Anatomy"]
    assert [c["name"] for c in body["courses"]] == ["JEE Chemistry"]


def test_dashboard_limits_upcoming(client, admin_headers, catalog):
    week = catalog["weeks"][1]
    for day in range(4, 10):
        client.post(
            "/lectures/",
            json={
                "course_id": week["course_id"],
                "week_id": week["id"],
                "title": f"Extra {day}",
                "youtube_id": "xyz",
                "scheduled_time": f"2025-03-{10 + day:02d}T12:00:00Z",
            },
            headers=admin_headers,
        )
    body = client.get("/dashboard", headers=admin_headers).json()
    assert body["is_admin"] is True
    assert len(body["upcoming"]) == 5
    assert body["upcoming"][0]["title"] == "Chemical Bonding"


def test_video_info(client, user_headers, catalog, monkeypatch):
    seen = []

    async def fake_fetch(youtube_id):
        seen.append(youtube_id)
        return VideoInfo(
            youtube_id=youtube_id,
            embed_url=f"https://www.youtube.com/embed/{youtube_id}",
            title="Plant Physiology - full lecture",
        )

    monkeypatch.setattr(lectures_controller, "fetch_video_info", fake_fetch)
    lecture = catalog["lectures"]["live"]
    resp = client.get(f"/lectures/{lecture['id']}/video", headers=user_headers)

    assert resp.status_code == 200
    assert resp.json()["title"] == "Plant Physiology - full lecture"
    assert seen == ["dQw4w9WgXcQ"]


def test_unknown_lecture(client, user_headers):
    assert client.get("/lectures/nope", headers=user_headers).status_code == 404
