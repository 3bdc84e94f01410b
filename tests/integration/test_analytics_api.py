"""Dashboard endpoints: raw records, per-course aggregates with feedback, and the general overview."""

import uuid

import pytest

from academy.analytics.feedback import NO_FEEDBACK_MESSAGE


pytestmark = pytest.mark.integration


async def log_visit(client, course, unit_id, *, seconds: int, scroll: float, video: bool) -> None:
    key = {"courseId": str(course.id), "unitId": str(unit_id)}
    await client.post("/api/v1/user-activity", json=key)
    await client.post("/api/v1/user-behavior/time-spent", json={**key, "timeSpent": seconds, "videoIncluded": video})
    await client.post(
        "/api/v1/user-behavior/scroll-percentage", json={**key, "scrollPercentage": scroll, "videoIncluded": video}
    )


async def test_course_aggregates_with_feedback(client_factory, course, feedback_templates) -> None:
    client = await client_factory()
    video_a, video_b = course.video_unit_ids
    text_a, _ = course.text_unit_ids
    await log_visit(client, course, video_a, seconds=100, scroll=70, video=True)
    await log_visit(client, course, video_b, seconds=50, scroll=80.5, video=True)
    await log_visit(client, course, text_a, seconds=40, scroll=30, video=False)

    resp = await client.get(f"/api/v1/data-visualisation/aggregates/{course.id}")

    assert resp.status_code == 200
    body = resp.json()
    assert body["course_title"] == course.title
    assert body["aggregates"] == {
        "time_video": 75,
        "time_non_video": 40,
        "scroll_video": 75.25,
        "scroll_non_video": 30,
    }
    assert body["feedback"]["scroll_video"] == "You scrolled 75 of video units"
    assert body["feedback"]["time_video"] == "You spent on average 75 seconds on video units. Great focus!"
    assert body["feedback"]["time_non_video"] == "You spent on average 40 seconds on text units."
    # No template covers scroll_non_video
    assert body["feedback"]["scroll_non_video"] == NO_FEEDBACK_MESSAGE
    assert body["progress"]["progress_percentage"] == 75


async def test_unconsolidated_scroll_records_use_the_deepest(client_factory, course) -> None:
    client = await client_factory()
    unit_id = course.text_unit_ids[0]
    key = {"courseId": str(course.id), "unitId": str(unit_id)}
    for scroll in (20, 65, 40):
        await client.post("/api/v1/user-behavior/scroll-percentage", json={**key, "scrollPercentage": scroll})

    resp = await client.get(f"/api/v1/data-visualisation/aggregates/{course.id}")

    assert resp.json()["aggregates"]["scroll_non_video"] == 65


async def test_course_without_activity_has_zero_aggregates(client_factory, course) -> None:
    client = await client_factory()

    resp = await client.get(f"/api/v1/data-visualisation/aggregates/{course.id}")

    body = resp.json()
    assert body["aggregates"] == {"time_video": 0, "time_non_video": 0, "scroll_video": 0, "scroll_non_video": 0}
    assert set(body["feedback"].values()) == {NO_FEEDBACK_MESSAGE}
    assert body["progress"]["progress_percentage"] == 0


async def test_unknown_course_is_not_found(client_factory) -> None:
    client = await client_factory()

    resp = await client.get(f"/api/v1/data-visualisation/aggregates/{uuid.uuid4()}")

    assert resp.status_code == 404


async def test_general_aggregates_cover_every_course(client_factory, course_factory) -> None:
    stats = await course_factory(title="Statistics")
    python = await course_factory(title="Python", video_units=1, text_units=1)
    client = await client_factory()
    await log_visit(client, stats, stats.video_unit_ids[0], seconds=60, scroll=50, video=True)
    await log_visit(client, python, python.text_unit_ids[0], seconds=15, scroll=90, video=False)

    resp = await client.get("/api/v1/data-visualisation/aggregates")

    assert resp.status_code == 200
    by_title = {entry["course_title"]: entry["aggregates"] for entry in resp.json()["courses"]}
    assert by_title["Statistics"] == {"time_video": 60, "time_non_video": 0, "scroll_video": 50, "scroll_non_video": 0}
    assert by_title["Python"] == {"time_video": 0, "time_non_video": 15, "scroll_video": 0, "scroll_non_video": 90}


async def test_raw_records_are_scoped_to_the_user(client_factory, course) -> None:
    alice = await client_factory("alice@example.com")
    bob = await client_factory("bob@example.com")
    await log_visit(alice, course, course.text_unit_ids[0], seconds=12, scroll=33, video=False)

    alice_records = (await alice.get(f"/api/v1/data-visualisation/analytics/courses/{course.id}")).json()
    bob_scroll = (await bob.get("/api/v1/data-visualisation/analytics/scroll")).json()
    alice_time = (await alice.get("/api/v1/data-visualisation/analytics/time-spent")).json()

    assert len(alice_records["activities"]) == 1
    assert alice_records["time_spent"][0]["time_spent"] == 12
    assert alice_records["scroll_percentages"][0]["scroll_percentage"] == 33
    assert bob_scroll == []
    assert [row["time_spent"] for row in alice_time] == [12]


async def test_personalised_texts_are_listed_in_order(client, feedback_templates) -> None:
    resp = await client.get("/api/v1/personalised-texts")

    assert resp.status_code == 200
    assert [(t["type"], t["average"]) for t in resp.json()] == [
        (t.type, t.average) for t in feedback_templates
    ]
