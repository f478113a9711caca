import pytest

from pagewise.id import make_id


@pytest.mark.asyncio
async def test_completed_day_needs_full_percent(client, plan):
    resp = await client.post("/api/progress/daily", json={
        "plan_id": plan["id"],
        "date": "2025-01-01",
        "day_status": "COMPLETADO",
        "day_percent": 60,
    })
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_completed_day_defaults_to_full_percent(client, plan):
    resp = await client.post("/api/progress/daily", json={
        "plan_id": plan["id"],
        "date": "2025-01-01",
        "pages_read": 10,
        "minutes_spent": 30,
        "day_status": "COMPLETADO",
    })
    assert resp.status_code == 201
    body = resp.json()
    assert body["id"] == make_id(plan["id"], "2025-01-01")
    assert body["day_percent"] == 100.0
    assert body["completed"] is True


@pytest.mark.asyncio
async def test_status_derived_from_percent(client, plan):
    resp = await client.post("/api/progress/daily", json={
        "plan_id": plan["id"],
        "date": "2025-01-01",
        "pages_read": 4,
        "day_percent": 40,
    })
    body = resp.json()
    assert body["day_status"] == "PARCIAL"
    assert body["completed"] is False


@pytest.mark.asyncio
async def test_same_day_is_updated_in_place(client, plan):
    first = await client.post("/api/progress/daily", json={
        "plan_id": plan["id"], "date": "2025-01-01", "pages_read": 4, "day_percent": 40,
    })
    second = await client.post("/api/progress/daily", json={
        "plan_id": plan["id"], "date": "2025-01-01", "pages_read": 10, "day_percent": 100,
    })
    assert second.json()["id"] == first.json()["id"]
    assert second.json()["day_status"] == "COMPLETADO"

    resp = await client.get(f"/api/plans/{plan['id']}/progress/history")
    assert len(resp.json()["progress"]) == 1


@pytest.mark.asyncio
async def test_date_before_plan_start(client, plan):
    resp = await client.post("/api/progress/daily", json={"plan_id": plan["id"], "date": "2024-12-31"})
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_progress_for_other_user(client, plan):
    resp = await client.post(
        "/api/progress/daily",
        json={"plan_id": plan["id"], "date": "2025-01-01"},
        params={"user_id": 7},
    )
    assert resp.status_code == 403


@pytest.mark.asyncio
async def test_update_progress(client, plan):
    resp = await client.post("/api/progress/daily", json={
        "plan_id": plan["id"], "date": "2025-01-01", "pages_read": 4, "day_percent": 40,
    })
    progress_id = resp.json()["id"]

    resp = await client.put(f"/api/progress/{progress_id}", json={"day_status": "COMPLETADO", "pages_read": 10})
    assert resp.status_code == 200
    body = resp.json()
    assert body["day_status"] == "COMPLETADO"
    assert body["day_percent"] == 100.0
    assert body["pages_read"] == 10
    assert body["completed"] is True

    resp = await client.put(f"/api/progress/{progress_id}", json={"day_status": "COMPLETADO", "day_percent": 50})
    assert resp.status_code == 422

    resp = await client.put("/api/progress/1", json={"pages_read": 1})
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_reopening_completed_day_needs_percent(client, plan):
    resp = await client.post("/api/progress/daily", json={
        "plan_id": plan["id"], "date": "2025-01-01", "pages_read": 10, "day_status": "COMPLETADO",
    })
    progress_id = resp.json()["id"]

    resp = await client.put(f"/api/progress/{progress_id}", json={"day_status": "PARCIAL"})
    assert resp.status_code == 400

    resp = await client.get(f"/api/plans/{plan['id']}/progress/history")
    stored = resp.json()["progress"][0]
    assert (stored["day_status"], stored["day_percent"], stored["completed"]) == ("COMPLETADO", 100.0, True)

    resp = await client.put(f"/api/progress/{progress_id}", json={"day_status": "PARCIAL", "day_percent": 60})
    assert resp.status_code == 200
    body = resp.json()
    assert (body["day_status"], body["day_percent"], body["completed"]) == ("PARCIAL", 60.0, False)


@pytest.mark.asyncio
async def test_partial_day_at_full_percent_rejected(client, plan):
    resp = await client.post("/api/progress/daily", json={
        "plan_id": plan["id"], "date": "2025-01-01", "day_status": "PARCIAL", "day_percent": 100,
    })
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_history_statistics(client, plan):
    for day, percent in [("2025-01-01", 100), ("2025-01-02", 100), ("2025-01-03", 50), ("2025-01-04", 100)]:
        resp = await client.post("/api/progress/daily", json={
            "plan_id": plan["id"], "date": day, "pages_read": 10, "minutes_spent": 30, "day_percent": percent,
        })
        assert resp.status_code == 201

    resp = await client.get(f"/api/plans/{plan['id']}/progress/history")
    assert resp.status_code == 200
    body = resp.json()
    assert [p["date"] for p in body["progress"]] == ["2025-01-01", "2025-01-02", "2025-01-03", "2025-01-04"]
    stats = body["statistics"]
    assert stats["total_days"] == 4
    assert stats["completed_days"] == 3
    assert stats["partial_days"] == 1
    assert stats["current_streak"] == 1
    assert stats["best_streak"] == 2

    resp = await client.get(f"/api/plans/{plan['id']}/progress/history", params={"limit": 2})
    assert [p["date"] for p in resp.json()["progress"]] == ["2025-01-03", "2025-01-04"]
