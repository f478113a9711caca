from pagewise.mcp.client import PagewiseClient


async def log_daily_progress(
    client: PagewiseClient,
    plan_id: int,
    progress_date: str,
    pages_read: int = 0,
    minutes_spent: int = 0,
    day_status: str | None = None,
    day_percent: float | None = None,
    notes: str | None = None,
) -> dict:
    body = {
        "plan_id": plan_id,
        "date": progress_date,
        "pages_read": pages_read,
        "minutes_spent": minutes_spent,
    }
    if day_status is not None:
        body["day_status"] = day_status.upper()
    if day_percent is not None:
        body["day_percent"] = day_percent
    if notes is not None:
        body["notes"] = notes
    return await client.post("/api/progress/daily", json=body)


async def get_progress_history(client: PagewiseClient, plan_id: int, limit: int | None = None) -> dict:
    params = {"limit": limit} if limit is not None else {}
    return await client.get(f"/api/plans/{plan_id}/progress/history", params=params)
