from pagewise.id import make_id
from pagewise.mcp.client import PagewiseClient


def _owner(user_id: int | None) -> dict:
    return {"user_id": user_id} if user_id is not None else {}


async def create_plan(
    client: PagewiseClient,
    user_id: int,
    title: str,
    author: str,
    reading_level: str | int,
    daily_minutes: int,
    include_weekends: bool = True,
    start_date: str | None = None,
    target_end_date: str | None = None,
) -> dict:
    body = {
        "user_id": user_id,
        "book_id": make_id(title, author),
        "reading_level": reading_level,
        "daily_minutes": daily_minutes,
        "include_weekends": include_weekends,
    }
    if start_date is not None:
        body["start_date"] = start_date
    if target_end_date is not None:
        body["target_end_date"] = target_end_date
    return await client.post("/api/plans", json=body)


async def list_plans(client: PagewiseClient, user_id: int) -> list[dict]:
    result = await client.get(f"/api/plans/user/{user_id}")
    if isinstance(result, dict) and result.get("error"):
        return []
    return result


async def get_plan(client: PagewiseClient, plan_id: int, user_id: int | None = None) -> dict:
    return await client.get(f"/api/plans/{plan_id}", params=_owner(user_id))


async def update_plan(
    client: PagewiseClient,
    plan_id: int,
    user_id: int | None = None,
    reading_level: str | int | None = None,
    daily_minutes: int | None = None,
    include_weekends: bool | None = None,
    title: str | None = None,
    regenerate: bool = True,
) -> dict:
    body = {"regenerate": regenerate}
    if reading_level is not None:
        body["reading_level"] = reading_level
    if daily_minutes is not None:
        body["daily_minutes"] = daily_minutes
    if include_weekends is not None:
        body["include_weekends"] = include_weekends
    if title is not None:
        body["title"] = title
    return await client.put(f"/api/plans/{plan_id}", json=body, params=_owner(user_id))


async def set_plan_status(
    client: PagewiseClient,
    plan_id: int,
    status: str,
    user_id: int | None = None,
) -> dict:
    return await client.patch(
        f"/api/plans/{plan_id}/status", json={"status": status.upper()}, params=_owner(user_id)
    )


async def mark_read(
    client: PagewiseClient,
    plan_id: int,
    detail_ids: list[int],
    user_id: int | None = None,
    actual_minutes: int | None = None,
    difficulty: int | None = None,
) -> dict:
    body = {"detail_ids": detail_ids}
    if actual_minutes is not None:
        body["actual_minutes"] = actual_minutes
    if difficulty is not None:
        body["difficulty"] = difficulty
    return await client.post(f"/api/plans/{plan_id}/details/mark-read", json=body, params=_owner(user_id))
