"""Tests for MCP tools. Each test gets a PagewiseClient backed by the
test httpx client fixture, seeds data via the API, then calls the tool
function directly."""

import pytest
from pagewise.mcp.client import PagewiseClient
from pagewise.mcp.tools.books import register_book, get_book
from pagewise.mcp.tools.plans import create_plan, list_plans, get_plan, update_plan, set_plan_status, mark_read
from pagewise.mcp.tools.progress import log_daily_progress, get_progress_history
from pagewise.mcp.tools.reports import plan_dashboard, user_overview

TITLE = "Cien años de soledad"
AUTHOR = "Gabriel García Márquez"


@pytest.fixture
def pw(client):
    return PagewiseClient(client)


@pytest.fixture
async def registered(pw, book_payload):
    return await register_book(pw, title=TITLE, author=AUTHOR, chapters=book_payload["chapters"])


async def _plan(pw, **kwargs):
    result = await create_plan(
        pw, user_id=1, title=TITLE, author=AUTHOR,
        reading_level=kwargs.pop("reading_level", "intermedio"),
        daily_minutes=kwargs.pop("daily_minutes", 30),
        start_date="2025-01-01", **kwargs,
    )
    return result["plan"]


# --- books ---

@pytest.mark.asyncio
async def test_register_and_get_book(pw, registered):
    assert registered["total_pages"] == 100
    result = await get_book(pw, title=TITLE, author=AUTHOR)
    assert result["id"] == registered["id"]
    assert [c["title"] for c in result["chapters"]] == ["Macondo", "La peste del insomnio", "Los diecisiete Aurelianos"]


@pytest.mark.asyncio
async def test_get_book_not_found(pw):
    result = await get_book(pw, title="Nope", author="Nobody")
    assert result["error"] is True
    assert result["status"] == 404


# --- plans ---

@pytest.mark.asyncio
async def test_create_plan_by_title(pw, registered):
    result = await create_plan(
        pw, user_id=1, title=TITLE, author=AUTHOR,
        reading_level="experto", daily_minutes=90, start_date="2025-01-01",
    )
    assert result["adjusted"] is True
    assert result["plan"]["book_id"] == registered["id"]
    assert result["plan"]["pages_per_day"] == 40


@pytest.mark.asyncio
async def test_create_plan_unknown_book(pw):
    result = await create_plan(pw, user_id=1, title="Nope", author="Nobody", reading_level="novato", daily_minutes=20)
    assert result["status"] == 404


@pytest.mark.asyncio
async def test_list_plans(pw, registered):
    plan = await _plan(pw)
    result = await list_plans(pw, user_id=1)
    assert [p["id"] for p in result] == [plan["id"]]
    assert await list_plans(pw, user_id=2) == []


@pytest.mark.asyncio
async def test_get_plan_checks_owner(pw, registered):
    plan = await _plan(pw)
    result = await get_plan(pw, plan_id=plan["id"], user_id=1)
    assert len(result["details"]) == 11
    result = await get_plan(pw, plan_id=plan["id"], user_id=2)
    assert result["status"] == 403


@pytest.mark.asyncio
async def test_update_plan_regenerates(pw, registered):
    plan = await _plan(pw)
    result = await update_plan(pw, plan_id=plan["id"], reading_level="experto", daily_minutes=40)
    assert result["regenerated"] is True
    assert result["plan"]["pages_per_day"] == 20


@pytest.mark.asyncio
async def test_set_plan_status(pw, registered):
    plan = await _plan(pw)
    result = await set_plan_status(pw, plan_id=plan["id"], status="pausado")
    assert result["status"] == "PAUSADO"


@pytest.mark.asyncio
async def test_mark_read(pw, registered):
    plan = await _plan(pw)
    details = (await get_plan(pw, plan_id=plan["id"]))["details"]
    result = await mark_read(pw, plan_id=plan["id"], detail_ids=[details[0]["id"]], difficulty=2)
    assert result["marked"] == 1
    assert result["details"][0]["difficulty"] == 2


# --- progress ---

@pytest.mark.asyncio
async def test_log_daily_progress_and_history(pw, registered):
    plan = await _plan(pw)
    result = await log_daily_progress(
        pw, plan_id=plan["id"], progress_date="2025-01-01",
        pages_read=10, minutes_spent=30, day_status="completado",
    )
    assert result["completed"] is True

    history = await get_progress_history(pw, plan_id=plan["id"])
    assert history["statistics"]["total_days"] == 1


@pytest.mark.asyncio
async def test_log_completed_day_with_low_percent(pw, registered):
    plan = await _plan(pw)
    result = await log_daily_progress(
        pw, plan_id=plan["id"], progress_date="2025-01-01", day_status="COMPLETADO", day_percent=60,
    )
    assert result["error"] is True
    assert result["status"] == 422


# --- reports ---

@pytest.mark.asyncio
async def test_plan_dashboard(pw, registered):
    plan = await _plan(pw)
    result = await plan_dashboard(pw, plan_id=plan["id"])
    assert result["prediction"]["on_track"] is True
    assert len(result["upcoming_tasks"]) == 5


@pytest.mark.asyncio
async def test_user_overview(pw, registered):
    await _plan(pw)
    result = await user_overview(pw, user_id=1)
    assert result["plans"]["total_plans"] == 1
    assert result["profile"]["reading_level"] == 10
