from fastmcp import FastMCP

from pagewise.mcp.client import PagewiseClient
from pagewise.mcp.tools.books import register_book as _register_book, get_book as _get_book
from pagewise.mcp.tools.plans import (
    create_plan as _create_plan,
    list_plans as _list_plans,
    get_plan as _get_plan,
    update_plan as _update_plan,
    set_plan_status as _set_plan_status,
    mark_read as _mark_read,
)
from pagewise.mcp.tools.progress import (
    log_daily_progress as _log_daily_progress,
    get_progress_history as _get_progress_history,
)
from pagewise.mcp.tools.reports import plan_dashboard as _plan_dashboard, user_overview as _user_overview


def create_mcp_server(client: PagewiseClient) -> FastMCP:
    mcp = FastMCP(
        name="pagewise",
        instructions=(
            "Pagewise builds day-by-day reading plans for books split into chapters. "
            "Register a book with its chapters, create a plan for a reader level and "
            "daily minutes, then mark days as read and log progress. Books are "
            "identified by title and author, plans by their numeric id."
        ),
    )

    @mcp.tool()
    async def register_book(title: str, author: str, chapters: list[dict], ocr_source: bool = True) -> dict:
        """Register a book with its chapter index. Each chapter needs 'number',
        'title' and optionally 'estimated_pages'."""
        return await _register_book(client, title=title, author=author, chapters=chapters, ocr_source=ocr_source)

    @mcp.tool()
    async def get_book(title: str, author: str) -> dict:
        """Get a book with its chapters and total page count."""
        return await _get_book(client, title=title, author=author)

    @mcp.tool()
    async def create_plan(
        user_id: int,
        title: str,
        author: str,
        reading_level: str,
        daily_minutes: int,
        include_weekends: bool = True,
        start_date: str | None = None,
        target_end_date: str | None = None,
    ) -> dict:
        """Create a reading plan for a registered book. reading_level is one of
        novato, intermedio, profesional or experto. Pages and minutes per day
        are adjusted when they are unrealistic for the level. Dates are YYYY-MM-DD."""
        return await _create_plan(
            client, user_id=user_id, title=title, author=author,
            reading_level=reading_level, daily_minutes=daily_minutes,
            include_weekends=include_weekends, start_date=start_date,
            target_end_date=target_end_date,
        )

    @mcp.tool()
    async def list_plans(user_id: int) -> list[dict]:
        """List all reading plans of a user, newest first."""
        return await _list_plans(client, user_id=user_id)

    @mcp.tool()
    async def get_plan(plan_id: int, user_id: int | None = None) -> dict:
        """Get a plan with its daily details and statistics."""
        return await _get_plan(client, plan_id=plan_id, user_id=user_id)

    @mcp.tool()
    async def update_plan(
        plan_id: int,
        user_id: int | None = None,
        reading_level: str | None = None,
        daily_minutes: int | None = None,
        include_weekends: bool | None = None,
        title: str | None = None,
        regenerate: bool = True,
    ) -> dict:
        """Change a plan. Changing reading_level, daily_minutes or include_weekends
        rebuilds the unread part of the schedule; read days are kept."""
        return await _update_plan(
            client, plan_id=plan_id, user_id=user_id, reading_level=reading_level,
            daily_minutes=daily_minutes, include_weekends=include_weekends,
            title=title, regenerate=regenerate,
        )

    @mcp.tool()
    async def set_plan_status(plan_id: int, status: str, user_id: int | None = None) -> dict:
        """Set a plan's status: ACTIVO, PAUSADO, COMPLETADO or CANCELADO."""
        return await _set_plan_status(client, plan_id=plan_id, status=status, user_id=user_id)

    @mcp.tool()
    async def mark_read(
        plan_id: int,
        detail_ids: list[int],
        user_id: int | None = None,
        actual_minutes: int | None = None,
        difficulty: int | None = None,
    ) -> dict:
        """Mark plan details as read. Difficulty is 1-5."""
        return await _mark_read(
            client, plan_id=plan_id, detail_ids=detail_ids, user_id=user_id,
            actual_minutes=actual_minutes, difficulty=difficulty,
        )

    @mcp.tool()
    async def log_daily_progress(
        plan_id: int,
        progress_date: str,
        pages_read: int = 0,
        minutes_spent: int = 0,
        day_status: str | None = None,
        day_percent: float | None = None,
        notes: str | None = None,
    ) -> dict:
        """Record (or overwrite) the progress of one day of a plan. The date is
        YYYY-MM-DD; status is derived from day_percent when not given."""
        return await _log_daily_progress(
            client, plan_id=plan_id, progress_date=progress_date,
            pages_read=pages_read, minutes_spent=minutes_spent,
            day_status=day_status, day_percent=day_percent, notes=notes,
        )

    @mcp.tool()
    async def get_progress_history(plan_id: int, limit: int | None = None) -> dict:
        """Get the daily progress history of a plan with streaks and averages."""
        return await _get_progress_history(client, plan_id=plan_id, limit=limit)

    @mcp.tool()
    async def plan_dashboard(plan_id: int) -> dict:
        """Get velocity, consistency, upcoming tasks, predicted finish date,
        alerts and recommendations for a plan."""
        return await _plan_dashboard(client, plan_id=plan_id)

    @mcp.tool()
    async def user_overview(user_id: int) -> dict:
        """Get a user's plans by status, totals and compliance trend."""
        return await _user_overview(client, user_id=user_id)

    return mcp
