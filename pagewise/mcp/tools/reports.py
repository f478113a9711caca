from pagewise.mcp.client import PagewiseClient


async def plan_dashboard(client: PagewiseClient, plan_id: int) -> dict:
    return await client.get(f"/api/reports/plans/{plan_id}/dashboard")


async def user_overview(client: PagewiseClient, user_id: int) -> dict:
    return await client.get(f"/api/reports/users/{user_id}/overview")
