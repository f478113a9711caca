from httpx import AsyncClient, Response


def _describe(detail) -> str:
    """Flatten FastAPI's validation error list into one readable line."""
    if not isinstance(detail, list):
        return str(detail)
    parts = []
    for item in detail:
        loc = ".".join(str(p) for p in item.get("loc", ()) if p != "body")
        parts.append(f"{loc}: {item.get('msg', '')}" if loc else item.get("msg", ""))
    return "; ".join(parts)


class PagewiseClient:
    """Calls the pagewise API and shapes its responses into dicts for MCP tools.

    Domain errors come back as ``{"error": True, "status", "detail"}`` so the
    model can read them; a stale plan version also carries ``"retry": True``.
    Server errors raise.
    """

    def __init__(self, http: AsyncClient) -> None:
        self.http = http

    async def get(self, path: str, **kwargs) -> dict | list:
        return self._handle(await self.http.get(path, **kwargs))

    async def post(self, path: str, **kwargs) -> dict | list:
        return self._handle(await self.http.post(path, **kwargs))

    async def put(self, path: str, **kwargs) -> dict | list:
        return self._handle(await self.http.put(path, **kwargs))

    async def patch(self, path: str, **kwargs) -> dict | list:
        return self._handle(await self.http.patch(path, **kwargs))

    async def delete(self, path: str, **kwargs) -> dict | list:
        return self._handle(await self.http.delete(path, **kwargs))

    def _handle(self, resp: Response) -> dict | list:
        if resp.status_code == 204:
            return {"ok": True}
        if resp.status_code >= 500:
            raise RuntimeError(f"Server error {resp.status_code}: {resp.text}")
        if resp.status_code >= 400:
            body = resp.json()
            error = {"error": True, "status": resp.status_code, "detail": _describe(body.get("detail", resp.text))}
            if body.get("retryable"):
                error["retry"] = True
            return error
        return resp.json()
