from __future__ import annotations
import asyncio
import time
from typing import AsyncIterator, Dict, Any
import httpx

TMDB_BASE = "https://api.themoviedb.org/3"
DETAIL_APPENDS = "release_dates,keywords,credits"


class TMDBClient:
    def __init__(self, api_key: str, timeout: float = 15.0, rate_per_sec: float = 3.0):
        self.api_key = api_key
        self.timeout = timeout
        self.rate = rate_per_sec
        self._last = 0.0
        self._client = httpx.AsyncClient(timeout=self.timeout)

    async def _throttle(self):
        dt = time.time() - self._last
        min_gap = 1.0 / max(self.rate, 1e-6)
        if dt < min_gap:
            await asyncio.sleep(min_gap - dt)
        self._last = time.time()

    async def _get(self, path: str, params: Dict[str, Any]) -> Dict[str, Any]:
        await self._throttle()
        q = dict(params)
        q["api_key"] = self.api_key
        r = await self._client.get(f"{TMDB_BASE}{path}", params=q)
        r.raise_for_status()
        return r.json()

    async def iter_upcoming(
        self, pages: int, region: str | None = None
    ) -> AsyncIterator[Dict[str, Any]]:
        """Yield upcoming theatrical releases, page by page."""
        params: Dict[str, Any] = {"language": "en-US"}
        if region:
            params["region"] = region
        for page in range(1, pages + 1):
            data = await self._get("/movie/upcoming", {**params, "page": page})
            for it in data.get("results", []):
                yield it
            if page >= int(data.get("total_pages") or page):
                break

    async def details(self, tmdb_id: int) -> Dict[str, Any]:
        return await self._get(
            f"/movie/{tmdb_id}",
            {"language": "en-US", "append_to_response": DETAIL_APPENDS},
        )

    async def aclose(self):
        await self._client.aclose()
