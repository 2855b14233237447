from __future__ import annotations

"""Lightweight async HTTP helper for the rate provider.

Single GET, no retries: retrying is a user decision made on the screen.
A caller-supplied ``httpx.AsyncClient`` is reused (tests inject one backed by
``httpx.MockTransport``); otherwise a short-lived client is opened per call.
"""
import json
from typing import Any, Dict, Optional

import httpx


class HttpError(Exception):
    pass


async def get_json(
    url: str,
    *,
    params: Optional[Dict[str, str]] = None,
    timeout: float = 5.0,
    client: Optional[httpx.AsyncClient] = None,
) -> Any:
    """GET ``url`` and decode the body as JSON.

    Raises HttpError on transport failure or HTTP status >= 400, and
    ValueError when the body is not valid JSON.
    """
    try:
        if client is not None:
            resp = await client.get(url, params=params, timeout=timeout)
        else:
            async with httpx.AsyncClient(timeout=timeout) as owned:
                resp = await owned.get(url, params=params)
    except httpx.HTTPError as e:
        raise HttpError(f"Failed to fetch {url}: {e}") from e
    if resp.status_code >= 400:
        raise HttpError(f"HTTP {resp.status_code} for {resp.request.url}")
    try:
        return json.loads(resp.content.decode("utf-8"))
    except UnicodeDecodeError as e:
        raise ValueError(f"response body is not UTF-8: {e}") from e
