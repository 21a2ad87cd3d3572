from __future__ import annotations

"""Lightweight async HTTP helper.

GET JSON with a single attempt. Callers that poll on a schedule treat the
next tick as the retry, so there is no backoff loop here.
"""
from typing import Any, Dict, Optional

import httpx


class HttpError(Exception):
    pass


async def get_json(
    url: str,
    *,
    client: Optional[httpx.AsyncClient] = None,
    timeout: float = 5.0,
) -> Dict[str, Any]:
    """Fetch `url` and decode a JSON object body.

    Any transport failure, non-2xx status or non-object body is raised as HttpError.
    """
    try:
        if client is None:
            async with httpx.AsyncClient(timeout=timeout) as own_client:
                resp = await own_client.get(url)
        else:
            resp = await client.get(url, timeout=timeout)
        resp.raise_for_status()
        data = resp.json()
    except (httpx.HTTPError, ValueError) as e:  # ValueError for JSON decode
        raise HttpError(f"Failed to fetch JSON from {url}: {e}") from e
    if not isinstance(data, dict):
        raise HttpError(f"Expected JSON object from {url}, got {type(data).__name__}")
    return data
