"""Error extraction for load test failure messages.

The storefront API answers every failure with
``{"success": false, "message": "..."}``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from requests import Response


def extract_error_detail(response: Response) -> str:
    """Return the API's error message, or a truncated raw body when it is not JSON."""
    try:
        body = response.json()
    except ValueError:
        text = getattr(response, "text", "") or ""
        return text[:300] or "(empty response body)"

    if isinstance(body, dict) and "message" in body:
        return str(body["message"])
    return str(body)[:300]
