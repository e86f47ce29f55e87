"""
HTTP helpers shared by the outbound API clients (NewsAPI, Resend).
"""

from typing import Any, Dict

import httpx


def json_or_empty(response: httpx.Response) -> Dict[str, Any]:
    """Decoded JSON object body, or {} when the body is missing, invalid or not an object."""
    try:
        data = response.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}
