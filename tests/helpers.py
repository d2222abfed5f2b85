"""
Request helpers shared by the API tests.
"""

from __future__ import annotations

from typing import Any, Dict

import httpx

GOOD_PASSWORD = "GoodPass1"


async def signup(
    client: httpx.AsyncClient,
    email: str,
    full_name: str = "Test User",
    password: str = GOOD_PASSWORD,
) -> Dict[str, Any]:
    """Register a user and return the response body (token + user)."""
    resp = await client.post(
        "/api/signup",
        json={"fullName": full_name, "email": email, "password": password},
    )
    assert resp.status_code == 201, resp.text
    return resp.json()


def bearer(token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
