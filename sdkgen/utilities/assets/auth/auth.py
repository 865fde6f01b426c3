from __future__ import annotations

import base64


def bearer_auth_header(token: str) -> str:
    return f"Bearer {token}"


def basic_auth_header(username: str, password: str) -> str:
    credentials = base64.b64encode(f"{username}:{password}".encode("utf-8")).decode("ascii")
    return f"Basic {credentials}"
