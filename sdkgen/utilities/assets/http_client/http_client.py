from __future__ import annotations

import typing

import httpx

from ..callback_queue import CallbackQueue


class ApiError(Exception):
    """Non-2xx response from the API."""

    def __init__(self, *, status_code: int, body: typing.Any = None):
        self.status_code = status_code
        self.body = body
        super().__init__(f"status_code: {status_code}, body: {body}")


class HttpClient:
    """Async HTTP client shared by all generated service clients."""

    def __init__(
        self,
        *,
        base_url: str,
        headers: typing.Optional[typing.Callable[[], typing.Dict[str, str]]] = None,
        timeout: float = 60,
        client: typing.Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._headers = headers or (lambda: {})
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self._queue = CallbackQueue()

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: typing.Optional[typing.Dict[str, typing.Any]] = None,
        json: typing.Any = None,
        headers: typing.Optional[typing.Dict[str, str]] = None,
    ) -> httpx.Response:
        url = f"{self.base_url}/{path.lstrip('/')}"
        merged = {
            key: value
            for key, value in {**self._headers(), **(headers or {})}.items()
            if value is not None
        }
        params = {key: value for key, value in (params or {}).items() if value is not None}
        return await self._queue.run(
            lambda: self._client.request(method, url, params=params, json=json, headers=merged)
        )

    async def aclose(self) -> None:
        await self._client.aclose()
