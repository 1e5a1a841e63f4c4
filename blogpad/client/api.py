"""Async HTTP client for the Blogpad API."""

import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)

DEFAULT_ERROR_MESSAGE = "An error occurred"
INVALID_RESPONSE_MESSAGE = "Invalid response from server"


class ApiError(Exception):
    """A non-2xx response from the API, carrying the server's message."""

    def __init__(self, message: str, status_code: int | None = None, errors: list | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.errors = errors or []


class BlogApiClient:
    """Client for the authentication and blog endpoints.

    ``login`` and ``register`` remember the returned token and send it as a
    bearer credential on every later call.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000/api",
        token: str | None = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self.transport = transport

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def _request(
        self,
        method: str,
        endpoint: str,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            response = await client.request(
                method,
                f"{self.base_url}{endpoint}",
                json=json,
                params=params,
                headers=self._headers(),
            )

        if response.is_error:
            try:
                body = response.json()
            except ValueError:
                body = {}
            message = body.get("message") if isinstance(body, dict) else None
            errors = body.get("errors") if isinstance(body, dict) else None
            logger.debug(f"{method} {endpoint} failed with {response.status_code}")
            raise ApiError(message or DEFAULT_ERROR_MESSAGE, response.status_code, errors)

        try:
            return response.json()
        except ValueError as e:
            logger.debug(f"{method} {endpoint} returned a non-JSON body")
            raise ApiError(INVALID_RESPONSE_MESSAGE, response.status_code) from e

    # Auth endpoints

    async def register(self, name: str, email: str, password: str) -> dict:
        data = await self._request(
            "POST", "/auth/register", json={"name": name, "email": email, "password": password}
        )
        self.token = data["token"]
        return data

    async def login(self, email: str, password: str) -> dict:
        data = await self._request("POST", "/auth/login", json={"email": email, "password": password})
        self.token = data["token"]
        return data

    def logout(self) -> None:
        """Forget the token; the server keeps no session to end."""
        self.token = None

    async def me(self) -> dict:
        return await self._request("GET", "/auth/me")

    # Blog endpoints

    async def list_blogs(self) -> list[dict]:
        return await self._request("GET", "/blogs")

    async def get_blog(self, blog_id: str) -> dict:
        return await self._request("GET", f"/blogs/{blog_id}")

    async def save_draft(self, title: str, content: str, tags: list[str]) -> dict:
        return await self._request(
            "POST", "/blogs/save-draft", json={"title": title, "content": content, "tags": tags}
        )

    async def publish(self, title: str, content: str, tags: list[str]) -> dict:
        return await self._request(
            "POST", "/blogs/publish", json={"title": title, "content": content, "tags": tags}
        )

    async def update_blog(self, blog_id: str, updates: dict[str, Any]) -> dict:
        return await self._request("PUT", f"/blogs/{blog_id}", json=updates)

    async def delete_blog(self, blog_id: str) -> dict:
        return await self._request("DELETE", f"/blogs/{blog_id}")

    async def search_blogs(self, query: str) -> list[dict]:
        return await self._request("GET", "/blogs/search", params={"query": query})
