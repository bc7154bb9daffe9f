"""
Lifeclock HTTP client - the consumer side of the estimate API.

Used to drive a CountdownRun from outside the server process: it logs in,
fetches estimates and turns error responses back into Lifeclock errors.
"""

import httpx
from typing import Any, Dict, Optional

from ..core.exceptions import ERRORS_BY_CODE, LifeclockError
from ..models import CountdownResponse, LifeExpectancyResponse, Profile, ProfileUpdate


class LifeclockClient:
    """Async client for the Lifeclock REST API."""

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            base_url: Server root, e.g. "http://localhost:8000"
            token: Bearer token from a previous login
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests use MockTransport)
        """
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self._transport = transport

    def _headers(self) -> Dict[str, str]:
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}

    async def _request(self, method: str, path: str, json: Optional[dict] = None) -> Any:
        async with httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self._transport,
        ) as client:
            resp = await client.request(method, path, json=json, headers=self._headers())

        if resp.is_error:
            raise self._to_error(resp)
        return resp.json()

    @staticmethod
    def _to_error(resp: httpx.Response) -> Exception:
        """Map an error response to the matching LifeclockError subclass."""
        try:
            payload = resp.json()
        except ValueError:
            payload = {}

        error_cls = ERRORS_BY_CODE.get(payload.get("code")) if isinstance(payload, dict) else None
        detail = payload.get("detail") if isinstance(payload, dict) else None
        if error_cls is not None:
            return error_cls(detail)

        error = LifeclockError(str(detail or resp.text or resp.reason_phrase))
        error.status_code = resp.status_code
        return error

    async def register(self, email: str, password: str) -> str:
        data = await self._request("POST", "/auth/register", {"email": email, "password": password})
        self.token = data["access_token"]
        return self.token

    async def login(self, email: str, password: str) -> str:
        data = await self._request("POST", "/auth/login", {"email": email, "password": password})
        self.token = data["access_token"]
        return self.token

    def logout(self) -> None:
        """Discard the token. Sessions are stateless, so the server is not called."""
        self.token = None

    async def update_profile(self, update: ProfileUpdate) -> Profile:
        payload = update.model_dump(mode="json", by_alias=True, exclude_none=True)
        data = await self._request("PUT", "/user/profile", payload)
        return Profile.model_validate(data)

    async def fetch_life_expectancy(self) -> LifeExpectancyResponse:
        data = await self._request("GET", "/user/life-expectancy")
        return LifeExpectancyResponse.model_validate(data)

    async def fetch_countdown(self) -> CountdownResponse:
        data = await self._request("GET", "/user/countdown")
        return CountdownResponse.model_validate(data)
