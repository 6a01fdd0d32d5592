"""Users Service - the logged-in user's profile."""

from ..core.models import UpdateMePayload, User
from .api_client import APIClient
from .request_builder import APIRequest, HTTPMethod


class UsersService:
    def __init__(self, api: APIClient) -> None:
        self._api = api

    async def me(self) -> User:
        request = APIRequest(path="/api/users/me")
        return await self._api.send(request, User)

    async def update_me(self, payload: UpdateMePayload) -> User:
        """Update profile fields; returns the server's canonical profile."""
        request = APIRequest(path="/api/users/me", method=HTTPMethod.PUT, body=payload)
        return await self._api.send(request, User)
