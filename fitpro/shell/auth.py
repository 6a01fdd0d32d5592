"""Auth Service - login and signup endpoints.

Both calls are unauthenticated; storing the returned token is up to the
caller (see SessionStore).
"""

from ..core.models import Credentials, LoginResponse, SignupPayload, VoidResponse
from .api_client import APIClient
from .request_builder import APIRequest, HTTPMethod


class AuthService:
    def __init__(self, api: APIClient) -> None:
        self._api = api

    async def login(self, email: str, password: str) -> LoginResponse:
        """Exchange credentials for a user and bearer token."""
        request = APIRequest(
            path="/api/auth/login",
            method=HTTPMethod.POST,
            body=Credentials(email=email, password=password),
        )
        return await self._api.send(request, LoginResponse)

    async def signup(self, email: str, name: str, age: int, password: str) -> None:
        """Create an account. The backend answers without a payload."""
        request = APIRequest(
            path="/api/auth/signup",
            method=HTTPMethod.POST,
            body=SignupPayload(email=email, name=name, age=age, password=password),
        )
        await self._api.send(request, VoidResponse)
