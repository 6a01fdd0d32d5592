"""Client configuration read from the environment."""

import os
from dataclasses import dataclass


DEFAULT_BASE_URL = "http://localhost:4000"


@dataclass
class APIConfig:
    """Configuration for the API client and the token store.

    Attributes:
        base_url: Backend address; use the machine's LAN IP from a real device
        keyring_service: Secure-store service name for the session token
        keyring_account: Secure-store account name for the session token
    """

    base_url: str = DEFAULT_BASE_URL
    keyring_service: str = "fitpro"
    keyring_account: str = "session-token"

    @classmethod
    def from_env(cls) -> "APIConfig":
        return cls(
            base_url=os.environ.get("FITPRO_API_BASE_URL", DEFAULT_BASE_URL),
            keyring_service=os.environ.get("FITPRO_KEYRING_SERVICE", "fitpro"),
            keyring_account=os.environ.get("FITPRO_KEYRING_ACCOUNT", "session-token"),
        )
