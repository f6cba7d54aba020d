"""
Port (interface) for secret stores.
Used at startup to provide API keys (e.g. AIRSTACK_API_KEY) without keeping them in .env files.
"""

from abc import ABC, abstractmethod


class ISecretStore(ABC):
    @abstractmethod
    def get_secret(self, secret_id: str) -> dict:
        """Fetch a JSON secret by ARN or name and return its key-value pairs."""
        ...

    @abstractmethod
    def load_into_env(self, secret_id: str, overwrite: bool = False) -> list[str]:
        """Export the secret's keys as environment variables and return the names set."""
        ...
