"""Configuration for the Connected Papers client."""

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

from .errors import ApiKeyNotFoundError

load_dotenv()

API_KEY_ENV = "CONNECTED_PAPERS_API_KEY"

# Public demo token; only works for the free-access papers
DEFAULT_API_KEY = "TEST_TOKEN"
DEFAULT_BASE_URL = "https://rest.prod.connectedpapers.com/papers-api"

# Delays before each extra attempt when the service reports OVERLOADED
OVERLOAD_RETRY_DELAYS: tuple[float, ...] = (5.0, 10.0, 20.0, 40.0)


@dataclass
class ConnectedPapersConfig:
    """Configuration for Connected Papers access.

    Environment Variables:
        CONNECTED_PAPERS_API_KEY: API key sent as X-Api-Key (default: TEST_TOKEN)
        CONNECTED_PAPERS_BASE_URL: API root (default: production papers-api)
        CONNECTED_PAPERS_TIMEOUT: Request timeout in seconds (default: 90)
        CONNECTED_PAPERS_POLL_INTERVAL: Seconds between polls while a graph
            builds (default: 1)
    """

    api_key: str = field(
        default_factory=lambda: os.environ.get(API_KEY_ENV, DEFAULT_API_KEY)
    )
    base_url: str = field(
        default_factory=lambda: os.environ.get("CONNECTED_PAPERS_BASE_URL", DEFAULT_BASE_URL)
    )
    timeout: float = field(
        default_factory=lambda: float(os.environ.get("CONNECTED_PAPERS_TIMEOUT", "90"))
    )
    poll_interval: float = field(
        default_factory=lambda: float(os.environ.get("CONNECTED_PAPERS_POLL_INTERVAL", "1"))
    )
    overload_retry_delays: tuple[float, ...] = OVERLOAD_RETRY_DELAYS

    @property
    def uses_demo_token(self) -> bool:
        """Check if requests go out with the public demo token."""
        return self.api_key == DEFAULT_API_KEY

    @classmethod
    def from_env(cls, require_api_key: bool = True) -> "ConnectedPapersConfig":
        """Build config from the environment.

        Raises:
            ApiKeyNotFoundError: require_api_key is set and
                CONNECTED_PAPERS_API_KEY is missing
        """
        if require_api_key and not os.environ.get(API_KEY_ENV):
            raise ApiKeyNotFoundError(API_KEY_ENV)
        return cls()


_config: ConnectedPapersConfig | None = None


def get_connected_papers_config() -> ConnectedPapersConfig:
    """Get global ConnectedPapersConfig instance."""
    global _config
    if _config is None:
        _config = ConnectedPapersConfig()
    return _config
