"""Configuration for the Semantic Scholar client."""

import os
from dataclasses import dataclass, field
from typing import Optional

from dotenv import load_dotenv

from .errors import S2ApiKeyNotFoundError

load_dotenv()

API_KEY_ENV = "SEMANTIC_SCHOLAR_API_KEY"
DEFAULT_BASE_URL = "https://api.semanticscholar.org/graph/v1"


@dataclass
class SemanticScholarConfig:
    """Configuration for Semantic Scholar Graph API access.

    The API works without a key at a lower shared rate limit.

    Environment Variables:
        SEMANTIC_SCHOLAR_API_KEY: API key sent as x-api-key (optional)
        SEMANTIC_SCHOLAR_BASE_URL: API root (default: graph/v1)
        SEMANTIC_SCHOLAR_TIMEOUT: Request timeout in seconds (default: 30)
    """

    api_key: Optional[str] = field(default_factory=lambda: os.environ.get(API_KEY_ENV) or None)
    base_url: str = field(
        default_factory=lambda: os.environ.get("SEMANTIC_SCHOLAR_BASE_URL", DEFAULT_BASE_URL)
    )
    timeout: float = field(
        default_factory=lambda: float(os.environ.get("SEMANTIC_SCHOLAR_TIMEOUT", "30"))
    )

    @classmethod
    def from_env(cls, require_api_key: bool = True) -> "SemanticScholarConfig":
        """Build config from the environment.

        Raises:
            S2ApiKeyNotFoundError: require_api_key is set and
                SEMANTIC_SCHOLAR_API_KEY is missing
        """
        if require_api_key and not os.environ.get(API_KEY_ENV):
            raise S2ApiKeyNotFoundError(API_KEY_ENV)
        return cls()


_config: SemanticScholarConfig | None = None


def get_semantic_scholar_config() -> SemanticScholarConfig:
    """Get global SemanticScholarConfig instance."""
    global _config
    if _config is None:
        _config = SemanticScholarConfig()
    return _config
