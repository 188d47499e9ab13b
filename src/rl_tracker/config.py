"""
Configuration management for the tracker client.

Provides centralized configuration for the document fetcher and the CLI.
"""

import os

from pydantic import BaseModel, Field

DEFAULT_BASE_URL = (
    "https://api.tracker.gg/api/v2/rocket-league/standard/profile/{platform}/{username}"
)


class TrackerConfig(BaseModel):
    """Configuration for fetching profile documents."""

    base_url: str = Field(
        default=DEFAULT_BASE_URL,
        description="Profile URL template with {platform} and {username} placeholders",
    )

    timeout_seconds: float = Field(default=5.0, description="Request timeout in seconds", ge=1)

    user_agent: str = Field(default="Chrome/121", description="User-Agent header sent upstream")

    log_level: str = Field(default="info", description="Logging level")

    @classmethod
    def from_env(cls) -> "TrackerConfig":
        """
        Load configuration from environment variables.

        Environment variables:
            RL_TRACKER_BASE_URL: Profile URL template (default: tracker.gg profile endpoint)
            RL_TRACKER_TIMEOUT: Request timeout in seconds (default: 5)
            RL_TRACKER_USER_AGENT: User-Agent header (default: Chrome/121)
            RL_TRACKER_LOG_LEVEL: Log level (default: info)

        Returns:
            TrackerConfig instance
        """
        return cls(
            base_url=os.getenv("RL_TRACKER_BASE_URL", DEFAULT_BASE_URL),
            timeout_seconds=float(os.getenv("RL_TRACKER_TIMEOUT", "5")),
            user_agent=os.getenv("RL_TRACKER_USER_AGENT", "Chrome/121"),
            log_level=os.getenv("RL_TRACKER_LOG_LEVEL", "info"),
        )

    def profile_url(self, platform_slug: str, username: str) -> str:
        """Fill the URL template. The username is inserted verbatim."""
        return self.base_url.replace("{platform}", platform_slug).replace("{username}", username)


# Global config instance
_config: TrackerConfig | None = None


def get_config() -> TrackerConfig:
    """Get the global configuration instance, loading it from the environment once."""
    global _config
    if _config is None:
        _config = TrackerConfig.from_env()
    return _config


def set_config(config: TrackerConfig) -> None:
    """Set a custom configuration instance"""
    global _config
    _config = config
