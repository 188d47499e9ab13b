"""Transport for provider documents

This package contains the outbound side of the client: turning a profile URL
into a decoded JSON document. Normalization lives in ``rl_tracker.api``.

**Available Fetchers**:
- TrackerFetcher: tracker.gg public profile endpoint
"""

from .tracker import TrackerFetcher

__all__ = ["TrackerFetcher"]
