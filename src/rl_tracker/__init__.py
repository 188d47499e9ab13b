"""Rocket League Tracker Stats Client

Fetches a player's competitive profile from the tracker.gg public endpoint
and normalizes it into typed views (overview, ranked playlists, identity).
"""

from .api import Platform, Snapshot, create_snapshot
from .errors import (
    FetchError,
    NotLoadedError,
    ParseError,
    ProviderError,
    SegmentNotFoundError,
    TrackerError,
)
from .schemas import AllStats, OverviewStats, PlaylistStats, Userinfo

__version__ = "0.1.0"
__all__ = [
    "AllStats",
    "FetchError",
    "NotLoadedError",
    "OverviewStats",
    "ParseError",
    "Platform",
    "PlaylistStats",
    "ProviderError",
    "SegmentNotFoundError",
    "Snapshot",
    "TrackerError",
    "Userinfo",
    "create_snapshot",
]
