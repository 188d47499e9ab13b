"""
Pytest configuration and shared fixtures for tracker client tests.

This module provides reusable fixtures that:
1. Build realistic provider documents (success and error envelopes)
2. Provide an in-memory fetcher so no test touches the network
3. Provide loaded snapshots ready for projection tests

Usage:
    def test_something(loaded_snapshot):
        assert loaded_snapshot.overview().goals == 1520
"""

import copy
import os
import sys
from typing import Any

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src")))

from rl_tracker.api import Snapshot  # noqa: E402

# ============================================================================
# Sample Documents
# ============================================================================


def stat(value: Any, display_value: str | None = None, **metadata: Any) -> dict[str, Any]:
    """One provider stat record."""
    return {
        "rank": None,
        "percentile": 50.0,
        "displayName": "Stat",
        "value": value,
        "displayValue": str(value) if display_value is None else display_value,
        "displayType": "Number",
        "metadata": metadata,
    }


def playlist_segment(
    name: str,
    *,
    rating: int,
    tier: int,
    tier_name: str,
    division: int,
    win_streak: str = "0",
    delta_up: int | None = 12,
    delta_down: int | None = 8,
) -> dict[str, Any]:
    division_meta: dict[str, Any] = {"name": f"Division {division + 1}"}
    if delta_up is not None:
        division_meta["deltaUp"] = delta_up
    if delta_down is not None:
        division_meta["deltaDown"] = delta_down

    return {
        "type": "playlist",
        "attributes": {"playlistId": 10, "season": 27},
        "metadata": {"name": name},
        "expiryDate": "2026-10-18T12:00:00+00:00",
        "stats": {
            "tier": stat(tier, tier_name, iconUrl="https://example.invalid/t.png", name=tier_name),
            "division": stat(division, f"Division {division + 1}", **division_meta),
            "matchesPlayed": stat(118),
            "winStreak": stat(-1, win_streak, type="win"),
            "rating": stat(rating),
            "peakRating": stat(rating + 40),
        },
    }


def build_document() -> dict[str, Any]:
    """A successful profile document with an overview and four playlists."""
    return {
        "data": {
            "platformInfo": {
                "platformSlug": "epic",
                "platformUserId": "6d1b0c4e-0a2f-4b8e-9d8e-123456789abc",
                "platformUserHandle": "SomePlayer",
                "platformUserIdentifier": "SomePlayer",
                "avatarUrl": "https://example.invalid/avatar.png",
                "additionalParameters": None,
            },
            "userInfo": {"userId": None, "isPremium": False},
            "metadata": {"lastUpdated": {"value": "2026-10-18T11:00:00+00:00"}},
            "segments": [
                {
                    "type": "overview",
                    "attributes": {},
                    "metadata": {"name": "Lifetime"},
                    "expiryDate": "2026-10-18T12:00:00+00:00",
                    "stats": {
                        "wins": stat(640),
                        "goals": stat(1520),
                        "mVPs": stat(301),
                        "saves": stat(980),
                        "assists": stat(702),
                        "shots": stat(4100),
                        "goalShotRatio": stat(37.07),
                        "score": stat(512345),
                        "seasonRewardLevel": stat(5, "Diamond"),
                        "seasonRewardWins": stat(10),
                        "tRNRating": stat(1032.5),
                    },
                },
                playlist_segment(
                    "Ranked Duel 1v1",
                    rating=845,
                    tier=10,
                    tier_name="Platinum III",
                    division=2,
                    win_streak="7",
                ),
                playlist_segment(
                    "Ranked Doubles 2v2",
                    rating=1105,
                    tier=14,
                    tier_name="Diamond III",
                    division=0,
                    win_streak="0",
                    delta_up=None,
                    delta_down=None,
                ),
                playlist_segment(
                    "Ranked Standard 3v3",
                    rating=998,
                    tier=12,
                    tier_name="Diamond I",
                    division=3,
                    win_streak="00",
                    delta_down=0,
                ),
                playlist_segment(
                    "Rumble",
                    rating=760,
                    tier=9,
                    tier_name="Platinum II",
                    division=1,
                    win_streak="2",
                ),
            ],
            "availableSegments": [],
        }
    }


def build_error_document(*messages: str) -> dict[str, Any]:
    """A provider error envelope with one entry per message."""
    return {
        "errors": [
            {"code": "CollectorResultStatus::NotFound", "message": message, "data": {}}
            for message in messages
        ]
    }


class FakeFetcher:
    """In-memory stand-in for TrackerFetcher; records every requested URL."""

    def __init__(
        self, document: Any = None, exc: Exception | None = None, shared: bool = False
    ) -> None:
        self.document = document
        self.exc = exc
        # hand back the stored object itself instead of a copy
        self.shared = shared
        self.urls: list[str] = []

    async def fetch(self, url: str) -> Any:
        self.urls.append(url)
        if self.exc is not None:
            raise self.exc
        if self.shared:
            return self.document
        return copy.deepcopy(self.document)


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def profile_document() -> dict[str, Any]:
    """Fresh copy of the successful sample document."""
    return build_document()


@pytest.fixture
def loaded_snapshot(profile_document) -> Snapshot:
    """Snapshot loaded from the sample document."""
    return Snapshot.from_document("epic", "SomePlayer", profile_document)


@pytest.fixture
def fake_fetcher_factory():
    """
    Factory for FakeFetcher instances.

    Example:
        def test_x(fake_fetcher_factory):
            fetcher = fake_fetcher_factory(document={"data": {...}})
    """
    return FakeFetcher


@pytest.fixture
def error_document_factory():
    return build_error_document


@pytest.fixture
def playlist_segment_factory():
    return playlist_segment
