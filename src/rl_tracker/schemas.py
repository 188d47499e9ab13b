"""Tracker document and projection schemas

Two groups of pydantic models live here:

**Provider shapes** (validated at the fetch/parse boundary):
- TrackerResponse: top-level envelope (``data`` + ``errors``)
- TrackerData: ``platformInfo`` + ``segments``
- Segment / StatValue: one stat category and one measured quantity

Provider models allow extra fields so nothing the upstream sends is lost.

**Projection shapes** (what the client hands back):
- OverviewStats: overall performance
- PlaylistStats: one ranked playlist
- Userinfo: account identity
- AllStats: overview + every playlist keyed by name

Projection models are frozen. Their optional ``raw`` field holds the matched
segment exactly as the provider sent it; it is only *set* when the caller
asked for it, so ``to_dict()`` omits it otherwise.
"""

from __future__ import annotations

from typing import Any

import pandas as pd
from pydantic import BaseModel, ConfigDict, Field

# ==============================================================================
# Provider Shapes
# ==============================================================================


class StatValue(BaseModel):
    """One measured quantity inside a segment's ``stats`` mapping."""

    model_config = ConfigDict(extra="allow", populate_by_name=True, coerce_numbers_to_str=True)

    value: Any = None
    display_value: str | None = Field(default=None, alias="displayValue")
    metadata: dict[str, Any] = Field(default_factory=dict)


class SegmentMetadata(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str | None = None


class Segment(BaseModel):
    """A named, typed sub-section of the document ("overview" or "playlist")."""

    model_config = ConfigDict(extra="allow")

    type: str | None = None
    metadata: SegmentMetadata = Field(default_factory=SegmentMetadata)
    stats: dict[str, StatValue] = Field(default_factory=dict)


class PlatformInfo(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True, coerce_numbers_to_str=True)

    platform_slug: str | None = Field(default=None, alias="platformSlug")
    platform_user_id: str | None = Field(default=None, alias="platformUserId")
    platform_user_handle: str | None = Field(default=None, alias="platformUserHandle")
    platform_user_identifier: str | None = Field(default=None, alias="platformUserIdentifier")
    avatar_url: str | None = Field(default=None, alias="avatarUrl")


class TrackerData(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    platform_info: PlatformInfo = Field(default_factory=PlatformInfo, alias="platformInfo")
    segments: list[Segment] = Field(default_factory=list)


class TrackerErrorEntry(BaseModel):
    model_config = ConfigDict(extra="allow")

    code: Any = None
    message: str | None = None


class TrackerResponse(BaseModel):
    """Top-level provider envelope.

    A successful document carries ``data``; a failed lookup carries a
    non-empty ``errors`` list (and usually no ``data``).
    """

    model_config = ConfigDict(extra="allow")

    data: TrackerData | None = None
    errors: list[TrackerErrorEntry] = Field(default_factory=list)


# ==============================================================================
# Projection Shapes
# ==============================================================================


class _Projection(BaseModel):
    model_config = ConfigDict(frozen=True)

    raw: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Dump as a plain dict; ``raw`` appears only if it was requested."""
        data = self.model_dump()
        if "raw" not in self.model_fields_set:
            data.pop("raw", None)
        return data


class OverviewStats(_Projection):
    """Overall performance across all playlists."""

    assists: int
    goals: int
    goal_shot_ratio: float
    mvps: int
    saves: int
    score: int
    season_reward_level: int
    season_reward_wins: int
    shots: int
    trn_rating: float
    wins: int


class PlaylistStats(_Projection):
    """Rank data for a single playlist.

    ``delta_up``/``delta_down`` and ``rank`` are ``None`` when the provider
    omits them; ``None`` means unknown, never zero.
    """

    division: int
    delta_up: int | None
    delta_down: int | None
    matches_played: int
    peak_rating: int
    rank: str | None
    rating: int
    tier: int
    win_streak: int


class Userinfo(_Projection):
    """Account identity from the document's ``platformInfo`` section."""

    platform: str | None
    uuid: str | None
    name: str | None
    userid: str | None
    avatar: str | None


class AllStats(BaseModel):
    """Overview plus every playlist segment, keyed by playlist name."""

    model_config = ConfigDict(frozen=True)

    overview: OverviewStats
    gamemodes: dict[str, PlaylistStats]

    def to_dict(self) -> dict[str, Any]:
        return {
            "overview": self.overview.to_dict(),
            "gamemodes": {name: stats.to_dict() for name, stats in self.gamemodes.items()},
        }

    def gamemodes_frame(self) -> pd.DataFrame:
        """Playlist records as a DataFrame, one row per playlist.

        Example:
            >>> df = snapshot.get_data().gamemodes_frame()
            >>> df[["playlist", "rank", "rating"]]
        """
        columns = ["playlist", *(c for c in PlaylistStats.model_fields if c != "raw")]
        rows = []
        for name, stats in self.gamemodes.items():
            record = stats.model_dump(exclude={"raw"})
            rows.append({"playlist": name, **record})

        return pd.DataFrame(rows, columns=columns)
