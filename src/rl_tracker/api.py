"""Profile snapshot and typed projections

A Snapshot holds one validated provider document for a single
(platform, username) lookup and projects it into typed views:

- overview(): overall performance (OverviewStats)
- get_1v1() / get_2v2() / get_3v3(): ranked playlists (PlaylistStats)
- get_playlist(name): any playlist segment by provider name
- get_data(): overview plus every playlist keyed by name (AllStats)
- get_userinfo(): account identity (Userinfo)

**State**:
- Unloaded: no document; every projection raises NotLoadedError
- Loaded: document set exactly once; projections may still raise
  SegmentNotFoundError, the snapshot never goes back to Unloaded

Each projection scans the segment list on its own (O(n), the list is short)
and shares no derived state with other projections, so a loaded snapshot can
be queried repeatedly and concurrently.

**Usage**:
    import asyncio
    from rl_tracker import Platform, create_snapshot

    snapshot = asyncio.run(create_snapshot(Platform.EPIC, "SomePlayer"))
    print(snapshot.get_2v2().rank)
    print(snapshot.overview(raw=True).raw["stats"]["goals"])
"""

from __future__ import annotations

import copy
import logging
import math
from collections.abc import Callable
from enum import Enum
from typing import Any, Protocol

from pydantic import ValidationError

from .config import TrackerConfig, get_config
from .errors import NotLoadedError, ParseError, ProviderError, SegmentNotFoundError, TrackerError
from .fetchers.tracker import TrackerFetcher
from .schemas import (
    AllStats,
    OverviewStats,
    PlaylistStats,
    Segment,
    StatValue,
    TrackerData,
    TrackerResponse,
    Userinfo,
)

logger = logging.getLogger(__name__)


class Platform(str, Enum):
    """Supported account platforms (value is the provider's URL slug)."""

    STEAM = "steam"
    EPIC = "epic"
    PLAYSTATION = "psn"
    XBOX = "xbl"

    @classmethod
    def parse(cls, value: Platform | str) -> Platform:
        """Resolve a member from itself, its slug ("psn") or its name ("Playstation")."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            for member in cls:
                if key in (member.value, member.name.lower()):
                    return member

        valid = ", ".join(m.value for m in cls)
        raise ValueError(f"Unknown platform {value!r}. Expected one of: {valid}")


OVERVIEW_SEGMENT = "overview"
PLAYLIST_SEGMENT = "playlist"

# Provider-defined playlist names
PLAYLIST_1V1 = "Ranked Duel 1v1"
PLAYLIST_2V2 = "Ranked Doubles 2v2"
PLAYLIST_3V3 = "Ranked Standard 3v3"


class DocumentFetcher(Protocol):
    async def fetch(self, url: str) -> dict[str, Any]: ...


# ==============================================================================
# Field Extraction
# ==============================================================================


def _stat(stats: dict[str, StatValue], key: str) -> StatValue:
    try:
        return stats[key]
    except KeyError:
        raise ParseError(f"Segment is missing stat {key!r}") from None


def _finite(value: Any, label: str) -> float:
    if value is None or isinstance(value, bool):
        raise ParseError(f"{label} has no numeric value")
    try:
        result = float(value)
    except (TypeError, ValueError, OverflowError) as exc:
        raise ParseError(f"{label} is not numeric: {value!r}") from exc
    if not math.isfinite(result):
        raise ParseError(f"{label} is not finite: {value!r}")
    return result


def _whole(value: Any, label: str) -> int:
    """Integer from an int, an integral float or a numeric string; never truncates."""
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip(), 10)
        except ValueError:
            pass
    result = _finite(value, label)
    if not result.is_integer():
        raise ParseError(f"{label} is not a whole number: {value!r}")
    return int(result)


def _number(stats: dict[str, StatValue], key: str) -> float:
    return _finite(_stat(stats, key).value, f"Stat {key!r}")


def _count(stats: dict[str, StatValue], key: str) -> int:
    return _whole(_stat(stats, key).value, f"Stat {key!r}")


def _optional_int(metadata: dict[str, Any], key: str) -> int | None:
    value = metadata.get(key)
    if value is None:
        return None
    return _whole(value, f"Metadata field {key!r}")


def _optional_str(metadata: dict[str, Any], key: str) -> str | None:
    value = metadata.get(key)
    return None if value is None else str(value)


def parse_win_streak(display_value: str | None) -> int:
    """Parse the win streak from its display string.

    The numeric ``value`` upstream is unreliable for streaks, so the display
    string is used. ``"0"`` short-circuits to 0; anything else is parsed as a
    base-10 integer (``"00"`` -> 0).
    """
    if display_value == "0":
        return 0
    if display_value is None:
        raise ParseError("Stat 'winStreak' has no displayValue")
    try:
        return int(display_value, 10)
    except ValueError as exc:
        raise ParseError(
            f"Stat 'winStreak' displayValue is not an integer: {display_value!r}"
        ) from exc


# ==============================================================================
# Snapshot
# ==============================================================================


class Snapshot:
    """One validated profile document for a (platform, username) pair.

    Args:
        platform: Platform member, slug ("xbl") or name ("Xbox")
        username: Account handle, substituted verbatim into the profile URL

    Raises:
        ValueError: If the platform is unknown or the username is empty

    Example:
        >>> snapshot = await Snapshot.fetch_user("steam", "76561198000000000")
        >>> snapshot.overview().goals
        1234
    """

    def __init__(self, platform: Platform | str, username: str) -> None:
        if not isinstance(username, str) or not username:
            raise ValueError("username must be a non-empty string")

        self.platform = Platform.parse(platform)
        self.username = username
        self._document: dict[str, Any] | None = None
        self._data: TrackerData | None = None
        self._raw_segments: list[dict[str, Any]] = []
        self._raw_platform_info: dict[str, Any] = {}

    def __repr__(self) -> str:
        state = "loaded" if self.loaded else "unloaded"
        return f"Snapshot(platform={self.platform.value!r}, username={self.username!r}, {state})"

    # ========================================
    # Construction
    # ========================================

    @classmethod
    async def fetch_user(
        cls,
        platform: Platform | str,
        username: str,
        *,
        fetcher: DocumentFetcher | None = None,
        config: TrackerConfig | None = None,
    ) -> Snapshot:
        """Fetch one profile document and return a loaded snapshot.

        Exactly one fetch is issued; nothing is retried.

        Args:
            platform: Platform member, slug or name
            username: Account handle
            fetcher: Object with an async ``fetch(url)`` (default: TrackerFetcher)
            config: URL template/timeout settings (default: global config)

        Raises:
            FetchError: Transport failure
            ParseError: Body is not a valid profile document
            ProviderError: Provider returned an errors list (first message)
        """
        instance = cls(platform, username)
        config = config or get_config()
        url = config.profile_url(instance.platform.value, instance.username)
        logger.debug(f"Fetching snapshot for {instance.platform.value}/{instance.username}")

        if fetcher is None:
            default_fetcher = TrackerFetcher(config)
            try:
                document = await default_fetcher.fetch(url)
            finally:
                default_fetcher.close()
        else:
            document = await fetcher.fetch(url)

        instance._load(document)
        return instance

    @classmethod
    def from_document(
        cls, platform: Platform | str, username: str, document: dict[str, Any]
    ) -> Snapshot:
        """Build a loaded snapshot from an already-fetched document (e.g. saved JSON)."""
        instance = cls(platform, username)
        instance._load(document)
        return instance

    def _load(self, document: Any) -> None:
        if self._document is not None:
            raise TrackerError("Snapshot document is already set")

        # the snapshot keeps its own copy; later changes to the caller's dict are not seen
        document = copy.deepcopy(document)
        try:
            response = TrackerResponse.model_validate(document)
        except ValidationError as exc:
            raise ParseError(f"Malformed profile document: {exc}") from exc

        if response.errors:
            message = response.errors[0].message or "Unknown provider error"
            logger.warning(
                f"Provider returned {len(response.errors)} error(s) for "
                f"{self.platform.value}/{self.username}: {message}"
            )
            raise ProviderError(message, errors=list(document.get("errors") or []))

        if response.data is None:
            raise ParseError("Profile document has neither data nor errors")

        self._document = document
        self._data = response.data
        self._raw_segments = document["data"].get("segments") or []
        self._raw_platform_info = document["data"].get("platformInfo") or {}
        logger.debug(
            f"Loaded snapshot for {self.platform.value}/{self.username}: "
            f"{len(response.data.segments)} segment(s)"
        )

    # ========================================
    # Accessors
    # ========================================

    @property
    def loaded(self) -> bool:
        return self._document is not None

    @property
    def raw(self) -> dict[str, Any] | None:
        """A copy of the stored provider document (``None`` while unloaded)."""
        if self._document is None:
            return None
        return copy.deepcopy(self._document)

    def _require_data(self) -> TrackerData:
        if self._data is None:
            raise NotLoadedError()
        return self._data

    def _find_segment(
        self, predicate: Callable[[Segment], bool], lookup_key: str
    ) -> tuple[int, Segment]:
        """Index and model of the first segment matching ``predicate``."""
        data = self._require_data()
        for index, segment in enumerate(data.segments):
            if predicate(segment):
                return index, segment
        raise SegmentNotFoundError(lookup_key)

    def _raw_segment(self, index: int) -> dict[str, Any]:
        self._require_data()
        return copy.deepcopy(self._raw_segments[index])

    # ========================================
    # Projections
    # ========================================

    def overview(self, raw: bool = False) -> OverviewStats:
        """Overall performance from the ``overview`` segment.

        Raises:
            NotLoadedError: Snapshot has no document
            SegmentNotFoundError: No overview segment
            ParseError: Overview segment lacks a required stat
        """
        index, segment = self._find_segment(
            lambda s: s.type == OVERVIEW_SEGMENT, OVERVIEW_SEGMENT
        )
        stats = segment.stats

        fields: dict[str, Any] = {
            "assists": _count(stats, "assists"),
            "goals": _count(stats, "goals"),
            "goal_shot_ratio": _number(stats, "goalShotRatio"),
            "mvps": _count(stats, "mVPs"),
            "saves": _count(stats, "saves"),
            "score": _count(stats, "score"),
            "season_reward_level": _count(stats, "seasonRewardLevel"),
            "season_reward_wins": _count(stats, "seasonRewardWins"),
            "shots": _count(stats, "shots"),
            "trn_rating": _number(stats, "tRNRating"),
            "wins": _count(stats, "wins"),
        }
        if raw:
            fields["raw"] = self._raw_segment(index)
        return OverviewStats(**fields)

    def _playlist_stats(
        self, index: int, segment: Segment, raw: bool
    ) -> PlaylistStats:
        stats = segment.stats
        division = _stat(stats, "division")
        tier = _stat(stats, "tier")

        fields: dict[str, Any] = {
            "division": _count(stats, "division"),
            "delta_up": _optional_int(division.metadata, "deltaUp"),
            "delta_down": _optional_int(division.metadata, "deltaDown"),
            "matches_played": _count(stats, "matchesPlayed"),
            "peak_rating": _count(stats, "peakRating"),
            "rank": _optional_str(tier.metadata, "name"),
            "rating": _count(stats, "rating"),
            "tier": _count(stats, "tier"),
            "win_streak": parse_win_streak(_stat(stats, "winStreak").display_value),
        }
        if raw:
            fields["raw"] = self._raw_segment(index)
        return PlaylistStats(**fields)

    def get_playlist(self, name: str, raw: bool = False) -> PlaylistStats:
        """Rank data for the playlist segment named ``name``.

        Raises:
            NotLoadedError: Snapshot has no document
            SegmentNotFoundError: No playlist segment with that name
            ParseError: Playlist segment lacks a required stat
        """
        index, segment = self._find_segment(
            lambda s: s.type == PLAYLIST_SEGMENT and s.metadata.name == name, name
        )
        return self._playlist_stats(index, segment, raw)

    def get_1v1(self, raw: bool = False) -> PlaylistStats:
        return self.get_playlist(PLAYLIST_1V1, raw=raw)

    def get_2v2(self, raw: bool = False) -> PlaylistStats:
        return self.get_playlist(PLAYLIST_2V2, raw=raw)

    def get_3v3(self, raw: bool = False) -> PlaylistStats:
        return self.get_playlist(PLAYLIST_3V3, raw=raw)

    def get_data(self, raw: bool = False) -> AllStats:
        """Overview plus every playlist segment keyed by playlist name.

        Playlist segments without a name or without usable stats are skipped.
        If two segments share a name the later one wins.
        """
        overview = self.overview(raw=raw)
        data = self._require_data()

        gamemodes: dict[str, PlaylistStats] = {}
        for index, segment in enumerate(data.segments):
            if segment.type != PLAYLIST_SEGMENT:
                continue

            name = segment.metadata.name
            if not name:
                logger.debug(f"Skipping unnamed playlist segment at index {index}")
                continue

            try:
                gamemodes[name] = self._playlist_stats(index, segment, raw)
            except ParseError as exc:
                logger.debug(f"Skipping playlist {name!r}: {exc}")

        return AllStats(overview=overview, gamemodes=gamemodes)

    def get_userinfo(self, raw: bool = False) -> Userinfo:
        """Account identity from the top-level ``platformInfo`` section."""
        info = self._require_data().platform_info

        fields: dict[str, Any] = {
            "platform": info.platform_slug,
            "uuid": info.platform_user_id,
            "name": info.platform_user_handle,
            "userid": info.platform_user_identifier,
            "avatar": info.avatar_url,
        }
        if raw:
            fields["raw"] = copy.deepcopy(self._raw_platform_info)
        return Userinfo(**fields)


async def create_snapshot(
    platform: Platform | str,
    username: str,
    *,
    fetcher: DocumentFetcher | None = None,
    config: TrackerConfig | None = None,
) -> Snapshot:
    """Fetch and validate one profile. See :meth:`Snapshot.fetch_user`."""
    return await Snapshot.fetch_user(platform, username, fetcher=fetcher, config=config)
