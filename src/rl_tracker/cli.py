#!/usr/bin/env python3
"""
Command-line interface for the tracker client.

Usage:
    rl-tracker platforms                              # List supported platforms
    rl-tracker profile epic SomePlayer                # Overview stats
    rl-tracker profile steam 7656119... --view 2v2    # One ranked playlist
    rl-tracker profile xbl SomePlayer --view all --output table
"""

import argparse
import asyncio
import json
import logging
import sys
from typing import Any

from rl_tracker.api import Platform, Snapshot
from rl_tracker.config import get_config
from rl_tracker.errors import TrackerError

VIEWS = ["overview", "1v1", "2v2", "3v3", "all", "userinfo"]

# ============================================================================
# Helper Functions
# ============================================================================


def print_json(data: Any, indent: int = 2) -> None:
    """Print data as formatted JSON."""
    print(json.dumps(data, indent=indent, default=str))


def print_table(data: dict[str, Any]) -> None:
    """Print a flat record as a two-column table."""
    width = max((len(str(k)) for k in data), default=0)
    for key, value in data.items():
        if key == "raw":
            continue
        print(f"{str(key).ljust(width)} | {value}")


def render_view(snapshot: Snapshot, view: str, raw: bool = False) -> dict[str, Any]:
    """Run the projection named by ``view`` and return it as a plain dict."""
    if view == "overview":
        return snapshot.overview(raw=raw).to_dict()
    if view == "1v1":
        return snapshot.get_1v1(raw=raw).to_dict()
    if view == "2v2":
        return snapshot.get_2v2(raw=raw).to_dict()
    if view == "3v3":
        return snapshot.get_3v3(raw=raw).to_dict()
    if view == "all":
        return snapshot.get_data(raw=raw).to_dict()
    if view == "userinfo":
        return snapshot.get_userinfo(raw=raw).to_dict()
    raise ValueError(f"Unknown view {view!r}")


# ============================================================================
# Command: List Platforms
# ============================================================================


def cmd_list_platforms(args: argparse.Namespace) -> None:
    """List supported platforms."""
    print("Supported Platforms:\n")
    for platform in Platform:
        print(f"  {platform.value:<6} {platform.name.title()}")


# ============================================================================
# Command: Profile
# ============================================================================


def cmd_profile(args: argparse.Namespace) -> None:
    """Fetch one profile and print the requested view."""
    try:
        snapshot = asyncio.run(Snapshot.fetch_user(args.platform, args.username))

        if args.view == "all" and args.output == "table":
            data = snapshot.get_data()
            print("OVERVIEW:")
            print("-" * 60)
            print_table(data.overview.to_dict())
            print("\nPLAYLISTS:")
            print("-" * 60)
            print(data.gamemodes_frame().to_string(index=False))
            return

        result = render_view(snapshot, args.view, raw=args.raw)
        if args.output == "json":
            print_json(result)
        else:
            print_table(result)

    except (TrackerError, ValueError) as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(1)


# ============================================================================
# Main CLI
# ============================================================================


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="rl-tracker",
        description="Rocket League Tracker CLI - Look up competitive profile stats",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Overview stats for an Epic account
  rl-tracker profile epic SomePlayer

  # Doubles rank as JSON, including the provider's raw segment
  rl-tracker profile steam 76561198000000000 --view 2v2 --output json --raw

  # Every playlist as a table
  rl-tracker profile psn SomePlayer --view all --output table
        """,
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # ========================================
    # Command: platforms
    # ========================================
    parser_platforms = subparsers.add_parser("platforms", help="List supported platforms")
    parser_platforms.set_defaults(func=cmd_list_platforms)

    # ========================================
    # Command: profile
    # ========================================
    parser_profile = subparsers.add_parser("profile", help="Fetch a player profile")
    parser_profile.add_argument(
        "platform", help="Platform slug or name (steam, epic, psn, xbl)"
    )
    parser_profile.add_argument("username", help="Account handle or platform user id")
    parser_profile.add_argument(
        "--view", choices=VIEWS, default="overview", help="Which projection to print"
    )
    parser_profile.add_argument(
        "--raw", action="store_true", help="Include the matched raw segment"
    )
    parser_profile.add_argument(
        "--output",
        choices=["table", "json"],
        default="json",
        help="Output format (default: json)",
    )
    parser_profile.set_defaults(func=cmd_profile)

    args = parser.parse_args(argv)

    level = "DEBUG" if args.verbose else get_config().log_level.upper()
    logging.basicConfig(
        level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    if not hasattr(args, "func"):
        parser.print_help()
        sys.exit(1)

    args.func(args)


if __name__ == "__main__":
    main()
