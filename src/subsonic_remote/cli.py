"""
Subsonic remote CLI

Drives the server jukebox and reads playlists from the command line.
Connection settings come from the environment (see SubsonicConfig.from_environment).
"""

import argparse
import logging
import sys
from typing import List, Optional

import httpx

from . import __version__
from .client import SubsonicClient
from .exceptions import SubsonicError
from .jukebox import JukeboxPlaylist, JukeboxStatus
from .logger import setup_logging
from .models import Song, SubsonicConfig
from .playlist import Playlist, get_playlist, get_playlists

logger = logging.getLogger(__name__)

# Jukebox subcommands that take no argument, mapped to controller methods
SIMPLE_ACTIONS = {
    "status": "status",
    "play": "play",
    "stop": "stop",
    "clear": "clear",
    "shuffle": "shuffle",
}


def create_parser() -> argparse.ArgumentParser:
    """
    Create argument parser for CLI.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="subsonic-remote",
        description="Control a Subsonic server's jukebox and browse its playlists",
        epilog="Example: SUBSONIC_URL=https://music.example.com subsonic-remote jukebox play",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose debug logging",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    jukebox = commands.add_parser("jukebox", help="Control the server-side jukebox")
    actions = jukebox.add_subparsers(dest="action", required=True)
    for name in SIMPLE_ACTIONS:
        actions.add_parser(name)
    actions.add_parser("playlist", help="Show the jukebox queue")

    skip = actions.add_parser("skip", help="Jump to a queue position")
    skip.add_argument("index", type=int)

    add = actions.add_parser("add", help="Append songs to the queue")
    add.add_argument("ids", type=int, nargs="+", metavar="ID")

    remove = actions.add_parser("remove", help="Remove the entry at a queue position")
    remove.add_argument("index", type=int)

    volume = actions.add_parser("volume", help="Set playback gain (0.0 - 1.0)")
    volume.add_argument("gain", type=float)

    playlists = commands.add_parser("playlists", help="List playlists")
    playlists.add_argument("--user", metavar="NAME", help="List another user's playlists")

    playlist = commands.add_parser("playlist", help="Show one playlist and its songs")
    playlist.add_argument("id", type=int)

    return parser


def format_status(status: JukeboxStatus) -> str:
    state = "playing" if status.playing else "stopped"
    return (
        f"{state} index={status.index} position={status.position}s "
        f"volume={status.volume:.2f}"
    )


def format_song(position: int, song: Song) -> str:
    artist = song.artist or "Unknown Artist"
    return f"{position:>3}. [{song.id}] {artist} - {song.title}"


def format_playlist(playlist: Playlist) -> str:
    minutes, seconds = divmod(playlist.duration, 60)
    return f"[{playlist.id}] {playlist.name} ({playlist.song_count} songs, {minutes}:{seconds:02d})"


def run_jukebox(client: SubsonicClient, args: argparse.Namespace) -> List[str]:
    with client.jukebox() as jukebox:
        if args.action in SIMPLE_ACTIONS:
            return [format_status(getattr(jukebox, SIMPLE_ACTIONS[args.action])())]
        if args.action == "playlist":
            queue: JukeboxPlaylist = jukebox.playlist()
            lines = [format_status(queue.status)]
            lines.extend(format_song(i, song) for i, song in enumerate(queue.songs))
            return lines
        if args.action == "skip":
            return [format_status(jukebox.skip_to(args.index))]
        if args.action == "add":
            return [format_status(jukebox.add_all_ids(args.ids))]
        if args.action == "remove":
            return [format_status(jukebox.remove_id(args.index))]
        if args.action == "volume":
            return [format_status(jukebox.set_volume(args.gain))]
    raise ValueError(f"Unknown jukebox action: {args.action}")


def run_command(client: SubsonicClient, args: argparse.Namespace) -> List[str]:
    """Execute the parsed command and return the lines to print."""
    if args.command == "jukebox":
        return run_jukebox(client, args)
    if args.command == "playlists":
        return [format_playlist(p) for p in get_playlists(client, args.user)]
    if args.command == "playlist":
        playlist, songs = get_playlist(client, args.id)
        lines = [format_playlist(playlist)]
        lines.extend(format_song(i, song) for i, song in enumerate(songs))
        return lines
    raise ValueError(f"Unknown command: {args.command}")


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point.

    Returns:
        Exit code (0 = success, 1 = server/network error, 2 = configuration error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging("DEBUG" if args.verbose else None)

    try:
        config = SubsonicConfig.from_environment()
    except (EnvironmentError, ValueError) as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    try:
        with SubsonicClient(config) as client:
            for line in run_command(client, args):
                print(line)
    except SubsonicError as e:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except httpx.HTTPError as e:
        logger.debug("Request failed", exc_info=True)
        print(f"HTTP error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
