#!/usr/bin/env python3
"""
songsweep CLI: duplicate song detection and music library housekeeping.
All operations are safe: files are moved into a quarantine folder, never erased,
and a reviewed quarantine folder can only be sent to the system trash.
"""
from __future__ import annotations  # Enable postponed evaluation of annotations (PEP 563)
import argparse
import sys
import os
import time
from pathlib import Path
from typing import List, Optional, NoReturn
import logging

logging.basicConfig(
    level=logging.ERROR,
    format="%(levelname)-8s | %(name)-25s | %(message)s"
)

from songsweep.core.models import ArtistFallback, MoveOperation, ScanParams, DEFAULT_QUARANTINE_NAME
from songsweep.commands import (
    DuplicateScanCommand, EmptyDirectoriesCommand, OrphanLyricsCommand,
    SpecialVersionsCommand, write_cleanup_script)
from songsweep.utils.convert_utils import ConvertUtils
from songsweep.services.file_service import FileService
from songsweep.services.plan_service import PlanService
from songsweep.aliases import (
    ARTIST_FALLBACK_ALIASES, ARTIST_FALLBACK_CHOICES, ARTIST_FALLBACK_HELP_TEXT,
    HASH_ALIASES, HASH_CHOICES, HASH_HELP_TEXT,
    SCRIPT_FORMAT_CHOICES, EPILOG_TEXT
)

DUPLICATES_SCRIPT_NAME = "_cleanup_duplicates"
SPECIAL_VERSIONS_SCRIPT_NAME = "_cleanup_special_versions"


class CLIApplication:
    """Main CLI application controller."""

    def __init__(self):
        self.start_time: float = time.time()
        self.verbose: bool = False
        self.quiet: bool = False

        # Fix encoding for Windows consoles to prevent UnicodeEncodeError
        sys.stdout.reconfigure(encoding='utf-8')
        sys.stderr.reconfigure(encoding='utf-8')

    @staticmethod
    def parse_args(args=None) -> argparse.Namespace:
        """Parse command-line arguments."""
        parser = argparse.ArgumentParser(
            prog="songsweep",
            description="songsweep: find duplicate songs and tidy a music library safely",
            formatter_class=argparse.RawTextHelpFormatter,
            epilog=EPILOG_TEXT
        )
        subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
        subparsers.required = True

        common = argparse.ArgumentParser(add_help=False)
        common.add_argument(
            "--quiet", "-q",
            action="store_true",
            help="Suppress non-essential output"
        )
        common.add_argument(
            "--verbose", "-v",
            action="store_true",
            help="Show detailed statistics, progress and log messages"
        )
        common.add_argument(
            "--force",
            action="store_true",
            help="Skip the confirmation prompt of --apply / purge (for automation/scripts)"
        )

        library = argparse.ArgumentParser(add_help=False)
        library.add_argument(
            "--input", "-i",
            required=True,
            type=str,
            help="Music library directory to scan"
        )
        library.add_argument(
            "--extensions", "-x",
            default="",
            type=str,
            metavar='',
            help="Comma separated audio extensions (e.g. mp3,flac). Default: common audio formats"
        )
        library.add_argument(
            "--quarantine",
            default=DEFAULT_QUARANTINE_NAME,
            type=str,
            metavar='',
            help=f"Quarantine folder created inside the library. Default: {DEFAULT_QUARANTINE_NAME}"
        )
        library.add_argument(
            "--apply",
            action="store_true",
            help="Move the files into the quarantine folder now (asks for confirmation)"
        )

        filters = argparse.ArgumentParser(add_help=False)
        filters.add_argument(
            "--min-size", "-m",
            default="0",
            type=str,
            metavar='',
            help="Minimum file size (e.g., 500KB, 1MB). Default: 0"
        )
        filters.add_argument(
            "--max-size", "-M",
            default="",
            type=str,
            metavar='',
            help="Maximum file size (e.g., 100MB, 1GB). Default: no limit"
        )

        scripts = argparse.ArgumentParser(add_help=False)
        scripts.add_argument(
            "--no-script",
            action="store_true",
            help="Do not write a cleanup script into the library"
        )
        scripts.add_argument(
            "--script-format",
            choices=SCRIPT_FORMAT_CHOICES,
            default=None,
            help="Cleanup script flavour. Default: bat on Windows, sh elsewhere"
        )

        dupes = subparsers.add_parser(
            "dupes",
            parents=[common, library, filters, scripts],
            formatter_class=argparse.RawTextHelpFormatter,
            help="Find exact and same-song duplicates"
        )
        dupes.add_argument(
            "--artist-fallback",
            choices=ARTIST_FALLBACK_CHOICES,
            default=None,
            type=str,
            help=ARTIST_FALLBACK_HELP_TEXT
        )
        dupes.add_argument(
            "--artist",
            default=None,
            type=str,
            metavar='NAME',
            help="Explicit artist for files whose name does not carry one"
        )
        dupes.add_argument(
            "--known-artists",
            default=None,
            type=str,
            metavar='FILE',
            help="Text file with one artist per line; 'Title - Artist' names are flipped"
        )
        dupes.add_argument(
            "--hash",
            choices=HASH_CHOICES,
            default="xxhash",
            type=str,
            help=HASH_HELP_TEXT
        )

        subparsers.add_parser(
            "special",
            parents=[common, library, filters, scripts],
            help="Find live versions, backing tracks and intros"
        )
        subparsers.add_parser(
            "orphans",
            parents=[common, library],
            help="Find lyric (.lrc) files without a matching song"
        )
        subparsers.add_parser(
            "empty-dirs",
            parents=[common, library],
            help="Find folders that are empty or hold only cover art"
        )

        purge = subparsers.add_parser(
            "purge",
            parents=[common],
            help="Send a reviewed quarantine folder to the system trash"
        )
        purge.add_argument(
            "--input", "-i",
            required=True,
            type=str,
            help="Quarantine folder to trash (its name must start with '_')"
        )

        return parser.parse_args(args)

    def validate_args(self, args: argparse.Namespace) -> None:
        """Validate command-line arguments before execution."""
        destructive = args.command == "purge" or getattr(args, "apply", False)
        if args.force and not destructive:
            self.error_exit("--force can only be used with --apply or purge")

        # Prevent interactive confirmation in non-TTY environments
        if destructive and not args.force:
            if not sys.stdin.isatty() or not sys.stdout.isatty():
                self.error_exit(
                    "Cannot request interactive confirmation in non-interactive session.\n"
                    "Use --force flag to proceed without confirmation when piping output or running in scripts."
                )

        root_path = Path(args.input).resolve()
        if not root_path.exists():
            self.error_exit(f"Directory not found: {args.input}")
        if not root_path.is_dir():
            self.error_exit(f"Path is not a directory: {args.input}")

        if args.command == "purge":
            if not root_path.name.startswith("_"):
                self.error_exit(f"Refusing to purge '{root_path.name}': quarantine folder names start with '_'")
            return

        for size in (getattr(args, "min_size", ""), getattr(args, "max_size", "")):
            if size and not ConvertUtils.is_valid_size_format(size):
                self.error_exit(f"Invalid size format: '{size}'")

        if args.command == "dupes":
            if args.artist is not None and not args.artist.strip():
                self.error_exit("--artist cannot be empty")
            if args.artist and args.artist_fallback is not None:
                self.warning("--artist overrides --artist-fallback")
            if args.known_artists and not Path(args.known_artists).is_file():
                self.error_exit(f"Known artists file not found: {args.known_artists}")

    @staticmethod
    def read_known_artists(path: Optional[str]) -> List[str]:
        """One artist per line; blank lines and '#' comments are ignored."""
        if not path:
            return []
        with open(path, encoding="utf-8") as f:
            return [line.strip() for line in f if line.strip() and not line.strip().startswith("#")]

    def create_params(self, args: argparse.Namespace) -> ScanParams:
        """Create ScanParams from CLI arguments."""
        try:
            artist_fallback = ArtistFallback.ROOT
            fallback_artist = None
            known_artists = []
            hash_algorithm = HASH_ALIASES["xxhash"]

            if args.command == "dupes":
                artist_fallback = ARTIST_FALLBACK_ALIASES.get(args.artist_fallback or "root", ArtistFallback.ROOT)
                if args.artist:
                    artist_fallback = ArtistFallback.EXPLICIT
                    fallback_artist = args.artist.strip()
                known_artists = self.read_known_artists(args.known_artists)
                hash_algorithm = HASH_ALIASES.get(args.hash, hash_algorithm)

            return ScanParams.from_human_readable(
                root_dir=str(Path(args.input).resolve()),
                min_size_str=getattr(args, "min_size", "0"),
                max_size_str=getattr(args, "max_size", ""),
                extensions_str=args.extensions,
                artist_fallback=artist_fallback,
                fallback_artist=fallback_artist,
                known_artists=known_artists,
                quarantine_name=args.quarantine,
                hash_algorithm=hash_algorithm,
            )
        except (ValueError, OSError) as e:
            self.error_exit(f"Parameter error: {e}")

    def progress_callback(self, stage: str, current: int, total: Optional[int]) -> None:
        """CLI progress callback - shows progress in console."""
        if not self.verbose:
            return

        if total and total > 0:
            percent = (current / total) * 100
            sys.stderr.write(
                f"\r  [{stage}] {current}/{total} ({percent:.1f}%)"
            )
            sys.stderr.flush()
        else:
            sys.stderr.write(f"\r  [{stage}] {current} files processed...")
            sys.stderr.flush()

    def output(self, text: str) -> None:
        if not self.quiet:
            print(text)

    def run_dupes(self, args: argparse.Namespace, params: ScanParams) -> None:
        """Detect duplicates, report them, write the cleanup script and optionally apply it."""
        command = DuplicateScanCommand()
        try:
            groups, stats = command.execute(
                params,
                progress_callback=self.progress_callback if self.verbose else None
            )
        except RuntimeError as e:
            self.error_exit(f"Duplicate detection failed: {e}")

        if self.verbose:
            sys.stderr.write("\n")
            print(f"\nScanned {len(command.get_candidates())} audio files")
            print(f"Artist fallback: {params.artist_fallback.display_name}")
            print(stats.print_summary())

        result = PlanService.emit(groups, params.root_dir, params.quarantine_dir, candidates=command.get_candidates())
        self.output(result.report)
        self.finish_plan(args, params, result.move_operations, DUPLICATES_SCRIPT_NAME, "Duplicate cleanup script")

    def run_special(self, args: argparse.Namespace, params: ScanParams) -> None:
        try:
            found = SpecialVersionsCommand().execute(params)
        except RuntimeError as e:
            self.error_exit(f"Special version detection failed: {e}")

        self.output(PlanService.render_special_versions_report(found, params.root_dir))
        operations = PlanService.special_versions_moves(found, params.quarantine_dir)
        self.finish_plan(args, params, operations, SPECIAL_VERSIONS_SCRIPT_NAME, "Special versions cleanup script")

    def run_orphans(self, args: argparse.Namespace, params: ScanParams) -> None:
        try:
            orphans = OrphanLyricsCommand().execute(params)
        except RuntimeError as e:
            self.error_exit(f"Orphan lyric search failed: {e}")

        self.output(PlanService.render_orphan_report(orphans, params.root_dir))
        if args.apply:
            self.execute_moves(
                PlanService.orphan_lyric_moves(orphans, params.root_dir, params.quarantine_dir), force=args.force
            )

    def run_empty_dirs(self, args: argparse.Namespace, params: ScanParams) -> None:
        try:
            dirs = EmptyDirectoriesCommand().execute(params)
        except RuntimeError as e:
            self.error_exit(f"Empty directory search failed: {e}")

        self.output(PlanService.render_empty_dirs_report(dirs, params.root_dir))
        if args.apply:
            self.execute_moves(
                PlanService.empty_directory_moves(dirs, params.root_dir, params.quarantine_dir), force=args.force
            )

    def run_purge(self, args: argparse.Namespace) -> None:
        quarantine = str(Path(args.input).resolve())
        if not args.force:
            response = input(f"Move '{quarantine}' and everything in it to trash? [y/N]: ")
            if response.strip().lower() not in ("y", "yes"):
                print("Purge cancelled by user.")
                return
        try:
            FileService.move_to_trash(quarantine)
        except (FileNotFoundError, RuntimeError) as e:
            self.error_exit(str(e))
        self.output(f"✅ Moved {quarantine} to trash.")

    def finish_plan(
            self,
            args: argparse.Namespace,
            params: ScanParams,
            operations: List[MoveOperation],
            script_name: str,
            script_title: str
    ) -> None:
        """Write the cleanup script unless --no-script, then apply the moves if asked to."""
        if not operations:
            return

        if not args.no_script:
            try:
                script_path = write_cleanup_script(
                    operations, params, script_name, script_format=args.script_format, title=script_title
                )
            except (RuntimeError, ValueError) as e:
                self.error_exit(f"Could not write cleanup script: {e}")
            self.output(f"\n📝 Cleanup script written: {script_path}")
            if not args.apply:
                self.output("Review it, then run it to move the files into quarantine.")

        if args.apply:
            self.execute_moves(operations, force=args.force)

    def execute_moves(self, operations: List[MoveOperation], force: bool = False) -> None:
        """Move files into quarantine after confirmation, continuing past individual errors."""
        if not operations:
            self.output("Nothing to move.")
            return

        if force:
            self.output("⚠️  WARNING: --force flag skips confirmation. Proceeding with moves...")
        else:
            # Safety check: confirm we're still in interactive mode
            if not sys.stdin.isatty() or not sys.stdout.isatty():
                self.error_exit(
                    "Lost interactive terminal during operation. "
                    "Use --force to proceed in non-interactive environments."
                )
            response = input(f"Move {len(operations)} files into quarantine? [y/N]: ")
            if response.strip().lower() not in ("y", "yes"):
                print("Move cancelled by user.")
                return

        failures = FileService.apply_moves(operations)
        moved = len(operations) - len(failures)
        if failures:
            print(f"\n⚠️  Partial success: {moved}/{len(operations)} files moved into quarantine.")
            print(f"Failed to move {len(failures)} file(s):")
            for operation, error in failures[:5]:  # Show first 5 errors
                print(f"  • {os.path.basename(operation.source)}: {error.split(':')[-1].strip()}")
            if len(failures) > 5:
                print(f"  ...and {len(failures) - 5} more files")
        else:
            self.output(f"✅ Successfully moved {moved} files into quarantine.")

    def warning(self, message: str) -> None:
        """Print a warning message to stderr."""
        if not self.quiet:
            print(f"⚠️  {message}", file=sys.stderr)

    @staticmethod
    def error_exit(message: str, code: int = 1) -> NoReturn:
        """Print error and exit."""
        print(f"❌ Error: {message}", file=sys.stderr)
        sys.exit(code)

    def run(self, argv=None) -> None:
        """Main entry point with conditional output behavior."""
        args = self.parse_args(argv)
        self.verbose = args.verbose
        self.quiet = args.quiet
        if self.verbose:
            logging.getLogger().setLevel(logging.INFO)

        self.validate_args(args)

        if args.command == "purge":
            self.run_purge(args)
            return

        params = self.create_params(args)
        self.output(f"Scanning directory: {params.root_dir}")

        handlers = {
            "dupes": self.run_dupes,
            "special": self.run_special,
            "orphans": self.run_orphans,
            "empty-dirs": self.run_empty_dirs,
        }
        handlers[args.command](args, params)

        elapsed = time.time() - self.start_time
        if self.verbose:
            print(f"\n✅ Completed in {elapsed:.2f} seconds")


def main() -> None:
    """Application entry point."""
    app = CLIApplication()
    try:
        app.run()
    except KeyboardInterrupt:
        print("\n⚠️  Operation cancelled by user (Ctrl+C)")
        sys.exit(130)
    except Exception as e:
        if os.environ.get("DEBUG"):
            raise
        print(f"❌ Unexpected error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
