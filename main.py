#!/usr/bin/env python3
"""
Webtoon Team Dashboard

A command-line tool for a webtoon typesetting team: parses members' free-text
work logs into per-project chapter counts, aggregates them into a team summary,
and offers image tools for combining and slicing chapter images with optional
export to Google Drive.

Usage:
    uv run main.py summary worklogs/
"""

from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Sequence
from pathlib import Path

from rich.console import Console

from webtoon_dashboard.auth.password_gate import PasswordGate
from webtoon_dashboard.config import Settings
from webtoon_dashboard.exporters.zip_bundle import save_images, write_zip, zip_path_for
from webtoon_dashboard.models.image import ImageResult
from webtoon_dashboard.parsers.image_collector import expand_image_paths
from webtoon_dashboard.parsers.work_log import WorkLogParser
from webtoon_dashboard.processors.chapter_exporter import ChapterExporter
from webtoon_dashboard.processors.combiner import combine_images
from webtoon_dashboard.processors.slicer import ASPECT_RATIOS, DEFAULT_ASPECT_RATIO, slice_images
from webtoon_dashboard.progress.reporter import ConsoleReporter
from webtoon_dashboard.roster.team import TeamRoster
from webtoon_dashboard.summary.global_summary import build_team_summary, summary_to_dict
from webtoon_dashboard.uploaders.google_drive import GoogleDriveUploader

# Initialize Rich console for output
console = Console()


def validate_output_directory(output_dir: Path) -> bool:
    """
    Validate and create output directory if needed.

    Args:
        output_dir: Path to the output directory

    Returns:
        bool: True if directory is valid and accessible
    """
    try:
        output_dir.mkdir(parents=True, exist_ok=True)

        # Test write permissions
        test_file = output_dir / ".test_write"
        _ = test_file.write_text("test")
        test_file.unlink()
        return True

    except PermissionError:
        console.print(f"[red]Error: No write permission for output directory: {output_dir}[/red]")
        return False
    except OSError as e:
        console.print(f"[red]Error: Cannot access output directory {output_dir}: {e}[/red]")
        return False


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line parser."""
    parser = argparse.ArgumentParser(
        description="Webtoon typesetting team dashboard",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  uv run main.py parse log.txt                       # Parse one member's work log
  uv run main.py summary worklogs/                   # One member per .txt file
  uv run main.py combine pages/ --split 2            # Stack images into 2 strips
  uv run main.py slice long.png --ratio 6:9          # Slice a tall image
  uv run main.py slice ch01/ --export --story "Story A" --chapter 01 --tiktok
        """
    )

    _ = parser.add_argument(
        "--ranges",
        action="store_true",
        default=None,
        help="Expand chapter ranges such as 100-105 (default: WORKLOG_RANGE_EXPANSION)"
    )
    _ = parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose output for debugging"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    parse_cmd = subparsers.add_parser("parse", help="Parse one member's work log")
    _ = parse_cmd.add_argument(
        "file",
        nargs="?",
        default="-",
        help="Work-log file (default: read from stdin)"
    )

    summary_cmd = subparsers.add_parser("summary", help="Summarize a folder of member work logs")
    _ = summary_cmd.add_argument("folder", type=Path, help="Folder with one .txt work log per member")
    _ = summary_cmd.add_argument("--json", action="store_true", help="Print the summary as JSON")

    combine_cmd = subparsers.add_parser("combine", help="Combine images vertically")
    _ = combine_cmd.add_argument("images", nargs="+", type=Path, help="Image files or folders")
    _ = combine_cmd.add_argument("--split", type=int, default=1, help="Number of combined images (default: 1)")
    _ = combine_cmd.add_argument("--zip", dest="zip_name", default="combined_images", help="ZIP file name")
    _ = combine_cmd.add_argument("--output-dir", type=Path, default=None, help="Output directory")
    _ = combine_cmd.add_argument("--individual", action="store_true", help="Also save each PNG")

    slice_cmd = subparsers.add_parser("slice", help="Slice tall images into fixed aspect-ratio segments")
    _ = slice_cmd.add_argument("images", nargs="+", type=Path, help="Image files or folders")
    _ = slice_cmd.add_argument(
        "--ratio",
        choices=sorted(ASPECT_RATIOS),
        default=DEFAULT_ASPECT_RATIO,
        help="Slice aspect ratio (default: 4:5)"
    )
    _ = slice_cmd.add_argument("--zip", dest="zip_name", default="sliced_images", help="ZIP file name")
    _ = slice_cmd.add_argument("--output-dir", type=Path, default=None, help="Output directory")
    _ = slice_cmd.add_argument("--individual", action="store_true", help="Also save each PNG")
    _ = slice_cmd.add_argument("--export", action="store_true", help="Upload the slices to Google Drive")
    _ = slice_cmd.add_argument("--story", default="", help="Story folder name for export")
    _ = slice_cmd.add_argument("--chapter", default="", help="Chapter number for export")
    _ = slice_cmd.add_argument("--tiktok", action="store_true", help="Split export into parts of 35 images")

    login_cmd = subparsers.add_parser("login", help="Unlock the image tools")
    _ = login_cmd.add_argument("--password", default=None, help="Tools password (prompted when omitted)")

    _ = subparsers.add_parser("logout", help="Lock the image tools")
    _ = subparsers.add_parser("test-drive", help="Test the Google Drive connection")

    return parser


def parse_arguments(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Parsed arguments namespace
    """
    return build_parser().parse_args(argv)


def make_work_log_parser(args: argparse.Namespace, settings: Settings) -> WorkLogParser:
    ranges = args.ranges if args.ranges is not None else settings.range_expansion_enabled
    return WorkLogParser(range_expansion_enabled=ranges)


def read_text_input(source: str) -> str:
    """Read a work log from a file path or ``-`` for stdin."""
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def cmd_parse(args: argparse.Namespace, settings: Settings, reporter: ConsoleReporter) -> int:
    try:
        raw_text = read_text_input(args.file)
    except (OSError, UnicodeDecodeError) as e:
        reporter.display_error(f"Could not read work log {args.file}", e)
        return 1

    projects = make_work_log_parser(args, settings).parse(raw_text)
    reporter.display_projects(projects, title="Parsed Work Log")
    return 0


def cmd_summary(args: argparse.Namespace, settings: Settings, reporter: ConsoleReporter) -> int:
    roster = TeamRoster(parser=make_work_log_parser(args, settings), console=reporter.console)
    members = roster.load_folder(args.folder)
    if not members:
        return 1

    summary = build_team_summary(roster.members)

    if args.json:
        console.print_json(json.dumps(summary_to_dict(summary, roster.members), ensure_ascii=False))
        return 0

    for member in roster.members:
        reporter.display_member(member)
    reporter.display_team_summary(summary)
    return 0


def require_login(settings: Settings, reporter: ConsoleReporter) -> bool:
    """Check the tools password flag before running an image tool."""
    gate = PasswordGate(settings.tools_password, settings.auth_flag_file)
    if gate.is_authenticated:
        return True
    reporter.display_error("The image tools are locked. Run 'main.py login' first.")
    return False


def collect_images(args: argparse.Namespace, reporter: ConsoleReporter) -> list[Path]:
    images = expand_image_paths(args.images)
    if not images:
        reporter.display_error("No images to process")
    else:
        reporter.display_info(f"Found {len(images)} images")
    return images


def write_outputs(
    results: list[ImageResult],
    args: argparse.Namespace,
    settings: Settings,
    reporter: ConsoleReporter,
) -> bool:
    """Write the ZIP archive (and individual PNGs if requested)."""
    output_dir: Path = args.output_dir or settings.output_dir
    if not validate_output_directory(output_dir):
        return False

    archive = write_zip(results, zip_path_for(output_dir, args.zip_name))
    reporter.display_success(f"Wrote {len(results)} images to {archive}")

    if args.individual:
        saved = save_images(results, output_dir)
        reporter.display_success(f"Saved {len(saved)} PNG files to {output_dir}")
    return True


def cmd_combine(args: argparse.Namespace, settings: Settings, reporter: ConsoleReporter) -> int:
    if not require_login(settings, reporter):
        return 1
    if args.split < 1:
        reporter.display_error("--split must be at least 1")
        return 1

    images = collect_images(args, reporter)
    if not images:
        return 1

    expected = min(args.split, len(images))
    with reporter.track_progress("Combining images...", expected) as progress:
        results = combine_images(images, args.split, progress_callback=progress.callback)

    return 0 if write_outputs(results, args, settings, reporter) else 1


def cmd_slice(args: argparse.Namespace, settings: Settings, reporter: ConsoleReporter) -> int:
    if not require_login(settings, reporter):
        return 1
    if args.export and (not args.story.strip() or not args.chapter.strip()):
        reporter.display_error("Please select a story and enter a chapter number (--story, --chapter).")
        return 1

    images = collect_images(args, reporter)
    if not images:
        return 1

    with reporter.track_progress("Slicing images...", len(images)) as progress:
        results = slice_images(images, args.ratio, progress_callback=progress.callback)

    if not write_outputs(results, args, settings, reporter):
        return 1

    if not args.export:
        return 0

    uploader = GoogleDriveUploader(settings.drive_access_token)
    exporter = ChapterExporter(uploader)
    with reporter.track_progress("Uploading to Google Drive...", len(results)) as progress:
        result = exporter.export(
            results,
            args.story,
            args.chapter,
            tiktok_mode=args.tiktok,
            progress_callback=progress.callback,
        )

    reporter.display_export_result(result)
    return 0 if result.success else 1


def cmd_login(args: argparse.Namespace, settings: Settings, reporter: ConsoleReporter) -> int:
    if not settings.tools_password:
        reporter.display_error("TOOLS_PASSWORD not found in environment variables.")
        return 1

    gate = PasswordGate(settings.tools_password, settings.auth_flag_file)
    password = args.password
    if password is None:
        password = console.input("[bold]Password: [/bold]", password=True)

    if gate.login(password):
        reporter.display_success("Image tools unlocked")
        return 0

    reporter.display_error("Incorrect password")
    return 1


def cmd_logout(args: argparse.Namespace, settings: Settings, reporter: ConsoleReporter) -> int:
    PasswordGate(settings.tools_password, settings.auth_flag_file).logout()
    reporter.display_success("Image tools locked")
    return 0


def cmd_test_drive(args: argparse.Namespace, settings: Settings, reporter: ConsoleReporter) -> int:
    reporter.display_info("Testing Google Drive connection...")
    if GoogleDriveUploader(settings.drive_access_token).test_connection():
        reporter.display_success("Google Drive connection working properly!")
        return 0
    reporter.display_error("Connection test failed!")
    return 1


COMMANDS = {
    "parse": cmd_parse,
    "summary": cmd_summary,
    "combine": cmd_combine,
    "slice": cmd_slice,
    "login": cmd_login,
    "logout": cmd_logout,
    "test-drive": cmd_test_drive,
}


def run(args: argparse.Namespace, settings: Settings | None = None) -> int:
    """Run a parsed command and return the exit code."""
    settings = settings or Settings.from_env()
    reporter = ConsoleReporter(console)
    verbose_mode: bool = getattr(args, "verbose", False)

    try:
        return COMMANDS[args.command](args, settings, reporter)
    except KeyboardInterrupt:
        console.print("\n[yellow]Processing interrupted by user.[/yellow]")
        return 1
    except (ValueError, OSError) as e:
        reporter.display_error(str(e))
        if verbose_mode:
            import traceback
            console.print(f"[dim]{traceback.format_exc()}[/dim]")
        return 1


def main() -> None:
    """Main entry point for the dashboard CLI."""
    sys.exit(run(parse_arguments()))


if __name__ == "__main__":
    main()
