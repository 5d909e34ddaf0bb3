#!/usr/bin/env python3
"""
Swoop - sweep Rust build artifacts off the disk

Scans a directory tree for Rust crates, reports how much space each
crate's target directory takes, and removes those target directories
after a single confirmation.

Usage:
    cargo swoop [path]                 # Scan, list and offer removal
    cargo swoop [path] --show-empty    # Also list crates without a target directory
    cargo swoop [path] --dry-run       # Just report findings
    cargo swoop --show-stats           # Show lifetime cleanup statistics
"""

import argparse
import pathlib
import shutil
import signal
import sys
import time
from typing import Optional

from rich.markup import escape

from auxiliary import format_path_for_display, format_size
from console_ui import ConsoleUI
from crate_finder import CrateInfo, CrateStats, crate_stats, find_crates, sort_crates
from dir_walker import ScanInterrupted
from swoop_config import SwoopConfigManager


class Swoop:
    """Main application class for the swoop cleanup tool."""

    def __init__(self, args: argparse.Namespace, ui: Optional[ConsoleUI] = None):
        self.args = args
        self.ui = ui or ConsoleUI()
        self._shutdown_requested = False
        self.dirs_scanned = 0

        self.config_manager = SwoopConfigManager(getattr(args, "config_dir", None))
        self.config = self.config_manager.load()

        # Flags given on the command line win over stored defaults
        show_empty = getattr(args, "show_empty", None)
        follow_symlinks = getattr(args, "follow_symlinks", None)
        self.show_empty = self.config.show_empty if show_empty is None else show_empty
        self.follow_symlinks = self.config.follow_symlinks if follow_symlinks is None else follow_symlinks

    # -- signal handling ----------------------------------------------------

    def install_signal_handlers(self) -> dict:
        """Route SIGINT/SIGTERM to the shutdown flag; returns the previous handlers"""
        previous = {signal.SIGINT: signal.signal(signal.SIGINT, self._signal_handler)}
        if hasattr(signal, "SIGTERM"):
            previous[signal.SIGTERM] = signal.signal(signal.SIGTERM, self._signal_handler)
        return previous

    def _signal_handler(self, signum, frame):
        if self._shutdown_requested:
            sys.exit(1)
        self._shutdown_requested = True
        self.ui.print_warning("\nShutdown requested... press Ctrl+C again to force quit.")

    def shutdown_requested(self) -> bool:
        return self._shutdown_requested

    # -- scanning ------------------------------------------------------------

    def scan(self, search_dir: pathlib.Path) -> list[CrateInfo]:
        start = time.monotonic()

        progress = self.ui.create_activity_progress()
        with progress:
            task = progress.add_task("Scanning...", total=None)

            def on_progress(dirs_scanned: int):
                self.dirs_scanned = dirs_scanned
                progress.update(task, description=f"Scanning... {dirs_scanned} dirs")

            crates = find_crates(
                search_dir,
                follow_symlinks=self.follow_symlinks,
                shutdown_requested=self.shutdown_requested,
                progress_callback=on_progress,
            )

        if getattr(self.args, "verbose", False):
            elapsed = time.monotonic() - start
            self.ui.print_progress(
                f"Scanned {self.dirs_scanned:,} dirs in {elapsed:.1f}s, found {len(crates)} crates"
            )

        return sort_crates(crates)

    # -- reporting -----------------------------------------------------------

    def display(self, crates: list[CrateInfo], stats: CrateStats):
        for crate in crates:
            if crate.target_size is not None:
                self.ui.print_sized_path(crate.target_size, crate.path)
            elif self.show_empty:
                self.ui.print_empty_path(crate.path)

        if stats.total_size > 0:
            self.ui.print_separator()
            self.ui.print_total(stats.total_size)
        elif stats.non_empty_crates == 0 and not self.show_empty:
            if not crates:
                self.ui.print_progress("no crates found")
            else:
                self.ui.print_progress("only empty crates found")

    def show_stats(self):
        stats = self.config.stats
        self.ui.print_info(f"Runs with cleanup: {stats.get('total_runs', 0)}")
        self.ui.print_info(f"Total reclaimed:   {format_size(stats.get('total_reclaimed_bytes', 0))}")
        if self.config.last_run:
            self.ui.print_info(f"Last cleanup:      {self.config.last_run}")

    # -- removal -------------------------------------------------------------

    def remove_target_dirs(self, crates: list[CrateInfo]) -> bool:
        """Remove the target directory of every measured crate

        Failures do not stop the remaining removals; they are reported at the end.
        """
        reclaimed = 0
        interrupted = False
        errors: list[tuple[pathlib.Path, str]] = []

        for crate in crates:
            if crate.target_size is None:
                continue
            if self._shutdown_requested:
                interrupted = True
                break

            target_dir = crate.target_dir
            self.ui.console.print(
                f"[red]removing[/red] [blue]{escape(format_path_for_display(target_dir))}[/blue]", soft_wrap=True
            )
            try:
                shutil.rmtree(target_dir)
                reclaimed += crate.target_size
            except OSError as e:
                errors.append((target_dir, str(e)))

        # An interrupted run only counts when something was actually removed
        if not interrupted or reclaimed:
            self.config.record_run(reclaimed)
            self.config_manager.save(self.config)
            self.ui.print_success(f"reclaimed {format_size(reclaimed)}")

        if interrupted:
            self.ui.print_warning("removal interrupted")
        if errors:
            self.ui.print_error(f"failed to remove {len(errors)} directories:")
            for path, err in errors:
                self.ui.print_error(f"  {format_path_for_display(path)}: {err}")
            return False
        return not interrupted

    # -- main entry point ----------------------------------------------------

    def run(self) -> int:
        if getattr(self.args, "show_stats", False):
            self.show_stats()
            return 0

        search_dir = getattr(self.args, "search_dir", None)
        search_dir = pathlib.Path(search_dir) if search_dir else pathlib.Path.cwd()

        if not search_dir.is_dir():
            self.ui.print_error(f"Not a directory: {search_dir}")
            return 1

        try:
            crates = self.scan(search_dir)
        except ScanInterrupted:
            self.ui.print_warning("scan interrupted")
            return 1
        except OSError as e:
            self.ui.print_error(str(e))
            return 1

        stats = crate_stats(crates)
        self.display(crates, stats)

        if stats.non_empty_crates == 0 or getattr(self.args, "dry_run", False):
            return 0

        self.ui.console.print()
        if not self.ui.confirm("remove target directories"):
            self.ui.print_progress("cancelled")
            return 0

        return 0 if self.remove_target_dirs(crates) else 1


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cargo-swoop",
        description="Find Rust crates and remove their target directories",
    )
    parser.add_argument("search_dir", nargs="?", help="Directory to scan (defaults to the current directory)")
    parser.add_argument(
        "--follow-symlinks", action="store_true", default=None, help="Follow symbolic links while scanning"
    )
    parser.add_argument(
        "--show-empty", action="store_true", default=None, help="Also list crates without a target directory"
    )
    parser.add_argument("--dry-run", action="store_true", help="Report findings without offering removal")
    parser.add_argument("-v", "--verbose", action="store_true", help="Print a scan summary")
    parser.add_argument("--show-stats", action="store_true", help="Show lifetime cleanup statistics")
    parser.add_argument("--config-dir", type=pathlib.Path, default=None, help=argparse.SUPPRESS)
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    argv = list(argv)
    # `cargo swoop` passes the subcommand name through as the first argument
    if argv and argv[0] == "swoop":
        argv = argv[1:]

    args = build_parser().parse_args(argv)
    app = Swoop(args)
    previous_handlers = app.install_signal_handlers()
    try:
        return app.run()
    finally:
        for signum, handler in previous_handlers.items():
            if handler is not None:
                signal.signal(signum, handler)


if __name__ == "__main__":
    sys.exit(main())
