#!/usr/bin/env python3
"""
Crate Finder Module for Swoop

Discovers Rust crates below a search directory and measures the size of
their target directories. Both passes are driven by dir_walker: discovery
walks the search tree and prunes every target directory, while each target
directory is measured by its own, independently rooted walk.
"""

import os
import pathlib
from dataclasses import dataclass
from typing import Callable, Iterator, Optional

from dir_walker import DirFinished, DirFrame, DirWalker, FileFound, SubdirFound

MANIFEST_NAME = "Cargo.toml"
TARGET_DIR_NAME = "target"
PROGRESS_INTERVAL = 200


@dataclass(frozen=True)
class CrateInfo:
    """A discovered crate and the size of its target directory"""

    path: pathlib.Path
    target_size: Optional[int] = None

    @property
    def target_dir(self) -> pathlib.Path:
        return self.path / TARGET_DIR_NAME


@dataclass
class CrateStats:
    """Summary over all crates that have a measured target directory"""

    total_size: int = 0
    non_empty_crates: int = 0


class DiscoveryFrame(DirFrame):
    """Directory state used while looking for crates"""

    def __init__(self, path: pathlib.Path, entries: Iterator[os.DirEntry]):
        super().__init__(path, entries)
        self.has_manifest = False
        self.target_dir: Optional[pathlib.Path] = None
        # Set once the crate has been added to the results
        self.done = False


class SizeFrame(DirFrame):
    """Directory state used while summing a target directory"""


def is_hidden(path: pathlib.Path) -> bool:
    return path.name.startswith(".")


def find_crates(
    search_dir: pathlib.Path,
    follow_symlinks: bool = False,
    shutdown_requested: Optional[Callable[[], bool]] = None,
    progress_callback: Optional[Callable[[int], None]] = None,
) -> list[CrateInfo]:
    """Find all crates below search_dir

    Args:
        search_dir: Directory to scan
        follow_symlinks: Follow symbolic links to files and directories
        shutdown_requested: Optional callable polled between walk steps
        progress_callback: Called with the number of scanned directories

    Returns:
        Unordered list of crates, with target_size set for crates that have a target directory

    Raises:
        OSError: If any directory or file cannot be read
        ScanInterrupted: If shutdown_requested reports a pending shutdown
    """
    crates: list[CrateInfo] = []
    dirs_scanned = 0

    with DirWalker(
        search_dir, DiscoveryFrame, follow_symlinks=follow_symlinks, shutdown_requested=shutdown_requested
    ) as walker:
        for event in walker:
            if isinstance(event, FileFound):
                if event.entry.name == MANIFEST_NAME:
                    frame = walker.current_frame()
                    frame.has_manifest = True
                    compute_target_size(crates, frame, walker)

            elif isinstance(event, SubdirFound):
                if event.path.name == TARGET_DIR_NAME:
                    frame = walker.current_frame()
                    frame.target_dir = event.path
                    compute_target_size(crates, frame, walker)
                elif not is_hidden(event.path):
                    walker.descend_into(event.path)

            elif isinstance(event, DirFinished):
                frame = event.frame
                if frame.has_manifest and not frame.done:
                    crates.append(CrateInfo(path=frame.path))

                dirs_scanned += 1
                if progress_callback and dirs_scanned % PROGRESS_INTERVAL == 0:
                    progress_callback(dirs_scanned)

    if progress_callback:
        progress_callback(dirs_scanned)

    return crates


def compute_target_size(crates: list[CrateInfo], frame: DiscoveryFrame, walker: DirWalker) -> None:
    """Measure the target directory of frame once both it and the manifest are known

    The manifest and the target directory can show up in either order, so
    this is attempted on both events and only runs on the second one.
    """
    if not frame.has_manifest or frame.target_dir is None or frame.done:
        return

    frame.done = True
    size = dir_size(
        frame.target_dir,
        follow_symlinks=walker.follow_symlinks,
        shutdown_requested=walker.shutdown_requested,
    )
    crates.append(CrateInfo(path=frame.path, target_size=size))


def dir_size(
    path: pathlib.Path,
    follow_symlinks: bool = False,
    shutdown_requested: Optional[Callable[[], bool]] = None,
) -> int:
    """Return the total size in bytes of all regular files below path"""
    total = 0
    with DirWalker(path, SizeFrame, follow_symlinks=follow_symlinks, shutdown_requested=shutdown_requested) as walker:
        for event in walker:
            if isinstance(event, FileFound):
                total += event.entry.stat(follow_symlinks=follow_symlinks).st_size
            elif isinstance(event, SubdirFound):
                walker.descend_into(event.path)
    return total


def sort_key(crate: CrateInfo) -> tuple[bool, int]:
    """Order crates by size, with unmeasured crates before all measured ones"""
    return (crate.target_size is not None, crate.target_size or 0)


def sort_crates(crates: list[CrateInfo]) -> list[CrateInfo]:
    """Sort crates in place by ascending target size and return the list"""
    crates.sort(key=sort_key)
    return crates


def crate_stats(crates: list[CrateInfo]) -> CrateStats:
    stats = CrateStats()
    for crate in crates:
        if crate.target_size is not None:
            stats.total_size += crate.target_size
            stats.non_empty_crates += 1
    return stats
