#!/usr/bin/env python3
"""
Generic Directory Walker Module

Provides a depth-first directory iterator driven by its caller. Instead of
recursing on its own, the walker yields discrete events (file found,
subdirectory found, directory finished) and lets the caller decide which
subdirectories to descend into. Per-directory state lives in frame objects
that the caller may mutate while the directory is still open.
"""

import os
import pathlib
from dataclasses import dataclass
from typing import Callable, Generic, Iterator, Optional, TypeVar, Union


class ScanInterrupted(Exception):
    """Raised when a traversal is cancelled through its shutdown callback"""


class DirFrame:
    """State for one open directory on the walker stack"""

    def __init__(self, path: pathlib.Path, entries: Iterator[os.DirEntry]):
        self.path = path
        self.entries = entries

    def close(self):
        """Release the underlying directory handle"""
        close = getattr(self.entries, "close", None)
        if close is not None:
            close()


F = TypeVar("F", bound=DirFrame)


@dataclass
class FileFound:
    """A regular file was found in the current directory"""

    entry: os.DirEntry


@dataclass
class SubdirFound:
    """A subdirectory was found; the walker does not enter it on its own"""

    path: pathlib.Path


@dataclass
class DirFinished(Generic[F]):
    """All entries of a directory have been consumed"""

    frame: F


WalkEvent = Union[FileFound, SubdirFound, DirFinished]


class DirWalker(Generic[F]):
    """Explicit-stack depth-first walker over a directory tree

    The innermost open directory is the last frame on the stack. Descent is
    always requested by the caller through descend_into(), which makes
    pruning a matter of simply not calling it.
    """

    def __init__(
        self,
        root: pathlib.Path,
        frame_factory: Callable[[pathlib.Path, Iterator[os.DirEntry]], F],
        follow_symlinks: bool = False,
        shutdown_requested: Optional[Callable[[], bool]] = None,
    ):
        """Open the root directory as the first frame

        Args:
            root: Directory to start from
            frame_factory: Builds a frame from a path and its entry iterator
            follow_symlinks: Re-classify symlinks by their target instead of skipping them
            shutdown_requested: Optional callable polled on every advance()

        Raises:
            OSError: If the root directory cannot be listed
        """
        self._frame_factory = frame_factory
        self._follow_symlinks = follow_symlinks
        self.shutdown_requested = shutdown_requested
        self._stack: list[F] = []
        # (st_dev, st_ino) of each open frame, only tracked when following symlinks
        self._frame_ids: list[tuple[int, int]] = []
        self.descend_into(pathlib.Path(root))

    @property
    def follow_symlinks(self) -> bool:
        return self._follow_symlinks

    @property
    def depth(self) -> int:
        """Number of directories currently open"""
        return len(self._stack)

    def current_frame(self) -> F:
        """Return the innermost open frame

        Raises:
            RuntimeError: If the traversal has already finished
        """
        if not self._stack:
            raise RuntimeError("current_frame() called after the walk finished")
        return self._stack[-1]

    def descend_into(self, path: pathlib.Path):
        """Open a directory and push it as the new innermost frame

        When following symlinks, a directory that is already open further up
        the stack is not entered again.
        """
        frame_id = None
        if self._follow_symlinks:
            st = os.stat(path)
            frame_id = (st.st_dev, st.st_ino)
            if frame_id in self._frame_ids:
                return

        entries = os.scandir(path)
        self._stack.append(self._frame_factory(path, entries))
        if frame_id is not None:
            self._frame_ids.append(frame_id)

    def advance(self) -> Optional[WalkEvent]:
        """Produce the next traversal event, or None once the stack is empty

        Raises:
            OSError: If an entry or its file type cannot be read
            ScanInterrupted: If shutdown_requested reports a pending shutdown
        """
        if self.shutdown_requested and self.shutdown_requested():
            raise ScanInterrupted("traversal interrupted")

        while self._stack:
            frame = self._stack[-1]
            entry = next(frame.entries, None)
            if entry is None:
                self._stack.pop()
                if self._follow_symlinks:
                    self._frame_ids.pop()
                frame.close()
                return DirFinished(frame)

            if entry.is_dir(follow_symlinks=False):
                return SubdirFound(pathlib.Path(entry.path))
            if entry.is_file(follow_symlinks=False):
                return FileFound(entry)

            if entry.is_symlink() and self._follow_symlinks:
                # Dangling links report False for both checks and are skipped
                if entry.is_dir():
                    return SubdirFound(pathlib.Path(entry.path))
                if entry.is_file():
                    return FileFound(entry)

            # sockets, fifos, devices and unfollowed symlinks

        return None

    def __iter__(self) -> Iterator[WalkEvent]:
        while True:
            event = self.advance()
            if event is None:
                return
            yield event

    def close(self):
        """Release every directory handle still open on the stack"""
        while self._stack:
            self._stack.pop().close()
        self._frame_ids.clear()

    def __enter__(self) -> "DirWalker[F]":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
