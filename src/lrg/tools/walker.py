"""
Filesystem walker for lrg.

This module traverses a directory tree depth-first and collects one Entry per
filesystem object, honouring the depth bounds, symlink policy and
directory-inclusion policy of an LrgOptions value. Unreadable subdirectories
are skipped so that a partial walk still yields results.
"""

import os
import stat
import logging
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Set, Tuple, Union

from ..models.entry import Entry
from ..models.options import LrgOptions


logger = logging.getLogger(__name__)


class ErrorKind(Enum):
    """Kinds of fatal walk errors."""
    NOT_FOUND = "not_found"
    PERMISSION_DENIED = "permission_denied"


class WalkError(Exception):
    """Raised when a walk cannot start at all."""

    kind: Optional[ErrorKind] = None

    def __init__(self, message: str, path: Union[str, Path]):
        super().__init__(message)
        self.path = str(path)


class RootNotFoundError(WalkError):
    """Raised when the root path does not exist."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, path: Union[str, Path]):
        super().__init__(f"cannot access '{path}': No such file or directory", path)


class RootPermissionError(WalkError):
    """Raised when the root path itself cannot be read."""

    kind = ErrorKind.PERMISSION_DENIED

    def __init__(self, path: Union[str, Path]):
        super().__init__(f"cannot open '{path}': Permission denied", path)


class Walker:
    """
    Depth-first directory walker that collects entries.

    This class provides directory traversal with support for:
    - Optional minimum and maximum depth bounds
    - Following or recording symbolic links
    - Including or excluding directory entries
    - Cycle detection by device and inode when links are followed
    """

    def __init__(self, options: Optional[LrgOptions] = None):
        """
        Initialize the walker.

        Args:
            options: Traversal options; defaults are used when omitted
        """
        self.options = options or LrgOptions()
        self._stats = self._empty_stats()

    @staticmethod
    def _empty_stats() -> Dict[str, int]:
        return {
            'entries_collected': 0,
            'directories_traversed': 0,
            'links_skipped': 0,
            'errors': 0
        }

    def walk(self, root: Optional[Union[str, Path]] = None) -> List[Entry]:
        """
        Walk a root path and collect entries.

        Args:
            root: File or directory to walk; defaults to ``options.root``

        Returns:
            Entries in traversal order (pre-order, children sorted by name)

        Raises:
            RootNotFoundError: If the root does not exist
            RootPermissionError: If the root directory cannot be listed
            WalkError: If the root cannot be read for any other reason
        """
        root_path = str(root) if root is not None else self.options.root

        try:
            root_stat = os.stat(root_path)
        except OSError as e:
            raise self._root_error(root_path, e) from e

        if not stat.S_ISDIR(root_stat.st_mode):
            logger.debug(f"Root is not a directory, returning it alone: {root_path}")
            entry = Entry(path=root_path, size=root_stat.st_size, is_dir=False,
                          is_symlink=os.path.islink(root_path))
            self._stats['entries_collected'] += 1
            return [entry]

        try:
            children = self._list_directory(root_path)
        except OSError as e:
            raise self._root_error(root_path, e) from e

        logger.info(f"Walking directory tree: {root_path}")
        entries: List[Entry] = []
        visited = {self._identity(root_stat)}
        self._stats['directories_traversed'] += 1
        self._walk_children(children, 0, visited, entries)
        self._stats['entries_collected'] += len(entries)
        return entries

    def _walk_children(self, children: List[os.DirEntry], depth: int,
                       visited: Set[Tuple[int, int]], entries: List[Entry]) -> None:
        """
        Collect entries for one directory's children and recurse.

        Args:
            children: Directory entries, already sorted by name
            depth: Depth of the children below the root
            visited: Identities of directories already descended into
            entries: Output list, appended to in traversal order
        """
        options = self.options

        for child in children:
            try:
                is_link = child.is_symlink()
                if is_link and not options.follow_links:
                    self._stats['links_skipped'] += 1
                    child_stat = child.stat(follow_symlinks=False)
                    if options.should_report(depth):
                        entries.append(self._make_entry(child.path, child_stat, depth, is_link))
                    continue

                child_stat = self._stat_child(child, is_link)
            except OSError as e:
                logger.warning(f"Error reading metadata of {child.path}: {e}")
                self._stats['errors'] += 1
                continue

            if not stat.S_ISDIR(child_stat.st_mode):
                if options.should_report(depth):
                    entries.append(self._make_entry(child.path, child_stat, depth, is_link))
                continue

            if options.include_dirs and options.should_report(depth):
                entries.append(self._make_entry(child.path, child_stat, depth, is_link))

            if not options.should_descend(depth):
                continue

            try:
                # DirEntry.stat() reports zero inodes on Windows
                identity = self._identity(os.stat(child.path))
                if identity in visited:
                    logger.debug(f"Directory already visited, not descending: {child.path}")
                    continue
                visited.add(identity)
                grandchildren = self._list_directory(child.path)
            except OSError as e:
                logger.warning(f"Error opening {child.path}: {e.strerror or e}")
                self._stats['errors'] += 1
                continue

            self._stats['directories_traversed'] += 1
            self._walk_children(grandchildren, depth + 1, visited, entries)

    def _stat_child(self, child: os.DirEntry, is_link: bool) -> os.stat_result:
        """
        Stat a child, resolving links when they are followed.

        A link that cannot be resolved (dangling or looping) falls back to the
        link's own metadata.
        """
        if not is_link:
            return child.stat(follow_symlinks=False)
        try:
            return child.stat(follow_symlinks=True)
        except OSError as e:
            logger.warning(f"Cannot resolve symbolic link, recording the link itself: "
                           f"{child.path} ({e.strerror or e})")
            return child.stat(follow_symlinks=False)

    @staticmethod
    def _root_error(path: str, error: OSError) -> WalkError:
        """Map an OSError raised on the root to a WalkError."""
        if isinstance(error, (FileNotFoundError, NotADirectoryError)):
            return RootNotFoundError(path)
        if isinstance(error, PermissionError):
            return RootPermissionError(path)
        return WalkError(f"cannot access '{path}': {error.strerror or error}", path)

    @staticmethod
    def _list_directory(path: str) -> List[os.DirEntry]:
        with os.scandir(path) as it:
            return sorted(it, key=lambda e: e.name)

    @staticmethod
    def _identity(stat_result: os.stat_result) -> Tuple[int, int]:
        return (stat_result.st_dev, stat_result.st_ino)

    @staticmethod
    def _make_entry(path: str, stat_result: os.stat_result, depth: int, is_link: bool) -> Entry:
        return Entry(
            path=path,
            size=stat_result.st_size,
            is_dir=stat.S_ISDIR(stat_result.st_mode),
            is_symlink=is_link,
            depth=depth
        )

    def get_stats(self) -> Dict[str, int]:
        """
        Get statistics about the walk.

        Returns:
            Dictionary containing operation statistics
        """
        return self._stats.copy()

    def reset_stats(self) -> None:
        """Reset the statistics counters."""
        self._stats = self._empty_stats()


def walk(root: Union[str, Path], options: Optional[LrgOptions] = None) -> List[Entry]:
    """
    Convenience function to walk a root with the given options.

    Args:
        root: File or directory to walk
        options: Traversal options (optional)

    Returns:
        Entries in traversal order

    Raises:
        WalkError: If the root is missing or unreadable
    """
    return Walker(options).walk(root)
