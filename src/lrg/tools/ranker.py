"""
Size ranking for lrg.

The Lrg class walks a root once at construction and keeps the collected
entries in memory. Sort methods reorder them in place with a stable sort
and return the same object, so calls can be chained::

    Lrg("~/Downloads").sort_descending().get_entries(10)
"""

import functools
import logging
from pathlib import Path
from typing import Callable, Dict, Iterator, List, Optional, Union

from ..models.entry import Entry, SortBy
from ..models.options import LrgOptions
from .walker import Walker


logger = logging.getLogger(__name__)

Comparator = Callable[[Entry, Entry], int]


class Lrg:
    """
    Holds the entries of one walk and orders them by size or a custom key.

    Entries keep traversal order until a sort is invoked. Equal-size
    entries keep their relative order across sorts.
    """

    def __init__(self, path: Optional[Union[str, Path]] = None, options: Optional[LrgOptions] = None):
        """
        Walk ``path`` and collect its entries.

        Args:
            path: File or directory to search; defaults to ``options.root``
            options: Traversal options; defaults are used when omitted

        Raises:
            WalkError: If the root is missing or unreadable
        """
        self.options = options or LrgOptions()
        walker = Walker(self.options)
        self._entries: List[Entry] = walker.walk(path)
        self.stats: Dict[str, int] = walker.get_stats()
        logger.debug(f"Collected {len(self._entries)} entries")

    def sort_by(self, direction: Union[SortBy, str]) -> 'Lrg':
        """Sort by size in the given direction and return self."""
        direction = SortBy(direction)
        if direction is SortBy.ASCENDING:
            return self.sort_ascending()
        return self.sort_descending()

    def sort_ascending(self) -> 'Lrg':
        """Sort by size, smallest first, and return self."""
        self._entries.sort(key=lambda entry: entry.size)
        return self

    def sort_descending(self) -> 'Lrg':
        """Sort by size, largest first, and return self."""
        self._entries.sort(key=lambda entry: entry.size, reverse=True)
        return self

    def sort_by_custom(self, comparator: Comparator) -> 'Lrg':
        """
        Sort with a caller-supplied comparator and return self.

        Args:
            comparator: Called with two entries, returns a negative number,
                zero or a positive number when the first sorts before, equal
                to or after the second
        """
        self._entries.sort(key=functools.cmp_to_key(comparator))
        return self

    def get_entries(self, limit: Optional[int] = None) -> List[Entry]:
        """
        Get the entries in their current order.

        Args:
            limit: Return at most this many entries from the front

        Returns:
            A new list; asking for more entries than exist returns them all
        """
        if limit is None:
            return list(self._entries)
        if limit < 0:
            raise ValueError(f"Entry limit cannot be negative: {limit}")
        return self._entries[:limit]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Entry]:
        return iter(list(self._entries))
