"""
Data models for lrg.

This module contains the entry, option and configuration structures
shared by the walker, the ranker and the command-line front end.
"""

from .entry import Entry, SortBy
from .options import LrgOptions
from .config import LrgConfig

__all__ = ['Entry', 'SortBy', 'LrgOptions', 'LrgConfig']
