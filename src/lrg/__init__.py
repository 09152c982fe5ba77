"""
lrg - Core Package

Find the largest (or smallest) files in a directory tree, as a library
and as a command-line tool.
"""

__version__ = "0.1.0"
__author__ = "lrg contributors"

from .models.entry import Entry, SortBy
from .models.options import LrgOptions
from .tools.ranker import Lrg
from .tools.walker import (
    ErrorKind,
    RootNotFoundError,
    RootPermissionError,
    WalkError,
    Walker,
    walk
)

__all__ = [
    'Entry',
    'SortBy',
    'LrgOptions',
    'Lrg',
    'ErrorKind',
    'RootNotFoundError',
    'RootPermissionError',
    'WalkError',
    'Walker',
    'walk'
]
