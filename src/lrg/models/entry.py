"""
Entry data models for lrg.

This module defines the record produced for every filesystem object found
during a walk, and the sort directions understood by the ranker.
"""

from typing import Dict, Any
from pathlib import Path
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field, field_validator


MAX_FILE_SIZE = 2 ** 64 - 1


class SortBy(Enum):
    """Sort directions by file size."""
    ASCENDING = "ascending"
    DESCENDING = "descending"


class Entry(BaseModel):
    """
    A single filesystem object found during traversal.

    Entries are immutable. The size is the raw metadata size reported by
    the filesystem, so directories carry their own inode size rather than
    the sum of their contents.

    Attributes:
        path: Path of the object, joined from the root given to the walker
        size: Size in bytes
        is_dir: Whether the object is a directory
        is_symlink: Whether the object was reached through a symbolic link
        depth: Depth below the root (0 for the root's direct children)
    """

    model_config = ConfigDict(frozen=True)

    path: str = Field(..., min_length=1, description="Path of the filesystem object")
    size: int = Field(..., ge=0, le=MAX_FILE_SIZE, description="Size in bytes")
    is_dir: bool = Field(False, description="Whether the object is a directory")
    is_symlink: bool = Field(False, description="Whether the object is a symbolic link")
    depth: int = Field(0, ge=0, description="Depth below the walk root")

    @field_validator('path')
    @classmethod
    def validate_path(cls, v: str) -> str:
        """Reject blank paths."""
        if not v.strip():
            raise ValueError("Entry path cannot be empty")
        return v

    def get_filename(self) -> str:
        """Get just the filename without directory path."""
        return Path(self.path).name

    def get_size_human_readable(self) -> str:
        """Get entry size in human-readable format."""
        size = float(self.size)
        for unit in ['B', 'KB', 'MB', 'GB', 'TB']:
            if size < 1024.0:
                return f"{size:.1f} {unit}"
            size /= 1024.0
        return f"{size:.1f} PB"

    def to_dict(self) -> Dict[str, Any]:
        """Convert entry to dictionary representation."""
        data = self.model_dump()
        data['filename'] = self.get_filename()
        data['size_human'] = self.get_size_human_readable()
        return data

    def __str__(self) -> str:
        return f"{self.get_size_human_readable()}: {self.path}"
