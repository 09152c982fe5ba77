"""
Traversal options for lrg.

This module defines the read-only option set that controls how the walker
descends a directory tree.
"""

import os
from typing import Dict, Any, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class LrgOptions(BaseModel):
    """
    Options controlling a single walk.

    Depth counting starts at 0 for the root's direct children. A
    ``max_depth`` of ``None`` means the walk is unbounded.

    Attributes:
        root: Default root path used when no explicit path is given
        max_depth: Deepest level whose directories are still descended into
        min_depth: Shallowest level whose entries are reported
        no_recursion: Only visit the root's direct children; overrides max_depth
        follow_links: Resolve symbolic links and traverse their targets
        include_dirs: Report directories alongside files
    """

    model_config = ConfigDict(frozen=True)

    root: str = Field(default_factory=os.getcwd, description="Root path to search")
    max_depth: Optional[int] = Field(None, ge=0, description="Maximum recursion depth")
    min_depth: int = Field(0, ge=0, description="Minimum depth of reported entries")
    no_recursion: bool = Field(False, description="Restrict the walk to direct children")
    follow_links: bool = Field(False, description="Follow symbolic links")
    include_dirs: bool = Field(False, description="Include directories in the results")

    @field_validator('root')
    @classmethod
    def validate_root(cls, v: str) -> str:
        """Expand a leading ``~`` in the root path."""
        if not v or not v.strip():
            raise ValueError("Root path cannot be empty")
        return os.path.expanduser(v)

    @model_validator(mode='after')
    def validate_depths(self):
        """Reject depth bounds that can never match anything."""
        if self.no_recursion:
            return self
        if self.max_depth is not None and self.min_depth > self.max_depth:
            raise ValueError(
                f"min_depth ({self.min_depth}) cannot exceed max_depth ({self.max_depth})"
            )
        return self

    def effective_max_depth(self) -> Optional[int]:
        """Get the depth bound actually applied, with no_recursion taking precedence."""
        if self.no_recursion:
            return 0
        return self.max_depth

    def should_descend(self, depth: int) -> bool:
        """Check whether a directory found at ``depth`` is recursed into."""
        limit = self.effective_max_depth()
        return limit is None or depth < limit

    def should_report(self, depth: int) -> bool:
        """Check whether an entry found at ``depth`` is reported."""
        return depth >= self.min_depth

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return self.model_dump()
