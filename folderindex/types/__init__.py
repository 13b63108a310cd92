"""
Exports for raw tree snapshot types and errors.
"""

from .errors import (
    BrowserNotInitializedError,
    FolderIndexError,
    ResolutionTimeoutError,
)
from .tree import (
    LocateSnapshot,
    RawChild,
    RawGroup,
    RawLeafItem,
    RawRow,
    RawUnknown,
)

__all__ = [
    "RawChild",
    "RawGroup",
    "RawLeafItem",
    "RawRow",
    "RawUnknown",
    "LocateSnapshot",
    "FolderIndexError",
    "ResolutionTimeoutError",
    "BrowserNotInitializedError",
]
