"""folderindex - Markdown index generator for lazily loaded folder trees"""

from .config import FolderIndexConfig, default_config
from .logging import FolderIndexLogger, LogConfig, configure_logging
from .main import FolderIndex
from .outline import serialize
from .page import FolderPage
from .resolver import resolve
from .schemas import (
    Group,
    IndexRunResult,
    LeafItem,
    OutlineNode,
    OutlineResult,
    OutlineStatus,
    TreeRow,
    UnknownChild,
)
from .types import FolderIndexError, ResolutionTimeoutError

__version__ = "0.1.0"

__all__ = [
    "FolderIndex",
    "FolderIndexConfig",
    "default_config",
    "FolderPage",
    "FolderIndexLogger",
    "LogConfig",
    "configure_logging",
    "resolve",
    "serialize",
    "TreeRow",
    "Group",
    "LeafItem",
    "UnknownChild",
    "OutlineNode",
    "OutlineResult",
    "OutlineStatus",
    "IndexRunResult",
    "FolderIndexError",
    "ResolutionTimeoutError",
]
