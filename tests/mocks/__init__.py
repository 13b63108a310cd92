"""Mock implementations for folderindex testing"""

from .mock_browser import MockPlaywrightPage, make_element
from .tree import group, leaf, raw_group, raw_leaf, raw_row, row, unknown

__all__ = [
    "MockPlaywrightPage",
    "make_element",
    "leaf",
    "group",
    "row",
    "unknown",
    "raw_leaf",
    "raw_group",
    "raw_row",
]
