"""Builders for folder tree snapshots used across tests"""

from typing import Optional

from folderindex.schemas import Group, LeafItem, TreeRow, UnknownChild


def leaf(name: str, url: Optional[str] = None, expanded: Optional[bool] = None) -> LeafItem:
    return LeafItem(name=name, url=url, expanded=expanded)


def group(*rows: TreeRow) -> Group:
    return Group(rows=list(rows))


def row(*children) -> TreeRow:
    return TreeRow(children=list(children))


def unknown(role: Optional[str]) -> UnknownChild:
    return UnknownChild(role=role)


def raw_leaf(name, url=None, expanded=None) -> dict:
    """Shape produced by the in-page snapshot script for a treeitem."""
    return {
        "kind": "treeitem",
        "role": "treeitem",
        "name": name,
        "expanded": expanded,
        "url": url,
    }


def raw_group(*rows) -> dict:
    return {"kind": "group", "role": "group", "rows": list(rows)}


def raw_row(*children) -> dict:
    return {"children": list(children)}
