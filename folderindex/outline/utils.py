from typing import Optional

from ..config import FolderIndexConfig, default_config
from ..logging import FolderIndexLogger
from ..schemas import Group, LeafItem, OutlineNode, OutlineResult, TreeRow

MAX_BULLET_LEVEL = 5


def level_prefix(level: int) -> str:
    """Returns the Markdown prefix written before every entry at ``level``."""
    if level == 0:
        return "\n## "
    if 1 <= level <= MAX_BULLET_LEVEL:
        return "\n" + "\t" * (level - 1) + "* "
    return "\n"


def escape_label(name: str) -> str:
    """Swaps square brackets for full-width ones so the label cannot break link syntax."""
    return name.replace("[", "【").replace("]", "】")


def format_link(name: str, url: Optional[str], base_url: str) -> str:
    return f"[{escape_label(name)}]({base_url}{url or ''})"


def is_unloaded(item: LeafItem, loading_label: str) -> bool:
    """A row is still loading when it is collapsed or is the loading placeholder."""
    if item.expanded is False:
        return True
    return item.name == loading_label and item.url is None


def _render_entry(node: OutlineNode) -> str:
    if not node.group:
        return node.text
    return node.text + render_outline(node.children, node.level + 1)


def render_outline(nodes: list[OutlineNode], level: int = 0) -> str:
    """Joins sibling entries with the level prefix, which also opens the block."""
    prefix = level_prefix(level)
    return prefix + prefix.join(_render_entry(node) for node in nodes)


def build_outline(
    rows: list[TreeRow],
    level: int = 0,
    *,
    base_url: str,
    loading_label: str,
    global_index_label: str,
    logger: Optional[FolderIndexLogger] = None,
) -> tuple[list[OutlineNode], bool]:
    """
    Walks the rows of one container and returns its sorted entries.

    Inside a row, a leaf's link becomes the pending label of whatever follows
    it: a group consumes it as its heading, another leaf (or the end of the
    row) flushes it as a standalone entry.

    Returns:
        The sorted entries and whether every visited leaf was loaded.
    """
    entries: list[OutlineNode] = []
    complete = True

    for row in rows:
        pending: Optional[str] = None
        for child in row.children:
            if isinstance(child, Group):
                children, sub_complete = build_outline(
                    child.rows,
                    level + 1,
                    base_url=base_url,
                    loading_label=loading_label,
                    global_index_label=global_index_label,
                    logger=logger,
                )
                complete = complete and sub_complete
                entries.append(
                    OutlineNode(
                        text=pending or "", level=level, group=True, children=children
                    )
                )
                pending = None
            elif isinstance(child, LeafItem):
                if pending:
                    entries.append(OutlineNode(text=pending, level=level))
                    pending = None

                name = child.name or ""
                if is_unloaded(child, loading_label):
                    complete = False
                    if logger:
                        logger.debug(
                            "Row not loaded yet",
                            category="outline",
                            auxiliary={"name": name, "level": level},
                        )

                if name != global_index_label:
                    pending = format_link(name, child.url, base_url)
            elif child.role is not None:
                if logger:
                    logger.debug(
                        f"unknown role: {child.role}",
                        category="outline",
                        auxiliary={"level": level},
                    )

        if pending:
            entries.append(OutlineNode(text=pending, level=level))

    entries.sort(key=lambda node: (node.text, _render_entry(node)))
    return entries, complete


def serialize(
    rows: list[TreeRow],
    config: Optional[FolderIndexConfig] = None,
    logger: Optional[FolderIndexLogger] = None,
) -> OutlineResult:
    """
    Serializes a tree snapshot into a nested Markdown outline.

    Completeness starts fresh on every call, so a run never inherits the
    state of a previous one. Incomplete and empty outlines are returned,
    not raised; callers branch on ``OutlineResult.status``.
    """
    config = config or default_config
    nodes, complete = build_outline(
        rows,
        0,
        base_url=config.base_url,
        loading_label=config.loading_label,
        global_index_label=config.global_index_label,
        logger=logger,
    )
    text = render_outline(nodes, 0)

    if logger:
        logger.debug(
            "Serialized folder tree",
            category="outline",
            auxiliary={"entries": len(nodes), "complete": complete},
        )
    return OutlineResult(text=text, complete=complete, nodes=nodes)
