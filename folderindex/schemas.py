from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class FolderIndexBaseModel(BaseModel):
    """Base model for all folderindex models with camelCase conversion support"""

    model_config = ConfigDict(
        populate_by_name=True,
        alias_generator=lambda field_name: "".join(
            [field_name.split("_")[0]]
            + [word.capitalize() for word in field_name.split("_")[1:]]
        ),
    )


class LeafItem(FolderIndexBaseModel):
    """
    A directly labeled tree entry, possibly linking to a document.

    Attributes:
        name (Optional[str]): The row label (``aria-label``).
        expanded (Optional[bool]): ``None`` when the row is not collapsible.
        url (Optional[str]): Link target, absent while the row is unresolved.
    """

    kind: Literal["treeitem"] = "treeitem"
    name: Optional[str] = None
    expanded: Optional[bool] = None
    url: Optional[str] = None


class Group(FolderIndexBaseModel):
    """A sub-tree container. Its label comes from the leaf rendered just before it."""

    kind: Literal["group"] = "group"
    rows: list["TreeRow"] = Field(default_factory=list)


class UnknownChild(FolderIndexBaseModel):
    """Any other row child; ``role`` keeps the raw attribute for diagnostics."""

    kind: Literal["unknown"] = "unknown"
    role: Optional[str] = None


RowChild = Annotated[Union[Group, LeafItem, UnknownChild], Field(discriminator="kind")]


class TreeRow(FolderIndexBaseModel):
    children: list[RowChild] = Field(default_factory=list)


Group.model_rebuild()
TreeRow.model_rebuild()

tree_rows_adapter = TypeAdapter(list[TreeRow])


class OutlineStatus(str, Enum):
    COMPLETE = "complete"
    INCOMPLETE = "incomplete"
    EMPTY = "empty"


class OutlineNode(FolderIndexBaseModel):
    """
    One entry of the rendered outline.

    Attributes:
        text (str): Rendered label, usually a Markdown link. Empty for an unlabeled group.
        level (int): 0-based depth.
        group (bool): Whether the entry is followed by a sub-tree.
        children (list[OutlineNode]): Sorted entries of the sub-tree.
    """

    text: str
    level: int = 0
    group: bool = False
    children: list["OutlineNode"] = Field(default_factory=list)


class OutlineResult(FolderIndexBaseModel):
    """
    Result of one traversal.

    Attributes:
        text (str): The serialized outline.
        complete (bool): False when any visited branch was not loaded yet.
        nodes (list[OutlineNode]): Top-level entries, sorted.
    """

    text: str
    complete: bool = True
    nodes: list[OutlineNode] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        # Imported here to avoid a cycle with the outline package
        from .outline import level_prefix

        return self.text == level_prefix(0)

    @property
    def status(self) -> OutlineStatus:
        if self.is_empty:
            return OutlineStatus.EMPTY
        if not self.complete:
            return OutlineStatus.INCOMPLETE
        return OutlineStatus.COMPLETE


class IndexRunResult(FolderIndexBaseModel):
    """
    Outcome of one user-triggered run.

    Attributes:
        status (OutlineStatus): How the run was classified.
        text (str): The generated outline, even when it was not copied.
        copied (bool): Whether the outline reached the clipboard.
        message (str): The message shown to the user.
    """

    status: OutlineStatus
    text: str = ""
    copied: bool = False
    message: str = ""
