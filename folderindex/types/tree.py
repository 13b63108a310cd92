from typing import Literal, Optional, TypedDict, Union


class RawLeafItem(TypedDict):
    kind: Literal["treeitem"]
    role: str
    name: Optional[str]
    expanded: Optional[str]  # "true" / "false" / None when not collapsible
    url: Optional[str]


class RawGroup(TypedDict):
    kind: Literal["group"]
    role: str
    rows: list["RawRow"]


class RawUnknown(TypedDict):
    kind: Literal["unknown"]
    role: Optional[str]


RawChild = Union[RawLeafItem, RawGroup, RawUnknown]


class RawRow(TypedDict):
    children: list[RawChild]


class LocateSnapshot(TypedDict):
    selector: str
    count: int
