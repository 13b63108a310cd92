"""Test parsing of raw tree snapshots into the tree model"""

import pytest
from pydantic import ValidationError

from folderindex.schemas import (
    Group,
    IndexRunResult,
    LeafItem,
    OutlineResult,
    OutlineStatus,
    TreeRow,
    UnknownChild,
    tree_rows_adapter,
)
from tests.mocks.tree import raw_group, raw_leaf, raw_row


class TestTreeParsing:
    """Test the discriminated row-child union"""

    def test_leaf_attributes_parsed(self):
        rows = tree_rows_adapter.validate_python(
            [raw_row(raw_leaf("Folder", "/f", "false"))]
        )

        item = rows[0].children[0]
        assert isinstance(item, LeafItem)
        assert item.name == "Folder"
        assert item.url == "/f"
        assert item.expanded is False

    @pytest.mark.parametrize(
        "raw,expected", [("true", True), ("false", False), (None, None)]
    )
    def test_expanded_is_tri_state(self, raw, expected):
        rows = tree_rows_adapter.validate_python([raw_row(raw_leaf("A", "/a", raw))])

        assert rows[0].children[0].expanded is expected

    def test_nested_groups(self):
        rows = tree_rows_adapter.validate_python(
            [
                raw_row(
                    raw_leaf("Folder", "/f", "true"),
                    raw_group(raw_row(raw_leaf("X", "/x"))),
                )
            ]
        )

        folder_group = rows[0].children[1]
        assert isinstance(folder_group, Group)
        assert isinstance(folder_group.rows[0], TreeRow)
        assert folder_group.rows[0].children[0].name == "X"

    def test_unknown_child_keeps_raw_role(self):
        rows = tree_rows_adapter.validate_python(
            [raw_row({"kind": "unknown", "role": "button"}, {"kind": "unknown", "role": None})]
        )

        first, second = rows[0].children
        assert isinstance(first, UnknownChild)
        assert first.role == "button"
        assert second.role is None

    def test_unrecognized_kind_rejected(self):
        with pytest.raises(ValidationError):
            tree_rows_adapter.validate_python([raw_row({"kind": "banner"})])

    def test_missing_url_is_none(self):
        rows = tree_rows_adapter.validate_python([raw_row(raw_leaf("加载项目"))])

        assert rows[0].children[0].url is None


class TestResults:
    """Test outline and run result models"""

    def test_status_complete(self):
        result = OutlineResult(text="\n## [A](/a)", complete=True)
        assert result.status == OutlineStatus.COMPLETE
        assert not result.is_empty

    def test_status_incomplete(self):
        result = OutlineResult(text="\n## [A](/a)", complete=False)
        assert result.status == OutlineStatus.INCOMPLETE

    def test_empty_wins_over_incomplete(self):
        result = OutlineResult(text="\n## ", complete=False)
        assert result.is_empty
        assert result.status == OutlineStatus.EMPTY

    def test_run_result_camel_case_dump(self):
        run = IndexRunResult(status=OutlineStatus.COMPLETE, text="t", copied=True)
        dumped = run.model_dump(by_alias=True)
        assert dumped["status"] == OutlineStatus.COMPLETE
        assert dumped["copied"] is True
