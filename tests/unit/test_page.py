"""Test FolderPage lookups, tree snapshots and trigger injection"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from folderindex.page import TRIGGER_BINDING, TRIGGER_BUTTON_ID, FolderPage
from folderindex.schemas import Group, LeafItem
from tests.mocks.mock_browser import make_element
from tests.mocks.tree import raw_group, raw_leaf, raw_row


class TestLocate:
    @pytest.mark.asyncio
    async def test_returns_none_when_nothing_rendered(self, folder_page):
        assert await folder_page.locate(".nav-path") is None

    @pytest.mark.asyncio
    async def test_returns_matches(self, folder_page, mock_playwright_page):
        element = make_element("nav")
        mock_playwright_page.render(".nav-path", [element])

        assert await folder_page.locate(".nav-path") == [element]

    @pytest.mark.asyncio
    async def test_logs_snapshot(self, folder_page, mock_logger):
        await folder_page.locate(".nav-path-separator")

        mock_logger.debug.assert_called_once()
        auxiliary = mock_logger.debug.call_args.kwargs["auxiliary"]
        assert auxiliary == {"selector": ".nav-path-separator", "count": 0}


class TestReadTree:
    @pytest.mark.asyncio
    async def test_parses_snapshot(self, folder_page, mock_playwright_page):
        mock_playwright_page.tree_snapshot = [
            raw_row(raw_leaf("Folder", "/f", "true"), raw_group(raw_row(raw_leaf("X", "/x"))))
        ]

        rows = await folder_page.read_tree(".rows", ".folder-list-row")

        assert len(rows) == 1
        folder, sub_tree = rows[0].children
        assert isinstance(folder, LeafItem)
        assert folder.expanded is True
        assert isinstance(sub_tree, Group)
        assert sub_tree.rows[0].children[0].url == "/x"

    @pytest.mark.asyncio
    async def test_passes_selectors(self, folder_page, mock_playwright_page):
        await folder_page.read_tree(".rows", ".row")

        _, arg = mock_playwright_page.evaluations[-1]
        assert arg == {"rootSelector": ".rows", "rowSelector": ".row"}

    @pytest.mark.asyncio
    async def test_missing_snapshot_is_empty(self, folder_page, mock_playwright_page):
        mock_playwright_page.tree_snapshot = None

        assert await folder_page.read_tree(".rows", ".row") == []


class TestInstallTrigger:
    @pytest.mark.asyncio
    async def test_exposes_binding_and_inserts_button(self, folder_page, mock_playwright_page):
        callback = AsyncMock()

        inserted = await folder_page.install_trigger(".nav-path", "Generate index", callback)

        assert inserted is True
        mock_playwright_page.expose_function.assert_awaited_once_with(TRIGGER_BINDING, callback)
        _, arg = mock_playwright_page.evaluations[-1]
        assert arg == {
            "anchorSelector": ".nav-path",
            "label": "Generate index",
            "binding": TRIGGER_BINDING,
            "buttonId": TRIGGER_BUTTON_ID,
        }

    @pytest.mark.asyncio
    async def test_binding_registered_once(self, folder_page, mock_playwright_page):
        callback = AsyncMock()
        await folder_page.install_trigger(".nav-path", "Generate index", callback)
        mock_playwright_page.trigger_inserted = False

        inserted = await folder_page.install_trigger(".nav-path", "Generate index", callback)

        assert inserted is False
        assert mock_playwright_page.expose_function.await_count == 1


def test_attribute_forwarding(mock_playwright_page):
    page = FolderPage(mock_playwright_page, MagicMock())

    assert page.url == mock_playwright_page.url
    assert page.goto is mock_playwright_page.goto
