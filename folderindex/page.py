from typing import Any, Awaitable, Callable, Optional

from playwright.async_api import ElementHandle, Page

from .schemas import TreeRow, tree_rows_adapter
from .types import LocateSnapshot, RawRow

TRIGGER_BINDING = "folderIndexGenerate"
TRIGGER_BUTTON_ID = "folderindex-generate"

# Reads the rendered rows in one pass so the serializer works on a stable snapshot
_SNAPSHOT_SCRIPT = """
({ rootSelector, rowSelector }) => {
  const readRows = (container) =>
    Array.from(container.children)
      .filter((el) => el.matches(rowSelector))
      .map((row) => ({
        children: Array.from(row.children).map((child) => {
          const role = child.getAttribute('role');
          if (role === 'group') {
            return { kind: 'group', role, rows: readRows(child) };
          }
          if (role === 'treeitem') {
            return {
              kind: 'treeitem',
              role,
              name: child.getAttribute('aria-label'),
              expanded: child.getAttribute('aria-expanded'),
              url: child.getAttribute('href'),
            };
          }
          return { kind: 'unknown', role };
        }),
      }));
  return Array.from(document.querySelectorAll(rootSelector)).flatMap(readRows);
}
"""

_INSERT_TRIGGER_SCRIPT = """
({ anchorSelector, label, binding, buttonId }) => {
  if (document.getElementById(buttonId)) {
    return false;
  }
  const anchor = document.querySelector(anchorSelector);
  if (!anchor) {
    return false;
  }
  const button = document.createElement('button');
  button.id = buttonId;
  button.textContent = label;
  button.style.cssText = 'margin-left: 10px;';
  button.addEventListener('click', () => window[binding]());
  anchor.append(button);
  return true;
}
"""


class FolderPage:
    """Wrapper around Playwright Page exposing the folder tree to folderindex"""

    def __init__(self, page: Page, folder_index):
        """
        Initialize a FolderPage instance.

        Args:
            page (Page): The underlying Playwright page.
            folder_index: The FolderIndex instance owning this page (provides the logger).
        """
        self._page = page
        self._folder_index = folder_index
        self._binding_installed = False

    @property
    def logger(self):
        return self._folder_index.logger

    async def locate(self, selector: str) -> Optional[list[ElementHandle]]:
        """
        Look up the elements matching ``selector``.

        Returns:
            The matching element handles, or None when nothing is rendered yet.
        """
        elements = await self._page.query_selector_all(selector)
        snapshot: LocateSnapshot = {"selector": selector, "count": len(elements)}
        self.logger.debug("Located elements", category="page", auxiliary=snapshot)
        return elements or None

    async def read_tree(self, root_selector: str, row_selector: str) -> list[TreeRow]:
        """
        Snapshot the folder tree rendered under ``root_selector``.

        Returns:
            The top-level rows in document order; empty when the container is absent.
        """
        raw_rows: list[RawRow] = await self._page.evaluate(
            _SNAPSHOT_SCRIPT,
            {"rootSelector": root_selector, "rowSelector": row_selector},
        )
        rows = tree_rows_adapter.validate_python(raw_rows or [])
        self.logger.debug(
            "Read folder tree",
            category="page",
            auxiliary={"rows": len(rows)},
        )
        return rows

    async def install_trigger(
        self,
        anchor_selector: str,
        label: str,
        callback: Callable[[], Awaitable[Any]],
    ) -> bool:
        """
        Append a button to ``anchor_selector`` that calls ``callback`` when clicked.

        The Python binding is registered once per page; calling this again only
        re-inserts the button if the page re-rendered without it.

        Returns:
            True when a button was inserted, False when one was already present
            or the anchor is missing.
        """
        if not self._binding_installed:
            await self._page.expose_function(TRIGGER_BINDING, callback)
            self._binding_installed = True

        inserted = await self._page.evaluate(
            _INSERT_TRIGGER_SCRIPT,
            {
                "anchorSelector": anchor_selector,
                "label": label,
                "binding": TRIGGER_BINDING,
                "buttonId": TRIGGER_BUTTON_ID,
            },
        )
        self.logger.debug(
            "Trigger button installed" if inserted else "Trigger button not inserted",
            category="page",
            auxiliary={"anchor": anchor_selector},
        )
        return bool(inserted)

    # Forward other Page methods to underlying Playwright page
    def __getattr__(self, name):
        return getattr(self._page, name)
