import asyncio
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from playwright.async_api import Browser, BrowserContext, Playwright, async_playwright

from .browser import cleanup_browser_resources, connect_local_browser
from .config import FolderIndexConfig, default_config
from .logging import FolderIndexLogger
from .outline import serialize
from .page import FolderPage
from .resolver import resolve
from .schemas import IndexRunResult, OutlineResult, OutlineStatus
from .sinks import ConsoleNotifier, PyperclipClipboard
from .types import BrowserNotInitializedError, ResolutionTimeoutError

load_dotenv()


class FolderIndex:
    """
    Main folderindex class.

    Owns the browser session, waits for the folder view to be ready, and turns
    the rendered folder tree into a Markdown outline on demand.
    """

    def __init__(
        self,
        config: FolderIndexConfig = default_config,
        notifier: Any = None,
        clipboard: Any = None,
        **config_overrides,
    ):
        """
        Initialize the FolderIndex client.

        Args:
            config (FolderIndexConfig): Configuration object. Defaults to default_config.
            notifier: Object with ``notify(message)``; defaults to a console notifier.
            clipboard: Object with ``write(text)``; defaults to the system clipboard.
            **config_overrides: Additional configuration overrides to apply to the config.
        """
        if config_overrides:
            self.config = config.with_overrides(**config_overrides)
        else:
            self.config = config

        self.logger = FolderIndexLogger(
            verbose=self.config.verbose,
            external_logger=self.config.logger,
            use_rich=self.config.use_rich_logging,
        )
        self.notifier = notifier or ConsoleNotifier(self.logger)
        self.clipboard = clipboard or PyperclipClipboard(self.logger)
        self.local_browser_launch_options = (
            self.config.local_browser_launch_options or {}
        )

        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None
        self._local_user_data_dir_temp: Optional[Path] = None
        self.page: Optional[FolderPage] = None
        self._initialized = False
        self._closed = False
        self._trigger_tasks: set[asyncio.Task] = set()

    async def __aenter__(self):
        self.logger.debug("Entering FolderIndex context manager (__aenter__)...")
        await self.init()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        self.logger.debug("Exiting FolderIndex context manager (__aexit__)...")
        await self.close()

    async def init(self):
        """
        Start Playwright, attach to or launch a browser, and wrap its first page.
        Navigates to ``config.start_url`` when one is configured.
        """
        if self._initialized:
            self.logger.debug("FolderIndex is already initialized; skipping init()")
            return

        self.logger.debug("Initializing FolderIndex...")
        self._playwright = await async_playwright().start()

        try:
            (
                self._browser,
                self._context,
                self.page,
                self._local_user_data_dir_temp,
            ) = await connect_local_browser(
                self._playwright,
                self.local_browser_launch_options,
                self,
                self.logger,
            )
        except Exception:
            await self.close()
            raise

        self._initialized = True

        if self.config.start_url:
            try:
                await self.goto(self.config.start_url)
            except Exception:
                await self.close()
                raise

    async def close(self):
        """Release the browser, the temporary profile and Playwright."""
        if self._closed:
            return

        self.logger.debug("Closing resources...")
        await cleanup_browser_resources(
            self._browser,
            self._context,
            self._playwright,
            self._local_user_data_dir_temp,
            self.logger,
            attached=bool(self.local_browser_launch_options.get("cdp_url")),
        )
        self._closed = True

    def _require_page(self) -> FolderPage:
        if self.page is None:
            raise BrowserNotInitializedError(
                "FolderIndex must be initialized with await init() first."
            )
        return self.page

    async def goto(self, url: str):
        page = self._require_page()
        self.logger.info(f"Navigating to {url}", category="page")
        await page.goto(url)

    async def wait_for(self, selector: str) -> Any:
        """Wait until ``selector`` matches, within the configured attempt budget."""
        page = self._require_page()
        return await resolve(
            lambda: page.locate(selector),
            max_attempts=self.config.max_attempts,
            delay_ms=self.config.retry_delay_ms,
            logger=self.logger,
            description=selector,
        )

    async def wait_until_ready(self) -> Any:
        """
        Wait for the navigation bar of a document that lives inside a folder.

        The separator only renders once the document has a folder path, and the
        path element is where the trigger button goes.

        Returns:
            The element handles matching the navigation path selector.

        Raises:
            ResolutionTimeoutError: When either element never renders.
        """
        await self.wait_for(self.config.nav_separator_selector)
        return await self.wait_for(self.config.nav_path_selector)

    async def install_trigger(self) -> bool:
        """Wait for the navigation bar, then append the index button to it."""
        await self.wait_until_ready()
        return await self._require_page().install_trigger(
            self.config.nav_path_selector,
            self.config.button_label,
            self._on_trigger,
        )

    async def _on_trigger(self) -> str:
        try:
            result = await self.run()
        except Exception as e:
            self.logger.error(
                f"Index run failed: {e}",
                category="run",
                auxiliary={"error": type(e).__name__},
            )
            self.notifier.notify(f"Index generation failed: {e}")
            return "error"
        return result.status.value

    async def generate(self) -> OutlineResult:
        """Snapshot the folder tree and serialize it."""
        rows = await self._require_page().read_tree(
            self.config.root_selector, self.config.row_selector
        )
        return serialize(rows, self.config, self.logger)

    async def run(self) -> IndexRunResult:
        """
        Generate the outline and deliver it.

        The clipboard is written and the success message shown only when the
        outline is both non-empty and complete.
        """
        result = await self.generate()
        self.logger.debug(
            "Generated outline", category="run", auxiliary={"text": result.text}
        )

        if not result.complete:
            self.logger.warning("Folder tree is not fully loaded", category="run")
            self.notifier.notify(self.config.incomplete_message)

        status = result.status
        if status == OutlineStatus.EMPTY:
            self.notifier.notify(self.config.empty_message)
            return IndexRunResult(
                status=status, text=result.text, message=self.config.empty_message
            )
        if status == OutlineStatus.INCOMPLETE:
            return IndexRunResult(
                status=status,
                text=result.text,
                message=self.config.incomplete_message,
            )

        self.clipboard.write(result.text)
        self.notifier.notify(self.config.success_text)
        self.logger.info(
            "Outline copied to clipboard",
            category="run",
            auxiliary={"entries": len(result.nodes)},
        )
        return IndexRunResult(
            status=status,
            text=result.text,
            copied=True,
            message=self.config.success_text,
        )

    async def _reinstall_trigger(self):
        try:
            await self.install_trigger()
        except ResolutionTimeoutError:
            self.logger.info(
                "Document is not inside a folder; no trigger installed", category="page"
            )

    def _on_load(self, _):
        task = asyncio.ensure_future(self._reinstall_trigger())
        self._trigger_tasks.add(task)
        task.add_done_callback(self._trigger_task_done)

    def _trigger_task_done(self, task: asyncio.Task):
        self._trigger_tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            self.logger.error(
                f"Failed to install trigger: {exc}",
                category="page",
                auxiliary={"error": type(exc).__name__},
            )

    async def serve(self):
        """
        Keep the trigger button available until the page is closed.

        Every document load in the tab re-inserts the button, since navigating
        to another document renders a fresh navigation bar without it.
        """
        page = self._require_page()
        await self.install_trigger()

        closed = asyncio.Event()
        page.on("load", self._on_load)
        page.on("close", lambda _: closed.set())
        try:
            await closed.wait()
        finally:
            for task in list(self._trigger_tasks):
                task.cancel()
