import shutil
import tempfile
from pathlib import Path
from typing import Any, Optional

from playwright.async_api import Browser, BrowserContext, Playwright

from .logging import FolderIndexLogger
from .page import FolderPage


async def connect_local_browser(
    playwright: Playwright,
    local_browser_launch_options: dict[str, Any],
    folder_index: Any,
    logger: FolderIndexLogger,
) -> tuple[Optional[Browser], BrowserContext, FolderPage, Optional[Path]]:
    """
    Connect to a running browser via CDP or launch a new persistent context.

    Attaching over CDP reuses the user's logged-in session, which is the usual
    way to reach a document-management UI behind single sign-on.

    Args:
        playwright: The Playwright instance
        local_browser_launch_options: Options for launching the local browser
        folder_index: The FolderIndex instance (owner of the wrapped page)
        logger: The logger instance

    Returns:
        tuple of (browser, context, page, temp_user_data_dir)
    """
    cdp_url = local_browser_launch_options.get("cdp_url")
    temp_user_data_dir = None

    if cdp_url:
        logger.info(f"Connecting to local browser via CDP URL: {cdp_url}")
        try:
            browser = await playwright.chromium.connect_over_cdp(cdp_url)
            if not browser.contexts:
                raise RuntimeError(f"No browser contexts found at CDP URL: {cdp_url}")
            context = browser.contexts[0]
            logger.debug(f"Connected via CDP. Using context: {context}")
        except Exception as e:
            logger.error(f"Failed to connect via CDP URL ({cdp_url}): {str(e)}")
            raise
    else:
        logger.info("Launching new local browser context...")

        user_data_dir_option = local_browser_launch_options.get("user_data_dir")
        if user_data_dir_option:
            user_data_dir = Path(user_data_dir_option).resolve()
        else:
            temp_user_data_dir = Path(tempfile.mkdtemp(prefix="folderindex_ctx_"))
            user_data_dir = temp_user_data_dir
            logger.debug(f"Created temporary user_data_dir: {user_data_dir}")

        launch_options = {
            "headless": local_browser_launch_options.get("headless", False),
            "viewport": local_browser_launch_options.get(
                "viewport", {"width": 1280, "height": 800}
            ),
            "locale": local_browser_launch_options.get("locale"),
            "proxy": local_browser_launch_options.get("proxy"),
            "args": local_browser_launch_options.get("args"),
        }
        launch_options = {k: v for k, v in launch_options.items() if v is not None}

        try:
            context = await playwright.chromium.launch_persistent_context(
                str(user_data_dir),
                **launch_options,
            )
            logger.info("Local browser context launched successfully.")
            browser = context.browser
        except Exception as e:
            logger.error(f"Failed to launch local browser context: {str(e)}")
            if temp_user_data_dir:
                shutil.rmtree(temp_user_data_dir, ignore_errors=True)
            raise

        cookies = local_browser_launch_options.get("cookies")
        if cookies:
            try:
                await context.add_cookies(cookies)
                logger.debug(f"Added {len(cookies)} cookies to the context.")
            except Exception as e:
                logger.error(f"Failed to add cookies: {e}")

    if context.pages:
        playwright_page = context.pages[0]
        logger.debug("Using initial page from local context.")
    else:
        logger.debug("No initial page found, creating a new one.")
        playwright_page = await context.new_page()

    page = FolderPage(playwright_page, folder_index)

    return browser, context, page, temp_user_data_dir


async def cleanup_browser_resources(
    browser: Optional[Browser],
    context: Optional[BrowserContext],
    playwright: Optional[Playwright],
    temp_user_data_dir: Optional[Path],
    logger: FolderIndexLogger,
    attached: bool = False,
):
    """
    Clean up browser resources.

    Args:
        browser: The browser instance (if any)
        context: The browser context
        playwright: The Playwright instance
        temp_user_data_dir: Temporary user data directory to remove (if any)
        logger: The logger instance
        attached: True when the browser was reached over CDP; the user's own
            context is then left open.
    """
    if context and not attached:
        try:
            logger.debug("Closing browser context...")
            await context.close()
        except Exception as e:
            logger.error(f"Error closing context: {str(e)}")
    if browser:
        try:
            logger.debug("Closing browser...")
            await browser.close()
        except Exception as e:
            logger.error(f"Error closing browser: {str(e)}")

    if temp_user_data_dir:
        try:
            logger.debug(
                f"Removing temporary user data directory: {temp_user_data_dir}"
            )
            shutil.rmtree(temp_user_data_dir)
        except Exception as e:
            logger.error(
                f"Error removing temporary directory {temp_user_data_dir}: {str(e)}"
            )

    if playwright:
        try:
            logger.debug("Stopping Playwright...")
            await playwright.stop()
        except Exception as e:
            logger.error(f"Error stopping Playwright: {str(e)}")
