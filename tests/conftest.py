import pytest
from unittest.mock import MagicMock

from folderindex import FolderIndex, FolderIndexConfig
from folderindex.page import FolderPage
from tests.mocks.mock_browser import MockPlaywrightPage


BASE_URL = "https://docs.example.com"


@pytest.fixture
def folder_config():
    """Provide a FolderIndexConfig with a fast, small retry budget"""
    return FolderIndexConfig(
        base_url=BASE_URL,
        verbose=0,  # Quiet for tests
        use_rich_logging=False,
        max_attempts=3,
        retry_delay_ms=0,
    )


@pytest.fixture
def mock_logger():
    """Provide a mock FolderIndexLogger"""
    logger = MagicMock()
    logger.debug = MagicMock()
    logger.info = MagicMock()
    logger.warning = MagicMock()
    logger.error = MagicMock()
    return logger


@pytest.fixture
def mock_playwright_page():
    """Provide a mock Playwright page"""
    return MockPlaywrightPage()


@pytest.fixture
def mock_folder_index_client(mock_logger):
    """Provide a mock FolderIndex owner exposing only a logger"""
    client = MagicMock()
    client.logger = mock_logger
    return client


@pytest.fixture
def folder_page(mock_playwright_page, mock_folder_index_client):
    """Provide a FolderPage wrapping the mock Playwright page"""
    return FolderPage(mock_playwright_page, mock_folder_index_client)


@pytest.fixture
def notifier():
    notifier = MagicMock()
    notifier.notify = MagicMock()
    return notifier


@pytest.fixture
def clipboard():
    clipboard = MagicMock()
    clipboard.write = MagicMock()
    return clipboard


@pytest.fixture
def folder_index(folder_config, notifier, clipboard, mock_playwright_page):
    """Provide a FolderIndex whose page is the mock page, without launching a browser"""
    instance = FolderIndex(folder_config, notifier=notifier, clipboard=clipboard)
    instance.page = FolderPage(mock_playwright_page, instance)
    instance._initialized = True
    return instance
