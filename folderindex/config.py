import os
from typing import Any, Callable, Optional

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_BASE_URL = "https://quip-amazon.com"
DEFAULT_ROOT_SELECTOR = ".folder-list-body>.folder-list-background>.folder-list-rows"
DEFAULT_ROW_SELECTOR = ".folder-list-row"
DEFAULT_LOADING_LABEL = "加载项目"
DEFAULT_GLOBAL_INDEX_LABEL = "0.全局索引"


class FolderIndexConfig(BaseModel):
    """
    Configuration for the folder index generator.

    Attributes:
        base_url (str): Origin prepended to every relative document link.
        start_url (Optional[str]): Page to open after the browser starts.
        verbose (Optional[int]): Verbosity level for logs (0=error, 1=info, 2=debug).
        logger (Optional[Callable[[Any], None]]): Custom logging function.
        use_rich_logging (bool): Whether to use Rich for colorized logging.
        max_attempts (int): Lookups tried before a readiness wait gives up.
        retry_delay_ms (int): Fixed delay between two lookups (in milliseconds).
        root_selector (str): Selector of the container holding the top-level rows.
        row_selector (str): Selector matching one tree row.
        nav_separator_selector (str): Present only when the open document lives in a folder.
        nav_path_selector (str): Navigation bar the trigger button is appended to.
        loading_label (str): Label the UI gives to a placeholder row still loading.
        global_index_label (str): Label of the index document itself, never listed.
        button_label (str): Text of the injected trigger button.
        incomplete_message (str): Shown when some branch was not loaded yet.
        empty_message (str): Shown when the tree yielded no entries.
        success_message (Optional[str]): Shown after the outline was copied; see ``success_text``.
        local_browser_launch_options (Optional[dict[str, Any]]): Local browser launch options.
    """

    base_url: str = Field(
        default_factory=lambda: os.getenv("FOLDERINDEX_BASE_URL", DEFAULT_BASE_URL),
        alias="baseUrl",
        description="Origin prepended to relative document links",
    )
    start_url: Optional[str] = Field(
        default_factory=lambda: os.getenv("FOLDERINDEX_START_URL"),
        alias="startUrl",
        description="Page to open after the browser starts",
    )
    verbose: Optional[int] = Field(
        1,
        description="Verbosity level for logs: 0=minimal (ERROR), 1=medium (INFO), 2=detailed (DEBUG)",
    )
    logger: Optional[Callable[[Any], None]] = Field(
        None, description="Custom logging function"
    )
    use_rich_logging: Optional[bool] = Field(
        True, description="Whether to use Rich for colorized logging"
    )
    max_attempts: int = Field(
        20, alias="maxAttempts", ge=1, description="Lookups per readiness wait"
    )
    retry_delay_ms: int = Field(
        500, alias="retryDelayMs", ge=0, description="Delay between lookups (in ms)"
    )
    root_selector: str = Field(DEFAULT_ROOT_SELECTOR, alias="rootSelector")
    row_selector: str = Field(DEFAULT_ROW_SELECTOR, alias="rowSelector")
    nav_separator_selector: str = Field(
        ".nav-path-separator", alias="navSeparatorSelector"
    )
    nav_path_selector: str = Field(".nav-path", alias="navPathSelector")
    loading_label: str = Field(DEFAULT_LOADING_LABEL, alias="loadingLabel")
    global_index_label: str = Field(
        DEFAULT_GLOBAL_INDEX_LABEL, alias="globalIndexLabel"
    )
    button_label: str = Field("Generate index", alias="buttonLabel")
    incomplete_message: str = Field(
        "Some folders have not finished loading. "
        "Click them to trigger loading, then try again.",
        alias="incompleteMessage",
    )
    empty_message: str = Field(
        'Nothing to index. Switch the folder view mode to "List" or '
        '"Compact list" first.',
        alias="emptyMessage",
    )
    success_message: Optional[str] = Field(
        None,
        alias="successMessage",
        description="Replaces the default message naming the global index document",
    )
    local_browser_launch_options: Optional[dict[str, Any]] = Field(
        {},
        alias="localBrowserLaunchOptions",
        description="Local browser launch options",
    )

    model_config = ConfigDict(populate_by_name=True)

    def with_overrides(self, **overrides) -> "FolderIndexConfig":
        """
        Create a new config instance with the specified overrides.

        Args:
            **overrides: Key-value pairs to override in the config

        Returns:
            FolderIndexConfig: New config instance with overrides applied
        """
        config_dict = self.model_dump()
        config_dict.update(overrides)
        return FolderIndexConfig(**config_dict)

    @property
    def success_text(self) -> str:
        """The message shown after a copy, naming the configured index document."""
        if self.success_message:
            return self.success_message
        return (
            "Global index generated and copied to the clipboard. "
            f'Open "{self.global_index_label}" and paste it.'
        )


# Default configuration instance
default_config = FolderIndexConfig()
