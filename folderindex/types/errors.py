from typing import Optional


class FolderIndexError(Exception):
    """Base class for folderindex errors."""


class ResolutionTimeoutError(FolderIndexError):
    """The object locator never returned a present value within the attempt budget."""

    def __init__(self, attempts: int, description: Optional[str] = None):
        self.attempts = attempts
        self.description = description
        target = f" for {description}" if description else ""
        super().__init__(f"Maximum retries reached{target} after {attempts} attempts")


class BrowserNotInitializedError(FolderIndexError):
    pass
