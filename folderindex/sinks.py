import pyperclip
from rich.markup import escape
from rich.panel import Panel

from .logging import FolderIndexLogger


class ConsoleNotifier:
    """Shows user-facing messages as a Rich panel on the logger's console."""

    def __init__(self, logger: FolderIndexLogger, title: str = "folderindex"):
        self.logger = logger
        self.title = title

    def notify(self, message: str) -> None:
        self.logger.debug("Notifying user", category="run", auxiliary={"message": message})
        self.logger.console.print(
            Panel(escape(message), title=self.title, expand=False, border_style="green")
        )


class PyperclipClipboard:
    """Commits text to the system clipboard."""

    def __init__(self, logger: FolderIndexLogger):
        self.logger = logger

    def write(self, text: str) -> None:
        pyperclip.copy(text)
        self.logger.debug(
            "Copied outline to clipboard",
            category="run",
            auxiliary={"length": len(text)},
        )
