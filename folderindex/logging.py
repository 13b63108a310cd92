import asyncio
import json
import logging
from datetime import datetime
from typing import Any, Callable, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.theme import Theme


class LogConfig:
    """
    Logging configuration shared by every folderindex component.
    """

    def __init__(
        self,
        verbose: int = 1,
        use_rich: bool = True,
        external_logger: Optional[Callable] = None,
    ):
        """
        Args:
            verbose: Verbosity level (0=error, 1=info, 2=debug)
            use_rich: Whether to use Rich for formatted output
            external_logger: Optional callback receiving structured log data
        """
        self.verbose = verbose
        self.use_rich = use_rich
        self.external_logger = external_logger

    def should_log(self, level: int) -> bool:
        """Check if a message at the given level should be logged."""
        # Errors are always logged
        if level == 0:
            return True
        return level <= self.verbose


folderindex_theme = Theme(
    {
        "info": "cyan",
        "warning": "yellow",
        "error": "bold red",
        "debug": "bold white",
        "category": "bold blue",
        "auxiliary": "white",
        "timestamp": "dim white",
        "notice": "bold green",
    }
)


def get_console(use_rich: bool = True) -> Console:
    """
    Get a console instance, themed when Rich formatting is enabled.
    """
    if use_rich:
        return Console(theme=folderindex_theme)
    return Console(theme=None)


console = get_console(use_rich=True)

logger = logging.getLogger(__name__)
# Only add handler if there isn't one already to avoid duplicate logs
if not logger.handlers:
    handler = RichHandler(
        rich_tracebacks=True,
        markup=False,
        console=console,
        show_time=False,
        show_level=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.propagate = False


def configure_logging(
    level=logging.INFO,
    format_str=None,
    datefmt="%Y-%m-%d %H:%M:%S",
    quiet_dependencies=True,
    use_rich=True,
):
    """
    Configure logging for folderindex with sensible defaults.

    Args:
        level: The logging level for folderindex loggers (default: INFO)
        format_str: The format string used when Rich is disabled
        datefmt: The date format string for log timestamps
        quiet_dependencies: If True, sets playwright and asyncio loggers to WARNING
        use_rich: If True, use Rich for colorized output
    """
    if format_str is None:
        format_str = "%(asctime)s - %(levelname)s - %(message)s"

    if use_rich:
        logging.basicConfig(
            level=level,
            format="%(message)s",
            datefmt=datefmt,
            handlers=[
                RichHandler(
                    rich_tracebacks=True,
                    markup=True,
                    console=get_console(use_rich=True),
                    show_time=False,
                    show_level=False,
                )
            ],
        )
    else:
        logging.basicConfig(level=level, format=format_str, datefmt=datefmt)

    logging.getLogger("folderindex").setLevel(level)

    if quiet_dependencies:
        logging.getLogger("asyncio").setLevel(logging.WARNING)
        logging.getLogger("playwright").setLevel(logging.WARNING)


class FolderIndexLogger:
    """
    Structured logger with Rich formatting.

    Every message carries a verbosity level, an optional category
    (``resolver``, ``outline``, ``page``, ``run``...) and optional auxiliary
    data. When an external logger is configured the structured record is
    handed to it instead of being printed.
    """

    def __init__(
        self,
        verbose: int = 1,
        external_logger: Optional[Callable] = None,
        use_rich: bool = True,
        config: Optional[LogConfig] = None,
    ):
        if config:
            self.config = config
        else:
            self.config = LogConfig(
                verbose=verbose,
                use_rich=use_rich,
                external_logger=external_logger,
            )

        self.console = get_console(self.config.use_rich)

        self.level_map = {
            0: logging.ERROR,
            1: logging.INFO,
            2: logging.DEBUG,
        }
        self.level_style = {0: "error", 1: "info", 2: "debug"}
        # Pending deliveries to an async external logger
        self._pending: set[asyncio.Task] = set()

        self._set_verbosity(self.config.verbose)

    @property
    def verbose(self):
        return self.config.verbose

    @property
    def use_rich(self):
        return self.config.use_rich

    @property
    def external_logger(self):
        return self.config.external_logger

    def _set_verbosity(self, level: int):
        self.config.verbose = level
        logger.setLevel(self.level_map.get(level, logging.INFO))

    def _format_auxiliary(self, auxiliary: dict[str, Any]) -> dict[str, Any]:
        """Flatten ``{"value": ..., "type": ...}`` pairs and truncate long strings."""
        formatted = {}
        for key, value in auxiliary.items():
            if isinstance(value, dict) and "value" in value:
                value = value.get("value")
            if isinstance(value, str) and len(value) > 80 and "url" not in key.lower():
                value = f"{value[:77]}..."
            formatted[key] = value
        return formatted

    def _emit_external(
        self,
        message: str,
        level: int,
        category: Optional[str],
        auxiliary: Optional[dict[str, Any]],
    ):
        log_data = {
            "message": {"message": message, "level": level},
            "timestamp": datetime.now().isoformat(),
        }
        if category:
            log_data["category"] = category
        if auxiliary:
            log_data["auxiliary"] = auxiliary

        if asyncio.iscoroutinefunction(self.external_logger):
            try:
                loop = asyncio.get_running_loop()
            except RuntimeError:
                # No running loop: drive the coroutine to completion here
                asyncio.run(self.external_logger(log_data))
            else:
                task = loop.create_task(self.external_logger(log_data))
                self._pending.add(task)
                task.add_done_callback(self._delivery_done)
        else:
            self.external_logger(log_data)

    def _delivery_done(self, task: asyncio.Task):
        self._pending.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            # Not routed back through the failing external logger
            logger.error(f"External logger failed: {exc!r}")

    def log(
        self,
        message: str,
        level: int = 1,
        category: str = None,
        auxiliary: dict[str, Any] = None,
        style: str = None,
    ):
        """
        Log a message with structured data.

        Args:
            message: The message to log
            level: Verbosity level (0=error, 1=info, 2=debug)
            category: Optional category for the message
            auxiliary: Optional dictionary of auxiliary data
            style: Optional theme style overriding the level style
        """
        if not self.config.should_log(level):
            return

        if self.external_logger:
            self._emit_external(message, level, category, auxiliary)
            return

        aux_data = self._format_auxiliary(auxiliary) if auxiliary else {}

        if self.use_rich:
            level_style = style or self.level_style.get(level, "info")
            timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
            line = (
                f"[timestamp]{timestamp}[/timestamp] "
                f"[{level_style}]{level_style.upper()}[/{level_style}]"
            )
            if category:
                line += f" [category]{category}[/category]"
            line += f" - {escape(str(message))}"

            if len(aux_data) <= 2:
                items = [f"{k}={escape(str(v))}" for k, v in aux_data.items()]
                if items:
                    line += f" [auxiliary]({', '.join(items)})[/auxiliary]"
                self.console.print(line)
                return

            self.console.print(line)
            table = Table(show_header=False, box=None, padding=(0, 1, 0, 1))
            table.add_column("Key", style="cyan")
            table.add_column("Value")
            for k, v in aux_data.items():
                if isinstance(v, (dict, list)):
                    table.add_row(k, escape(json.dumps(v, indent=2, ensure_ascii=False)))
                else:
                    table.add_row(k, escape(str(v)))
            self.console.print(Panel(table, expand=False, border_style="dim"))
            return

        prefix = f"[{category}] " if category else ""
        log_message = f"{prefix}{message}"
        if aux_data:
            parts = ", ".join(f"{k}={v}" for k, v in aux_data.items())
            log_message += f" ({parts})"

        if level == 0:
            logger.error(log_message)
        elif style == "warning":
            logger.warning(log_message)
        elif level == 1:
            logger.info(log_message)
        else:
            logger.debug(log_message)

    def error(
        self, message: str, category: str = None, auxiliary: dict[str, Any] = None
    ):
        """Log an error message (level 0)"""
        self.log(message, level=0, category=category, auxiliary=auxiliary)

    def warning(
        self, message: str, category: str = None, auxiliary: dict[str, Any] = None
    ):
        """Log a warning (level 1, warning style)"""
        self.log(
            message, level=1, category=category, auxiliary=auxiliary, style="warning"
        )

    def info(
        self, message: str, category: str = None, auxiliary: dict[str, Any] = None
    ):
        """Log an info message (level 1)"""
        self.log(message, level=1, category=category, auxiliary=auxiliary)

    def debug(
        self, message: str, category: str = None, auxiliary: dict[str, Any] = None
    ):
        """Log a debug message (level 2)"""
        self.log(message, level=2, category=category, auxiliary=auxiliary)
