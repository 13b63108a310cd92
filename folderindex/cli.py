"""CLI entrypoints for folderindex."""

import asyncio
from typing import Optional

import typer

from .config import FolderIndexConfig
from .main import FolderIndex
from .schemas import IndexRunResult, OutlineStatus
from .types import ResolutionTimeoutError

app = typer.Typer(
    add_completion=False, help="Generate a Markdown index of a folder tree"
)


def _build_config(
    url: str, cdp_url: Optional[str], headless: bool, verbose: int
) -> FolderIndexConfig:
    launch_options = {"headless": headless}
    if cdp_url:
        launch_options["cdp_url"] = cdp_url
    return FolderIndexConfig(
        start_url=url,
        verbose=verbose,
        local_browser_launch_options=launch_options,
    )


async def _run_once(config: FolderIndexConfig) -> IndexRunResult:
    async with FolderIndex(config) as folder_index:
        await folder_index.wait_until_ready()
        return await folder_index.run()


async def _serve(config: FolderIndexConfig) -> None:
    async with FolderIndex(config) as folder_index:
        await folder_index.serve()


@app.command()
def run(
    url: str = typer.Argument(..., help="Document page whose folder should be indexed"),
    cdp_url: Optional[str] = typer.Option(
        None, "--cdp-url", help="Attach to a running browser instead of launching one"
    ),
    headless: bool = typer.Option(False, "--headless", help="Launch without a window"),
    verbose: int = typer.Option(1, "--verbose", "-v", min=0, max=2),
    print_outline: bool = typer.Option(
        False, "--print", help="Also write the outline to stdout"
    ),
) -> None:
    """Generate the outline once and copy it to the clipboard."""
    config = _build_config(url, cdp_url, headless, verbose)
    try:
        result = asyncio.run(_run_once(config))
    except ResolutionTimeoutError as e:
        typer.echo(f"Folder view did not become ready: {e}", err=True)
        raise typer.Exit(code=2) from e

    if print_outline:
        typer.echo(result.text)
    if result.status != OutlineStatus.COMPLETE:
        raise typer.Exit(code=1)


@app.command()
def button(
    url: str = typer.Argument(..., help="Document page whose folder should be indexed"),
    cdp_url: Optional[str] = typer.Option(
        None, "--cdp-url", help="Attach to a running browser instead of launching one"
    ),
    verbose: int = typer.Option(1, "--verbose", "-v", min=0, max=2),
) -> None:
    """Add the index button to the page and serve clicks until it closes."""
    config = _build_config(url, cdp_url, False, verbose)
    try:
        asyncio.run(_serve(config))
    except ResolutionTimeoutError as e:
        typer.echo(f"Folder view did not become ready: {e}", err=True)
        raise typer.Exit(code=2) from e


if __name__ == "__main__":
    app()
