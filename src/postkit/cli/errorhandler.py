"""CLI error handling utilities."""

from collections.abc import Generator
from contextlib import contextmanager

import typer
from rich.console import Console
from rich.markup import escape

from postkit.config.exceptions import ConfigError, ConfigExistsError
from postkit.content.exceptions import (
    ContentError,
    InvalidPostMetadataError,
    PostDirectoryNotFoundError,
)
from postkit.exceptions import PostkitError

console = Console()


@contextmanager
def handle_cli_errors(*, debug: bool = False) -> Generator[None, None, None]:
    """Context manager to handle CLI errors gracefully.

    Args:
        debug: If True, re-raise with the full traceback instead of a short message.

    """
    try:
        yield
    except (KeyboardInterrupt, SystemExit, typer.Exit):
        raise
    except ConfigExistsError as e:
        if debug:
            raise
        console.print(f"[bold yellow]Config exists:[/bold yellow] {escape(str(e))}")
        raise typer.Exit(1) from e
    except ConfigError as e:
        if debug:
            raise
        console.print(f"[bold red]Configuration Error:[/bold red] {escape(str(e))}")
        for err in getattr(e, "errors", []):
            loc = ".".join(str(part) for part in err.get("loc", ()))
            console.print(f"  - {escape(loc)}: {escape(str(err.get('msg', '')))}")
        raise typer.Exit(1) from e
    except PostDirectoryNotFoundError as e:
        if debug:
            raise
        console.print(f"[bold red]Not Found:[/bold red] {escape(str(e))}")
        console.print("Run [bold]postkit init[/bold] or pass paths explicitly.")
        raise typer.Exit(1) from e
    except InvalidPostMetadataError as e:
        if debug:
            raise
        console.print("[bold red]Invalid Post:[/bold red] the front matter would not validate")
        for err in e.errors:
            loc = ".".join(str(part) for part in err.get("loc", ()))
            console.print(f"  - {escape(loc)}: {escape(str(err.get('msg', '')))}")
        raise typer.Exit(1) from e
    except (ContentError, PostkitError) as e:
        if debug:
            raise
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1) from e
    except Exception as e:
        if debug:
            console.print_exception(show_locals=False)
            raise typer.Exit(1) from e

        console.print(f"[bold red]An unexpected error occurred:[/bold red] {escape(str(e))}")
        console.print("[dim]Run with [bold]--debug[/bold] for more details.[/dim]")
        raise typer.Exit(1) from e
