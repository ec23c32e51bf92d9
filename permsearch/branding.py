"""
Console output helpers shared by the permsearch CLI.
"""

from rich.console import Console

VERSION = "1.0.0"

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)

_STATUS_STYLES = {
    "info": "cyan",
    "success": "green",
    "warning": "yellow",
    "error": "bold red",
}


def status_print(message: str, status: str = "info") -> None:
    """Print a status line to stdout, styled by status."""
    style = _STATUS_STYLES.get(status, "")
    console.print(message, style=style, markup=False, soft_wrap=True)


def print_error(message: str) -> None:
    err_console.print("[bold red]error[/bold red]: ", end="")
    err_console.print(message, markup=False, soft_wrap=True)


def print_access_error(message: str) -> None:
    """Report a non-fatal access problem found while walking the tree."""
    err_console.print("[bold red]Error[/bold red] ", end="")
    err_console.print(message, markup=False, soft_wrap=True)
