"""Rich console utilities for edge-addon-action.

This module provides a shared Rich Console instance and helper functions
for CLI output, tuned for GitHub Actions and other CI environments.
"""

import os
from contextlib import contextmanager
from typing import Any, Generator, List, Optional, Tuple

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

# Detect CI environments
IS_GITHUB_ACTIONS = os.getenv("GITHUB_ACTIONS") == "true"
IS_GITLAB_CI = os.getenv("GITLAB_CI") == "true"
IS_CI = os.getenv("CI") == "true" or IS_GITHUB_ACTIONS or IS_GITLAB_CI

# Edge brand colors
BRAND_COLORS_HEX = {
    "blue": "#0C59A4",
    "teal": "#1FAEA4",
    "green": "#54C45E",
}

# Standard ANSI names adapt to light and dark CI themes
BRAND_COLORS_ADAPTIVE = {
    "blue": "blue",
    "teal": "cyan",
    "green": "green",
}

BRAND_COLORS = BRAND_COLORS_ADAPTIVE if IS_CI else BRAND_COLORS_HEX

custom_theme = Theme(
    {
        "info": "cyan",
        "warning": "yellow",
        "error": "bold red",
        "success": "bold green",
        "step": "bold blue",
        "highlight": "magenta",
    }
)

# Force colors ON in GitHub Actions (it supports ANSI colors but Rich may incorrectly disable them)
console = Console(
    theme=custom_theme,
    force_terminal=IS_GITHUB_ACTIONS or None,
    color_system="auto",
)

# Failure diagnostics go to stderr
error_console = Console(
    theme=custom_theme,
    stderr=True,
    force_terminal=IS_GITHUB_ACTIONS or None,
    color_system="auto",
)


def print_banner(version: str = "unknown") -> None:
    """Print the edge-addon-action banner."""
    banner = Text()
    banner.append("  ___    _               _      _    _          \n", style=BRAND_COLORS["blue"])
    banner.append(" | __|__| |__ _ ___     /_\\  __| |__| |___ _ _  \n", style=BRAND_COLORS["blue"])
    banner.append(" | _|/ _` / _` / -_)   / _ \\/ _` / _` / _ \\ ' \\ \n", style=BRAND_COLORS["teal"])
    banner.append(" |___\\__,_\\__, \\___|  /_/ \\_\\__,_\\__,_\\___/_||_|\n", style=BRAND_COLORS["teal"])
    banner.append("          |___/                                 \n", style=BRAND_COLORS["green"])
    # Only prefix with 'v' if version looks like semver (starts with digit)
    version_display = f"v{version}" if version and version[0:1].isdigit() else version
    banner.append(f" {version_display}", style=BRAND_COLORS["green"])
    banner.append(" - Ship it to the Edge Add-ons store\n", style=BRAND_COLORS["blue"])

    console.print(banner)


def print_step_header(step_num: int, title: str) -> None:
    """
    Print a styled step header.

    In GitHub Actions, uses ::group:: for collapsible sections.
    In other environments, uses Rich styling.
    """
    step_title = f"STEP {step_num}: {title}"

    if IS_GITHUB_ACTIONS:
        print(f"::group::{step_title}")
        console.print(f"[bold blue]{step_title}[/bold blue]")
    else:
        console.print()
        console.rule(f"[bold blue]{step_title}[/bold blue]", style="blue")


def print_step_end(step_num: int, success: bool = True) -> None:
    """Print step completion status and close the GitHub Actions group."""
    if success:
        console.print(f"[success]✓ Step {step_num} completed successfully[/success]")
    else:
        console.print(f"[error]✗ Step {step_num} failed[/error]")

    if IS_GITHUB_ACTIONS:
        print("::endgroup::")
    else:
        console.print()


@contextmanager
def step(step_num: int, title: str) -> Generator[None, None, None]:
    """
    Wrap a block in a step header and a success/failure footer.

    Exceptions raised inside the block mark the step as failed and are
    re-raised unchanged.
    """
    print_step_header(step_num, title)
    try:
        yield
    except BaseException:
        print_step_end(step_num, success=False)
        raise
    print_step_end(step_num, success=True)


def gha_error(message: str, title: Optional[str] = None) -> None:
    """
    Emit an error that appears in GitHub Actions job summary.

    Args:
        message: Error message
        title: Optional title for the error
    """
    if IS_GITHUB_ACTIONS:
        if title:
            print(f"::error title={title}::{message}")
        else:
            print(f"::error::{message}")
    else:
        if title:
            error_console.print(f"[error]Error ({title}):[/error] {message}")
        else:
            error_console.print(f"[error]Error:[/error] {message}")


def print_summary_table(
    title: str,
    data: List[Tuple[str, Any]],
    show_if_empty: bool = False,
) -> None:
    """
    Print a summary table.

    Args:
        title: Table title
        data: List of (label, value) tuples
        show_if_empty: Whether to show the table if all values are empty
    """
    if not show_if_empty:
        data = [(label, value) for label, value in data if value]

    if not data:
        return

    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("Field", style="cyan")
    table.add_column("Value")

    for label, value in data:
        table.add_row(label, str(value))

    console.print(table)


def print_final_success() -> None:
    """Print final success message."""
    console.print()
    if IS_GITHUB_ACTIONS:
        console.print("[bold green]✓ SUCCESS![/bold green] Extension submitted for publication.")
    else:
        console.rule("[bold green]SUCCESS[/bold green]", style="green")
        console.print("[bold green]Extension submitted for publication![/bold green]", justify="center")
    console.print()


def print_final_failure(message: str) -> None:
    """Print final failure message."""
    error_console.print()
    if IS_GITHUB_ACTIONS:
        gha_error(message, title="Edge Add-on Submission Failed")
    else:
        error_console.rule("[bold red]FAILED[/bold red]", style="red")
    error_console.print(f"[bold red]{escape(message)}[/bold red]", justify="center")
    error_console.print()
