"""Output utilities for CLI commands with clear intent.

user_output() is for human-facing progress and error messages (stderr);
machine_output() is for the data a command produces (stdout), so the two can be
separated in pipes: `mist list apple > firmwares.txt` keeps only the table.
"""

import click


def user_output(message: str = "", nl: bool = True) -> None:
    """Write a human-facing message to stderr."""
    click.echo(message, err=True, nl=nl)


def machine_output(message: str = "", nl: bool = True) -> None:
    """Write command results to stdout."""
    click.echo(message, nl=nl)


def output_header(title: str) -> None:
    """Write a bold section header, e.g. "SANITY CHECKS" or "SEARCH"."""
    user_output(click.style(title, bold=True))


def output_step(message: str, *, last: bool = False) -> None:
    """Write an indented progress line beneath the current section header."""
    prefix = "  └─ " if last else "  ├─ "
    user_output(prefix + message)


def output_error(message: str) -> None:
    """Write an error message with the standard red "Error: " prefix."""
    user_output(click.style("Error: ", fg="red") + message)
