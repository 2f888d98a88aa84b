"""Output styling helpers and progress reporting for the init command."""

import os
from dataclasses import dataclass

import click


def _color_enabled() -> bool:
    """Check if color output is enabled (respects NO_COLOR)."""
    # https://no-color.org/ - disable if NO_COLOR is set (any non-empty value)
    return not bool(os.environ.get("NO_COLOR"))


def success(text: str) -> str:
    """Style text as success (green)."""
    if not _color_enabled():
        return text
    return click.style(text, fg="green")


def error(text: str) -> str:
    """Style text as error (red)."""
    if not _color_enabled():
        return text
    return click.style(text, fg="red")


def warning(text: str) -> str:
    """Style text as warning (yellow)."""
    if not _color_enabled():
        return text
    return click.style(text, fg="yellow")


def info(text: str) -> str:
    """Style text as info (cyan)."""
    if not _color_enabled():
        return text
    return click.style(text, fg="cyan")


def dim(text: str) -> str:
    """Style text as dimmed."""
    if not _color_enabled():
        return text
    return click.style(text, dim=True)


def bold(text: str) -> str:
    """Style text as bold."""
    if not _color_enabled():
        return text
    return click.style(text, bold=True)


def file_path_style(text: str) -> str:
    """Style a file path."""
    if not _color_enabled():
        return text
    return click.style(text, fg="blue", bold=True)


@dataclass
class Reporter:
    """Writes progress, warning and error lines for an init run.

    Progress lines are dropped when quiet; warnings and errors always go
    to stderr.
    """

    quiet: bool = False

    def step(self, message: str) -> None:
        if not self.quiet:
            click.echo(message)

    def detail(self, message: str) -> None:
        if not self.quiet:
            click.echo(dim(message))

    def warn(self, message: str) -> None:
        click.echo(f"{warning('Warning:')} {message}", err=True)

    def fail(self, message: str) -> None:
        click.echo(f"{error('Error during initialization:')} {message}", err=True)

    def done(self, message: str) -> None:
        if not self.quiet:
            click.echo(success(message))
