"""Prettier formatting for generated files.

Generated front-end files are passed through Prettier when it is installed.
Prettier is run as an external process with the content on stdin; files
whose extension Prettier is not configured for are returned untouched
without spawning anything.
"""

from __future__ import annotations

import shutil
from pathlib import PurePath

from ..utils import run_command


PARSERS_BY_EXTENSION: dict[str, str] = {
    ".vue": "vue",
    ".ts": "typescript",
    ".tsx": "typescript",
    ".js": "babel",
    ".jsx": "babel",
    ".json": "json",
    ".css": "css",
    ".scss": "css",
    ".html": "html",
    ".md": "markdown",
}

PRETTIER_OPTIONS: tuple[str, ...] = (
    "--single-quote",
    "--tab-width", "2",
    "--trailing-comma", "es5",
    "--print-width", "80",
    "--arrow-parens", "avoid",
)


class FormatterError(Exception):
    """Raised when Prettier is unavailable or rejects the content."""


class PrettierFormatter:
    """Formats file content by piping it through ``prettier``.

    Args:
        command: Program (and leading args) used to invoke Prettier.
        timeout: Per-file timeout in seconds.
    """

    def __init__(self, command: tuple[str, ...] = ("prettier",), timeout: int = 30) -> None:
        self.command = command
        self.timeout = timeout

    @staticmethod
    def parser_for(file_path: str | PurePath) -> str | None:
        """Return the Prettier parser for *file_path*, or ``None`` to skip."""
        return PARSERS_BY_EXTENSION.get(PurePath(file_path).suffix.lower())

    async def format(self, content: str, file_path: str | PurePath) -> str:
        """Return *content* formatted for the type implied by *file_path*.

        Raises:
            FormatterError: If Prettier is not installed, times out or exits
                non-zero.
        """
        parser = self.parser_for(file_path)
        if parser is None:
            return content

        if shutil.which(self.command[0]) is None:
            raise FormatterError(f"{self.command[0]} not found on PATH")

        cmd = [*self.command, "--parser", parser, *PRETTIER_OPTIONS]
        returncode, stdout, stderr = await run_command(
            cmd, timeout=self.timeout, input_text=content
        )
        if returncode != 0:
            first_line = stderr.splitlines()[0] if stderr else f"exit code {returncode}"
            raise FormatterError(first_line)
        return stdout
