# /jsxbuild/cli/controller.py
# Canvas: progress lines for each build stage, with pass/fail markers.

import os

from rich.console import Console
from rich.markup import escape

from jsxbuild.cli.theme import get_theme


class Canvas:
    def __init__(self, console: Console = None):
        mode = "plain" if os.getenv("NO_COLOR") else "calm"
        self.console = console or Console(theme=get_theme(mode), highlight=False)

    def step(self, message: str):
        self.console.print(f"[step]→ {escape(message)}[/]")

    def info(self, message: str):
        self.console.print(f"  {escape(message)}")

    def success(self, message: str):
        self.console.print(f"[success]✓ {escape(message)}[/]")

    def warning(self, message: str):
        self.console.print(f"[warning]⚠ {escape(message)}[/]")

    def error(self, message: str):
        self.console.print(f"[error]✗ {escape(message)}[/]")

    def verbatim(self, text: str):
        """Print tool output exactly as received, no markup or highlighting."""
        self.console.print(text, markup=False, highlight=False, emoji=False)


# Instantiate globally for imports
canvas = Canvas()
