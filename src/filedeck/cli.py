"""Interactive console for filedeck.

Renders the browser state with Rich and maps short commands onto
FileBrowser operations:

  ls                 redraw the current folder
  cd <name|..|/>     enter a folder, go up, or go to the root
  crumb <n>          jump to breadcrumb segment n (0 = Root)
  open <name>        enter a folder or download a file
  get <name>         download a file
  put <path>         upload a local file into the current folder
  mkdir <name>       create a folder
  rm <name>          delete an entry
  help / quit
"""

from __future__ import annotations

import asyncio
import logging
import shlex
from collections.abc import Awaitable, Callable

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from filedeck.browser import FileBrowser
from filedeck.formatting import format_size
from filedeck.models import Entry
from filedeck.state import ViewState

logger = logging.getLogger(__name__)


def render_breadcrumb(state: ViewState) -> Text:
    text = Text()
    for i, segment in enumerate(state.breadcrumb):
        if i:
            text.append(" / ", style="dim")
        text.append(f"[{i}] ", style="dim")
        text.append(segment.name, style="bold cyan" if i == len(state.breadcrumb) - 1 else "cyan")
    return text


def render_table(state: ViewState) -> Table:
    table = Table(show_edge=False, header_style="bold")
    table.add_column("Name")
    table.add_column("Kind")
    table.add_column("Size", justify="right")
    table.add_column("Modified")

    # Folders first, then files, each by name
    for entry in sorted(state.entries, key=lambda e: (not e.folder, e.name.lower())):
        name = Text(entry.name + ("/" if entry.folder else ""), style="blue" if entry.folder else "")
        kind = "folder" if entry.folder else (entry.mime_type or "file")
        size = "-" if entry.folder else format_size(entry.size)
        table.add_row(name, kind, size, entry.modification or "")
    return table


def render(console: Console, state: ViewState) -> None:
    """Draw breadcrumb, listing and status lines."""
    console.print(render_breadcrumb(state))
    if state.loading:
        console.print("[dim]Loading...[/dim]")
    elif not state.entries:
        console.print("[dim]This folder is empty.[/dim]")
    else:
        console.print(render_table(state))
    if state.uploading:
        console.print("[yellow]Uploading...[/yellow]")
    if state.error_message:
        console.print(Text(state.error_message, style="bold red"))


class Shell:
    """Command interpreter around a FileBrowser."""

    def __init__(self, browser: FileBrowser, console: Console | None = None):
        self.browser = browser
        self.console = console or Console()
        self._commands: dict[str, Callable[[list[str]], Awaitable[None]]] = {
            "ls": self._cmd_ls,
            "cd": self._cmd_cd,
            "crumb": self._cmd_crumb,
            "open": self._cmd_open,
            "get": self._cmd_get,
            "put": self._cmd_put,
            "mkdir": self._cmd_mkdir,
            "rm": self._cmd_rm,
        }

    def find_entry(self, name: str) -> Entry | None:
        """Look up an entry of the current listing by name (exact, then case-insensitive)."""
        entries = self.browser.state.entries
        for entry in entries:
            if entry.name == name:
                return entry
        lowered = name.lower()
        for entry in entries:
            if entry.name.lower() == lowered:
                return entry
        return None

    async def handle(self, line: str) -> bool:
        """Run one command line. Returns False when the user asked to quit."""
        try:
            parts = shlex.split(line)
        except ValueError as e:
            self.console.print(f"[red]{escape(str(e))}[/red]")
            return True
        if not parts:
            return True

        cmd, args = parts[0].lower(), parts[1:]
        if cmd in ("quit", "exit", "q"):
            return False
        if cmd in ("help", "?"):
            self.console.print(__doc__.split("\n\n", 2)[-1].rstrip())
            return True

        handler = self._commands.get(cmd)
        if handler is None:
            self.console.print(f"[red]Unknown command: {escape(cmd)}[/red] (try 'help')")
            return True

        await handler(args)
        return True

    def _need_arg(self, args: list[str], usage: str) -> str | None:
        if not args:
            self.console.print(f"[yellow]Usage: {usage}[/yellow]")
            return None
        return " ".join(args)

    def _missing(self, name: str) -> None:
        self.console.print(f"[red]No such entry: {escape(name)}[/red]")

    async def _cmd_ls(self, args: list[str]) -> None:
        render(self.console, self.browser.state)

    async def _cmd_cd(self, args: list[str]) -> None:
        target = self._need_arg(args, "cd <folder|..|/>")
        if target is None:
            return
        if target == "/":
            await self.browser.navigate(None)
        elif target == "..":
            crumbs = self.browser.state.breadcrumb
            if len(crumbs) > 1:
                await self.browser.open_breadcrumb(crumbs[-2])
            else:
                await self.browser.navigate(None)
        else:
            entry = self.find_entry(target)
            if entry is None or not entry.folder:
                self.console.print(f"[red]Not a folder: {escape(target)}[/red]")
                return
            await self.browser.open_entry(entry)
        render(self.console, self.browser.state)

    async def _cmd_crumb(self, args: list[str]) -> None:
        raw = self._need_arg(args, "crumb <n>")
        if raw is None:
            return
        crumbs = self.browser.state.breadcrumb
        try:
            segment = crumbs[int(raw)]
        except (ValueError, IndexError):
            self.console.print(f"[red]No breadcrumb segment {escape(raw)}[/red]")
            return
        await self.browser.open_breadcrumb(segment)
        render(self.console, self.browser.state)

    async def _cmd_open(self, args: list[str]) -> None:
        name = self._need_arg(args, "open <name>")
        if name is None:
            return
        entry = self.find_entry(name)
        if entry is None:
            self._missing(name)
            return
        if entry.folder:
            await self.browser.open_entry(entry)
            render(self.console, self.browser.state)
        else:
            await self._download(entry)

    async def _cmd_get(self, args: list[str]) -> None:
        name = self._need_arg(args, "get <name>")
        if name is None:
            return
        entry = self.find_entry(name)
        if entry is None or entry.folder:
            self.console.print(f"[red]Not a file: {escape(name)}[/red]")
            return
        await self._download(entry)

    async def _download(self, entry: Entry) -> None:
        saved = await self.browser.download(entry)
        if saved is not None:
            self.console.print(f"[green]Saved {escape(entry.name)} to {escape(str(saved))}[/green]")
        elif self.browser.state.error_message:
            self.console.print(Text(self.browser.state.error_message, style="bold red"))

    async def _cmd_put(self, args: list[str]) -> None:
        path = self._need_arg(args, "put <path>")
        if path is None:
            return
        try:
            self.browser.select_upload(path)
        except OSError as e:
            self.console.print(f"[red]{escape(str(e))}[/red]")
            return
        await self.browser.upload()
        render(self.console, self.browser.state)

    async def _cmd_mkdir(self, args: list[str]) -> None:
        name = self._need_arg(args, "mkdir <name>")
        if name is None:
            return
        self.browser.new_folder_name = name
        await self.browser.create_folder()
        render(self.console, self.browser.state)

    async def _cmd_rm(self, args: list[str]) -> None:
        name = self._need_arg(args, "rm <name>")
        if name is None:
            return
        entry = self.find_entry(name)
        if entry is None:
            self._missing(name)
            return
        await self.browser.delete(entry)
        render(self.console, self.browser.state)


async def run_shell(browser: FileBrowser, console: Console, commands: list[str] | None = None) -> None:
    """Load the root, then run ``commands`` (if given) or an interactive loop."""
    shell = Shell(browser, console)
    await browser.start()
    render(console, browser.state)

    if commands:
        for line in commands:
            console.print(f"[dim]> {escape(line)}[/dim]")
            if not await shell.handle(line):
                break
        return

    while True:
        try:
            line = await asyncio.to_thread(console.input, "[bold]filedeck>[/bold] ")
        except (EOFError, KeyboardInterrupt):
            console.print()
            break
        if not await shell.handle(line):
            break
