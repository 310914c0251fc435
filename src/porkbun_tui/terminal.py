"""
Curses frontend

Owns the terminal. Keys, resizes, spinner ticks and task results all go
through one asyncio.Queue; the loop takes one message at a time, hands it
to the controller, spawns whatever commands come back and redraws.
"""

import asyncio
import curses
import locale
import logging
import os
import sys
from typing import Optional

from . import styles
from .app import App
from .config import config
from .styles import Line
from .tasks import KeyPressed, Message, Resized, TaskRunner, Tick

logger = logging.getLogger(__name__)

# ctrl chords arrive as control characters once raw() and nonl() are set
KEY_NAMES = {
    curses.KEY_UP: "up",
    curses.KEY_DOWN: "down",
    curses.KEY_ENTER: "enter",
    curses.KEY_BACKSPACE: "backspace",
    curses.KEY_BTAB: "shift+tab",
    3: "ctrl+c",
    8: "backspace",
    9: "tab",
    10: "ctrl+j",
    11: "ctrl+k",
    13: "enter",
    19: "ctrl+s",
    21: "ctrl+u",
    27: "esc",
    32: "space",
    127: "backspace",
}

# style name -> (foreground, background, attributes)
PALETTE = {
    styles.TITLE: (curses.COLOR_WHITE, curses.COLOR_MAGENTA, curses.A_BOLD),
    styles.STATUS_BAR: (curses.COLOR_WHITE, -1, 0),
    styles.HELP: (curses.COLOR_WHITE, -1, curses.A_DIM),
    styles.HELP_KEY: (curses.COLOR_MAGENTA, -1, curses.A_BOLD),
    styles.TABLE_HEADER: (curses.COLOR_MAGENTA, -1, curses.A_BOLD | curses.A_UNDERLINE),
    styles.SELECTED: (curses.COLOR_WHITE, curses.COLOR_MAGENTA, curses.A_BOLD),
    styles.LABEL: (curses.COLOR_CYAN, -1, curses.A_BOLD),
    styles.VALUE: (curses.COLOR_WHITE, -1, 0),
    styles.SEARCH: (curses.COLOR_YELLOW, -1, 0),
    styles.ERROR: (curses.COLOR_RED, -1, curses.A_BOLD),
    styles.SUCCESS: (curses.COLOR_GREEN, -1, curses.A_BOLD),
    styles.SPINNER: (curses.COLOR_MAGENTA, -1, 0),
    styles.ON: (curses.COLOR_GREEN, -1, 0),
    styles.OFF: (curses.COLOR_RED, -1, 0),
    styles.EXPIRED: (curses.COLOR_RED, -1, curses.A_BOLD),
    styles.CRITICAL: (curses.COLOR_RED, -1, 0),
    styles.WARNING: (curses.COLOR_YELLOW, -1, curses.A_BOLD),
    styles.SOON: (curses.COLOR_YELLOW, -1, 0),
    styles.HEALTHY: (curses.COLOR_GREEN, -1, 0),
}


def translate_key(ch: int) -> Optional[str]:
    """Curses key code to a key name, or None for keys nothing binds."""
    if ch in KEY_NAMES:
        return KEY_NAMES[ch]
    if 32 < ch < 127:
        return chr(ch)
    return None


class Screen:
    """Draws Line lists onto a curses window."""

    def __init__(self, stdscr):
        self.stdscr = stdscr
        self.attrs: dict[str, int] = {}
        self._init_colors()

    def _init_colors(self) -> None:
        if not curses.has_colors():
            self.attrs = {name: attr for name, (_, _, attr) in PALETTE.items()}
            return
        curses.start_color()
        curses.use_default_colors()
        for pair_id, (name, (fg, bg, attr)) in enumerate(PALETTE.items(), start=1):
            curses.init_pair(pair_id, fg, bg)
            self.attrs[name] = curses.color_pair(pair_id) | attr

    @property
    def size(self) -> tuple[int, int]:
        height, width = self.stdscr.getmaxyx()
        return width, height

    def draw(self, lines: list[Line]) -> None:
        width, height = self.size
        self.stdscr.erase()
        for y, line in enumerate(lines[:height]):
            x = 0
            for text, style in line.clip(width).segments:
                try:
                    self.stdscr.addstr(y, x, text, self.attrs.get(style, 0))
                except curses.error:
                    # writing the bottom-right cell moves the cursor off screen
                    pass
                x += len(text)
        self.stdscr.refresh()


class Frontend:
    """Event loop glue between curses, the mailbox and the controller."""

    def __init__(self, stdscr, app: App):
        self.stdscr = stdscr
        self.app = app
        self.screen = Screen(stdscr)
        self.mailbox: asyncio.Queue[Message] = asyncio.Queue()
        self.runner = TaskRunner(self.mailbox)

    def read_keys(self) -> None:
        """Drain pending input without blocking."""
        while True:
            ch = self.stdscr.getch()
            if ch == -1:
                return
            if ch == curses.KEY_RESIZE:
                width, height = self.screen.size
                self.mailbox.put_nowait(Resized(width, height))
                continue
            key = translate_key(ch)
            if key is not None:
                self.mailbox.put_nowait(KeyPressed(key))

    async def tick(self, interval: float) -> None:
        while True:
            await asyncio.sleep(interval)
            # ncurses reports SIGWINCH as KEY_RESIZE on the next getch
            self.read_keys()
            self.mailbox.put_nowait(Tick())

    async def run(self) -> None:
        loop = asyncio.get_running_loop()
        stdin = sys.stdin.fileno()
        loop.add_reader(stdin, self.read_keys)
        ticker = asyncio.ensure_future(self.tick(config.ui.spinner_interval_seconds))

        width, height = self.screen.size
        self.app.update(Resized(width, height))
        self.runner.spawn(self.app.init())

        try:
            while self.app.running:
                self.screen.draw(self.app.render())
                message = await self.mailbox.get()
                self.runner.spawn(self.app.update(message))
        finally:
            loop.remove_reader(stdin)
            ticker.cancel()
            await self.runner.shutdown()
            if self.app.registrar is not None:
                await self.app.registrar.aclose()
            logger.info("Event loop stopped")


def _setup(stdscr) -> None:
    curses.raw()
    curses.nonl()
    curses.curs_set(0)
    stdscr.keypad(True)
    stdscr.nodelay(True)


def run(app: App) -> None:
    """Run the dashboard until the user quits."""
    locale.setlocale(locale.LC_ALL, "")
    # a lone esc should not wait a full second for a follow-up sequence
    os.environ.setdefault("ESCDELAY", "25")

    def main(stdscr) -> None:
        _setup(stdscr)
        asyncio.run(Frontend(stdscr, app).run())

    curses.wrapper(main)
