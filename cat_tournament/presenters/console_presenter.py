"""
Console presenter implementation.

Shows a matchup on the terminal and races the player's answer against the
decision timeout.
"""

import sys
import threading
import time
from collections.abc import Callable
from concurrent.futures import Future
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import TextIO

from typing_extensions import override

from ..interfaces import Presenter
from ..logging_config import get_logger
from ..models import Matchup, Photo

logger = get_logger("console_presenter")

LEFT_ANSWERS = {"1", "l", "left"}
RIGHT_ANSWERS = {"2", "r", "right"}


class ConsolePresenter(Presenter):
    """
    Interactive terminal presenter.

    Reading stdin cannot be interrupted, so the read runs on a daemon
    thread and the matchup waits on it with a timeout. Whichever comes first
    wins. A read still pending when a matchup times out carries over, so the
    next line typed answers the next matchup. A line that arrived between
    matchups is discarded.
    """

    def __init__(
        self,
        describe: Callable[[Photo], str] | None = None,
        read_line: Callable[[], str] | None = None,
        out: TextIO | None = None,
    ):
        """
        Initialize console presenter.

        Args:
            describe: Renders a photo for display (default: id and file name)
            read_line: Blocking line reader (default: sys.stdin.readline)
            out: Output stream (default: sys.stdout)
        """
        self.describe = describe or (lambda photo: f"{photo.photo_id} ({photo.filename})")
        self.read_line = read_line or sys.stdin.readline
        self.out = out or sys.stdout
        self._pending: Future[str] | None = None

    def _next_line(self) -> Future[str]:
        if self._pending is not None:
            if not self._pending.done():
                # Still waiting on the terminal; the next line answers this matchup
                return self._pending
            late = "" if self._pending.exception() else self._pending.result().strip()
            if late:
                logger.debug(f"Discarding late input: {late!r}")
        future = Future[str]()
        threading.Thread(target=self._read_into, args=(future,), name="console-input", daemon=True).start()
        self._pending = future
        return future

    def _read_into(self, future: Future[str]) -> None:
        try:
            future.set_result(self.read_line())
        except Exception as e:
            future.set_exception(e)

    @staticmethod
    def parse_answer(answer: str, matchup: Matchup) -> str | None:
        """Map typed text to a photo id, or None if it names neither photo."""
        text = answer.strip()
        lowered = text.lower()
        if lowered in LEFT_ANSWERS:
            return matchup.left.photo_id
        if lowered in RIGHT_ANSWERS:
            return matchup.right.photo_id
        if matchup.contains(text):
            return text
        return None

    @override
    def present(self, matchup: Matchup, label: str, timeout: float) -> str | None:
        print(f"\n{label}", file=self.out)
        print(f"  [1] {self.describe(matchup.left)}", file=self.out)
        print(f"  [2] {self.describe(matchup.right)}", file=self.out)
        print(f"Pick the cuter cat within {timeout:.0f}s: ", end="", file=self.out, flush=True)

        deadline = time.monotonic() + timeout
        while True:
            future = self._next_line()
            try:
                line = future.result(timeout=max(0.0, deadline - time.monotonic()))
            except FutureTimeoutError:
                print("\nTime's up!", file=self.out)
                return None
            self._pending = None

            if line == "":
                # EOF: nobody is there to choose
                return None
            choice = self.parse_answer(line, matchup)
            if choice is not None:
                return choice
            print("Type 1 or 2: ", end="", file=self.out, flush=True)

