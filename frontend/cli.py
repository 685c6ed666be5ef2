"""Terminal front end: renders a ClientView and reads commands."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from .api import TasksApiClient
from .config import ClientConfig
from .poller import TimePoller
from .view import ClientView

logger = logging.getLogger(__name__)

HELP_TEXT = """Commands:
  add <title>    create a task
  toggle <id>    flip a task between done / not done
  delete <id>    remove a task
  refresh        redraw (the clock refreshes on its own)
  help           show this text
  quit           exit"""


def _parse_id(arg: str) -> Optional[int]:
    try:
        return int(arg)
    except ValueError:
        return None


class CLI:
    def __init__(
        self,
        view: ClientView,
        input_fn: Callable[[str], str] = input,
        output_fn: Callable[[str], None] = print,
    ):
        self.view = view
        self._input = input_fn
        self._output = output_fn

    def handle(self, line: str) -> bool:
        """Run one command.  Returns False when the loop should end."""
        command, _, arg = line.strip().partition(" ")
        command = command.lower()
        arg = arg.strip()

        if command in ("quit", "exit", "q"):
            return False
        if command == "help":
            self._output(HELP_TEXT)
        elif command == "add":
            if not self.view.add_task(arg) and not self.view.tasks_error:
                self._output("Usage: add <title>")
        elif command in ("toggle", "delete"):
            task_id = _parse_id(arg)
            if task_id is None:
                self._output(f"Usage: {command} <id>")
            elif command == "toggle":
                self.view.toggle_task(task_id)
            else:
                self.view.delete_task(task_id)
        elif command not in ("", "refresh"):
            self._output(f"Unknown command: {command} (type 'help')")
        return True

    def run(self) -> None:
        while True:
            self._output(self.view.render())
            try:
                line = self._input("\n: ")
            except (EOFError, KeyboardInterrupt):
                break
            if not self.handle(line):
                break


def main(config: Optional[ClientConfig] = None) -> int:
    config = config or ClientConfig.from_env()
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    with TasksApiClient(config.candidate_urls, timeout=config.timeout) as api:
        view = ClientView(api)
        view.load_tasks()
        poller = TimePoller(view, interval=config.poll_interval)
        poller.start()
        try:
            CLI(view).run()
        finally:
            poller.stop(timeout=1.0)
    return 0
