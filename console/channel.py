import logging
import threading
from queue import Queue, Empty
from typing import Callable, Optional

from .command_interpreter import CommandInterpreter, classify_input
from .display import Display, InputStyle, NullDisplay

logger = logging.getLogger(__name__)

LINE_WAIT_TIMEOUT = 1.0     # Seconds between checks of is_active while idle


class CommandChannel:
    """
    Queue between the input source and the command interpreter.

    The input source submits whole lines from its own thread; run() drains
    them one at a time, so the interpreter never runs on the network thread.
    """

    def __init__(self, interpreter: CommandInterpreter, display: Optional[Display] = None,
                 on_response: Optional[Callable[[str], None]] = None):
        self._interpreter   : CommandInterpreter    = interpreter
        self._display       : Display               = display or NullDisplay()
        self._on_response                           = on_response
        self._lines         : Queue[str]            = Queue()
        self._is_active     : bool                  = True
        self._thread        : Optional[threading.Thread] = None

    def submit(self, line: str) -> None:
        self._lines.put(line)

    def input_changed(self, text: str) -> InputStyle:
        """Restyles the input line, to be called on every edit of the pending text"""
        style = classify_input(text)
        self._display.set_input_style(style)
        return style

    def start(self) -> threading.Thread:
        self._thread = threading.Thread(target=self.run, daemon=True, name="CommandChannel")
        self._thread.start()
        return self._thread

    def run(self) -> None:
        logger.debug("Command channel started")
        while self._is_active:
            line = self._get_next_line()
            if line is not None:
                self.handle(line)
        logger.debug("Command channel stopped")

    def handle(self, line: str) -> Optional[str]:
        try:
            response = self._interpreter.process(line)
        except Exception as e:
            logger.exception(f"Error processing console input {line!r}: {e}")
            return None

        if self._on_response is not None:
            self._on_response(response)
        return response

    def stop(self) -> None:
        self._is_active = False

    def pending(self) -> int:
        return self._lines.qsize()

    def _get_next_line(self) -> Optional[str]:
        try:
            return self._lines.get(timeout=LINE_WAIT_TIMEOUT)
        except Empty:
            return None
