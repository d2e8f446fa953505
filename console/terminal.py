"""
Consola de texto para operar el servidor desde una terminal.

TerminalConsole is the display and the input source at once: it prints the
transcript to an output stream and reads command lines from an input stream
on a daemon thread, handing them to a CommandChannel.
"""

import logging
import sys
import threading
from queue import Queue
from typing import Optional, TextIO

from .channel import CommandChannel
from .command_interpreter import WarningAction, parse_command
from .display import Display, InputSource, InputStyle

logger = logging.getLogger(__name__)

CLEAR_SCREEN = "\033[2J\033[H"
RESET_COLOR = "\033[0m"

# Prompt colors: light grey, green for commands, yellow for warnings
STYLE_COLORS = {
    InputStyle.NEUTRAL: "\033[38;2;231;231;231m",
    InputStyle.COMMAND: "\033[38;2;64;255;16m",
    InputStyle.WARNING: "\033[38;2;215;201;32m",
}

YES_ANSWERS = ("y", "yes")


class TerminalConsole(Display, InputSource):
    def __init__(self, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None,
                 color: Optional[bool] = None):
        self._stdin     : TextIO = stdin or sys.stdin
        self._stdout    : TextIO = stdout or sys.stdout
        self._color     : bool = self._stdout.isatty() if color is None else color

        self._channel   : Optional[CommandChannel] = None
        self._rendered  : str = ""
        self._style     : InputStyle = InputStyle.NEUTRAL

        self._answers           : Queue[str] = Queue()
        self._answers_owed      : int = 0       # Lines still owed to confirmations
        self._unprompted        : int = 0       # Warning commands fed but not yet prompted
        self._input_closed      : bool = False
        self._routing_lock      = threading.Lock()
        self._lock              = threading.Lock()
        self._thread            : Optional[threading.Thread] = None

    def attach(self, channel: CommandChannel) -> None:
        self._channel = channel

    @property
    def style(self) -> InputStyle:
        return self._style

    # ==== Display ====

    def show_text(self, text: str) -> None:
        with self._lock:
            if text.startswith(self._rendered):
                self._write(text[len(self._rendered):])
            else:
                # The visible window moved (clear/reset): redraw everything
                self._write((CLEAR_SCREEN if self._color else "") + text)
            self._rendered = text

    def set_input_style(self, style: InputStyle) -> None:
        self._style = style

    def prompt_confirm(self, message: str) -> bool:
        with self._lock:
            self._write(f"{message} [y/N] ")

        with self._routing_lock:
            if self._unprompted > 0:
                self._unprompted -= 1
            elif self._input_closed and self._answers.empty():
                return False
            else:
                self._answers_owed += 1

        answer = self._answers.get()
        return answer.strip().lower() in YES_ANSWERS

    # ==== InputSource ====

    def clear(self) -> None:
        # Lines are consumed whole, nothing is left pending in the terminal
        with self._lock:
            self._stdout.flush()

    def print_response(self, response: str) -> None:
        with self._lock:
            if self._color:
                self._write(f"{STYLE_COLORS[self._style]}{response}{RESET_COLOR}\n")
            else:
                self._write(f"{response}\n")

    # ==== Lectura de comandos ====

    def start(self) -> threading.Thread:
        self._thread = threading.Thread(target=self.read_lines, daemon=True, name="TerminalInput")
        self._thread.start()
        return self._thread

    def read_lines(self) -> None:
        for raw in iter(self._stdin.readline, ""):
            self.feed(raw.rstrip("\r\n"))

        logger.info("Console input closed")
        # Unblock pending confirmations; an empty answer means no
        with self._routing_lock:
            self._input_closed = True
            for _ in range(self._answers_owed):
                self._answers.put("")
            self._answers_owed = 0

    def feed(self, line: str) -> None:
        """Routes one line typed by the operator"""
        with self._routing_lock:
            if self._answers_owed > 0:
                self._answers_owed -= 1
                self._answers.put(line)
                return

            if self._channel is None:
                logger.warning(f"No command channel attached, dropping input {line!r}")
                return

            # The line after a shutdown command answers its confirmation
            if isinstance(parse_command(line), WarningAction):
                self._answers_owed += 1
                self._unprompted += 1

        self._channel.input_changed(line)
        self._channel.submit(line)

    def _write(self, text: str) -> None:
        self._stdout.write(text)
        self._stdout.flush()
