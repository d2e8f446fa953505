"""
Interprete de comandos de la consola del operador.

Grammar (one line per command, no escaping):

    shutdown | exit | halt      asks for confirmation, then stops the server
    clear                       hides the transcript shown so far
    reset                       shows the whole transcript again
    port                        reports the current port
    port <1-65534>              rebinds the server socket
    anything else               logged as a [SERVER] message

A line matches a command when it is the command itself or the command
followed by a space and more text, so "port 80" matches "port" but "porter"
does not.
"""

import logging
import re
from dataclasses import dataclass
from typing import Callable, Optional, Union

from protocol import is_valid_port
from server.errors import MalformedCommandArgument, PortUnavailable
from server.socket_manager import SocketManager
from .display import Display, InputSource, InputStyle, NullDisplay
from .transcript import Transcript

logger = logging.getLogger(__name__)

COMMANDS = ("clear", "reset", "port")
WARNING_COMMANDS = ("shutdown", "exit", "halt")

CONFIRM_EXIT_MESSAGE = "Are you sure you would like to exit?"

_INTEGER = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class NoArg:
    name: str


@dataclass(frozen=True)
class WithArg:
    name: str
    argument: int


@dataclass(frozen=True)
class WarningAction:
    name: str


@dataclass(frozen=True)
class PlainMessage:
    text: str


Command = Union[NoArg, WithArg, WarningAction, PlainMessage]


def matches(line: str, target: str) -> bool:
    """Exact match, or target followed by a single space and anything else"""
    return line == target or line.startswith(target + " ")


def matches_strict(line: str, target: str) -> bool:
    return line == target


def parse_port_argument(argument: str) -> int:
    """
    Parses the argument of "port <value>".

    Raises:
        MalformedCommandArgument: If the argument is not a plain integer or is
            not strictly between 0 and 65535
    """
    if not _INTEGER.fullmatch(argument):
        raise MalformedCommandArgument(f"Port must be an integer, received: {argument!r}")

    port = int(argument)
    if not is_valid_port(port):
        raise MalformedCommandArgument(f"Port out of range: {port}")

    return port


def parse_command(line: str) -> Command:
    for name in WARNING_COMMANDS:
        if matches(line, name):
            return WarningAction(name)

    if matches(line, "clear"):
        return NoArg("clear")
    if matches(line, "reset"):
        return NoArg("reset")
    if matches_strict(line, "port"):
        return NoArg("port")

    if matches(line, "port"):
        try:
            return WithArg("port", parse_port_argument(line[len("port "):]))
        except MalformedCommandArgument as e:
            # Treated as a plain message, the operator sees the generic response
            logger.debug(f"Ignoring port command: {e}")

    return PlainMessage(line)


def classify_input(text: str) -> InputStyle:
    """Style for a pending, not yet submitted, input line"""
    style = InputStyle.NEUTRAL
    if any(matches(text, command) for command in COMMANDS):
        style = InputStyle.COMMAND
    if any(matches(text, command) for command in WARNING_COMMANDS):
        style = InputStyle.WARNING
    return style


class CommandInterpreter:
    def __init__(self, sockets: SocketManager, transcript: Transcript,
                 display: Optional[Display] = None, input_source: Optional[InputSource] = None,
                 on_shutdown: Optional[Callable[[], None]] = None):
        self._sockets       = sockets
        self._transcript    = transcript
        self._display       = display or NullDisplay()
        self._input         = input_source or NullDisplay()
        self._on_shutdown   = on_shutdown

    def process(self, line: str) -> str:
        """Runs one submitted line and returns the response for the operator"""
        command = parse_command(line)
        logger.debug(f"Console input {line!r} parsed as {command}")

        try:
            return self.execute(command, line)
        finally:
            self._input.clear()
            self.refresh()

    def execute(self, command: Command, line: Optional[str] = None) -> str:
        if isinstance(command, WarningAction):
            return self._shutdown(command.name, command.name if line is None else line)

        if isinstance(command, NoArg):
            if command.name == "clear":
                return self._clear()
            if command.name == "reset":
                return self._reset()
            if command.name == "port":
                return self._report_port()

        if isinstance(command, WithArg) and command.name == "port":
            return self._change_port(command.argument)

        if isinstance(command, PlainMessage):
            return self._plain_message(command.text)

        raise ValueError(f"Unsupported command: {command}")

    def refresh(self) -> None:
        self._transcript.render(self._display)

    def _shutdown(self, name: str, line: str) -> str:
        if not self._display.prompt_confirm(CONFIRM_EXIT_MESSAGE):
            logger.info(f"{name} not confirmed, server keeps running")
            return f"No command issued; invalid input: {line}"

        logger.info(f"{name} confirmed by operator")
        self._transcript.append("Shutting down server...")
        if self._on_shutdown is not None:
            self._on_shutdown()
        return "Shutting down server"

    def _clear(self) -> str:
        self._transcript.hide_history()
        return "Cleared console display"

    def _reset(self) -> str:
        self._transcript.reveal_history()
        return "Restored console display"

    def _report_port(self) -> str:
        response = f"Current port: {self._sockets.current_port}"
        self._transcript.append(response)
        return response

    def _change_port(self, port: int) -> str:
        try:
            self._sockets.bind(port)
        except PortUnavailable as e:
            logger.error(f"Failed to change port to {port}: {e}")
            self._transcript.append(f"[ERROR] Port {port} already in use")
            return f"[ERROR] Failed to change port to {port}: already in use"

        response = f"Changed port to {port}"
        self._transcript.append(response)
        return response

    def _plain_message(self, text: str) -> str:
        self._transcript.append(f"[SERVER] {text}")
        return f"No command issued; invalid input: {text}"
