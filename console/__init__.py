"""
Consola del operador: transcript, interprete de comandos y terminal
"""

from .transcript import Transcript
from .display import Display, InputSource, InputStyle, NullDisplay
from .command_interpreter import (
    CommandInterpreter, Command, NoArg, WithArg, WarningAction, PlainMessage,
    matches, matches_strict, parse_command, classify_input
)
from .channel import CommandChannel
from .terminal import TerminalConsole

__all__ = [
    'Transcript',
    'Display', 'InputSource', 'InputStyle', 'NullDisplay',
    'CommandInterpreter', 'Command', 'NoArg', 'WithArg', 'WarningAction', 'PlainMessage',
    'matches', 'matches_strict', 'parse_command', 'classify_input',
    'CommandChannel',
    'TerminalConsole'
]
