"""
Errores del servidor de eco.

Every error here is recoverable: the server loop and the command interpreter
turn them into transcript entries and keep running.
"""

from typing import Optional


class ServerError(Exception):
    """Base class for server errors"""


class PortUnavailable(ServerError):
    """The OS rejected binding the requested port (usually already in use)"""

    def __init__(self, port: int, reason: Optional[str] = None):
        self.port = port
        self.reason = reason
        message = f"Port {port} is unavailable"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class ReceiveCanceled(ServerError):
    """The socket was closed or replaced while a receive was waiting"""


class SendFailed(ServerError):
    """A reply could not be sent to its destination"""

    def __init__(self, destination, reason: Optional[str] = None):
        self.destination = destination
        self.reason = reason
        message = f"Failed to send to {destination}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class MalformedCommandArgument(ServerError, ValueError):
    """A console command argument could not be parsed or is out of range"""
