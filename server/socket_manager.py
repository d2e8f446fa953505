"""
Manejo del socket UDP del servidor.

SocketManager owns the single listening socket. It can be rebound from any
thread while the server loop is blocked in receive(): the new socket is opened
before the old one is closed, and the blocked receive surfaces the swap as
ReceiveCanceled instead of an I/O error.
"""

import logging
import socket
import threading
from typing import Optional

from protocol import BUFFER_SIZE, Address, Datagram, format_address
from .constants import DEFAULT_HOST, RECEIVE_POLL_INTERVAL
from .errors import PortUnavailable, ReceiveCanceled, SendFailed
from .server_helpers import get_udp_socket, close_socket

logger = logging.getLogger(__name__)


class SocketManager:
    def __init__(self, host: str = DEFAULT_HOST, buffer_size: int = BUFFER_SIZE,
                 poll_interval: float = RECEIVE_POLL_INTERVAL):
        if not 0 < buffer_size <= BUFFER_SIZE:
            raise ValueError(f"buffer_size must be in (0, {BUFFER_SIZE}], received: {buffer_size}")

        self._host              : str                       = host
        self._recv_buffer_size  : int                       = buffer_size
        self._poll_interval     : float                     = poll_interval
        self._skt               : Optional[socket.socket]   = None
        self._current_port      : Optional[int]             = None
        self._generation        : int                       = 0  # Bumped on every bind and close

        self._lock = threading.RLock()
        self._bound = threading.Condition(self._lock)

    @property
    def host(self) -> str:
        return self._host

    @property
    def current_port(self) -> Optional[int]:
        """Port of the bound socket, or the last port bound successfully"""
        with self._lock:
            return self._current_port

    @property
    def is_bound(self) -> bool:
        with self._lock:
            return self._skt is not None

    def bind(self, port: int) -> int:
        """
        Binds the server to a port, replacing the current socket.

        The new socket is opened before the old one is released, so a failed
        bind leaves the previous socket working. Rebinding the port already
        held has to release it first; in that case the old socket is closed
        and reopened.

        Args:
            port: Port to listen on (0 lets the OS choose)

        Returns:
            The port actually bound

        Raises:
            PortUnavailable: If the OS rejects the bind
        """
        with self._lock:
            if self._skt is not None and port != 0 and port == self._current_port:
                self._release()
                new_skt = self._open(port)
            else:
                new_skt = self._open(port)
                if self._skt is not None:
                    self._release()

            self._skt = new_skt
            self._current_port = new_skt.getsockname()[1]
            self._generation += 1
            self._bound.notify_all()

            logger.info(f"UDP socket bound on {self._host}:{self._current_port}")
            return self._current_port

    def receive(self) -> Datagram:
        """
        Blocks until a datagram arrives on the current socket.

        Raises:
            ReceiveCanceled: If no socket is bound, or the socket was closed
                or replaced while waiting
        """
        with self._lock:
            skt, generation = self._skt, self._generation

        if skt is None:
            raise ReceiveCanceled("Socket is not bound")

        while True:
            try:
                data, address = skt.recvfrom(self._recv_buffer_size)
            except socket.timeout:
                if self._generation != generation:
                    raise ReceiveCanceled("Socket was replaced while receiving")
                continue
            except ConnectionError as e:
                # ICMP errors from earlier replies (reported by some platforms)
                if self._generation != generation:
                    raise ReceiveCanceled("Socket was replaced while receiving") from e
                logger.debug(f"Ignoring connection error on receive: {e}")
                continue
            except OSError as e:
                raise ReceiveCanceled(f"Socket closed while receiving: {e}") from e

            if self._generation != generation or address is None:
                raise ReceiveCanceled("Socket was replaced while receiving")

            return Datagram(payload=data, source=address)

    def send(self, payload: bytes, destination: Address) -> None:
        """
        Sends a datagram from the current socket. Best effort, never retried.

        Raises:
            SendFailed: If no socket is bound or the OS reports an error
        """
        with self._lock:
            skt = self._skt

        if skt is None:
            raise SendFailed(format_address(destination), "socket is not bound")

        try:
            skt.sendto(payload, destination)
        except OSError as e:
            raise SendFailed(format_address(destination), e.strerror or str(e)) from e

    def close(self) -> None:
        """Releases the socket. Safe to call when already closed."""
        with self._lock:
            if self._skt is not None:
                self._release()
                logger.info(f"UDP socket on port {self._current_port} closed")
            self._bound.notify_all()

    def wait_until_bound(self, timeout: Optional[float] = None) -> bool:
        """Waits until a socket is bound. Returns False if the timeout expired first."""
        with self._bound:
            return self._bound.wait_for(lambda: self._skt is not None, timeout)

    def _open(self, port: int) -> socket.socket:
        try:
            skt = get_udp_socket(self._host, port)
        except (OSError, OverflowError) as e:
            reason = getattr(e, "strerror", None) or str(e)
            logger.warning(f"Could not bind {self._host}:{port}: {reason}")
            raise PortUnavailable(port, reason) from e

        skt.settimeout(self._poll_interval)
        return skt

    def _release(self) -> None:
        skt, self._skt = self._skt, None
        self._generation += 1
        close_socket(skt)
