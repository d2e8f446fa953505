import logging
import threading
from enum import Enum
from typing import Optional

from console.display import Display, NullDisplay
from console.transcript import Transcript
from protocol import PAYLOAD_ENCODING, Datagram, Transform, uppercase
from .constants import DEFAULT_PORT
from .errors import PortUnavailable, ReceiveCanceled, SendFailed
from .socket_manager import SocketManager

logger = logging.getLogger(__name__)

BIND_WAIT_TIMEOUT = 1.0     # Seconds between checks of is_running while unbound
LOGGED_TEXT_TRIM = "".join(map(chr, range(33)))     # Space and every control character below it


class LoopState(Enum):
    STARTING = "starting"
    BOUND = "bound"
    RECEIVING = "receiving"
    PROCESSING = "processing"
    STOPPED = "stopped"


class ServerLoop:
    """
    Receive -> transform -> send -> log cycle of the echo server.

    serve() blocks the calling thread until stop() is called from another one
    (normally by a confirmed shutdown command). Rebinding the socket while
    serve() waits only cancels the pending receive.
    """

    def __init__(self, sockets: SocketManager, transcript: Transcript,
                 transform: Transform = uppercase, display: Optional[Display] = None,
                 port: int = DEFAULT_PORT):
        self._sockets       = sockets
        self._transcript    = transcript
        self._transform     = transform
        self._display       = display or NullDisplay()
        self._port          = port

        self._state         = LoopState.STARTING
        self._is_running    = False
        self._state_lock    = threading.Lock()

    @property
    def state(self) -> LoopState:
        with self._state_lock:
            return self._state

    @property
    def is_running(self) -> bool:
        return self._is_running

    def start(self) -> None:
        """Binds the configured port. A busy port is reported and left for the operator to change."""
        self._transcript.append("Starting server...")
        self._is_running = True

        try:
            port = self._sockets.bind(self._port)
        except PortUnavailable as e:
            logger.error(f"Could not start on port {self._port}: {e}")
            self._transcript.append(f"[ERROR] Port {self._port} already in use")
        else:
            self._transcript.append(f"Initialized socket on port {port}")
            self._set_state(LoopState.BOUND)

        self.refresh()

    def serve(self) -> None:
        if self.state is LoopState.STARTING and not self._is_running:
            self.start()

        logger.info(f"UDP server listening on {self._sockets.host}:{self._sockets.current_port}")
        try:
            while self._is_running:
                if not self._sockets.wait_until_bound(BIND_WAIT_TIMEOUT):
                    continue

                self._set_state(LoopState.RECEIVING)
                try:
                    datagram = self._sockets.receive()
                except ReceiveCanceled as e:
                    if not self._is_running:
                        break
                    self._set_state(LoopState.BOUND)
                    logger.warning(f"Receive canceled: {e}")
                    self._transcript.append("[WARNING] Canceled receiving data")
                    self.refresh()
                    continue

                self._set_state(LoopState.PROCESSING)
                self.process(datagram)
        finally:
            self._shutdown()

    def process(self, datagram: Datagram) -> Optional[bytes]:
        """Answers one datagram. Returns the reply payload, or None if it was dropped."""
        source = datagram.source_text()

        try:
            response = self._transform(datagram.payload)
        except Exception as e:
            logger.exception(f"Error processing request from {source}: {e}")
            self._transcript.append(f"[ERROR] Failed to process data from client {source}")
            self.refresh()
            return None

        received_text = datagram.text().strip(LOGGED_TEXT_TRIM)
        response_text = response.decode(PAYLOAD_ENCODING).strip(LOGGED_TEXT_TRIM)
        self._transcript.append(f"Received \"{received_text}\" from client {source}")
        self._transcript.append(f"Sending \"{response_text}\" to client {source}")

        try:
            self._sockets.send(response, datagram.source)
        except SendFailed as e:
            logger.error(f"Dropping reply: {e}")
            self._transcript.append(f"[ERROR] Failed to send data to client {source}")
            response = None

        self.refresh()
        return response

    def stop(self) -> None:
        """Stops serving. A datagram being processed is abandoned."""
        logger.info("Stopping server")
        self._is_running = False
        with self._state_lock:
            self._state = LoopState.STOPPED
        self._sockets.close()

    def refresh(self) -> None:
        self._transcript.render(self._display)

    def _set_state(self, state: LoopState) -> None:
        with self._state_lock:
            if self._state is not LoopState.STOPPED:
                self._state = state

    def _shutdown(self) -> None:
        self._is_running = False
        with self._state_lock:
            self._state = LoopState.STOPPED
        self._sockets.close()

        logger.info("Server shutdown complete.")
