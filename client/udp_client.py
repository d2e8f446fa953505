#!/usr/bin/env python3
"""
Proporciona una interfaz para enviar un datagrama al servidor de eco
y esperar su respuesta.

The socket is connected to the server, so a request to a port nobody listens
on fails with ConnectionRefusedError instead of waiting for the timeout.
"""

import socket
import threading
from typing import Tuple

from protocol import BUFFER_SIZE
from .constants import DEFAULT_TIMEOUT


class EchoClient:
    """
    Encapsula envío y recepción de datagramas contra un servidor de eco.
    """

    def __init__(self, host: str, port: int, timeout: float = DEFAULT_TIMEOUT):
        """
        Inicializa el cliente UDP.

        Args:
            host (str): IP del servidor.
            port (int): Puerto del servidor.
            timeout (float): Segundos de espera por cada respuesta.
        """
        self.host = host
        self.port = port
        self.sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        self.sock.settimeout(timeout)
        self.sock.connect((host, port))
        self.lock = threading.Lock()

    @property
    def local_address(self) -> Tuple[str, int]:
        return self.sock.getsockname()

    def send(self, data: bytes) -> None:
        """
        Envía datos al servidor.

        Args:
            data (bytes): Datos a enviar.
        """
        self.sock.send(data)

    def receive(self) -> bytes:
        """
        Recibe la respuesta del servidor.

        Raises:
            socket.timeout: Si no llega respuesta a tiempo.
            ConnectionRefusedError: Si nadie escucha en el puerto del servidor.
        """
        return self.sock.recv(BUFFER_SIZE)

    def request(self, data: bytes) -> bytes:
        """Envía datos y devuelve la respuesta del servidor"""
        with self.lock:
            self.send(data)
            return self.receive()

    def close(self) -> None:
        """Cierra el socket del cliente."""
        self.sock.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
