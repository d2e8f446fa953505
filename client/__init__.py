"""
Módulo cliente para el servidor de eco UDP

Contiene el cliente de eco y su interfaz de línea de comandos
"""

__version__ = "1.0.0"

from .udp_client import EchoClient
from .constants import DEFAULT_HOST, DEFAULT_PORT, DEFAULT_TIMEOUT

__all__ = [
    'EchoClient',
    'DEFAULT_HOST', 'DEFAULT_PORT', 'DEFAULT_TIMEOUT'
]
