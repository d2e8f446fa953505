#!/usr/bin/env python3
"""
Constantes del cliente de eco.
"""

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 10127
DEFAULT_TIMEOUT = 2.0       # Seconds to wait for the echoed reply

# Códigos de salida
EXIT_OK = 0
EXIT_NO_REPLY = 1
EXIT_REFUSED = 2

EXIT_MESSAGES = {
    EXIT_OK: "OK",
    EXIT_NO_REPLY: "No se recibio respuesta del servidor",
    EXIT_REFUSED: "El servidor no esta escuchando en ese puerto",
}


def get_exit_message(exit_code: int) -> str:
    """
    Obtiene el mensaje correspondiente al código de salida.

    Args:
        exit_code (int): Código de salida

    Returns:
        str: Mensaje descriptivo
    """
    return EXIT_MESSAGES.get(exit_code, f"Error desconocido (código: {exit_code})")
