"""
Módulo servidor de eco UDP

Contiene el socket reasignable, el ciclo de recepcion/respuesta y el punto de entrada
"""

__version__ = "1.0.0"

__all__ = ['errors', 'constants', 'server_helpers', 'socket_manager', 'server_loop', 'start_server']
