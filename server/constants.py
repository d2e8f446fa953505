# Valores por defecto del servidor
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 10127

RECEIVE_POLL_INTERVAL = 0.5     # Seconds a blocked receive waits before checking for a rebind
SERVER_NAME = "Rainbow UDP Server"
