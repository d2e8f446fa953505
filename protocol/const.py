# const.py - wire level constants of the echo protocol

# ==== Datagramas ====
BUFFER_SIZE = 1024              # Maximum payload read per datagram
PAYLOAD_ENCODING = "latin-1"    # ISO-8859-1, maps every byte to one character

# ==== Puertos ====
MIN_PORT = 0                    # Exclusive lower bound for operator rebinds
MAX_PORT = 65535                # Exclusive upper bound for operator rebinds


def is_valid_port(port: int) -> bool:
    """True when the port lies strictly between MIN_PORT and MAX_PORT."""
    return MIN_PORT < port < MAX_PORT
