import socket


def get_udp_socket(host: str = "0.0.0.0", port: int = 10127) -> socket.socket:
    return get_socket(socket.SOCK_DGRAM, host, port)


def get_socket(kind: int, host: str, port: int) -> socket.socket:
    if kind != socket.SOCK_DGRAM and kind != socket.SOCK_STREAM:
        raise ValueError("Invalid socket kind. Use socket.SOCK_DGRAM or socket.SOCK_STREAM.")

    skt = socket.socket(socket.AF_INET, kind)
    try:
        skt.bind((host, port))
    except (OSError, OverflowError):
        skt.close()
        raise

    return skt


def close_socket(skt: socket.socket) -> None:
    """Cierra el socket despertando a cualquier hilo bloqueado en recvfrom"""
    try:
        skt.shutdown(socket.SHUT_RDWR)
    except OSError:
        # Unconnected datagram sockets report ENOTCONN, blocked readers are woken anyway
        pass
    skt.close()
