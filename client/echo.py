#!/usr/bin/env python3
"""
Cliente UDP de eco
Envía cada mensaje al servidor e imprime la respuesta
"""

import argparse
import socket
import sys

from protocol import PAYLOAD_ENCODING
from .constants import (
    DEFAULT_HOST, DEFAULT_PORT, DEFAULT_TIMEOUT,
    EXIT_OK, EXIT_NO_REPLY, EXIT_REFUSED, get_exit_message
)
from .udp_client import EchoClient


def parse_args(argv=None):
    """Parsea argumentos de línea de comandos"""
    parser = argparse.ArgumentParser(
        prog="echo",
        description="Send messages to the UDP echo server"
    )

    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true",
                           help="increase output verbosity")
    verbosity.add_argument("-q", "--quiet", action="store_true",
                           help="decrease output verbosity")

    parser.add_argument("-H", "--host", metavar="HOST", default=DEFAULT_HOST,
                        help="server IP address")
    parser.add_argument("-p", "--port", metavar="PORT", type=int, default=DEFAULT_PORT,
                        help="server port")
    parser.add_argument("-t", "--timeout", metavar="SECONDS", type=float, default=DEFAULT_TIMEOUT,
                        help="seconds to wait for each reply")
    parser.add_argument("messages", nargs="+",
                        help="messages to send, one datagram each")

    return parser.parse_args(argv)


def send_messages(args) -> int:
    """Envía los mensajes y devuelve el código de salida"""
    with EchoClient(args.host, args.port, timeout=args.timeout) as client:
        for message in args.messages:
            payload = message.encode(PAYLOAD_ENCODING, errors="replace")
            if args.verbose:
                print(f"[VERBOSE] Enviando {len(payload)} bytes a {args.host}:{args.port}")

            try:
                reply = client.request(payload)
            except socket.timeout:
                print(f"[ERROR] {get_exit_message(EXIT_NO_REPLY)} ({args.host}:{args.port})", file=sys.stderr)
                return EXIT_NO_REPLY
            except ConnectionRefusedError:
                print(f"[ERROR] {get_exit_message(EXIT_REFUSED)} ({args.host}:{args.port})", file=sys.stderr)
                return EXIT_REFUSED

            if not args.quiet:
                print(reply.decode(PAYLOAD_ENCODING))

    return EXIT_OK


def main(argv=None) -> int:
    return send_messages(parse_args(argv))


if __name__ == "__main__":
    sys.exit(main())
