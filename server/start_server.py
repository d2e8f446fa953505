import argparse
import logging
import sys
from typing import Optional, Sequence, TextIO, Tuple

from console import CommandChannel, CommandInterpreter, TerminalConsole, Transcript
from protocol import TRANSFORMS, get_transform
from .constants import DEFAULT_HOST, DEFAULT_PORT, SERVER_NAME
from .server_loop import ServerLoop
from .socket_manager import SocketManager

LOG_FORMAT = "%(asctime)s [%(name)s] [%(levelname)s] %(message)s"


def parse_args(argv: Optional[Sequence[str]] = None):
    parser = argparse.ArgumentParser(prog="start-server", description=f"{SERVER_NAME}: UDP echo server with an operator console")

    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true",
                           help="increase output verbosity")
    verbosity.add_argument("-q", "--quiet", action="store_true",
                           help="decrease output verbosity")

    parser.add_argument("-H", "--host", default=DEFAULT_HOST,
                        help="service IP address")
    parser.add_argument("-p", "--port", type=int, default=DEFAULT_PORT,
                        help="service port")
    parser.add_argument("-t", "--transform", choices=sorted(TRANSFORMS), default="upper",
                        help="transformation applied to every payload before echoing it")
    parser.add_argument("--no-color", action="store_true",
                        help="never use ANSI colors in the console")

    return parser.parse_args(argv)


def configure_logging(verbose: bool = False, quiet: bool = False) -> None:
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING

    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt="%H:%M:%S", stream=sys.stderr)


def build_server(host: str = DEFAULT_HOST, port: int = DEFAULT_PORT, transform_name: str = "upper",
                 stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None,
                 color: Optional[bool] = None) -> Tuple[ServerLoop, TerminalConsole, CommandChannel]:
    """Wires the server loop, the interpreter and the terminal console together"""
    transcript = Transcript()
    sockets = SocketManager(host=host)
    console = TerminalConsole(stdin=stdin, stdout=stdout, color=color)

    loop = ServerLoop(sockets, transcript, transform=get_transform(transform_name),
                      display=console, port=port)
    interpreter = CommandInterpreter(sockets, transcript, display=console,
                                     input_source=console, on_shutdown=loop.stop)
    channel = CommandChannel(interpreter, display=console, on_response=console.print_response)
    console.attach(channel)

    return loop, console, channel


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging(verbose=args.verbose, quiet=args.quiet)

    loop, console, channel = build_server(
        host=args.host,
        port=args.port,
        transform_name=args.transform,
        color=False if args.no_color else None
    )

    # Bound before any operator input can ask for another port
    loop.start()
    channel.start()
    console.start()

    try:
        loop.serve()
    except KeyboardInterrupt:
        print("Server stopped by user.")
        loop.stop()
    finally:
        channel.stop()

    return 0


if __name__ == "__main__":
    sys.exit(main())
