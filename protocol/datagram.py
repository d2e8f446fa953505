from dataclasses import dataclass
from typing import Tuple

from .const import BUFFER_SIZE, PAYLOAD_ENCODING

Address = Tuple[str, int]


def format_address(address: Address) -> str:
    """Renders a (host, port) pair as host:port"""
    return f"{address[0]}:{address[1]}"


@dataclass(frozen=True)
class Datagram:
    """
    One UDP message as received by the server.

    {payload [<= 1024 bytes]} + source (host, port)
    """
    payload: bytes
    source: Address

    def __post_init__(self):
        if len(self.payload) > BUFFER_SIZE:
            raise ValueError(f"payload exceeds {BUFFER_SIZE} bytes: {len(self.payload)}")

    @property
    def host(self) -> str:
        return self.source[0]

    @property
    def port(self) -> int:
        return self.source[1]

    def source_text(self) -> str:
        return format_address(self.source)

    def text(self) -> str:
        return self.payload.decode(PAYLOAD_ENCODING)
