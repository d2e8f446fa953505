"""
Transformaciones de payload aplicadas antes de responder al cliente.

A transform receives the raw payload of a datagram and returns the bytes sent
back to its source.
"""

from typing import Callable

from .const import PAYLOAD_ENCODING

Transform = Callable[[bytes], bytes]


def uppercase(payload: bytes) -> bytes:
    """
    Uppercases a payload character by character in ISO-8859-1.

    Characters whose uppercase form is not a single Latin-1 character
    (e.g. 'ß' -> 'SS', 'ÿ' -> 'Ÿ') are kept as they are, so the reply always
    has the same length as the request.
    """
    text = payload.decode(PAYLOAD_ENCODING)
    return "".join(_upper_char(char) for char in text).encode(PAYLOAD_ENCODING)


def identity(payload: bytes) -> bytes:
    return payload


def _upper_char(char: str) -> str:
    upper = char.upper()
    if len(upper) != 1 or ord(upper) > 0xFF:
        return char
    return upper


TRANSFORMS = {
    "upper": uppercase,
    "echo": identity,
}


def get_transform(name: str) -> Transform:
    """Looks a transform up by name, raising ValueError for unknown names"""
    try:
        return TRANSFORMS[name]
    except KeyError:
        raise ValueError(f"Unknown transform: {name}. Use one of {sorted(TRANSFORMS)}") from None
