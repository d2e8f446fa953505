"""
Protocolo de eco UDP: datagramas y transformaciones de payload
"""

from .const import BUFFER_SIZE, PAYLOAD_ENCODING, MIN_PORT, MAX_PORT, is_valid_port
from .datagram import Address, Datagram, format_address
from .transform import TRANSFORMS, Transform, uppercase, identity, get_transform

__all__ = [
    'BUFFER_SIZE', 'PAYLOAD_ENCODING', 'MIN_PORT', 'MAX_PORT', 'is_valid_port',
    'Address', 'Datagram', 'format_address',
    'TRANSFORMS', 'Transform', 'uppercase', 'identity', 'get_transform'
]
