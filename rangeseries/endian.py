"""
Byte order normalization.

The range series files are big-endian by definition, so every multi-byte
scalar crossing the binary boundary must be swapped when the host is
little-endian. The host byte order is not a global flag: it's an explicit
value carried by a Normalizer, so a payload can be held in either order.
"""
import logging
import sys
from enum import Enum, auto

from bitstring import BitArray


logger = logging.getLogger(__name__)


class Endianess(Enum):
    LITTLE_ENDIAN = auto()
    BIG_ENDIAN    = auto()
    NATIVE        = auto()


WIRE_ENDIANESS = Endianess.BIG_ENDIAN
WIDTHS = (2, 4, 8)


def host_endianess():
    '''Probe the byte order of the interpreter we are running on.'''
    return Endianess.LITTLE_ENDIAN if sys.byteorder == 'little' else Endianess.BIG_ENDIAN


class Normalizer(object):
    """
    Swap scalars between the wire order (big-endian) and the host order.

    The operation is its own inverse, so the same call converts in both
    directions; when the host order is big-endian it does nothing at all.
    """

    def __init__(self, host=Endianess.NATIVE):
        if host == Endianess.NATIVE:
            host = host_endianess()

        self.host = host

    def __repr__(self):
        return '<%s(%s)>' % (self.__class__.__name__, self.host.name)

    def __eq__(self, other):
        return isinstance(other, Normalizer) and self.host == other.host

    @property
    def needs_swap(self) -> bool:
        return self.host != WIRE_ENDIANESS

    @property
    def prefix(self) -> str:
        '''The struct module prefix to use to access host ordered data.'''
        return '<' if self.host == Endianess.LITTLE_ENDIAN else '>'

    def normalize(self, buffer: bytearray, width: int, offset: int = 0, count: int = 1) -> bytearray:
        '''Swap in place "count" contiguous scalars of "width" bytes starting at "offset".'''
        if width not in WIDTHS:
            raise ValueError(f'cannot normalize scalars of width {width}')

        end = offset + width * count

        if end > len(buffer):
            raise ValueError(f'normalizing {count} scalar(s) of width {width} at offset {offset} overflows a buffer of {len(buffer)} bytes')

        if not self.needs_swap or end == offset:
            return buffer

        bits = BitArray(bytes(buffer[offset:end]))
        bits.byteswap(width)

        buffer[offset:end] = bits.bytes

        return buffer


def normalize(buffer: bytearray, width: int, host=Endianess.NATIVE) -> bytearray:
    '''Normalize a single scalar held in a buffer of exactly "width" bytes.'''
    if len(buffer) != width:
        raise ValueError(f'expected a buffer of {width} bytes, got {len(buffer)}')

    return Normalizer(host).normalize(buffer, width)
