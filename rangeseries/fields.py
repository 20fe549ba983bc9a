"""
A Field is a "fundamental" datatype of a block payload, something with a direct
binary representation and a direct text representation as a "key:value" line.

The fields are declared as class attributes of a Block and share nothing with the
instances: the value is always read from and written to the payload of the block,
that is kept in host byte order.
"""
import logging
import struct
from typing import List, Tuple

from .meta import FieldBase
from .exceptions import MalformedParameterException
from . import utils


class Field(FieldBase):
    """Base class to subclass from"""

    def __init__(self, key=None, size=None):
        super().__init__()
        self.logger = logging.getLogger(__name__)
        self.name = None
        self._key = key
        self.offset = None
        self._size = size

    def __repr__(self):
        return '<%s(%s@%s)>' % (self.__class__.__name__, self.name, self.offset)

    @property
    def key(self):
        return self._key or self.name

    def _get_size(self):
        return self._size

    size = property(
        fget=lambda self: self._get_size(),
    )

    def get(self, block):
        raise NotImplementedError(f"method {self.__class__.__name__}.get() not implemented")

    def set(self, block, value) -> None:
        raise NotImplementedError(f"method {self.__class__.__name__}.set() not implemented")

    def swap(self, buffer: bytearray, normalizer) -> None:
        '''Convert between wire and host order the bytes of this field inside the buffer.'''
        pass

    def to_text(self, value) -> str:
        return str(value)

    def from_text(self, value: str):
        raise NotImplementedError(f"method {self.__class__.__name__}.from_text() not implemented")

    def render(self, block) -> List[str]:
        return ['%s:%s' % (self.key, self.to_text(self.get(block)))]

    def parse(self, block, value: str, lineno=None) -> None:
        '''Set the value of the field from the text after the "key:" prefix.'''
        try:
            self.set(block, self.from_text(value))
        except (ValueError, OverflowError, struct.error) as e:
            raise MalformedParameterException(
                f"bad value {value!r} for parameter '{self.key}': {e}",
                tag=block.tag,
                lineno=lineno) from e


class StructField(Field):
    """
    Simplest of the fields: mimic the behaviour of the struct module packing/unpacking
    a single scalar to/from bytes.

    The "text" argument selects the representation: 'dec', 'hex' or 'float'. The
    argument "swap_as" names a previously declared field whose width is used when
    swapping the bytes of this one.
    """

    def __init__(self, format, text='dec', swap_as=None, **kw):
        self.format = format
        self.text = text
        self.swap_as = swap_as
        self.swap_width = None
        super().__init__(size=struct.calcsize('<' + format), **kw)

    def __repr__(self):
        return '<%s(%s %s@%s)>' % (self.__class__.__name__, self.name, self.format, self.offset)

    def contribute_to_block(self, cls, name):
        self.swap_width = cls._meta.get_field(self.swap_as).size if self.swap_as else self.size
        super().contribute_to_block(cls, name)

    def get_format(self, normalizer):
        return '%s%s' % (normalizer.prefix, self.format)

    def get(self, block):
        return struct.unpack_from(self.get_format(block.normalizer), block.payload, self.offset)[0]

    def set(self, block, value) -> None:
        struct.pack_into(self.get_format(block.normalizer), block.payload, self.offset, value)

    def swap(self, buffer, normalizer):
        if self.swap_width > 1:
            normalizer.normalize(buffer, self.swap_width, offset=self.offset)

    def to_text(self, value):
        if self.text == 'hex':
            return '%x' % value
        if self.text == 'float':
            return utils.format_float(value)

        return '%d' % value

    def from_text(self, value):
        if self.text == 'float':
            return float(utils.first_token(value))

        return int(utils.first_token(value), 16 if self.text == 'hex' else 10)


class MacTimestampField(StructField):
    """Seconds since 1904-01-01 00:00:00, i.e. the Mac HFS epoch.

    The text representation uses seconds since 1970 followed, when the stored
    value is not zero, by the date in a human readable form. The conversion is
    unconditional: a zero in the text becomes 2082844800 in the binary."""

    def __init__(self, format='I', **kw):
        super().__init__(format, **kw)

    def render(self, block):
        value = self.get(block)
        seconds = utils.mac_to_unix(value)

        line = '%s:%d' % (self.key, seconds)
        if value != 0:
            line += ' (NB: seconds since 1970) (%s)' % utils.calendar(seconds)

        return [line]

    def from_text(self, value):
        timestamp = utils.unix_to_mac(int(utils.first_token(value)))

        return utils.to_signed32(timestamp) if self.format.islower() else timestamp


class StringField(Field):
    """Represent a contiguous chunk of bytes with fixed length."""

    def __init__(self, n, **kw):
        super().__init__(size=n, **kw)

    def __len__(self):
        return self.size

    def get(self, block) -> bytes:
        return bytes(block.payload[self.offset:self.offset + self.size])

    def set(self, block, value: bytes) -> None:
        if len(value) != self.size:
            raise ValueError(f'you are trying to set a value with the wrong size (that is {self.size} bytes)')

        block.payload[self.offset:self.offset + self.size] = value


class FourCCField(StringField):
    """Four characters code: it's stored as it is, so it never needs swapping."""

    def __init__(self, **kw):
        super().__init__(4, **kw)

    def to_text(self, value):
        return utils.tag_to_str(value)

    def from_text(self, value):
        if len(value) != self.size:
            raise ValueError(f'expected exactly {self.size} characters')

        return utils.str_to_tag(value)


class TextField(StringField):
    """Fixed width text padded with NULs: the padding is not part of the text
    representation, whitespace is instead kept verbatim."""

    def to_text(self, value):
        return value.rstrip(b'\x00').decode('latin1')

    def from_text(self, value):
        raw = value.encode('latin1')
        if len(raw) > self.size:
            raise ValueError(f'text longer than {self.size} characters')

        return raw.ljust(self.size, b'\x00')


class HexField(Field):
    """Opaque data taking the rest of the payload, its text representation is a
    list of bytes in hex. Never swapped."""

    def __init__(self, **kw):
        super().__init__(size=None, **kw)

    def get(self, block) -> bytes:
        return bytes(block.payload[self.offset:])

    def set(self, block, value: bytes) -> None:
        block.payload[self.offset:] = value

    def to_text(self, value):
        return utils.hexdump(value)

    def from_text(self, value):
        return utils.hexparse(value)


class SamplesField(Field):
    """Array of complex samples as couples (I, Q) of 4 bytes floats, taking the rest
    of the payload; the number of samples is derived from the length of the block.

    Its text representation is one line for sample with the index, I and Q."""
    element = 'ff'

    def __init__(self, **kw):
        super().__init__(size=None, **kw)

    @property
    def element_size(self):
        return struct.calcsize('<' + self.element)

    def count(self, buffer) -> int:
        return (len(buffer) - self.offset) // self.element_size

    def get(self, block) -> List[Tuple[float, float]]:
        end = self.offset + self.count(block.payload) * self.element_size
        fmt = block.normalizer.prefix + self.element

        return list(struct.iter_unpack(fmt, block.payload[self.offset:end]))

    def set(self, block, value) -> None:
        fmt = block.normalizer.prefix + self.element
        block.payload[self.offset:] = b''.join(struct.pack(fmt, i, q) for i, q in value)

    def swap(self, buffer, normalizer):
        normalizer.normalize(buffer, 4, offset=self.offset, count=self.count(buffer) * 2)

    def render(self, block):
        return ['%3d % .17g % .17g' % (idx, i, q) for idx, (i, q) in enumerate(self.get(block))]

    def parse_sample(self, line: str) -> Tuple[float, float]:
        tokens = line.split()
        if len(tokens) != 3:
            raise ValueError(f'expected 3 values, found {len(tokens)}')

        int(tokens[0])  # the index is only checked

        return float(tokens[1]), float(tokens[2])

    def parse_lines(self, block, lines) -> None:
        '''Here "lines" is a list of couples (line number, line).'''
        samples = []
        for lineno, line in lines:
            try:
                samples.append(self.parse_sample(line))
            except ValueError as e:
                raise MalformedParameterException(
                    f'bad sample line {line!r}: {e}', tag=block.tag, lineno=lineno) from e

        try:
            self.set(block, samples)
        except (OverflowError, struct.error) as e:
            raise MalformedParameterException(
                f'sample out of range: {e}', tag=block.tag, lineno=lines[0][0]) from e
