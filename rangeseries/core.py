"""
Core module for the abstraction of a block of the range series format.

A Block instance is a descriptor: the tag, the declared length and the payload
it owns. It doesn't know anything about its father or its children: the nesting
of the containers is implicit in the order of the blocks.
"""
import logging
import struct
from typing import Dict, List, Tuple

from .endian import Normalizer
from .meta import MetaBlock
from .exceptions import (
    MalformedParameterException,
    TruncatedBlockException,
)
from . import utils


logger = logging.getLogger(__name__)

HEADER_SIZE = 8


class ConversionConfig(object):
    """Values declared by a block and needed to interpret the following ones.

    It lives for a single conversion."""

    def __init__(self):
        self.bin_format = None  # from fbin
        self.bin_type = None
        self.index = 0  # from indx
        self.scalar_one = 0.0  # from scal
        self.scalar_two = 0.0

    def __repr__(self):
        return '<%s(format=%r,type=%r,index=%d)>' % (
            self.__class__.__name__, self.bin_format, self.bin_type, self.index)


class Block(metaclass=MetaBlock):
    """
    Base class for the leaf blocks: the payload is described by the fields
    declared as class attributes, in order, packed without padding.

    Subclasses must define "tag"; "minimum_length" defaults to the size of
    the fixed part of the layout.
    """
    tag = None
    container = False
    minimum_length = None

    def __init__(self, payload=b'', length=None, normalizer=None):
        self.normalizer = normalizer or Normalizer()
        self.payload = bytearray(payload)
        self.length = len(self.payload) if length is None else length

    @classmethod
    def create(cls, normalizer=None):
        '''Returns a block with all the fixed fields zeroed.'''
        return cls(payload=b'\x00' * cls._meta.size, normalizer=normalizer)

    @classmethod
    def get_minimum_length(cls) -> int:
        return cls._meta.size if cls.minimum_length is None else cls.minimum_length

    @classmethod
    def get_fields(cls):
        '''It returns a list of couples (name, instance) for each field.'''
        return [(_, cls._meta.get_field(_)) for _ in cls._meta.fields]

    def __repr__(self):
        return '<%s(%s,length=%d)>' % (self.__class__.__name__, utils.tag_to_str(self.tag), self.length)

    @property
    def values(self) -> Dict[str, object]:
        return {name: field.get(self) for name, field in self.get_fields()}

    def check_length(self):
        if len(self.payload) < self.get_minimum_length():
            raise TruncatedBlockException(
                f'is truncated ({len(self.payload)} bytes instead of at least {self.get_minimum_length()})',
                tag=self.tag)

    def update_config(self, config: ConversionConfig) -> None:
        '''Blocks declaring something for the following ones override this.'''
        pass

    def swap(self, buffer: bytearray) -> bytearray:
        for _, field in self.get_fields():
            field.swap(buffer, self.normalizer)

        return buffer

    def fixup(self) -> None:
        '''Endian normalization of the payload just read from the wire.'''
        self.check_length()
        self.swap(self.payload)

    def header(self) -> bytes:
        header = bytearray(self.tag) + bytearray(struct.pack(self.normalizer.prefix + 'I', self.length))
        self.normalizer.normalize(header, 4, offset=4)

        return bytes(header)

    def encode(self) -> bytes:
        self.check_length()

        payload = self.swap(bytearray(self.payload))
        logger.debug('encoding %r', self)

        return self.header() + bytes(payload)

    def render(self) -> List[str]:
        lines = []
        for _, field in self.get_fields():
            lines.extend(field.render(self))

        return lines

    def decode(self, config: ConversionConfig) -> str:
        self.check_length()
        self.update_config(config)

        lines = [utils.tag_to_str(self.tag)] + self.render() + ['']

        return '\n'.join(lines) + '\n'

    @classmethod
    def read_parameters(cls, stream) -> Dict[str, Tuple[int, str]]:
        '''Read the lines up to the end of the block, returning a dictionary
        with the key as key and a couple (line number, value) as value.'''
        parameters = {}
        for number, line in stream.read_block():
            if ':' not in line:
                raise MalformedParameterException(f'expected a parameter, found {line!r}', tag=cls.tag, lineno=number)

            key, value = line.split(':', 1)
            if key in parameters:
                raise MalformedParameterException(f"parameter '{key}' is repeated", tag=cls.tag, lineno=number)

            parameters[key] = (number, value)

        return parameters

    @classmethod
    def parse_text(cls, stream, config: ConversionConfig, normalizer=None):
        lineno = stream.lineno  # the tag line
        block = cls.create(normalizer=normalizer)

        parameters = cls.read_parameters(stream)

        for name, field in block.get_fields():
            if field.key not in parameters:
                raise MalformedParameterException(f"cannot find parameter '{field.key}'", tag=cls.tag, lineno=lineno)

            number, value = parameters.pop(field.key)
            field.parse(block, value, lineno=number)

        for key in parameters:
            logger.debug("ignoring unknown parameter '%s' for block '%s'", key, utils.tag_to_str(cls.tag))

        block.length = len(block.payload)

        if block.length < block.get_minimum_length():
            raise TruncatedBlockException(
                f'has {block.length} bytes instead of at least {block.get_minimum_length()}',
                tag=cls.tag,
                lineno=lineno)

        block.update_config(config)

        return block


class ContainerBlock(Block):
    """A block whose payload is entirely other blocks: the blocks it contains
    simply follow it in the sequence, up to where its length is exhausted."""
    container = True

    def __init__(self, length=0, normalizer=None):
        super().__init__(payload=b'', length=length, normalizer=normalizer)

    @classmethod
    def create(cls, normalizer=None):
        return cls(normalizer=normalizer)

    def fixup(self):
        pass

    def encode(self):
        return self.header()

    def decode(self, config):
        return '%s\n\n' % utils.tag_to_str(self.tag)

    @classmethod
    def parse_text(cls, stream, config, normalizer=None):
        # the length is derived after all the blocks are read
        return cls.create(normalizer=normalizer)
