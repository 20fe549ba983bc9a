'''
Parser of the binary representation.

The parsing is done in two phases: first a genuine recursive descent builds a
tree where each container has as children the blocks covered by its length,
then the tree is flattened in pre-order; only the flat sequence goes outside.
'''
import logging
import struct
from collections import namedtuple
from typing import Iterator, List

from .core import HEADER_SIZE, Block
from .endian import Normalizer
from .exceptions import (
    AllocationException,
    MagicException,
    ParseException,
    TruncatedBlockException,
)
from . import registry
from . import utils


logger = logging.getLogger(__name__)

MAGIC = b'AQFT'

ParseNode = namedtuple('ParseNode', ['block', 'children'])


def check_magic(buffer: bytes) -> None:
    if bytes(buffer[:len(MAGIC)]) != MAGIC:
        raise MagicException(f'bad header key {bytes(buffer[:len(MAGIC)])!r}, expected {MAGIC!r}')


def read_header(buffer, offset, normalizer):
    '''Returns the tag and the declared length of the block at offset.'''
    header = bytearray(buffer[offset:offset + HEADER_SIZE])
    normalizer.normalize(header, 4, offset=4)

    tag = bytes(header[:4])
    length = struct.unpack_from(normalizer.prefix + 'I', header, 4)[0]

    return tag, length


def parse_blocks(buffer, offset: int, length: int, normalizer, depth=0) -> List[ParseNode]:
    '''Parse the blocks contained in "length" bytes of buffer starting at offset.

    A block declaring more data than available is clamped to what remains.'''
    nodes = []
    end = offset + length

    while offset < end:
        remaining = end - offset
        if remaining < HEADER_SIZE:
            logger.warning('ignoring %d trailing bytes, too few for a block header', remaining)
            break

        tag, size = read_header(buffer, offset, normalizer)
        offset += HEADER_SIZE
        remaining -= HEADER_SIZE

        logger.debug('%sblock %r with length %d at offset 0x%x', '  ' * depth, tag, size, offset - HEADER_SIZE)

        if size > remaining:
            logger.warning("block '%s' size truncated from %d to %d bytes", utils.tag_to_str(tag), size, remaining)
            size = remaining

        block_cls = registry.lookup(tag)

        if block_cls.container:
            block = block_cls(length=size, normalizer=normalizer)
            children = parse_blocks(buffer, offset, size, normalizer, depth=depth + 1)
        else:
            block = block_cls(payload=buffer[offset:offset + size], normalizer=normalizer)
            try:
                registry.fixup(block)
            except TruncatedBlockException as e:
                # keep going, the block is still usable as raw data
                logger.warning('error fixing block: %s', e)
            children = []

        nodes.append(ParseNode(block, children))

        offset += size

    return nodes


def flatten(nodes: List[ParseNode]) -> Iterator[Block]:
    '''Pre-order traversal of the tree.'''
    for node in nodes:
        yield node.block
        yield from flatten(node.children)


def parse_tree(buffer: bytes, normalizer=None) -> List[ParseNode]:
    normalizer = normalizer or Normalizer()

    check_magic(buffer)

    try:
        return parse_blocks(memoryview(buffer), 0, len(buffer), normalizer)
    except MemoryError as e:
        raise AllocationException(f'cannot get memory for data with {len(buffer)} bytes') from e
    except RecursionError as e:
        raise ParseException('containers nested too deeply') from e


def parse(buffer: bytes, normalizer=None) -> List[Block]:
    '''Convert the binary data into the sequence of blocks it contains.'''
    return list(flatten(parse_tree(buffer, normalizer=normalizer)))
