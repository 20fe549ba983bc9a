'''
The registry relates the tag of a block with the class implementing it.

Every class with a tag is registered by the metaclass when it's defined, so
importing rangeseries.blocks populates it; it's the only extension point of
the format. An unknown tag is always an error, never something to skip.

The four operations of a block are exposed here resolving the class from the
tag of the descriptor

 1. fixup(): in place normalization of a payload just read from the binary data
 2. decode(): text representation of a block
 3. parse_text(): build a block reading its text representation
 4. encode(): binary representation of a block, header included
'''
import logging

from .exceptions import UnknownBlockException


logger = logging.getLogger(__name__)

_BLOCKS = {}


def register(cls):
    if cls.tag in _BLOCKS:
        raise AttributeError(f'tag {cls.tag!r} is already registered by {_BLOCKS[cls.tag].__name__}')

    logger.debug('registering %s for tag %r', cls.__name__, cls.tag)
    _BLOCKS[cls.tag] = cls


def lookup(tag: bytes, lineno=None):
    try:
        return _BLOCKS[tag]
    except KeyError:
        raise UnknownBlockException('unknown block type', tag=tag, lineno=lineno) from None


def fixup(block):
    return lookup(block.tag).fixup(block)


def decode(block, config) -> str:
    return lookup(block.tag).decode(block, config)


def parse_text(tag: bytes, stream, config, normalizer=None, lineno=None):
    return lookup(tag, lineno=lineno).parse_text(stream, config, normalizer=normalizer)


def encode(block) -> bytes:
    return lookup(block.tag).encode(block)
