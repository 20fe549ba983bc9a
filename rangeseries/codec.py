'''
Conversion drivers: they walk a sequence of blocks calling the operations of
the registry for each block, in both directions.
'''
import logging
import os
from typing import List

from .core import Block, ConversionConfig
from .endian import Normalizer
from .exceptions import ParseException, UnknownBlockException
from .layout import relayout, TAG_BODY
from .parser import parse
from .streams import LineStream
from . import registry
from . import utils


logger = logging.getLogger(__name__)


def to_text(sequence: List[Block], header_only=False) -> str:
    '''With "header_only" the text stops where the BODY starts.'''
    config = ConversionConfig()
    chunks = []

    for block in sequence:
        logger.debug('decoding %r', block)
        if header_only and block.tag == TAG_BODY:
            break

        chunks.append(registry.decode(block, config))

    return ''.join(chunks)


def from_text(lines, normalizer=None) -> List[Block]:
    '''Build the sequence of blocks from the text representation; the lengths of
    the containers are derived at the end.

    "lines" can be the text itself, a list of lines or an opened file.'''
    normalizer = normalizer or Normalizer()
    stream = lines if isinstance(lines, LineStream) else LineStream(lines)
    config = ConversionConfig()
    sequence = []

    for lineno, line in stream:
        if LineStream.is_blank(line):
            continue
        if ':' in line:  # a parameter outside of its block
            logger.debug('skipping line %d: %r', lineno, line)
            continue

        try:
            tag = utils.str_to_tag(line.rstrip().ljust(4))
        except UnicodeEncodeError:
            raise UnknownBlockException('unknown block type', tag=line, lineno=lineno) from None

        logger.debug('line %d: block %r', lineno, tag)

        block = registry.parse_text(tag, stream, config, normalizer=normalizer, lineno=lineno)

        sequence.append(block)

    relayout(sequence)

    return sequence


def to_binary(sequence: List[Block]) -> bytes:
    return b''.join(registry.encode(_) for _ in sequence)


def describe(sequence: List[Block]) -> List[str]:
    return ['Node %u: key %s size %u' % (idx, utils.tag_to_str(block.tag), block.length) for idx, block in enumerate(sequence)]


def read_binary(infile) -> bytes:
    '''Read the whole content of the file, checking we get all of it.'''
    infile.seek(0, os.SEEK_END)
    filesize = infile.tell()
    infile.seek(0)

    data = infile.read(filesize)
    if len(data) != filesize:
        raise ParseException(f'error reading rs file, only read {len(data)} bytes out of {filesize}')

    return data


def dump(infile, outfile, header_only=False, normalizer=None) -> List[Block]:
    '''From the binary file to the text one.'''
    sequence = parse(read_binary(infile), normalizer=normalizer)

    outfile.write(to_text(sequence, header_only=header_only))

    return sequence


def gen(infile, outfile, normalizer=None) -> int:
    '''From the text file to the binary one, it returns the number of lines read.'''
    stream = LineStream(infile)
    sequence = from_text(stream, normalizer=normalizer)

    outfile.write(to_binary(sequence))

    return stream.lineno
