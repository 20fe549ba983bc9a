'''
Derivation of the container lengths.

The text representation doesn't contain the lengths of the containers, so they
are recomputed from the blocks between the markers:

 - HEAD covers the blocks between itself and the next BODY or END
 - BODY covers the blocks between itself and the next END
 - AQFT covers HEAD and BODY, headers included
'''
import logging
from collections import namedtuple
from typing import List

from .core import HEADER_SIZE, Block
from .exceptions import BoundaryException
from . import utils


logger = logging.getLogger(__name__)

TAG_AQFT = b'AQFT'
TAG_HEAD = b'HEAD'
TAG_BODY = b'BODY'
TAG_END  = b'END '

Layout = namedtuple('Layout', ['aqft', 'head', 'body'])


def measure(sequence: List[Block]) -> Layout:
    '''Single left to right scan toggling the "inside" flags on the markers.'''
    head_length = 0
    body_length = 0
    in_head = False
    in_body = False
    seen = set()

    for block in sequence:
        seen.add(block.tag)

        if block.tag in (TAG_BODY, TAG_END):
            in_head = False
        if block.tag == TAG_END:
            in_body = False

        if in_head:
            head_length += HEADER_SIZE + block.length
        if in_body:
            body_length += HEADER_SIZE + block.length

        if block.tag == TAG_HEAD:
            in_head = True
        if block.tag == TAG_BODY:
            in_body = True

    missing = [utils.tag_to_str(_) for _ in (TAG_AQFT, TAG_HEAD, TAG_BODY, TAG_END) if _ not in seen]
    if missing:
        raise BoundaryException(f"cannot derive the sizes, missing block(s) {', '.join(repr(_) for _ in missing)}")

    aqft_length = head_length + HEADER_SIZE + body_length + HEADER_SIZE

    return Layout(aqft_length, head_length, body_length)


def set_length(sequence: List[Block], tag: bytes, length: int) -> Block:
    '''Update the first block with the given tag.'''
    for block in sequence:
        if block.tag == tag:
            block.length = length
            return block

    raise BoundaryException('no block to update', tag=tag)


def relayout(sequence: List[Block]) -> Layout:
    '''Set the lengths of the AQFT, HEAD and BODY blocks in place.'''
    layout = measure(sequence)

    logger.debug('relayouting with %r', layout)

    set_length(sequence, TAG_AQFT, layout.aqft)
    set_length(sequence, TAG_HEAD, layout.head)
    set_length(sequence, TAG_BODY, layout.body)

    return layout
