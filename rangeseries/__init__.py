"""
# Range series file format

A range series (RS) file stores the radar echoes of one recording as a sequence of
type-tagged, length-prefixed blocks

    [4-byte tag][4-byte unsigned length][length bytes of payload]

where every multi-byte scalar is big-endian. Some blocks (AQFT, HEAD, BODY and END)
are containers: they have no payload of their own and their length covers the blocks
immediately following them.

The package converts losslessly between the binary file and an editable text
representation, block by block:

 1. parse(): the binary data is read into a flat, pre-order sequence of blocks;
    each leaf block gets its payload normalized to host byte order (fixup).

 2. to_text(): every block in the sequence is decoded into a tag line followed by
    "key:value" lines and a blank line.

 3. from_text(): the text is read back into a sequence of blocks; since the text
    doesn't contain the container lengths, these are recomputed (relayout).

 4. to_binary(): each block is encoded back with its own 8-byte header.

"""
from . import blocks
from .codec import (
    parse,
    to_text,
    from_text,
    to_binary,
    dump,
    gen,
)
from .layout import relayout


VERSION = '1.0.0'
