import struct

import pytest

from rangeseries.blocks import McdaBlock, SignBlock, AQFTBlock, ENDBlock
from rangeseries.core import Block, ConversionConfig
from rangeseries.endian import Endianess, Normalizer
from rangeseries.exceptions import (
    MalformedParameterException,
    TruncatedBlockException,
    UnknownBlockException,
)
from rangeseries.fields import StructField, StringField, HexField
from rangeseries.streams import LineStream
from rangeseries import registry


def test_block():
    """Check that building a Block from fields behaves correctly."""
    class Dummy(Block):
        a = StructField('I')
        b = StringField(0x10)
        c = StructField('I')

    dummy = Dummy.create(normalizer=Normalizer(Endianess.LITTLE_ENDIAN))

    assert [_ for _, __ in Dummy.get_fields()] == ['a', 'b', 'c']

    assert Dummy.a.size == 4
    assert Dummy.a.offset == 0x00
    assert Dummy.b.size == 0x10
    assert Dummy.b.offset == 0x04
    assert Dummy.c.offset == 0x14

    assert Dummy._meta.size == 0x18
    assert len(dummy.payload) == Dummy._meta.size

    dummy.a = 0xbad
    dummy.c = 0xdeadbeef

    assert dummy.payload == (
        b'\xad\x0b\x00\x00' +
        b'\x00' * 0x10 +
        b'\xef\xbe\xad\xde'
    )
    assert dummy.values == {'a': 0xbad, 'b': b'\x00' * 0x10, 'c': 0xdeadbeef}


def test_block_inheritance():
    class Base(Block):
        a = StructField('H')

    class Child(Base):
        b = StructField('d')

    assert [_ for _, __ in Child.get_fields()] == ['a', 'b']
    assert Child.b.offset == 2
    assert Child._meta.size == 10
    assert Base._meta.size == 2


def test_field_after_variable_sized_field():
    with pytest.raises(AttributeError):
        class Wrong(Block):
            data = HexField()
            a = StructField('I')


def test_registry():
    assert registry.lookup(b'sign') is SignBlock
    assert registry.lookup(b'AQFT').container
    assert not registry.lookup(b'mcda').container

    with pytest.raises(UnknownBlockException) as exc_info:
        registry.lookup(b'zzzz', lineno=7)

    assert str(exc_info.value) == "block 'zzzz': unknown block type (line 7)"


def test_registry_duplicated_tag():
    with pytest.raises(AttributeError):
        class Duplicated(Block):
            tag = b'mcda'


def test_header(normalizer):
    aqft = AQFTBlock(length=0x1234, normalizer=normalizer)

    assert aqft.encode() == b'AQFT\x00\x00\x12\x34'
    assert ENDBlock(normalizer=normalizer).encode() == b'END \x00\x00\x00\x00'


def test_check_length():
    mcda = McdaBlock(payload=b'\x00\x01')

    with pytest.raises(TruncatedBlockException):
        mcda.fixup()

    with pytest.raises(TruncatedBlockException) as exc_info:
        mcda.encode()

    assert exc_info.value.tag == b'mcda'


def test_sign_from_text(normalizer):
    stream = LineStream([
        'sign',
        'version:RS01',
        'filetype:RSRS',
        'sitecode:BML1',
        'userflags:1a',
        'description:a description',
        'ownername:',
        'comment:',
        '',
    ])
    stream.readline()  # the tag line

    sign = SignBlock.parse_text(stream, ConversionConfig(), normalizer=normalizer)

    assert sign.length == 208
    assert sign.userflags == 0x1a
    assert sign.description == b'a description'.ljust(64, b'\x00')

    raw = sign.encode()

    assert raw[:8] == b'sign' + struct.pack('>I', 208)
    assert raw[8 + 12:8 + 16] == b'\x00\x00\x00\x1a'
    assert stream.readline() is None


def test_mcda_from_text_zero():
    '''A zero from the text is shifted as any other value.'''
    stream = LineStream('mcda\nfiletimestamp:0\n\n')
    stream.readline()

    mcda = McdaBlock.parse_text(stream, ConversionConfig())

    assert mcda.encode() == b'mcda\x00\x00\x00\x04' + struct.pack('>I', 2082844800)


def test_missing_parameter():
    stream = LineStream('mcda\nsomething:0\n\n')
    stream.readline()

    with pytest.raises(MalformedParameterException) as exc_info:
        McdaBlock.parse_text(stream, ConversionConfig())

    assert exc_info.value.lineno == 1


def test_repeated_parameter():
    stream = LineStream('mcda\nfiletimestamp:0\nfiletimestamp:1\n\n')
    stream.readline()

    with pytest.raises(MalformedParameterException) as exc_info:
        McdaBlock.parse_text(stream, ConversionConfig())

    assert exc_info.value.lineno == 3


def test_config_from_blocks():
    config = ConversionConfig()
    stream = LineStream('fbin\nformat:cviq\ntype:flt4\n\nindx\nindex:12\n\n')

    stream.readline()
    registry.parse_text(b'fbin', stream, config)
    stream.readline()
    registry.parse_text(b'indx', stream, config)

    assert config.bin_format == b'cviq'
    assert config.bin_type == b'flt4'
    assert config.index == 12
