'''
# Block types of the range series format

A file is organized as follows (the indentation only shows the containers,
it's not present in the data)

    AQFT
      HEAD
        sign mcda dbrf cnst hasi swep fbin
      BODY
        rtag gps1 indx scal afft ifft (repeated for each range cell)
    END

The AQFT, HEAD, BODY and END blocks are containers; all the others have a fixed
layout of big-endian fields, apart from hasi (opaque bytes) and afft/ifft (the
samples, whose encoding is declared by the fbin block).
'''
import logging

from .core import Block, ContainerBlock
from .enum import BinFormat, BinType
from .exceptions import (
    MalformedParameterException,
    UnsupportedSampleFormatException,
)
from . import fields


logger = logging.getLogger(__name__)

SIZE_DESCRIPTION = 64
SIZE_OWNERNAME   = 64
SIZE_COMMENT     = 64


class AQFTBlock(ContainerBlock):
    '''The whole file: it wraps HEAD and BODY.'''
    tag = b'AQFT'


class HEADBlock(ContainerBlock):
    '''It wraps the blocks with the metadata.'''
    tag = b'HEAD'


class SignBlock(Block):
    tag = b'sign'

    version     = fields.FourCCField()
    filetype    = fields.FourCCField()
    sitecode    = fields.FourCCField()  # documented as nOwner
    userflags   = fields.StructField('I', text='hex')
    description = fields.TextField(SIZE_DESCRIPTION)
    ownername   = fields.TextField(SIZE_OWNERNAME)
    comment     = fields.TextField(SIZE_COMMENT)


class McdaBlock(Block):
    '''Timestamp of the first sweep.'''
    tag = b'mcda'

    filetimestamp = fields.MacTimestampField('I')


class DbrfBlock(Block):
    '''Received power correction.'''
    tag = b'dbrf'

    rxloss = fields.StructField('d', text='float')  # dB


class CnstBlock(Block):
    tag = b'cnst'

    nchannels   = fields.StructField('i')  # normally 3 antennas
    nranges     = fields.StructField('i')
    # FIXME: swapped with the width of nchannels, it works as long as both are 4 bytes
    nsweeps     = fields.StructField('i', swap_as='nchannels')  # normally 32
    iqindicator = fields.StructField('i')


class HasiBlock(Block):
    '''Undocumented block: it's kept as raw bytes.'''
    tag = b'hasi'
    minimum_length = 4

    data = fields.HexField()


class SwepBlock(Block):
    tag = b'swep'

    samplespersweep = fields.StructField('i')  # normally 2048
    sweepstart      = fields.StructField('d', text='float')  # Hz
    sweepbandwidth  = fields.StructField('d', text='float')  # Hz
    sweeprate       = fields.StructField('d', text='float')  # Hz
    rangeoffset     = fields.StructField('i')


class FbinBlock(Block):
    '''It declares how the samples of the body are encoded.'''
    tag = b'fbin'

    format = fields.FourCCField()
    type   = fields.FourCCField()

    def update_config(self, config):
        config.bin_format = self.format
        config.bin_type = self.type


class BODYBlock(ContainerBlock):
    '''It wraps the blocks of all the range cells.'''
    tag = b'BODY'


class RtagBlock(Block):
    tag = b'rtag'

    rtag = fields.StructField('I')


class Gps1Block(Block):
    tag = b'gps1'

    lat          = fields.StructField('d', text='float')  # radians
    lon          = fields.StructField('d', text='float')  # radians
    alt          = fields.StructField('d', text='float')  # meters
    gpstimestamp = fields.MacTimestampField('i')


class IndxBlock(Block):
    tag = b'indx'

    index = fields.StructField('I')

    def update_config(self, config):
        config.index = self.index


class ScalBlock(Block):
    tag = b'scal'

    scalar_one = fields.StructField('d', text='float')  # I
    scalar_two = fields.StructField('d', text='float')  # Q

    def update_config(self, config):
        config.scalar_one = self.scalar_one
        config.scalar_two = self.scalar_two


class SamplesBlock(Block):
    '''Base class for the blocks containing IQ samples; only complex
    samples as 4 bytes floats are supported.'''
    SUPPORTED = (BinFormat.CVIQ, BinType.FLT4)
    LINES_MULTIPLE = 3

    samples = fields.SamplesField()

    @classmethod
    def get_minimum_length(cls):
        return cls.samples.element_size

    @classmethod
    def check_sample_format(cls, config, lineno=None):
        bin_format, bin_type = cls.SUPPORTED
        if config.bin_format != bin_format.value or config.bin_type != bin_type.value:
            raise UnsupportedSampleFormatException(
                f'cannot handle samples with format {config.bin_format!r} and type {config.bin_type!r}',
                tag=cls.tag,
                lineno=lineno)

    def decode(self, config):
        self.check_sample_format(config)

        return super().decode(config)

    @classmethod
    def parse_text(cls, stream, config, normalizer=None):
        lineno = stream.lineno
        cls.check_sample_format(config, lineno=lineno)

        count = stream.count_block()
        if count <= 0 or count % cls.LINES_MULTIPLE != 0:
            raise MalformedParameterException(
                f'bad number of lines: {count}, it must be a multiple of {cls.LINES_MULTIPLE}',
                tag=cls.tag,
                lineno=lineno)

        logger.debug('reading %d samples for block %r', count, cls.tag)

        block = cls.create(normalizer=normalizer)
        cls.samples.parse_lines(block, stream.read_block())
        block.length = len(block.payload)

        return block


class AfftBlock(SamplesBlock):
    tag = b'afft'


class IfftBlock(SamplesBlock):
    tag = b'ifft'


class ENDBlock(ContainerBlock):
    '''Terminator: it has no length and it's not followed by a blank line.'''
    tag = b'END '

    def decode(self, config):
        return 'END \n'
