from enum import Enum


class BinFormat(Enum):
    '''Layout of the samples stored into the body, as declared by the fbin block.'''
    CVIQ = b'cviq'  # complex I/Q pairs
    DBRA = b'dbra'


class BinType(Enum):
    '''Type of each sample value, as declared by the fbin block.'''
    FLT8 = b'flt8'
    FLT4 = b'flt4'
    FIX2 = b'fix2'
    FIX3 = b'fix3'
    FIX4 = b'fix4'
