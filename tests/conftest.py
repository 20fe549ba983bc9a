import struct

import pytest

from rangeseries.endian import Endianess, Normalizer


def make_block(tag: bytes, payload: bytes = b'', length=None) -> bytes:
    return tag + struct.pack('>I', len(payload) if length is None else length) + payload


def make_container(tag: bytes, *children: bytes) -> bytes:
    return make_block(tag, b''.join(children))


# 2021-02-15 00:00:00 UTC
UNIX_TIMESTAMP = 1613347200
MAC_TIMESTAMP = UNIX_TIMESTAMP + 2082844800

SIGN = (
    b'RS01' b'RSRS' b'BML1' + struct.pack('>I', 0x1a) +
    b'Range series for test'.ljust(64, b'\x00') +
    b'  Bodega Marine Lab  '.ljust(64, b'\x00') +
    b''.ljust(64, b'\x00')
)
MCDA = struct.pack('>I', MAC_TIMESTAMP)
DBRF = struct.pack('>d', -3.25)
CNST = struct.pack('>iiii', 3, 2, 32, 2)
HASI = bytes([0x00, 0x01, 0xfe, 0xff, 0x10])
SWEP = struct.pack('>idddi', 2048, 4.53e6, -25733.0, 2.0, 0)
FBIN = b'cviq' b'flt4'
RTAG = struct.pack('>I', 7)
GPS1 = struct.pack('>dddi', 0.6681, -2.1517, 0.1, MAC_TIMESTAMP - (1 << 32))
INDX = struct.pack('>I', 1)
SCAL = struct.pack('>dd', 0.1, 1e-30)
AFFT = struct.pack('>6f', 0.5, -1.25, 3.0, 1e-10, -0.0, 65504.0)
IFFT = struct.pack('>6f', 1.0, 2.0, 3.0, 4.0, 5.0, 6.0)


def make_recording() -> bytes:
    head = make_container(
        b'HEAD',
        make_block(b'sign', SIGN),
        make_block(b'mcda', MCDA),
        make_block(b'dbrf', DBRF),
        make_block(b'cnst', CNST),
        make_block(b'hasi', HASI),
        make_block(b'swep', SWEP),
        make_block(b'fbin', FBIN),
    )
    body = make_container(
        b'BODY',
        make_block(b'rtag', RTAG),
        make_block(b'gps1', GPS1),
        make_block(b'indx', INDX),
        make_block(b'scal', SCAL),
        make_block(b'afft', AFFT),
        make_block(b'ifft', IFFT),
    )

    return make_container(b'AQFT', head, body) + make_block(b'END ')


@pytest.fixture
def recording():
    return make_recording()


@pytest.fixture(params=[Endianess.LITTLE_ENDIAN, Endianess.BIG_ENDIAN], ids=['little', 'big'])
def normalizer(request):
    '''Both the host orders are exercised whatever the machine running the tests.'''
    return Normalizer(request.param)


SCENARIO = bytes.fromhex('41514654 00000008 48454144 00000000 454E4420 00000000')
