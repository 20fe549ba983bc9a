import time


# seconds between 1904-01-01 00:00:00 (Mac HFS epoch) and 1970-01-01 00:00:00
MAC_EPOCH_OFFSET = 2082844800


def tag_to_str(tag: bytes) -> str:
    return tag.decode('latin1')


def str_to_tag(value: str) -> bytes:
    return value.encode('latin1')


def mac_to_unix(timestamp: int) -> int:
    '''The stored value is interpreted as unsigned whatever its declared type.'''
    return (timestamp & 0xffffffff) - MAC_EPOCH_OFFSET


def unix_to_mac(seconds: int) -> int:
    '''Returns the unsigned 32 bits HFS timestamp.'''
    return (seconds + MAC_EPOCH_OFFSET) & 0xffffffff


def to_signed32(value: int) -> int:
    return value - (1 << 32) if value & 0x80000000 else value


def calendar(seconds: int) -> str:
    '''Same rendering as ctime(3) without the trailing newline, but in UTC.'''
    return time.asctime(time.gmtime(seconds))


def format_float(value: float) -> str:
    # 17 significant digits are enough to get back the same double
    return '%.17g' % value


def first_token(value: str) -> str:
    tokens = value.split()
    if not tokens:
        raise ValueError('empty value')

    return tokens[0]


def hexdump(data: bytes) -> str:
    return ''.join(' %02x' % _ for _ in data)


def hexparse(value: str) -> bytes:
    data = bytearray()
    for token in value.split():
        byte = int(token, 16)
        if not 0 <= byte <= 0xff:
            raise ValueError(f"'{token}' is not a byte")
        data.append(byte)

    return bytes(data)
