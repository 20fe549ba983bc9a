import io

from rangeseries.streams import LineStream


def test_stream_from_str():
    stream = LineStream('a\nb:1\n\nc\n')

    assert stream.lines == ['a', 'b:1', '', 'c']
    assert list(stream) == [(1, 'a'), (2, 'b:1'), (3, ''), (4, 'c')]
    assert stream.readline() is None


def test_stream_keeps_carriage_return():
    r'''Only "\n" terminates a line.'''
    assert LineStream('a\r\nb\rc\n').lines == ['a\r', 'b\rc']
    assert LineStream(['a\r\n', 'b\n']).lines == ['a\r', 'b']


def test_stream_from_file():
    assert LineStream(io.StringIO('a\nb\n')).lines == ['a', 'b']
    assert LineStream(io.StringIO('a\rb\n', newline='')).lines == ['a\rb']


def test_read_block():
    stream = LineStream(['x', 'a:1', 'b:2', '   ', 'y'])
    stream.readline()

    assert stream.count_block() == 2
    assert stream.lineno == 1

    assert stream.read_block() == [(2, 'a:1'), (3, 'b:2')]
    # the blank line is consumed
    assert stream.readline() == 'y'
    assert stream.read_block() == []
