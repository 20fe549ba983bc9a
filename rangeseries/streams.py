import logging
from typing import Iterator, List, Optional, Tuple


logger = logging.getLogger(__name__)


class LineStream(object):
    '''This is a simple wrapper around string/list/file objects to
    uniform the access to a text representation line by line: mainly we
    need to know the number of the line we are at and to be able to
    look ahead and come back.'''
    def __init__(self, obj):
        '''Here we normalize the object in order to be accessed as a list of lines'''
        self.obj = obj
        self.lines: List[str] = []
        self.position = 0
        self.history = []

        init_method_name = 'init_%s' % self.obj.__class__.__name__

        init_method = getattr(self, init_method_name, self.init_file)

        init_method()

    def __repr__(self):
        return '<%s(line %d of %d)>' % (self.__class__.__name__, self.lineno, len(self.lines))

    @staticmethod
    def chomp(line: str) -> str:
        '''Remove the "\\n" terminator and nothing else, a "\\r" is part of the line.'''
        if line.endswith('\n'):
            line = line[:-1]

        return line

    @staticmethod
    def split(text: str) -> List[str]:
        lines = text.split('\n')
        if lines and lines[-1] == '':  # the text ends with a newline
            lines.pop()

        return lines

    def init_str(self):
        '''We think this is the text itself'''
        self.lines = self.split(self.obj)

    def init_list(self):
        self.lines = [self.chomp(_) for _ in self.obj]

    def init_file(self):
        '''An opened file is read whole and split only on "\\n"; any other
        iterable of lines is taken as it is.'''
        logger.debug('reading lines from %r' % self.obj)
        if hasattr(self.obj, 'read'):
            self.lines = self.split(self.obj.read())
        else:
            self.lines = [self.chomp(_) for _ in self.obj]

    @property
    def lineno(self) -> int:
        '''Number (starting from 1) of the last line read.'''
        return self.position

    def readline(self) -> Optional[str]:
        '''Returns None at the end of the stream.'''
        if self.position >= len(self.lines):
            return None

        line = self.lines[self.position]
        self.position += 1

        return line

    def __iter__(self) -> Iterator[Tuple[int, str]]:
        while (line := self.readline()) is not None:
            yield self.lineno, line

    @staticmethod
    def is_blank(line: str) -> bool:
        return line.strip() == ''

    def read_block(self) -> List[Tuple[int, str]]:
        '''Read the lines up to the next blank line (consumed too) or the
        end of the stream; returns couples (line number, line).'''
        lines = []
        for lineno, line in self:
            if self.is_blank(line):
                break
            lines.append((lineno, line))

        return lines

    def count_block(self) -> int:
        '''Count the lines up to the next blank line without consuming them.'''
        self.save()
        count = len(self.read_block())
        self.restore()

        return count

    # TODO: create contextmanager
    def save(self):
        self.history.append(self.position)

    def restore(self):
        self.position = self.history.pop()
