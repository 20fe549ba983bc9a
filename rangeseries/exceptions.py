class RangeSeriesException(Exception):
    '''Base class to extend in order to throw exception in rangeseries.

    It takes the tag of the block that caused the exception and, when the
    source is text, the number of the line where the problem was found.
    '''

    def __init__(self, message='', tag=None, lineno=None):
        self.message = message
        self.tag = tag
        self.lineno = lineno
        super().__init__(message)

    def __str__(self):
        msg = self.message
        if self.tag is not None:
            tag = self.tag.decode('latin1') if isinstance(self.tag, bytes) else self.tag
            msg = f"block '{tag}': {msg}"
        if self.lineno is not None:
            msg = f'{msg} (line {self.lineno})'

        return msg


class ParseException(RangeSeriesException):
    pass


class MagicException(ParseException):
    pass


class AllocationException(ParseException):
    pass


class UnknownBlockException(RangeSeriesException):
    '''This is raised when is not possible to let an unknown block type
    slip through the conversion.'''
    pass


class TruncatedBlockException(RangeSeriesException):
    pass


class MalformedParameterException(RangeSeriesException):
    pass


class UnsupportedSampleFormatException(RangeSeriesException):
    pass


class BoundaryException(RangeSeriesException):
    '''A container marker needed to derive the block sizes is missing.'''
    pass
