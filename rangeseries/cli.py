'''
Command line front-ends: the same program acts as rsdump or as rsgen
depending on the name it's called with.

 $ rsdump [-h] infile [outfile]
 $ rsgen infile outfile
'''
import logging
import os
import sys

from . import VERSION
from .codec import dump, gen
from .exceptions import RangeSeriesException


logger = logging.getLogger(__name__)


def usage_rsdump(progname):
    print(f'''usage: {progname} [-h] infile [outfile]
Processes CODAR SeaSonde RangeSeries data files.
Reads a binary infile and writes its text version to outfile (default stdout),
with -h only the header is written.
rangeseries version {VERSION}''', file=sys.stderr)
    return 1


def usage_rsgen(progname):
    print(f'''usage: {progname} infile outfile
Processes CODAR SeaSonde RangeSeries data files.
Reads an ascii text infile and writes a binary version to outfile.
rangeseries version {VERSION}''', file=sys.stderr)
    return 1


def rsdump(argv):
    progname, args = argv[0], argv[1:]

    header_only = False
    if args and args[0] == '-h':
        header_only = True
        args = args[1:]

    if not args:
        return usage_rsdump(progname)

    infilename = args[0]
    outfilename = args[1] if len(args) > 1 else None

    try:
        with open(infilename, 'rb') as infile:
            if outfilename is None:
                dump(infile, sys.stdout, header_only=header_only)
            else:
                with open(outfilename, 'w', encoding='utf-8', newline='') as outfile:
                    dump(infile, outfile, header_only=header_only)
    except OSError as e:
        logger.error('cannot open file: %s', e)
        return 1
    except RangeSeriesException as e:
        logger.error('%s', e)
        return 1

    return 0


def rsgen(argv):
    progname, args = argv[0], argv[1:]

    if len(args) < 2:
        return usage_rsgen(progname)

    infilename, outfilename = args[0], args[1]

    try:
        with open(infilename, 'r', encoding='utf-8', newline='') as infile:
            with open(outfilename, 'wb') as outfile:
                count = gen(infile, outfile)
    except OSError as e:
        logger.error('cannot open file: %s', e)
        return 1
    except RangeSeriesException as e:
        logger.error('%s', e)
        return 1

    logger.info('Read %d lines', count)

    return 0


def main(argv=None):
    argv = argv if argv is not None else sys.argv
    progname = os.path.splitext(os.path.basename(argv[0]))[0]

    logging.basicConfig(level=logging.DEBUG if 'DEBUG' in os.environ else logging.INFO)

    if progname == 'rsgen':
        return rsgen(argv)
    if progname == 'rsdump':
        return rsdump(argv)

    print(f'the program must be called rsdump or rsgen, not {progname}', file=sys.stderr)
    return 1
