"""
Command line entry point

    $ bprint -e sL2c -p '%d %08x2# %c' data.bin

The exit status is 0 also when the data ends in the middle of a record,
1 for any configuration or I/O error.
"""
import logging
import os
import sys

from .config import Options, configure_logging, version_string
from .core import print_records
from .exceptions import ConfigurationError, ReadException
from .layout import compile_layout
from .streams import Stream
from .template import compile_template


logger = logging.getLogger(__name__)


def open_stream(path, stdin=None):
    if path is None:
        return Stream(stdin if stdin is not None else sys.stdin.buffer)

    return Stream(path)


def main(argv=None, stdin=None, stdout=None) -> int:
    stdout = stdout if stdout is not None else sys.stdout
    options = Options.parse(argv)

    if options.show_version:
        print(version_string(), file=stdout)
        return 0

    try:
        layout = compile_layout(options.binary_layout)
        template = compile_template(options.print_template, layout)
    except ConfigurationError as e:
        logger.debug('invalid configuration', exc_info=True)
        print(e, file=stdout)
        return 1

    try:
        stream = open_stream(options.path, stdin=stdin)
    except OSError as e:
        print('While opening file:', e, file=stdout)
        return 1

    try:
        with stream:
            try:
                trailing = print_records(
                    stream, layout, template, out=stdout,
                    show_offset=options.show_offset,
                    show_record_index=options.show_record_index,
                )
            except ReadException as e:
                print(e, file=stdout)
                return 1

        if trailing is not None:
            logger.debug('trailing data: %r', trailing)
            print(trailing, file=stdout)

        stdout.flush()
    except BrokenPipeError:
        logger.debug('output closed by the reader')
        silence_stdout(stdout)
        return 1

    return 0


def silence_stdout(stdout):
    '''Point the process standard output to the null device so that the
    flush at interpreter exit doesn't fail again on the closed pipe.'''
    if stdout is not sys.stdout:
        return

    devnull = os.open(os.devnull, os.O_WRONLY)
    os.dup2(devnull, sys.stdout.fileno())


def run():
    configure_logging()
    sys.exit(main())
