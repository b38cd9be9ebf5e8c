import argparse
import logging
import os

from . import __version__
from .layout import DEFAULT_LAYOUT


logger = logging.getLogger(__name__)


def configure_logging():
    '''Debug messages go to stderr when DEBUG is in the environment.'''
    logging.basicConfig(level=logging.DEBUG if 'DEBUG' in os.environ else logging.INFO)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='bprint',
        description='Print binary data as fixed size records of integers using a printf style format',
    )
    parser.add_argument(
        '-e', dest='binary_layout', default=DEFAULT_LAYOUT, metavar='LAYOUT',
        help='binary format specifier. c,s,l,q for signed 8,16,32,64-bit int. Upper case for unsigned int',
    )
    parser.add_argument(
        '-p', dest='print_template', default=None, metavar='FORMAT',
        help='printf style format string, size is implicit from binary format specifier, '
             'default to %%02x for each field',
    )
    parser.add_argument(
        '-c', dest='show_record_index', action='store_true', help='print record count',
    )
    parser.add_argument(
        '-o', dest='show_offset', action='store_true', help='print record offset',
    )
    parser.add_argument(
        '--version', dest='show_version', action='store_true', help='print version information',
    )
    parser.add_argument(
        'path', nargs='?', default=None, help='file to read, standard input if missing',
    )

    return parser


class Options(object):
    '''All the knobs of a run.'''

    def __init__(self, binary_layout=DEFAULT_LAYOUT, print_template=None, show_record_index=False,
                 show_offset=False, show_version=False, path=None):
        self.binary_layout = binary_layout
        self.print_template = print_template
        self.show_record_index = show_record_index
        self.show_offset = show_offset
        self.show_version = show_version
        self.path = path

    def __repr__(self):
        return '<%s(%s)>' % (
            self.__class__.__name__,
            ', '.join('%s=%r' % (_k, _v) for _k, _v in self.__dict__.items()),
        )

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> 'Options':
        return cls(
            binary_layout=args.binary_layout,
            print_template=args.print_template,
            show_record_index=args.show_record_index,
            show_offset=args.show_offset,
            show_version=args.show_version,
            path=args.path,
        )

    @classmethod
    def parse(cls, argv=None) -> 'Options':
        options = cls.from_args(build_parser().parse_args(argv))
        logger.debug('options: %r', options)

        return options


def version_string():
    return 'bprint version %s' % __version__
