"""
printf-like templates used to print a record.

A template is made of literal text and conversion directives

    %[flags][width][.precision]conversion

where the conversion is one of "d" (decimal), "x" (hexadecimal), "o" (octal)
or "c" (character); "%%" is an escaped percent sign. To avoid writing long
templates for records with many fields a directive can be followed by an
optional separator and a repeat count terminated by "#"

    %02x4#      ->  %02x %02x %02x %02x
    %d,3#       ->  %d,%d,%d

when the separator is missing a single space is used.
"""
import logging
from typing import List, Optional, Tuple, Union

from .exceptions import UnsupportedConversion, FieldCountMismatch


logger = logging.getLogger(__name__)

CONVERSIONS = 'cdxo'
FLAGS = '-+ #0'
REPEAT_MARKER = '#'
DEFAULT_SEPARATOR = ' '
DEFAULT_DIRECTIVE = '%02x'


def _is_digit(char):
    return '0' <= char <= '9'


def _scan_directive(template: str, start: int) -> Tuple[int, Optional[str]]:
    '''Scan the directive starting with the "%" at position "start".

    Returns the position just after the directive and its conversion
    character, None if the template ends before it.'''
    length = len(template)
    position = start + 1

    if position < length and template[position] == '%':
        return position + 1, '%'

    while position < length and template[position] in FLAGS:
        position += 1
    while position < length and _is_digit(template[position]):
        position += 1
    if position < length and template[position] == '.':
        position += 1
        while position < length and _is_digit(template[position]):
            position += 1

    if position >= length:
        return length, None

    return position + 1, template[position]


def _scan_repeat(template: str, start: int) -> Optional[Tuple[str, int, int]]:
    '''Look for "<separator><count>#" at position "start".

    Returns the separator, the count and the position after the marker
    or None when the text there is not a repeat shorthand.'''
    length = len(template)
    position = start
    while position < length and not _is_digit(template[position]) and template[position] != '%':
        position += 1
    separator = template[start:position]

    digits_start = position
    while position < length and _is_digit(template[position]):
        position += 1

    if position == digits_start or position >= length or template[position] != REPEAT_MARKER:
        return None

    count = int(template[digits_start:position])
    if count == 0:
        return None

    return separator or DEFAULT_SEPARATOR, count, position + 1


def repeat_with_separator(directive: str, separator: str, count: int) -> str:
    return separator.join([directive] * count)


def expand_repeats(template: str) -> str:
    '''Replace every repeat shorthand with the directives it stands for.

    It never fails: text that doesn't look like a shorthand, escaped
    percent signs included, is left as it is.'''
    chunks = []
    length = len(template)
    position = 0

    while position < length:
        start = template.find('%', position)
        if start < 0:
            chunks.append(template[position:])
            break

        chunks.append(template[position:start])

        end, conversion = _scan_directive(template, start)
        if conversion is None or conversion not in CONVERSIONS:
            chunks.append(template[start:end])
            position = end
            continue

        directive = template[start:end]
        repeat = _scan_repeat(template, end)
        if repeat is None:
            chunks.append(directive)
            position = end
            continue

        separator, count, position = repeat
        logger.debug('expanding %r %d times with separator %r', directive, count, separator)
        chunks.append(repeat_with_separator(directive, separator, count))

    return ''.join(chunks)


class Directive(object):
    '''A single conversion directive of a template'''

    def __init__(self, text: str):
        self.text = text
        self.conversion = text[-1]

        position = 1
        while text[position] in FLAGS:
            position += 1
        self.flags = text[1:position]

        start = position
        while _is_digit(text[position]):
            position += 1
        self.width = int(text[start:position]) if position > start else 0

        self.precision = None
        if text[position] == '.':
            self.precision = text[position + 1:-1] or '0'

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.text!r})>'

    def __eq__(self, other):
        if not isinstance(other, Directive):
            return NotImplemented

        return self.text == other.text

    def _render_alternate_octal(self, value: int) -> str:
        # printf prefixes a single "0", Python would use "0o"
        body = '%%%s%so' % (
            ''.join(_ for _ in self.flags if _ in '+ '),
            '' if self.precision is None else '.' + self.precision,
        ) % value
        sign = body[0] if body[0] in '+- ' else ''
        digits = body[len(sign):]
        if not digits.startswith('0'):
            digits = '0' + digits

        if len(sign) + len(digits) >= self.width:
            return sign + digits
        if '-' in self.flags:
            return (sign + digits).ljust(self.width)
        if '0' in self.flags and self.precision is None:
            return sign + digits.rjust(self.width - len(sign), '0')

        return (sign + digits).rjust(self.width)

    def render(self, value: int) -> str:
        if self.conversion == 'c':
            # invalid code points are printed as the replacement character
            if 0 <= value <= 0x10ffff and not 0xd800 <= value <= 0xdfff:
                return self.text % chr(value)
            return self.text % '\ufffd'

        if self.conversion == 'o' and '#' in self.flags:
            return self._render_alternate_octal(value)

        return self.text % value


Segment = Union[str, Directive]


def parse_segments(template: str) -> List[Segment]:
    '''Split the template in literal text and directives.

    An escaped percent becomes part of the literal text.'''
    segments: List[Segment] = []
    literal = []
    length = len(template)
    position = 0

    while position < length:
        start = template.find('%', position)
        if start < 0:
            literal.append(template[position:])
            break

        literal.append(template[position:start])

        end, conversion = _scan_directive(template, start)
        if conversion is None:
            raise UnsupportedConversion(template, start)
        if conversion == '%' and end == start + 2:
            literal.append('%')
        elif conversion in CONVERSIONS:
            if literal:
                segments.append(''.join(literal))
                literal = []
            segments.append(Directive(template[start:end]))
        else:
            raise UnsupportedConversion(template, end - 1, conversion)

        position = end

    if ''.join(literal):
        segments.append(''.join(literal))

    return [_ for _ in segments if _ != '']


class TemplateSpec(object):
    '''A fully expanded template ready to print records.'''

    def __init__(self, template: str, source: Optional[str] = None):
        self.template = template
        self.source = template if source is None else source
        self.segments = parse_segments(template)
        self.directives = [_ for _ in self.segments if isinstance(_, Directive)]

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.template!r}, directives={self.directive_count})>'

    def __str__(self):
        return self.template

    @property
    def directive_count(self) -> int:
        return len(self.directives)

    def render(self, values) -> str:
        '''Apply the template to the values positionally.

        With fewer values than directives (a partial record) the rendering
        stops after the last directive that has a value.'''
        values = list(values)
        is_complete = len(values) >= self.directive_count

        parts = []
        last = 0
        index = 0
        for segment in self.segments:
            if isinstance(segment, Directive):
                if index >= len(values):
                    break
                parts.append(segment.render(values[index]))
                index += 1
                last = len(parts)
            else:
                parts.append(segment)

        if not is_complete:
            parts = parts[:last]

        return ''.join(parts)

    def validate(self, layout) -> None:
        '''Check there is a directive for each field of the layout.'''
        if self.directive_count != len(layout):
            raise FieldCountMismatch(binary=len(layout), print=self.directive_count)


def default_template(n_fields: int, separator: str = DEFAULT_SEPARATOR) -> str:
    return repeat_with_separator(DEFAULT_DIRECTIVE, separator, n_fields)


def expand_template(template: str) -> TemplateSpec:
    expanded = expand_repeats(template)
    spec = TemplateSpec(expanded, source=template)

    logger.debug('template %r expanded to %r (%d directives)', spec.source, spec.template, spec.directive_count)

    return spec


def compile_template(template: Optional[str], layout) -> TemplateSpec:
    '''Build the template used to print the records of "layout".

    Without an explicit template every field is printed as a two digit
    hexadecimal number.'''
    if not template:
        template = default_template(len(layout))

    spec = expand_template(template)
    spec.validate(layout)

    return spec
