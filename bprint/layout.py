"""
Compiler for the binary layout specifier.

The specifier is a sequence of type letters, each optionally followed by a
decimal repeat count

    C16     sixteen unsigned bytes
    sL2c    int16, uint32, uint32, int8

The compilation happens in two phases: tokenize() builds the list of
(type, count) couples, FieldLayout materializes the flat list of types.
"""
import logging
from typing import List, Tuple

from .enum import PrimitiveType, Endianess
from .exceptions import InvalidSpecifier, DanglingRepeatCount, EmptyLayout
from .fields import IntField


logger = logging.getLogger(__name__)

DEFAULT_LAYOUT = 'C16'


def tokenize(spec: str) -> List[Tuple[PrimitiveType, int]]:
    '''Returns a couple (type, count) for each letter in the specifier.

    The count is 1 when the letter has no number after it; an explicit
    count of 0 is returned as is, the letter still describes one field.'''
    tokens: List[Tuple[PrimitiveType, int]] = []
    primitive = None
    count = None

    for position, char in enumerate(spec):
        letter = PrimitiveType.from_letter(char)
        if letter is not None:
            if primitive is not None:
                tokens.append((primitive, 1 if count is None else count))
            primitive = letter
            count = None
        elif char.isdigit() and char.isascii():
            if primitive is None:
                raise DanglingRepeatCount(spec, position)
            count = (count or 0) * 10 + int(char)
        else:
            raise InvalidSpecifier(spec, position)

    if primitive is not None:
        tokens.append((primitive, 1 if count is None else count))

    return tokens


class FieldLayout(object):
    '''Ordered, immutable list of the types composing a record.'''

    def __init__(self, types, spec=None, endianess=Endianess.LITTLE_ENDIAN):
        self._types = tuple(types)
        self.spec = spec
        self.endianess = endianess
        self._record_size = sum(_.width for _ in self._types)

    @classmethod
    def from_tokens(cls, tokens, spec=None):
        types = []
        for primitive, count in tokens:
            types.extend([primitive] * max(count, 1))

        return cls(types, spec=spec)

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.spec!r}, fields={len(self)}, size={self.record_size})>'

    def __len__(self):
        return len(self._types)

    def __iter__(self):
        return iter(self._types)

    def __getitem__(self, item):
        return self._types[item]

    def __eq__(self, other):
        if not isinstance(other, FieldLayout):
            return NotImplemented

        return self._types == other._types and self.endianess == other.endianess

    def __hash__(self):
        return hash((self._types, self.endianess))

    @property
    def types(self) -> Tuple[PrimitiveType, ...]:
        return self._types

    @property
    def record_size(self) -> int:
        return self._record_size

    def fields(self) -> List[IntField]:
        '''A decoder for each field, in record order.'''
        return [IntField(primitive, endianess=self.endianess) for primitive in self._types]


def compile_layout(spec: str) -> FieldLayout:
    tokens = tokenize(spec)
    if not tokens:
        raise EmptyLayout()

    layout = FieldLayout.from_tokens(tokens, spec=spec)

    logger.debug('compiled layout %r into %d fields, record size %d', spec, len(layout), layout.record_size)

    return layout
