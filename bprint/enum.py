from enum import Enum, auto


class Endianess(Enum):
    LITTLE_ENDIAN = auto()
    BIG_ENDIAN    = auto()

    @property
    def prefix(self):
        '''The struct module prefix for this byte order.'''
        return '<' if self is Endianess.LITTLE_ENDIAN else '>'


class PrimitiveType(Enum):
    '''The integer types a layout specifier can describe.

    Each member stores the letter used in the specifier, the struct format
    character, its width in bytes and its signedness.'''
    INT8   = ('c', 'b', 1, True)
    INT16  = ('s', 'h', 2, True)
    INT32  = ('l', 'i', 4, True)
    INT64  = ('q', 'q', 8, True)
    UINT8  = ('C', 'B', 1, False)
    UINT16 = ('S', 'H', 2, False)
    UINT32 = ('L', 'I', 4, False)
    UINT64 = ('Q', 'Q', 8, False)

    def __init__(self, letter, format, width, signed):
        self.letter = letter
        self.format = format
        self.width = width
        self.signed = signed

    @classmethod
    def from_letter(cls, letter):
        '''Returns the member spelled with "letter" or None.'''
        for member in cls:
            if member.letter == letter:
                return member

        return None


class ReadState(Enum):
    '''State of the record loop'''
    READING        = 0
    PARTIAL_RECORD = auto()
    END_OF_STREAM  = auto()
    IO_ERROR       = auto()
